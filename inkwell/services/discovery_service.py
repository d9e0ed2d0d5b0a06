"""
内容发现服务
相关文章打分与全文检索过滤，均为纯函数，作用于 PostRecord 列表
"""
from typing import List, Optional

from inkwell.schemas import PostRecord
from inkwell.utils.text import html_to_text

# 打分权重
SAME_CATEGORY_SCORE = 10
SHARED_TAG_SCORE = 5
SAME_AUTHOR_SCORE = 2
RECENCY_SCORE = 1
RECENCY_WINDOW_DAYS = 30

DEFAULT_RELATED_LIMIT = 3
# 搜索弹窗的即时预览条数
SEARCH_PREVIEW_LIMIT = 10


class DiscoveryService:
    @staticmethod
    def score_post(reference: PostRecord, candidate: PostRecord) -> int:
        """
        计算候选文章与参考文章的相关度

        同分类 +10，每个共同标签 +5，同作者 +2，发布日期相差不足 30 天 +1
        """
        score = 0

        if candidate.category.id == reference.category.id:
            score += SAME_CATEGORY_SCORE

        reference_tags = {t.id for t in reference.tags}
        shared = [t for t in candidate.tags if t.id in reference_tags]
        score += len(shared) * SHARED_TAG_SCORE

        if candidate.author.id == reference.author.id:
            score += SAME_AUTHOR_SCORE

        if candidate.published_date and reference.published_date:
            delta = abs(candidate.published_date - reference.published_date)
            if delta.total_seconds() / 86400 < RECENCY_WINDOW_DAYS:
                score += RECENCY_SCORE

        return score

    @staticmethod
    def related_posts(reference: PostRecord, candidates: List[PostRecord],
                      limit: int = DEFAULT_RELATED_LIMIT) -> List[PostRecord]:
        """
        返回最多 limit 篇相关文章，按分数降序

        排除参考文章本身与未发布文章；0 分文章仍可补位。
        排序稳定：同分时保持候选列表原有顺序。
        """
        scored = [
            (DiscoveryService.score_post(reference, post), post)
            for post in candidates
            if post.id != reference.id and post.is_published
        ]
        scored.sort(key=lambda item: item[0], reverse=True)
        return [post for _, post in scored[:max(limit, 0)]]

    @staticmethod
    def matches(query: str, post: PostRecord) -> bool:
        """query 需已转小写"""
        haystacks = (
            post.title,
            post.excerpt,
            html_to_text(post.content),
            post.author.name if post.author else None,
            post.category.name if post.category else None,
        )
        return any(query in text.lower() for text in haystacks if text)

    @staticmethod
    def search_posts(query: Optional[str], posts: List[PostRecord],
                     limit: Optional[int] = None) -> List[PostRecord]:
        """
        全文检索：标题、摘要、正文纯文本、作者名、分类名的子串匹配 (忽略大小写)

        空查询直接返回空列表；结果保持输入顺序，不做相关度排序。
        """
        if not query or not query.strip():
            return []

        needle = query.lower()
        results = [p for p in posts if p.is_published and DiscoveryService.matches(needle, p)]

        if limit is not None:
            results = results[:max(limit, 0)]
        return results
