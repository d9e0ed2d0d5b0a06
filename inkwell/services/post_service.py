"""
文章服务
文章的查询、创建、更新、删除，以及相关推荐/检索/热门等读取视图
"""
from typing import Dict, List, Optional

from flask import current_app
from sqlalchemy import func, or_
from sqlalchemy.orm import joinedload, selectinload

from inkwell.extensions import db
from inkwell.exceptions import ResourceNotFound, ValidationError
from inkwell.models import Author, Bookmark, Category, Post, PostLike, PostRevision, Tag
from inkwell.models.base import commit, generate_uuid
from inkwell.schemas import PostRecord
from inkwell.services.discovery_service import DiscoveryService, DEFAULT_RELATED_LIMIT
from inkwell.utils.text import slugify, estimate_reading_time

TRENDING_LIMIT = 6


def unique_slug(model, text, entity_id, exclude_id=None):
    """
    生成在 model 表内唯一的 slug
    冲突或与 model.RESERVED_SLUGS 重名时追加 -2, -3 ...；标题无法生成 slug 时使用 ID 前 8 位
    """
    reserved = getattr(model, 'RESERVED_SLUGS', ())
    base = slugify(text) or entity_id.replace('-', '')[:8]
    slug, n = base, 2

    def taken(candidate):
        return candidate in reserved or model.query.filter(
            model.slug == candidate, model.id != exclude_id).first() is not None

    with db.session.no_autoflush:
        while taken(slug):
            slug = f'{base}-{n}'
            n += 1
    return slug


class PostService:
    # ==================== 查询 ====================

    @staticmethod
    def query():
        """预加载作者、分类、标签，避免序列化时 N+1"""
        return Post.query.options(
            joinedload(Post.author),
            joinedload(Post.category),
            selectinload(Post.tags),
        )

    @staticmethod
    def list_posts(status=Post.STATUS_PUBLISHED, category=None, author=None,
                   featured=False, search=None, limit=10, offset=0) -> List[PostRecord]:
        query = PostService.query().filter(Post.status == status)

        if category:
            query = query.filter(Post.category_id == category)
        if author:
            query = query.filter(Post.author_id == author)
        if featured:
            query = query.filter(Post.featured.is_(True))
        if search:
            query = query.filter(Post.title.ilike(f'%{search}%'))

        posts = (query.order_by(Post.published_date.desc())
                 .offset(max(offset, 0))
                 .limit(max(limit, 0))
                 .all())
        return [PostRecord.from_model(p) for p in posts]

    @staticmethod
    def published_records() -> List[PostRecord]:
        """全部已发布文章，按发布时间倒序"""
        posts = (PostService.query()
                 .filter(Post.status == Post.STATUS_PUBLISHED)
                 .order_by(Post.published_date.desc())
                 .all())
        return [PostRecord.from_model(p) for p in posts]

    @staticmethod
    def get_post(key) -> Post:
        """按 ID 或 slug 查找文章"""
        post = PostService.query().filter(or_(Post.id == key, Post.slug == key)).first()
        if post is None:
            raise ResourceNotFound('Post not found')
        return post

    @staticmethod
    def has_posts(author_id=None, category_id=None) -> bool:
        """删除作者/分类前的依赖检查：只需确认存在至少一篇文章"""
        query = Post.query
        if author_id:
            query = query.filter(Post.author_id == author_id)
        if category_id:
            query = query.filter(Post.category_id == category_id)
        return query.first() is not None

    @staticmethod
    def published_counts(column) -> Dict[str, int]:
        """按 column (作者或分类) 分组统计已发布文章数"""
        rows = (db.session.query(column, func.count(Post.id))
                .filter(Post.status == Post.STATUS_PUBLISHED)
                .group_by(column)
                .all())
        return dict(rows)

    # ==================== 写入 ====================

    @staticmethod
    def _resolve_refs(data: Dict):
        """外键存在性校验，返回 (author, category, tags)"""
        errors = []
        author = category = None

        if 'author_id' in data:
            author = db.session.get(Author, data['author_id'])
            if author is None:
                errors.append({'field': 'authorId', 'msg': 'Valid author ID required'})

        category = db.session.get(Category, data['category_id'])
        if category is None:
            errors.append({'field': 'categoryId', 'msg': 'Valid category ID required'})

        tag_ids = list(dict.fromkeys(data.get('tag_ids') or []))
        tags = Tag.query.filter(Tag.id.in_(tag_ids)).all() if tag_ids else []
        if len(tags) != len(tag_ids):
            errors.append({'field': 'tags', 'msg': 'Valid tag IDs required'})

        if errors:
            raise ValidationError(errors)
        return author, category, tags

    @staticmethod
    def _apply(post: Post, data: Dict, category, tags):
        post.title = data['title']
        post.excerpt = data.get('excerpt')
        post.content = data['content']
        post.image_url = data.get('image_url')
        post.category = category
        post.tags = tags
        post.featured = bool(data.get('featured'))
        post.status = data.get('status') or Post.STATUS_DRAFT

        reading_time = data.get('reading_time')
        post.reading_time = estimate_reading_time(post.content) if reading_time is None else reading_time

        if data.get('published_date'):
            post.published_date = data['published_date']

    @staticmethod
    def create_post(data: Dict) -> Post:
        author, category, tags = PostService._resolve_refs(data)

        post = Post(id=generate_uuid())
        post.slug = unique_slug(Post, data['title'], post.id)
        post.author = author
        PostService._apply(post, data, category, tags)

        db.session.add(post)
        db.session.add(PostRevision(post_id=post.id, content=post.content))
        commit('Failed to create post')

        current_app.logger.info(f'✅ 文章已创建: {post.slug}')
        return post

    @staticmethod
    def update_post(post: Post, data: Dict) -> Post:
        """整条记录更新：标签整体替换，slug 重新生成，追加一条历史"""
        data = {k: v for k, v in data.items() if k != 'author_id'}
        _, category, tags = PostService._resolve_refs(data)

        PostService._apply(post, data, category, tags)
        post.slug = unique_slug(Post, post.title, post.id, exclude_id=post.id)

        db.session.add(PostRevision(post_id=post.id, content=post.content))
        commit('Failed to update post')
        return post

    @staticmethod
    def delete_post(post: Post):
        # SQLite 默认不执行外键级联，读者状态手动清理
        Bookmark.query.filter_by(post_id=post.id).delete(synchronize_session=False)
        PostLike.query.filter_by(post_id=post.id).delete(synchronize_session=False)
        post.delete('Failed to delete post')
        current_app.logger.info(f'文章已删除: {post.id}')

    @staticmethod
    def like_post(post_id) -> int:
        """原子自增点赞数，返回最新值"""
        updated = Post.query.filter(Post.id == post_id).update(
            {Post.likes: Post.likes + 1}, synchronize_session=False)
        if not updated:
            db.session.rollback()
            raise ResourceNotFound('Post not found')
        commit('Failed to like post')
        return db.session.get(Post, post_id).likes

    # ==================== 读取视图 ====================

    @staticmethod
    def trending(limit: int = TRENDING_LIMIT) -> List[PostRecord]:
        posts = (PostService.query()
                 .filter(Post.status == Post.STATUS_PUBLISHED)
                 .order_by(Post.likes.desc(), Post.published_date.desc())
                 .limit(max(limit, 0))
                 .all())
        return [PostRecord.from_model(p) for p in posts]

    @staticmethod
    def related(key, limit: int = DEFAULT_RELATED_LIMIT) -> List[PostRecord]:
        reference = PostRecord.from_model(PostService.get_post(key))
        return DiscoveryService.related_posts(reference, PostService.published_records(), limit)

    @staticmethod
    def search(query: Optional[str], limit: Optional[int] = None) -> List[PostRecord]:
        if not query or not query.strip():
            return []
        return DiscoveryService.search_posts(query, PostService.published_records(), limit)
