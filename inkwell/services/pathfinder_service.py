"""
Pathfinder 阅读路径服务
根据主题挑选 3-5 篇已发布文章，按由浅入深排列
配置了 DeepSeek Key 时调用 AI 生成，否则 (或调用失败时) 使用本地检索 + 相关度打分
"""
import json
import re
from typing import List, Optional, Tuple

import httpx
from flask import current_app

from inkwell.exceptions import InkwellError
from inkwell.schemas import PostRecord, ReadingPathRecord
from inkwell.services.discovery_service import DiscoveryService
from inkwell.services.post_service import PostService

MIN_PATH_POSTS = 3
MAX_PATH_POSTS = 5
FALLBACK_PATH_POSTS = 4

_JSON_OBJECT = re.compile(r'\{.*\}', re.DOTALL)


def _text(data, key):
    value = data.get(key)
    return value if isinstance(value, str) else None


class PathfinderService:
    """DeepSeek 封装，使用 httpx 直接调用 API"""

    def __init__(self, model='deepseek-chat', timeout=30.0):
        self.model = model
        self.timeout = timeout

    def _get_credentials(self) -> Tuple[Optional[str], str]:
        key = current_app.config.get('DEEPSEEK_API_KEY', '')
        endpoint = current_app.config.get('DEEPSEEK_BASE_URL', 'https://api.deepseek.com')

        # 占位 Key 视为未配置
        if not key or key == 'sk-placeholder' or len(key) < 10:
            return None, endpoint
        return key, endpoint

    def is_configured(self) -> bool:
        key, _ = self._get_credentials()
        return key is not None

    # ==================== 入口 ====================

    def build_path(self, topic: str) -> ReadingPathRecord:
        posts = PostService.published_records()
        if not posts:
            return self._make_path(topic, [])

        if self.is_configured():
            try:
                return self.ai_path(topic, posts)
            except (httpx.HTTPError, ValueError, KeyError) as e:
                current_app.logger.warning(f'⚠️ AI 阅读路径生成失败: {e}')
                if not current_app.config.get('AI_FALLBACK', True):
                    raise InkwellError('Failed to generate reading path', code=502)

        return self.local_path(topic, posts)

    # ==================== 本地生成 ====================

    def local_path(self, topic: str, posts: List[PostRecord]) -> ReadingPathRecord:
        """
        以检索命中的文章为主，不足时用与最佳命中最相关的文章补位；
        无命中时取最新的几篇
        """
        matches = DiscoveryService.search_posts(topic, posts)
        if matches:
            chosen = matches[:FALLBACK_PATH_POSTS]
            if len(chosen) < FALLBACK_PATH_POSTS:
                seen = {p.id for p in chosen}
                fillers = DiscoveryService.related_posts(chosen[0], posts, limit=len(posts))
                chosen += [p for p in fillers if p.id not in seen][:FALLBACK_PATH_POSTS - len(chosen)]
        else:
            chosen = posts[:FALLBACK_PATH_POSTS]

        # 由浅入深：短文在前
        chosen = sorted(chosen, key=lambda p: p.reading_time)
        return self._make_path(topic, chosen)

    @staticmethod
    def _make_path(topic, posts, title=None, description=None, estimated_time=None, source='local'):
        total = sum(p.reading_time for p in posts)
        return ReadingPathRecord(
            title=title or f'Master {topic}',
            description=description or
            f'A curated learning path to help you understand {topic} from the ground up.',
            estimated_time=estimated_time or f'{total} minutes',
            posts=posts,
            source=source,
        )

    # ==================== AI 生成 ====================

    def ai_path(self, topic: str, posts: List[PostRecord]) -> ReadingPathRecord:
        catalog = [{
            'id': p.id,
            'title': p.title,
            'excerpt': p.excerpt,
            'category': p.category.name,
            'tags': [t.name for t in p.tags],
            'readingTime': p.reading_time,
        } for p in posts]

        prompt = (
            f'Given this topic: "{topic}", create a personalized learning path using these available articles:\n\n'
            f'{json.dumps(catalog, indent=2)}\n\n'
            f'Create a learning path with {MIN_PATH_POSTS}-{MAX_PATH_POSTS} articles that would best help '
            f'someone learn about "{topic}".\n'
            'Order them from beginner to advanced concepts.\n'
            'Return a JSON object with this structure:\n'
            '{"title": "...", "description": "...", "estimatedTime": "...", "posts": ["post_id_1", "post_id_2"]}\n\n'
            'Only include post IDs that exist in the provided articles.'
        )
        data = self.parse_reply(self._request_completion(prompt))

        post_ids = data.get('posts')
        if not isinstance(post_ids, list):
            raise ValueError('AI reply has no post list')

        by_id = {p.id: p for p in posts}
        ordered = []
        for post_id in post_ids:
            # 忽略非字符串 ID 与虚构的文章
            if isinstance(post_id, str) and post_id in by_id and by_id[post_id] not in ordered:
                ordered.append(by_id[post_id])
        if not ordered:
            raise ValueError('AI reply referenced no known posts')

        return self._make_path(
            topic,
            ordered[:MAX_PATH_POSTS],
            title=_text(data, 'title'),
            description=_text(data, 'description'),
            estimated_time=_text(data, 'estimatedTime'),
            source='ai',
        )

    @staticmethod
    def parse_reply(content: str) -> dict:
        """从模型回复中提取 JSON 对象 (兼容 ```json 代码块)"""
        match = _JSON_OBJECT.search(content or '')
        if not match:
            raise ValueError('AI reply contained no JSON object')
        data = json.loads(match.group(0))
        if not isinstance(data, dict):
            raise ValueError('AI reply is not a JSON object')
        return data

    def _request_completion(self, prompt: str) -> str:
        api_key, base_url = self._get_credentials()

        # 确保 base_url 以 /v1 结尾
        api_url = base_url.rstrip('/')
        if not api_url.endswith('/v1'):
            api_url += '/v1'

        with httpx.Client(timeout=self.timeout) as client:
            response = client.post(
                f'{api_url}/chat/completions',
                headers={
                    'Authorization': f'Bearer {api_key}',
                    'Content-Type': 'application/json'
                },
                json={
                    'model': self.model,
                    'messages': [
                        {'role': 'system', 'content': 'You are a helpful curator for a blog. Reply with JSON only.'},
                        {'role': 'user', 'content': prompt},
                    ],
                    'temperature': 0.3,
                    'max_tokens': 800,
                    'stream': False
                }
            )
            response.raise_for_status()
            payload = response.json()

        try:
            content = payload['choices'][0]['message']['content']
        except (LookupError, TypeError) as e:
            raise ValueError(f'Unexpected completion payload: {e!r}')
        if not isinstance(content, str):
            raise ValueError('Completion content is not text')
        return content


pathfinder_service = PathfinderService()
