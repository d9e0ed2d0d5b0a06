"""
实体记录与字段映射层

数据库列名使用 snake_case，API 字段使用 camelCase。
所有实体先由 ORM 行转换为下面的 dataclass 记录，再统一由 to_api 序列化，
路由层不直接拼装 JSON 字典。
"""
from dataclasses import dataclass, field, fields, is_dataclass
from datetime import datetime
from typing import List, Optional


def camelize(name):
    """snake_case -> camelCase"""
    head, *rest = name.split('_')
    return head + ''.join(part.capitalize() for part in rest)


def to_api(value):
    """递归地把记录转换为 JSON 友好的 camelCase 结构"""
    if is_dataclass(value):
        return {camelize(f.name): to_api(getattr(value, f.name))
                for f in fields(value)
                if not (f.metadata.get('omit_none') and getattr(value, f.name) is None)}
    if isinstance(value, (list, tuple)):
        return [to_api(v) for v in value]
    if isinstance(value, dict):
        return {k: to_api(v) for k, v in value.items()}
    if isinstance(value, datetime):
        return value.isoformat()
    return value


@dataclass
class UserRecord:
    id: str
    name: str
    email: str
    avatar_url: Optional[str]
    is_verified: bool
    is_admin: bool

    @classmethod
    def from_model(cls, user):
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            avatar_url=user.avatar_url,
            is_verified=bool(user.is_verified),
            is_admin=bool(user.is_admin),
        )


@dataclass
class AuthorRecord:
    id: str
    name: str
    avatar_url: Optional[str]
    bio: Optional[str]
    followers: int = 0
    post_count: Optional[int] = field(default=None, metadata={'omit_none': True})

    @classmethod
    def from_model(cls, author, post_count=None):
        return cls(
            id=author.id,
            name=author.name,
            avatar_url=author.avatar_url,
            bio=author.bio,
            followers=author.followers or 0,
            post_count=post_count,
        )


@dataclass
class CategoryRecord:
    id: str
    name: str
    description: Optional[str]
    image_url: Optional[str]

    @classmethod
    def from_model(cls, category):
        return cls(
            id=category.id,
            name=category.name,
            description=category.description,
            image_url=category.image_url,
        )


@dataclass
class TagRecord:
    id: str
    name: str

    @classmethod
    def from_model(cls, tag):
        return cls(id=tag.id, name=tag.name)


@dataclass
class RevisionRecord:
    content: str
    timestamp: Optional[datetime]

    @classmethod
    def from_model(cls, revision):
        return cls(content=revision.content, timestamp=revision.timestamp)


@dataclass
class PostRecord:
    id: str
    title: str
    slug: str
    excerpt: Optional[str]
    content: str
    image_url: Optional[str]
    author: AuthorRecord
    category: CategoryRecord
    tags: List[TagRecord]
    published_date: Optional[datetime]
    reading_time: int
    likes: int
    featured: bool
    status: str
    history: Optional[List[RevisionRecord]] = field(default=None, metadata={'omit_none': True})

    @property
    def is_published(self):
        return self.status == 'published'

    @classmethod
    def from_model(cls, post, with_history=False):
        history = None
        if with_history:
            history = [RevisionRecord.from_model(r) for r in post.revisions]
        return cls(
            id=post.id,
            title=post.title,
            slug=post.slug,
            excerpt=post.excerpt,
            content=post.content,
            image_url=post.image_url,
            author=AuthorRecord.from_model(post.author),
            category=CategoryRecord.from_model(post.category),
            tags=[TagRecord.from_model(t) for t in post.tags],
            published_date=post.published_date,
            reading_time=post.reading_time or 0,
            likes=post.likes or 0,
            featured=bool(post.featured),
            status=post.status,
            history=history,
        )


@dataclass
class CommentRecord:
    id: str
    post_id: str
    author_name: str
    author_avatar_url: Optional[str]
    text: str
    timestamp: Optional[datetime]
    status: str

    @classmethod
    def from_model(cls, comment):
        return cls(
            id=comment.id,
            post_id=comment.post_id,
            author_name=comment.author_name,
            author_avatar_url=comment.author_avatar_url,
            text=comment.text,
            timestamp=comment.timestamp,
            status=comment.status,
        )


@dataclass
class PageRecord:
    id: str
    title: str
    slug: str
    content: str
    is_deletable: bool

    @classmethod
    def from_model(cls, page):
        return cls(
            id=page.id,
            title=page.title,
            slug=page.slug,
            content=page.content,
            is_deletable=bool(page.is_deletable),
        )


@dataclass
class SettingsRecord:
    title: str
    description: str
    logo_light_url: str = ''
    logo_dark_url: str = ''
    twitter_url: str = ''
    github_url: str = ''

    @classmethod
    def from_model(cls, settings):
        return cls(
            title=settings.title,
            description=settings.description,
            logo_light_url=settings.logo_light_url or '',
            logo_dark_url=settings.logo_dark_url or '',
            twitter_url=settings.twitter_url or '',
            github_url=settings.github_url or '',
        )


@dataclass
class SubscriberRecord:
    id: str
    email: str
    subscribed_at: Optional[datetime]

    @classmethod
    def from_model(cls, subscriber):
        return cls(id=subscriber.id, email=subscriber.email, subscribed_at=subscriber.subscribed_at)


@dataclass
class ContactMessageRecord:
    id: str
    name: str
    email: str
    message: str
    timestamp: Optional[datetime]

    @classmethod
    def from_model(cls, msg):
        return cls(id=msg.id, name=msg.name, email=msg.email, message=msg.message, timestamp=msg.timestamp)


@dataclass
class SnippetRecord:
    id: str
    name: str
    description: str
    icon: str
    content: str

    @classmethod
    def from_model(cls, snippet):
        return cls(
            id=snippet.id,
            name=snippet.name,
            description=snippet.description or '',
            icon=snippet.icon,
            content=snippet.content,
        )


@dataclass
class ReadingPathRecord:
    title: str
    description: str
    estimated_time: str
    posts: List[PostRecord] = field(default_factory=list)
    source: str = 'local'
