from datetime import datetime

from inkwell.extensions import db
from .base import BaseModel, generate_uuid

# 多对多：文章 <-> 标签
post_tags = db.Table('post_tags',
    db.Column('post_id', db.String(36), db.ForeignKey('posts.id', ondelete='CASCADE'), primary_key=True),
    db.Column('tag_id', db.String(36), db.ForeignKey('tags.id', ondelete='CASCADE'), primary_key=True)
)


class Author(BaseModel):
    """作者"""
    __tablename__ = 'authors'

    name = db.Column(db.String(128), nullable=False)
    avatar_url = db.Column(db.String(512))
    bio = db.Column(db.Text)
    followers = db.Column(db.Integer, default=0, nullable=False)

    posts = db.relationship('Post', back_populates='author', lazy='dynamic')


class Category(BaseModel):
    """文章分类"""
    __tablename__ = 'categories'

    name = db.Column(db.String(128), nullable=False)
    description = db.Column(db.Text)
    image_url = db.Column(db.String(512))

    posts = db.relationship('Post', back_populates='category', lazy='dynamic')


class Tag(BaseModel):
    """标签"""
    __tablename__ = 'tags'

    name = db.Column(db.String(64), unique=True, nullable=False)


class Post(BaseModel):
    """博客文章"""
    __tablename__ = 'posts'
    STATUS_DRAFT = 'draft'
    STATUS_PUBLISHED = 'published'
    STATUSES = (STATUS_DRAFT, STATUS_PUBLISHED)
    # 与 /api/posts 下的静态路由同名，不能作为 slug
    RESERVED_SLUGS = ('search', 'trending')

    title = db.Column(db.String(256), nullable=False)
    slug = db.Column(db.String(256), unique=True, index=True, nullable=False)
    excerpt = db.Column(db.Text)
    content = db.Column(db.Text, nullable=False)  # HTML 内容
    image_url = db.Column(db.String(512))

    # 外键约束由数据库保证
    author_id = db.Column(db.String(36), db.ForeignKey('authors.id'), nullable=False, index=True)
    category_id = db.Column(db.String(36), db.ForeignKey('categories.id'), nullable=False, index=True)

    published_date = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    reading_time = db.Column(db.Integer, default=0, nullable=False)
    likes = db.Column(db.Integer, default=0, nullable=False)
    featured = db.Column(db.Boolean, default=False, nullable=False)
    status = db.Column(db.String(20), default=STATUS_DRAFT, nullable=False, index=True)

    # 关系
    author = db.relationship('Author', back_populates='posts')
    category = db.relationship('Category', back_populates='posts')
    tags = db.relationship('Tag', secondary=post_tags, backref=db.backref('posts', lazy='dynamic'))
    revisions = db.relationship('PostRevision', backref='post', lazy='dynamic',
                                order_by='PostRevision.timestamp',
                                cascade='all, delete-orphan')
    comments = db.relationship('Comment', backref='post', lazy='dynamic',
                               cascade='all, delete-orphan')

    @property
    def is_published(self):
        return self.status == self.STATUS_PUBLISHED


class PostRevision(db.Model):
    """文章内容历史 (每次创建/更新追加一条)"""
    __tablename__ = 'post_history'

    id = db.Column(db.String(36), primary_key=True, default=generate_uuid)
    post_id = db.Column(db.String(36), db.ForeignKey('posts.id', ondelete='CASCADE'), nullable=False, index=True)
    content = db.Column(db.Text)
    timestamp = db.Column(db.DateTime, default=datetime.utcnow)


class Comment(BaseModel):
    """读者评论"""
    __tablename__ = 'comments'
    STATUSES = ('pending', 'approved', 'spam')

    post_id = db.Column(db.String(36), db.ForeignKey('posts.id', ondelete='CASCADE'), nullable=False, index=True)
    author_name = db.Column(db.String(128), nullable=False)
    author_avatar_url = db.Column(db.String(512))
    text = db.Column(db.Text, nullable=False)
    status = db.Column(db.String(16), default='pending', nullable=False, index=True)
    timestamp = db.Column(db.DateTime, default=datetime.utcnow, index=True)
