from inkwell.extensions import db
from .base import BaseModel


class Bookmark(BaseModel):
    """读者收藏 (阅读清单)"""
    __tablename__ = 'reader_bookmarks'
    __table_args__ = (db.UniqueConstraint('user_id', 'post_id', name='uq_bookmark_user_post'),)

    user_id = db.Column(db.String(36), db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    post_id = db.Column(db.String(36), db.ForeignKey('posts.id', ondelete='CASCADE'), nullable=False)

    post = db.relationship('Post')


class PostLike(BaseModel):
    """读者点赞记录"""
    __tablename__ = 'reader_likes'
    __table_args__ = (db.UniqueConstraint('user_id', 'post_id', name='uq_like_user_post'),)

    user_id = db.Column(db.String(36), db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    post_id = db.Column(db.String(36), db.ForeignKey('posts.id', ondelete='CASCADE'), nullable=False)
