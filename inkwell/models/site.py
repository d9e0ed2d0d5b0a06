from datetime import datetime

from inkwell.extensions import db
from .base import BaseModel


class Page(BaseModel):
    """静态页面 (关于、隐私政策等)"""
    __tablename__ = 'pages'

    title = db.Column(db.String(256), nullable=False)
    slug = db.Column(db.String(256), unique=True, index=True, nullable=False)
    content = db.Column(db.Text, nullable=False)
    is_deletable = db.Column(db.Boolean, default=True, nullable=False)


class SiteSettings(BaseModel):
    """站点设置 (单行表)"""
    __tablename__ = 'site_settings'

    title = db.Column(db.String(128), nullable=False)
    description = db.Column(db.Text, nullable=False)
    logo_light_url = db.Column(db.String(512), default='')
    logo_dark_url = db.Column(db.String(512), default='')
    twitter_url = db.Column(db.String(512), default='')
    github_url = db.Column(db.String(512), default='')


class Subscriber(BaseModel):
    """邮件订阅者"""
    __tablename__ = 'subscribers'

    email = db.Column(db.String(255), unique=True, index=True, nullable=False)
    subscribed_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)


class ContactMessage(BaseModel):
    """联系表单留言"""
    __tablename__ = 'contact_messages'

    name = db.Column(db.String(128), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    message = db.Column(db.Text, nullable=False)
    timestamp = db.Column(db.DateTime, default=datetime.utcnow, index=True)


class Snippet(BaseModel):
    """可复用的内容片段 (编辑器插入)"""
    __tablename__ = 'snippets'

    name = db.Column(db.String(128), nullable=False)
    description = db.Column(db.String(256), default='')
    icon = db.Column(db.String(64), default='PenSquareIcon')
    content = db.Column(db.Text, nullable=False)
