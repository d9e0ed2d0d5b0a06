# 按照依赖顺序导入
from .base import BaseModel
from .auth import User
from .blog import Author, Category, Tag, Post, PostRevision, Comment, post_tags
from .site import Page, SiteSettings, Subscriber, ContactMessage, Snippet
from .reader import Bookmark, PostLike
