import os
import tempfile
from datetime import datetime, timedelta

import pytest

# 上传目录在导入配置前指定，避免测试写入项目目录
os.environ.setdefault('UPLOAD_FOLDER', tempfile.mkdtemp(prefix='inkwell-uploads-'))

from inkwell import create_app  # noqa: E402
from inkwell.extensions import db  # noqa: E402
from inkwell.models import Author, Category, Post, PostRevision, Tag, User  # noqa: E402
from inkwell.services.auth_service import AuthService  # noqa: E402


@pytest.fixture()
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


def _bearer(user):
    return {'Authorization': f'Bearer {AuthService.issue_token(user)}'}


@pytest.fixture()
def admin_headers(app):
    with app.app_context():
        admin = User(name='Admin', email='admin@example.com', password='secret123',
                     is_verified=True, is_admin=True).save()
        return _bearer(admin)


@pytest.fixture()
def reader(app):
    """普通读者：返回 (user_id, headers)"""
    with app.app_context():
        user = User(name='Reader', email='reader@example.com', password='secret123').save()
        return user.id, _bearer(user)


@pytest.fixture()
def user_headers(reader):
    return reader[1]


@pytest.fixture()
def blog(app):
    """
    一个作者、一个分类、两个标签和一篇已发布文章
    返回各记录的 ID
    """
    with app.app_context():
        author = Author(name='Ada Writer', bio='Writes about Python', followers=10).save()
        category = Category(name='Engineering', description='Software engineering').save()
        python = Tag(name='python').save()
        flask = Tag(name='flask').save()

        post = Post(
            title='Getting Started with Flask',
            slug='getting-started-with-flask',
            excerpt='A gentle introduction',
            content='<p>Flask is a lightweight web framework.</p>',
            author=author,
            category=category,
            tags=[python, flask],
            published_date=datetime.utcnow() - timedelta(days=1),
            reading_time=3,
            likes=5,
            status=Post.STATUS_PUBLISHED,
        ).save()
        db.session.add(PostRevision(post_id=post.id, content=post.content))
        db.session.commit()

        return {
            'author_id': author.id,
            'category_id': category.id,
            'tag_ids': [python.id, flask.id],
            'post_id': post.id,
            'post_slug': post.slug,
        }


@pytest.fixture()
def make_post(app, blog):
    """按需创建额外文章的工厂"""
    def _make(title, status=Post.STATUS_PUBLISHED, likes=0, reading_time=1,
              content='<p>Body</p>', days_ago=0, tag_ids=None, category_id=None):
        with app.app_context():
            tags = Tag.query.filter(Tag.id.in_(tag_ids or [])).all()
            post = Post(
                title=title,
                slug=title.lower().replace(' ', '-'),
                content=content,
                author_id=blog['author_id'],
                category_id=category_id or blog['category_id'],
                tags=tags,
                published_date=datetime.utcnow() - timedelta(days=days_ago),
                reading_time=reading_time,
                likes=likes,
                status=status,
            ).save()
            return post.id
    return _make
