import random
from datetime import datetime, timedelta

import click
from flask.cli import with_appcontext

from inkwell.extensions import db
from inkwell.models import (
    User, Author, Category, Tag, Post, PostRevision, Comment,
    Page, SiteSettings, Subscriber, ContactMessage, Snippet,
)
from inkwell.models.auth import default_avatar
from inkwell.services.post_service import unique_slug
from inkwell.services.settings_service import DEFAULT_SETTINGS
from inkwell.services.snippet_service import SnippetService
from inkwell.utils.fake_gen import fake
from inkwell.utils.text import estimate_reading_time

DEFAULT_PAGES = [
    ('About', 'about', '<p>Inkwell is a modern blogging platform for creators and readers.</p>'),
    ('Privacy Policy', 'privacy-policy', '<p>We only store what is needed to run this site.</p>'),
]


@click.command('status')
@with_appcontext
def status():
    """
    [验证指令] 查看当前数据库中的数据统计
    """
    click.echo(click.style('📊 Inkwell 数据库状态:', fg='cyan', bold=True))

    counts = [
        ('用户 (Users)', User),
        ('作者 (Authors)', Author),
        ('分类 (Categories)', Category),
        ('文章 (Posts)', Post),
        ('评论 (Comments)', Comment),
        ('订阅 (Subscribers)', Subscriber),
        ('留言 (Messages)', ContactMessage),
        ('片段 (Snippets)', Snippet),
    ]
    for label, model in counts:
        click.echo(f' - {label}: \t{model.query.count()}')

    if Post.query.count() > 0:
        click.echo(click.style('✔ 数据库连接正常，数据已存在。', fg='green'))
    else:
        click.echo(click.style('⚠ 暂无文章，请运行 flask forge 生成演示数据。', fg='yellow'))


@click.command('seed')
@with_appcontext
def seed():
    """
    写入默认数据：站点设置、固定页面、内容片段 (可重复执行)
    """
    db.create_all()

    if SiteSettings.query.first() is None:
        db.session.add(SiteSettings(
            title=DEFAULT_SETTINGS.title,
            description=DEFAULT_SETTINGS.description,
            twitter_url=DEFAULT_SETTINGS.twitter_url,
            github_url=DEFAULT_SETTINGS.github_url,
        ))
        click.echo('  → 站点设置已初始化')

    for title, slug, content in DEFAULT_PAGES:
        if Page.query.filter_by(slug=slug).first() is None:
            db.session.add(Page(title=title, slug=slug, content=content, is_deletable=False))
            click.echo(f'  → 页面: {title}')
    db.session.commit()

    created = SnippetService.seed_defaults()
    click.echo(f'  → 新增片段: {created}')
    click.echo(click.style('✔ 默认数据写入完成', fg='green'))


@click.command('make-admin')
@click.argument('email')
@with_appcontext
def make_admin(email):
    """将指定邮箱的用户设为管理员"""
    user = User.query.filter_by(email=email.strip().lower()).first()
    if user is None:
        click.echo(click.style(f'✘ 用户不存在: {email}', fg='red'))
        raise SystemExit(1)

    user.is_admin = True
    db.session.commit()
    click.echo(click.style(f'✔ {user.email} 已成为管理员', fg='green'))


@click.command('forge')
@click.option('--scale', default=1, help='数据规模倍数 (默认1倍)')
@with_appcontext
def forge(scale):
    """
    [演示数据] 清空数据库并生成作者、分类、标签、文章与评论
    警告：这将清除数据库中的现有数据！
    """
    click.echo(click.style(f'⚡ 正在生成演示数据 (规模: {scale}x)...', fg='cyan', bold=True))

    db.drop_all()
    db.create_all()

    admin = User(
        name='Admin',
        email='admin@inkwell.dev',
        password='admin123',
        avatar_url=default_avatar('Admin'),
        is_verified=True,
        is_admin=True,
    )
    db.session.add(admin)

    authors = init_authors(4 * scale)
    categories = init_categories()
    tags = [Tag(name=name) for name in fake.blog_tag_names()]
    db.session.add_all(authors + categories + tags)
    db.session.commit()

    click.echo('正在撰写文章...')
    init_posts(authors, categories, tags, 20 * scale)

    ctx = click.get_current_context()
    ctx.invoke(seed)

    click.echo(click.style('✔ 演示数据构建完成！', fg='green', bold=True))
    click.echo('管理员账号: admin@inkwell.dev / 密码: admin123')


def init_authors(count):
    authors = []
    for _ in range(count):
        name = fake.name()
        authors.append(Author(
            name=name,
            bio=fake.paragraph(nb_sentences=2),
            avatar_url=default_avatar(name),
            followers=random.randint(0, 5000),
        ))
    return authors


def init_categories():
    return [Category(name=name, description=description,
                     image_url=f'https://picsum.photos/seed/{name.lower()}/800/400')
            for name, description in fake.blog_categories()]


def init_posts(authors, categories, tags, count):
    now = datetime.utcnow()
    for i in range(count):
        title = fake.blog_title()
        content = fake.blog_html(paragraphs=random.randint(3, 8))
        post = Post(
            title=title,
            excerpt=fake.sentence(nb_words=18),
            content=content,
            image_url=f'https://picsum.photos/seed/post{i}/1200/600',
            author=random.choice(authors),
            category=random.choice(categories),
            tags=random.sample(tags, k=random.randint(1, 3)),
            published_date=now - timedelta(days=random.randint(0, 180)),
            reading_time=estimate_reading_time(content),
            likes=random.randint(0, 300),
            featured=random.random() < 0.15,
            status=Post.STATUS_PUBLISHED if random.random() < 0.85 else Post.STATUS_DRAFT,
        )
        post.id = fake.uuid4()
        post.slug = unique_slug(Post, title, post.id)
        db.session.add(post)
        db.session.add(PostRevision(post_id=post.id, content=content))

        for _ in range(random.randint(0, 4)):
            name = fake.name()
            db.session.add(Comment(
                post_id=post.id,
                author_name=name,
                author_avatar_url=default_avatar(name),
                text=fake.paragraph(nb_sentences=2),
                status=random.choice(Comment.STATUSES),
            ))
        # 分批提交，保证 slug 唯一性检查能看到已生成的文章
        db.session.commit()
