from datetime import datetime, timedelta

from inkwell.schemas import AuthorRecord, CategoryRecord, PostRecord, TagRecord
from inkwell.services.discovery_service import DiscoveryService

NOW = datetime(2024, 6, 1, 12, 0, 0)

ADA = AuthorRecord(id='a1', name='Ada', avatar_url=None, bio=None)
LIN = AuthorRecord(id='a2', name='Linus', avatar_url=None, bio=None)
ENG = CategoryRecord(id='c1', name='Engineering', description=None, image_url=None)
LIFE = CategoryRecord(id='c2', name='Lifestyle', description=None, image_url=None)
PY = TagRecord(id='t1', name='python')
WEB = TagRecord(id='t2', name='web')
FOOD = TagRecord(id='t3', name='food')


def make_post(id, title='Untitled', author=ADA, category=ENG, tags=(), days_ago=0,
              status='published', excerpt=None, content='<p></p>'):
    return PostRecord(
        id=id,
        title=title,
        slug=id,
        excerpt=excerpt,
        content=content,
        image_url=None,
        author=author,
        category=category,
        tags=list(tags),
        published_date=NOW - timedelta(days=days_ago),
        reading_time=1,
        likes=0,
        featured=False,
        status=status,
    )


# ==================== 相关度打分 ====================

def test_score_all_signals():
    ref = make_post('ref', tags=[PY, WEB])
    candidate = make_post('c', tags=[PY, WEB, FOOD], days_ago=5)
    # 同分类 10 + 两个共同标签 10 + 同作者 2 + 30 天内 1
    assert DiscoveryService.score_post(ref, candidate) == 23


def test_score_nothing_in_common():
    ref = make_post('ref', tags=[PY])
    candidate = make_post('c', author=LIN, category=LIFE, tags=[FOOD], days_ago=60)
    assert DiscoveryService.score_post(ref, candidate) == 0


def test_recency_bonus_is_flat_and_strict():
    ref = make_post('ref', author=LIN, category=LIFE)
    assert DiscoveryService.score_post(ref, make_post('a', days_ago=29)) == 1
    assert DiscoveryService.score_post(ref, make_post('b', days_ago=30)) == 0


def test_related_excludes_reference_and_drafts():
    ref = make_post('ref', tags=[PY])
    candidates = [
        ref,
        make_post('draft', tags=[PY], status='draft'),
        make_post('ok', tags=[PY]),
    ]
    related = DiscoveryService.related_posts(ref, candidates)
    assert [p.id for p in related] == ['ok']


def test_related_sorted_by_score_and_limited():
    ref = make_post('ref', tags=[PY, WEB])
    candidates = [
        make_post('low', author=LIN, category=LIFE, days_ago=90),
        make_post('mid', author=LIN, tags=[PY], days_ago=90),
        make_post('high', tags=[PY, WEB]),
        make_post('other', author=LIN, category=LIFE, days_ago=90),
    ]
    related = DiscoveryService.related_posts(ref, candidates, limit=3)
    assert [p.id for p in related] == ['high', 'mid', 'low']


def test_related_keeps_zero_score_fillers_in_input_order():
    ref = make_post('ref')
    candidates = [
        make_post('x', author=LIN, category=LIFE, days_ago=90),
        make_post('y', author=LIN, category=LIFE, days_ago=90),
    ]
    related = DiscoveryService.related_posts(ref, candidates, limit=5)
    assert [p.id for p in related] == ['x', 'y']


# ==================== 全文检索 ====================

def test_search_blank_query_returns_nothing():
    posts = [make_post('p', title='Python tips')]
    assert DiscoveryService.search_posts('', posts) == []
    assert DiscoveryService.search_posts('   ', posts) == []
    assert DiscoveryService.search_posts(None, posts) == []


def test_search_matches_every_field_case_insensitively():
    posts = [
        make_post('title', title='PYTHON Tips'),
        make_post('excerpt', excerpt='all about python'),
        make_post('content', content='<p>Deep <em>Python</em> dive</p>'),
        make_post('author', author=AuthorRecord(id='a3', name='Python Pete', avatar_url=None, bio=None)),
        make_post('category', category=CategoryRecord(id='c3', name='Python', description=None, image_url=None)),
        make_post('none', title='Cooking'),
    ]
    results = DiscoveryService.search_posts('python', posts)
    assert [p.id for p in results] == ['title', 'excerpt', 'content', 'author', 'category']


def test_search_matches_text_not_markup():
    posts = [make_post('p', content='<p class="python">Hello</p>')]
    assert DiscoveryService.search_posts('python', posts) == []


def test_search_skips_unpublished_and_applies_limit():
    posts = [
        make_post('d', title='Flask drafts', status='draft'),
        make_post('a', title='Flask one'),
        make_post('b', title='Flask two'),
        make_post('c', title='Flask three'),
    ]
    results = DiscoveryService.search_posts('flask', posts, limit=2)
    assert [p.id for p in results] == ['a', 'b']
