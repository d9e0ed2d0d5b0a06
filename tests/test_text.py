import re

from inkwell.utils.text import estimate_reading_time, html_to_text, slugify


def test_slugify_basic_title():
    assert slugify('Hello, World!  Foo') == 'hello-world-foo'


def test_slugify_collapses_hyphens_and_strips_edges():
    assert slugify('  --Hello -- World--  ') == 'hello-world'


def test_slugify_only_allowed_characters():
    for title in ['Ünïcödé & Co.', 'C++ / Rust: a comparison', 'tabs\tand\nnewlines', '100% Pure']:
        slug = slugify(title)
        assert re.fullmatch(r'[a-z0-9-]*', slug)
        assert '--' not in slug
        assert not slug.startswith('-') and not slug.endswith('-')


def test_slugify_may_return_empty():
    assert slugify('!!!') == ''
    assert slugify('') == ''
    assert slugify(None) == ''


def test_html_to_text_concatenates_text_nodes():
    text = html_to_text('<h1>Title</h1><p>Some <strong>bold</strong> text</p>')
    assert 'Title' in text
    assert 'Some bold text' in text


def test_html_to_text_drops_scripts():
    assert 'alert' not in html_to_text('<p>Hi</p><script>alert(1)</script>')


def test_estimate_reading_time():
    assert estimate_reading_time('') == 0
    assert estimate_reading_time('<p>just a few words</p>') == 1
    assert estimate_reading_time('<p>' + 'word ' * 401 + '</p>') == 3
