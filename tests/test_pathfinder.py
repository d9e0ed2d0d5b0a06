import json

import httpx
import pytest

from inkwell.services.pathfinder_service import PathfinderService


@pytest.fixture()
def catalog(blog, make_post):
    return {
        'basics': blog['post_id'],
        'advanced': make_post('Flask Advanced', reading_time=9, tag_ids=blog['tag_ids']),
        'cooking': make_post('Cooking Pasta', reading_time=2, days_ago=3),
        'draft': make_post('Flask Draft', status='draft', reading_time=1),
    }


@pytest.fixture()
def ai_enabled(app):
    app.config['DEEPSEEK_API_KEY'] = 'sk-test-0123456789abcdef'


def _build(client, topic='Flask'):
    return client.post('/api/pathfinder/', json={'topic': topic})


def test_topic_is_required(client):
    resp = _build(client, topic='  ')
    assert resp.status_code == 400
    assert resp.get_json()['errors'] == [{'field': 'topic', 'msg': 'Topic is required'}]


def test_empty_catalog(client):
    data = _build(client, topic='Rust').get_json()
    assert data == {
        'title': 'Master Rust',
        'description': 'A curated learning path to help you understand Rust from the ground up.',
        'estimatedTime': '0 minutes',
        'posts': [],
        'source': 'local',
    }


def test_local_path_orders_from_short_to_long(client, catalog):
    data = _build(client).get_json()
    assert data['source'] == 'local'
    assert [p['id'] for p in data['posts']] == [catalog['cooking'], catalog['basics'], catalog['advanced']]
    assert data['estimatedTime'] == '14 minutes'
    assert catalog['draft'] not in [p['id'] for p in data['posts']]


def test_local_path_without_matches_uses_latest_posts(client, catalog):
    data = _build(client, topic='quantum').get_json()
    assert len(data['posts']) == 3
    assert data['title'] == 'Master quantum'


def test_ai_path(client, catalog, ai_enabled, monkeypatch):
    reply = '```json\n' + json.dumps({
        'title': 'Flask from zero',
        'description': 'Start small, go deep',
        'estimatedTime': '12 minutes',
        'posts': [catalog['basics'], catalog['advanced'], 'made-up-id', catalog['basics']],
    }) + '\n```'
    prompts = []

    def fake_completion(self, prompt):
        prompts.append(prompt)
        return reply

    monkeypatch.setattr(PathfinderService, '_request_completion', fake_completion)

    data = _build(client).get_json()
    assert data['source'] == 'ai'
    assert data['title'] == 'Flask from zero'
    assert data['estimatedTime'] == '12 minutes'
    assert [p['id'] for p in data['posts']] == [catalog['basics'], catalog['advanced']]
    assert catalog['draft'] not in prompts[0]


def test_ai_failure_falls_back_to_local(client, catalog, ai_enabled, monkeypatch):
    def broken(self, prompt):
        raise httpx.ConnectError('connection refused')

    monkeypatch.setattr(PathfinderService, '_request_completion', broken)
    data = _build(client).get_json()
    assert data['source'] == 'local'
    assert len(data['posts']) == 3


def test_ai_failure_without_fallback(client, app, catalog, ai_enabled, monkeypatch):
    app.config['AI_FALLBACK'] = False
    monkeypatch.setattr(PathfinderService, '_request_completion', lambda self, prompt: 'no json here')

    resp = _build(client)
    assert resp.status_code == 502
    assert resp.get_json() == {'error': 'Failed to generate reading path'}


def test_parse_reply():
    assert PathfinderService.parse_reply('Sure! {"posts": ["a"]} Enjoy.') == {'posts': ['a']}
    with pytest.raises(ValueError):
        PathfinderService.parse_reply('nothing')


def test_placeholder_key_is_not_configured(app):
    with app.app_context():
        assert PathfinderService().is_configured() is False
        app.config['DEEPSEEK_API_KEY'] = 'sk-real-key-123456'
        assert PathfinderService().is_configured() is True


def _completion_reply(monkeypatch, payload):
    """让 DeepSeek 的 httpx 请求返回给定 JSON"""
    def fake_post(self, url, **kwargs):
        return httpx.Response(200, json=payload, request=httpx.Request('POST', url))

    monkeypatch.setattr(httpx.Client, 'post', fake_post)


@pytest.mark.parametrize('payload', [
    {'choices': []},
    {'choices': [{'message': {}}]},
    {'choices': [{'message': {'content': None}}]},
    ['not', 'an', 'object'],
])
def test_malformed_completion_falls_back_to_local(client, catalog, ai_enabled, monkeypatch, payload):
    _completion_reply(monkeypatch, payload)

    resp = _build(client)
    assert resp.status_code == 200
    assert resp.get_json()['source'] == 'local'


@pytest.mark.parametrize('reply', [
    '{"posts": [["x"]]}',
    '{"posts": {"a": 1}}',
    '{"posts": "abc"}',
])
def test_malformed_post_list_falls_back_to_local(client, catalog, ai_enabled, monkeypatch, reply):
    monkeypatch.setattr(PathfinderService, '_request_completion', lambda self, prompt: reply)

    resp = _build(client)
    assert resp.status_code == 200
    assert resp.get_json()['source'] == 'local'


def test_completion_content_is_extracted(client, catalog, ai_enabled, monkeypatch):
    reply = json.dumps({'title': 42, 'posts': [catalog['advanced']]})
    _completion_reply(monkeypatch, {'choices': [{'message': {'content': reply}}]})

    data = _build(client).get_json()
    assert data['source'] == 'ai'
    assert data['title'] == 'Master Flask'
    assert [p['id'] for p in data['posts']] == [catalog['advanced']]
