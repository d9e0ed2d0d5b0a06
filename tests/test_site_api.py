from inkwell.extensions import db
from inkwell.models import Bookmark, Page, Subscriber, User


def test_health(client):
    resp = client.get('/api/health')
    assert resp.status_code == 200
    data = resp.get_json()
    assert data['status'] == 'OK'
    assert 'timestamp' in data


def test_unknown_route(client):
    resp = client.get('/api/nothing-here')
    assert resp.status_code == 404
    assert resp.get_json() == {'error': 'Route not found'}


def test_method_not_allowed_is_json(client):
    resp = client.patch('/api/health')
    assert resp.status_code == 405
    assert 'error' in resp.get_json()


def test_security_and_cors_headers(client):
    resp = client.get('/api/health', headers={'Origin': 'http://localhost:5173'})
    assert resp.headers['Access-Control-Allow-Origin'] == 'http://localhost:5173'
    assert resp.headers['X-Content-Type-Options'] == 'nosniff'

    other = client.get('/api/health', headers={'Origin': 'http://evil.example.com'})
    assert 'Access-Control-Allow-Origin' not in other.headers


# ==================== 页面 ====================

def test_page_crud(client, admin_headers):
    resp = client.post('/api/pages/', json={'title': 'Terms of Service', 'content': '<p>Be nice</p>'},
                       headers=admin_headers)
    assert resp.status_code == 201
    page = resp.get_json()['page']
    assert page['slug'] == 'terms-of-service'
    assert page['isDeletable'] is True

    custom = client.post('/api/pages/', json={'title': 'FAQ', 'content': '<p>Q</p>', 'slug': 'Help Center'},
                         headers=admin_headers).get_json()['page']
    assert custom['slug'] == 'help-center'

    assert client.get('/api/pages/terms-of-service').get_json()['title'] == 'Terms of Service'
    assert [p['title'] for p in client.get('/api/pages/').get_json()] == ['FAQ', 'Terms of Service']

    updated = client.put(f"/api/pages/{page['id']}",
                         json={'title': 'Terms', 'content': '<p>Be kind</p>', 'slug': 'help-center'},
                         headers=admin_headers).get_json()['page']
    assert updated['slug'] == 'help-center-2'

    assert client.delete(f"/api/pages/{page['id']}", headers=admin_headers).status_code == 200
    assert client.get('/api/pages/help-center-2').status_code == 404


def test_protected_page_cannot_be_deleted(client, app, admin_headers):
    with app.app_context():
        page_id = Page(title='About', slug='about', content='<p>About</p>', is_deletable=False).save().id

    resp = client.delete(f'/api/pages/{page_id}', headers=admin_headers)
    assert resp.status_code == 400
    assert resp.get_json() == {'error': 'This page cannot be deleted'}
    assert client.delete('/api/pages/missing', headers=admin_headers).status_code == 404


# ==================== 站点设置 ====================

def test_settings_defaults_then_upsert(client, admin_headers):
    defaults = client.get('/api/settings/').get_json()
    assert defaults['title'] == 'Inkwell'
    assert defaults['twitterUrl'] == 'https://twitter.com'
    assert defaults['githubUrl'] == 'https://github.com'

    invalid = client.put('/api/settings/', json={'title': 'Mine'}, headers=admin_headers)
    assert invalid.status_code == 400

    body = {'title': 'My Blog', 'description': 'Thoughts', 'logoLightUrl': 'https://img.example.com/l.png'}
    saved = client.put('/api/settings/', json=body, headers=admin_headers)
    assert saved.status_code == 200
    assert saved.get_json()['logoLightUrl'] == 'https://img.example.com/l.png'

    current = client.get('/api/settings/').get_json()
    assert current == {
        'title': 'My Blog',
        'description': 'Thoughts',
        'logoLightUrl': 'https://img.example.com/l.png',
        'logoDarkUrl': '',
        'twitterUrl': '',
        'githubUrl': '',
    }

    client.put('/api/settings/', json={'title': 'Renamed', 'description': 'Thoughts'}, headers=admin_headers)
    assert client.get('/api/settings/').get_json()['title'] == 'Renamed'


# ==================== 订阅与留言 ====================

def test_subscribe_and_unsubscribe(client, app, admin_headers):
    resp = client.post('/api/subscribers/subscribe', json={'email': 'Fan@Example.com'})
    assert resp.status_code == 201

    dup = client.post('/api/subscribers/subscribe', json={'email': 'fan@example.com'})
    assert dup.status_code == 400
    assert dup.get_json() == {'error': 'Email already subscribed'}

    listing = client.get('/api/subscribers/', headers=admin_headers).get_json()
    assert [s['email'] for s in listing] == ['fan@example.com']

    assert client.post('/api/subscribers/unsubscribe', json={'email': 'fan@example.com'}).status_code == 200
    with app.app_context():
        assert Subscriber.query.count() == 0

    assert client.post('/api/subscribers/subscribe', json={'email': 'nope'}).status_code == 400


def test_contact_form(client, admin_headers):
    short = client.post('/api/contact/', json={'name': 'Sam', 'email': 'sam@example.com', 'message': 'hi'})
    assert short.status_code == 400
    assert short.get_json()['errors'] == [{'field': 'message', 'msg': 'Message must be at least 10 characters'}]

    ok = client.post('/api/contact/', json={'name': 'Sam', 'email': 'sam@example.com',
                                            'message': 'I love this blog very much'})
    assert ok.status_code == 201

    messages = client.get('/api/contact/', headers=admin_headers).get_json()
    assert len(messages) == 1
    assert client.delete(f"/api/contact/{messages[0]['id']}", headers=admin_headers).status_code == 200


# ==================== 用户管理 ====================

def test_update_user(client, app, admin_headers, reader):
    user_id, _ = reader
    resp = client.put(f'/api/users/{user_id}',
                      json={'name': 'Promoted', 'email': 'reader@example.com', 'isVerified': True, 'isAdmin': True},
                      headers=admin_headers)
    assert resp.status_code == 200
    user = resp.get_json()['user']
    assert user['isAdmin'] is True
    assert user['isVerified'] is True

    taken = client.put(f'/api/users/{user_id}',
                       json={'name': 'Promoted', 'email': 'admin@example.com'}, headers=admin_headers)
    assert taken.get_json() == {'error': 'User already exists'}


def test_delete_user(client, app, admin_headers, reader, blog):
    user_id, headers = reader
    client.put(f"/api/me/bookmarks/{blog['post_id']}", headers=headers)

    assert client.delete(f'/api/users/{user_id}', headers=admin_headers).status_code == 200
    with app.app_context():
        assert db.session.get(User, user_id) is None
        assert Bookmark.query.count() == 0

    # 被删除用户的 token 随之失效
    assert client.get('/api/auth/me', headers=headers).status_code == 401


def test_cannot_delete_self(client, app, admin_headers):
    with app.app_context():
        admin_id = User.query.filter_by(email='admin@example.com').one().id

    resp = client.delete(f'/api/users/{admin_id}', headers=admin_headers)
    assert resp.status_code == 400
    assert resp.get_json() == {'error': 'Cannot delete your own account'}


# ==================== 内容片段 ====================

def test_snippet_crud(client, admin_headers):
    assert client.post('/api/snippets/', json={'name': 'Quote', 'content': '<blockquote/>'}).status_code == 401

    created = client.post('/api/snippets/', json={'name': 'Quote', 'content': '<blockquote>Q</blockquote>'},
                          headers=admin_headers)
    assert created.status_code == 201
    snippet = created.get_json()['snippet']
    assert snippet['icon'] == 'PenSquareIcon'
    assert snippet['description'] == ''

    updated = client.put(f"/api/snippets/{snippet['id']}",
                         json={'name': 'Pull Quote', 'content': '<blockquote>P</blockquote>', 'icon': 'QuoteIcon'},
                         headers=admin_headers).get_json()['snippet']
    assert updated['icon'] == 'QuoteIcon'

    assert [s['name'] for s in client.get('/api/snippets/').get_json()] == ['Pull Quote']
    assert client.delete(f"/api/snippets/{snippet['id']}", headers=admin_headers).status_code == 200
    assert client.get('/api/snippets/').get_json() == []
