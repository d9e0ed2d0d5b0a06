from inkwell.extensions import db
from inkwell.models import Post


def test_reader_routes_require_login(client):
    assert client.get('/api/me/bookmarks').status_code == 401
    assert client.get('/api/me/likes').status_code == 401


def test_bookmarks_lifecycle(client, blog, make_post, user_headers):
    second = make_post('Second Post')

    first = client.put(f"/api/me/bookmarks/{blog['post_id']}", headers=user_headers)
    assert first.status_code == 201
    again = client.put(f"/api/me/bookmarks/{blog['post_id']}", headers=user_headers)
    assert again.status_code == 200
    client.put(f'/api/me/bookmarks/{second}', headers=user_headers)

    bookmarks = client.get('/api/me/bookmarks', headers=user_headers).get_json()
    assert {p['id'] for p in bookmarks} == {blog['post_id'], second}
    assert all('author' in p for p in bookmarks)

    resp = client.delete(f"/api/me/bookmarks/{blog['post_id']}", headers=user_headers)
    assert resp.status_code == 200
    assert [p['id'] for p in client.get('/api/me/bookmarks', headers=user_headers).get_json()] == [second]

    cleared = client.delete('/api/me/bookmarks', headers=user_headers)
    assert cleared.get_json()['removed'] == 1
    assert client.get('/api/me/bookmarks', headers=user_headers).get_json() == []


def test_bookmark_unknown_post(client, user_headers):
    resp = client.put('/api/me/bookmarks/missing', headers=user_headers)
    assert resp.status_code == 404


def test_bookmarks_are_per_user(client, blog, user_headers, admin_headers):
    client.put(f"/api/me/bookmarks/{blog['post_id']}", headers=user_headers)
    assert client.get('/api/me/bookmarks', headers=admin_headers).get_json() == []


def test_toggle_like_adjusts_counter(client, app, blog, user_headers):
    liked = client.post(f"/api/me/likes/{blog['post_id']}", headers=user_headers).get_json()
    assert liked == {'postId': blog['post_id'], 'liked': True, 'likes': 6}
    assert client.get('/api/me/likes', headers=user_headers).get_json() == {'postIds': [blog['post_id']]}

    unliked = client.post(f"/api/me/likes/{blog['post_id']}", headers=user_headers).get_json()
    assert unliked['liked'] is False
    assert unliked['likes'] == 5
    assert client.get('/api/me/likes', headers=user_headers).get_json() == {'postIds': []}


def test_unlike_never_goes_negative(client, app, blog, user_headers):
    client.post(f"/api/me/likes/{blog['post_id']}", headers=user_headers)
    with app.app_context():
        db.session.get(Post, blog['post_id']).likes = 0
        db.session.commit()

    unliked = client.post(f"/api/me/likes/{blog['post_id']}", headers=user_headers).get_json()
    assert unliked['likes'] == 0
