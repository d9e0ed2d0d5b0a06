from inkwell.extensions import db
from inkwell.models import Comment


def _comment(client, blog, **overrides):
    body = {'postId': blog['post_id'], 'authorName': 'Reader Bob', 'text': 'Great article!'}
    body.update(overrides)
    return client.post('/api/comments/', json=body)


def test_submit_comment_starts_pending(client, blog):
    resp = _comment(client, blog)
    assert resp.status_code == 201
    data = resp.get_json()
    assert data['message'] == 'Comment submitted for moderation'
    assert data['comment']['status'] == 'pending'
    assert data['comment']['authorAvatarUrl'].startswith('https://ui-avatars.com/api/?name=Reader%20Bob')

    # 未审核的评论不公开
    assert client.get(f"/api/comments/post/{blog['post_id']}").get_json() == []
    pending = client.get(f"/api/comments/post/{blog['post_id']}?status=pending").get_json()
    assert len(pending) == 1


def test_submit_comment_validation(client, blog):
    resp = _comment(client, blog, postId='abc', authorName='', text='')
    assert resp.status_code == 400
    fields = {e['field'] for e in resp.get_json()['errors']}
    assert fields == {'postId', 'authorName', 'text'}


def test_submit_comment_unknown_post(client, blog):
    resp = _comment(client, blog, postId='00000000-0000-4000-8000-000000000000')
    assert resp.status_code == 404
    assert resp.get_json() == {'error': 'Post not found'}


def test_moderation_flow(client, app, blog, admin_headers):
    comment_id = _comment(client, blog).get_json()['comment']['id']

    assert client.get('/api/comments/').status_code == 401
    listing = client.get('/api/comments/?status=pending', headers=admin_headers).get_json()
    assert [c['id'] for c in listing] == [comment_id]

    bad = client.put(f'/api/comments/{comment_id}/status', json={'status': 'deleted'}, headers=admin_headers)
    assert bad.status_code == 400

    ok = client.put(f'/api/comments/{comment_id}/status', json={'status': 'approved'}, headers=admin_headers)
    assert ok.status_code == 200
    approved = client.get(f"/api/comments/post/{blog['post_id']}").get_json()
    assert [c['id'] for c in approved] == [comment_id]

    assert client.delete(f'/api/comments/{comment_id}', headers=admin_headers).status_code == 200
    with app.app_context():
        assert db.session.get(Comment, comment_id) is None

    missing = client.delete(f'/api/comments/{comment_id}', headers=admin_headers)
    assert missing.status_code == 404
    assert missing.get_json() == {'error': 'Comment not found'}
