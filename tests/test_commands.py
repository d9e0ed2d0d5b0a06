from inkwell.models import Page, Post, SiteSettings, Snippet, User
from inkwell.services.snippet_service import DEFAULT_SNIPPETS


def test_seed_is_idempotent(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=['seed'])
    assert result.exit_code == 0, result.output
    runner.invoke(args=['seed'])

    with app.app_context():
        assert SiteSettings.query.count() == 1
        assert Snippet.query.count() == len(DEFAULT_SNIPPETS)
        about = Page.query.filter_by(slug='about').one()
        assert about.is_deletable is False


def test_seeded_settings_and_snippets_are_served(app, client):
    app.test_cli_runner().invoke(args=['seed'])

    assert client.get('/api/settings/').get_json()['title'] == 'Inkwell'
    snippets = client.get('/api/snippets/').get_json()
    assert {s['name'] for s in snippets} == {s['name'] for s in DEFAULT_SNIPPETS}


def test_forge_builds_demo_content(app):
    result = app.test_cli_runner().invoke(args=['forge'])
    assert result.exit_code == 0, result.output

    with app.app_context():
        assert Post.query.count() == 20
        assert User.query.filter_by(is_admin=True).count() == 1
        slugs = [p.slug for p in Post.query.all()]
        assert len(set(slugs)) == len(slugs)


def test_make_admin(app):
    with app.app_context():
        User(name='Someone', email='someone@example.com', password='secret123').save()

    runner = app.test_cli_runner()
    assert runner.invoke(args=['make-admin', 'Someone@example.com']).exit_code == 0
    assert runner.invoke(args=['make-admin', 'ghost@example.com']).exit_code == 1

    with app.app_context():
        assert User.query.filter_by(email='someone@example.com').one().is_admin is True


def test_status(app):
    result = app.test_cli_runner().invoke(args=['status'])
    assert result.exit_code == 0
    assert 'Posts' in result.output
