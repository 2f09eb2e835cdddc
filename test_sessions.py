from config import Config, ProductionConfig
from conftest import login, make_user


def _sid(app, client):
    cookie = client.get_cookie(app.config['SESSION_COOKIE_NAME'])
    return cookie.value if cookie else None


def _cached(app, storage, sid):
    return storage.session_cache.has(app.config['SESSION_KEY_PREFIX'] + sid)


def test_flask_session_uses_the_storage_cache(app, storage):
    assert app.config['SESSION_TYPE'] == 'cachelib'
    assert app.config['SESSION_CACHELIB'] is storage.session_cache


def test_login_stores_session_server_side(app, client, storage):
    make_user(storage, 'kim@school.edu', 'teacher')

    response = login(client, 'kim@school.edu')
    assert response.status_code == 200

    sid = _sid(app, client)
    assert sid is not None
    assert _cached(app, storage, sid)
    assert client.get('/api/user').get_json()['email'] == 'kim@school.edu'


def test_anonymous_requests_do_not_create_sessions(app, client):
    client.get('/')
    client.get('/api/user')
    assert _sid(app, client) is None


def test_logout_deletes_session(app, client, storage):
    make_user(storage, 'kim@school.edu', 'teacher')
    login(client, 'kim@school.edu')
    sid = _sid(app, client)

    assert client.post('/api/logout').status_code == 200
    assert not _cached(app, storage, sid)
    assert client.get('/api/user').status_code == 401


def test_unknown_session_cookie_is_treated_as_anonymous(app, client):
    client.set_cookie(app.config['SESSION_COOKIE_NAME'], 'forged-session-id')
    assert client.get('/api/user').status_code == 401


def test_login_issues_a_fresh_session_id(app, client, storage):
    make_user(storage, 'a@school.edu', 'teacher')
    make_user(storage, 'b@school.edu', 'teacher')

    login(client, 'a@school.edu')
    first = _sid(app, client)
    assert login(client, 'b@school.edu').status_code == 200
    second = _sid(app, client)

    assert second != first
    assert not _cached(app, storage, first)
    assert _cached(app, storage, second)
    assert client.get('/api/user').get_json()['email'] == 'b@school.edu'


def test_login_does_not_adopt_a_planted_session_id(app, client, storage):
    make_user(storage, 'kim@school.edu', 'teacher')
    client.set_cookie(app.config['SESSION_COOKIE_NAME'], 'planted-session-id')

    login(client, 'kim@school.edu')

    assert _sid(app, client) != 'planted-session-id'
    assert not _cached(app, storage, 'planted-session-id')


def test_production_session_lifetime_follows_the_environment():
    assert ProductionConfig.PERMANENT_SESSION_LIFETIME == Config.PERMANENT_SESSION_LIFETIME
