import pytest
from werkzeug.security import generate_password_hash

from app import create_app
from config import TestingConfig
from extensions import storage as app_storage

PASSWORD = 'secret123'


@pytest.fixture
def app():
    app_storage.reset()
    app = create_app(TestingConfig)
    yield app
    app_storage.reset()


@pytest.fixture
def storage(app):
    return app_storage


@pytest.fixture
def client(app):
    return app.test_client()


def make_user(storage, email, role, full_name='Test User', **extra):
    """Create a user directly in storage with the shared test password."""
    return storage.create_user(dict(
        email=email, password=generate_password_hash(PASSWORD), full_name=full_name, role=role, **extra
    ))


def login(client, email, password=PASSWORD):
    return client.post('/api/login', json={'email': email, 'password': password})


@pytest.fixture
def login_as(app, storage):
    """Factory returning a test client signed in as a new user with `role`."""
    def _login_as(role, email=None):
        email = email or f"{role.replace('_', '.')}{len(storage.users) + 1}@school.edu"
        user = make_user(storage, email, role)
        client = app.test_client()
        response = login(client, email)
        assert response.status_code == 200
        client.user = user
        return client
    return _login_as


@pytest.fixture
def admin_client(login_as):
    return login_as('school_admin')


@pytest.fixture
def teacher_client(login_as):
    return login_as('teacher')


@pytest.fixture
def student_client(login_as):
    return login_as('student')


@pytest.fixture
def school(storage):
    return storage.create_school({'name': 'Greenwood High', 'contact_email': 'office@greenwood.edu'})


@pytest.fixture
def class_8a(storage, school):
    return storage.create_class({'school_id': school.id, 'grade': '8', 'section': 'A'})
