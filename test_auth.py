import pytest

from app import create_app
from config import TestingConfig
from conftest import PASSWORD, login, make_user


def _register(client, email, role='student', **extra):
    payload = dict(email=email, password=PASSWORD, full_name='New Person', role=role, **extra)
    return client.post('/api/register', json=payload)


def test_first_user_can_register_as_admin_and_is_signed_in(client):
    response = _register(client, 'founder@school.edu', role='super_admin')
    assert response.status_code == 201
    body = response.get_json()
    assert body['role'] == 'super_admin'
    assert 'password' not in body

    assert client.get('/api/user').get_json()['email'] == 'founder@school.edu'


def test_admin_accounts_need_an_admin_once_users_exist(client, admin_client, storage):
    response = _register(client, 'sneaky@school.edu', role='school_admin')
    assert response.status_code == 403
    assert storage.get_user_by_email('sneaky@school.edu') is None

    response = _register(admin_client, 'deputy@school.edu', role='school_admin')
    assert response.status_code == 201
    # The registering admin stays signed in as themselves
    assert admin_client.get('/api/user').get_json()['role'] == 'school_admin'
    assert admin_client.get('/api/user').get_json()['id'] == admin_client.user.id


def test_register_rejects_duplicate_email(client, storage):
    make_user(storage, 'taken@school.edu', 'parent')
    response = _register(client, 'taken@school.edu')
    assert response.status_code == 400
    assert response.get_json()['success'] is False


def test_register_validates_payload(client):
    response = client.post('/api/register', json={'email': 'not-an-email', 'password': '123'})
    assert response.status_code == 400
    errors = response.get_json()['errors']
    assert set(errors) >= {'email', 'password', 'full_name'}


def test_register_requires_json_object(client):
    response = client.post('/api/register', data='email=x', content_type='application/x-www-form-urlencoded')
    assert response.status_code == 400


def test_passwords_are_hashed(client, storage):
    _register(client, 'pupil@school.edu')
    stored = storage.get_user_by_email('pupil@school.edu')
    assert stored.password != PASSWORD
    assert stored.password.startswith(('pbkdf2:', 'scrypt:'))


def test_login_with_email_or_username(client, storage):
    make_user(storage, 'kim@school.edu', 'teacher')
    assert login(client, 'kim@school.edu').status_code == 200

    other = client.application.test_client()
    response = other.post('/api/login', json={'username': 'kim@school.edu', 'password': PASSWORD})
    assert response.status_code == 200
    assert response.get_json()['role'] == 'teacher'


def test_login_rejects_bad_credentials(client, storage):
    make_user(storage, 'kim@school.edu', 'teacher')
    assert login(client, 'kim@school.edu', 'wrong-password').status_code == 401
    assert login(client, 'ghost@school.edu').status_code == 401
    assert client.get('/api/user').status_code == 401


def test_inactive_users_cannot_login(client, storage):
    make_user(storage, 'gone@school.edu', 'teacher', status='inactive')
    response = login(client, 'gone@school.edu')
    assert response.status_code == 403


def test_protected_routes_answer_json_401(client):
    response = client.get('/api/schools')
    assert response.status_code == 401
    assert response.get_json() == {'success': False, 'message': 'Authentication required'}


def test_role_guard_answers_403(student_client):
    response = student_client.post('/api/schools', json={'name': 'Rogue Academy'})
    assert response.status_code == 403
    assert response.get_json()['success'] is False


def test_staff_register_student_login_and_profile(teacher_client, storage, school, class_8a):
    response = teacher_client.post('/api/register/user_student', json={
        'full_name': 'Maya Patel',
        'student_email': 'maya@school.edu',
        'password': PASSWORD,
        'school_id': school.id,
        'class_id': class_8a.id,
        'gender': 'female',
        'date_of_birth': '2011-02-14',
    })
    assert response.status_code == 201
    body = response.get_json()
    assert body['user']['role'] == 'student'
    assert body['student']['user_id'] == body['user']['id']
    assert body['student']['date_of_birth'] == '2011-02-14'
    assert storage.get_students_by_class_id(class_8a.id)[0].gender == 'female'

    # The new student can sign in straight away
    assert login(teacher_client.application.test_client(), 'maya@school.edu').status_code == 200


def test_students_cannot_register_students(student_client, school):
    response = student_client.post('/api/register/user_student', json={
        'full_name': 'Sam Lee', 'student_email': 'sam@school.edu', 'password': PASSWORD,
        'school_id': school.id,
    })
    assert response.status_code == 403


class CsrfTestingConfig(TestingConfig):
    WTF_CSRF_ENABLED = True


@pytest.fixture
def csrf_client(storage):
    make_user(storage, 'head@school.edu', 'school_admin')
    client = create_app(CsrfTestingConfig).test_client()
    # Signing in needs no token; there is no session to ride on yet
    assert login(client, 'head@school.edu').status_code == 200
    return client


def test_signed_in_writes_need_a_csrf_token(csrf_client, storage):
    response = csrf_client.post('/api/schools', json={'name': 'Token-less Academy'})
    assert response.status_code == 400
    assert response.get_json()['success'] is False
    assert storage.get_schools() == []

    token = csrf_client.get('/api/csrf-token').get_json()['csrf_token']
    response = csrf_client.post('/api/schools', json={'name': 'Riverside'}, headers={'X-CSRFToken': token})
    assert response.status_code == 201

    # Reads are never checked
    assert csrf_client.get('/api/schools').status_code == 200
