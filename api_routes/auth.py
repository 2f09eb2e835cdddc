"""
Registration, login and session routes.
"""

from flask import Blueprint, abort, current_app, jsonify, request, session
from flask_login import current_user, login_required, login_user, logout_user
from flask_wtf.csrf import generate_csrf
from werkzeug.security import check_password_hash, generate_password_hash

from decorators import staff_required
from extensions import storage
from forms import LoginForm, RegisterForm, StudentRegistrationForm
from models import ADMIN_ROLES

from .utils import jsonify_record, load_payload

bp = Blueprint('auth', __name__)


def _ensure_email_available(email):
    if storage.get_user_by_email(email):
        abort(400, description='A user with this email already exists')


def _start_session(user):
    # Permanent sessions expire server-side after PERMANENT_SESSION_LIFETIME of inactivity
    session.permanent = True
    login_user(user)
    # New sid for the signed-in session; the old cache entry is dropped
    current_app.session_interface.regenerate(session)


@bp.route('/register', methods=['POST'])
def register():
    """Create a login. Admin accounts need an admin, except for the very first user."""
    data = load_payload(RegisterForm)
    _ensure_email_available(data['email'])

    if data['role'] in ADMIN_ROLES and storage.users.all():
        if not (current_user.is_authenticated and current_user.is_admin):
            abort(403, description='Only administrators can create administrator accounts')

    data['password'] = generate_password_hash(data['password'])
    user = storage.create_user(data)
    current_app.logger.info(f"Registered user {user.id} ({user.role})")

    if not current_user.is_authenticated:
        _start_session(user)
    return jsonify_record(user, 201)


@bp.route('/login', methods=['POST'])
def login():
    data = load_payload(LoginForm)
    username = data.get('email') or data.get('username')
    if not username:
        abort(400, description='Email is required')

    user = storage.get_user_by_username(username)
    if user is None or not check_password_hash(user.password, data['password']):
        current_app.logger.warning(f"Failed login for '{username}' from {request.remote_addr}")
        abort(401, description='Invalid email or password')
    if not user.is_active:
        abort(403, description='This account is disabled')

    _start_session(user)
    current_app.logger.info(f"User {user.id} logged in")
    return jsonify_record(user)


@bp.route('/logout', methods=['POST'])
@login_required
def logout():
    user_id = current_user.id
    logout_user()
    session.clear()
    current_app.logger.info(f"User {user_id} logged out")
    return jsonify({'success': True})


@bp.route('/user')
@login_required
def current_user_profile():
    return jsonify_record(current_user)


@bp.route('/register/user_student', methods=['POST'])
@login_required
@staff_required
def register_student():
    """Create a student's login together with their Student record."""
    data = load_payload(StudentRegistrationForm)
    _ensure_email_available(data['student_email'])

    user = storage.create_user({
        'email': data.pop('student_email'),
        'password': generate_password_hash(data.pop('password')),
        'full_name': data.pop('full_name'),
        'role': 'student',
    })
    student = storage.create_student(dict(data, user_id=user.id))
    current_app.logger.info(f"Registered student {student.id} (user {user.id})")
    return jsonify({'user': user.to_dict(), 'student': student.to_dict()}), 201


@bp.route('/csrf-token')
@login_required
def csrf_token():
    """Token to send as X-CSRFToken on writes made with this session."""
    return jsonify({'csrf_token': generate_csrf()})
