from functools import wraps
from flask import abort
from flask_login import current_user

from models import ADMIN_ROLES, STAFF_ROLES


def roles_required(*roles):
    """Restricts access to users whose role is one of `roles`."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not current_user.is_authenticated:
                abort(401)  # Unauthorized - not logged in
            if current_user.role not in roles:
                abort(403)  # Forbidden - wrong role
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def admin_required(f):
    """Restricts access to super admins and school admins."""
    return roles_required(*ADMIN_ROLES)(f)


def staff_required(f):
    """Restricts access to admins and teachers."""
    return roles_required(*STAFF_ROLES)(f)


def submission_access_required(f):
    """Students hand in work; teachers and admins review it."""
    return roles_required(*STAFF_ROLES, 'student')(f)
