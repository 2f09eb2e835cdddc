"""
JSON error responses for the API.

Every error leaves the app as {"success": false, "message": ...}; validation
failures add an "errors" mapping of field -> messages.
"""

import logging
import traceback

from flask import jsonify, request
from flask_login import current_user
from werkzeug.exceptions import HTTPException

from storage import MissingFieldError, UnknownFieldError

logger = logging.getLogger(__name__)


class ValidationFailed(Exception):
    """Raised by route helpers when a payload does not pass its form."""

    def __init__(self, errors, message='Invalid request data'):
        super().__init__(message)
        self.message = message
        self.errors = errors


def error_response(message, status_code, errors=None):
    body = {'success': False, 'message': message}
    if errors:
        body['errors'] = errors
    return jsonify(body), status_code


def get_client_info():
    """Who and where an error came from, for the log line."""
    try:
        user_id = current_user.id if current_user.is_authenticated else None
    except Exception:
        user_id = None
    return {
        'user_id': user_id,
        'ip_address': request.environ.get('HTTP_X_FORWARDED_FOR', request.remote_addr),
        'method': request.method,
        'url': request.path,
    }


def handle_validation_error(error):
    return error_response(error.message, 400, error.errors)


def handle_storage_error(error):
    """Unknown or missing fields that slipped past the forms."""
    return error_response(str(error), 400, {name: ['Invalid field.'] for name in error.names})


def handle_http_error(error):
    if error.code >= 500:
        logger.error(f"HTTP {error.code} on {request.method} {request.path}: {error}")
    return error_response(error.description or error.name, error.code)


def handle_server_error(error):
    """Unexpected exceptions: log with traceback, answer 500."""
    client = get_client_info()
    logger.error(
        f"Unhandled error on {client['method']} {client['url']} "
        f"(user={client['user_id']}, ip={client['ip_address']}): {error}"
    )
    logger.error(f"Traceback: {traceback.format_exc()}")
    return error_response('An unexpected error occurred. Please try again later.', 500)


def register_error_handlers(app):
    app.register_error_handler(ValidationFailed, handle_validation_error)
    app.register_error_handler(MissingFieldError, handle_storage_error)
    app.register_error_handler(UnknownFieldError, handle_storage_error)
    app.register_error_handler(HTTPException, handle_http_error)
    app.register_error_handler(Exception, handle_server_error)
