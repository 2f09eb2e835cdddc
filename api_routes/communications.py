"""
School messages and class message boards.
"""

from flask import Blueprint, abort, current_app
from flask_login import current_user, login_required

from extensions import storage
from forms import ClassMessageForm, MessageForm

from .utils import deleted_or_404, get_or_404, jsonify_record, jsonify_records, load_payload

bp = Blueprint('communications', __name__)


def _own_or_admin(record):
    if record.sender_id != current_user.id and not current_user.is_admin:
        abort(403, description='Only the sender or an administrator can change this message')
    return record


@bp.route('/messages/inbox')
@login_required
def inbox():
    """Messages sent to the current user, plus broadcasts to everyone."""
    return jsonify_records(storage.get_messages_by_receiver_id(current_user.id, current_user.role))


@bp.route('/messages/sent')
@login_required
def sent():
    return jsonify_records(storage.get_messages_by_sender_id(current_user.id))


@bp.route('/messages', methods=['POST'])
@login_required
def create_message():
    data = load_payload(MessageForm)
    data['sender_id'] = current_user.id
    message = storage.create_message(data)
    current_app.logger.info(f"User {current_user.id} sent message {message.id} to {message.receiver_role}")
    return jsonify_record(message, 201)


@bp.route('/messages/<int:message_id>')
@login_required
def get_message(message_id):
    return jsonify_record(get_or_404(storage.get_message(message_id), 'Message'))


@bp.route('/messages/<int:message_id>', methods=['PUT', 'PATCH'])
@login_required
def update_message(message_id):
    message = get_or_404(storage.get_message(message_id), 'Message')
    data = load_payload(MessageForm, partial=True)
    if set(data) != {'is_read'}:
        _own_or_admin(message)
    return jsonify_record(get_or_404(storage.update_message(message_id, data), 'Message'))


@bp.route('/messages/<int:message_id>/read', methods=['POST'])
@login_required
def mark_message_read(message_id):
    get_or_404(storage.get_message(message_id), 'Message')
    return jsonify_record(storage.update_message(message_id, {'is_read': True}))


@bp.route('/messages/<int:message_id>', methods=['DELETE'])
@login_required
def delete_message(message_id):
    _own_or_admin(get_or_404(storage.get_message(message_id), 'Message'))
    return deleted_or_404(storage.delete_message(message_id), 'Message')


# Class messages

@bp.route('/class-messages', methods=['POST'])
@login_required
def create_class_message():
    data = load_payload(ClassMessageForm)
    data['sender_id'] = current_user.id
    return jsonify_record(storage.create_class_message(data), 201)


@bp.route('/class-messages/<int:message_id>')
@login_required
def get_class_message(message_id):
    return jsonify_record(get_or_404(storage.get_class_message(message_id), 'Class message'))


@bp.route('/class-messages/<int:message_id>', methods=['PUT', 'PATCH'])
@login_required
def update_class_message(message_id):
    _own_or_admin(get_or_404(storage.get_class_message(message_id), 'Class message'))
    data = load_payload(ClassMessageForm, partial=True)
    return jsonify_record(storage.update_class_message(message_id, data))


@bp.route('/class-messages/<int:message_id>', methods=['DELETE'])
@login_required
def delete_class_message(message_id):
    _own_or_admin(get_or_404(storage.get_class_message(message_id), 'Class message'))
    return deleted_or_404(storage.delete_class_message(message_id), 'Class message')
