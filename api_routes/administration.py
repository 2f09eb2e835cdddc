"""
School-level administration: users, schools, school admins and the
per-school listings the admin dashboard reads.
"""

from flask import Blueprint, current_app, jsonify
from flask_login import login_required

from decorators import admin_required
from extensions import storage
from forms import SchoolAdminForm, SchoolForm, UserForm

from .utils import date_arg, deleted_or_404, get_or_404, jsonify_record, jsonify_records, load_payload

bp = Blueprint('administration', __name__)


# Users

@bp.route('/users/<int:user_id>')
@login_required
@admin_required
def get_user(user_id):
    return jsonify_record(get_or_404(storage.get_user(user_id), 'User'))


@bp.route('/users/<int:user_id>', methods=['PUT', 'PATCH'])
@login_required
@admin_required
def update_user(user_id):
    data = load_payload(UserForm, partial=True)
    if 'email' in data:
        existing = storage.get_user_by_email(data['email'])
        if existing and existing.id != user_id:
            return jsonify({'success': False, 'message': 'A user with this email already exists'}), 400
    return jsonify_record(get_or_404(storage.update_user(user_id, data), 'User'))


@bp.route('/users/<int:user_id>', methods=['DELETE'])
@login_required
@admin_required
def delete_user(user_id):
    return deleted_or_404(storage.delete_user(user_id), 'User')


# Schools

@bp.route('/schools')
@login_required
def list_schools():
    return jsonify_records(storage.get_schools())


@bp.route('/schools', methods=['POST'])
@login_required
@admin_required
def create_school():
    school = storage.create_school(load_payload(SchoolForm))
    current_app.logger.info(f"Created school {school.id}: {school.name}")
    return jsonify_record(school, 201)


@bp.route('/schools/<int:school_id>')
@login_required
def get_school(school_id):
    return jsonify_record(get_or_404(storage.get_school(school_id), 'School'))


@bp.route('/schools/<int:school_id>', methods=['PUT', 'PATCH'])
@login_required
@admin_required
def update_school(school_id):
    data = load_payload(SchoolForm, partial=True)
    return jsonify_record(get_or_404(storage.update_school(school_id, data), 'School'))


@bp.route('/schools/<int:school_id>', methods=['DELETE'])
@login_required
@admin_required
def delete_school(school_id):
    return deleted_or_404(storage.delete_school(school_id), 'School')


@bp.route('/schools/<int:school_id>/summary')
@login_required
@admin_required
def school_summary(school_id):
    """Headline counts for the admin dashboard."""
    school = get_or_404(storage.get_school(school_id), 'School')
    return jsonify({'school': school.to_dict(), 'counts': storage.counts_for_school(school_id)})


# Per-school listings

@bp.route('/schools/<int:school_id>/admins')
@login_required
def school_admins(school_id):
    return jsonify_records(storage.get_school_admins_by_school_id(school_id))


@bp.route('/schools/<int:school_id>/teachers')
@login_required
def school_teachers(school_id):
    return jsonify_records(storage.get_teachers_by_school_id(school_id))


@bp.route('/schools/<int:school_id>/students')
@login_required
def school_students(school_id):
    return jsonify_records(storage.get_students_by_school_id(school_id))


@bp.route('/schools/<int:school_id>/classes')
@login_required
def school_classes(school_id):
    return jsonify_records(storage.get_classes_by_school_id(school_id))


@bp.route('/schools/<int:school_id>/subjects')
@login_required
def school_subjects(school_id):
    return jsonify_records(storage.get_subjects_by_school_id(school_id))


@bp.route('/schools/<int:school_id>/exams')
@login_required
def school_exams(school_id):
    return jsonify_records(storage.get_exams_by_school_id(school_id))


@bp.route('/schools/<int:school_id>/fee-structures')
@login_required
def school_fee_structures(school_id):
    return jsonify_records(storage.get_fee_structures_by_school_id(school_id))


@bp.route('/schools/<int:school_id>/bills')
@login_required
@admin_required
def school_bills(school_id):
    return jsonify_records(storage.get_bills_by_school_id(school_id))


@bp.route('/schools/<int:school_id>/messages')
@login_required
def school_messages(school_id):
    return jsonify_records(storage.get_messages_by_school_id(school_id))


@bp.route('/schools/<int:school_id>/teacher-attendance')
@login_required
def school_teacher_attendance(school_id):
    return jsonify_records(storage.get_teacher_attendance_by_school_id(school_id, date_arg()))


# School admins

@bp.route('/school-admins', methods=['POST'])
@login_required
@admin_required
def create_school_admin():
    return jsonify_record(storage.create_school_admin(load_payload(SchoolAdminForm)), 201)


@bp.route('/school-admins/<int:admin_id>')
@login_required
def get_school_admin(admin_id):
    return jsonify_record(get_or_404(storage.get_school_admin(admin_id), 'School admin'))


@bp.route('/school-admins/<int:admin_id>', methods=['PUT', 'PATCH'])
@login_required
@admin_required
def update_school_admin(admin_id):
    data = load_payload(SchoolAdminForm, partial=True)
    return jsonify_record(get_or_404(storage.update_school_admin(admin_id, data), 'School admin'))


@bp.route('/school-admins/<int:admin_id>', methods=['DELETE'])
@login_required
@admin_required
def delete_school_admin(admin_id):
    return deleted_or_404(storage.delete_school_admin(admin_id), 'School admin')
