"""
Classes, subjects, the subjects taught in each class, and per-class listings.
"""

from flask import Blueprint, current_app
from flask_login import login_required

from decorators import admin_required, staff_required
from extensions import storage
from forms import ClassForm, ClassSubjectForm, SubjectForm

from .utils import date_arg, deleted_or_404, get_or_404, jsonify_record, jsonify_records, load_payload

bp = Blueprint('classes', __name__)


@bp.route('/classes', methods=['POST'])
@login_required
@admin_required
def create_class():
    class_obj = storage.create_class(load_payload(ClassForm))
    current_app.logger.info(f"Created {class_obj.display_name} (id {class_obj.id})")
    return jsonify_record(class_obj, 201)


@bp.route('/classes/<int:class_id>')
@login_required
def get_class(class_id):
    return jsonify_record(get_or_404(storage.get_class(class_id), 'Class'))


@bp.route('/classes/<int:class_id>', methods=['PUT', 'PATCH'])
@login_required
@admin_required
def update_class(class_id):
    data = load_payload(ClassForm, partial=True)
    return jsonify_record(get_or_404(storage.update_class(class_id, data), 'Class'))


@bp.route('/classes/<int:class_id>', methods=['DELETE'])
@login_required
@admin_required
def delete_class(class_id):
    return deleted_or_404(storage.delete_class(class_id), 'Class')


@bp.route('/classes/<int:class_id>/students')
@login_required
def class_students(class_id):
    return jsonify_records(storage.get_students_by_class_id(class_id))


@bp.route('/classes/<int:class_id>/subjects')
@login_required
def class_subjects(class_id):
    return jsonify_records(storage.get_class_subjects_by_class_id(class_id))


@bp.route('/classes/<int:class_id>/lesson-plans')
@login_required
def class_lesson_plans(class_id):
    return jsonify_records(storage.get_lesson_plans_by_class_id(class_id))


@bp.route('/classes/<int:class_id>/assignments')
@login_required
def class_assignments(class_id):
    return jsonify_records(storage.get_assignments_by_class_id(class_id))


@bp.route('/classes/<int:class_id>/exams')
@login_required
def class_exams(class_id):
    return jsonify_records(storage.get_exams_by_class_id(class_id))


@bp.route('/classes/<int:class_id>/fee-structures')
@login_required
def class_fee_structures(class_id):
    return jsonify_records(storage.get_fee_structures_by_class_id(class_id))


@bp.route('/classes/<int:class_id>/messages')
@login_required
def class_messages(class_id):
    return jsonify_records(storage.get_class_messages_by_class_id(class_id))


@bp.route('/classes/<int:class_id>/attendance')
@login_required
@staff_required
def class_attendance(class_id):
    """Attendance taken for a class on ?date= (default today)."""
    return jsonify_records(storage.get_student_attendance_by_class_id(class_id, date_arg()))


# Subjects

@bp.route('/subjects', methods=['POST'])
@login_required
@admin_required
def create_subject():
    return jsonify_record(storage.create_subject(load_payload(SubjectForm)), 201)


@bp.route('/subjects/<int:subject_id>')
@login_required
def get_subject(subject_id):
    return jsonify_record(get_or_404(storage.get_subject(subject_id), 'Subject'))


@bp.route('/subjects/<int:subject_id>', methods=['PUT', 'PATCH'])
@login_required
@admin_required
def update_subject(subject_id):
    data = load_payload(SubjectForm, partial=True)
    return jsonify_record(get_or_404(storage.update_subject(subject_id, data), 'Subject'))


@bp.route('/subjects/<int:subject_id>', methods=['DELETE'])
@login_required
@admin_required
def delete_subject(subject_id):
    return deleted_or_404(storage.delete_subject(subject_id), 'Subject')


# Class subjects

@bp.route('/class-subjects', methods=['POST'])
@login_required
@admin_required
def create_class_subject():
    return jsonify_record(storage.create_class_subject(load_payload(ClassSubjectForm)), 201)


@bp.route('/class-subjects/<int:class_subject_id>')
@login_required
def get_class_subject(class_subject_id):
    return jsonify_record(get_or_404(storage.get_class_subject(class_subject_id), 'Class subject'))


@bp.route('/class-subjects/<int:class_subject_id>', methods=['PUT', 'PATCH'])
@login_required
@admin_required
def update_class_subject(class_subject_id):
    data = load_payload(ClassSubjectForm, partial=True)
    return jsonify_record(get_or_404(storage.update_class_subject(class_subject_id, data), 'Class subject'))


@bp.route('/class-subjects/<int:class_subject_id>', methods=['DELETE'])
@login_required
@admin_required
def delete_class_subject(class_subject_id):
    return deleted_or_404(storage.delete_class_subject(class_subject_id), 'Class subject')
