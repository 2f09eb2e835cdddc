"""
Teacher records, teacher attendance and per-teacher listings.
"""

from flask import Blueprint, current_app
from flask_login import login_required

from decorators import admin_required, staff_required
from extensions import storage
from forms import TeacherAttendanceForm, TeacherForm

from .utils import deleted_or_404, get_or_404, jsonify_record, jsonify_records, load_payload

bp = Blueprint('staff', __name__)


@bp.route('/teachers', methods=['POST'])
@login_required
@admin_required
def create_teacher():
    teacher = storage.create_teacher(load_payload(TeacherForm))
    current_app.logger.info(f"Added teacher {teacher.id} to school {teacher.school_id}")
    return jsonify_record(teacher, 201)


@bp.route('/teachers/<int:teacher_id>')
@login_required
def get_teacher(teacher_id):
    return jsonify_record(get_or_404(storage.get_teacher(teacher_id), 'Teacher'))


@bp.route('/teachers/<int:teacher_id>', methods=['PUT', 'PATCH'])
@login_required
@admin_required
def update_teacher(teacher_id):
    data = load_payload(TeacherForm, partial=True)
    return jsonify_record(get_or_404(storage.update_teacher(teacher_id, data), 'Teacher'))


@bp.route('/teachers/<int:teacher_id>', methods=['DELETE'])
@login_required
@admin_required
def delete_teacher(teacher_id):
    return deleted_or_404(storage.delete_teacher(teacher_id), 'Teacher')


@bp.route('/teachers/<int:teacher_id>/class-subjects')
@login_required
def teacher_class_subjects(teacher_id):
    return jsonify_records(storage.get_class_subjects_by_teacher_id(teacher_id))


@bp.route('/teachers/<int:teacher_id>/lesson-plans')
@login_required
def teacher_lesson_plans(teacher_id):
    return jsonify_records(storage.get_lesson_plans_by_teacher_id(teacher_id))


@bp.route('/teachers/<int:teacher_id>/assignments')
@login_required
def teacher_assignments(teacher_id):
    return jsonify_records(storage.get_assignments_by_teacher_id(teacher_id))


@bp.route('/teachers/<int:teacher_id>/attendance')
@login_required
@staff_required
def teacher_attendance_history(teacher_id):
    return jsonify_records(storage.get_teacher_attendance_by_teacher_id(teacher_id))


# Teacher attendance

@bp.route('/teacher-attendance', methods=['POST'])
@login_required
@staff_required
def create_teacher_attendance():
    return jsonify_record(storage.create_teacher_attendance(load_payload(TeacherAttendanceForm)), 201)


@bp.route('/teacher-attendance/<int:attendance_id>')
@login_required
@staff_required
def get_teacher_attendance(attendance_id):
    return jsonify_record(get_or_404(storage.get_teacher_attendance(attendance_id), 'Attendance record'))


@bp.route('/teacher-attendance/<int:attendance_id>', methods=['PUT', 'PATCH'])
@login_required
@staff_required
def update_teacher_attendance(attendance_id):
    data = load_payload(TeacherAttendanceForm, partial=True)
    return jsonify_record(get_or_404(storage.update_teacher_attendance(attendance_id, data), 'Attendance record'))


@bp.route('/teacher-attendance/<int:attendance_id>', methods=['DELETE'])
@login_required
@staff_required
def delete_teacher_attendance(attendance_id):
    return deleted_or_404(storage.delete_teacher_attendance(attendance_id), 'Attendance record')
