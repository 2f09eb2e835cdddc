"""
Students, parents and student attendance.
"""

from flask import Blueprint, current_app
from flask_login import login_required

from decorators import admin_required, staff_required
from extensions import storage
from forms import ParentForm, StudentAttendanceForm, StudentForm

from .utils import deleted_or_404, get_or_404, jsonify_record, jsonify_records, load_payload

bp = Blueprint('students', __name__)


@bp.route('/students', methods=['POST'])
@login_required
@admin_required
def create_student():
    student = storage.create_student(load_payload(StudentForm))
    current_app.logger.info(f"Enrolled student {student.id} in school {student.school_id}")
    return jsonify_record(student, 201)


@bp.route('/students/<int:student_id>')
@login_required
def get_student(student_id):
    return jsonify_record(get_or_404(storage.get_student(student_id), 'Student'))


@bp.route('/students/<int:student_id>', methods=['PUT', 'PATCH'])
@login_required
@admin_required
def update_student(student_id):
    data = load_payload(StudentForm, partial=True)
    return jsonify_record(get_or_404(storage.update_student(student_id, data), 'Student'))


@bp.route('/students/<int:student_id>', methods=['DELETE'])
@login_required
@admin_required
def delete_student(student_id):
    return deleted_or_404(storage.delete_student(student_id), 'Student')


@bp.route('/students/<int:student_id>/attendance')
@login_required
def student_attendance_history(student_id):
    return jsonify_records(storage.get_student_attendance_by_student_id(student_id))


@bp.route('/students/<int:student_id>/submissions')
@login_required
def student_submissions(student_id):
    return jsonify_records(storage.get_assignment_submissions_by_student_id(student_id))


@bp.route('/students/<int:student_id>/marks')
@login_required
def student_marks(student_id):
    return jsonify_records(storage.get_marks_by_student_id(student_id))


@bp.route('/students/<int:student_id>/fee-payments')
@login_required
def student_fee_payments(student_id):
    return jsonify_records(storage.get_fee_payments_by_student_id(student_id))


# Parents

@bp.route('/parents', methods=['POST'])
@login_required
@admin_required
def create_parent():
    return jsonify_record(storage.create_parent(load_payload(ParentForm)), 201)


@bp.route('/parents/<int:parent_id>')
@login_required
def get_parent(parent_id):
    return jsonify_record(get_or_404(storage.get_parent(parent_id), 'Parent'))


@bp.route('/parents/<int:parent_id>', methods=['PUT', 'PATCH'])
@login_required
@admin_required
def update_parent(parent_id):
    data = load_payload(ParentForm, partial=True)
    return jsonify_record(get_or_404(storage.update_parent(parent_id, data), 'Parent'))


@bp.route('/parents/<int:parent_id>', methods=['DELETE'])
@login_required
@admin_required
def delete_parent(parent_id):
    return deleted_or_404(storage.delete_parent(parent_id), 'Parent')


@bp.route('/parents/<int:parent_id>/students')
@login_required
def parent_students(parent_id):
    """A parent's children."""
    return jsonify_records(storage.get_students_by_parent_id(parent_id))


# Student attendance

@bp.route('/student-attendance', methods=['POST'])
@login_required
@staff_required
def create_student_attendance():
    return jsonify_record(storage.create_student_attendance(load_payload(StudentAttendanceForm)), 201)


@bp.route('/student-attendance/<int:attendance_id>')
@login_required
def get_student_attendance(attendance_id):
    return jsonify_record(get_or_404(storage.get_student_attendance(attendance_id), 'Attendance record'))


@bp.route('/student-attendance/<int:attendance_id>', methods=['PUT', 'PATCH'])
@login_required
@staff_required
def update_student_attendance(attendance_id):
    data = load_payload(StudentAttendanceForm, partial=True)
    return jsonify_record(get_or_404(storage.update_student_attendance(attendance_id, data), 'Attendance record'))


@bp.route('/student-attendance/<int:attendance_id>', methods=['DELETE'])
@login_required
@staff_required
def delete_student_attendance(attendance_id):
    return deleted_or_404(storage.delete_student_attendance(attendance_id), 'Attendance record')
