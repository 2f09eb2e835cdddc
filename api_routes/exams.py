"""
Exams, the subjects examined in each, and the marks students earn.
"""

from flask import Blueprint
from flask_login import login_required

from decorators import admin_required, staff_required
from extensions import storage
from forms import ExamForm, ExamSubjectForm, MarkForm

from .utils import deleted_or_404, get_or_404, jsonify_record, jsonify_records, load_payload

bp = Blueprint('exams', __name__)


@bp.route('/exams', methods=['POST'])
@login_required
@admin_required
def create_exam():
    return jsonify_record(storage.create_exam(load_payload(ExamForm)), 201)


@bp.route('/exams/<int:exam_id>')
@login_required
def get_exam(exam_id):
    return jsonify_record(get_or_404(storage.get_exam(exam_id), 'Exam'))


@bp.route('/exams/<int:exam_id>', methods=['PUT', 'PATCH'])
@login_required
@admin_required
def update_exam(exam_id):
    data = load_payload(ExamForm, partial=True)
    return jsonify_record(get_or_404(storage.update_exam(exam_id, data), 'Exam'))


@bp.route('/exams/<int:exam_id>', methods=['DELETE'])
@login_required
@admin_required
def delete_exam(exam_id):
    return deleted_or_404(storage.delete_exam(exam_id), 'Exam')


@bp.route('/exams/<int:exam_id>/subjects')
@login_required
def exam_subjects(exam_id):
    return jsonify_records(storage.get_exam_subjects_by_exam_id(exam_id))


# Exam subjects

@bp.route('/exam-subjects', methods=['POST'])
@login_required
@staff_required
def create_exam_subject():
    return jsonify_record(storage.create_exam_subject(load_payload(ExamSubjectForm)), 201)


@bp.route('/exam-subjects/<int:exam_subject_id>')
@login_required
def get_exam_subject(exam_subject_id):
    return jsonify_record(get_or_404(storage.get_exam_subject(exam_subject_id), 'Exam subject'))


@bp.route('/exam-subjects/<int:exam_subject_id>', methods=['PUT', 'PATCH'])
@login_required
@staff_required
def update_exam_subject(exam_subject_id):
    data = load_payload(ExamSubjectForm, partial=True)
    return jsonify_record(get_or_404(storage.update_exam_subject(exam_subject_id, data), 'Exam subject'))


@bp.route('/exam-subjects/<int:exam_subject_id>', methods=['DELETE'])
@login_required
@staff_required
def delete_exam_subject(exam_subject_id):
    return deleted_or_404(storage.delete_exam_subject(exam_subject_id), 'Exam subject')


@bp.route('/exam-subjects/<int:exam_subject_id>/marks')
@login_required
@staff_required
def exam_subject_marks(exam_subject_id):
    return jsonify_records(storage.get_marks_by_exam_subject_id(exam_subject_id))


# Marks

@bp.route('/marks', methods=['POST'])
@login_required
@staff_required
def create_mark():
    return jsonify_record(storage.create_mark(load_payload(MarkForm)), 201)


@bp.route('/marks/<int:mark_id>')
@login_required
def get_mark(mark_id):
    return jsonify_record(get_or_404(storage.get_mark(mark_id), 'Mark'))


@bp.route('/marks/<int:mark_id>', methods=['PUT', 'PATCH'])
@login_required
@staff_required
def update_mark(mark_id):
    data = load_payload(MarkForm, partial=True)
    return jsonify_record(get_or_404(storage.update_mark(mark_id, data), 'Mark'))


@bp.route('/marks/<int:mark_id>', methods=['DELETE'])
@login_required
@staff_required
def delete_mark(mark_id):
    return deleted_or_404(storage.delete_mark(mark_id), 'Mark')
