"""
Lesson plans, assignments and assignment submissions.
"""

from flask import Blueprint, abort, current_app
from flask_login import current_user, login_required

from decorators import staff_required, submission_access_required
from extensions import storage
from forms import AssignmentForm, AssignmentSubmissionForm, LessonPlanForm

from .utils import deleted_or_404, get_or_404, jsonify_record, jsonify_records, load_payload

bp = Blueprint('coursework', __name__)

# The only submission fields a student may set; marks and feedback are for staff
STUDENT_SUBMISSION_FIELDS = {'assignment_id', 'student_id', 'content', 'file_url'}
STUDENT_EDITABLE_FIELDS = {'content', 'file_url'}


def _check_student_submission(student_id, data=None, allowed=STUDENT_SUBMISSION_FIELDS):
    """Students may only touch their own submissions, and never the grading fields."""
    if current_user.role != 'student':
        return
    student = storage.get_student_by_user_id(current_user.id)
    if student is None or student.id != student_id:
        abort(403, description='You can only manage your own submissions')
    if data is not None and set(data) - allowed:
        abort(403, description='Students may only change: ' + ', '.join(sorted(allowed)))


# Lesson plans

@bp.route('/lesson-plans', methods=['POST'])
@login_required
@staff_required
def create_lesson_plan():
    return jsonify_record(storage.create_lesson_plan(load_payload(LessonPlanForm)), 201)


@bp.route('/lesson-plans/<int:plan_id>')
@login_required
def get_lesson_plan(plan_id):
    return jsonify_record(get_or_404(storage.get_lesson_plan(plan_id), 'Lesson plan'))


@bp.route('/lesson-plans/<int:plan_id>', methods=['PUT', 'PATCH'])
@login_required
@staff_required
def update_lesson_plan(plan_id):
    data = load_payload(LessonPlanForm, partial=True)
    return jsonify_record(get_or_404(storage.update_lesson_plan(plan_id, data), 'Lesson plan'))


@bp.route('/lesson-plans/<int:plan_id>', methods=['DELETE'])
@login_required
@staff_required
def delete_lesson_plan(plan_id):
    return deleted_or_404(storage.delete_lesson_plan(plan_id), 'Lesson plan')


# Assignments

@bp.route('/assignments', methods=['POST'])
@login_required
@staff_required
def create_assignment():
    assignment = storage.create_assignment(load_payload(AssignmentForm))
    current_app.logger.info(f"Teacher {assignment.teacher_id} set assignment {assignment.id} "
                            f"for class {assignment.class_id}, due {assignment.due_date}")
    return jsonify_record(assignment, 201)


@bp.route('/assignments/<int:assignment_id>')
@login_required
def get_assignment(assignment_id):
    return jsonify_record(get_or_404(storage.get_assignment(assignment_id), 'Assignment'))


@bp.route('/assignments/<int:assignment_id>', methods=['PUT', 'PATCH'])
@login_required
@staff_required
def update_assignment(assignment_id):
    data = load_payload(AssignmentForm, partial=True)
    return jsonify_record(get_or_404(storage.update_assignment(assignment_id, data), 'Assignment'))


@bp.route('/assignments/<int:assignment_id>', methods=['DELETE'])
@login_required
@staff_required
def delete_assignment(assignment_id):
    return deleted_or_404(storage.delete_assignment(assignment_id), 'Assignment')


@bp.route('/assignments/<int:assignment_id>/submissions')
@login_required
@staff_required
def assignment_submissions(assignment_id):
    return jsonify_records(storage.get_assignment_submissions_by_assignment_id(assignment_id))


# Submissions

@bp.route('/assignment-submissions', methods=['POST'])
@login_required
@submission_access_required
def create_assignment_submission():
    data = load_payload(AssignmentSubmissionForm)
    _check_student_submission(data['student_id'], data)
    submission = storage.create_assignment_submission(data)
    current_app.logger.info(f"Student {submission.student_id} submitted assignment {submission.assignment_id}")
    return jsonify_record(submission, 201)


@bp.route('/assignment-submissions/<int:submission_id>')
@login_required
def get_assignment_submission(submission_id):
    return jsonify_record(get_or_404(storage.get_assignment_submission(submission_id), 'Submission'))


@bp.route('/assignment-submissions/<int:submission_id>', methods=['PUT', 'PATCH'])
@login_required
@submission_access_required
def update_assignment_submission(submission_id):
    data = load_payload(AssignmentSubmissionForm, partial=True)
    submission = get_or_404(storage.get_assignment_submission(submission_id), 'Submission')
    _check_student_submission(submission.student_id, data, STUDENT_EDITABLE_FIELDS)
    return jsonify_record(storage.update_assignment_submission(submission_id, data))


@bp.route('/assignment-submissions/<int:submission_id>', methods=['DELETE'])
@login_required
@submission_access_required
def delete_assignment_submission(submission_id):
    submission = get_or_404(storage.get_assignment_submission(submission_id), 'Submission')
    _check_student_submission(submission.student_id)
    return deleted_or_404(storage.delete_assignment_submission(submission_id), 'Submission')
