"""
In-memory data-access layer behind every API route.

One EntityTable per entity, plus the cachelib cache that Flask-Session keeps
server-side sessions in.
Lookups are linear scans; nothing survives a restart.
"""

import logging
from datetime import date, datetime, timezone

from cachelib import SimpleCache

from models import (
    BROADCAST_ROLE, User, School, SchoolAdmin, Teacher, Parent, Student, Class, Subject,
    ClassSubject, StudentAttendance, TeacherAttendance, LessonPlan, Assignment,
    AssignmentSubmission, Exam, ExamSubject, Mark, FeeStructure, FeePayment, Bill,
    Message, ClassMessage,
)

from .tables import EntityTable, utcnow

logger = logging.getLogger(__name__)


def as_date(value):
    """Reduce a date, datetime or ISO string to a calendar date (UTC for aware datetimes)."""
    if value is None:
        return None
    if isinstance(value, str):
        # Whole-string ISO parse; older interpreters reject a trailing Z
        value = datetime.fromisoformat(value[:-1] + '+00:00' if value.endswith('Z') else value)
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Cannot read a date from {value!r}")


class MemStorage:
    """CRUD facade over one in-memory table per entity."""

    def __init__(self, session_threshold=500):
        self.session_cache = SimpleCache(threshold=session_threshold)

        self.users = EntityTable(User)
        self.schools = EntityTable(School)
        self.school_admins = EntityTable(SchoolAdmin)
        self.teachers = EntityTable(Teacher)
        self.parents = EntityTable(Parent)
        self.students = EntityTable(Student)
        self.classes = EntityTable(Class)
        self.subjects = EntityTable(Subject)
        self.class_subjects = EntityTable(ClassSubject)
        self.student_attendance = EntityTable(StudentAttendance)
        self.teacher_attendance = EntityTable(TeacherAttendance)
        self.lesson_plans = EntityTable(LessonPlan)
        self.assignments = EntityTable(Assignment)
        self.assignment_submissions = EntityTable(AssignmentSubmission)
        self.exams = EntityTable(Exam)
        self.exam_subjects = EntityTable(ExamSubject)
        self.marks = EntityTable(Mark)
        self.fee_structures = EntityTable(FeeStructure)
        self.fee_payments = EntityTable(FeePayment)
        self.bills = EntityTable(Bill)
        self.messages = EntityTable(Message)
        self.class_messages = EntityTable(ClassMessage)

    def init_app(self, app):
        """Register the store on a Flask app and point Flask-Session at its cache."""
        self.session_cache = SimpleCache(threshold=app.config.get('SESSION_CACHE_THRESHOLD', 500))
        app.config['SESSION_CACHELIB'] = self.session_cache
        app.extensions['storage'] = self

    @property
    def tables(self):
        return [value for value in vars(self).values() if isinstance(value, EntityTable)]

    def reset(self):
        """Drop every record and session and restart all id counters."""
        for table in self.tables:
            table.clear()
        self.session_cache.clear()
        logger.info("In-memory storage reset")

    def counts_for_school(self, school_id):
        """Record counts shown on the admin dashboard."""
        return {
            'teachers': len(self.get_teachers_by_school_id(school_id)),
            'students': len(self.get_students_by_school_id(school_id)),
            'classes': len(self.get_classes_by_school_id(school_id)),
            'subjects': len(self.get_subjects_by_school_id(school_id)),
            'exams': len(self.get_exams_by_school_id(school_id)),
            'bills': len(self.get_bills_by_school_id(school_id)),
            'messages': len(self.get_messages_by_school_id(school_id)),
        }

    # User operations
    def get_user(self, id):
        return self.users.get(id)

    def get_user_by_email(self, email):
        return self.users.find_by(email=email)

    def get_user_by_username(self, username):
        # Users sign in with their email address
        return self.get_user_by_email(username)

    def create_user(self, data):
        return self.users.insert(data, created_at=utcnow())

    def update_user(self, id, data):
        return self.users.update(id, data)

    def delete_user(self, id):
        return self.users.delete(id)

    # School operations
    def get_school(self, id):
        return self.schools.get(id)

    def get_schools(self):
        return self.schools.all()

    def create_school(self, data):
        return self.schools.insert(data, created_at=utcnow())

    def update_school(self, id, data):
        return self.schools.update(id, data)

    def delete_school(self, id):
        return self.schools.delete(id)

    # SchoolAdmin operations
    def get_school_admin(self, id):
        return self.school_admins.get(id)

    def get_school_admin_by_user_id(self, user_id):
        return self.school_admins.find_by(user_id=user_id)

    def get_school_admins_by_school_id(self, school_id):
        return self.school_admins.filter_by(school_id=school_id)

    def create_school_admin(self, data):
        return self.school_admins.insert(data)

    def update_school_admin(self, id, data):
        return self.school_admins.update(id, data)

    def delete_school_admin(self, id):
        return self.school_admins.delete(id)

    # Teacher operations
    def get_teacher(self, id):
        return self.teachers.get(id)

    def get_teacher_by_user_id(self, user_id):
        return self.teachers.find_by(user_id=user_id)

    def get_teachers_by_school_id(self, school_id):
        return self.teachers.filter_by(school_id=school_id)

    def create_teacher(self, data):
        return self.teachers.insert(data)

    def update_teacher(self, id, data):
        return self.teachers.update(id, data)

    def delete_teacher(self, id):
        return self.teachers.delete(id)

    # Parent operations
    def get_parent(self, id):
        return self.parents.get(id)

    def get_parent_by_user_id(self, user_id):
        return self.parents.find_by(user_id=user_id)

    def create_parent(self, data):
        return self.parents.insert(data)

    def update_parent(self, id, data):
        return self.parents.update(id, data)

    def delete_parent(self, id):
        return self.parents.delete(id)

    # Student operations
    def get_student(self, id):
        return self.students.get(id)

    def get_student_by_user_id(self, user_id):
        return self.students.find_by(user_id=user_id)

    def get_students_by_school_id(self, school_id):
        return self.students.filter_by(school_id=school_id)

    def get_students_by_class_id(self, class_id):
        return self.students.filter_by(class_id=class_id)

    def get_students_by_parent_id(self, parent_id):
        return self.students.filter_by(parent_id=parent_id)

    def create_student(self, data):
        return self.students.insert(data)

    def update_student(self, id, data):
        return self.students.update(id, data)

    def delete_student(self, id):
        return self.students.delete(id)

    # Class operations
    def get_class(self, id):
        return self.classes.get(id)

    def get_classes_by_school_id(self, school_id):
        return self.classes.filter_by(school_id=school_id)

    def create_class(self, data):
        return self.classes.insert(data)

    def update_class(self, id, data):
        return self.classes.update(id, data)

    def delete_class(self, id):
        return self.classes.delete(id)

    # Subject operations
    def get_subject(self, id):
        return self.subjects.get(id)

    def get_subjects_by_school_id(self, school_id):
        return self.subjects.filter_by(school_id=school_id)

    def create_subject(self, data):
        return self.subjects.insert(data)

    def update_subject(self, id, data):
        return self.subjects.update(id, data)

    def delete_subject(self, id):
        return self.subjects.delete(id)

    # ClassSubject operations
    def get_class_subject(self, id):
        return self.class_subjects.get(id)

    def get_class_subjects_by_class_id(self, class_id):
        return self.class_subjects.filter_by(class_id=class_id)

    def get_class_subjects_by_teacher_id(self, teacher_id):
        return self.class_subjects.filter_by(teacher_id=teacher_id)

    def create_class_subject(self, data):
        return self.class_subjects.insert(data)

    def update_class_subject(self, id, data):
        return self.class_subjects.update(id, data)

    def delete_class_subject(self, id):
        return self.class_subjects.delete(id)

    # StudentAttendance operations
    def get_student_attendance(self, id):
        return self.student_attendance.get(id)

    def get_student_attendance_by_student_id(self, student_id):
        return self.student_attendance.filter_by(student_id=student_id)

    def get_student_attendance_by_class_id(self, class_id, on_date):
        day = as_date(on_date)
        return self.student_attendance.filter(
            lambda row: row.class_id == class_id and as_date(row.date) == day
        )

    def create_student_attendance(self, data):
        return self.student_attendance.insert(data)

    def update_student_attendance(self, id, data):
        return self.student_attendance.update(id, data)

    def delete_student_attendance(self, id):
        return self.student_attendance.delete(id)

    # TeacherAttendance operations
    def get_teacher_attendance(self, id):
        return self.teacher_attendance.get(id)

    def get_teacher_attendance_by_teacher_id(self, teacher_id):
        return self.teacher_attendance.filter_by(teacher_id=teacher_id)

    def get_teacher_attendance_by_school_id(self, school_id, on_date):
        day = as_date(on_date)
        return self.teacher_attendance.filter(
            lambda row: row.school_id == school_id and as_date(row.date) == day
        )

    def create_teacher_attendance(self, data):
        return self.teacher_attendance.insert(data)

    def update_teacher_attendance(self, id, data):
        return self.teacher_attendance.update(id, data)

    def delete_teacher_attendance(self, id):
        return self.teacher_attendance.delete(id)

    # LessonPlan operations
    def get_lesson_plan(self, id):
        return self.lesson_plans.get(id)

    def get_lesson_plans_by_teacher_id(self, teacher_id):
        return self.lesson_plans.filter_by(teacher_id=teacher_id)

    def get_lesson_plans_by_class_id(self, class_id):
        return self.lesson_plans.filter_by(class_id=class_id)

    def create_lesson_plan(self, data):
        return self.lesson_plans.insert(data)

    def update_lesson_plan(self, id, data):
        return self.lesson_plans.update(id, data)

    def delete_lesson_plan(self, id):
        return self.lesson_plans.delete(id)

    # Assignment operations
    def get_assignment(self, id):
        return self.assignments.get(id)

    def get_assignments_by_teacher_id(self, teacher_id):
        return self.assignments.filter_by(teacher_id=teacher_id)

    def get_assignments_by_class_id(self, class_id):
        return self.assignments.filter_by(class_id=class_id)

    def create_assignment(self, data):
        return self.assignments.insert(data)

    def update_assignment(self, id, data):
        return self.assignments.update(id, data)

    def delete_assignment(self, id):
        return self.assignments.delete(id)

    # AssignmentSubmission operations
    def get_assignment_submission(self, id):
        return self.assignment_submissions.get(id)

    def get_assignment_submissions_by_assignment_id(self, assignment_id):
        return self.assignment_submissions.filter_by(assignment_id=assignment_id)

    def get_assignment_submissions_by_student_id(self, student_id):
        return self.assignment_submissions.filter_by(student_id=student_id)

    def create_assignment_submission(self, data):
        return self.assignment_submissions.insert(data, submission_date=utcnow())

    def update_assignment_submission(self, id, data):
        return self.assignment_submissions.update(id, data)

    def delete_assignment_submission(self, id):
        return self.assignment_submissions.delete(id)

    # Exam operations
    def get_exam(self, id):
        return self.exams.get(id)

    def get_exams_by_school_id(self, school_id):
        return self.exams.filter_by(school_id=school_id)

    def get_exams_by_class_id(self, class_id):
        return self.exams.filter_by(class_id=class_id)

    def create_exam(self, data):
        return self.exams.insert(data)

    def update_exam(self, id, data):
        return self.exams.update(id, data)

    def delete_exam(self, id):
        return self.exams.delete(id)

    # ExamSubject operations
    def get_exam_subject(self, id):
        return self.exam_subjects.get(id)

    def get_exam_subjects_by_exam_id(self, exam_id):
        return self.exam_subjects.filter_by(exam_id=exam_id)

    def create_exam_subject(self, data):
        return self.exam_subjects.insert(data)

    def update_exam_subject(self, id, data):
        return self.exam_subjects.update(id, data)

    def delete_exam_subject(self, id):
        return self.exam_subjects.delete(id)

    # Mark operations
    def get_mark(self, id):
        return self.marks.get(id)

    def get_marks_by_student_id(self, student_id):
        return self.marks.filter_by(student_id=student_id)

    def get_marks_by_exam_subject_id(self, exam_subject_id):
        return self.marks.filter_by(exam_subject_id=exam_subject_id)

    def create_mark(self, data):
        return self.marks.insert(data)

    def update_mark(self, id, data):
        return self.marks.update(id, data)

    def delete_mark(self, id):
        return self.marks.delete(id)

    # FeeStructure operations
    def get_fee_structure(self, id):
        return self.fee_structures.get(id)

    def get_fee_structures_by_school_id(self, school_id):
        return self.fee_structures.filter_by(school_id=school_id)

    def get_fee_structures_by_class_id(self, class_id):
        return self.fee_structures.filter_by(class_id=class_id)

    def create_fee_structure(self, data):
        return self.fee_structures.insert(data)

    def update_fee_structure(self, id, data):
        return self.fee_structures.update(id, data)

    def delete_fee_structure(self, id):
        return self.fee_structures.delete(id)

    # FeePayment operations
    def get_fee_payment(self, id):
        return self.fee_payments.get(id)

    def get_fee_payments_by_student_id(self, student_id):
        return self.fee_payments.filter_by(student_id=student_id)

    def create_fee_payment(self, data):
        return self.fee_payments.insert(data)

    def update_fee_payment(self, id, data):
        return self.fee_payments.update(id, data)

    def delete_fee_payment(self, id):
        return self.fee_payments.delete(id)

    # Bill operations
    def get_bill(self, id):
        return self.bills.get(id)

    def get_bills_by_school_id(self, school_id):
        return self.bills.filter_by(school_id=school_id)

    def create_bill(self, data):
        return self.bills.insert(data)

    def update_bill(self, id, data):
        return self.bills.update(id, data)

    def delete_bill(self, id):
        return self.bills.delete(id)

    # Message operations
    def get_message(self, id):
        return self.messages.get(id)

    def get_messages_by_sender_id(self, sender_id):
        return self.messages.filter_by(sender_id=sender_id)

    def get_messages_by_school_id(self, school_id):
        return self.messages.filter_by(school_id=school_id)

    def get_messages_by_receiver_id(self, receiver_id, receiver_role):
        """Messages addressed to this user in this role, plus every broadcast."""
        return self.messages.filter(
            lambda m: (m.receiver_id == receiver_id and m.receiver_role == receiver_role)
            or m.receiver_role == BROADCAST_ROLE
        )

    def create_message(self, data):
        return self.messages.insert(data, created_at=utcnow())

    def update_message(self, id, data):
        return self.messages.update(id, data)

    def delete_message(self, id):
        return self.messages.delete(id)

    # ClassMessage operations
    def get_class_message(self, id):
        return self.class_messages.get(id)

    def get_class_messages_by_class_id(self, class_id):
        return self.class_messages.filter_by(class_id=class_id)

    def create_class_message(self, data):
        return self.class_messages.insert(data, created_at=utcnow())

    def update_class_message(self, id, data):
        return self.class_messages.update(id, data)

    def delete_class_message(self, id):
        return self.class_messages.delete(id)
