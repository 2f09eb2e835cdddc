"""
Flask-WTF forms that validate JSON payloads for the API.

Create requests validate the whole form; updates only validate the fields
the client sent (see api_routes.utils.load_payload).
"""

from flask_wtf import FlaskForm
from wtforms import BooleanField, DateField, FloatField, IntegerField, SelectField, StringField, TextAreaField
from wtforms.validators import Email, InputRequired, Length, NumberRange, Optional

from models import BROADCAST_ROLE, ROLES

GENDERS = ['male', 'female', 'other']
ATTENDANCE_STATUSES = ['present', 'absent', 'late', 'excused', 'leave']


class ApiForm(FlaskForm):
    """Base form for JSON payloads; CSRF is checked per request in create_app, not per form."""

    class Meta:
        csrf = False


def _choices(values):
    return [(v, v) for v in values]


class RegisterForm(ApiForm):
    email = StringField('Email', validators=[InputRequired(), Email()])
    password = StringField('Password', validators=[InputRequired(), Length(min=6)])
    full_name = StringField('Full name', validators=[InputRequired(), Length(min=2, max=200)])
    role = SelectField('Role', choices=_choices(ROLES), default='student')
    phone_number = StringField('Phone number', validators=[Optional(), Length(max=30)])


class LoginForm(ApiForm):
    # "username" is accepted as an alias for email
    email = StringField('Email', validators=[Optional()])
    username = StringField('Username', validators=[Optional()])
    password = StringField('Password', validators=[InputRequired()])


class UserForm(ApiForm):
    email = StringField('Email', validators=[InputRequired(), Email()])
    full_name = StringField('Full name', validators=[InputRequired(), Length(min=2, max=200)])
    role = SelectField('Role', choices=_choices(ROLES))
    phone_number = StringField('Phone number', validators=[Optional(), Length(max=30)])
    status = StringField('Status', validators=[Optional()])


class StudentRegistrationForm(ApiForm):
    """Creates a student login and profile in one request."""
    full_name = StringField('Full name', validators=[InputRequired(), Length(min=2, max=200)])
    student_email = StringField('Email', validators=[InputRequired(), Email()])
    password = StringField('Password', validators=[InputRequired(), Length(min=6)])
    school_id = IntegerField('School', validators=[InputRequired()])
    class_id = IntegerField('Class', validators=[Optional()])
    parent_id = IntegerField('Parent', validators=[Optional()])
    date_of_birth = DateField('Date of birth', validators=[Optional()])
    gender = SelectField('Gender', choices=_choices(GENDERS), validators=[Optional()])
    admission_date = DateField('Admission date', validators=[Optional()])
    parent_contact = StringField('Parent contact', validators=[Optional(), Length(min=10, max=30)])
    address = TextAreaField('Address', validators=[Optional()])


class SchoolForm(ApiForm):
    name = StringField('Name', validators=[InputRequired(), Length(min=2, max=200)])
    address = TextAreaField('Address', validators=[Optional()])
    contact_email = StringField('Contact email', validators=[Optional(), Email()])
    contact_phone = StringField('Contact phone', validators=[Optional(), Length(max=30)])
    logo_url = StringField('Logo URL', validators=[Optional()])


class SchoolAdminForm(ApiForm):
    user_id = IntegerField('User', validators=[InputRequired()])
    school_id = IntegerField('School', validators=[InputRequired()])


class TeacherForm(ApiForm):
    user_id = IntegerField('User', validators=[InputRequired()])
    school_id = IntegerField('School', validators=[InputRequired()])
    subject_specialization = StringField('Subject', validators=[Optional(), Length(max=100)])
    joining_date = DateField('Joining date', validators=[Optional()])
    status = StringField('Status', validators=[Optional()])


class ParentForm(ApiForm):
    user_id = IntegerField('User', validators=[InputRequired()])
    phone_number = StringField('Phone number', validators=[Optional(), Length(max=30)])
    address = TextAreaField('Address', validators=[Optional()])


class StudentForm(ApiForm):
    user_id = IntegerField('User', validators=[InputRequired()])
    school_id = IntegerField('School', validators=[InputRequired()])
    class_id = IntegerField('Class', validators=[Optional()])
    parent_id = IntegerField('Parent', validators=[Optional()])
    date_of_birth = DateField('Date of birth', validators=[Optional()])
    gender = SelectField('Gender', choices=_choices(GENDERS), validators=[Optional()])
    admission_date = DateField('Admission date', validators=[Optional()])
    parent_contact = StringField('Parent contact', validators=[Optional(), Length(max=30)])
    address = TextAreaField('Address', validators=[Optional()])
    status = StringField('Status', validators=[Optional()])


class ClassForm(ApiForm):
    school_id = IntegerField('School', validators=[InputRequired()])
    grade = StringField('Grade', validators=[InputRequired(), Length(min=1, max=20)])
    section = StringField('Section', validators=[InputRequired(), Length(min=1, max=20)])
    name = StringField('Name', validators=[Optional(), Length(max=100)])
    class_teacher_id = IntegerField('Class teacher', validators=[Optional()])


class SubjectForm(ApiForm):
    school_id = IntegerField('School', validators=[InputRequired()])
    name = StringField('Name', validators=[InputRequired(), Length(min=2, max=100)])
    description = TextAreaField('Description', validators=[Optional()])


class ClassSubjectForm(ApiForm):
    class_id = IntegerField('Class', validators=[InputRequired()])
    subject_id = IntegerField('Subject', validators=[InputRequired()])
    teacher_id = IntegerField('Teacher', validators=[Optional()])


class StudentAttendanceForm(ApiForm):
    student_id = IntegerField('Student', validators=[InputRequired()])
    class_id = IntegerField('Class', validators=[InputRequired()])
    date = DateField('Date', validators=[InputRequired()])
    status = SelectField('Status', choices=_choices(ATTENDANCE_STATUSES), validators=[InputRequired()])
    marked_by = IntegerField('Marked by', validators=[Optional()])


class TeacherAttendanceForm(ApiForm):
    teacher_id = IntegerField('Teacher', validators=[InputRequired()])
    school_id = IntegerField('School', validators=[InputRequired()])
    date = DateField('Date', validators=[InputRequired()])
    status = SelectField('Status', choices=_choices(ATTENDANCE_STATUSES), validators=[InputRequired()])


class LessonPlanForm(ApiForm):
    teacher_id = IntegerField('Teacher', validators=[InputRequired()])
    class_id = IntegerField('Class', validators=[InputRequired()])
    subject_id = IntegerField('Subject', validators=[InputRequired()])
    title = StringField('Title', validators=[InputRequired(), Length(max=200)])
    description = TextAreaField('Description', validators=[Optional()])
    plan_date = DateField('Date', validators=[Optional()])


class AssignmentForm(ApiForm):
    teacher_id = IntegerField('Teacher', validators=[InputRequired()])
    class_id = IntegerField('Class', validators=[InputRequired()])
    subject_id = IntegerField('Subject', validators=[InputRequired()])
    title = StringField('Title', validators=[InputRequired(), Length(max=200)])
    description = TextAreaField('Description', validators=[Optional()])
    due_date = DateField('Due date', validators=[Optional()])


class AssignmentSubmissionForm(ApiForm):
    assignment_id = IntegerField('Assignment', validators=[InputRequired()])
    student_id = IntegerField('Student', validators=[InputRequired()])
    content = TextAreaField('Content', validators=[Optional()])
    file_url = StringField('File URL', validators=[Optional()])
    marks = FloatField('Marks', validators=[Optional(), NumberRange(min=0)])
    feedback = TextAreaField('Feedback', validators=[Optional()])


class ExamForm(ApiForm):
    school_id = IntegerField('School', validators=[InputRequired()])
    class_id = IntegerField('Class', validators=[InputRequired()])
    name = StringField('Name', validators=[InputRequired(), Length(max=100)])
    start_date = DateField('Start date', validators=[Optional()])
    end_date = DateField('End date', validators=[Optional()])


class ExamSubjectForm(ApiForm):
    exam_id = IntegerField('Exam', validators=[InputRequired()])
    subject_id = IntegerField('Subject', validators=[InputRequired()])
    exam_date = DateField('Exam date', validators=[Optional()])
    max_marks = FloatField('Max marks', validators=[Optional(), NumberRange(min=0)])
    passing_marks = FloatField('Passing marks', validators=[Optional(), NumberRange(min=0)])


class MarkForm(ApiForm):
    student_id = IntegerField('Student', validators=[InputRequired()])
    exam_subject_id = IntegerField('Exam subject', validators=[InputRequired()])
    marks_obtained = FloatField('Marks obtained', validators=[InputRequired(), NumberRange(min=0)])
    remarks = TextAreaField('Remarks', validators=[Optional()])


class FeeStructureForm(ApiForm):
    school_id = IntegerField('School', validators=[InputRequired()])
    class_id = IntegerField('Class', validators=[InputRequired()])
    fee_type = StringField('Fee type', validators=[InputRequired(), Length(max=50)])
    amount = FloatField('Amount', validators=[InputRequired(), NumberRange(min=0)])
    frequency = SelectField('Frequency', choices=_choices(['monthly', 'termly', 'annual', 'one_time']),
                            validators=[Optional()])
    due_date = DateField('Due date', validators=[Optional()])


class FeePaymentForm(ApiForm):
    student_id = IntegerField('Student', validators=[InputRequired()])
    fee_structure_id = IntegerField('Fee structure', validators=[InputRequired()])
    amount_paid = FloatField('Amount paid', validators=[InputRequired(), NumberRange(min=0)])
    payment_date = DateField('Payment date', validators=[Optional()])
    payment_method = StringField('Payment method', validators=[Optional(), Length(max=30)])
    receipt_number = StringField('Receipt number', validators=[Optional(), Length(max=50)])
    status = StringField('Status', validators=[Optional()])


class BillForm(ApiForm):
    school_id = IntegerField('School', validators=[InputRequired()])
    title = StringField('Title', validators=[InputRequired(), Length(max=200)])
    amount = FloatField('Amount', validators=[InputRequired(), NumberRange(min=0)])
    category = StringField('Category', validators=[Optional(), Length(max=50)])
    bill_date = DateField('Bill date', validators=[Optional()])
    status = StringField('Status', validators=[Optional()])
    description = TextAreaField('Description', validators=[Optional()])


class MessageForm(ApiForm):
    school_id = IntegerField('School', validators=[InputRequired()])
    receiver_role = SelectField('Receiver role', choices=_choices(ROLES + (BROADCAST_ROLE,)),
                                validators=[InputRequired()])
    content = TextAreaField('Content', validators=[InputRequired(), Length(min=1, max=5000)])
    receiver_id = IntegerField('Receiver', validators=[Optional()])
    message_type = StringField('Type', validators=[Optional(), Length(max=30)])
    is_read = BooleanField('Read')


class ClassMessageForm(ApiForm):
    class_id = IntegerField('Class', validators=[InputRequired()])
    content = TextAreaField('Content', validators=[InputRequired(), Length(min=1, max=5000)])
