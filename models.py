"""
Record types for every entity held by the in-memory store.

Records are immutable; storage replaces a record with a new instance when it
is updated. Field names match the JSON payloads the dashboards send.
"""

from dataclasses import dataclass, fields, asdict
from datetime import date, datetime
from typing import Optional

from flask_login import UserMixin

ROLES = ('super_admin', 'school_admin', 'teacher', 'student', 'parent')
ADMIN_ROLES = ('super_admin', 'school_admin')
STAFF_ROLES = ADMIN_ROLES + ('teacher',)

# Message.receiver_role value that addresses every user
BROADCAST_ROLE = 'all'


class Record:
    """Common helpers for entity records."""

    # Set by storage, never by callers
    auto_fields = ()
    # Left out of serialized output
    hidden_fields = ()

    @classmethod
    def field_names(cls):
        return [f.name for f in fields(cls)]

    @classmethod
    def writable_fields(cls):
        return [name for name in cls.field_names() if name != 'id' and name not in cls.auto_fields]

    def to_dict(self):
        data = asdict(self)
        for name in self.hidden_fields:
            data.pop(name, None)
        return data


@dataclass(frozen=True)
class User(Record, UserMixin):
    """
    Login account for every kind of user (admins, teachers, students, parents).
    `password` holds a Werkzeug password hash, never the plain password.
    """
    id: int
    email: str
    password: str
    full_name: str
    role: str
    phone_number: Optional[str] = None
    status: str = 'active'
    created_at: Optional[datetime] = None

    auto_fields = ('created_at',)
    hidden_fields = ('password',)

    @property
    def is_active(self):
        return self.status == 'active'

    @property
    def is_admin(self):
        return self.role in ADMIN_ROLES

    @property
    def is_staff(self):
        return self.role in STAFF_ROLES

    def __repr__(self):
        return f"User('{self.email}', '{self.role}')"


@dataclass(frozen=True)
class School(Record):
    id: int
    name: str
    address: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    logo_url: Optional[str] = None
    created_at: Optional[datetime] = None

    auto_fields = ('created_at',)


@dataclass(frozen=True)
class SchoolAdmin(Record):
    """Links an admin user to the school they manage."""
    id: int
    user_id: int
    school_id: int


@dataclass(frozen=True)
class Teacher(Record):
    id: int
    user_id: int
    school_id: int
    subject_specialization: Optional[str] = None
    joining_date: Optional[date] = None
    status: str = 'active'


@dataclass(frozen=True)
class Parent(Record):
    id: int
    user_id: int
    phone_number: Optional[str] = None
    address: Optional[str] = None


@dataclass(frozen=True)
class Student(Record):
    id: int
    user_id: int
    school_id: int
    class_id: Optional[int] = None
    parent_id: Optional[int] = None
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None  # male, female, other
    admission_date: Optional[date] = None
    parent_contact: Optional[str] = None
    address: Optional[str] = None
    status: str = 'active'


@dataclass(frozen=True)
class Class(Record):
    """A grade/section pair, e.g. grade "8" section "A"."""
    id: int
    school_id: int
    grade: str
    section: str
    name: Optional[str] = None
    class_teacher_id: Optional[int] = None

    @property
    def display_name(self):
        return self.name or f"Class {self.grade}{self.section}"


@dataclass(frozen=True)
class Subject(Record):
    id: int
    school_id: int
    name: str
    description: Optional[str] = None


@dataclass(frozen=True)
class ClassSubject(Record):
    """A subject taught in a class, optionally by a specific teacher."""
    id: int
    class_id: int
    subject_id: int
    teacher_id: Optional[int] = None


@dataclass(frozen=True)
class StudentAttendance(Record):
    id: int
    student_id: int
    class_id: int
    date: date
    status: str  # present, absent, late, excused
    marked_by: Optional[int] = None


@dataclass(frozen=True)
class TeacherAttendance(Record):
    id: int
    teacher_id: int
    school_id: int
    date: date
    status: str


@dataclass(frozen=True)
class LessonPlan(Record):
    id: int
    teacher_id: int
    class_id: int
    subject_id: int
    title: str
    description: Optional[str] = None
    plan_date: Optional[date] = None


@dataclass(frozen=True)
class Assignment(Record):
    id: int
    teacher_id: int
    class_id: int
    subject_id: int
    title: str
    description: Optional[str] = None
    due_date: Optional[date] = None


@dataclass(frozen=True)
class AssignmentSubmission(Record):
    id: int
    assignment_id: int
    student_id: int
    content: Optional[str] = None
    file_url: Optional[str] = None
    marks: Optional[float] = None
    feedback: Optional[str] = None
    submission_date: Optional[datetime] = None

    auto_fields = ('submission_date',)


@dataclass(frozen=True)
class Exam(Record):
    id: int
    school_id: int
    class_id: int
    name: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None


@dataclass(frozen=True)
class ExamSubject(Record):
    """One paper of an exam: the subject, when it is sat and how it is scored."""
    id: int
    exam_id: int
    subject_id: int
    exam_date: Optional[date] = None
    max_marks: float = 100
    passing_marks: Optional[float] = None


@dataclass(frozen=True)
class Mark(Record):
    id: int
    student_id: int
    exam_subject_id: int
    marks_obtained: float
    remarks: Optional[str] = None


@dataclass(frozen=True)
class FeeStructure(Record):
    id: int
    school_id: int
    class_id: int
    fee_type: str
    amount: float
    frequency: Optional[str] = None  # monthly, termly, annual, one_time
    due_date: Optional[date] = None


@dataclass(frozen=True)
class FeePayment(Record):
    id: int
    student_id: int
    fee_structure_id: int
    amount_paid: float
    payment_date: Optional[date] = None
    payment_method: Optional[str] = None
    receipt_number: Optional[str] = None
    status: str = 'paid'


@dataclass(frozen=True)
class Bill(Record):
    """A school expense such as utilities or supplies."""
    id: int
    school_id: int
    title: str
    amount: float
    category: Optional[str] = None
    bill_date: Optional[date] = None
    status: str = 'pending'
    description: Optional[str] = None


@dataclass(frozen=True)
class Message(Record):
    """
    A message sent within a school. `receiver_role` narrows the audience to a
    role; with a `receiver_id` it targets one user, and BROADCAST_ROLE reaches
    everyone.
    """
    id: int
    school_id: int
    sender_id: int
    receiver_role: str
    content: str
    receiver_id: Optional[int] = None
    message_type: str = 'general'
    is_read: bool = False
    created_at: Optional[datetime] = None

    auto_fields = ('created_at',)


@dataclass(frozen=True)
class ClassMessage(Record):
    id: int
    class_id: int
    sender_id: int
    content: str
    created_at: Optional[datetime] = None

    auto_fields = ('created_at',)
