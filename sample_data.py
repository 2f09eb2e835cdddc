"""
Sample Data Manager

Creates the demo school the dashboards show out of the box: one school with
an admin, a few teachers, classes 8A to 10B, core subjects, a parent and
their children. The app factory runs it at startup when SEED_SAMPLE_DATA
is set.
"""

import logging
from datetime import date, timedelta

from werkzeug.security import generate_password_hash

logger = logging.getLogger(__name__)

DEMO_PASSWORD = 'password123'

GRADES = ('8', '9', '10')
SECTIONS = ('A', 'B')
SUBJECTS = [
    ('Mathematics', 'Algebra, geometry and statistics'),
    ('English', 'Reading, writing and literature'),
    ('Science', 'Physics, chemistry and biology'),
    ('History', 'World and national history'),
]
TEACHERS = [
    ('sarah.johnson@demo-school.edu', 'Sarah Johnson', 'Mathematics'),
    ('david.lee@demo-school.edu', 'David Lee', 'English'),
    ('maria.garcia@demo-school.edu', 'Maria Garcia', 'Science'),
]
STUDENTS = [
    ('emma.wilson@demo-school.edu', 'Emma Wilson', 'female', date(2010, 4, 12)),
    ('liam.wilson@demo-school.edu', 'Liam Wilson', 'male', date(2011, 9, 3)),
]


class SampleDataManager:
    """Builds the demo school inside a MemStorage instance."""

    def __init__(self, storage):
        self.storage = storage
        self.password_hash = generate_password_hash(DEMO_PASSWORD)

    def _user(self, email, full_name, role, **extra):
        existing = self.storage.get_user_by_email(email)
        if existing:
            return existing
        return self.storage.create_user(dict(
            email=email, password=self.password_hash, full_name=full_name, role=role, **extra
        ))

    def create_school(self):
        school = self.storage.get_school(1)
        if school:
            logger.info(f"Demo school already exists: {school.name}")
            return school
        school = self.storage.create_school({
            'name': 'Demo Public School',
            'address': '12 Learning Lane',
            'contact_email': 'office@demo-school.edu',
            'contact_phone': '555-0100',
        })
        logger.info(f"Created school: {school.name}")
        return school

    def create_admin(self, school):
        user = self._user('admin@demo-school.edu', 'School Administrator', 'school_admin')
        if not self.storage.get_school_admin_by_user_id(user.id):
            self.storage.create_school_admin({'user_id': user.id, 'school_id': school.id})
        return user

    def create_teachers(self, school):
        teachers = []
        joining = date.today() - timedelta(days=365)
        for email, full_name, specialization in TEACHERS:
            user = self._user(email, full_name, 'teacher')
            teacher = self.storage.get_teacher_by_user_id(user.id) or self.storage.create_teacher({
                'user_id': user.id,
                'school_id': school.id,
                'subject_specialization': specialization,
                'joining_date': joining,
            })
            teachers.append(teacher)
        logger.info(f"Created {len(teachers)} teachers")
        return teachers

    def create_classes(self, school, teachers):
        classes = []
        for grade in GRADES:
            for section in SECTIONS:
                class_teacher = teachers[len(classes) % len(teachers)]
                classes.append(self.storage.create_class({
                    'school_id': school.id,
                    'grade': grade,
                    'section': section,
                    'name': f"Class {grade}{section}",
                    'class_teacher_id': class_teacher.id,
                }))
        logger.info(f"Created {len(classes)} classes")
        return classes

    def create_subjects(self, school):
        subjects = [
            self.storage.create_subject({'school_id': school.id, 'name': name, 'description': description})
            for name, description in SUBJECTS
        ]
        logger.info(f"Created {len(subjects)} subjects")
        return subjects

    def assign_subjects(self, classes, subjects, teachers):
        by_specialization = {t.subject_specialization: t for t in teachers}
        for class_obj in classes:
            for subject in subjects:
                teacher = by_specialization.get(subject.name)
                self.storage.create_class_subject({
                    'class_id': class_obj.id,
                    'subject_id': subject.id,
                    'teacher_id': teacher.id if teacher else None,
                })

    def create_family(self, school, class_obj):
        parent_user = self._user('robert.wilson@example.com', 'Robert Wilson', 'parent',
                                 phone_number='555-0142')
        parent = self.storage.get_parent_by_user_id(parent_user.id) or self.storage.create_parent({
            'user_id': parent_user.id,
            'phone_number': '555-0142',
            'address': '7 Maple Street',
        })

        students = []
        for email, full_name, gender, born in STUDENTS:
            user = self._user(email, full_name, 'student')
            student = self.storage.get_student_by_user_id(user.id) or self.storage.create_student({
                'user_id': user.id,
                'school_id': school.id,
                'class_id': class_obj.id,
                'parent_id': parent.id,
                'date_of_birth': born,
                'gender': gender,
                'admission_date': date(date.today().year, 1, 10),
                'parent_contact': parent.phone_number,
                'address': parent.address,
            })
            students.append(student)
        logger.info(f"Created parent {parent.id} with {len(students)} students")
        return parent, students

    def create_all(self):
        """Create the full demo school. Safe to call on a store that already has it."""
        existing = self.storage.get_school(1)
        school = self.create_school()
        self.create_admin(school)
        if existing and self.storage.get_classes_by_school_id(school.id):
            return school

        teachers = self.create_teachers(school)
        classes = self.create_classes(school, teachers)
        subjects = self.create_subjects(school)
        self.assign_subjects(classes, subjects, teachers)
        self.create_family(school, classes[0])
        logger.info("Sample data created successfully")
        return school


def seed_sample_data(storage):
    return SampleDataManager(storage).create_all()
