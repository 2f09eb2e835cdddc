"""
API Routes Package

Every JSON route lives under one parent blueprint, split into modules by
functional area. The parent is mounted at /api by the app factory.
"""

from flask import Blueprint

api_blueprint = Blueprint('api', __name__)

from . import (
    auth,
    administration,
    staff,
    students,
    classes,
    coursework,
    exams,
    finance,
    communications
)

api_blueprint.register_blueprint(auth.bp, url_prefix='')
api_blueprint.register_blueprint(administration.bp, url_prefix='')
api_blueprint.register_blueprint(staff.bp, url_prefix='')
api_blueprint.register_blueprint(students.bp, url_prefix='')
api_blueprint.register_blueprint(classes.bp, url_prefix='')
api_blueprint.register_blueprint(coursework.bp, url_prefix='')
api_blueprint.register_blueprint(exams.bp, url_prefix='')
api_blueprint.register_blueprint(finance.bp, url_prefix='')
api_blueprint.register_blueprint(communications.bp, url_prefix='')
