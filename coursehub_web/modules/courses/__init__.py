# File: coursehub_web/modules/courses/__init__.py
from flask import Blueprint

courses_bp = Blueprint('courses', __name__)


def init_module(app):
    from . import routes  # noqa: F401
