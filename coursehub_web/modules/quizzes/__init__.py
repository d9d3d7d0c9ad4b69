# File: coursehub_web/modules/quizzes/__init__.py
from flask import Blueprint

quizzes_bp = Blueprint('quizzes', __name__)


def init_module(app):
    from . import routes  # noqa: F401
