# File: coursehub_web/modules/auth/__init__.py
from flask import Blueprint

auth_bp = Blueprint('auth', __name__)


def init_module(app):
    from .interface import bind_session_store
    from . import routes  # noqa: F401

    bind_session_store(app)
