# File: coursehub_web/config.py
# Application settings, read from the environment (.env is loaded by python-dotenv).

import os

from dotenv import load_dotenv

load_dotenv()


class Config:
    """Application configuration for the CourseHub web front-end."""

    SECRET_KEY = os.environ.get('SECRET_KEY')
    if not SECRET_KEY:
        # Fallback for development, though env is preferred
        SECRET_KEY = 'dev-secret-key-replace-in-production'

    # Remote REST API
    COURSEHUB_API_URL = os.environ.get('COURSEHUB_API_URL', 'http://localhost:8080/api')
    COURSEHUB_API_TIMEOUT = float(os.environ.get('COURSEHUB_API_TIMEOUT', '10'))

    # Session cookie holds the bearer credential, keep it away from scripts
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_DIR = os.environ.get('LOG_DIR')

    HOME_COURSE_LIMIT = 6
    HOME_QUIZ_COURSE_LIMIT = 3
    HOME_QUIZ_LIMIT = 6
    VIEW_TASK_WORKERS = int(os.environ.get('VIEW_TASK_WORKERS', '4'))
