"""Application factory for the CourseHub web front-end."""

from __future__ import annotations

from flask import Flask

from .config import Config
from .core.bootstrap import (
    check_route_requirements,
    configure_logging,
    register_blueprints,
    register_context_processors,
    register_extensions,
)
from .core.error_handlers import register_error_handlers

__all__ = ["create_app"]


def create_app(config_class: type[Config] = Config) -> Flask:
    """Create and configure a Flask application instance."""

    app = Flask(__name__)
    app.config.from_object(config_class)

    configure_logging(app)
    register_extensions(app)
    register_error_handlers(app)
    register_context_processors(app)
    register_blueprints(app)
    check_route_requirements(app)

    return app
