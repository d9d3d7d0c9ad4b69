"""Bootstrap helpers for configuring the Flask application."""

from __future__ import annotations

from typing import Any, Dict

from flask import Flask

from ..extensions import csrf_protect, init_http_session, login_manager
from ..models import Role
from ..utils.view_tasks import cancel_request_tasks
from .logging_config import setup_logging
from .module_registry import register_default_modules


def configure_logging(app: Flask) -> None:
    """Configure package logging from LOG_LEVEL / LOG_DIR."""

    setup_logging(
        app,
        log_level=app.config.get("LOG_LEVEL", "INFO"),
        log_dir=app.config.get("LOG_DIR"),
    )
    app.logger.info("Flask app logger configured successfully.")


def register_extensions(app: Flask) -> None:
    """Initialize shared extensions with the Flask app instance."""

    login_manager.init_app(app)
    csrf_protect.init_app(app)
    init_http_session(app)
    app.teardown_request(cancel_request_tasks)


def register_context_processors(app: Flask) -> None:
    """Register global template context processors."""

    from ..modules.access_control.logics.policies import capability_map
    from ..modules.auth.interface import get_session_store

    # Flask-Login injects current_user itself.
    @app.context_processor
    def inject_capabilities() -> Dict[str, Any]:
        return {
            "capabilities": capability_map(get_session_store().current()),
            "Role": Role,
        }


def register_blueprints(app: Flask) -> None:
    """Register all default blueprints with the app."""

    register_default_modules(app)


def check_route_requirements(app: Flask) -> None:
    """Refuse to start when a restricted view does not admit ADMIN."""

    from ..modules.access_control.decorators import ROUTE_REQUIREMENTS
    from ..modules.access_control.logics.policies import validate_route_table

    validate_route_table(ROUTE_REQUIREMENTS.values())
    app.logger.debug("Checked %d protected views.", len(ROUTE_REQUIREMENTS))
