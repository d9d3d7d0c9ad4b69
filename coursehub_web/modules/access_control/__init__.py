from flask import Blueprint

blueprint = Blueprint('access_control', __name__)


def init_module(app):
    """
    Initialize the Access Control module.
    1. Attach routes.
    2. Register Error Handlers.
    3. Connect Signals/Events.
    """
    from . import routes  # noqa: F401
    from .decorators import handle_access_control_error
    from .events import register_events
    from .exceptions import AccessControlError

    app.register_error_handler(AccessControlError, handle_access_control_error)
    register_events()

    app.logger.info("Access Control Module Initialized.")
