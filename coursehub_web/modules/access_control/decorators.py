from functools import wraps
from typing import Dict

from flask import current_app, flash, jsonify, redirect, request, url_for

from coursehub_web.core.signals import access_denied
from coursehub_web.extensions import login_manager
from coursehub_web.models import Role
from coursehub_web.modules.auth.interface import get_session_store
from .exceptions import AccessControlError, AccessDeniedError
from .logics.guard import RedirectToForbidden, RedirectToLogin, guard
from .logics.policies import CapabilityRequirement

# Requirement declared by every protected view, keyed by "<module>.<function>".
ROUTE_REQUIREMENTS: Dict[str, CapabilityRequirement] = {}


def current_target() -> str:
    """Path plus query string of the current request."""
    target = request.full_path
    return target[:-1] if target.endswith('?') else target


def protected_view(*roles: Role):
    """
    Route decorator gating a view behind the route guard.
    No roles means any signed-in user.
    """
    requirement = CapabilityRequirement.of(*roles)

    def decorator(f):
        ROUTE_REQUIREMENTS[f"{f.__module__}.{f.__name__}"] = requirement

        @wraps(f)
        def decorated_function(*args, **kwargs):
            target = current_target()
            session = get_session_store().current()
            outcome = guard(target, requirement, session)

            if isinstance(outcome, RedirectToLogin):
                _notify_denied(target, 'unauthenticated', session)
                if request.path.startswith('/api/'):
                    return jsonify({"success": False, "message": "Authentication required"}), 401
                flash(login_manager.login_message, login_manager.login_message_category)
                return redirect(url_for(login_manager.login_view, next=outcome.remembered_target))

            if isinstance(outcome, RedirectToForbidden):
                _notify_denied(target, 'forbidden', session)
                return forbidden_response()

            return f(*args, **kwargs)
        return decorated_function
    return decorator


def ensure_allowed(allowed: bool):
    """Raise AccessDeniedError for resource-level checks (ownership, quiz availability)."""
    if not allowed:
        raise AccessDeniedError(current_target())


def forbidden_response():
    if request.path.startswith('/api/'):
        return jsonify({"success": False, "message": "Forbidden"}), 403
    return redirect(url_for('access_control.unauthorized'))


def _notify_denied(target, decision, session):
    current_app.logger.info(
        "Navigation to %s blocked (%s) for role %s",
        target, decision, session.role.value if session.role else 'anonymous'
    )
    access_denied.send(
        current_app._get_current_object(),
        target=target,
        decision=decision,
        role=session.role
    )


def handle_access_control_error(error: AccessControlError):
    """
    Standard error handler for access control exceptions.
    JSON for API calls, otherwise the forbidden page.
    """
    if isinstance(error, AccessDeniedError):
        session = get_session_store().current()
        _notify_denied(error.target, 'forbidden', session)
    return forbidden_response()
