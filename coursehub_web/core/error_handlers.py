"""
Error Handlers for CourseHub

Provides:
- Custom exception classes for remote API failures
- Consistent error response format
- Flask error handlers
"""

from typing import Any, Dict, Optional

from flask import current_app, flash, jsonify, redirect, render_template, request, url_for

from ..extensions import login_manager


class CourseHubError(Exception):
    """Base exception class for CourseHub."""

    def __init__(
        self,
        message: str,
        code: str = 'UNKNOWN_ERROR',
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert error to dictionary for JSON response."""
        return {
            'success': False,
            'message': self.message,
            'code': self.code,
            'details': self.details
        }


class ApiError(CourseHubError):
    """Any failed call to the remote API."""


class ApiTransportError(ApiError):
    """The API could not be reached or answered with something unreadable."""

    def __init__(self, message: str = 'The server is unreachable. Please try again later.'):
        super().__init__(message=message, code='TRANSPORT_ERROR', status_code=502)


class ApiRequestError(ApiError):
    """The API understood the request and rejected it (404, 409, 400...)."""

    def __init__(self, message: str = 'The request was rejected by the server.', status_code: int = 400,
                 details: Dict = None):
        super().__init__(
            message=message,
            code='REQUEST_REJECTED',
            status_code=status_code,
            details=details
        )

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class AuthenticationRejectedError(CourseHubError):
    """The API no longer accepts the stored credential.

    Not an ApiError: views never handle it, the global handler does.
    """

    def __init__(self, message: str = 'Your session has expired. Please sign in again.'):
        super().__init__(message=message, code='AUTH_REJECTED', status_code=401)


def error_response(
    message: str,
    code: str = 'ERROR',
    status_code: int = 400,
    details: Dict = None
) -> tuple:
    """Create a standardized error response."""
    response = {
        'success': False,
        'message': message,
        'code': code
    }
    if details:
        response['details'] = details

    return jsonify(response), status_code


def _wants_json() -> bool:
    return request.path.startswith('/api/')


def register_error_handlers(app):
    """Register error handlers with Flask app."""

    @app.errorhandler(AuthenticationRejectedError)
    def handle_authentication_rejected(error):
        current_app.logger.info("Credential rejected on %s, forcing re-authentication.", request.path)
        if _wants_json():
            return jsonify(error.to_dict()), error.status_code
        flash(error.message, 'warning')
        return redirect(url_for(login_manager.login_view))

    @app.errorhandler(CourseHubError)
    def handle_coursehub_error(error):
        current_app.logger.error(f"{error.code}: {error.message}")
        if _wants_json():
            return jsonify(error.to_dict()), error.status_code
        return render_template('errors/error.html', message=error.message), error.status_code

    @app.errorhandler(404)
    def handle_not_found(error):
        if _wants_json():
            return error_response('Endpoint not found', 'NOT_FOUND', 404)
        return render_template('errors/error.html', message='Page not found.'), 404

    @app.errorhandler(500)
    def handle_internal_error(error):
        current_app.logger.exception('Internal server error')
        if _wants_json():
            return error_response('Internal server error', 'SERVER_ERROR', 500)
        return render_template('errors/error.html', message='Something went wrong.'), 500
