"""Application-wide extensions.

This module centralizes extension instances so they can be imported without
causing circular dependencies.
"""

import requests
from flask_login import LoginManager
from flask_wtf import CSRFProtect

login_manager = LoginManager()
login_manager.login_view = "auth.login"
login_manager.login_message = "Please sign in to continue."
login_manager.login_message_category = "info"

csrf_protect = CSRFProtect()

HTTP_EXTENSION_KEY = "coursehub_http"


def init_http_session(app) -> requests.Session:
    """Attach the shared ``requests`` session used by the API client."""

    http = requests.Session()
    http.headers.update({"Content-Type": "application/json", "Accept": "application/json"})
    app.extensions[HTTP_EXTENSION_KEY] = http
    return http


__all__ = ["login_manager", "csrf_protect", "init_http_session", "HTTP_EXTENSION_KEY"]
