"""
Per-request access to the Session Store and the API client.

A fresh store is hydrated from Flask's cookie session at the start of every
request and kept on ``flask.g``; views, the route guard and the API client
all receive that same instance. ``g`` can outlive a request when an app
context is already pushed, so nothing cached on it is trusted across requests.
"""
from flask import current_app, g, session

from coursehub_web.extensions import login_manager
from .services.session_store import SessionStore


def get_session_store() -> SessionStore:
    store = g.get('session_store')
    if store is None:
        store = load_session_store()
    return store


def load_session_store() -> SessionStore:
    store = SessionStore(session)
    store.hydrate()
    g.session_store = store
    return store


def get_api_client():
    from coursehub_web.services.api_client import ApiClient

    client = g.get('api_client')
    if client is None:
        client = ApiClient.from_app(get_session_store(), current_app)
        g.api_client = client
    return client


def bind_session_store(app):
    """Hydrate the store at the start of every request and expose it to Flask-Login."""

    @app.before_request
    def hydrate_session_store():
        g.pop('api_client', None)
        # Flask-Login keeps the loaded user on g as well
        g.pop('_login_user', None)
        load_session_store()

    @login_manager.request_loader
    def load_identity_from_session(_request):
        return get_session_store().current().identity
