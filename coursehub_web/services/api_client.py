"""
Remote Resource Client.

Every call to the CourseHub REST API goes through :class:`ApiClient`. It
attaches the stored bearer credential, clears the session when the API
rejects that credential, and turns every other failure into a typed
exception. Each call is a single attempt; retrying is up to the view.
"""
import logging
from typing import Any, Mapping, Optional

import requests
from flask import current_app
from marshmallow import ValidationError

from coursehub_web.core.error_handlers import (
    ApiRequestError,
    ApiTransportError,
    AuthenticationRejectedError,
)
from coursehub_web.extensions import HTTP_EXTENSION_KEY
from coursehub_web.modules.auth.services.session_store import SessionStore

logger = logging.getLogger(__name__)

AUTH_REJECTED_STATUS = 401


class ApiClient:
    """Thin wrapper over a ``requests`` session bound to one SessionStore."""

    def __init__(self, base_url: str, session_store: SessionStore, http=None, timeout: float = 10):
        self.base_url = base_url.rstrip('/')
        self.session_store = session_store
        self.http = http if http is not None else requests.Session()
        self.timeout = timeout

    @classmethod
    def from_app(cls, session_store: SessionStore, app=None) -> 'ApiClient':
        app = app or current_app
        return cls(
            base_url=app.config['COURSEHUB_API_URL'],
            session_store=session_store,
            http=app.extensions.get(HTTP_EXTENSION_KEY),
            timeout=app.config.get('COURSEHUB_API_TIMEOUT', 10),
        )

    def get(self, path: str, params: Optional[Mapping[str, Any]] = None, **kwargs):
        return self.request('GET', path, params=params, **kwargs)

    def post(self, path: str, json: Any = None, **kwargs):
        return self.request('POST', path, json=json, **kwargs)

    def put(self, path: str, json: Any = None, **kwargs):
        return self.request('PUT', path, json=json, **kwargs)

    def delete(self, path: str, **kwargs):
        return self.request('DELETE', path, **kwargs)

    def request(self, method: str, path: str, *, json: Any = None,
                params: Optional[Mapping[str, Any]] = None, authenticated: bool = True):
        """
        Perform one request and return the decoded JSON body (None when empty).

        Raises:
            AuthenticationRejectedError: 401 on an authenticated call; the
                session has already been cleared.
            ApiRequestError: any other non-2xx answer.
            ApiTransportError: network failure or unreadable body.
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        headers = self._auth_headers() if authenticated else {}

        try:
            response = self.http.request(
                method, url, json=json, params=params, headers=headers, timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error("API %s %s failed: %s", method, url, e)
            raise ApiTransportError() from e

        if response.status_code == AUTH_REJECTED_STATUS:
            self.session_store.clear(reason='rejected')
            if authenticated:
                logger.warning("API %s %s rejected the stored credential.", method, url)
                raise AuthenticationRejectedError()
            raise ApiRequestError(
                _error_message(response, 'Invalid email or password.'), AUTH_REJECTED_STATUS
            )

        if not response.ok:
            message = _error_message(response, 'The request was rejected by the server.')
            logger.info("API %s %s answered %s: %s", method, url, response.status_code, message)
            raise ApiRequestError(message, response.status_code)

        if response.status_code == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            logger.error("API %s %s returned a non-JSON body.", method, url)
            raise ApiTransportError('The server sent an unreadable response.') from e

    def _auth_headers(self) -> dict:
        credential = self.session_store.current().credential
        if not credential:
            return {}
        return {'Authorization': f'Bearer {credential}'}


def _error_message(response, default: str) -> str:
    try:
        body = response.json()
    except ValueError:
        return default
    if isinstance(body, dict) and body.get('message'):
        return str(body['message'])
    return default


def load_payload(schema, payload):
    """Deserialize an API body with ``schema``; malformed bodies count as transport failures."""
    try:
        return schema.load(payload)
    except ValidationError as e:
        logger.error("Malformed API payload for %s: %s", type(schema).__name__, e.messages)
        raise ApiTransportError('The server sent an unexpected response.') from e
