import json
import os
import sys
import threading
from dataclasses import dataclass, field

import pytest
import requests

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from coursehub_web import create_app
from coursehub_web.config import Config
from coursehub_web.extensions import HTTP_EXTENSION_KEY
from coursehub_web.models import Role
from coursehub_web.modules.auth.services.session_store import TOKEN_KEY, USER_KEY

from payloads import user_payload

API_URL = 'http://api.test/api'


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret'
    WTF_CSRF_ENABLED = False
    COURSEHUB_API_URL = API_URL
    LOG_LEVEL = 'WARNING'
    LOG_DIR = None


@dataclass
class RecordedCall:
    method: str
    path: str
    json: object = None
    params: dict = None
    headers: dict = field(default_factory=dict)


class FakeApi:
    """Stands in for the ``requests.Session`` the API client talks to."""

    def __init__(self, base_url=API_URL):
        self.base_url = base_url
        self.routes = {}
        self.calls = []
        self._lock = threading.Lock()

    def add(self, method, path, body=None, status=200):
        self.routes[(method.upper(), path)] = (status, body)

    def fail(self, method, path, error):
        self.routes[(method.upper(), path)] = error

    def request(self, method, url, json=None, params=None, headers=None, timeout=None):
        path = url[len(self.base_url):]
        with self._lock:
            self.calls.append(RecordedCall(method, path, json, params, dict(headers or {})))

        route = self.routes.get((method.upper(), path))
        if route is None:
            return make_response(404, {'message': f'No route {method} {path}'}, url)
        if isinstance(route, Exception):
            raise route
        status, body = route
        return make_response(status, body, url)

    def called(self, method, path):
        return [call for call in self.calls if call.method == method and call.path == path]


def make_response(status, body, url=API_URL):
    response = requests.Response()
    response.status_code = status
    response.url = url
    response.encoding = 'utf-8'
    if body is None:
        response._content = b''
    elif isinstance(body, bytes):
        response._content = body
    else:
        response._content = json.dumps(body).encode('utf-8')
        response.headers['Content-Type'] = 'application/json'
    return response


@pytest.fixture
def api():
    return FakeApi()


@pytest.fixture
def app(api):
    app = create_app(TestConfig)
    app.extensions[HTTP_EXTENSION_KEY] = api
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


def login_client(client, role=Role.STUDENT, user_id=1, **names):
    with client.session_transaction() as session:
        session[TOKEN_KEY] = f'token-{user_id}'
        session[USER_KEY] = json.dumps(user_payload(user_id, role.value, **names))


@pytest.fixture
def login_as(client):
    def _login(role=Role.STUDENT, user_id=1, **names):
        login_client(client, role, user_id, **names)
        return client
    return _login
