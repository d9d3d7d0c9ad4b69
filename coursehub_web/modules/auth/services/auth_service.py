"""
Auth Service - login and registration against the remote API.

Both calls are anonymous (no bearer header) and, when they succeed, hand
the returned identity and token to the Session Store.
"""
from flask import current_app

from coursehub_web.models import AuthResponse, LoginRequest, RegisterRequest
from coursehub_web.schemas import LoginRequestSchema, RegisterRequestSchema, auth_response_schema
from coursehub_web.services.api_client import ApiClient, load_payload


class AuthService:
    """Service for authentication related operations."""

    def __init__(self, client: ApiClient):
        self.client = client

    def login(self, credentials: LoginRequest) -> AuthResponse:
        payload = self.client.post(
            '/auth/login', json=LoginRequestSchema().dump(credentials), authenticated=False
        )
        return self._establish(payload)

    def register(self, data: RegisterRequest) -> AuthResponse:
        payload = self.client.post(
            '/auth/register', json=RegisterRequestSchema().dump(data), authenticated=False
        )
        auth = self._establish(payload)
        current_app.logger.info(f"User registered: {auth.user.email} ({auth.user.id})")
        return auth

    def logout(self) -> None:
        self.client.session_store.clear(reason='logout')

    def _establish(self, payload) -> AuthResponse:
        auth = load_payload(auth_response_schema, payload)
        self.client.session_store.establish(auth.user, auth.access_token)
        return auth
