from coursehub_web.models import Identity
from coursehub_web.schemas import identity_schema
from coursehub_web.services.api_client import ApiClient, load_payload


class UserService:
    """Identity lookups."""

    def __init__(self, client: ApiClient):
        self.client = client

    def get_current_user(self) -> Identity:
        return load_payload(identity_schema, self.client.get('/users/me'))

    def get_user(self, user_id: int) -> Identity:
        return load_payload(identity_schema, self.client.get(f'/users/{user_id}'))
