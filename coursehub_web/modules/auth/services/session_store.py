"""
Session Store - who is currently using the application.

Keeps the authenticated identity and its bearer credential in a key-value
storage (Flask's signed cookie session in production, a plain dict in tests).
Only ``establish`` and ``clear`` write the two storage keys.
"""
import json
import logging
from typing import MutableMapping, Optional

from marshmallow import ValidationError

from coursehub_web.core.signals import session_cleared, session_established
from coursehub_web.models import Identity, Session
from coursehub_web.schemas import identity_schema

logger = logging.getLogger(__name__)

TOKEN_KEY = 'accessToken'
USER_KEY = 'user'


class SessionStore:
    """Explicitly owned holder of the current :class:`Session`."""

    def __init__(self, storage: MutableMapping[str, str]):
        self._storage = storage
        self._session = Session.empty()

    def hydrate(self) -> Session:
        """
        Load the persisted session.

        Missing fields give an empty session. A stored user that cannot be
        parsed is discarded together with its token; this never raises.
        """
        token = self._storage.get(TOKEN_KEY)
        raw_user = self._storage.get(USER_KEY)

        if not token or not raw_user:
            self._session = Session.empty()
            return self._session

        try:
            identity = identity_schema.load(json.loads(raw_user))
            self._session = Session(identity=identity, credential=token)
        except (TypeError, ValueError, ValidationError) as e:
            # json.JSONDecodeError is a ValueError
            logger.warning("Discarding unreadable stored session: %s", e)
            self._forget()
            self._session = Session.empty()
            session_cleared.send(self, reason='corrupt')

        return self._session

    def establish(self, identity: Identity, credential: str) -> Session:
        """Replace any existing session with ``identity`` + ``credential``."""
        new_session = Session(identity=identity, credential=credential)
        serialized_user = json.dumps(identity_schema.dump(identity))

        self._storage[TOKEN_KEY] = credential
        self._storage[USER_KEY] = serialized_user
        self._session = new_session

        session_established.send(self, identity=identity)
        return new_session

    def clear(self, reason: str = 'logout') -> None:
        """Empty the session. Clearing an empty session is a no-op."""
        had_session = self._session.is_authenticated or self._has_persisted_fields()

        self._session = Session.empty()
        self._forget()

        if had_session:
            session_cleared.send(self, reason=reason)

    def current(self) -> Session:
        return self._session

    @property
    def identity(self) -> Optional[Identity]:
        return self._session.identity

    def _has_persisted_fields(self) -> bool:
        return TOKEN_KEY in self._storage or USER_KEY in self._storage

    def _forget(self) -> None:
        self._storage.pop(TOKEN_KEY, None)
        self._storage.pop(USER_KEY, None)
