"""Signed-in sessions kept in Valkey.

A session is one key, ``session:<token>``, holding the user id. The key's TTL
is the session's idle lifetime and every successful validation restarts it,
so Valkey alone decides when a session has lapsed.
"""

import secrets
from datetime import timedelta
from uuid import UUID

from clients.valkey_client import ValkeyClient
from auth.config import AuthConfig
from auth.exceptions import SessionExpiredError
from auth.types import Session
from utils.timezone import now_utc


class SessionManager:
    """Issues, checks and revokes session tokens."""

    KEY_PREFIX = "session:"

    def __init__(self, valkey: ValkeyClient, config: AuthConfig):
        self._valkey = valkey
        self._ttl_seconds = config.session_ttl_seconds

    def _key(self, token: str) -> str:
        return f"{self.KEY_PREFIX}{token}"

    def _session(self, token: str, user_id: UUID) -> Session:
        return Session(
            token=token,
            user_id=user_id,
            expires_at=now_utc() + timedelta(seconds=self._ttl_seconds),
        )

    def create_session(self, user_id: UUID) -> Session:
        token = secrets.token_urlsafe(32)
        self._valkey.set_json(
            self._key(token),
            {"user_id": str(user_id)},
            expire_seconds=self._ttl_seconds,
        )
        return self._session(token, user_id)

    def validate_session(self, token: str) -> Session:
        """Session for ``token`` with its lifetime restarted.

        Raises:
            SessionExpiredError: Unknown, revoked or lapsed token.
        """
        record = self._valkey.get_json(self._key(token))
        if record is None or not self._valkey.expire(self._key(token), self._ttl_seconds):
            raise SessionExpiredError("Session not found or expired")
        return self._session(token, UUID(record["user_id"]))

    def revoke_session(self, token: str) -> None:
        """Sign-out. Unknown tokens are ignored."""
        self._valkey.delete(self._key(token))
