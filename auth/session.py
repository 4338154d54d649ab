"""Session lifecycle management.

Sessions are stored in Valkey with TTL matching session expiry.
Session ids are cryptographically random (secrets.token_urlsafe).
Expiry is fixed at issuance: validating a session never extends it.
"""

import logging
import secrets
from datetime import timedelta
from typing import NoReturn

import redis

from clients.valkey_client import ValkeyClient
from auth.config import AuthConfig
from auth.types import Session
from auth.exceptions import SessionExpiredError, StoreError
from utils.timezone import now_utc, parse_iso

logger = logging.getLogger(__name__)


class SessionManager:
    """Session create/validate/revoke backed by Valkey."""

    KEY_PREFIX = "session:"

    def __init__(self, valkey: ValkeyClient, config: AuthConfig):
        self._valkey = valkey
        self._config = config

    def _key(self, session_id: str) -> str:
        return f"{self.KEY_PREFIX}{session_id}"

    def create_session(self, name: str) -> Session:
        """Create an authenticated session for `name`, expiring after the TTL."""
        now = now_utc()
        session = Session(
            session_id=secrets.token_urlsafe(32),
            authenticated=True,
            name=name,
            created_at=now,
            expires_at=now + timedelta(seconds=self._config.session_expiry_seconds),
        )

        try:
            self._valkey.set_json(
                self._key(session.session_id),
                {
                    "authenticated": session.authenticated,
                    "name": session.name,
                    "created_at": session.created_at.isoformat(),
                    "expires_at": session.expires_at.isoformat(),
                },
                expire_seconds=self._config.session_expiry_seconds,
            )
        except redis.RedisError as e:
            raise StoreError(f"Could not store session: {e}") from e

        return session

    def issue_session(self, name: str, previous_session_id: str | None = None) -> Session:
        """Replace any previous session with a fresh one (new id, new expiry)."""
        if previous_session_id:
            self.revoke_session(previous_session_id)
        return self.create_session(name)

    def validate_session(self, session_id: str) -> Session:
        """Return the stored session.

        Raises:
            SessionExpiredError: If the id is unknown, unreadable or past expiry.
        """
        if not session_id:
            raise SessionExpiredError("No session")

        key = self._key(session_id)
        try:
            data = self._valkey.get_json(key)
        except redis.RedisError as e:
            raise StoreError(f"Could not read session: {e}") from e
        except ValueError:
            self._discard(session_id)

        if data is None:
            raise SessionExpiredError("Session not found or expired")

        try:
            session = Session(
                session_id=session_id,
                authenticated=bool(data.get("authenticated")),
                name=data.get("name") or "",
                created_at=parse_iso(data["created_at"]),
                expires_at=parse_iso(data["expires_at"]),
            )
        except (AttributeError, KeyError, TypeError, ValueError):
            self._discard(session_id)

        # Valkey TTL should already have dropped it
        if now_utc() > session.expires_at:
            self.revoke_session(session_id)
            raise SessionExpiredError("Session expired")

        return session

    def _discard(self, session_id: str) -> NoReturn:
        logger.warning("Discarding unreadable session record")
        self.revoke_session(session_id)
        raise SessionExpiredError("Session record unreadable")

    def revoke_session(self, session_id: str) -> bool:
        """Delete the session. Returns False if there was none to delete."""
        try:
            return self._valkey.delete(self._key(session_id))
        except redis.RedisError as e:
            raise StoreError(f"Could not revoke session: {e}") from e
