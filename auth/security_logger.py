"""Security event logging for the auth audit trail.

Append-only log to the security_events table, mirrored to the application
logger. Passwords and password hashes never appear in events.
"""

import logging
from enum import Enum
from typing import Any

import psycopg2
from psycopg2.extras import Json

from clients.postgres_client import PostgresClient
from auth.exceptions import StoreError
from utils.timezone import now_utc

logger = logging.getLogger(__name__)


class SecurityEvent(Enum):
    """Auth security event types."""

    SIGNUP_REJECTED = "signup_rejected"
    USER_CREATED = "user_created"
    LOGIN_REJECTED = "login_rejected"
    LOGIN_EMAIL_NOT_FOUND = "login_email_not_found"
    LOGIN_PASSWORD_INCORRECT = "login_password_incorrect"
    LOGIN_SUCCEEDED = "login_succeeded"
    SESSION_CREATED = "session_created"
    SESSION_REVOKED = "session_revoked"


# Events that indicate a failed attempt are logged at WARNING
_FAILURES = {
    SecurityEvent.SIGNUP_REJECTED,
    SecurityEvent.LOGIN_REJECTED,
    SecurityEvent.LOGIN_EMAIL_NOT_FOUND,
    SecurityEvent.LOGIN_PASSWORD_INCORRECT,
}


class SecurityLogger:
    """Append-only security event logger."""

    def __init__(self, postgres: PostgresClient):
        self._db = postgres

    def log(
        self,
        event: SecurityEvent,
        email: str | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Log security event to database and application log."""
        level = logging.WARNING if event in _FAILURES else logging.INFO
        logger.log(level, f"Security event {event.value}: email={email} ip={ip_address} details={details or {}}")

        try:
            self._db.execute_returning(
                """INSERT INTO security_events
                   (event_type, email, ip_address, user_agent, details, created_at)
                   VALUES (%s, %s, %s, %s, %s, %s)
                   RETURNING id""",
                (
                    event.value,
                    email,
                    ip_address,
                    user_agent,
                    Json(details) if details else None,
                    now_utc(),
                ),
            )
        except psycopg2.Error as e:
            raise StoreError(f"Could not record security event: {e}") from e
