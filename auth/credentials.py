"""Credential store: user records in PostgreSQL.

Records are written once at signup and never updated. Email is not unique
at the schema level; duplicate records make login report "not found".
"""

import logging
from uuid import UUID

import psycopg2

from clients.postgres_client import PostgresClient
from auth.exceptions import StoreError
from auth.types import User

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS users (
    id uuid PRIMARY KEY DEFAULT gen_random_uuid(),
    username varchar(20) NOT NULL,
    email text NOT NULL,
    password_hash text NOT NULL,
    created_at timestamptz NOT NULL DEFAULT now()
);
CREATE INDEX IF NOT EXISTS users_email_idx ON users (email);

CREATE TABLE IF NOT EXISTS security_events (
    id bigserial PRIMARY KEY,
    event_type text NOT NULL,
    email text,
    ip_address inet,
    user_agent text,
    details jsonb,
    created_at timestamptz NOT NULL DEFAULT now()
);
"""


def _to_user(row: dict) -> User:
    return User(
        id=UUID(row["id"]) if isinstance(row["id"], str) else row["id"],
        username=row["username"],
        email=row["email"],
        password_hash=row["password_hash"],
        created_at=row.get("created_at"),
    )


class CredentialStore:
    """User record persistence."""

    def __init__(self, postgres: PostgresClient):
        self._db = postgres

    def create_schema(self) -> None:
        """Create users and security_events tables if absent."""
        try:
            self._db.execute(SCHEMA_SQL)
        except psycopg2.Error as e:
            raise StoreError(f"Could not create schema: {e}") from e
        logger.info("Credential store schema ready")

    def insert_user(self, username: str, email: str, password_hash: str) -> User:
        """Insert a new user record unconditionally."""
        try:
            rows = self._db.execute_returning(
                """INSERT INTO users (username, email, password_hash)
                   VALUES (%s, %s, %s)
                   RETURNING id, username, email, password_hash, created_at""",
                (username, email, password_hash),
            )
        except psycopg2.Error as e:
            raise StoreError(f"Could not insert user: {e}") from e
        return _to_user(rows[0])

    def find_by_email(self, email: str) -> list[User]:
        """All records whose email matches exactly."""
        try:
            rows = self._db.execute(
                """SELECT id, username, email, password_hash
                   FROM users WHERE email = %s""",
                (email,),
            )
        except psycopg2.Error as e:
            raise StoreError(f"Could not look up user: {e}") from e
        return [_to_user(row) for row in rows]
