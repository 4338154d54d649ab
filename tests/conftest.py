"""Shared test fixtures for the members app test suite.

PostgreSQL and Valkey are replaced by in-memory stand-ins for the injected
collaborators, so the suite runs without infrastructure.
"""

import time
from pathlib import Path
from unittest.mock import Mock
from uuid import uuid4

import pytest
from dotenv import load_dotenv
from fastapi.testclient import TestClient

# Load .env file BEFORE any other imports that might use env vars
load_dotenv(Path(__file__).parent.parent / ".env", override=True)

from api.app import create_app
from auth.config import AuthConfig
from auth.passwords import PasswordHasher
from auth.security_logger import SecurityLogger
from auth.service import AuthService
from auth.session import SessionManager
from auth.types import User
from clients.valkey_client import ValkeyClient
from utils.timezone import now_utc


# =============================================================================
# TEST DOUBLES
# =============================================================================


class InMemoryRedis:
    """Just enough of redis.Redis for ValkeyClient."""

    def __init__(self):
        self.data: dict[str, str] = {}
        self.expiry: dict[str, float] = {}

    def _purge(self, key: str) -> None:
        deadline = self.expiry.get(key)
        if deadline is not None and time.monotonic() >= deadline:
            self.data.pop(key, None)
            self.expiry.pop(key, None)

    def ping(self):
        return True

    def get(self, key):
        self._purge(key)
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value
        self.expiry.pop(key, None)
        return True

    def setex(self, key, seconds, value):
        self.data[key] = value
        self.expiry[key] = time.monotonic() + seconds
        return True

    def delete(self, key):
        self._purge(key)
        self.expiry.pop(key, None)
        return 1 if self.data.pop(key, None) is not None else 0

    def ttl(self, key):
        self._purge(key)
        if key not in self.data:
            return -2
        if key not in self.expiry:
            return -1
        return int(self.expiry[key] - time.monotonic())

    def close(self):
        pass


class InMemoryCredentialStore:
    """CredentialStore stand-in keeping user records in a list."""

    def __init__(self):
        self.users: list[User] = []

    def insert_user(self, username: str, email: str, password_hash: str) -> User:
        user = User(
            id=uuid4(),
            username=username,
            email=email,
            password_hash=password_hash,
            created_at=now_utc(),
        )
        self.users.append(user)
        return user

    def find_by_email(self, email: str) -> list[User]:
        return [user for user in self.users if user.email == email]


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def config():
    """Test config with the cheapest bcrypt cost."""
    return AuthConfig(password_hash_rounds=4)


@pytest.fixture
def redis_backend():
    return InMemoryRedis()


@pytest.fixture
def valkey(redis_backend, monkeypatch):
    """ValkeyClient talking to the in-memory backend."""
    monkeypatch.setattr("clients.valkey_client.redis.from_url", lambda url, **kwargs: redis_backend)
    return ValkeyClient("redis://test")


@pytest.fixture
def session_manager(valkey, config):
    return SessionManager(valkey, config)


@pytest.fixture
def credential_store():
    return InMemoryCredentialStore()


@pytest.fixture
def password_hasher(config):
    return PasswordHasher(rounds=config.password_hash_rounds)


@pytest.fixture
def security_logger():
    """Mock security logger - audit rows are not persisted in tests."""
    return Mock(spec=SecurityLogger)


@pytest.fixture
def auth_service(config, credential_store, session_manager, password_hasher, security_logger):
    return AuthService(
        config=config,
        credential_store=credential_store,
        session_manager=session_manager,
        password_hasher=password_hasher,
        security_logger=security_logger,
    )


@pytest.fixture
def app(auth_service, session_manager, config):
    return create_app(auth_service, session_manager, config)


@pytest.fixture
def client(app):
    """Test client that does not follow redirects."""
    return TestClient(app, follow_redirects=False)
