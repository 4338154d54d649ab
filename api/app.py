"""
FastAPI application entry point.

create_app() wires already-built collaborators (tests use this);
build_app() constructs the real PostgreSQL/Valkey clients from Vault.
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI

from api.errors import register_error_handlers
from api.middleware import RequestIDMiddleware
from auth.api import create_auth_router
from auth.config import AuthConfig
from auth.credentials import CredentialStore
from auth.passwords import PasswordHasher
from auth.security_logger import SecurityLogger
from auth.security_middleware import SessionMiddleware
from auth.service import AuthService
from auth.session import SessionManager
from clients.postgres_client import PostgresClient
from clients.valkey_client import ValkeyClient
from clients.vault_client import get_database_url, get_valkey_url

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "y"}


def create_app(
    auth_service: AuthService,
    session_manager: SessionManager,
    config: AuthConfig,
    lifespan=None,
) -> FastAPI:
    """Assemble routes, middleware and error handlers around the given services."""
    app = FastAPI(
        title="Members",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )

    register_error_handlers(app)

    app.add_middleware(SessionMiddleware, session_manager=session_manager, config=config)
    # Added last so it wraps everything, including session loading
    app.add_middleware(RequestIDMiddleware)

    app.include_router(create_auth_router(auth_service, config))
    return app


def config_from_env() -> AuthConfig:
    """AuthConfig defaults with the deployment-specific overrides."""
    return AuthConfig(
        cookie_secure=os.getenv("MEMBERS_COOKIE_SECURE", "false").lower() in _TRUTHY,
        enforce_unique_email=os.getenv("MEMBERS_UNIQUE_EMAIL", "false").lower() in _TRUTHY,
    )


def build_app(config: AuthConfig | None = None) -> FastAPI:
    """Connect to PostgreSQL and Valkey (URLs from Vault) and build the app."""
    config = config or config_from_env()

    postgres = PostgresClient(get_database_url())
    valkey = ValkeyClient(get_valkey_url())

    credential_store = CredentialStore(postgres)
    credential_store.create_schema()
    session_manager = SessionManager(valkey, config)

    auth_service = AuthService(
        config=config,
        credential_store=credential_store,
        session_manager=session_manager,
        password_hasher=PasswordHasher(rounds=config.password_hash_rounds),
        security_logger=SecurityLogger(postgres),
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator:
        logger.info("Members app started")
        yield
        logger.info("Shutting down Members app...")
        valkey.close()
        postgres.close()

    return create_app(auth_service, session_manager, config, lifespan=lifespan)


def main() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    host = os.getenv("MEMBERS_HOST", "0.0.0.0")
    port = int(os.getenv("MEMBERS_PORT", "3000"))
    uvicorn.run(build_app(), host=host, port=port)


if __name__ == "__main__":
    main()
