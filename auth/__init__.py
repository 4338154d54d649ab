"""Authentication and session modules."""

from auth.exceptions import (
    AuthError,
    SignupValidationError,
    LoginRejectedError,
    EmailNotFoundError,
    IncorrectPasswordError,
    EmailAlreadyRegisteredError,
    SessionExpiredError,
    StoreError,
)
from auth.types import User, Session
from auth.config import AuthConfig
from auth.credentials import CredentialStore
from auth.passwords import PasswordHasher
from auth.security_logger import SecurityLogger, SecurityEvent
from auth.session import SessionManager
from auth.service import AuthService
from auth.security_middleware import SessionMiddleware
from auth.api import create_auth_router
