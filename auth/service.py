"""Authentication service - orchestrates signup, login and logout."""

import logging
import random

from auth.config import AuthConfig
from auth.credentials import CredentialStore
from auth.passwords import PasswordHasher
from auth.session import SessionManager
from auth.security_logger import SecurityLogger, SecurityEvent
from auth.types import Session
from auth.validation import validate_login, validate_signup
from auth.exceptions import (
    EmailAlreadyRegisteredError,
    EmailNotFoundError,
    IncorrectPasswordError,
    LoginRejectedError,
    SessionExpiredError,
    SignupValidationError,
    StoreError,
)

logger = logging.getLogger(__name__)


class AuthService:
    """Orchestrates the password authentication flow.

    Handles:
    - Signup (validate, hash, insert, issue session)
    - Login (validate, look up by email, verify, issue session)
    - Logout
    - Session lookup for gated pages

    Every step runs in sequence; store and hashing failures propagate
    to the caller untouched.
    """

    def __init__(
        self,
        config: AuthConfig,
        credential_store: CredentialStore,
        session_manager: SessionManager,
        password_hasher: PasswordHasher,
        security_logger: SecurityLogger,
    ):
        self._config = config
        self._credentials = credential_store
        self._session_manager = session_manager
        self._hasher = password_hasher
        self._security_logger = security_logger

    def signup(
        self,
        name: str | None,
        email: str | None,
        password: str | None,
        previous_session_id: str | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> Session:
        """Create a user and an authenticated session.

        Flow:
        1. Validate all three fields (first missing, then first invalid, wins)
        2. Optionally reject an already registered email
        3. Hash the password
        4. Insert the user record
        5. Issue a fresh session

        Raises:
            SignupValidationError: Field missing or malformed. Nothing written.
            EmailAlreadyRegisteredError: Only when enforce_unique_email is on.
        """
        try:
            form = validate_signup(name, email, password, self._config)
        except SignupValidationError as e:
            self._security_logger.log(
                SecurityEvent.SIGNUP_REJECTED,
                email=email or None,
                ip_address=ip_address,
                user_agent=user_agent,
                details={"field": e.field},
            )
            raise

        if self._config.enforce_unique_email and self._credentials.find_by_email(form.email):
            self._security_logger.log(
                SecurityEvent.SIGNUP_REJECTED,
                email=form.email,
                ip_address=ip_address,
                user_agent=user_agent,
                details={"reason": "email_already_registered"},
            )
            raise EmailAlreadyRegisteredError("That email is already registered.")

        password_hash = self._hasher.hash(form.password)
        user = self._credentials.insert_user(form.name, form.email, password_hash)

        self._record_committed(
            SecurityEvent.USER_CREATED,
            email=user.email,
            ip_address=ip_address,
            user_agent=user_agent,
        )

        return self._issue(user.username, user.email, previous_session_id, ip_address, user_agent)

    def login(
        self,
        email: str | None,
        password: str | None,
        previous_session_id: str | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> Session:
        """Verify credentials and issue a session.

        Flow:
        1. Validate email form and password length
        2. Find records by exact email; anything but one match stops here
        3. Constant-time compare against the stored hash
        4. Issue a fresh session named after the stored username

        Raises:
            LoginRejectedError: Input invalid (reason is internal only).
            EmailNotFoundError: Zero or several records for the email.
            IncorrectPasswordError: Hash mismatch. Existing session untouched.
        """
        try:
            form = validate_login(email, password, self._config)
        except LoginRejectedError as e:
            self._security_logger.log(
                SecurityEvent.LOGIN_REJECTED,
                email=email or None,
                ip_address=ip_address,
                user_agent=user_agent,
                details={"reason": e.reason},
            )
            raise

        matches = self._credentials.find_by_email(form.email)
        if len(matches) != 1:
            self._security_logger.log(
                SecurityEvent.LOGIN_EMAIL_NOT_FOUND,
                email=form.email,
                ip_address=ip_address,
                user_agent=user_agent,
                details={"matches": len(matches)},
            )
            raise EmailNotFoundError("That email was not found.")

        user = matches[0]
        if not self._hasher.verify(form.password, user.password_hash):
            self._security_logger.log(
                SecurityEvent.LOGIN_PASSWORD_INCORRECT,
                email=user.email,
                ip_address=ip_address,
                user_agent=user_agent,
            )
            raise IncorrectPasswordError("That password is incorrect.")

        self._security_logger.log(
            SecurityEvent.LOGIN_SUCCEEDED,
            email=user.email,
            ip_address=ip_address,
            user_agent=user_agent,
        )

        return self._issue(user.username, user.email, previous_session_id, ip_address, user_agent)

    def _issue(
        self,
        name: str,
        email: str,
        previous_session_id: str | None,
        ip_address: str | None,
        user_agent: str | None,
    ) -> Session:
        session = self._session_manager.issue_session(name, previous_session_id)

        self._record_committed(
            SecurityEvent.SESSION_CREATED,
            email=email,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        return session

    def _record_committed(self, event: SecurityEvent, **fields) -> None:
        """Audit a change that has already been stored.

        The change stands even if the audit row cannot be written; the event
        is still in the application log.
        """
        try:
            self._security_logger.log(event, **fields)
        except StoreError as e:
            logger.error(f"Security event {event.value} not persisted: {e}")

    def logout(self, session_id: str | None, ip_address: str | None = None) -> None:
        """Destroy the session. Safe to call with a missing or unknown id."""
        if not session_id:
            return

        if not self._session_manager.revoke_session(session_id):
            return

        self._record_committed(
            SecurityEvent.SESSION_REVOKED,
            ip_address=ip_address,
        )

    def current_session(self, session_id: str | None) -> Session | None:
        """The live session for this id, or None."""
        try:
            return self._session_manager.validate_session(session_id)
        except SessionExpiredError:
            return None

    def pick_member_image(self) -> int:
        """Image number for the members page, uniform over 1..N, redrawn per call."""
        return random.randint(1, self._config.member_image_count)
