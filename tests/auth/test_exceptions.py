"""Tests for auth/exceptions.py - Typed exceptions for auth failures."""

import pytest

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


class TestExceptionInheritance:
    """User-facing auth exceptions inherit from AuthError."""

    @pytest.mark.parametrize("exc_type", [
        SignupValidationError,
        LoginRejectedError,
        EmailNotFoundError,
        IncorrectPasswordError,
        EmailAlreadyRegisteredError,
        SessionExpiredError,
    ])
    def test_inherits_auth_error(self, exc_type):
        assert issubclass(exc_type, AuthError)

    def test_store_error_is_not_an_auth_error(self):
        """Store failures must reach the global handler, not the form pages."""
        assert not issubclass(StoreError, AuthError)


class TestSignupValidationError:

    def test_carries_field_and_message(self):
        err = SignupValidationError("email", "Email is required.")
        assert err.field == "email"
        assert err.message == "Email is required."
        assert str(err) == "Email is required."


class TestLoginRejectedError:

    def test_carries_reason(self):
        err = LoginRejectedError("invalid email")
        assert err.reason == "invalid email"

    def test_can_be_caught_as_auth_error(self):
        with pytest.raises(AuthError):
            raise LoginRejectedError("password missing")
