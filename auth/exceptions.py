"""Typed exceptions for auth failures."""


class AuthError(Exception):
    """Base class for authentication errors shown to the user."""


class SignupValidationError(AuthError):
    """
    A signup field is missing or malformed.

    Carries the offending field so the page can say which one.
    """

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(message)


class LoginRejectedError(AuthError):
    """
    Login input failed validation.

    The reason is for the security log only; users just get sent back
    to the login form.
    """

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class EmailNotFoundError(AuthError):
    """No single credential record matches the email (zero or duplicates)."""


class IncorrectPasswordError(AuthError):
    """Password does not match the stored hash."""


class EmailAlreadyRegisteredError(AuthError):
    """Signup email already exists (only raised when uniqueness is enforced)."""


class SessionExpiredError(AuthError):
    """Session is missing or past its expiry."""


class StoreError(Exception):
    """
    Credential or session store is unavailable.

    Terminal for the request: never retried, rendered as a generic failure.
    """
