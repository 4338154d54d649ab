"""Signup and login form validation.

Signup reports exactly which field is wrong: missing fields first, in the
order name, email, password, then the first malformed field in that same
order. Login never says which field failed; the reason only goes to the
security log.
"""

import re

from pydantic import BaseModel, EmailStr, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError

from auth.config import AuthConfig
from auth.exceptions import LoginRejectedError, SignupValidationError
from auth.passwords import MAX_PASSWORD_BYTES

FIELD_ORDER = ("name", "email", "password")

_ALPHANUMERIC = re.compile(r"^[A-Za-z0-9]+$")

MISSING_MESSAGES = {
    "name": "Name is required.",
    "email": "Email is required.",
    "password": "Password is required.",
}


def _config(info: ValidationInfo) -> AuthConfig:
    return (info.context or {}).get("config") or AuthConfig()


def _check_email_domain(email: str, config: AuthConfig) -> str:
    domain = email.rsplit("@", 1)[-1]
    segments = domain.split(".")
    if len(segments) < 2 or not all(segments):
        raise ValueError("Email domain needs at least two segments")
    allowed = {tld.lower() for tld in config.allowed_email_tlds}
    if segments[-1].lower() not in allowed:
        raise ValueError(f"Email top-level domain must be one of {sorted(allowed)}")
    return email


def _check_password(password: str, config: AuthConfig) -> str:
    if not password:
        raise ValueError("Password is empty")
    if len(password) > config.max_password_length:
        raise ValueError(f"Password longer than {config.max_password_length} characters")
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password longer than {MAX_PASSWORD_BYTES} bytes")
    return password


class LoginForm(BaseModel):
    """Credentials submitted to /loginSubmit."""

    email: EmailStr
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def _bare_address(cls, value: object) -> object:
        # EmailStr would accept "Name <addr>" and keep only the address
        if isinstance(value, str) and (set(value) & {"<", ">"} or any(c.isspace() for c in value)):
            raise ValueError("Email must be a bare address")
        return value

    @field_validator("email")
    @classmethod
    def _email_domain(cls, value: str, info: ValidationInfo) -> str:
        return _check_email_domain(value, _config(info))

    @field_validator("password")
    @classmethod
    def _password_length(cls, value: str, info: ValidationInfo) -> str:
        return _check_password(value, _config(info))


class SignupForm(LoginForm):
    """Fields submitted to /signupSubmit."""

    name: str

    @field_validator("name")
    @classmethod
    def _name_alphanumeric(cls, value: str, info: ValidationInfo) -> str:
        config = _config(info)
        if not _ALPHANUMERIC.match(value):
            raise ValueError("Name must contain only letters and digits")
        if len(value) > config.max_name_length:
            raise ValueError(f"Name longer than {config.max_name_length} characters")
        return value


def _invalid_messages(config: AuthConfig) -> dict[str, str]:
    tlds = ", ".join(f".{tld}" for tld in config.allowed_email_tlds)
    return {
        "name": f"Name must be 1-{config.max_name_length} letters or digits.",
        "email": f"Please enter a valid email address ending in {tlds}.",
        "password": f"Password must be at most {config.max_password_length} characters.",
    }


def _first_invalid_field(exc: PydanticValidationError) -> str:
    failed = {err["loc"][0] for err in exc.errors() if err.get("loc")}
    for field in FIELD_ORDER:
        if field in failed:
            return field
    return FIELD_ORDER[0]


def validate_signup(name: str | None, email: str | None, password: str | None,
                    config: AuthConfig) -> SignupForm:
    """Validate signup input.

    Raises:
        SignupValidationError: naming the first missing, else first invalid, field.
    """
    values = {"name": name, "email": email, "password": password}

    for field in FIELD_ORDER:
        if not values[field]:
            raise SignupValidationError(field, MISSING_MESSAGES[field])

    try:
        return SignupForm.model_validate(values, context={"config": config})
    except PydanticValidationError as e:
        field = _first_invalid_field(e)
        raise SignupValidationError(field, _invalid_messages(config)[field]) from e


def validate_login(email: str | None, password: str | None, config: AuthConfig) -> LoginForm:
    """Validate login input.

    Raises:
        LoginRejectedError: with an internal-only reason.
    """
    if not email:
        raise LoginRejectedError("email missing")
    if not password:
        raise LoginRejectedError("password missing")

    try:
        return LoginForm.model_validate(
            {"email": email, "password": password},
            context={"config": config},
        )
    except PydanticValidationError as e:
        fields = ", ".join(sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")}))
        raise LoginRejectedError(f"invalid {fields}") from e
