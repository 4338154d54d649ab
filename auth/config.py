"""Authentication configuration."""

from pydantic import BaseModel, Field


class AuthConfig(BaseModel):
    """
    Authentication configuration.

    The session TTL is fixed at issuance and never slides; a new login
    issues a fresh session with a fresh expiry.
    """

    # Session settings
    session_expiry_minutes: int = Field(
        default=60,
        description="Session lifetime in minutes, counted from issuance",
        ge=1,
        le=1440,
    )
    session_cookie_name: str = Field(
        default="session_id",
        description="Cookie carrying the opaque session id",
        min_length=1,
    )
    cookie_secure: bool = Field(
        default=False,
        description="Only send the session cookie over HTTPS",
    )

    # Password hashing
    password_hash_rounds: int = Field(
        default=12,
        description="bcrypt cost factor",
        ge=4,
        le=16,
    )

    # Form constraints
    max_name_length: int = Field(default=20, ge=1)
    max_password_length: int = Field(default=20, ge=1)
    allowed_email_tlds: list[str] = Field(
        default_factory=lambda: ["com", "org", "net"],
        description="Top-level domains accepted for email addresses",
        min_length=1,
    )
    enforce_unique_email: bool = Field(
        default=False,
        description="Reject signup when the email is already registered",
    )

    # Members page
    member_image_count: int = Field(
        default=3,
        description="Number of images (/1.jpg .. /N.jpg) drawn from on /members",
        ge=1,
    )

    @property
    def session_expiry_seconds(self) -> int:
        return self.session_expiry_minutes * 60
