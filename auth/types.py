"""Pydantic models for auth domain."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, model_validator


class User(BaseModel):
    """A credential record. Only the password hash is ever stored."""

    id: UUID
    username: str
    email: str
    password_hash: str = Field(..., repr=False)
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class Session(BaseModel):
    """Server-side authentication state for one browser client."""

    session_id: str = Field(..., description="Opaque id delivered via cookie")
    authenticated: bool
    name: str = ""
    created_at: datetime
    expires_at: datetime

    @model_validator(mode="after")
    def _authenticated_requires_name(self) -> "Session":
        if self.authenticated and not self.name:
            raise ValueError("An authenticated session must carry a name")
        return self
