"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, Field

from shared.models import Role


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserPublic(BaseModel):
    """User fields that are safe to return to clients."""

    id: str = Field(..., description="User ID")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Normalized email address")
    role: Role = Field(default=Role.USER, description="User role")


class UserRecord(BaseModel):
    """
    A user as persisted in the credential store.

    Carries the bcrypt hash, so it never leaves the service layer;
    use to_public() for anything returned to clients.
    """

    id: str
    name: str
    email: str
    password_hash: str
    role: Role = Role.USER
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    def to_public(self) -> UserPublic:
        return UserPublic(id=self.id, name=self.name, email=self.email, role=self.role)


class TokenClaims(BaseModel):
    """Decoded session token payload."""

    id: str = Field(..., description="User ID")
    email: str = Field(..., description="User's email")
    name: str = Field(..., description="User's display name")
    role: Role = Field(default=Role.USER, description="User role at issue time")
    iat: int = Field(..., description="Issued at timestamp")
    exp: int = Field(..., description="Expiration timestamp")

    model_config = {"frozen": True, "extra": "ignore"}


class RegisterRequest(BaseModel):
    """
    Request body for registration.

    Fields are optional at the schema level so the auth validators can
    report every missing field as a structured violation.
    """

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    """Request body for login."""

    email: Optional[str] = None
    password: Optional[str] = None


class AuthResponse(BaseModel):
    """Response for a successful registration or login."""

    token: str = Field(..., description="Signed session token")
    user: UserPublic


class CurrentUserResponse(BaseModel):
    """Response for the current identity endpoint."""

    user: UserPublic
