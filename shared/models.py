"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models stay in their respective module directories.
"""

from enum import Enum

from pydantic import BaseModel, Field


class Role(str, Enum):
    """User roles."""

    USER = "user"
    ADMIN = "admin"


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    Built by the auth guard after the token is verified and the identity
    is confirmed to still exist in the credential store. Route handlers
    receive it via dependency injection.
    """

    id: str = Field(..., description="User ID")
    email: str = Field(..., description="User's email address")
    name: str = Field(..., description="Display name")
    role: Role = Field(default=Role.USER, description="User role")

    model_config = {
        "frozen": True,
        "extra": "ignore",
    }

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
