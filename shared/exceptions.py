"""
Base exception classes for the Sweet Shop backend.

Each module defines its own exceptions that inherit from these bases.
The API layer maps each base class to one HTTP status code.
"""

from typing import Optional, Any


class SweetShopError(Exception):
    """
    Base exception for all Sweet Shop errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(SweetShopError):
    """Resource not found."""

    pass


class ValidationError(SweetShopError):
    """Input validation failed."""

    pass


class ConflictError(SweetShopError):
    """A unique key is already taken."""

    pass


class BusinessRuleError(SweetShopError):
    """The request is well formed but violates a business rule."""

    pass


class AuthenticationError(SweetShopError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(SweetShopError):
    """Authorization failed (insufficient permissions)."""

    pass
