"""
Shared infrastructure for the Sweet Shop backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- logging_config: Root logger setup
- validation: Structured validation results

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .exceptions import (
    SweetShopError,
    NotFoundError,
    ValidationError,
    ConflictError,
    BusinessRuleError,
    AuthenticationError,
    AuthorizationError,
)
from .models import AuthenticatedUser, Role
from .validation import Violation

__all__ = [
    "Settings",
    "get_settings",
    "SweetShopError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "BusinessRuleError",
    "AuthenticationError",
    "AuthorizationError",
    "AuthenticatedUser",
    "Role",
    "Violation",
]
