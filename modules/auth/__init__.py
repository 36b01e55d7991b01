"""
Authentication module.

Handles registration, login, session tokens and identity resolution.

Public API:
- IAuthService: Interface for auth operations
- IUserRepository: Interface for the credential store
- TokenService: Issues and verifies session tokens
- Auth models and exceptions
"""

from .interfaces import IAuthService, IUserRepository
from .models import (
    AuthResponse,
    CurrentUserResponse,
    LoginRequest,
    RegisterRequest,
    TokenClaims,
    UserPublic,
    UserRecord,
)
from .tokens import TokenService
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    UserNotFoundError,
    InvalidCredentialsError,
    EmailAlreadyRegisteredError,
    AuthValidationError,
    InsufficientPermissionsError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "IUserRepository",
    # Token handling
    "TokenService",
    # Models
    "AuthResponse",
    "CurrentUserResponse",
    "LoginRequest",
    "RegisterRequest",
    "TokenClaims",
    "UserPublic",
    "UserRecord",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "UserNotFoundError",
    "InvalidCredentialsError",
    "EmailAlreadyRegisteredError",
    "AuthValidationError",
    "InsufficientPermissionsError",
]
