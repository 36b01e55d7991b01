"""
Authentication module interfaces.

Other modules should depend on IAuthService, not the concrete implementation.
The service depends on IUserRepository so the credential store can be
swapped between the in-memory and Supabase implementations.
"""

from typing import Protocol, Optional, runtime_checkable

from shared.models import AuthenticatedUser

from .models import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserPublic,
    UserRecord,
)


@runtime_checkable
class IUserRepository(Protocol):
    """Persistence contract for user accounts."""

    def create(self, record: UserRecord) -> UserRecord:
        """
        Persist a new user.

        Raises:
            EmailAlreadyRegisteredError: If the normalized email is taken
        """
        ...

    def get_by_id(self, user_id: str) -> Optional[UserRecord]:
        """Get a user by ID, or None if absent."""
        ...

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        """Get a user by normalized email, or None if absent."""
        ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to the API layer. Implementations must provide all these methods.
    """

    async def register(self, request: RegisterRequest) -> AuthResponse:
        """
        Create an account with role 'user' and issue a token.

        Raises:
            AuthValidationError: If a field is missing or malformed
            EmailAlreadyRegisteredError: If the email is already registered
        """
        ...

    async def login(self, request: LoginRequest) -> AuthResponse:
        """
        Check credentials and issue a fresh token.

        Raises:
            AuthValidationError: If email or password is missing
            InvalidCredentialsError: If the email is unknown or the password wrong
        """
        ...

    async def authenticate(self, token: Optional[str]) -> AuthenticatedUser:
        """
        Resolve a bearer token to an existing identity.

        Raises:
            AuthenticationError: If the token is missing, invalid or expired,
                or the user no longer exists
        """
        ...

    async def get_user(self, user_id: str) -> UserPublic:
        """
        Get a user's public profile.

        Raises:
            UserNotFoundError: If the user does not exist
        """
        ...

    async def create_admin(self, name: str, email: str, password: str) -> UserPublic:
        """
        Create an account with role 'admin'.

        Raises:
            AuthValidationError: If a field is missing or malformed
            EmailAlreadyRegisteredError: If the email is already registered
        """
        ...

    async def ensure_admin(self, name: str, email: str, password: str) -> UserPublic:
        """Create the admin account unless the email is already registered."""
        ...
