"""
Authentication module exceptions.

These exceptions are raised by the auth module and caught by the API
error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ValidationError,
)
from shared.validation import Violation, violations_to_details


class InvalidTokenError(AuthenticationError):
    """Raised when a JWT token is invalid, malformed or wrongly signed."""

    def __init__(self, message: str = "Not authorized, token failed"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a JWT token has expired."""

    def __init__(self, message: str = "Not authorized, token expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Not authorized, no token"):
        super().__init__(message, code="MISSING_TOKEN")


class UserNotFoundError(AuthenticationError):
    """Raised when the token's user no longer exists in the credential store."""

    def __init__(self, user_id: str):
        super().__init__(
            "User not found",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class InvalidCredentialsError(AuthenticationError):
    """
    Raised when login fails.

    Unknown email and wrong password share this error so callers
    cannot tell which half was wrong.
    """

    def __init__(self):
        super().__init__("Invalid credentials", code="INVALID_CREDENTIALS")


class EmailAlreadyRegisteredError(ConflictError):
    """Raised when registering an email that already has an account."""

    def __init__(self, email: str):
        super().__init__(
            "User already exists with this email",
            code="EMAIL_ALREADY_REGISTERED",
            details={"email": email},
        )


class AuthValidationError(ValidationError):
    """Raised when registration or login input is missing or malformed."""

    def __init__(self, violations: list[Violation]):
        super().__init__(
            violations[0].message if violations else "Invalid input",
            code="VALIDATION_ERROR",
            details=violations_to_details(violations),
        )
        self.violations = violations


class InsufficientPermissionsError(AuthorizationError):
    """Raised when user lacks required permissions."""

    def __init__(self, required_role: str, user_role: str):
        super().__init__(
            "Access denied. Admin privileges required."
            if required_role == "admin"
            else f"Access denied. Role '{required_role}' required.",
            code="INSUFFICIENT_PERMISSIONS",
            details={"required_role": required_role, "user_role": user_role},
        )
