"""
Authentication service implementation.

Registers users, checks credentials, issues session tokens and resolves
bearer tokens back to stored identities.
"""

import asyncio
import logging
import uuid
from typing import Optional

from shared.models import AuthenticatedUser, Role

from .exceptions import (
    AuthValidationError,
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    MissingTokenError,
    UserNotFoundError,
)
from .interfaces import IAuthService, IUserRepository
from .models import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserPublic,
    UserRecord,
)
from .passwords import DEFAULT_ROUNDS, hash_password, verify_password
from .tokens import TokenService
from .validation import normalize_email, validate_login, validate_registration

logger = logging.getLogger(__name__)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Passwords are hashed with bcrypt off the event loop; tokens are
    stateless JWTs, so nothing session-related is stored.
    """

    def __init__(
        self,
        users: IUserRepository,
        tokens: TokenService,
        bcrypt_rounds: int = DEFAULT_ROUNDS,
    ):
        self._users = users
        self._tokens = tokens
        self._bcrypt_rounds = bcrypt_rounds

    async def register(self, request: RegisterRequest) -> AuthResponse:
        """Create a 'user' account and issue its first token."""
        record = await self._create_user(request.name, request.email, request.password, Role.USER)
        logger.info("Registered user %s", record.id)
        return AuthResponse(token=self._tokens.issue(record), user=record.to_public())

    async def login(self, request: LoginRequest) -> AuthResponse:
        """Verify credentials and issue a fresh token."""
        violations = validate_login(request.email, request.password)
        if violations:
            raise AuthValidationError(violations)

        record = self._users.get_by_email(normalize_email(request.email))
        if record is None:
            logger.warning("Login failed: unknown email")
            raise InvalidCredentialsError()

        matches = await asyncio.to_thread(verify_password, request.password, record.password_hash)
        if not matches:
            logger.warning("Login failed: wrong password for user %s", record.id)
            raise InvalidCredentialsError()

        logger.info("User %s logged in", record.id)
        return AuthResponse(token=self._tokens.issue(record), user=record.to_public())

    async def authenticate(self, token: Optional[str]) -> AuthenticatedUser:
        """
        Resolve a bearer token to an existing identity.

        The identity is re-read from the store so a deleted user's token is
        rejected and role changes apply immediately.
        """
        if not token:
            raise MissingTokenError()

        claims = self._tokens.verify(token)
        record = self._users.get_by_id(claims.id)
        if record is None:
            raise UserNotFoundError(claims.id)

        return AuthenticatedUser(
            id=record.id,
            email=record.email,
            name=record.name,
            role=record.role,
        )

    async def get_user(self, user_id: str) -> UserPublic:
        record = self._users.get_by_id(user_id)
        if record is None:
            raise UserNotFoundError(user_id)
        return record.to_public()

    async def create_admin(self, name: str, email: str, password: str) -> UserPublic:
        """Create an 'admin' account. No token is issued."""
        record = await self._create_user(name, email, password, Role.ADMIN)
        logger.info("Created admin user %s", record.id)
        return record.to_public()

    async def ensure_admin(self, name: str, email: str, password: str) -> UserPublic:
        """
        Create the bootstrap admin unless the email is already registered.

        An existing account is returned as-is, whatever its role.
        """
        existing = self._users.get_by_email(normalize_email(email))
        if existing is not None:
            if existing.role != Role.ADMIN:
                logger.warning("Bootstrap admin email %s belongs to a non-admin user", existing.email)
            return existing.to_public()
        return await self.create_admin(name, email, password)

    async def _create_user(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
        role: Role,
    ) -> UserRecord:
        violations = validate_registration(name, email, password)
        if violations:
            raise AuthValidationError(violations)

        normalized = normalize_email(email)
        if self._users.get_by_email(normalized) is not None:
            raise EmailAlreadyRegisteredError(normalized)

        password_hash = await asyncio.to_thread(hash_password, password, self._bcrypt_rounds)
        record = UserRecord(
            id=str(uuid.uuid4()),
            name=name.strip(),
            email=normalized,
            password_hash=password_hash,
            role=role,
        )
        # The store re-checks uniqueness, which covers concurrent registrations
        return self._users.create(record)
