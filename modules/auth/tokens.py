"""
Session token issuing and verification.

Tokens are stateless HS256 JWTs. Nothing is stored server-side, so a token
stays valid until its expiry claim passes.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ExpiredTokenError, InvalidTokenError
from .models import TokenClaims, UserPublic, UserRecord

DEFAULT_EXPIRES_IN = timedelta(days=30)
REQUIRED_CLAIMS = ["id", "email", "name", "role", "iat", "exp"]

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """
    Issues and validates signed session tokens.

    The clock is injectable so issuing is deterministic under test.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_in: timedelta = DEFAULT_EXPIRES_IN,
        clock: Optional[Clock] = None,
    ):
        if not secret:
            raise ValueError("JWT secret is not configured. Set the JWT_SECRET environment variable.")
        self._secret = secret
        self._algorithm = algorithm
        self._expires_in = expires_in
        self._clock = clock or _utcnow

    @property
    def expires_in(self) -> timedelta:
        return self._expires_in

    def issue(self, user: UserRecord | UserPublic) -> str:
        """
        Encode the user's identity claims into a signed token.

        Args:
            user: The user the token is issued to

        Returns:
            Encoded JWT string
        """
        issued_at = self._clock()
        payload = {
            "id": user.id,
            "email": user.email,
            "name": user.name,
            "role": user.role.value,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self._expires_in).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Validate a token's signature and expiry and return its claims.

        Raises:
            ExpiredTokenError: If the expiry claim is in the past
            InvalidTokenError: If the signature does not match or the token is malformed
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
            return TokenClaims(**payload)
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except (jwt.InvalidTokenError, PydanticValidationError):
            raise InvalidTokenError()
