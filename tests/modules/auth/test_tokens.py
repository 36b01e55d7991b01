"""Tests for modules/auth/tokens.py."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from modules.auth.exceptions import ExpiredTokenError, InvalidTokenError
from modules.auth.models import UserPublic
from modules.auth.tokens import TokenService
from shared.models import Role


@pytest.fixture
def user() -> UserPublic:
    return UserPublic(id="user-123", name="Test User", email="test@example.com", role=Role.USER)


class TestTokenService:
    def test_requires_secret(self):
        with pytest.raises(ValueError, match="JWT secret"):
            TokenService(secret="")

    def test_issue_and_verify(self, user, jwt_secret):
        tokens = TokenService(jwt_secret)
        claims = tokens.verify(tokens.issue(user))

        assert claims.id == "user-123"
        assert claims.email == "test@example.com"
        assert claims.name == "Test User"
        assert claims.role == Role.USER

    def test_expiry_is_issue_time_plus_lifetime(self, user, jwt_secret):
        issued_at = datetime.now(timezone.utc).replace(microsecond=0)
        tokens = TokenService(
            jwt_secret,
            expires_in=timedelta(hours=2),
            clock=lambda: issued_at,
        )

        claims = tokens.verify(tokens.issue(user))

        assert claims.iat == int(issued_at.timestamp())
        assert claims.exp - claims.iat == 2 * 3600

    def test_expired_token_rejected_despite_valid_signature(self, user, jwt_secret):
        long_ago = datetime.now(timezone.utc) - timedelta(days=31)
        tokens = TokenService(
            jwt_secret,
            expires_in=timedelta(days=30),
            clock=lambda: long_ago,
        )
        token = tokens.issue(user)

        with pytest.raises(ExpiredTokenError):
            tokens.verify(token)

    def test_wrong_signature_rejected(self, user, jwt_secret):
        other = TokenService("another-secret-key-for-testing-0123456789")
        with pytest.raises(InvalidTokenError):
            TokenService(jwt_secret).verify(other.issue(user))

    def test_malformed_token_rejected(self, jwt_secret):
        with pytest.raises(InvalidTokenError):
            TokenService(jwt_secret).verify("not-a-jwt")

    def test_missing_claim_rejected(self, jwt_secret):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"id": "user-123", "exp": int((now + timedelta(hours=1)).timestamp()), "iat": int(now.timestamp())},
            jwt_secret,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            TokenService(jwt_secret).verify(token)

    def test_unknown_role_rejected(self, jwt_secret):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {
                "id": "user-123",
                "email": "test@example.com",
                "name": "Test User",
                "role": "superuser",
                "iat": int(now.timestamp()),
                "exp": int((now + timedelta(hours=1)).timestamp()),
            },
            jwt_secret,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            TokenService(jwt_secret).verify(token)
