"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import asyncio
from datetime import datetime, timedelta, timezone

import jwt  # PyJWT
import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import ServiceContainer
from modules.auth.models import AuthResponse, LoginRequest, RegisterRequest
from modules.sweets.models import Sweet, SweetCreate
from shared.config import Settings

# Test JWT secret (only for testing); long enough for HS256 key-length checks
TEST_JWT_SECRET = "test-secret-key-for-testing-only-0123456789"

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "admin-password"


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    name: str = "Test User",
    role: str = "user",
    expired: bool = False,
    secret: str = TEST_JWT_SECRET,
) -> str:
    """
    Create a test JWT token carrying the session claims.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        name: Display name to include in the token
        role: Role claim
        expired: If True, creates an expired token
        secret: Signing secret

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "id": user_id,
        "email": email,
        "name": name,
        "role": role,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def auth_headers_for(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def settings() -> Settings:
    """Settings for an in-memory app with a fast bcrypt cost."""
    return Settings(
        jwt_secret=TEST_JWT_SECRET,
        bcrypt_rounds=4,
        storage_backend="memory",
        admin_email=None,
        admin_password=None,
    )


@pytest.fixture
def container(settings: Settings) -> ServiceContainer:
    return ServiceContainer(settings)


@pytest.fixture
def app(container: ServiceContainer):
    return create_app(container=container)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def user_session(container: ServiceContainer) -> AuthResponse:
    """A registered regular user and their token."""
    return asyncio.run(container.auth.register(
        RegisterRequest(name="Test User", email="user@example.com", password="user-password")
    ))


@pytest.fixture
def admin_session(container: ServiceContainer) -> AuthResponse:
    """An admin account and a token from logging in as them."""

    async def create_and_login() -> AuthResponse:
        await container.auth.create_admin("Admin User", ADMIN_EMAIL, ADMIN_PASSWORD)
        return await container.auth.login(LoginRequest(email=ADMIN_EMAIL, password=ADMIN_PASSWORD))

    return asyncio.run(create_and_login())


@pytest.fixture
def user_headers(user_session) -> dict[str, str]:
    return auth_headers_for(user_session.token)


@pytest.fixture
def admin_headers(admin_session) -> dict[str, str]:
    return auth_headers_for(admin_session.token)


@pytest.fixture
def ladoo(container: ServiceContainer) -> Sweet:
    """A sweet with ten units in stock."""
    return asyncio.run(container.sweets.create_sweet(
        SweetCreate(name="Ladoo", category="Traditional", price=15.0, quantity=10)
    ))


@pytest.fixture
def jwt_secret() -> str:
    return TEST_JWT_SECRET


@pytest.fixture
def make_token():
    """Factory for hand-built session tokens; see create_test_token."""
    return create_test_token
