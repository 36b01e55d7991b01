"""
Authentication API endpoints.

Registration and login are public; /me requires a bearer token.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_auth_service
from api.middleware.auth import get_current_user
from shared.models import AuthenticatedUser

from .interfaces import IAuthService
from .models import (
    AuthResponse,
    CurrentUserResponse,
    LoginRequest,
    RegisterRequest,
    UserPublic,
)

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    request: RegisterRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Register a new user.

    Emails are trimmed and lowercased before the uniqueness check.
    Returns the session token and the public user profile.
    """
    return await service.register(request)


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Log in with email and password.

    Every successful login issues a new token.
    """
    return await service.login(request)


@router.get("/me", response_model=CurrentUserResponse)
async def me(user: AuthenticatedUser = Depends(get_current_user)) -> CurrentUserResponse:
    """Get the current user's profile."""
    return CurrentUserResponse(
        user=UserPublic(id=user.id, name=user.name, email=user.email, role=user.role),
    )
