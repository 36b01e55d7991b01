"""
Bearer token authentication dependencies.

get_current_user resolves the Authorization header to a stored identity;
require_role layers a role check on top of it.
"""

from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from modules.auth.exceptions import InsufficientPermissionsError
from modules.auth.interfaces import IAuthService
from shared.models import AuthenticatedUser, Role

from ..dependencies import get_auth_service

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Fails closed: a missing, invalid or expired token, or a token whose
    user no longer exists, raises an AuthenticationError (401). The
    resolved identity is also attached to ``request.state.user``.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    token = credentials.credentials if credentials is not None else None
    user = await auth.authenticate(token)
    request.state.user = user
    return user


def require_role(role: Role):
    """
    Build a dependency that requires an authenticated user with ``role``.

    The role check depends on get_current_user, so it only runs once the
    identity has been resolved.

    Usage:
        @router.post("/admin-only")
        async def admin_route(user: AuthenticatedUser = Depends(require_role(Role.ADMIN))):
            ...
    """

    async def check_role(user: AuthenticatedUser = Depends(get_current_user)) -> AuthenticatedUser:
        if user.role != role:
            raise InsufficientPermissionsError(role.value, user.role.value)
        return user

    return check_role


require_admin = require_role(Role.ADMIN)
