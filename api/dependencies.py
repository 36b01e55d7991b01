"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

The container is created by the application factory, stored on
``app.state.container`` and opened/closed by the application lifespan,
so the database handle is owned by the app rather than a module global.
"""

import logging
from typing import TYPE_CHECKING, Optional

from fastapi import Request

from shared.config import Settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from supabase import Client
    from modules.auth.interfaces import IAuthService, IUserRepository
    from modules.auth.tokens import TokenService
    from modules.sweets.interfaces import ISweetRepository, ISweetService, IInventoryService

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access and cached
    for the lifetime of the container. Call open() on startup to build
    everything eagerly and close() on shutdown to release them.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self._db: "Client | None" = None
        self._user_repository: "IUserRepository | None" = None
        self._sweet_repository: "ISweetRepository | None" = None
        self._tokens: "TokenService | None" = None
        self._auth_service: "IAuthService | None" = None
        self._sweet_service: "ISweetService | None" = None
        self._inventory_service: "IInventoryService | None" = None

    @property
    def db(self) -> "Client":
        """Get the Supabase client (supabase storage backend only)."""
        if self._db is None:
            from shared.database import create_supabase_client
            self._db = create_supabase_client(self.settings)
        return self._db

    @property
    def user_repository(self) -> "IUserRepository":
        """Get the credential store."""
        if self._user_repository is None:
            if self.settings.storage_backend == "supabase":
                from modules.auth.repository import SupabaseUserRepository
                self._user_repository = SupabaseUserRepository(self.db)
            else:
                from modules.auth.repository import InMemoryUserRepository
                self._user_repository = InMemoryUserRepository()
        return self._user_repository

    @property
    def sweet_repository(self) -> "ISweetRepository":
        """Get the catalog store."""
        if self._sweet_repository is None:
            if self.settings.storage_backend == "supabase":
                from modules.sweets.repository import SupabaseSweetRepository
                self._sweet_repository = SupabaseSweetRepository(self.db)
            else:
                from modules.sweets.repository import InMemorySweetRepository
                self._sweet_repository = InMemorySweetRepository()
        return self._sweet_repository

    @property
    def tokens(self) -> "TokenService":
        """Get the token service."""
        if self._tokens is None:
            from modules.auth.tokens import TokenService
            self._tokens = TokenService(
                secret=self.settings.jwt_secret,
                algorithm=self.settings.jwt_algorithm,
                expires_in=self.settings.jwt_expire,
            )
        return self._tokens

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(
                users=self.user_repository,
                tokens=self.tokens,
                bcrypt_rounds=self.settings.bcrypt_rounds,
            )
        return self._auth_service

    @property
    def sweets(self) -> "ISweetService":
        """Get the catalog service instance."""
        if self._sweet_service is None:
            from modules.sweets.service import SweetService
            self._sweet_service = SweetService(self.sweet_repository)
        return self._sweet_service

    @property
    def inventory(self) -> "IInventoryService":
        """Get the inventory service instance."""
        if self._inventory_service is None:
            from modules.sweets.inventory import InventoryService
            self._inventory_service = InventoryService(self.sweet_repository)
        return self._inventory_service

    async def open(self) -> None:
        """
        Build all services and bootstrap the admin account if configured.

        Fails fast on configuration errors such as a missing JWT secret.
        """
        self.auth
        self.sweets
        self.inventory
        logger.info("Services ready (storage backend: %s)", self.settings.storage_backend)

        admin_email: Optional[str] = self.settings.admin_email
        if admin_email and self.settings.admin_password:
            await self.auth.ensure_admin(
                self.settings.admin_name,
                admin_email,
                self.settings.admin_password,
            )

    def close(self) -> None:
        """
        Release all cached services.

        A closed container rebuilds services on next access.
        """
        self._db = None
        self._user_repository = None
        self._sweet_repository = None
        self._tokens = None
        self._auth_service = None
        self._sweet_service = None
        self._inventory_service = None
        logger.info("Services closed")


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_container(request: Request) -> ServiceContainer:
    """FastAPI dependency for the application's service container."""
    return request.app.state.container


def get_auth_service(request: Request) -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container(request).auth


def get_sweet_service(request: Request) -> "ISweetService":
    """FastAPI dependency for catalog service."""
    return get_container(request).sweets


def get_inventory_service(request: Request) -> "IInventoryService":
    """FastAPI dependency for inventory service."""
    return get_container(request).inventory
