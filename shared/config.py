"""
Centralized configuration for the Sweet Shop backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings are namespaced (e.g., JWT_*, SUPABASE_*, ADMIN_*).
"""

import re
from datetime import timedelta
from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_DURATION_PATTERN = re.compile(r"^\s*(\d+)\s*([smhd])\s*$", re.IGNORECASE)
_DURATION_UNITS = {"s": "seconds", "m": "minutes", "h": "hours", "d": "days"}


def parse_duration(value: object) -> object:
    """
    Parse shorthand durations such as "30d", "12h", "45m" or "90s".

    Anything that does not match the shorthand is returned unchanged so
    pydantic can apply its own timedelta parsing (integer seconds, ISO 8601).
    """
    if isinstance(value, str):
        match = _DURATION_PATTERN.match(value)
        if match:
            amount, unit = match.groups()
            return timedelta(**{_DURATION_UNITS[unit.lower()]: int(amount)})
    return value


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Sweet Shop API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 5000
    reload: bool = False

    # CORS settings
    frontend_url: str = "http://localhost:3000"
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Session tokens
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    jwt_expire: timedelta = timedelta(days=30)

    # Password hashing work factor
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # Storage
    storage_backend: Literal["memory", "supabase"] = "memory"
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    # Direct Postgres connection string, used only by run_migrations.py
    supabase_db_url: str = ""

    # Optional admin account created on startup
    admin_name: str = "Admin User"
    admin_email: Optional[str] = None
    admin_password: Optional[str] = None

    @field_validator("jwt_expire", mode="before")
    @classmethod
    def _parse_jwt_expire(cls, value: object) -> object:
        return parse_duration(value)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
