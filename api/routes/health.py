"""
Health check endpoints.

Provides endpoints for monitoring application health.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..dependencies import ServiceContainer, get_container

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str
    version: str
    storage: str
    timestamp: datetime


@router.get("/health", response_model=HealthResponse)
async def health_check(container: ServiceContainer = Depends(get_container)) -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(
        status="OK",
        message="Sweet Shop API is running",
        version=container.settings.app_version,
        storage=container.settings.storage_backend,
        timestamp=datetime.now(timezone.utc),
    )
