"""
Health check endpoints.
"""

import platform
from datetime import datetime, timezone

from fastapi import APIRouter, status
from pydantic import BaseModel

from ...core.config import settings


router = APIRouter()

_started_at = datetime.now(timezone.utc)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    service: str
    timestamp: datetime
    version: str
    uptime_seconds: float
    store: str
    python_version: str


@router.get("/health", response_model=HealthResponse, status_code=status.HTTP_200_OK)
async def health_check():
    """Health check endpoint."""
    now = datetime.now(timezone.utc)
    return HealthResponse(
        status="healthy",
        service=settings.app_name,
        timestamp=now,
        version=settings.app_version,
        uptime_seconds=(now - _started_at).total_seconds(),
        store="database" if settings.database_url else "fixture",
        python_version=platform.python_version(),
    )

