"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from shared.config import get_settings
from shared.database import missing_settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    snapshots: str
    upstream: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check() -> ReadinessResponse:
    """
    Readiness check endpoint.

    Reports the configured snapshot backend and whether the upstream
    and Supabase credentials it needs are present. Makes no network calls.
    """
    settings = get_settings()
    upstream_configured = bool(
        settings.base_url and settings.admin_username and settings.admin_password
    )
    snapshots = settings.snapshot_backend
    snapshots_configured = snapshots != "supabase" or not missing_settings(settings)
    if not snapshots_configured:
        snapshots += " (not configured)"
    return ReadinessResponse(
        status="ready" if upstream_configured and snapshots_configured else "degraded",
        snapshots=snapshots,
        upstream="configured" if upstream_configured else "not configured",
    )
