"""Health check endpoints.

Provides endpoints for monitoring service health and readiness.
"""

from fastapi import APIRouter
from pydantic import BaseModel

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    service: str
    version: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check service health.

    Returns:
        Health status with service name and version.
    """
    from infinito_catalog.infrastructure.config import settings

    return HealthResponse(
        status="healthy",
        service="infinito-catalog",
        version=settings.api_version,
    )


@router.get("/api/health")
async def api_health_check() -> dict[str, str]:
    """Health probe polled by the desktop launcher before opening the UI."""
    return {"status": "ok", "message": "Servicio funcionando"}


@router.get("/ready")
async def readiness_check() -> dict[str, str]:
    """Check if service is ready to accept requests.

    Returns:
        Readiness status.
    """
    return {"status": "ready"}
