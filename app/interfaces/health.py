"""
Health check router.

Provides a simple health endpoint for liveness/readiness probes.
No business logic. Returns application status and version.
"""

from fastapi import APIRouter, Request

from app.core.config import settings
from app.interfaces.schemas import HealthResponse
from app.shared.security.rate_limiting import limiter

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns application health status and version.",
)
@limiter.limit(settings.rate_limit_default)
def health_check(request: Request) -> HealthResponse:
    """Return current application health status."""
    return HealthResponse(status="ok", version=settings.version)
