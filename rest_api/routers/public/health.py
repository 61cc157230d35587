"""
Health check endpoint for the REST API.
"""

from fastapi import APIRouter

from shared.config.settings import settings
from shared.utils.schemas import HealthResponse


router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """
    Basic health check endpoint.
    Returns service status without checking dependencies.
    """
    return HealthResponse(status="ok", service="rest-api", environment=settings.environment)
