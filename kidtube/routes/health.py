"""
Health check route for the KidTube backend.

This endpoint is PUBLIC and provides a simple status check for load
balancers, monitoring, and deployment verification. It reports whether the
Gemini and YouTube keys are configured, never the keys themselves.
"""

from fastapi import APIRouter

from kidtube.config import settings
from kidtube.schemas.health import HealthResponse, ServiceStatus
from kidtube.services.youtube_service import is_youtube_configured
from kidtube.utils.logging import get_logger

logger = get_logger(__name__)

# Create router with no prefix (mounted at root level in main.py)
router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check endpoint",
    description=(
        "Public health check endpoint. Returns a status indicator and which "
        "external services the recommendation pipeline will call."
    ),
    status_code=200,
    tags=["system"],
)
async def health_check() -> HealthResponse:
    """
    Public health check endpoint.

    Example response:
        {
            "status": "ok",
            "services": {"gemini": true, "youtube": false}
        }
    """
    logger.debug("Health check endpoint called")

    return HealthResponse(
        status="ok",
        services=ServiceStatus(
            gemini=bool(settings.GOOGLE_API_KEY),
            youtube=is_youtube_configured(),
        ),
    )
