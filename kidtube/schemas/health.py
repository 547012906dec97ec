"""
Health check endpoint schemas.

The health endpoint is public and reports which external services are
configured, so deployments can be checked without exposing any key.
"""

from pydantic import BaseModel, Field


class ServiceStatus(BaseModel):
    """Configuration status of the external collaborators."""

    gemini: bool = Field(..., description="Gemini API key present (query synthesis)")
    youtube: bool = Field(..., description="YouTube API key present and not the placeholder")


class HealthResponse(BaseModel):
    """
    Response model for GET /health endpoint.

    Used by load balancers, monitoring systems, and deployment checks.
    """

    status: str = Field(
        default="ok",
        description="Health status of the API (always 'ok' if responding)",
        examples=["ok"]
    )
    services: ServiceStatus = Field(
        ...,
        description="Which external services the pipeline will call"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "ok",
                "services": {"gemini": True, "youtube": False}
            }
        }
    }
