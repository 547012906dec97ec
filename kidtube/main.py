"""
FastAPI application entry point for the KidTube backend.

This module creates the FastAPI app instance and registers all routers.
"""

import logging
from typing import Any, Dict, List

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from kidtube.config import settings
from kidtube.routes.auth import router as auth_router
from kidtube.routes.health import router as health_router
from kidtube.routes.interests import router as interests_router
from kidtube.routes.recommendations import router as recommendations_router
from kidtube.schemas.recommendations import RecommendationResponse
from kidtube.services.debug_trace import DebugTrace
from kidtube.utils.logging import install_redaction

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
install_redaction("httpx", "httpcore")

logger = logging.getLogger(__name__)

RECOMMENDATIONS_PATH = "/api/recommendations"


def _get_cors_origins() -> List[str]:
    """
    Get allowed CORS origins based on environment.

    - ENVIRONMENT=production: Uses CORS_ALLOWED_ORIGINS (none if unset)
    - Any other environment: Allows all origins for local dev

    Returns:
        List of allowed origin URLs, or ["*"] for development.
    """
    if settings.is_production():
        origins = list(settings.CORS_ALLOWED_ORIGINS)
        if origins:
            logger.info(f"CORS configured for production with {len(origins)} allowed origins")
        else:
            logger.warning(
                "CORS_ALLOWED_ORIGINS not set in production. "
                "No web origins allowed. Set CORS_ALLOWED_ORIGINS for the web client."
            )
        return origins

    logger.info(f"CORS configured for {settings.ENVIRONMENT}: allowing all origins")
    return ["*"]


def _summarize_errors(exc: RequestValidationError) -> List[Dict[str, Any]]:
    """JSON-safe subset of the validation errors."""
    return [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": str(error.get("msg", "")),
            "type": str(error.get("type", "")),
        }
        for error in exc.errors()
    ]


# Create FastAPI app
app = FastAPI(
    title="KidTube API",
    description="Kid-friendly video recommendations from age, gender and interests",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc"
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Log validation errors and map them to JSON error responses.

    Other endpoints get 422 with the error details. The recommendation
    endpoint answers 400 and keeps its response shape (empty
    `recommendations`, `error`, `debug`) so the UI can handle every outcome
    the same way. No external service is called for a rejected request.
    """
    errors = _summarize_errors(exc)
    logger.error(f"Validation error on {request.method} {request.url.path}: {errors}")

    if request.url.path != RECOMMENDATIONS_PATH:
        return JSONResponse(
            status_code=422,
            content={"error": "validation_error", "details": errors},
        )

    malformed = any(error["type"] == "json_invalid" for error in errors)

    trace = DebugTrace()
    trace.mark("validation_failed")
    trace.record_error("validation", "Invalid request body" if malformed else "Missing or invalid fields")

    debug = trace.to_dict()
    debug["validation"] = errors

    response = RecommendationResponse(
        recommendations=[],
        error=(
            "Invalid request body"
            if malformed
            else "Missing required fields: age, sex, and interests are required"
        ),
        debug=debug,
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=response.model_dump(),
    )


# Configure CORS with environment-based origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=_get_cors_origins(),
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health_router)
app.include_router(recommendations_router)
app.include_router(interests_router)
app.include_router(auth_router)

logger.info("FastAPI app initialized successfully")
