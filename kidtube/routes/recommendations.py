"""
FastAPI routes for the video recommendation endpoint.

Endpoints:
- POST /api/recommendations: Build a playlist for a child's profile

Status codes:
- 400: malformed JSON or missing/invalid fields (see the validation handler
  in kidtube/main.py); `recommendations` is an empty list
- 200: every handled outcome, including degraded ones (fallback entries)
- 500: only when even the emergency fallback could not be built
"""

import logging
from typing import Union

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from kidtube.schemas.recommendations import RecommendationRequest, RecommendationResponse
from kidtube.services.debug_trace import DebugTrace
from kidtube.services.recommendation_service import get_recommendations

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(
    prefix="/api",
    tags=["recommendations"]
)


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.post(
    "/recommendations",
    response_model=RecommendationResponse,
    status_code=200,
    summary="Get video recommendations for a child",
    description="""
    Builds a playlist of kid-friendly videos from age, gender and interests.

    **Pipeline:**
    1. Gemini turns the profile into a few short search queries
       (falls back to "kids <interest>" queries)
    2. Each query is searched on YouTube, in order
    3. Results are normalized and deduplicated by watch URL
    4. Too few or no videos: targeted search links fill the playlist

    `recommendations` is always present. `message` and `error` are advisory;
    `debug` is the trace of this request's pipeline steps.
    """,
    responses={
        400: {"model": RecommendationResponse, "description": "Invalid request body"},
        500: {"model": RecommendationResponse, "description": "Fallback construction failed"},
    },
)
async def recommendations_endpoint(
    request: RecommendationRequest,
) -> Union[RecommendationResponse, JSONResponse]:
    """
    Recommendation endpoint.

    - Parse/Validate: Handled by Pydantic RecommendationRequest
    - Pipeline: get_recommendations (recovers from search/LLM failures)
    - Last resort: 500 with an empty playlist
    """
    logger.info(
        f"POST /api/recommendations called: age={request.age}, sex={request.sex}, "
        f"interests={request.interests}"
    )

    trace = DebugTrace()
    trace.mark("parsed_request")

    try:
        return await get_recommendations(request, trace)
    except Exception as e:
        logger.error(f"Even fallback failed: {type(e).__name__}: {e}")
        trace.mark("fallback_failed")
        trace.record_error("fallback", str(e), errorType=type(e).__name__)

        failure = RecommendationResponse(
            recommendations=[],
            error="Complete system failure",
            debug=trace.to_dict(),
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=failure.model_dump(),
        )
