"""
Recommendation Service - query synthesis + YouTube search pipeline

This service turns a child's profile into a playlist of video
recommendations.

Architecture:
- Stage 1: Query synthesis (Gemini, deterministic fallback)
- Stage 2: YouTube search, one sequential call per query, then one batched
  duration lookup
- Stage 3: Normalization and deduplication by watch URL
- Stage 4: Fallback policy (search-link recommendations)

Result policy:
- At most MAX_RECOMMENDATIONS entries
- No real videos: fallback entries replace the results
- Fewer than MIN_REAL_RECOMMENDATIONS real videos: fallback entries are
  appended after the real ones, then deduplicated and truncated
- Unexpected exceptions: an emergency fallback response built from a
  default profile. Only a failure while building that propagates.

Every stage records what it did in the request's DebugTrace.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx

from kidtube.config import settings
from kidtube.schemas.recommendations import (
    RecommendationRequest,
    RecommendationResponse,
    VideoRecommendation,
)
from kidtube.services.debug_trace import DebugTrace
from kidtube.services.fallback_service import (
    DEFAULT_FALLBACK_AGE,
    DEFAULT_FALLBACK_INTERESTS,
    build_fallback_recommendations,
)
from kidtube.services.normalizer import deduplicate_recommendations, normalize_results
from kidtube.services.query_service import synthesize_queries
from kidtube.services.youtube_service import (
    fetch_durations,
    is_youtube_configured,
    search_videos,
)

logger = logging.getLogger(__name__)


def _build_http_client() -> httpx.AsyncClient:
    """Request-scoped client for the YouTube Data API."""
    return httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS)


async def _search_all(
    client: httpx.AsyncClient,
    queries: List[str],
    trace: DebugTrace,
) -> Tuple[List[Dict[str, Any]], Dict[str, str]]:
    """
    Run every query in order, then resolve durations for the unique ids.

    A failed query contributes nothing; later queries still run.
    """
    items: List[Dict[str, Any]] = []

    for query in queries:
        logger.info(f'Searching YouTube for: "{query}"')
        videos = await search_videos(client, query, settings.RESULTS_PER_QUERY, trace)
        logger.info(f"Found {len(videos)} videos for query: {query}")
        items.extend(videos)

    video_ids = list(dict.fromkeys(item["id"]["videoId"] for item in items))
    durations = await fetch_durations(client, video_ids, trace)

    return items, durations


def _assemble_response(
    real_videos: List[VideoRecommendation],
    age: int,
    interests: List[str],
    youtube_configured: bool,
    trace: DebugTrace,
) -> RecommendationResponse:
    """Apply the fallback policy to the normalized search results."""
    max_count = settings.MAX_RECOMMENDATIONS

    if not real_videos:
        trace.final_result = "No real videos found, using smart fallback based on interests"
        recommendations = deduplicate_recommendations(
            build_fallback_recommendations(age, interests, max_count),
            max_count,
        )
        message = (
            "Using targeted search links (YouTube API returned no results)"
            if youtube_configured
            else "Using targeted search links (YouTube API not configured)"
        )
    elif len(real_videos) < settings.MIN_REAL_RECOMMENDATIONS:
        fallback = build_fallback_recommendations(age, interests, max_count)
        recommendations = deduplicate_recommendations(real_videos + fallback, max_count)
        added = len(recommendations) - len(real_videos)
        trace.final_result = (
            f"Found {len(real_videos)} real videos, supplemented with {added} search links"
        )
        message = "Found a few real videos, plus targeted search links"
    else:
        recommendations = real_videos
        trace.final_result = f"Found {len(real_videos)} real videos"
        message = (
            "Found some real videos (limited results)"
            if len(real_videos) < max_count
            else "Found real YouTube videos!"
        )

    logger.info(f"Returning {len(recommendations)} recommendations ({trace.final_result})")
    trace.mark("response_ready")

    return RecommendationResponse(
        recommendations=recommendations,
        message=message,
        debug=trace.to_dict(),
    )


async def _run_pipeline(
    request: RecommendationRequest,
    trace: DebugTrace,
    http_client: Optional[httpx.AsyncClient],
) -> RecommendationResponse:
    age, sex, interests = request.age, request.sex, request.interests

    trace.request = {"age": age, "sex": sex, "interests": list(interests)}
    trace.mark("validated_input")

    youtube_configured = is_youtube_configured()
    trace.api_key_status = {
        "gemini": bool(settings.GOOGLE_API_KEY),
        "youtube": youtube_configured,
    }
    trace.mark("checked_api_keys")

    queries = await synthesize_queries(age, sex, interests, trace)
    trace.mark("prepared_youtube_queries")

    items: List[Dict[str, Any]] = []
    durations: Dict[str, str] = {}

    if youtube_configured:
        trace.mark("calling_youtube")
        if http_client is None:
            async with _build_http_client() as client:
                items, durations = await _search_all(client, queries, trace)
        else:
            items, durations = await _search_all(http_client, queries, trace)
        trace.mark("youtube_complete")
    else:
        logger.info("YouTube API key not configured, skipping video search")
        trace.mark("youtube_not_configured")

    real_videos = normalize_results(
        items,
        durations,
        limit=settings.MAX_RECOMMENDATIONS,
        description_max_length=settings.DESCRIPTION_MAX_LENGTH,
    )
    logger.info(f"Total unique videos found: {len(real_videos)}")
    trace.mark("generating_response")

    return _assemble_response(real_videos, age, interests, youtube_configured, trace)


def build_emergency_response(trace: DebugTrace, error: Exception) -> RecommendationResponse:
    """
    Fallback response for an unexpected pipeline failure.

    Uses the default profile, since the request's own data may be what
    triggered the failure. Raises if even this cannot be built.
    """
    recommendations = build_fallback_recommendations(
        DEFAULT_FALLBACK_AGE,
        DEFAULT_FALLBACK_INTERESTS,
        settings.MAX_RECOMMENDATIONS,
    )
    trace.final_result = "System error, using default fallback recommendations"

    return RecommendationResponse(
        recommendations=recommendations,
        message="Using fallback recommendations due to system error",
        error=f"System error: {error}",
        debug=trace.to_dict(),
    )


async def get_recommendations(
    request: RecommendationRequest,
    trace: DebugTrace,
    http_client: Optional[httpx.AsyncClient] = None,
) -> RecommendationResponse:
    """
    Build the playlist for a validated profile.

    Args:
        request: Validated profile (age, sex, interests)
        trace: Debug trace for this request
        http_client: Optional YouTube client; a request-scoped one is created
            and closed here when omitted

    Returns:
        RecommendationResponse with a non-empty `recommendations` list
    """
    logger.info(
        f"get_recommendations called: age={request.age}, sex={request.sex}, "
        f"interests={request.interests}"
    )

    try:
        return await _run_pipeline(request, trace, http_client)
    except Exception as e:
        logger.error(f"Critical error in recommendation pipeline: {type(e).__name__}: {e}")
        trace.mark("critical_error")
        trace.record_error("pipeline", str(e), errorType=type(e).__name__)
        return build_emergency_response(trace, e)
