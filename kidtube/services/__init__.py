"""
Service layer for the KidTube backend.

Contains the recommendation pipeline and its stages:
- Query synthesis (Gemini) with deterministic fallback queries
- YouTube search and duration lookup
- Normalization and deduplication of search results
- Fallback (search-link) recommendations

Services act as the glue between routes (HTTP layer) and external APIs.
"""

from .debug_trace import DebugTrace
from .fallback_service import build_fallback_recommendations
from .interest_service import get_available_interests
from .normalizer import deduplicate_recommendations, normalize_results, normalize_video
from .query_service import synthesize_queries
from .recommendation_service import get_recommendations
from .youtube_service import fetch_durations, is_youtube_configured, search_videos

__all__ = [
    "DebugTrace",
    "build_fallback_recommendations",
    "get_available_interests",
    "deduplicate_recommendations",
    "normalize_results",
    "normalize_video",
    "synthesize_queries",
    "get_recommendations",
    "fetch_durations",
    "is_youtube_configured",
    "search_videos",
]
