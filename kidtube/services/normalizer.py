"""
Normalization and deduplication of YouTube search results.

Maps raw `search#result` items into VideoRecommendation records and removes
duplicates by watch URL. Deduplication keeps the first occurrence and the
original relative order, so the playlist follows query order.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from kidtube.schemas.recommendations import VideoRecommendation
from kidtube.utils.constants import (
    DESCRIPTION_ELLIPSIS,
    DURATION_UNKNOWN,
    PLACEHOLDER_THUMBNAIL,
    YOUTUBE_WATCH_URL,
)
from kidtube.utils.duration import format_duration

logger = logging.getLogger(__name__)


def truncate_description(description: str, max_length: Optional[int]) -> str:
    """Cut to `max_length` characters and append "..." when text was cut."""
    if max_length is None or len(description) <= max_length:
        return description
    return description[:max_length] + DESCRIPTION_ELLIPSIS


def select_thumbnail(thumbnails: Dict[str, Any]) -> str:
    """Prefer the high-resolution variant, then medium, then the placeholder."""
    if not isinstance(thumbnails, dict):
        return PLACEHOLDER_THUMBNAIL
    for variant in ("high", "medium"):
        entry = thumbnails.get(variant)
        url = entry.get("url") if isinstance(entry, dict) else None
        if isinstance(url, str) and url:
            return url
    return PLACEHOLDER_THUMBNAIL


def normalize_video(
    item: Dict[str, Any],
    durations: Dict[str, str],
    description_max_length: Optional[int] = None,
) -> VideoRecommendation:
    """
    Map one raw search result to a VideoRecommendation.

    Args:
        item: YouTube `search#result` item with `id.videoId`
        durations: ISO-8601 durations keyed by video id
        description_max_length: Truncation limit (None keeps the full text)
    """
    video_id = item["id"]["videoId"]
    snippet = item.get("snippet") or {}

    iso_duration = durations.get(video_id)
    duration = format_duration(iso_duration) if iso_duration else DURATION_UNKNOWN

    return VideoRecommendation(
        title=snippet.get("title") or "Untitled video",
        url=YOUTUBE_WATCH_URL.format(video_id=video_id),
        description=truncate_description(snippet.get("description") or "", description_max_length),
        thumbnail=select_thumbnail(snippet.get("thumbnails") or {}),
        channelTitle=snippet.get("channelTitle") or "",
        duration=duration,
    )


def deduplicate_recommendations(
    recommendations: Iterable[VideoRecommendation],
    limit: Optional[int] = None,
) -> List[VideoRecommendation]:
    """
    Drop entries whose URL was already seen and truncate to `limit`.

    Running this on its own output returns the same list.
    """
    seen = set()
    unique: List[VideoRecommendation] = []

    for recommendation in recommendations:
        if recommendation.url in seen:
            continue
        seen.add(recommendation.url)
        unique.append(recommendation)
        if limit is not None and len(unique) >= limit:
            break

    return unique


def normalize_results(
    items: List[Dict[str, Any]],
    durations: Dict[str, str],
    limit: Optional[int] = None,
    description_max_length: Optional[int] = None,
) -> List[VideoRecommendation]:
    """Normalize concatenated per-query results, then deduplicate and truncate."""
    normalized = [normalize_video(item, durations, description_max_length) for item in items]
    unique = deduplicate_recommendations(normalized, limit)

    if len(unique) < len(normalized):
        logger.info(f"Normalized {len(normalized)} results into {len(unique)} unique videos")

    return unique
