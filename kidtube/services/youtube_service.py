"""
YouTube Service - video search adapter

Wraps the two YouTube Data API v3 calls the pipeline needs:
- GET /search  (one call per synthesized query, snippet data)
- GET /videos  (batched contentDetails lookup for durations)

Every function here degrades instead of raising: an unconfigured key, a
non-2xx status, an API error payload or a transport failure yields an empty
result for that call and an entry in the debug trace. Calls are made once,
without retries.

The httpx.AsyncClient is owned by the caller (one per request).
"""

import logging
import re
from typing import Any, Dict, List

import httpx

from kidtube.config import settings
from kidtube.services.debug_trace import DebugTrace
from kidtube.utils.constants import (
    YOUTUBE_API_BASE_URL,
    YOUTUBE_API_KEY_PLACEHOLDER,
    YOUTUBE_DETAILS_BATCH_SIZE,
)

logger = logging.getLogger(__name__)


def is_youtube_configured() -> bool:
    """False when the key is missing or still the sample-.env placeholder."""
    api_key = settings.YOUTUBE_API_KEY
    return bool(api_key) and api_key != YOUTUBE_API_KEY_PLACEHOLDER


def clean_query(query: str) -> str:
    """Trim, drop punctuation and collapse whitespace."""
    cleaned = re.sub(r"[^\w\s]", "", query.strip())
    return re.sub(r"\s+", " ", cleaned).strip()


def _is_video_item(item: Any) -> bool:
    """A search item the normalizer can use: `id.videoId` set, snippet a dict if present."""
    if not isinstance(item, dict):
        return False
    item_id = item.get("id")
    if not isinstance(item_id, dict):
        return False
    video_id = item_id.get("videoId")
    if not isinstance(video_id, str) or not video_id:
        return False
    snippet = item.get("snippet")
    return snippet is None or isinstance(snippet, dict)


def _api_error_message(response: httpx.Response) -> str:
    """Best-effort message from a YouTube error payload."""
    try:
        payload = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"

    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return f"HTTP {response.status_code}: {error['message']}"
    return f"HTTP {response.status_code}"


async def search_videos(
    client: httpx.AsyncClient,
    query: str,
    max_results: int,
    trace: DebugTrace,
) -> List[Dict[str, Any]]:
    """
    Search YouTube for one query.

    Args:
        client: Request-scoped HTTP client
        query: Synthesized search query
        max_results: Result cap for this query
        trace: Debug trace for this request

    Returns:
        Raw `search#result` items that carry a videoId, in API order.
        Empty when YouTube is unconfigured or the call fails.
    """
    if not is_youtube_configured():
        logger.info("YouTube API key not configured, skipping YouTube search")
        return []

    cleaned = clean_query(query)
    if not cleaned:
        trace.record_search(query, 0, False, error="Query is empty after cleaning")
        return []

    params = {
        "part": "snippet",
        "q": cleaned,
        "type": "video",
        "maxResults": max_results,
        "safeSearch": settings.YOUTUBE_SAFE_SEARCH,
        "order": "relevance",
        "key": settings.YOUTUBE_API_KEY,
    }

    logger.info(f'Searching YouTube for cleaned query: "{cleaned}"')

    try:
        response = await client.get(f"{YOUTUBE_API_BASE_URL}/search", params=params)
    except httpx.HTTPError as e:
        logger.error(f'YouTube search transport error for query "{cleaned}": {type(e).__name__}')
        trace.record_error("search", str(e) or type(e).__name__, query=cleaned)
        trace.record_search(cleaned, 0, False, error=type(e).__name__)
        return []

    if response.status_code != 200:
        message = _api_error_message(response)
        logger.error(f'YouTube search failed for query "{cleaned}": {message}')
        trace.record_error("search", message, query=cleaned, status=response.status_code)
        trace.record_search(cleaned, 0, False, error=message)
        return []

    try:
        data = response.json()
    except ValueError:
        logger.error(f'YouTube search returned a non-JSON body for query "{cleaned}"')
        trace.record_error("search", "Response body is not JSON", query=cleaned)
        trace.record_search(cleaned, 0, False, error="invalid_json")
        return []

    if not isinstance(data, dict):
        trace.record_error("search", "Unexpected response shape", query=cleaned)
        trace.record_search(cleaned, 0, False, error="invalid_shape")
        return []

    error = data.get("error")
    if error:
        message = str(error.get("message", error)) if isinstance(error, dict) else str(error)
        logger.error(f'YouTube API error for query "{cleaned}": {message}')
        trace.record_error("search", message, query=cleaned)
        trace.record_search(cleaned, 0, False, error=message)
        return []

    raw_items = data.get("items") or []
    if not isinstance(raw_items, list):
        raw_items = []

    items = [item for item in raw_items if _is_video_item(item)]
    skipped = len(raw_items) - len(items)
    if skipped:
        logger.debug(f'Skipped {skipped} non-video or malformed items for query "{cleaned}"')

    if not items:
        logger.info(f"No videos found for query: {cleaned}")

    trace.record_search(
        cleaned,
        len(items),
        len(items) > 0,
        videos=[(item.get("snippet") or {}).get("title") or "" for item in items[:2]],
    )
    return items


async def fetch_durations(
    client: httpx.AsyncClient,
    video_ids: List[str],
    trace: DebugTrace,
) -> Dict[str, str]:
    """
    Look up ISO-8601 durations for a list of video ids.

    Ids are sent in batches of at most 50 (the API limit). A failed batch is
    skipped; ids it contained simply have no entry in the result.

    Returns:
        Mapping of video id to `contentDetails.duration` (e.g. "PT4M13S")
    """
    durations: Dict[str, str] = {}

    if not video_ids or not is_youtube_configured():
        return durations

    for start in range(0, len(video_ids), YOUTUBE_DETAILS_BATCH_SIZE):
        batch = video_ids[start:start + YOUTUBE_DETAILS_BATCH_SIZE]
        params = {
            "part": "contentDetails",
            "id": ",".join(batch),
            "key": settings.YOUTUBE_API_KEY,
        }

        try:
            response = await client.get(f"{YOUTUBE_API_BASE_URL}/videos", params=params)
        except httpx.HTTPError as e:
            logger.error(f"YouTube duration lookup transport error: {type(e).__name__}")
            trace.record_error("durations", str(e) or type(e).__name__, videoCount=len(batch))
            continue

        if response.status_code != 200:
            message = _api_error_message(response)
            logger.error(f"YouTube duration lookup failed: {message}")
            trace.record_error("durations", message, videoCount=len(batch))
            continue

        try:
            data = response.json()
        except ValueError:
            logger.error("YouTube duration lookup returned a non-JSON body")
            trace.record_error("durations", "Response body is not JSON", videoCount=len(batch))
            continue

        if not isinstance(data, dict):
            trace.record_error("durations", "Unexpected response shape", videoCount=len(batch))
            continue

        raw_items = data.get("items") or []
        if not isinstance(raw_items, list):
            raw_items = []

        for item in raw_items:
            if not isinstance(item, dict):
                continue
            video_id = item.get("id")
            details = item.get("contentDetails")
            duration = details.get("duration") if isinstance(details, dict) else None
            if isinstance(video_id, str) and isinstance(duration, str) and video_id and duration:
                durations[video_id] = duration

    missing = len(set(video_ids) - set(durations))
    if missing:
        logger.warning(f"No duration resolved for {missing} of {len(video_ids)} videos")

    return durations
