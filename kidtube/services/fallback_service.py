"""
Fallback recommendations built without any external call.

Used when YouTube is unconfigured, returns nothing, or returns too few
videos. Each entry links to a YouTube search-results page, so the UI always
has something useful to show.

Titles and URLs depend only on (age, interests, target_count). Filler
durations are random "M:SS" labels drawn from `rng`.
"""

import random
from typing import List, Optional
from urllib.parse import quote_plus

from kidtube.schemas.recommendations import VideoRecommendation
from kidtube.utils.constants import (
    DURATION_VARIOUS,
    FALLBACK_CHANNEL_TITLE,
    PLACEHOLDER_THUMBNAIL,
    YOUTUBE_RESULTS_URL,
)

# Profile used when the request itself could not be processed
DEFAULT_FALLBACK_AGE = 5
DEFAULT_FALLBACK_INTERESTS = ["educational", "fun", "learning"]

MAX_INTEREST_ENTRIES = 6

GENERAL_TOPICS = [
    ("Learning Songs", "Educational songs and music"),
    ("Story Time", "Interactive storytelling videos"),
    ("Fun Learning", "Educational games and activities"),
]

# (title template, search keywords) cycled through for filler entries
FILLER_TEMPLATES = [
    ("{interest} Adventures for Kids", "adventures"),
    ("Learn About {interest}", "learn about"),
    ("{interest} Songs and Rhymes", "songs"),
    ("{interest} Crafts and Activities", "crafts activities"),
    ("Fun Facts About {interest}", "fun facts"),
]

FILLER_MIN_MINUTES = 2
FILLER_MAX_MINUTES = 15


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


def _search_url(*terms: str) -> str:
    query = "+".join(quote_plus(term) for term in terms if term)
    return f"{YOUTUBE_RESULTS_URL}?search_query={query}"


def _distinct_interests(interests: List[str]) -> List[str]:
    """Drop blank and repeated interests (case-insensitive), keeping order."""
    seen = set()
    distinct = []
    for interest in interests:
        cleaned = interest.strip()
        key = cleaned.lower()
        if not cleaned or key in seen:
            continue
        seen.add(key)
        distinct.append(cleaned)
    return distinct


def random_duration(rng: random.Random) -> str:
    """Synthetic "M:SS" label for filler entries."""
    minutes = rng.randint(FILLER_MIN_MINUTES, FILLER_MAX_MINUTES)
    seconds = rng.randint(0, 59)
    return f"{minutes}:{seconds:02d}"


def build_fallback_recommendations(
    age: int,
    interests: List[str],
    target_count: int,
    rng: Optional[random.Random] = None,
) -> List[VideoRecommendation]:
    """
    Build `target_count` search-link recommendations for a profile.

    Order:
    1. One entry per distinct interest (at most six)
    2. General educational topics
    3. Filler entries cycling through the interests

    Args:
        age: Child's age in years
        interests: Selected interests (defaults are used if none are usable)
        target_count: Number of entries to return
        rng: Random source for filler durations (module RNG if omitted)

    Returns:
        Exactly `target_count` entries with unique URLs
    """
    if rng is None:
        rng = random.Random()

    distinct = _distinct_interests(interests) or list(DEFAULT_FALLBACK_INTERESTS)
    recommendations: List[VideoRecommendation] = []

    for interest in distinct[:MAX_INTEREST_ENTRIES]:
        if len(recommendations) >= target_count:
            break
        recommendations.append(VideoRecommendation(
            title=f"{_capitalize(interest)} Videos for Kids",
            url=_search_url("kids", interest, "educational", "safe", "age", str(age)),
            description=(
                f"Educational {interest} content perfect for {age}-year-olds. "
                "Safe, fun, and engaging videos."
            ),
            thumbnail=PLACEHOLDER_THUMBNAIL,
            channelTitle=FALLBACK_CHANNEL_TITLE,
            duration=DURATION_VARIOUS,
        ))

    for topic, description in GENERAL_TOPICS:
        if len(recommendations) >= target_count:
            break
        recommendations.append(VideoRecommendation(
            title=f"{topic} for Kids",
            url=_search_url("kids", topic.lower(), "age", str(age)),
            description=f"{description} for {age}-year-olds",
            thumbnail=PLACEHOLDER_THUMBNAIL,
            channelTitle=FALLBACK_CHANNEL_TITLE,
            duration=DURATION_VARIOUS,
        ))

    filler_index = 0
    while len(recommendations) < target_count:
        interest = distinct[filler_index % len(distinct)]
        template, keywords = FILLER_TEMPLATES[(filler_index // len(distinct)) % len(FILLER_TEMPLATES)]
        part = filler_index // (len(distinct) * len(FILLER_TEMPLATES)) + 1
        title = template.format(interest=_capitalize(interest))
        if part > 1:
            title = f"{title} (Part {part})"

        recommendations.append(VideoRecommendation(
            title=title,
            url=_search_url("kids", interest, keywords, "age", str(age), f"part {part}"),
            description=f"More {interest} videos picked for {age}-year-olds.",
            thumbnail=PLACEHOLDER_THUMBNAIL,
            channelTitle=FALLBACK_CHANNEL_TITLE,
            duration=random_duration(rng),
        ))
        filler_index += 1

    return recommendations
