"""
ISO-8601 duration helpers for YouTube `contentDetails.duration` values.

Only the restricted `PT[nH][nM][nS]` form is understood (integer components,
no days, no fractional seconds). That is what the YouTube API returns for
regular videos.
"""

import re
from typing import Optional

from kidtube.utils.constants import DURATION_ZERO

_DURATION_PATTERN = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")


def format_duration(value: Optional[str]) -> str:
    """
    Convert an ISO-8601 duration into a clock string.

    Examples:
        - "PT1H2M3S" -> "1:02:03"
        - "PT4M13S"  -> "4:13"
        - "PT45S"    -> "0:45"
        - "" / "abc" -> "0:00"
    """
    if not value:
        return DURATION_ZERO

    match = _DURATION_PATTERN.search(value)
    if not match:
        return DURATION_ZERO

    hours = int(match.group(1) or 0)
    minutes = int(match.group(2) or 0)
    seconds = int(match.group(3) or 0)

    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"
