"""
Constants shared by the recommendation pipeline.

Sentinel values are part of the response contract: the UI shows them as-is.
"""

# Thumbnail used whenever a video has no usable thumbnail, and for every
# fallback (search-link) recommendation.
PLACEHOLDER_THUMBNAIL = "/placeholder.svg?height=180&width=320"

# Duration labels
DURATION_VARIOUS = "Various"   # search-link entries (many videos behind one link)
DURATION_UNKNOWN = "Unknown"   # real video whose duration lookup failed
DURATION_ZERO = "0:00"         # unparsable ISO-8601 duration

# YouTube Data API v3
YOUTUBE_API_BASE_URL = "https://www.googleapis.com/youtube/v3"
YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v={video_id}"
YOUTUBE_RESULTS_URL = "https://youtube.com/results"
YOUTUBE_DETAILS_BATCH_SIZE = 50

# Value shipped in the sample .env; treated the same as a missing key
YOUTUBE_API_KEY_PLACEHOLDER = "your_youtube_api_key_here"

FALLBACK_CHANNEL_TITLE = "YouTube Search"

DESCRIPTION_ELLIPSIS = "..."
