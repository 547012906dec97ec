"""
Pytest configuration for KidTube backend tests.

Sets up test environment and global fixtures.
"""
import os
from typing import Any, Dict, List, Optional

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

# Disable config validation during tests
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables before kidtube.config is imported.
# Keys are blanked so a developer's .env never leads to real API calls.
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ["GOOGLE_API_KEY"] = ""
os.environ["YOUTUBE_API_KEY"] = ""
os.environ["ACCESS_PASSWORD"] = ""

# Pin the pipeline limits to their defaults
os.environ["QUERY_COUNT"] = "3"
os.environ["RESULTS_PER_QUERY"] = "4"
os.environ["MAX_RECOMMENDATIONS"] = "9"
os.environ["MIN_REAL_RECOMMENDATIONS"] = "3"
os.environ["DESCRIPTION_MAX_LENGTH"] = "150"


def make_search_item(
    video_id: str,
    title: Optional[str] = None,
    description: str = "A fun video for kids.",
    channel: str = "Kids Channel",
    thumbnails: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Build a YouTube search#result item."""
    if thumbnails is None:
        thumbnails = {
            "medium": {"url": f"https://i.ytimg.com/vi/{video_id}/mqdefault.jpg"},
            "high": {"url": f"https://i.ytimg.com/vi/{video_id}/hqdefault.jpg"},
        }
    return {
        "kind": "youtube#searchResult",
        "id": {"kind": "youtube#video", "videoId": video_id},
        "snippet": {
            "title": title or f"Video {video_id}",
            "description": description,
            "thumbnails": thumbnails,
            "channelTitle": channel,
        },
    }


def make_gemini_client(text: str) -> MagicMock:
    """Mock genai.Client whose async generate_content returns `text`."""
    part = MagicMock()
    part.text = text

    response = MagicMock()
    response.candidates = [MagicMock()]
    response.candidates[0].content.parts = [part]
    response.text = text

    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(return_value=response)
    return client


class FakeYouTubeAPI:
    """
    In-memory YouTube Data API served through httpx.MockTransport.

    Attributes:
        search_results: cleaned query -> list of search items
        failing_queries: cleaned query -> HTTP status to answer with
        raising_queries: cleaned queries that raise a transport error
        durations: video id -> ISO-8601 duration
        durations_status: status for /videos calls (200 = normal)
        requests: every request received, in order
    """

    def __init__(self):
        self.search_results: Dict[str, List[Dict[str, Any]]] = {}
        self.failing_queries: Dict[str, int] = {}
        self.raising_queries: set = set()
        self.durations: Dict[str, str] = {}
        self.durations_status = 200
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        params = request.url.params

        if request.url.path.endswith("/search"):
            query = params["q"]
            if query in self.raising_queries:
                raise httpx.ConnectError("connection refused", request=request)
            if query in self.failing_queries:
                code = self.failing_queries[query]
                return httpx.Response(
                    code,
                    json={"error": {"code": code, "message": "quotaExceeded"}},
                )
            return httpx.Response(200, json={"items": self.search_results.get(query, [])})

        if request.url.path.endswith("/videos"):
            if self.durations_status != 200:
                return httpx.Response(self.durations_status, json={"error": {"message": "backendError"}})
            ids = params["id"].split(",")
            items = [
                {"id": video_id, "contentDetails": {"duration": self.durations[video_id]}}
                for video_id in ids
                if video_id in self.durations
            ]
            return httpx.Response(200, json={"items": items})

        return httpx.Response(404, json={"error": {"message": "not found"}})

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    def search_queries(self) -> List[str]:
        """Queries sent to /search, in call order."""
        return [r.url.params["q"] for r in self.requests if r.url.path.endswith("/search")]

    def video_lookups(self) -> List[List[str]]:
        """Id batches sent to /videos, in call order."""
        return [
            r.url.params["id"].split(",")
            for r in self.requests
            if r.url.path.endswith("/videos")
        ]


@pytest.fixture
def fake_youtube():
    """Fresh fake YouTube API."""
    return FakeYouTubeAPI()


@pytest.fixture
def youtube_configured():
    """Pretend a real YouTube key is configured."""
    from kidtube.config import settings

    with patch.object(settings, "YOUTUBE_API_KEY", "test-youtube-key"):
        yield


@pytest.fixture
def no_gemini():
    """Gemini client unavailable (no key)."""
    with patch("kidtube.services.query_service._get_gemini_client", return_value=None) as mock:
        yield mock


@pytest.fixture
def search_item():
    """Builder for YouTube search items."""
    return make_search_item


@pytest.fixture
def gemini_returning():
    """Builder for mock Gemini clients returning a fixed text."""
    return make_gemini_client
