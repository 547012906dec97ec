"""
Tests for the YouTube Data API adapter.

HTTP traffic goes through httpx.MockTransport (see FakeYouTubeAPI in conftest).
"""

import httpx
import pytest
from unittest.mock import patch

from kidtube.config import settings
from kidtube.services.debug_trace import DebugTrace
from kidtube.services.youtube_service import (
    clean_query,
    fetch_durations,
    is_youtube_configured,
    search_videos,
)


class TestConfiguration:
    """Tests for is_youtube_configured."""

    def test_blank_key(self):
        with patch.object(settings, "YOUTUBE_API_KEY", ""):
            assert is_youtube_configured() is False

    def test_placeholder_key(self):
        with patch.object(settings, "YOUTUBE_API_KEY", "your_youtube_api_key_here"):
            assert is_youtube_configured() is False

    def test_real_key(self, youtube_configured):
        assert is_youtube_configured() is True


class TestCleanQuery:
    """Tests for clean_query."""

    @pytest.mark.parametrize("raw,expected", [
        ("kids dinosaurs", "kids dinosaurs"),
        ("  kids   space  ", "kids space"),
        ("kids' songs!", "kids songs"),
        ("\"kids art\"", "kids art"),
        ("kids & animals", "kids animals"),
        ("!!!", ""),
    ])
    def test_cleaning(self, raw, expected):
        assert clean_query(raw) == expected


class TestSearchVideos:
    """Tests for search_videos."""

    @pytest.mark.asyncio
    async def test_unconfigured_makes_no_call(self, fake_youtube):
        trace = DebugTrace()
        async with fake_youtube.client() as client:
            items = await search_videos(client, "kids animals", 4, trace)

        assert items == []
        assert fake_youtube.requests == []

    @pytest.mark.asyncio
    async def test_returns_items_and_sends_params(self, fake_youtube, youtube_configured, search_item):
        fake_youtube.search_results["kids animal songs"] = [search_item("a1"), search_item("a2")]
        trace = DebugTrace()

        async with fake_youtube.client() as client:
            items = await search_videos(client, "kids animal songs!", 4, trace)

        assert [item["id"]["videoId"] for item in items] == ["a1", "a2"]

        params = fake_youtube.requests[0].url.params
        assert params["q"] == "kids animal songs"
        assert params["part"] == "snippet"
        assert params["type"] == "video"
        assert params["maxResults"] == "4"
        assert params["safeSearch"] == "moderate"
        assert params["order"] == "relevance"
        assert params["key"] == "test-youtube-key"

        assert trace.search_results == [{
            "query": "kids animal songs",
            "videoCount": 2,
            "success": True,
            "videos": ["Video a1", "Video a2"],
        }]

    @pytest.mark.asyncio
    async def test_items_without_video_id_are_dropped(self, fake_youtube, youtube_configured, search_item):
        channel = {"id": {"kind": "youtube#channel", "channelId": "UC1"}, "snippet": {"title": "A channel"}}
        fake_youtube.search_results["kids music"] = [channel, search_item("m1")]

        async with fake_youtube.client() as client:
            items = await search_videos(client, "kids music", 4, DebugTrace())

        assert len(items) == 1
        assert items[0]["id"]["videoId"] == "m1"

    @pytest.mark.asyncio
    async def test_no_results(self, fake_youtube, youtube_configured):
        trace = DebugTrace()
        async with fake_youtube.client() as client:
            items = await search_videos(client, "kids nothing", 4, trace)

        assert items == []
        assert trace.search_results[0]["success"] is False
        assert trace.errors == []

    @pytest.mark.asyncio
    async def test_http_error_status(self, fake_youtube, youtube_configured):
        fake_youtube.failing_queries["kids robots"] = 403
        trace = DebugTrace()

        async with fake_youtube.client() as client:
            items = await search_videos(client, "kids robots", 4, trace)

        assert items == []
        assert trace.errors[0]["stage"] == "search"
        assert trace.errors[0]["status"] == 403
        assert "quotaExceeded" in trace.errors[0]["message"]
        assert trace.search_results[0]["success"] is False

    @pytest.mark.asyncio
    async def test_transport_error(self, fake_youtube, youtube_configured):
        fake_youtube.raising_queries.add("kids robots")
        trace = DebugTrace()

        async with fake_youtube.client() as client:
            items = await search_videos(client, "kids robots", 4, trace)

        assert items == []
        assert trace.search_results[0]["error"] == "ConnectError"

    @pytest.mark.asyncio
    async def test_error_payload_with_200(self, youtube_configured):
        def handler(request):
            return httpx.Response(200, json={"error": {"message": "keyInvalid"}})

        trace = DebugTrace()
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            items = await search_videos(client, "kids art", 4, trace)

        assert items == []
        assert trace.errors[0]["message"] == "keyInvalid"

    @pytest.mark.asyncio
    async def test_non_json_body(self, youtube_configured):
        def handler(request):
            return httpx.Response(200, text="<html>oops</html>")

        trace = DebugTrace()
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            items = await search_videos(client, "kids art", 4, trace)

        assert items == []
        assert trace.search_results[0]["error"] == "invalid_json"

    @pytest.mark.asyncio
    async def test_query_empty_after_cleaning(self, fake_youtube, youtube_configured):
        trace = DebugTrace()
        async with fake_youtube.client() as client:
            items = await search_videos(client, "?!", 4, trace)

        assert items == []
        assert fake_youtube.requests == []
        assert trace.search_results[0]["success"] is False


class TestFetchDurations:
    """Tests for fetch_durations."""

    @pytest.mark.asyncio
    async def test_maps_ids_to_durations(self, fake_youtube, youtube_configured):
        fake_youtube.durations = {"a": "PT4M13S", "b": "PT1H"}

        async with fake_youtube.client() as client:
            durations = await fetch_durations(client, ["a", "b"], DebugTrace())

        assert durations == {"a": "PT4M13S", "b": "PT1H"}
        assert fake_youtube.video_lookups() == [["a", "b"]]
        assert fake_youtube.requests[0].url.params["part"] == "contentDetails"

    @pytest.mark.asyncio
    async def test_missing_ids_are_absent(self, fake_youtube, youtube_configured):
        fake_youtube.durations = {"b": "PT30S"}

        async with fake_youtube.client() as client:
            durations = await fetch_durations(client, ["a", "b", "c"], DebugTrace())

        assert durations == {"b": "PT30S"}

    @pytest.mark.asyncio
    async def test_batches_of_fifty(self, fake_youtube, youtube_configured):
        ids = [f"v{i}" for i in range(120)]
        fake_youtube.durations = {video_id: "PT1M" for video_id in ids}

        async with fake_youtube.client() as client:
            durations = await fetch_durations(client, ids, DebugTrace())

        assert [len(batch) for batch in fake_youtube.video_lookups()] == [50, 50, 20]
        assert len(durations) == 120

    @pytest.mark.asyncio
    async def test_failed_lookup_returns_empty(self, fake_youtube, youtube_configured):
        fake_youtube.durations = {"a": "PT1M"}
        fake_youtube.durations_status = 500
        trace = DebugTrace()

        async with fake_youtube.client() as client:
            durations = await fetch_durations(client, ["a"], trace)

        assert durations == {}
        assert trace.errors[0]["stage"] == "durations"

    @pytest.mark.asyncio
    async def test_no_ids_makes_no_call(self, fake_youtube, youtube_configured):
        async with fake_youtube.client() as client:
            assert await fetch_durations(client, [], DebugTrace()) == {}
        assert fake_youtube.requests == []


class TestMalformedPayloads:
    """Unexpected shapes in a 200 response are skipped, never raised."""

    @pytest.mark.asyncio
    async def test_search_skips_items_with_non_dict_id(self, youtube_configured):
        def handler(request):
            return httpx.Response(200, json={"items": [{"id": "abc"}, {"id": {"videoId": "v1"}}]})

        trace = DebugTrace()
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            items = await search_videos(client, "kids art", 4, trace)

        assert [item["id"]["videoId"] for item in items] == ["v1"]
        assert trace.search_results[0]["videoCount"] == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [
        {"items": ["not an item", 42, None]},
        {"items": [{"id": {"videoId": 123}}]},
        {"items": [{"id": {"videoId": "v1"}, "snippet": "oops"}]},
        {"items": {"id": {"videoId": "v1"}}},
        {"items": "v1"},
    ])
    async def test_search_malformed_items_return_empty(self, youtube_configured, payload):
        def handler(request):
            return httpx.Response(200, json=payload)

        trace = DebugTrace()
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            items = await search_videos(client, "kids art", 4, trace)

        assert items == []
        assert trace.search_results[0]["success"] is False

    @pytest.mark.asyncio
    async def test_durations_skip_malformed_items(self, youtube_configured):
        def handler(request):
            return httpx.Response(200, json={"items": [
                "garbage",
                {"id": "a", "contentDetails": "PT1M"},
                {"id": ["b"], "contentDetails": {"duration": "PT2M"}},
                {"id": "c", "contentDetails": {"duration": 7}},
                {"id": "d", "contentDetails": {"duration": "PT4M13S"}},
            ]})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            durations = await fetch_durations(client, ["a", "b", "c", "d"], DebugTrace())

        assert durations == {"d": "PT4M13S"}

    @pytest.mark.asyncio
    async def test_durations_non_list_items(self, youtube_configured):
        def handler(request):
            return httpx.Response(200, json={"items": {"id": "a"}})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            assert await fetch_durations(client, ["a"], DebugTrace()) == {}
