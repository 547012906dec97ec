"""
Tests for GET /health.
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from kidtube.config import settings
from kidtube.main import app


@pytest.fixture
def client():
    """Create test client for FastAPI app."""
    return TestClient(app)


def test_health_without_keys(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "services": {"gemini": False, "youtube": False},
    }


def test_health_reports_configured_services(client, youtube_configured):
    with patch.object(settings, "GOOGLE_API_KEY", "test-google-key"):
        data = client.get("/health").json()

    assert data["services"] == {"gemini": True, "youtube": True}
    assert "test-google-key" not in str(data)
    assert "test-youtube-key" not in str(data)


def test_health_treats_placeholder_key_as_unconfigured(client):
    with patch.object(settings, "YOUTUBE_API_KEY", "your_youtube_api_key_here"):
        data = client.get("/health").json()

    assert data["services"]["youtube"] is False
