from __future__ import annotations

from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from backend.app.dependencies import get_playlist_service
from backend.app.services.youtube_service import (
    EmptyPlaylist,
    ExternalAPIError,
    InvalidPlaylistURL,
    PlaylistAccessDenied,
    PlaylistExtraction,
    PlaylistExtractionError,
    QuotaExceeded,
    mock_playlist_lessons,
)

EXTRACT_PATH = "/api/youtube/extract"


class _FailingService:
    mock_mode = False

    def __init__(self, error: PlaylistExtractionError) -> None:
        self._error = error

    def extract_with_summary(self, playlist_url: str, **_kwargs: Any) -> PlaylistExtraction:
        _ = playlist_url
        raise self._error


def _override_service(client: TestClient, service: object) -> None:
    app = client.app
    assert isinstance(app, FastAPI)
    app.dependency_overrides[get_playlist_service] = lambda: service


def test_health_reports_mock_source(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "playlist_source": "mock"}
    assert response.headers["X-Request-ID"]


def test_request_id_header_is_echoed(client: TestClient) -> None:
    response = client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"


def test_extract_without_api_key_returns_mock_lessons(client: TestClient) -> None:
    response = client.post(
        EXTRACT_PATH,
        json={"playlistUrl": "https://www.youtube.com/playlist?list=PL123"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["source"] == "mock"
    assert body["totalVideos"] == 4
    assert body["totalDuration"] == "1h 8m"
    assert body["message"] == "Successfully extracted 4 videos from playlist"
    assert [video["order"] for video in body["videos"]] == [1, 2, 3, 4]

    first_expected = mock_playlist_lessons()[0]
    first = body["videos"][0]
    assert first["id"] == first_expected.id
    assert first["title"] == first_expected.title
    assert first["publishedAt"] == first_expected.published_at
    assert first["viewCount"] == first_expected.view_count
    assert first["duration"] == "12:45"


@pytest.mark.parametrize("payload", [{}, {"playlistUrl": ""}, {"playlistUrl": "   "}])
def test_extract_requires_playlist_url(client: TestClient, payload: dict[str, str]) -> None:
    response = client.post(EXTRACT_PATH, json=payload)

    assert response.status_code == 400
    assert response.json()["detail"] == "Playlist URL is required"


def test_extract_rejects_non_youtube_urls(client: TestClient) -> None:
    response = client.post(
        EXTRACT_PATH,
        json={"playlistUrl": "https://vimeo.com/showcase?list=abc"},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Please provide a valid YouTube playlist URL"


def test_extract_rejects_youtube_url_without_playlist(client: TestClient) -> None:
    response = client.post(
        EXTRACT_PATH,
        json={"playlistUrl": "https://www.youtube.com/watch?v=abc123"},
    )

    assert response.status_code == 400
    assert "Invalid YouTube playlist URL" in response.json()["detail"]


@pytest.mark.parametrize(
    ("error", "expected_status"),
    [
        (InvalidPlaylistURL("bad url"), 400),
        (PlaylistAccessDenied("Access denied. The playlist might be private."), 404),
        (EmptyPlaylist("No videos found in this playlist."), 404),
        (QuotaExceeded("YouTube API quota exceeded."), 429),
        (ExternalAPIError("YouTube API Error: Backend Error"), 500),
    ],
)
def test_extract_maps_error_categories_to_status(
    client: TestClient,
    error: PlaylistExtractionError,
    expected_status: int,
) -> None:
    _override_service(client, _FailingService(error))

    response = client.post(
        EXTRACT_PATH,
        json={"playlistUrl": "https://www.youtube.com/playlist?list=PL123"},
    )

    assert response.status_code == expected_status
    assert response.json()["detail"] == str(error)


def test_openapi_lists_extract_operation(client: TestClient) -> None:
    schema = client.get("/openapi.json").json()

    assert schema["info"]["title"] == "CourseHub Playlist Import API"
    assert EXTRACT_PATH in schema["paths"]
    assert schema["paths"][EXTRACT_PATH]["post"]["operationId"] == "youtube_playlist_extract"
