from __future__ import annotations

from functools import lru_cache

from backend.app.config import AppSettings, load_settings
from backend.app.services.youtube_service import YouTubePlaylistService
from backend.app.telemetry import TelemetryClient, build_telemetry_client


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    return load_settings()


@lru_cache(maxsize=1)
def get_telemetry() -> TelemetryClient:
    settings = get_settings()
    return build_telemetry_client(
        enabled=settings.telemetry_enabled,
        sink=settings.telemetry_sink,
    )


@lru_cache(maxsize=1)
def get_playlist_service() -> YouTubePlaylistService:
    settings = get_settings()
    return YouTubePlaylistService(
        api_key=settings.youtube_api_key,
        page_size=settings.youtube_page_size,
        max_items=settings.youtube_max_playlist_items,
        details_batch_size=settings.youtube_details_batch_size,
        http_timeout_seconds=settings.youtube_http_timeout_seconds,
        extract_timeout_seconds=settings.youtube_extract_timeout_seconds,
        telemetry=get_telemetry(),
    )


def reset_cached_dependencies() -> None:
    get_playlist_service.cache_clear()
    get_telemetry.cache_clear()
    get_settings.cache_clear()
