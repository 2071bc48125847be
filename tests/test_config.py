from __future__ import annotations

from pathlib import Path

import pytest

from backend.app.config import load_settings


def test_load_settings_defaults_to_mock_mode(tmp_path: Path) -> None:
    settings = load_settings()

    assert settings.youtube_api_key is None
    assert settings.youtube_page_size == 50
    assert settings.youtube_max_playlist_items == 500
    assert settings.youtube_details_batch_size == 50
    assert settings.youtube_http_timeout_seconds == 30.0
    assert settings.youtube_extract_timeout_seconds == 60.0
    assert settings.data_dir == (tmp_path / "runtime-data").resolve()
    assert settings.log_dir == (tmp_path / "runtime-data" / "logs").resolve()


def test_load_settings_parses_env_values(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("COURSEHUB_YOUTUBE_API_KEY", "  yt-key  ")
    monkeypatch.setenv("COURSEHUB_YOUTUBE_PAGE_SIZE", "25")
    monkeypatch.setenv("COURSEHUB_YOUTUBE_MAX_PLAYLIST_ITEMS", "200")
    monkeypatch.setenv("COURSEHUB_YOUTUBE_DETAILS_BATCH_SIZE", "10")
    monkeypatch.setenv("COURSEHUB_YOUTUBE_HTTP_TIMEOUT_SECONDS", "5.5")
    monkeypatch.setenv("COURSEHUB_YOUTUBE_EXTRACT_TIMEOUT_SECONDS", "20")
    monkeypatch.setenv("COURSEHUB_LOG_DIR", str(tmp_path / "custom-logs"))
    monkeypatch.setenv("COURSEHUB_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("COURSEHUB_TELEMETRY_ENABLED", "off")
    monkeypatch.setenv("COURSEHUB_TELEMETRY_SINK", " LOG ")

    settings = load_settings()

    assert settings.youtube_api_key == "yt-key"
    assert settings.youtube_page_size == 25
    assert settings.youtube_max_playlist_items == 200
    assert settings.youtube_details_batch_size == 10
    assert settings.youtube_http_timeout_seconds == 5.5
    assert settings.youtube_extract_timeout_seconds == 20.0
    assert settings.log_dir == (tmp_path / "custom-logs").resolve()
    assert settings.log_level == "DEBUG"
    assert settings.telemetry_enabled is False
    assert settings.telemetry_sink == "log"


def test_load_settings_accepts_bare_youtube_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("YOUTUBE_API_KEY", "bare-key")

    assert load_settings().youtube_api_key == "bare-key"


def test_load_settings_blank_api_key_means_mock_mode(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COURSEHUB_YOUTUBE_API_KEY", "   ")

    assert load_settings().youtube_api_key is None


def test_load_settings_reads_dotenv(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    data_dir = tmp_path / "dotenv-data"
    (tmp_path / ".env").write_text(
        "\n".join(
            [
                "COURSEHUB_YOUTUBE_API_KEY=dotenv-key",
                f"COURSEHUB_DATA_DIR={data_dir}",
            ]
        ),
        encoding="utf-8",
    )
    monkeypatch.delenv("COURSEHUB_DATA_DIR", raising=False)

    settings = load_settings()

    assert settings.youtube_api_key == "dotenv-key"
    assert settings.data_dir == data_dir.resolve()
    assert settings.log_dir == (data_dir / "logs").resolve()


def test_load_settings_rejects_oversized_page_size(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COURSEHUB_YOUTUBE_PAGE_SIZE", "80")

    with pytest.raises(ValueError, match="youtube_page_size"):
        load_settings()


def test_load_settings_rejects_non_positive_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COURSEHUB_YOUTUBE_EXTRACT_TIMEOUT_SECONDS", "0")

    with pytest.raises(ValueError, match="must be positive"):
        load_settings()


def test_load_settings_rejects_unknown_telemetry_sink(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("COURSEHUB_TELEMETRY_SINK", "statsd")

    with pytest.raises(ValueError, match="COURSEHUB_TELEMETRY_SINK"):
        load_settings()
