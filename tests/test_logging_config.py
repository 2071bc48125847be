from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from backend.app.config import load_settings
from backend.app.logging_config import (
    ROOT_LOGGER_NAME,
    TELEMETRY_LOG_FILE_NAME,
    TELEMETRY_LOGGER_NAME,
    YOUTUBE_CLIENT_LOGGER_NAMES,
    configure_application_logging,
    redact_api_keys,
)


@pytest.fixture
def log_file() -> Iterator[Path]:
    path = configure_application_logging(load_settings())
    yield path
    for name in (ROOT_LOGGER_NAME, TELEMETRY_LOGGER_NAME, *YOUTUBE_CLIENT_LOGGER_NAMES):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()


def _read_json_lines(path: Path) -> list[dict[str, Any]]:
    return [
        json.loads(line)
        for line in path.read_text(encoding="utf-8").splitlines()
        if line.strip()
    ]


def test_redact_api_keys_masks_key_query_parameters() -> None:
    url = (
        "GET https://youtube.googleapis.com/youtube/v3/playlistItems"
        "?part=snippet&key=AIzaSecret&playlistId=PL1"
    )

    assert redact_api_keys(url) == (
        "GET https://youtube.googleapis.com/youtube/v3/playlistItems"
        "?part=snippet&key=[redacted]&playlistId=PL1"
    )
    assert redact_api_keys("?developerKey=abc") == "?developerKey=[redacted]"
    assert redact_api_keys("playlist_id=PL1 keys=3") == "playlist_id=PL1 keys=3"


def test_youtube_client_logs_are_routed_and_redacted(log_file: Path) -> None:
    client_logger = logging.getLogger("googleapiclient.discovery")
    client_logger.info("URL being requested: GET https://x/videos?key=AIzaInfo")
    client_logger.warning("URL being requested: GET https://x/videos?id=v1&key=AIzaSecret")

    records = _read_json_lines(log_file)
    client_records = [
        record for record in records if record["logger"] == "googleapiclient.discovery"
    ]

    assert len(client_records) == 1
    assert client_records[0]["level"] == "warning"
    assert client_records[0]["event"] == (
        "URL being requested: GET https://x/videos?id=v1&key=[redacted]"
    )
    assert "AIza" not in log_file.read_text(encoding="utf-8")


def test_application_logs_go_to_main_file_and_telemetry_to_its_own(log_file: Path) -> None:
    logging.getLogger("coursehub.youtube").debug("youtube playlist page_request page=%s", 2)
    logging.getLogger(TELEMETRY_LOGGER_NAME).info("telemetry youtube.playlist.extract.finish")

    main_events = [record["event"] for record in _read_json_lines(log_file)]
    telemetry_events = [
        record["event"]
        for record in _read_json_lines(log_file.parent / TELEMETRY_LOG_FILE_NAME)
    ]

    assert "youtube playlist page_request page=2" in main_events
    assert "telemetry youtube.playlist.extract.finish" not in main_events
    assert telemetry_events == ["telemetry youtube.playlist.extract.finish"]
