from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict

from backend.app.config import load_settings
from backend.app.services.youtube_service import (
    PlaylistExtractionError,
    YouTubePlaylistService,
)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Extract the lessons of a YouTube playlist and print them as JSON.",
    )
    parser.add_argument("playlist_url", help="Playlist URL containing a list= parameter.")
    parser.add_argument(
        "--api-key",
        type=str,
        default=None,
        help="YouTube Data API key (defaults to COURSEHUB_YOUTUBE_API_KEY / YOUTUBE_API_KEY).",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Deadline in seconds for the whole extraction.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = load_settings()
    service = YouTubePlaylistService(
        api_key=args.api_key or settings.youtube_api_key,
        page_size=settings.youtube_page_size,
        max_items=settings.youtube_max_playlist_items,
        details_batch_size=settings.youtube_details_batch_size,
        http_timeout_seconds=settings.youtube_http_timeout_seconds,
        extract_timeout_seconds=settings.youtube_extract_timeout_seconds,
    )

    try:
        extraction = service.extract_with_summary(args.playlist_url, timeout_seconds=args.timeout)
    except PlaylistExtractionError as exc:
        print(
            json.dumps({"ok": False, "category": exc.category, "message": str(exc)}),
            file=sys.stderr,
        )
        return 1

    print(json.dumps({"ok": True, **asdict(extraction)}, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
