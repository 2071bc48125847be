from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from structlog.contextvars import bind_contextvars, reset_contextvars

from backend.app.dependencies import get_playlist_service
from backend.app.models.playlist_contracts import (
    PlaylistExtractRequest,
    PlaylistExtractResponse,
)
from backend.app.services.youtube_service import (
    ErrorCategory,
    PlaylistExtractionError,
    YouTubePlaylistService,
)

router = APIRouter()

LOGGER = logging.getLogger("coursehub.api")

ERROR_CATEGORY_STATUS_CODES: dict[ErrorCategory, int] = {
    "invalid_input": 400,
    "not_found": 404,
    "rate_limited": 429,
    "internal": 500,
}
YOUTUBE_HOST_MARKERS: tuple[str, ...] = ("youtube.com", "youtu.be")


def _require_playlist_url(request: PlaylistExtractRequest) -> str:
    playlist_url = (request.playlist_url or "").strip()
    if not playlist_url:
        raise HTTPException(status_code=400, detail="Playlist URL is required")
    if not any(marker in playlist_url for marker in YOUTUBE_HOST_MARKERS):
        raise HTTPException(
            status_code=400,
            detail="Please provide a valid YouTube playlist URL",
        )
    return playlist_url


@router.post(
    "/api/youtube/extract",
    response_model=PlaylistExtractResponse,
    response_model_by_alias=True,
    tags=["youtube"],
    operation_id="youtube_playlist_extract",
)
def youtube_playlist_extract(
    request: PlaylistExtractRequest,
    service: Annotated[YouTubePlaylistService, Depends(get_playlist_service)],
) -> PlaylistExtractResponse:
    playlist_url = _require_playlist_url(request)
    context_tokens = bind_contextvars(playlist_url=playlist_url)
    try:
        extraction = service.extract_with_summary(playlist_url)
    except PlaylistExtractionError as exc:
        status_code = ERROR_CATEGORY_STATUS_CODES[exc.category]
        LOGGER.warning(
            "playlist extract failed status_code=%s error_type=%s message=%s",
            status_code,
            type(exc).__name__,
            exc,
        )
        raise HTTPException(status_code=status_code, detail=str(exc)) from exc
    finally:
        reset_contextvars(**context_tokens)

    return PlaylistExtractResponse.from_extraction(extraction)
