from __future__ import annotations

import json
import logging
import math
import re
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from importlib import import_module
from typing import Any, ClassVar, Literal, cast

from backend.app.telemetry import TelemetryClient

ErrorCategory = Literal["invalid_input", "not_found", "rate_limited", "internal"]


@dataclass(frozen=True)
class RawPlaylistItem:
    video_id: str | None
    title: str
    description: str
    thumbnails: dict[str, str]
    published_at: str | None = None


@dataclass(frozen=True)
class RawVideoDetail:
    video_id: str
    duration: str | None = None
    view_count: str | None = None
    privacy_status: str | None = None


@dataclass(frozen=True)
class ExtractedLesson:
    id: str
    title: str
    description: str
    thumbnail: str
    duration: str
    published_at: str
    url: str
    view_count: str
    order: int


@dataclass(frozen=True)
class PlaylistExtraction:
    playlist_id: str
    lessons: list[ExtractedLesson]
    total_videos: int
    total_duration: str
    source: Literal["youtube", "mock"]
    estimated_api_units: int = 0


class PlaylistExtractionError(Exception):
    category: ClassVar[ErrorCategory] = "internal"


class InvalidPlaylistURL(PlaylistExtractionError):
    category: ClassVar[ErrorCategory] = "invalid_input"


class BadRequest(PlaylistExtractionError):
    category: ClassVar[ErrorCategory] = "invalid_input"


class PlaylistNotFound(PlaylistExtractionError):
    category: ClassVar[ErrorCategory] = "not_found"


class PlaylistAccessDenied(PlaylistExtractionError):
    category: ClassVar[ErrorCategory] = "not_found"


class EmptyPlaylist(PlaylistExtractionError):
    category: ClassVar[ErrorCategory] = "not_found"


class NoAccessibleVideos(PlaylistExtractionError):
    category: ClassVar[ErrorCategory] = "not_found"


class QuotaExceeded(PlaylistExtractionError):
    category: ClassVar[ErrorCategory] = "rate_limited"


class InvalidAPICredential(PlaylistExtractionError):
    category: ClassVar[ErrorCategory] = "rate_limited"


class MalformedVideoIdList(PlaylistExtractionError):
    pass


class ExternalAPIError(PlaylistExtractionError):
    pass


class ExtractionTimeout(PlaylistExtractionError):
    pass


@dataclass(frozen=True)
class _PlaylistItemsFetch:
    items: list[RawPlaylistItem]
    requests_made: int


@dataclass(frozen=True)
class _VideoDetailsFetch:
    details: dict[str, RawVideoDetail]
    requests_made: int


class _Deadline:
    def __init__(self, timeout_seconds: float) -> None:
        self._timeout_seconds = timeout_seconds
        self._expires_at = time.monotonic() + timeout_seconds

    def remaining(self) -> float:
        return max(0.0, self._expires_at - time.monotonic())

    def check(self, stage: str) -> None:
        if time.monotonic() >= self._expires_at:
            raise ExtractionTimeout(
                f"Playlist extraction exceeded {self._timeout_seconds:g}s during {stage}."
            )


LOGGER = logging.getLogger("coursehub.youtube")

IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")
VIDEO_ID_LIST_PATTERN = re.compile(r"^[A-Za-z0-9_-]+(,[A-Za-z0-9_-]+)*$")
PLAYLIST_URL_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"[?&]list=([^&]+)"),
    re.compile(r"youtube\.com/playlist\?list=([^&]+)"),
    re.compile(r"youtu\.be/.*[?&]list=([^&]+)"),
)
ISO8601_DURATION_PATTERN = re.compile(
    r"^P(?:(?P<days>\d+)D)?(?:T(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?(?:(?P<seconds>\d+)S)?)?$"
)
THUMBNAIL_PRIORITY: tuple[str, ...] = ("maxres", "high", "medium", "default")
PLACEHOLDER_THUMBNAIL = "/placeholder.svg?height=90&width=160"
UNTITLED_VIDEO_TITLE = "Untitled Video"
WATCH_URL_TEMPLATE = "https://www.youtube.com/watch?v={video_id}"
MOCK_WATCH_URL_TEMPLATE = "https://youtube.com/watch?v={video_id}"
MOCK_VIEW_COUNT = "1000"
MAX_API_PAGE_SIZE = 50
QUOTA_ERROR_REASONS: frozenset[str] = frozenset(
    {
        "quotaexceeded",
        "dailylimitexceeded",
        "ratelimitexceeded",
        "userratelimitexceeded",
    }
)
CREDENTIAL_ERROR_REASONS: frozenset[str] = frozenset(
    {
        "keyinvalid",
        "keyexpired",
        "accessnotconfigured",
    }
)

YouTubeClientFactory = Callable[[str, float], Any]


class YouTubePlaylistService:
    def __init__(
        self,
        *,
        api_key: str | None,
        page_size: int = 50,
        max_items: int = 500,
        details_batch_size: int = 50,
        http_timeout_seconds: float = 30.0,
        extract_timeout_seconds: float = 60.0,
        telemetry: TelemetryClient | None = None,
        client_factory: YouTubeClientFactory | None = None,
    ) -> None:
        self._api_key = _normalize_env_text(api_key)
        self._page_size = max(1, min(MAX_API_PAGE_SIZE, page_size))
        self._max_items = max(1, max_items)
        self._details_batch_size = max(1, min(MAX_API_PAGE_SIZE, details_batch_size))
        self._http_timeout_seconds = max(1.0, http_timeout_seconds)
        self._extract_timeout_seconds = max(1.0, extract_timeout_seconds)
        self._telemetry = telemetry or TelemetryClient.disabled()
        self._client_factory = client_factory or _build_youtube_client

    @property
    def mock_mode(self) -> bool:
        return self._api_key is None

    def extract(
        self,
        playlist_url: str,
        *,
        timeout_seconds: float | None = None,
        now: datetime | None = None,
    ) -> list[ExtractedLesson]:
        return self.extract_with_summary(
            playlist_url,
            timeout_seconds=timeout_seconds,
            now=now,
        ).lessons

    def extract_with_summary(
        self,
        playlist_url: str,
        *,
        timeout_seconds: float | None = None,
        now: datetime | None = None,
    ) -> PlaylistExtraction:
        playlist_id = resolve_playlist_id(playlist_url)
        source: Literal["youtube", "mock"] = "mock" if self.mock_mode else "youtube"

        with self._telemetry.span(
            "youtube.playlist.extract",
            playlist_id=playlist_id,
            source=source,
        ):
            if self._api_key is None:
                LOGGER.warning(
                    "youtube api key not configured; serving mock lessons playlist_id=%s",
                    playlist_id,
                )
                lessons = mock_playlist_lessons()
                return _build_extraction(playlist_id, lessons, source="mock", api_units=0)

            deadline = _Deadline(
                timeout_seconds if timeout_seconds is not None else self._extract_timeout_seconds
            )
            deadline.check("client setup")
            # A request in flight at expiry can overrun by at most this socket timeout.
            http_timeout = min(self._http_timeout_seconds, max(deadline.remaining(), 0.001))
            client = self._client_factory(self._api_key, http_timeout)

            items_fetch = fetch_all_playlist_items(
                client,
                playlist_id,
                page_size=self._page_size,
                max_items=self._max_items,
                deadline=deadline,
            )
            if not items_fetch.items:
                raise EmptyPlaylist(
                    "No videos found in this playlist or playlist is private/unavailable."
                )

            video_ids = [item.video_id for item in items_fetch.items if item.video_id]
            details_fetch = fetch_video_details(
                client,
                video_ids,
                batch_size=self._details_batch_size,
                deadline=deadline,
            )
            lessons = normalize_playlist_items(
                items_fetch.items,
                details_fetch.details,
                now=now,
            )
            api_units = items_fetch.requests_made + details_fetch.requests_made
            LOGGER.info(
                "youtube playlist extracted playlist_id=%s items=%s lessons=%s api_units=%s",
                playlist_id,
                len(items_fetch.items),
                len(lessons),
                api_units,
            )
            return _build_extraction(playlist_id, lessons, source="youtube", api_units=api_units)


def resolve_playlist_id(url: str) -> str:
    normalized = url.strip() if isinstance(url, str) else ""
    for pattern in PLAYLIST_URL_PATTERNS:
        matched = pattern.search(normalized)
        if matched is None:
            continue
        candidate = matched.group(1)
        if IDENTIFIER_PATTERN.match(candidate):
            return candidate
        break
    raise InvalidPlaylistURL(
        "Invalid YouTube playlist URL. Please provide a valid playlist URL."
    )


def fetch_all_playlist_items(
    client: Any,
    playlist_id: str,
    *,
    page_size: int = 50,
    max_items: int = 500,
    deadline: _Deadline | None = None,
) -> _PlaylistItemsFetch:
    """Collect playlist entries page by page.

    Pagination stops on an empty page, on a continuation token that repeats the
    one just sent, once more than ``max_items`` entries are collected (the
    result is truncated to ``max_items``), or when no token is returned.
    """
    items: list[RawPlaylistItem] = []
    requests_made = 0
    page_token: str | None = None

    while True:
        if page_token is not None and not IDENTIFIER_PATTERN.match(page_token):
            LOGGER.warning(
                "youtube playlist invalid_page_token playlist_id=%s page_token=%r",
                playlist_id,
                page_token,
            )
            break

        query_kwargs: dict[str, object] = {
            "part": "snippet",
            "playlistId": playlist_id,
            "maxResults": max(1, min(MAX_API_PAGE_SIZE, page_size)),
        }
        if page_token is not None:
            query_kwargs["pageToken"] = page_token

        if deadline is not None:
            deadline.check("playlist items fetch")
        LOGGER.debug(
            "youtube playlist page_request playlist_id=%s page=%s page_token=%s",
            playlist_id,
            requests_made + 1,
            page_token,
        )
        response = _execute(client.playlistItems().list(**query_kwargs))
        requests_made += 1

        raw_items = _as_list(response.get("items"))
        if not raw_items:
            LOGGER.info(
                "youtube playlist empty_page playlist_id=%s page=%s",
                playlist_id,
                requests_made,
            )
            break
        items.extend(_parse_playlist_item(raw_item) for raw_item in raw_items)

        next_page_token = _coerce_nonempty_string(response.get("nextPageToken"))
        if next_page_token is not None and next_page_token == page_token:
            LOGGER.warning(
                "youtube playlist repeated_page_token playlist_id=%s page_token=%s",
                playlist_id,
                next_page_token,
            )
            break

        if len(items) > max_items:
            LOGGER.warning(
                "youtube playlist item_cap_reached playlist_id=%s collected=%s cap=%s",
                playlist_id,
                len(items),
                max_items,
            )
            break

        if next_page_token is None:
            break
        page_token = next_page_token

    return _PlaylistItemsFetch(items=items, requests_made=requests_made)


def fetch_video_details(
    client: Any,
    video_ids: Sequence[str],
    *,
    batch_size: int = 50,
    deadline: _Deadline | None = None,
) -> _VideoDetailsFetch:
    joined_ids = ",".join(video_ids)
    if not VIDEO_ID_LIST_PATTERN.match(joined_ids):
        raise MalformedVideoIdList(f"Invalid video IDs format: {joined_ids!r}")

    ids = list(video_ids)
    chunk_size = max(1, min(MAX_API_PAGE_SIZE, batch_size))
    details: dict[str, RawVideoDetail] = {}
    requests_made = 0

    for index in range(0, len(ids), chunk_size):
        chunk = ids[index : index + chunk_size]
        if deadline is not None:
            deadline.check("video details fetch")
        response = _execute(
            client.videos().list(
                part="contentDetails,statistics,status",
                id=",".join(chunk),
                maxResults=len(chunk),
            )
        )
        requests_made += 1

        for raw_item in _as_list(response.get("items")):
            detail = _parse_video_detail(raw_item)
            if detail is not None:
                details[detail.video_id] = detail

    LOGGER.debug(
        "youtube video details fetched requested=%s returned=%s requests=%s",
        len(ids),
        len(details),
        requests_made,
    )
    return _VideoDetailsFetch(details=details, requests_made=requests_made)


def normalize_playlist_items(
    items: Sequence[RawPlaylistItem],
    details: dict[str, RawVideoDetail],
    *,
    now: datetime | None = None,
) -> list[ExtractedLesson]:
    reference_now = _as_utc(now) if now is not None else datetime.now(UTC)
    lessons: list[ExtractedLesson] = []

    for item in items:
        detail = details.get(item.video_id) if item.video_id else None
        if item.video_id is None or detail is None or detail.privacy_status == "private":
            LOGGER.info(
                "youtube playlist skipping video_id=%s reason=private_or_unavailable",
                item.video_id,
            )
            continue

        lessons.append(
            ExtractedLesson(
                id=item.video_id,
                title=item.title.strip() or UNTITLED_VIDEO_TITLE,
                description=item.description,
                thumbnail=select_thumbnail(item.thumbnails),
                duration=format_duration(detail.duration),
                published_at=format_published_age(item.published_at, now=reference_now),
                url=WATCH_URL_TEMPLATE.format(video_id=item.video_id),
                view_count=format_view_count(detail.view_count),
                order=len(lessons) + 1,
            )
        )

    if not lessons:
        raise NoAccessibleVideos("No accessible videos found in this playlist.")
    return lessons


def mock_playlist_lessons() -> list[ExtractedLesson]:
    fixtures = (
        (
            "Introduction to React - Getting Started with Components",
            "Learn the basics of React components and JSX syntax",
            "12:45",
            "2 weeks ago",
        ),
        (
            "State Management with useState Hook",
            "Master React state management with the useState hook",
            "18:30",
            "1 week ago",
        ),
        (
            "Props and Component Communication",
            "Learn how to pass data between React components",
            "15:20",
            "5 days ago",
        ),
        (
            "useEffect Hook and Side Effects",
            "Handle side effects in React with the useEffect hook",
            "22:15",
            "3 days ago",
        ),
    )
    return [
        ExtractedLesson(
            id=str(position),
            title=title,
            description=description,
            thumbnail=PLACEHOLDER_THUMBNAIL,
            duration=duration,
            published_at=published_at,
            url=MOCK_WATCH_URL_TEMPLATE.format(video_id=position),
            view_count=MOCK_VIEW_COUNT,
            order=position,
        )
        for position, (title, description, duration, published_at) in enumerate(
            fixtures, start=1
        )
    ]


def select_thumbnail(thumbnails: dict[str, str] | None) -> str:
    if not thumbnails:
        return PLACEHOLDER_THUMBNAIL
    for quality in THUMBNAIL_PRIORITY:
        url = thumbnails.get(quality)
        if url:
            return url
    return PLACEHOLDER_THUMBNAIL


def format_duration(raw_value: str | None) -> str:
    total_seconds = _parse_iso8601_duration_seconds(raw_value) or 0
    hours, remainder = divmod(total_seconds, 3_600)
    minutes, seconds = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def format_view_count(raw_value: str | None) -> str:
    count = _coerce_int(raw_value) or 0
    if count >= 1_000_000:
        return f"{count / 1_000_000:.1f}M views"
    if count >= 1_000:
        return f"{count / 1_000:.1f}K views"
    return f"{count} views"


def format_published_age(raw_value: str | None, *, now: datetime | None = None) -> str:
    published = _parse_datetime_utc(raw_value)
    if published is None:
        return ""
    reference_now = _as_utc(now) if now is not None else datetime.now(UTC)
    elapsed_seconds = abs((reference_now - published).total_seconds())
    days = math.ceil(elapsed_seconds / 86_400)

    if days == 1:
        return "1 day ago"
    if days < 7:
        return f"{days} days ago"
    if days < 30:
        return f"{math.ceil(days / 7)} weeks ago"
    if days < 365:
        return f"{math.ceil(days / 30)} months ago"
    return f"{math.ceil(days / 365)} years ago"


def summarize_total_duration(lessons: Sequence[ExtractedLesson]) -> str:
    total_minutes = sum(_duration_text_minutes(lesson.duration) for lesson in lessons)
    hours = math.floor(total_minutes / 60)
    minutes = math.floor(total_minutes % 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def _build_extraction(
    playlist_id: str,
    lessons: list[ExtractedLesson],
    *,
    source: Literal["youtube", "mock"],
    api_units: int,
) -> PlaylistExtraction:
    return PlaylistExtraction(
        playlist_id=playlist_id,
        lessons=lessons,
        total_videos=len(lessons),
        total_duration=summarize_total_duration(lessons),
        source=source,
        estimated_api_units=api_units,
    )


def _duration_text_minutes(duration: str) -> float:
    parts = duration.split(":")
    try:
        numbers = [int(part) for part in parts]
    except ValueError:
        return 0.0
    if len(numbers) == 2:
        return numbers[0] + numbers[1] / 60
    if len(numbers) == 3:
        return numbers[0] * 60 + numbers[1] + numbers[2] / 60
    return 0.0


def _parse_playlist_item(raw_item: Any) -> RawPlaylistItem:
    snippet = _as_dict(_as_dict(raw_item).get("snippet"))
    resource = _as_dict(snippet.get("resourceId"))
    raw_title = snippet.get("title")
    raw_description = snippet.get("description")
    return RawPlaylistItem(
        video_id=_coerce_nonempty_string(resource.get("videoId")),
        title=raw_title if isinstance(raw_title, str) else "",
        description=raw_description if isinstance(raw_description, str) else "",
        thumbnails=_extract_thumbnail_urls(snippet),
        published_at=_coerce_nonempty_string(snippet.get("publishedAt")),
    )


def _parse_video_detail(raw_item: Any) -> RawVideoDetail | None:
    item_dict = _as_dict(raw_item)
    video_id = _coerce_nonempty_string(item_dict.get("id"))
    if video_id is None:
        return None

    content_details = _as_dict(item_dict.get("contentDetails"))
    statistics = _as_dict(item_dict.get("statistics"))
    status = _as_dict(item_dict.get("status"))
    raw_view_count = statistics.get("viewCount")
    return RawVideoDetail(
        video_id=video_id,
        duration=_coerce_nonempty_string(content_details.get("duration")),
        view_count=str(raw_view_count) if raw_view_count is not None else None,
        privacy_status=_coerce_nonempty_string(status.get("privacyStatus")),
    )


def _execute(request: Any) -> dict[str, Any]:
    try:
        response = request.execute()
    except PlaylistExtractionError:
        raise
    except Exception as exc:
        raise _classify_api_error(exc) from exc
    return _as_dict(response)


def _classify_api_error(exc: Exception) -> PlaylistExtractionError:
    status = _extract_http_status(exc)
    message, reason = _extract_api_error_detail(exc)
    normalized_reason = (reason or "").lower()

    LOGGER.warning(
        "youtube api request_failed status=%s reason=%s message=%s",
        status,
        reason,
        message,
    )

    if status is None:
        return ExternalAPIError(
            f"YouTube API request failed: {_summarize_exception_message(exc)}"
        )
    if normalized_reason in QUOTA_ERROR_REASONS or status == 429:
        return QuotaExceeded(
            "YouTube API quota exceeded. Please try again later or contact support."
        )
    if normalized_reason in CREDENTIAL_ERROR_REASONS or _mentions_invalid_key(message):
        return InvalidAPICredential(
            "Invalid YouTube API key. Please check your configuration."
        )
    if status == 404:
        return PlaylistNotFound(
            "Playlist not found. Please check if the playlist exists and is public."
        )
    if status == 403:
        return PlaylistAccessDenied(
            "Access denied. The playlist might be private or your API key is invalid."
        )
    if status == 400:
        return BadRequest(f"Invalid request: {message or 'Invalid filter parameter'}")
    return ExternalAPIError(f"YouTube API Error: {message or 'Unknown error'}")


def _extract_http_status(exc: Exception) -> int | None:
    response = getattr(exc, "resp", None)
    raw_status = getattr(response, "status", None)
    if raw_status is None:
        return None
    return _coerce_int(raw_status)


def _extract_api_error_detail(exc: Exception) -> tuple[str | None, str | None]:
    raw_content = getattr(exc, "content", None)
    if isinstance(raw_content, bytes):
        raw_content = raw_content.decode("utf-8", errors="replace")
    payload = _parse_json_dict(raw_content) if isinstance(raw_content, str) else {}

    error = _as_dict(payload.get("error"))
    message = _coerce_nonempty_string(error.get("message"))
    reason: str | None = None
    for raw_detail in _as_list(error.get("errors")):
        reason = _coerce_nonempty_string(_as_dict(raw_detail).get("reason"))
        if reason is not None:
            break
    if reason is None:
        for raw_detail in _as_list(error.get("details")):
            reason = _coerce_nonempty_string(_as_dict(raw_detail).get("reason"))
            if reason is not None:
                break

    if message is None:
        message = _coerce_nonempty_string(getattr(exc, "reason", None))
    return message, reason


def _mentions_invalid_key(message: str | None) -> bool:
    if message is None:
        return False
    return "api key not valid" in message.lower()


def _build_youtube_client(api_key: str, http_timeout_seconds: float) -> Any:
    try:
        discovery_module = import_module("googleapiclient.discovery")
        httplib2_module = import_module("httplib2")
    except ImportError as exc:  # pragma: no cover - dependency controlled at runtime
        raise ExternalAPIError(
            "YouTube playlist import requires the google-api-python-client dependency"
        ) from exc

    build_fn: Any = discovery_module.build
    http = httplib2_module.Http(timeout=http_timeout_seconds)
    return build_fn(
        "youtube",
        "v3",
        developerKey=api_key,
        http=http,
        cache_discovery=False,
    )


def _parse_iso8601_duration_seconds(raw_value: object) -> int | None:
    if not isinstance(raw_value, str):
        return None
    matched = ISO8601_DURATION_PATTERN.match(raw_value.strip())
    if matched is None:
        return None

    days = int(matched.group("days") or 0)
    hours = int(matched.group("hours") or 0)
    minutes = int(matched.group("minutes") or 0)
    seconds = int(matched.group("seconds") or 0)
    return days * 86_400 + hours * 3_600 + minutes * 60 + seconds


def _parse_datetime_utc(raw_value: str | None) -> datetime | None:
    if raw_value is None:
        return None
    normalized = raw_value.strip()
    if not normalized:
        return None
    if normalized.endswith("Z"):
        normalized = f"{normalized[:-1]}+00:00"
    try:
        parsed = datetime.fromisoformat(normalized)
    except ValueError:
        return None
    return _as_utc(parsed)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _extract_thumbnail_urls(snippet: dict[str, Any]) -> dict[str, str]:
    thumbnails = _as_dict(snippet.get("thumbnails"))
    urls: dict[str, str] = {}
    for quality, payload in thumbnails.items():
        url_value = _as_dict(payload).get("url")
        if isinstance(url_value, str) and url_value.strip():
            urls[quality] = url_value
    return urls


def _normalize_env_text(raw_value: str | None) -> str | None:
    if raw_value is None:
        return None
    normalized = raw_value.strip()
    if not normalized:
        return None
    return normalized


def _coerce_nonempty_string(raw_value: object) -> str | None:
    if isinstance(raw_value, str) and raw_value.strip():
        return raw_value
    return None


def _coerce_int(raw_value: object) -> int | None:
    if isinstance(raw_value, bool):
        return int(raw_value)
    if isinstance(raw_value, int):
        return raw_value
    if isinstance(raw_value, float):
        return int(raw_value)
    if isinstance(raw_value, str):
        try:
            return int(raw_value.strip())
        except ValueError:
            return None
    return None


def _summarize_exception_message(exc: Exception, *, max_length: int = 400) -> str:
    raw = str(exc).strip()
    if not raw:
        raw = repr(exc)
    if len(raw) <= max_length:
        return raw
    return f"{raw[: max_length - 3]}..."


def _parse_json_dict(raw_body: str) -> dict[str, Any]:
    if not raw_body.strip():
        return {}
    try:
        parsed = json.loads(raw_body)
    except json.JSONDecodeError:
        return {}
    return _as_dict(parsed)


def _as_dict(value: Any) -> dict[str, Any]:
    if isinstance(value, dict):
        raw_dict = cast(dict[object, object], value)
        converted: dict[str, Any] = {}
        for key, item in raw_dict.items():
            if isinstance(key, str):
                converted[key] = item
        return converted
    return {}


def _as_list(value: Any) -> list[Any]:
    if isinstance(value, list):
        raw_list = cast(list[Any], value)
        return list(raw_list)
    return []
