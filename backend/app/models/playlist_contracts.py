from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from backend.app.services.youtube_service import ExtractedLesson, PlaylistExtraction


class PlaylistExtractRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    playlist_url: str | None = Field(default=None, alias="playlistUrl")


class LessonPayload(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    id: str
    title: str
    description: str
    thumbnail: str
    duration: str
    published_at: str = Field(alias="publishedAt")
    url: str
    view_count: str = Field(alias="viewCount")
    order: int

    @classmethod
    def from_lesson(cls, lesson: ExtractedLesson) -> LessonPayload:
        return cls(
            id=lesson.id,
            title=lesson.title,
            description=lesson.description,
            thumbnail=lesson.thumbnail,
            duration=lesson.duration,
            published_at=lesson.published_at,
            url=lesson.url,
            view_count=lesson.view_count,
            order=lesson.order,
        )


def _default_lessons() -> list[LessonPayload]:
    return []


class PlaylistExtractResponse(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    videos: list[LessonPayload] = Field(default_factory=_default_lessons)
    total_duration: str = Field(alias="totalDuration")
    total_videos: int = Field(alias="totalVideos")
    source: Literal["youtube", "mock"]
    message: str

    @classmethod
    def from_extraction(cls, extraction: PlaylistExtraction) -> PlaylistExtractResponse:
        return cls(
            videos=[LessonPayload.from_lesson(lesson) for lesson in extraction.lessons],
            total_duration=extraction.total_duration,
            total_videos=extraction.total_videos,
            source=extraction.source,
            message=(
                f"Successfully extracted {extraction.total_videos} videos from playlist"
            ),
        )
