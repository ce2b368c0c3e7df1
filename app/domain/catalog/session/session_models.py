"""Session domain models."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from app.schemas.schema_utils import parse_mongo_datetime
from app.schemas.session import Difficulty

from ..taxonomy.taxonomy_models import CategoryResponse, ThemeResponse


class SessionResponse(BaseModel):
    """Session response model."""

    session_id: str
    slug: str
    title: str
    description: str | None = None
    thumbnail: str | None = None
    video_url: str | None = None
    duration: int
    difficulty: Difficulty
    instructor: str | None = None
    category_id: str | None = None
    theme_id: str | None = None
    is_published: bool
    is_live: bool
    live_at: datetime | None = None
    streaming_now: bool
    created_at: datetime
    updated_at: datetime


class AdminSessionItem(SessionResponse):
    category_name: str | None = None
    theme_name: str | None = None


class SessionSaveParams(BaseModel):
    """Fields an admin may set when creating or updating a session.

    `title` is checked by the domain so a blank title reports which field is wrong.
    """

    title: str = ""
    description: str | None = None
    thumbnail: str | None = None
    video_url: str | None = None
    duration: int = 45
    difficulty: Difficulty = Difficulty.BEGINNER
    instructor: str | None = None
    category_id: str | None = None
    theme_id: str | None = None
    is_published: bool = True
    is_live: bool = False
    live_at: datetime | None = None

    @field_validator("live_at", mode="before")
    @classmethod
    def _parse_live_at(cls, v):
        return parse_mongo_datetime(v)

    @field_validator("description", "thumbnail", "video_url", "instructor", "category_id", "theme_id")
    @classmethod
    def _blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        return v or None


class VideoListParams(BaseModel):
    category_id: str | None = None
    theme_id: str | None = None
    difficulty: Difficulty | None = None
    order: Literal["newest", "oldest"] = "newest"
    limit: int = Field(default=20, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


class VideoListResponse(BaseModel):
    sessions: list[SessionResponse]
    total: int
    has_more: bool


class LiveScheduleResponse(BaseModel):
    upcoming: list[SessionResponse]
    past: list[SessionResponse]


class StreamingNowResponse(BaseModel):
    session: SessionResponse | None = None


class DeleteSessionResponse(BaseModel):
    session_id: str
    slug: str
    media_cleaned: bool
    cleanup_task_id: str | None = None


class AdminSessionListResponse(BaseModel):
    """Admin dashboard payload: drafts included, split like the public listings."""

    videos: list[AdminSessionItem]
    live: list[AdminSessionItem]
    categories: list[CategoryResponse]
    themes: list[ThemeResponse]
