from datetime import datetime

from pydantic import BaseModel, Field, field_serializer

from app.schemas.session import Difficulty

from .serializers import serialize_optional_utc_datetime, serialize_utc_datetime
from .taxonomy import CategoryOut, ThemeOut


class SessionOut(BaseModel):
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

    @field_serializer("created_at", "updated_at")
    @classmethod
    def serialize_datetime(cls, v: datetime) -> str:
        return serialize_utc_datetime(v)

    @field_serializer("live_at")
    @classmethod
    def serialize_live_at(cls, v: datetime | None) -> str | None:
        return serialize_optional_utc_datetime(v)


class AdminSessionOut(SessionOut):
    category_name: str | None = None
    theme_name: str | None = None


class VideoListOut(BaseModel):
    sessions: list[SessionOut]
    total: int
    has_more: bool


class LiveScheduleOut(BaseModel):
    upcoming: list[SessionOut] = Field(description="Streaming now first, then soonest start")
    past: list[SessionOut] = Field(description="Most recent first")


class StreamingNowOut(BaseModel):
    session: SessionOut | None = None


class AdminSessionListOut(BaseModel):
    videos: list[AdminSessionOut]
    live: list[AdminSessionOut]
    categories: list[CategoryOut]
    themes: list[ThemeOut]


class SaveSessionIn(BaseModel):
    title: str = Field(default="", description="Required, blank is rejected")
    description: str | None = None
    thumbnail: str | None = Field(default=None, description="Public URL of the thumbnail")
    video_url: str | None = Field(default=None, description="Ignored for live sessions")
    duration: int = Field(default=45, description="Minutes")
    difficulty: Difficulty = Difficulty.BEGINNER
    instructor: str | None = None
    category_id: str | None = None
    theme_id: str | None = None
    is_published: bool = True
    is_live: bool = False
    live_at: datetime | None = Field(default=None, description="Required when is_live is true")


class UpdateSessionIn(SaveSessionIn):
    session_id: str = Field(description="Session to update")


class SessionIdIn(BaseModel):
    session_id: str


class SetPublishedIn(BaseModel):
    session_id: str
    is_published: bool


class DeleteSessionOut(BaseModel):
    session_id: str
    slug: str
    media_cleaned: bool = Field(description="False when media deletion was queued for retry")
    cleanup_task_id: str | None = None
