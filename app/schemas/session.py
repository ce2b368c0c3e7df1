"""Session ODM schema."""

from datetime import datetime
from enum import Enum
from typing import Any

from beanie import Document, Indexed
from pydantic import Field, field_validator
from pymongo import IndexModel

from .schema_utils import parse_mongo_datetime, utc_now


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    def __str__(self) -> str:
        return self.value


class Session(Document):
    """A catalog item: an on-demand video (live_at is None) or a live-format class."""

    session_id: Indexed(str, unique=True)  # type: ignore[valid-type]
    slug: Indexed(str, unique=True)  # type: ignore[valid-type]

    # Content
    title: str
    description: str | None = None
    thumbnail: str | None = None
    video_url: str | None = None
    duration: int = 45  # minutes
    difficulty: Difficulty = Difficulty.BEGINNER
    instructor: str | None = None

    # Classification
    category_id: str | None = None
    theme_id: str | None = None

    # Publication flags
    is_published: bool = True
    is_live: bool = False
    live_at: datetime | None = None
    streaming_now: bool = False

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("created_at", "updated_at", "live_at", mode="before")
    @classmethod
    def _parse_datetime(cls, v: Any) -> Any:
        """Parse MongoDB Extended JSON datetime format."""
        return parse_mongo_datetime(v)

    class Settings:
        name = "session"
        indexes = [
            IndexModel([("is_published", 1), ("created_at", -1)]),
            "category_id",
            "theme_id",
            "streaming_now",
        ]
