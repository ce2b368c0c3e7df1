"""Durable work record for deleting a session's uploaded media."""

from datetime import datetime
from enum import Enum
from typing import Any

from beanie import Document, Indexed
from pydantic import Field, field_validator

from .schema_utils import parse_mongo_datetime, utc_now


class CleanupStatus(str, Enum):
    PENDING = "pending"
    FAILED = "failed"  # gave up after max attempts

    def __str__(self) -> str:
        return self.value


class MediaCleanupTask(Document):
    task_id: Indexed(str, unique=True)  # type: ignore[valid-type]
    slug: str
    session_id: str | None = None
    status: CleanupStatus = CleanupStatus.PENDING
    attempts: int = 0
    last_error: str | None = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def _parse_datetime(cls, v: Any) -> Any:
        return parse_mongo_datetime(v)

    class Settings:
        name = "media_cleanup"
        indexes = ["status"]
