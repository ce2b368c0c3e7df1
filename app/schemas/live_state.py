"""Single-row pointer to the session currently streaming."""

from datetime import datetime
from typing import Any

from beanie import Document, Indexed
from pydantic import Field, field_validator

from .schema_utils import parse_mongo_datetime, utc_now

CURRENT_LIVE_KEY = "current"


class LiveState(Document):
    state_key: Indexed(str, unique=True) = CURRENT_LIVE_KEY  # type: ignore[valid-type]
    session_id: str | None = None
    updated_at: datetime = Field(default_factory=utc_now)

    # Version control for optimistic locking
    version: int = Field(default=1)

    @field_validator("updated_at", mode="before")
    @classmethod
    def _parse_datetime(cls, v: Any) -> Any:
        return parse_mongo_datetime(v)

    class Settings:
        name = "live_state"
