"""Theme ODM schema."""

from datetime import datetime
from typing import Any

from beanie import Document, Indexed
from pydantic import Field, field_validator

from .schema_utils import parse_mongo_datetime, utc_now


class Theme(Document):
    theme_id: Indexed(str, unique=True)  # type: ignore[valid-type]
    name: str
    slug: Indexed(str, unique=True)  # type: ignore[valid-type]
    description: str | None = None
    color: str | None = None  # display color, e.g. "#f59e0b"

    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("created_at", mode="before")
    @classmethod
    def _parse_datetime(cls, v: Any) -> Any:
        return parse_mongo_datetime(v)

    class Settings:
        name = "theme"
