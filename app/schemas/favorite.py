"""Favorite ODM schema."""

from datetime import datetime
from typing import Any

from beanie import Document
from pydantic import Field, field_validator
from pymongo import ASCENDING, IndexModel

from .schema_utils import parse_mongo_datetime, utc_now


class Favorite(Document):
    """A user's bookmark on a session. At most one per (user_id, session_id)."""

    user_id: str
    session_id: str
    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("created_at", mode="before")
    @classmethod
    def _parse_datetime(cls, v: Any) -> Any:
        return parse_mongo_datetime(v)

    class Settings:
        name = "favorite"
        indexes = [
            IndexModel(
                [("user_id", ASCENDING), ("session_id", ASCENDING)],
                unique=True,
                name="user_session_unique",
            ),
            "session_id",
        ]
