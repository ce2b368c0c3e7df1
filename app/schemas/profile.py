"""Profile ODM schema: local projection of identity-provider users."""

from datetime import datetime
from typing import Any

from beanie import Document, Indexed
from pydantic import Field, field_validator

from .schema_utils import parse_mongo_datetime, utc_now


class Profile(Document):
    user_id: Indexed(str, unique=True)  # type: ignore[valid-type]
    email: str | None = None
    is_admin: bool = False
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("updated_at", mode="before")
    @classmethod
    def _parse_datetime(cls, v: Any) -> Any:
        return parse_mongo_datetime(v)

    class Settings:
        name = "profile"
