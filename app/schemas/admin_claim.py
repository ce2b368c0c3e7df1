"""Single-row record naming the principal that bootstrapped admin access."""

from datetime import datetime
from typing import Any

from beanie import Document, Indexed
from pydantic import Field, field_validator

from .schema_utils import parse_mongo_datetime, utc_now

BOOTSTRAP_CLAIM_KEY = "bootstrap"


class AdminClaim(Document):
    claim_key: Indexed(str, unique=True) = BOOTSTRAP_CLAIM_KEY  # type: ignore[valid-type]
    user_id: str | None = None
    claimed_at: datetime = Field(default_factory=utc_now)

    # Version control for optimistic locking
    version: int = Field(default=1)

    @field_validator("claimed_at", mode="before")
    @classmethod
    def _parse_datetime(cls, v: Any) -> Any:
        return parse_mongo_datetime(v)

    class Settings:
        name = "admin_claim"
