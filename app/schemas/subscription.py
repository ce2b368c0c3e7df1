"""Subscription ODM schema."""

from datetime import datetime
from enum import Enum
from typing import Any

from beanie import Document, Indexed
from pydantic import Field, field_validator

from .schema_utils import parse_mongo_datetime, utc_now


class SubscriptionStatus(str, Enum):
    ACTIVE = "active"
    CANCELED = "canceled"

    def __str__(self) -> str:
        return self.value


class Subscription(Document):
    subscription_id: Indexed(str, unique=True)  # type: ignore[valid-type]
    user_id: Indexed(str)  # type: ignore[valid-type]
    price_id: str
    status: SubscriptionStatus = SubscriptionStatus.ACTIVE
    current_period_end: datetime | None = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("current_period_end", "created_at", "updated_at", mode="before")
    @classmethod
    def _parse_datetime(cls, v: Any) -> Any:
        return parse_mongo_datetime(v)

    class Settings:
        name = "subscription"
