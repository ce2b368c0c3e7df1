from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_serializer

from app.schemas.subscription import SubscriptionStatus

from .serializers import serialize_optional_utc_datetime, serialize_utc_datetime


class CheckoutIn(BaseModel):
    price_id: str = Field(description="Must match a configured plan price")
    plan: Literal["monthly", "yearly"] | None = None


class CheckoutOut(BaseModel):
    url: str
    price_id: str


class SubscriptionOut(BaseModel):
    subscription_id: str
    price_id: str
    status: SubscriptionStatus
    current_period_end: datetime | None = None
    created_at: datetime

    @field_serializer("created_at")
    @classmethod
    def serialize_datetime(cls, v: datetime) -> str:
        return serialize_utc_datetime(v)

    @field_serializer("current_period_end")
    @classmethod
    def serialize_period_end(cls, v: datetime | None) -> str | None:
        return serialize_optional_utc_datetime(v)


class SubscriptionStatusOut(BaseModel):
    is_subscribed: bool
    subscription: SubscriptionOut | None = None
