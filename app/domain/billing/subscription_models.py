"""Subscription domain models."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from app.schemas.subscription import SubscriptionStatus


class CheckoutParams(BaseModel):
    price_id: str
    plan: Literal["monthly", "yearly"] | None = None


class CheckoutResponse(BaseModel):
    url: str
    price_id: str


class SubscriptionInfo(BaseModel):
    subscription_id: str
    price_id: str
    status: SubscriptionStatus
    current_period_end: datetime | None = None
    created_at: datetime


class SubscriptionStatusResponse(BaseModel):
    is_subscribed: bool
    subscription: SubscriptionInfo | None = None
