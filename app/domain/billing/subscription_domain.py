"""Subscription placeholder.

Checkout returns a mock URL; no payment is settled. The status is
informational and does not gate access to sessions.
"""

from loguru import logger

from app.schemas import Subscription, SubscriptionStatus
from app.schemas.schema_utils import utc_now
from app.utils.app_errors import invalid_request

from .subscription_models import (
    CheckoutParams,
    CheckoutResponse,
    SubscriptionInfo,
    SubscriptionStatusResponse,
)


class SubscriptionService:
    def __init__(self, price_ids: dict[str, str], checkout_base_url: str):
        # plan name -> price id
        self.price_ids = price_ids
        self.checkout_base_url = checkout_base_url.rstrip("/")

    async def create_checkout(self, user_id: str, params: CheckoutParams) -> CheckoutResponse:
        if not params.price_id:
            raise invalid_request("Price ID is required")
        if params.price_id not in self.price_ids.values():
            raise invalid_request(f"Invalid price ID: {params.price_id}")
        if params.plan and self.price_ids.get(params.plan) != params.price_id:
            raise invalid_request(f"Price ID does not match plan {params.plan}")

        url = f"{self.checkout_base_url}/{params.price_id}"
        logger.info("checkout user={} price={} -> {}", user_id, params.price_id, url)
        return CheckoutResponse(url=url, price_id=params.price_id)

    async def _active(self, user_id: str) -> Subscription | None:
        return await Subscription.find_one(
            Subscription.user_id == user_id,
            Subscription.status == SubscriptionStatus.ACTIVE,
        )

    async def get_status(self, user_id: str) -> SubscriptionStatusResponse:
        subscription = await self._active(user_id)
        if subscription is None:
            return SubscriptionStatusResponse(is_subscribed=False)
        return SubscriptionStatusResponse(
            is_subscribed=True,
            subscription=SubscriptionInfo(**subscription.model_dump(exclude={"id", "revision_id"})),
        )

    async def cancel(self, user_id: str) -> SubscriptionStatusResponse:
        subscription = await self._active(user_id)
        if subscription is None:
            raise invalid_request("No active subscription")

        subscription.status = SubscriptionStatus.CANCELED
        subscription.updated_at = utc_now()
        await subscription.save()
        logger.info("subscription {} canceled by user {}", subscription.subscription_id, user_id)
        return SubscriptionStatusResponse(is_subscribed=False)
