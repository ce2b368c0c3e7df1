from fastapi import APIRouter, Depends

from app.api.v1.dependency import CurrentPrincipal
from app.api.v1.schemas.base import ApiOut
from app.api.v1.schemas.subscription import CheckoutIn, CheckoutOut, SubscriptionStatusOut
from app.domain.billing.subscription_domain import SubscriptionService
from app.domain.billing.subscription_models import CheckoutParams
from app.services.app_services import get_subscription_service as _build_subscription_service

router = APIRouter(prefix="/subscription")

# Singleton instance
_subscription_service = _build_subscription_service()


def get_subscription_service() -> SubscriptionService:
    """Get the singleton SubscriptionService instance."""
    return _subscription_service


@router.post("/create_checkout")
async def create_checkout(
    body: CheckoutIn,
    user: CurrentPrincipal,
    service: SubscriptionService = Depends(get_subscription_service),
) -> ApiOut[CheckoutOut]:
    result = await service.create_checkout(user.user_id, CheckoutParams(**body.model_dump()))
    return ApiOut[CheckoutOut](results=CheckoutOut.model_validate(result.model_dump()))


@router.get("/get_status")
async def get_status(
    user: CurrentPrincipal,
    service: SubscriptionService = Depends(get_subscription_service),
) -> ApiOut[SubscriptionStatusOut]:
    result = await service.get_status(user.user_id)
    return ApiOut[SubscriptionStatusOut](
        results=SubscriptionStatusOut.model_validate(result.model_dump())
    )


@router.post("/cancel")
async def cancel(
    user: CurrentPrincipal,
    service: SubscriptionService = Depends(get_subscription_service),
) -> ApiOut[SubscriptionStatusOut]:
    result = await service.cancel(user.user_id)
    return ApiOut[SubscriptionStatusOut](
        results=SubscriptionStatusOut.model_validate(result.model_dump())
    )
