from typing import Generic, TypeVar

from app.shared.api.utils import ApiSuccess

T = TypeVar("T")


class ApiOut(ApiSuccess, Generic[T]):
    """Success envelope `{success: true, results, version}` returned by every v1 router."""

    results: T  # type: ignore[valid-type]
