"""Shared utilities for schema validation."""

from datetime import UTC, datetime
from typing import Any


def parse_mongo_datetime(v: Any) -> Any:
    """Parse MongoDB Extended JSON datetime format or return as-is if already datetime.

    MongoDB Extended JSON format: {'$date': '2024-11-01T08:00:00Z'}
    This can occur when data is inserted via mongoimport or other tools.
    Naive datetimes (as returned by clients without tz_aware) are taken as UTC.
    """
    if isinstance(v, dict) and "$date" in v:
        v = datetime.fromisoformat(v["$date"].replace("Z", "+00:00"))
    if isinstance(v, str):
        v = datetime.fromisoformat(v.replace("Z", "+00:00"))
    if isinstance(v, datetime) and v.tzinfo is None:
        return v.replace(tzinfo=UTC)
    return v


def utc_now() -> datetime:
    return datetime.now(UTC)
