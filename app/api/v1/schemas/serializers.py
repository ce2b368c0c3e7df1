"""Datetime serialization shared by API schemas."""

from datetime import datetime, timezone


def serialize_utc_datetime(dt: datetime) -> str:
    """ISO 8601 in UTC, e.g. 2025-12-03T10:30:00+00:00.

    Naive values are taken as UTC; aware values are converted.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc).isoformat()
    return dt.astimezone(timezone.utc).isoformat()


def serialize_optional_utc_datetime(dt: datetime | None) -> str | None:
    return None if dt is None else serialize_utc_datetime(dt)
