"""Time helpers.

Timestamps are timezone-aware UTC datetimes. Naive input is taken to be UTC.
"""
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Current time in UTC."""
    return datetime.now(timezone.utc)


def to_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to a naive datetime, convert an aware one to UTC."""
    if value is None:
        return value
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
