"""
DateTime utilities for consistent timezone handling.
"""
from datetime import datetime, timezone
from typing import Callable, Optional

# Clock signature accepted by the managers
Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """
    Get the current UTC time with timezone awareness.

    Returns:
        datetime: Current UTC time with timezone info
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a datetime to an aware UTC value.

    Naive values are assumed to already be UTC, which is how lockout end
    dates are stored.

    Args:
        dt: Datetime to normalize, or None

    Returns:
        Aware UTC datetime, or None when dt is None
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
