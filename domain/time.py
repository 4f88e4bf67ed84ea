"""
Domain time utilities (pure).

Timestamp validation and the millisecond UTC clock used by the workflows.
Every timestamp in inquiry and offer records is a timezone-aware UTC
datetime with at most millisecond precision.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone


def require_utc_timestamp(name: str, value: datetime) -> None:
    """
    Enforces that timestamps are UTC.

    Invariants:
    - Timestamps must be timezone-aware.
    - Timestamps must have UTC offset 0.
    """

    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError(f"{name} must be timezone-aware (UTC)")
    if value.utcoffset() != timedelta(0):
        raise ValueError(f"{name} must be a UTC timestamp (offset 0)")


def truncate_to_millis(value: datetime) -> datetime:
    """Drop sub-millisecond precision (records are persisted at millisecond precision)."""

    return value.replace(microsecond=(value.microsecond // 1000) * 1000)


def utc_now() -> datetime:
    """Current UTC instant at millisecond precision."""

    return truncate_to_millis(datetime.now(timezone.utc))


def add_years(value: datetime, years: int) -> datetime:
    """
    Same calendar day `years` later.

    Feb 29 falls back to Feb 28 when the target year is not a leap year.
    """

    try:
        return value.replace(year=value.year + years)
    except ValueError:
        return value.replace(year=value.year + years, day=28)
