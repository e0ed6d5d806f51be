"""
Domain time utilities (pure).

Centralized timestamp validation and calendar-date helpers shared by the
maintenance and print-job rules.

Behavior and error messages must remain consistent across the domain model.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone


def require_utc_timestamp(name: str, value: datetime) -> None:
    """
    Enforces that timestamps handed to the domain are UTC.

    Invariants:
    - Timestamps must be timezone-aware.
    - Timestamps must have UTC offset 0.
    """

    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError(f"{name} must be timezone-aware (UTC)")
    if value.utcoffset() != timedelta(0):
        raise ValueError(f"{name} must be a UTC timestamp (offset 0)")


def as_calendar_date(value: date | datetime) -> date:
    """Reduce a datetime to its calendar date; plain dates pass through."""

    if isinstance(value, datetime):
        return value.date()
    return value


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_today() -> date:
    return utc_now().date()
