"""
Row value conversion shared by the repositories.

Supabase (PostgREST) returns timestamps and dates as ISO-8601 strings,
sometimes with a trailing 'Z', and numeric columns as int, float or string.
"""

from __future__ import annotations

import json
from datetime import date, datetime, timezone
from typing import Any, List, Optional


def parse_utc_datetime(value: Any) -> datetime:
    """Parse a Supabase timestamp into a timezone-aware UTC datetime."""

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    else:
        raise TypeError(f"Unsupported timestamp type: {type(value)!r}")

    if dt.tzinfo is None or dt.utcoffset() is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_optional_utc_datetime(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    return parse_utc_datetime(value)


def parse_date(value: Any) -> date:
    """Parse a DATE column; full timestamps are reduced to their UTC date."""

    if isinstance(value, datetime):
        return parse_utc_datetime(value).date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        if len(value) == 10:
            return date.fromisoformat(value)
        return parse_utc_datetime(value).date()
    raise TypeError(f"Unsupported date type: {type(value)!r}")


def to_iso_utc(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).isoformat()


def parse_string_list(value: Any) -> List[str]:
    """
    Parse a list-of-strings column.

    Accepts a JSON array (native or encoded as text) or a comma-separated string.
    """

    if value is None or value == "":
        return []
    if isinstance(value, list):
        return [str(v) for v in value]
    if isinstance(value, str):
        text = value.strip()
        if text.startswith("["):
            decoded = json.loads(text)
            return [str(v) for v in decoded]
        return [part.strip() for part in text.split(",") if part.strip()]
    raise TypeError(f"Unsupported list type: {type(value)!r}")


def raise_on_error(response: Any, action: str) -> List[dict]:
    """
    Return response rows, raising RuntimeError if Supabase reported an error.
    """

    error = getattr(response, "error", None)
    if error:
        raise RuntimeError(f"Failed to {action}: {error}")
    return getattr(response, "data", None) or []


__all__ = [
    "parse_date",
    "parse_optional_utc_datetime",
    "parse_string_list",
    "parse_utc_datetime",
    "raise_on_error",
    "to_iso_utc",
]
