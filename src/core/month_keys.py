"""
Calendar helpers for ``YYYY-MM`` month keys.

All month arithmetic in the application goes through this module so that
year boundaries are handled in one place.
"""

import re
from datetime import date

from dateutil.relativedelta import relativedelta

_MONTH_KEY_RE = re.compile(r"^(\d{4})-(\d{1,2})$")


def month_key(value: date) -> str:
    """Format a date as its ``YYYY-MM`` key."""
    return f"{value.year:04d}-{value.month:02d}"


def parse_month_key(key: str) -> tuple[int, int]:
    """Split a month key into ``(year, month)``.

    Accepts single-digit months (``2025-1``). Raises ValueError for anything
    else, including months outside 1-12.
    """
    match = _MONTH_KEY_RE.match(key.strip()) if key else None
    if not match:
        raise ValueError(f"Invalid month key: {key!r}")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month key: {key!r}")
    return year, month


def normalize_month_key(key: str | None) -> str | None:
    """Return the zero-padded form of ``key``, or None if it is not a month key."""
    if not key:
        return None
    try:
        year, month = parse_month_key(key)
    except ValueError:
        return None
    return f"{year:04d}-{month:02d}"


def is_month_key(key: str) -> bool:
    """True when ``key`` is a strict ``YYYY-MM`` key."""
    return bool(key) and normalize_month_key(key) == key


def shift_month_key(key: str, months: int) -> str:
    """Move a month key forward (positive) or back (negative) by whole months."""
    year, month = parse_month_key(key)
    return month_key(date(year, month, 1) + relativedelta(months=months))


def current_month_key(today: date | None = None) -> str:
    return month_key(today or date.today())


def previous_month_key(key: str) -> str:
    return shift_month_key(key, -1)


def trailing_month_keys(end_key: str, count: int) -> list[str]:
    """The ``count`` month keys ending at ``end_key``, oldest first."""
    return [shift_month_key(end_key, -offset) for offset in range(count - 1, -1, -1)]


def months_ago(value: date, months: int) -> date:
    """Same day ``months`` calendar months earlier, clamped to the month's end."""
    return value - relativedelta(months=months)


def month_label(key: str) -> str:
    """Human form of a month key, e.g. ``January 2025``."""
    year, month = parse_month_key(key)
    return date(year, month, 1).strftime("%B %Y")
