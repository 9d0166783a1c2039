"""Calendar-date parsing and inclusive span arithmetic."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

DateInput = Union[str, date, None]


def parse_calendar_date(value: DateInput) -> Optional[date]:
    """Parse ``YYYY-MM-DD`` (or the date part of an ISO timestamp).

    Returns ``None`` when *value* is not a valid calendar date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def inclusive_days(start: date, end: date) -> int:
    """Number of calendar days in ``[start, end]``, both ends counted."""
    return round(abs((end - start).days)) + 1


def ranges_overlap(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    """Two closed date intervals intersect unless one ends before the other starts."""
    return not (a_end < b_start or b_end < a_start)
