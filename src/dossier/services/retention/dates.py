# src/dossier/services/retention/dates.py
"""
Date and value helpers shared by the retention batches.

Deletion dates are whole calendar dates. Timestamps stored on documents are
reduced to the calendar date as written, without timezone conversion.
"""

import math
from datetime import date, datetime
from typing import Any, Iterator, List, Optional, Sequence, TypeVar

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

T = TypeVar("T")


def normalize(value: Any) -> str:
    """Trimmed string form of a stored value; "" for None."""
    if value is None:
        return ""
    return str(value).strip()


def parse_date(value: Any) -> Optional[date]:
    """
    Parse a stored date or timestamp into a calendar date.

    Accepts date/datetime objects and ISO 8601 strings ("2024-01-15",
    "2024-01-15T08:30:00Z", "2024-01-15 08:30:00+02:00").

    Returns:
        The date, or None when the value is missing or unparseable
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = normalize(value)
    if not text:
        return None

    try:
        return isoparse(text).date()
    except (ValueError, OverflowError):
        return None


def to_iso_date(value: date) -> str:
    """Format as YYYY-MM-DD."""
    return value.strftime("%Y-%m-%d")


def add_calendar_months(base: date, months: int) -> date:
    """
    Add calendar months, keeping the day of month.

    When the target month is shorter the result is clamped to its last day
    (Jan 31 + 1 month -> Feb 28/29), never spilling into the next month.
    """
    return base + relativedelta(months=months)


def is_expired(deletion: date, today: date) -> bool:
    """A deletion date strictly before today is expired."""
    return deletion < today


def parse_months(value: Any) -> Optional[int]:
    """
    Month offset of a retention rule.

    Returns:
        Whole months (fractions truncated toward zero), or None when the
        value is not a finite non-negative number
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = normalize(value)
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None

    if not math.isfinite(number) or number < 0:
        return None
    return int(number)


def chunked(items: Sequence[T], size: int) -> Iterator[List[T]]:
    """Yield consecutive slices of at most `size` items."""
    if size < 1:
        raise ValueError(f"chunk size must be positive, got {size}")
    for start in range(0, len(items), size):
        yield list(items[start:start + size])


__all__ = [
    "normalize",
    "parse_date",
    "to_iso_date",
    "add_calendar_months",
    "is_expired",
    "parse_months",
    "chunked",
]
