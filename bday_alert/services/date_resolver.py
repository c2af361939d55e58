from __future__ import annotations

from datetime import date, datetime
from numbers import Real
from typing import Any

import pandas as pd

"""Birth date resolution for spreadsheet cells.

Two paths, tried in order by resolve_date():
1. Native cell value (datetime / date / pandas Timestamp, or an Excel serial
   number when the cell was left unformatted)
2. Display text matched against the fixed registry date patterns

Both return None instead of raising when nothing resolves.
"""

__all__ = [
    "TEXT_DATE_FORMATS",
    "resolve_from_cell",
    "resolve_from_text",
    "resolve_date",
]

# strptime also accepts single-digit day/month, so "%d/%m/%Y" covers d/M/yyyy
TEXT_DATE_FORMATS: tuple[str, ...] = (
    "%d/%m/%Y",
    "%Y-%m-%d",
    "%d-%m-%Y",
    "%d.%m.%Y",
)

EXCEL_EPOCH = "1899-12-30"
_MAX_EXCEL_SERIAL = 2958465  # 9999-12-31


def resolve_from_cell(value: Any) -> date | None:
    """Convert a native cell value to a calendar date in the local time zone."""
    if value is None or isinstance(value, (str, bool)):
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, Real) and 1 <= value <= _MAX_EXCEL_SERIAL:
        try:
            ts = pd.to_datetime(value, unit="D", origin=EXCEL_EPOCH)
        except (pd.errors.OutOfBoundsDatetime, OverflowError):
            # past 2262-04-11, outside the nanosecond Timestamp range
            return None
        return ts.date()
    return None


def resolve_from_text(text: str) -> date | None:
    """Parse ``text`` with the first matching pattern of TEXT_DATE_FORMATS.

    Patterns must match the whole (trimmed) text; partial matches are rejected.
    """
    s = text.strip()
    if not s:
        return None
    for fmt in TEXT_DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            continue
    return None


def resolve_date(value: Any, text: str) -> date | None:
    """Native value first, display text as fallback."""
    resolved = resolve_from_cell(value)
    if resolved is not None:
        return resolved
    return resolve_from_text(text)
