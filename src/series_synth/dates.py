from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

import pandas as pd

INCREMENTS: tuple[str, ...] = ("day", "week", "month", "year")

_OFFSET_KEYWORD = {
    "day": "days",
    "week": "weeks",
    "month": "months",
    "year": "years",
}


def parse_date(value: Any) -> Optional[date]:
    """
    Coerce a date-like value to a calendar date; None when unparseable.

    Strings go through pandas so ISO timestamps such as
    '2024-01-01T00:00:00Z' are accepted along with plain dates.
    """
    if isinstance(value, datetime):
        # pd.NaT is a datetime subclass
        return None if pd.isna(value) else value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    ts = pd.to_datetime(value.strip(), errors="coerce")
    if pd.isna(ts):
        return None
    return ts.date()


def step_date(start: date, steps: int, increment: str = "month") -> date:
    """
    Advance `start` by `steps` calendar units.

    Month and year steps clamp the day of month to the target month's length
    (Jan 31 + 1 month -> Feb 28/29), so stepping from the start date stays
    strictly increasing.
    """
    if increment not in _OFFSET_KEYWORD:
        raise ValueError(f"increment must be one of {list(INCREMENTS)}, got {increment!r}")
    offset = pd.DateOffset(**{_OFFSET_KEYWORD[increment]: steps})
    return (pd.Timestamp(start.year, start.month, start.day) + offset).date()
