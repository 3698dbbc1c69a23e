from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable

from .dates import parse_date
from .errors import ComputationError
from .validation import is_finite_number

REQUIRED_FIELDS: tuple[str, ...] = ("date", "category", "value")


def _get(rec: Any, name: str) -> Any:
    if isinstance(rec, Mapping):
        return rec.get(name)
    return getattr(rec, name, None)


def normalize_rows(records: Iterable[Any], *, allow_empty: bool = False) -> list[dict[str, Any]]:
    """
    Check records and flatten them to {'date', 'category', 'value'} dicts.

    Accepts Record instances or plain mappings (dates as date/datetime or
    'YYYY-MM-DD' strings). Raises ComputationError on a missing field,
    a non-string category, a non-finite or non-numeric value or a malformed
    date. Empty input is an error unless `allow_empty` is set.
    """
    if records is None or isinstance(records, (str, bytes, Mapping)):
        raise ComputationError("records must be a sequence of records")

    out: list[dict[str, Any]] = []
    for i, rec in enumerate(records):
        for field in REQUIRED_FIELDS:
            if _get(rec, field) is None:
                raise ComputationError(f"Missing required field '{field}' at row {i}")
        value = _get(rec, "value")
        if not is_finite_number(value):
            raise ComputationError(f"Invalid value at row {i}: {value!r}")
        category = _get(rec, "category")
        if not isinstance(category, str):
            raise ComputationError(f"Invalid category at row {i}: {category!r}")
        raw_date = _get(rec, "date")
        d = parse_date(raw_date)
        if d is None:
            raise ComputationError(f"Invalid date at row {i}: {raw_date!r}")
        out.append({"date": d, "category": category, "value": value})

    if not out and not allow_empty:
        raise ComputationError("records cannot be empty")
    return out
