from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Any, Iterable

from .rows import normalize_rows

CSV_HEADER: tuple[str, ...] = ("date", "category", "value")


def _fmt_value(v: Any) -> str:
    f = float(v)
    return str(int(f)) if f.is_integer() else repr(f)


def to_csv(records: Iterable[Any]) -> str:
    """
    Render records as `date,category,value` lines joined by '\\n'.

    Fields are not quoted or escaped: a category containing a comma produces
    an extra column. No trailing newline; empty input yields the header alone.
    """
    rows = normalize_rows(records, allow_empty=True)
    lines = [",".join(CSV_HEADER)]
    for r in rows:
        lines.append(",".join([r["date"].isoformat(), str(r["category"]), _fmt_value(r["value"])]))
    return "\n".join(lines)


def write_csv(records: Iterable[Any], path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(to_csv(records) + "\n", encoding="utf-8")
    return path


def _parse_value(s: str) -> int | float:
    try:
        return int(s)
    except ValueError:
        return float(s)


def read_csv_rows(text: str) -> list[dict[str, Any]]:
    """Parse `to_csv` output back into {'date', 'category', 'value'} dicts (date stays a string)."""
    reader = csv.DictReader(io.StringIO(text))
    rows: list[dict[str, Any]] = []
    for r in reader:
        if not r or not any(r.values()):
            continue
        rows.append(
            {
                "date": (r.get("date") or "").strip(),
                "category": r.get("category") or "",
                "value": _parse_value((r.get("value") or "").strip()),
            }
        )
    return rows

