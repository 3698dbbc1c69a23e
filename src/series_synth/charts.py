from __future__ import annotations

from collections import defaultdict
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

import matplotlib.pyplot as plt

from .models import TrendResult
from .rows import normalize_rows


def save_matplotlib(fig: Any, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, bbox_inches="tight")
    fig.clf()
    plt.close(fig)


def save_chart(
    records: Iterable[Any],
    path: Path,
    *,
    trends: Optional[Mapping[Any, Optional[TrendResult]]] = None,
    title: str = "Generated series",
) -> Path:
    """
    Line chart of value over date, one line per category, written as PNG.

    When `trends` (the output of `analyze`) is given, each category's fitted
    line is overlaid dashed.
    """
    rows = normalize_rows(records)
    by_cat: dict[Any, list[dict[str, Any]]] = defaultdict(list)
    for r in rows:
        by_cat[r["category"]].append(r)

    fig = plt.figure(figsize=(9, 4.8))
    ax = fig.add_subplot(1, 1, 1)
    for cat, pts in by_cat.items():
        pts = sorted(pts, key=lambda r: r["date"])
        dates = [r["date"] for r in pts]
        (line,) = ax.plot(dates, [r["value"] for r in pts], marker="o", markersize=3, label=str(cat))
        fit = trends.get(cat) if trends else None
        if fit is not None:
            fitted = [fit.slope * i + fit.intercept for i in range(len(pts))]
            ax.plot(dates, fitted, linestyle="--", color=line.get_color(), label=f"{cat} trend")

    ax.set_title(title)
    ax.set_xlabel("date")
    ax.set_ylabel("value")
    ax.legend(loc="best")

    path = Path(path)
    save_matplotlib(fig, path)
    return path
