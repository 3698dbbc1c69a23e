from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

import numpy as np
import pandas as pd

from .errors import ComputationError
from .models import TrendResult
from .rows import normalize_rows

logger = logging.getLogger(__name__)

# Relative tolerance for treating a residual as zero on a flat series.
FLAT_RESIDUAL_RTOL = 1e-9


def fit_trend(values: np.ndarray) -> TrendResult:
    """
    OLS of `values` on their rank 0..n-1 (n >= 2).

    r-squared on a flat series (every value equal) is reported as 1.0: the
    fitted line reproduces it exactly. A flat series with a non-zero residual
    cannot come from finite inputs and raises ComputationError.
    """
    y = np.asarray(values, dtype=float)
    n = int(y.size)
    if n < 2:
        raise ComputationError(f"need at least 2 points for a trend, got {n}")

    x = np.arange(n, dtype=float)
    sx = float(x.sum())
    sy = float(y.sum())
    sxy = float((x * y).sum())
    sx2 = float((x * x).sum())

    slope = (n * sxy - sx * sy) / (n * sx2 - sx * sx)
    intercept = (sy - slope * sx) / n

    predicted = slope * x + intercept
    ss_res = float(((y - predicted) ** 2).sum())

    if np.all(y == y[0]):
        if ss_res > FLAT_RESIDUAL_RTOL * max(1.0, float((y * y).sum())):
            raise ComputationError("r-squared undefined: flat series with non-zero residual")
        r_squared = 1.0
    else:
        ss_tot = float(((y - y.mean()) ** 2).sum())
        r_squared = 1.0 - ss_res / ss_tot

    return TrendResult(slope=slope, intercept=intercept, r_squared=r_squared, n_points=n)


def analyze(records: Iterable[Any]) -> dict[Any, Optional[TrendResult]]:
    """
    Per-category linear trend of value over date.

    Each category's records are stable-sorted by date and regressed on their
    rank. Categories with fewer than 2 points map to None. Keys follow first
    appearance in `records`.
    """
    rows = normalize_rows(records)
    df = pd.DataFrame(rows)

    results: dict[Any, Optional[TrendResult]] = {}
    for category, grp in df.groupby("category", sort=False):
        grp = grp.sort_values("date", kind="stable")
        if len(grp) < 2:
            results[category] = None
            continue
        results[category] = fit_trend(grp["value"].to_numpy(dtype=float))

    logger.debug("analyzed %d records across %d categories", len(df), len(results))
    return results
