from __future__ import annotations

import logging
import math
from typing import Callable

from .dates import parse_date, step_date
from .errors import ComputationError
from .models import GenerationConfig, Record
from .validation import is_number, validate_config

logger = logging.getLogger(__name__)


def round_half_away_from_zero(x: float) -> int:
    """Round to the nearest integer; ties go away from zero (2.5 -> 3, -2.5 -> -3)."""
    if x >= 0:
        return int(math.floor(x + 0.5))
    return -int(math.floor(-x + 0.5))


def _draw(source: Callable[[], float], step: int) -> float:
    u = source()
    if not is_number(u) or not 0.0 <= u <= 1.0:
        raise ComputationError(f"source returned {u!r} at step {step}; expected a number in [0, 1)")
    return float(u)


def generate(config: GenerationConfig) -> tuple[Record, ...]:
    """
    Synthesize `config.count` records: base + trend + seasonality + noise.

    Each step draws from `config.source` exactly twice, noise first and
    category second, whether or not noise or multiple categories are in
    play. Replaying a seeded source therefore reproduces the series only
    when this order is kept.

    Values are rounded half away from zero and clamped at 0.
    """
    validate_config(config)

    start = parse_date(config.start_date)
    if start is None:
        raise ComputationError(f"start_date {config.start_date!r} is not a date")
    source = config.source
    categories = list(config.categories)
    n_cats = len(categories)

    records: list[Record] = []
    for i in range(config.count):
        trend = config.trend_per_step * i
        seasonal = 0.0
        if config.seasonality:
            seasonal = config.seasonality_amplitude * math.sin(2 * math.pi * i / config.seasonality_period)
        noise = (_draw(source, i) - 0.5) * 2 * config.noise_amount

        raw = config.base_value + trend + seasonal + noise
        value = max(0, round_half_away_from_zero(raw))

        # A draw of exactly 1.0 would index past the end.
        cat_idx = min(int(math.floor(_draw(source, i) * n_cats)), n_cats - 1)

        records.append(
            Record(
                date=step_date(start, i, config.increment),
                value=value,
                category=categories[cat_idx],
                index=i,
            )
        )

    logger.debug("generated %d records from %s by %s", len(records), start.isoformat(), config.increment)
    return tuple(records)
