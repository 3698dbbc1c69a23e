from __future__ import annotations

import inspect
import math
import numbers
from typing import Any

from .dates import INCREMENTS, parse_date
from .errors import ValidationError
from .models import GenerationConfig

MAX_COUNT = 120
MIN_YEAR = 1900
MAX_YEAR = 2100

# field -> (min, max, description); bounds inclusive.
NUMERIC_BOUNDS: dict[str, tuple[float, float, str]] = {
    "base_value": (0, 1e6, "base value"),
    "trend_per_step": (-1e5, 1e5, "trend per step"),
    "seasonality_amplitude": (0, 1e5, "seasonality amplitude"),
    "seasonality_period": (1, 24, "seasonality period (steps per cycle)"),
    "noise_amount": (0, 1e5, "noise amount"),
}


def is_number(v: Any) -> bool:
    """Real, non-bool, not NaN. Ints too large for a float still count; compare them as ints."""
    if isinstance(v, bool) or not isinstance(v, numbers.Real):
        return False
    try:
        return not math.isnan(float(v))
    except OverflowError:
        return True


def is_finite_number(v: Any) -> bool:
    """A number that converts to a finite float."""
    if not is_number(v):
        return False
    try:
        return math.isfinite(float(v))
    except OverflowError:
        return False


def _fmt_bound(v: float) -> str:
    return str(int(v)) if float(v).is_integer() else str(v)


def _takes_no_arguments(fn: Any) -> bool:
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        # Some builtins expose no signature; give them the benefit of the doubt.
        return True
    for p in sig.parameters.values():
        if p.default is inspect.Parameter.empty and p.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
            inspect.Parameter.KEYWORD_ONLY,
        ):
            return False
    return True


def config_errors(config: GenerationConfig) -> list[str]:
    """Return every constraint `config` violates, in a stable order. Empty when valid."""
    errors: list[str] = []

    count = config.count
    if isinstance(count, bool) or not isinstance(count, numbers.Integral):
        errors.append("count must be an integer")
    if is_number(count):
        if count < 0:
            errors.append("count must be non-negative")
        if count > MAX_COUNT:
            errors.append(f"count must be <= {MAX_COUNT} months (10 years)")

    start = parse_date(config.start_date)
    if start is None:
        errors.append("start_date must be a valid date string or date object")
    elif not MIN_YEAR <= start.year <= MAX_YEAR:
        errors.append(f"start_date year must be between {MIN_YEAR} and {MAX_YEAR}")

    for name, (lo, hi, desc) in NUMERIC_BOUNDS.items():
        val = getattr(config, name)
        if not is_number(val):
            errors.append(f"{name} must be a number")
        elif val < lo or val > hi:
            errors.append(f"{name} must be between {_fmt_bound(lo)} and {_fmt_bound(hi)} ({desc})")

    categories = config.categories
    if not isinstance(categories, (list, tuple)):
        errors.append("categories must be a list")
    else:
        if len(categories) == 0:
            errors.append("categories cannot be empty")
        if any(not isinstance(c, str) for c in categories):
            errors.append("all category names must be strings")
        elif len(set(categories)) != len(categories):
            errors.append("category names must be unique")

    if config.increment not in INCREMENTS:
        errors.append(f"increment must be one of {list(INCREMENTS)}")

    source = config.source
    if source is None or not callable(source) or not _takes_no_arguments(source):
        errors.append("source must be a callable returning a number")

    return errors


def validate_config(config: GenerationConfig) -> None:
    """Raise ValidationError carrying every violation when `config` is malformed."""
    errors = config_errors(config)
    if errors:
        raise ValidationError(errors)
