from __future__ import annotations

import random
from typing import Callable, Union


def seeded_source(seed: Union[int, str]) -> Callable[[], float]:
    """
    Deterministic source of floats in [0, 1).

    Backed by random.Random (Mersenne Twister, MT19937). Two sources built
    from the same seed yield identical sequences.
    """
    rng = random.Random(seed)
    return rng.random


def constant_source(value: float) -> Callable[[], float]:
    """Source that always returns `value`. Handy for exact expectations in tests."""

    def _draw() -> float:
        return value

    return _draw
