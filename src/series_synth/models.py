from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable, Optional, Sequence, Union

from pydantic import BaseModel, Field

from .random_source import seeded_source

RandomSource = Callable[[], float]
DateLike = Union[str, date, datetime]

DEFAULT_CATEGORIES: tuple[str, ...] = ("fixtures", "furniture", "appliances")


@dataclass(frozen=True)
class GenerationConfig:
    """
    Everything `generate` needs to synthesize one series.

    count: number of steps, 0..120
    start_date: first step's date (ISO string, date or datetime)
    base_value: level at step 0
    trend_per_step: linear increment added per step
    seasonality_amplitude / seasonality_period: sinusoid added on top;
        period is steps per full cycle, ignored when seasonality is False
    noise_amount: half-width of the uniform noise band
    categories: labels drawn per step
    increment: calendar unit of one step (day, week, month, year)
    source: zero-argument callable returning floats in [0, 1). Required;
        there is no global fallback.
    """
    count: int = 24
    start_date: DateLike = "2024-01-01"
    base_value: float = 9000
    trend_per_step: float = 2500
    seasonality_amplitude: float = 3600
    seasonality_period: float = 12
    seasonality: bool = True
    noise_amount: float = 800
    categories: Sequence[str] = field(default=DEFAULT_CATEGORIES)
    increment: str = "month"
    source: Optional[RandomSource] = None


@dataclass(frozen=True)
class Record:
    """One generated step. Emission order is index order."""

    date: date
    value: int
    category: str
    index: int


@dataclass(frozen=True)
class TrendResult:
    """OLS fit of value on within-category rank."""

    slope: float
    intercept: float
    r_squared: float
    n_points: int

    def as_dict(self) -> dict[str, float]:
        return {
            "slope": self.slope,
            "intercept": self.intercept,
            "r_squared": self.r_squared,
            "n_points": self.n_points,
        }


class GenerationParams(BaseModel):
    """
    Serializable parameter set (presets, JSON files, CLI overrides).

    Mirrors GenerationConfig minus the random source; `seed` stands in for it.
    Bounds are not enforced here: `generate` reports every violation at once.
    """
    count: int = 24
    start_date: str = "2024-01-01"
    base_value: float = 9000
    trend_per_step: float = 2500
    seasonality_amplitude: float = 3600
    seasonality_period: float = 12
    seasonality: bool = True
    noise_amount: float = 800
    categories: list[str] = Field(default_factory=lambda: list(DEFAULT_CATEGORIES))
    increment: str = "month"
    seed: int = 42

    def to_config(self, source: Optional[RandomSource] = None) -> GenerationConfig:
        """Build a GenerationConfig; defaults to a source seeded with `seed`."""
        return GenerationConfig(
            count=self.count,
            start_date=self.start_date,
            base_value=self.base_value,
            trend_per_step=self.trend_per_step,
            seasonality_amplitude=self.seasonality_amplitude,
            seasonality_period=self.seasonality_period,
            seasonality=self.seasonality,
            noise_amount=self.noise_amount,
            categories=tuple(self.categories),
            increment=self.increment,
            source=source if source is not None else seeded_source(self.seed),
        )
