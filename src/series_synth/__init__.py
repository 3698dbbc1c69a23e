"""Synthetic time-series generation and per-category linear trend analysis."""

from __future__ import annotations

from .analyzer import analyze
from .errors import ComputationError, SeriesSynthError, ValidationError
from .export import to_csv
from .generator import generate
from .models import GenerationConfig, GenerationParams, Record, TrendResult
from .random_source import constant_source, seeded_source

__all__ = [
    "ComputationError",
    "GenerationConfig",
    "GenerationParams",
    "Record",
    "SeriesSynthError",
    "TrendResult",
    "ValidationError",
    "analyze",
    "constant_source",
    "generate",
    "seeded_source",
    "to_csv",
]
