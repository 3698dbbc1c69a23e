from __future__ import annotations

from .models import GenerationParams

# Two years of monthly data each, seed 42.
PRESETS: dict[str, GenerationParams] = {
    "default": GenerationParams(
        count=24, base_value=9000, trend_per_step=2500,
        seasonality_period=12, seasonality_amplitude=3600, noise_amount=800,
    ),
    "highSeasonality": GenerationParams(
        count=24, base_value=10000, trend_per_step=1000,
        seasonality_period=12, seasonality_amplitude=8000, noise_amount=500,
    ),
    "strongTrend": GenerationParams(
        count=24, base_value=5000, trend_per_step=4000,
        seasonality_period=12, seasonality_amplitude=2000, noise_amount=500,
    ),
    "highVolatility": GenerationParams(
        count=24, base_value=10000, trend_per_step=1500,
        seasonality_period=6, seasonality_amplitude=4000, noise_amount=2000,
    ),
    "stable": GenerationParams(
        count=24, base_value=10000, trend_per_step=500,
        seasonality_period=12, seasonality_amplitude=1000, noise_amount=300,
    ),
    "quarterly": GenerationParams(
        count=24, base_value=8000, trend_per_step=1000,
        seasonality_period=3, seasonality_amplitude=3000, noise_amount=600,
    ),
}


def list_presets() -> list[str]:
    return list(PRESETS.keys())


def get_preset(name: str) -> GenerationParams:
    """Return a copy of the named preset."""
    try:
        return PRESETS[name].model_copy(deep=True)
    except KeyError:
        raise KeyError(f"Unknown preset '{name}'. Available: {', '.join(list_presets())}") from None
