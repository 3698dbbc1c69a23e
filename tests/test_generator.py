from __future__ import annotations

from dataclasses import FrozenInstanceError, replace
from datetime import date

import pytest

from series_synth import ComputationError, GenerationConfig, Record, constant_source, generate, seeded_source
from series_synth.generator import round_half_away_from_zero
from series_synth.presets import PRESETS


class RecordingSource:
    """Replays fixed draws and counts how many were taken."""

    def __init__(self, draws: list[float]):
        self.draws = list(draws)
        self.calls = 0

    def __call__(self) -> float:
        u = self.draws[self.calls % len(self.draws)]
        self.calls += 1
        return u


def test_concrete_linear_scenario() -> None:
    cfg = GenerationConfig(
        count=3,
        base_value=1000,
        trend_per_step=100,
        seasonality_amplitude=0,
        noise_amount=0,
        categories=["x"],
        source=constant_source(0.1),
    )
    records = generate(cfg)
    assert [r.value for r in records] == [1000, 1100, 1200]
    assert [r.category for r in records] == ["x", "x", "x"]
    assert [r.index for r in records] == [0, 1, 2]
    assert [r.date for r in records] == [date(2024, 1, 1), date(2024, 2, 1), date(2024, 3, 1)]


def test_count_zero_returns_empty_without_drawing() -> None:
    src = RecordingSource([0.5])
    assert generate(GenerationConfig(count=0, source=src)) == ()
    assert src.calls == 0


def test_noise_draw_precedes_category_draw() -> None:
    # step 0: noise draw 0.75 -> +50, category draw 0.0 -> 'a'
    # step 1: noise draw 0.25 -> -50, category draw 0.99 -> 'b'
    src = RecordingSource([0.75, 0.0, 0.25, 0.99])
    cfg = GenerationConfig(
        count=2,
        base_value=1000,
        trend_per_step=0,
        seasonality_amplitude=0,
        noise_amount=100,
        categories=["a", "b"],
        source=src,
    )
    records = generate(cfg)
    assert [(r.value, r.category) for r in records] == [(1050, "a"), (950, "b")]
    assert src.calls == 4


def test_two_draws_per_step_even_without_noise_or_choice() -> None:
    src = RecordingSource([0.3])
    generate(GenerationConfig(count=7, noise_amount=0, categories=["only"], source=src))
    assert src.calls == 14


def test_same_seed_reproduces_records() -> None:
    params = PRESETS["highVolatility"]
    first = generate(params.to_config(seeded_source(123)))
    second = generate(params.to_config(seeded_source(123)))
    assert first == second


def test_different_seeds_differ() -> None:
    params = PRESETS["default"]
    assert generate(params.to_config(seeded_source(1))) != generate(params.to_config(seeded_source(2)))


@pytest.mark.parametrize("name", sorted(PRESETS))
@pytest.mark.parametrize("seed", [0, 42, 2024])
def test_structural_invariants(name: str, seed: int) -> None:
    params = PRESETS[name].model_copy(update={"seed": seed})
    records = generate(params.to_config())
    assert len(records) == params.count
    assert [r.index for r in records] == list(range(params.count))
    assert all(a.date < b.date for a, b in zip(records, records[1:]))
    assert all(r.value >= 0 for r in records)
    assert all(isinstance(r.value, int) for r in records)
    assert {r.category for r in records} <= set(params.categories)


def test_negative_values_clamp_to_zero() -> None:
    cfg = GenerationConfig(
        count=4,
        base_value=100,
        trend_per_step=-100,
        seasonality_amplitude=0,
        noise_amount=0,
        source=constant_source(0.5),
    )
    assert [r.value for r in generate(cfg)] == [100, 0, 0, 0]


def test_rounding_is_half_away_from_zero() -> None:
    assert round_half_away_from_zero(2.5) == 3
    assert round_half_away_from_zero(3.5) == 4
    assert round_half_away_from_zero(-2.5) == -3
    assert round_half_away_from_zero(1000.49) == 1000

    cfg = GenerationConfig(
        count=1, base_value=1000.5, seasonality_amplitude=0, noise_amount=0, source=constant_source(0.5)
    )
    assert generate(cfg)[0].value == 1001


def test_seasonality_component() -> None:
    # period 4: sin(0), sin(pi/2), sin(pi), sin(3pi/2)
    cfg = GenerationConfig(
        count=4,
        base_value=1000,
        trend_per_step=0,
        seasonality_amplitude=200,
        seasonality_period=4,
        noise_amount=0,
        source=constant_source(0.5),
    )
    assert [r.value for r in generate(cfg)] == [1000, 1200, 1000, 800]
    flat = generate(replace(cfg, seasonality=False))
    assert [r.value for r in flat] == [1000, 1000, 1000, 1000]


def test_noise_band_edges() -> None:
    base = dict(count=1, base_value=1000, seasonality_amplitude=0, noise_amount=300)
    assert generate(GenerationConfig(source=constant_source(0.0), **base))[0].value == 700
    assert generate(GenerationConfig(source=constant_source(0.5), **base))[0].value == 1000


def test_draw_of_one_picks_last_category() -> None:
    cfg = GenerationConfig(count=1, noise_amount=0, categories=["a", "b", "c"], source=constant_source(1.0))
    assert generate(cfg)[0].category == "c"


def test_month_steps_clamp_day_of_month() -> None:
    cfg = GenerationConfig(count=4, start_date="2024-01-31", noise_amount=0, source=constant_source(0.5))
    assert [r.date for r in generate(cfg)] == [
        date(2024, 1, 31),
        date(2024, 2, 29),
        date(2024, 3, 31),
        date(2024, 4, 30),
    ]


def test_month_steps_cross_year_boundary() -> None:
    cfg = GenerationConfig(count=3, start_date="2023-11-15", source=constant_source(0.5))
    assert [r.date for r in generate(cfg)] == [date(2023, 11, 15), date(2023, 12, 15), date(2024, 1, 15)]


@pytest.mark.parametrize(
    "increment,expected",
    [
        ("day", [date(2024, 12, 30), date(2024, 12, 31), date(2025, 1, 1)]),
        ("week", [date(2024, 12, 30), date(2025, 1, 6), date(2025, 1, 13)]),
        ("year", [date(2024, 12, 30), date(2025, 12, 30), date(2026, 12, 30)]),
    ],
)
def test_other_increments(increment: str, expected: list[date]) -> None:
    cfg = GenerationConfig(count=3, start_date="2024-12-30", increment=increment, source=constant_source(0.5))
    assert [r.date for r in generate(cfg)] == expected


def test_bad_draw_raises_computation_error() -> None:
    with pytest.raises(ComputationError):
        generate(GenerationConfig(count=2, source=lambda: "0.5"))
    with pytest.raises(ComputationError):
        generate(GenerationConfig(count=2, source=lambda: 1.5))


def test_records_are_immutable() -> None:
    rec = generate(GenerationConfig(count=1, source=constant_source(0.5)))[0]
    assert isinstance(rec, Record)
    with pytest.raises(FrozenInstanceError):
        rec.value = 5  # type: ignore[misc]


def test_huge_integer_draw_raises_computation_error() -> None:
    with pytest.raises(ComputationError):
        generate(GenerationConfig(count=1, source=lambda: 10**400))


def test_unparseable_start_date_past_validation_raises_computation_error(monkeypatch) -> None:
    import series_synth.generator as generator_mod

    monkeypatch.setattr(generator_mod, "validate_config", lambda config: None)
    with pytest.raises(ComputationError) as ei:
        generate(GenerationConfig(count=1, start_date="invalid", source=constant_source(0.5)))
    assert "start_date" in str(ei.value)
