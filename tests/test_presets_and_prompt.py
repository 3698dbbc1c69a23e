from __future__ import annotations

import pytest

from series_synth import GenerationParams, generate, seeded_source
from series_synth.codegen import build_prompt, request_generator_code, strip_code_fences
from series_synth.presets import PRESETS, get_preset, list_presets
from series_synth.validation import config_errors


def test_preset_names() -> None:
    assert list_presets() == ["default", "highSeasonality", "strongTrend", "highVolatility", "stable", "quarterly"]


@pytest.mark.parametrize("name", list(PRESETS))
def test_every_preset_is_valid(name: str) -> None:
    params = get_preset(name)
    assert params.seed == 42
    assert config_errors(params.to_config()) == []
    assert len(generate(params.to_config())) == 24


def test_unknown_preset_lists_available() -> None:
    with pytest.raises(KeyError) as ei:
        get_preset("nope")
    assert "quarterly" in ei.value.args[0]


def test_get_preset_returns_copy() -> None:
    p = get_preset("stable")
    p.categories.append("extra")
    assert "extra" not in PRESETS["stable"].categories


def test_params_seed_drives_source() -> None:
    params = GenerationParams(seed=7)
    assert generate(params.to_config()) == generate(params.to_config(seeded_source(7)))


def test_params_round_trip_json() -> None:
    params = get_preset("highVolatility")
    again = GenerationParams.model_validate_json(params.model_dump_json())
    assert again == params


def test_prompt_describes_parameters() -> None:
    prompt = build_prompt(get_preset("quarterly"), function_name="makeQuarterly")
    assert "`makeQuarterly`" in prompt
    assert "generate 24 data points" in prompt
    assert "increment by one month" in prompt
    assert "base value of 8000" in prompt
    assert "linear trend of 1000" in prompt
    assert "period of the seasonality should be 3 data points" in prompt
    assert "amplitude of the seasonal swing should be 3000" in prompt
    assert "maximum of 600" in prompt
    assert "'fixtures', 'furniture', 'appliances'" in prompt


def test_prompt_without_seasonality_or_categories() -> None:
    params = GenerationParams(seasonality=False, categories=[])
    prompt = build_prompt(params)
    assert "No seasonality should be applied." in prompt
    assert "Do not include a categorical field." in prompt


@pytest.mark.parametrize(
    "raw",
    [
        "```javascript\nfunction f() {}\n```",
        "```\nfunction f() {}\n```",
        "function f() {}",
        "  function f() {}\n",
    ],
)
def test_strip_code_fences(raw: str) -> None:
    assert strip_code_fences(raw) == "function f() {}"


def test_request_without_key_returns_none(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    assert request_generator_code("anything") is None
