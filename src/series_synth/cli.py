from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer

from .analyzer import analyze
from .charts import save_chart
from .codegen import build_prompt, request_generator_code
from .errors import SeriesSynthError
from .export import read_csv_rows, to_csv, write_csv
from .generator import generate
from .models import GenerationParams
from .presets import get_preset, list_presets

app = typer.Typer(add_completion=False, help="Synthetic time-series generator and trend analyzer")

# ---- Preset commands ----
preset_app = typer.Typer(help="Inspect built-in parameter presets.")
app.add_typer(preset_app, name="preset")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@preset_app.command("list")
def preset_list() -> None:
    """List available presets."""
    for name in list_presets():
        typer.echo(name)


@preset_app.command("describe")
def preset_describe(
    preset: str = typer.Option(..., "--preset", help="Preset name to describe")
) -> None:
    """Show a preset's parameters as JSON."""
    try:
        params = get_preset(preset)
    except KeyError as exc:
        typer.echo(exc.args[0], err=True)
        raise typer.Exit(code=1)
    typer.echo(json.dumps(params.model_dump(), indent=2, sort_keys=True))


def _load_params(preset: Optional[str], params_file: Optional[Path]) -> GenerationParams:
    if params_file is not None:
        return GenerationParams.model_validate_json(params_file.read_text(encoding="utf-8"))
    if preset is not None:
        return get_preset(preset)
    return GenerationParams()


def _report_error(exc: Exception) -> None:
    for line in str(exc).splitlines():
        typer.echo(line, err=True)


@app.command("generate")
def generate_cmd(
    preset: Optional[str] = typer.Option(None, "--preset", help="Start from a named preset"),
    params_file: Optional[Path] = typer.Option(None, "--params", exists=True, help="JSON parameter file"),
    count: Optional[int] = typer.Option(None, "--count", help="Number of steps (0-120)"),
    start_date: Optional[str] = typer.Option(None, "--start-date", help="First date, YYYY-MM-DD"),
    base_value: Optional[float] = typer.Option(None, "--base-value"),
    trend: Optional[float] = typer.Option(None, "--trend", help="Trend per step"),
    amplitude: Optional[float] = typer.Option(None, "--amplitude", help="Seasonality amplitude"),
    period: Optional[float] = typer.Option(None, "--period", help="Seasonality period in steps"),
    no_seasonality: bool = typer.Option(False, "--no-seasonality", help="Disable the seasonal component"),
    noise: Optional[float] = typer.Option(None, "--noise", help="Noise half-width"),
    category: list[str] = typer.Option([], "--category", help="Category label (repeatable)"),
    increment: Optional[str] = typer.Option(None, "--increment", help="day|week|month|year"),
    seed: Optional[int] = typer.Option(None, "--seed"),
    out: Optional[Path] = typer.Option(None, "--out", help="Write CSV here instead of stdout"),
    plot: Optional[Path] = typer.Option(None, "--plot", help="Also write a PNG chart here"),
):
    """
    Generate a series and emit it as CSV.

    Overrides apply on top of --params or --preset (in that order of precedence).
    """
    try:
        params = _load_params(preset, params_file)
        overrides = {
            "count": count,
            "start_date": start_date,
            "base_value": base_value,
            "trend_per_step": trend,
            "seasonality_amplitude": amplitude,
            "seasonality_period": period,
            "noise_amount": noise,
            "categories": list(category) or None,
            "increment": increment,
            "seed": seed,
        }
        update = {k: v for k, v in overrides.items() if v is not None}
        if no_seasonality:
            update["seasonality"] = False
        params = params.model_copy(update=update)

        records = generate(params.to_config())

        if out is not None:
            write_csv(records, out)
            typer.echo(f"Wrote {len(records)} records to {out}")
        else:
            typer.echo(to_csv(records))

        if plot is not None and records:
            save_chart(records, plot, trends=analyze(records))
            typer.echo(f"Chart: {plot}", err=True)
    except KeyError as e:
        typer.echo(e.args[0], err=True)
        raise typer.Exit(code=1)
    except (SeriesSynthError, ValueError) as e:
        _report_error(e)
        raise typer.Exit(code=1)


@app.command("analyze")
def analyze_cmd(
    data: Path = typer.Option(..., "--data", help="CSV with date,category,value columns"),
):
    """Print per-category trend statistics as JSON."""
    try:
        rows = read_csv_rows(data.read_text(encoding="utf-8"))
        results = analyze(rows)
    except FileNotFoundError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(code=2)
    except (SeriesSynthError, ValueError) as e:
        _report_error(e)
        raise typer.Exit(code=1)

    payload = {str(k): (v.as_dict() if v is not None else None) for k, v in results.items()}
    typer.echo(json.dumps(payload, indent=2, sort_keys=True))


@app.command("prompt")
def prompt_cmd(
    preset: Optional[str] = typer.Option(None, "--preset", help="Describe a named preset"),
    function_name: str = typer.Option("generateSampleData", "--function-name"),
    send: bool = typer.Option(False, "--send", help="Send the prompt to the configured LLM"),
):
    """Print a code-generation prompt, or the model's reply with --send."""
    try:
        params = get_preset(preset) if preset else GenerationParams()
    except KeyError as e:
        typer.echo(e.args[0], err=True)
        raise typer.Exit(code=1)

    prompt = build_prompt(params, function_name=function_name)
    if not send:
        typer.echo(prompt)
        return

    code = request_generator_code(prompt)
    if code is None:
        typer.echo("ERROR: LLM unavailable (set OPENAI_API_KEY).", err=True)
        raise typer.Exit(code=1)
    typer.echo(code)
