"""Command-line entry point for the synthetic series generator.

Runs the typer app: `generate` writes a seeded series as CSV (and optionally
a PNG chart), `analyze` fits per-category trends to such a CSV, `preset`
lists or shows built-in parameter sets, and `prompt` builds a code-generation
prompt.

Preferred invocation is via the installed console script:

    series-synth ...

For convenience we also support:

    python -m series_synth ...
"""

from __future__ import annotations

from .cli import app


def main() -> None:
    """Entry point used by `python -m series_synth`."""

    app()


if __name__ == "__main__":
    main()
