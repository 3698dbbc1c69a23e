from __future__ import annotations

from pathlib import Path

import pandas as pd

from series_synth import analyze, generate
from series_synth.charts import save_chart
from series_synth.presets import PRESETS


def main(out_dir: str = "test_data/presets", plots: bool = True) -> None:
    """Write one CSV (and optionally one chart) per built-in preset, plus a trend summary."""
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)

    summary = []
    for name, params in PRESETS.items():
        records = generate(params.to_config())
        df = pd.DataFrame(
            [{"date": r.date.isoformat(), "category": r.category, "value": r.value, "index": r.index} for r in records]
        )
        df.to_csv(out / f"{name}.csv", index=False)

        trends = analyze(records)
        for cat, fit in trends.items():
            summary.append(
                {
                    "preset": name,
                    "category": cat,
                    "slope": None if fit is None else round(fit.slope, 3),
                    "intercept": None if fit is None else round(fit.intercept, 3),
                    "r_squared": None if fit is None else round(fit.r_squared, 4),
                }
            )

        if plots:
            save_chart(records, out / f"{name}.png", trends=trends, title=name)

    pd.DataFrame(summary).to_csv(out / "trend_summary.csv", index=False)
    print(f"Wrote {len(PRESETS)} preset series to {out.resolve()}")


if __name__ == "__main__":
    main()
