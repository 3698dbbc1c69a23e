"""
Prompt building for LLM-written generator functions.

Sits outside the deterministic core: the prompt is derived from a parameter
set only, and the model reply is returned as text without being executed.
"""

from __future__ import annotations

import os
import re
from typing import Optional

from .models import GenerationParams

_FENCE_RE = re.compile(r"^\s*`{3}[A-Za-z]*\s*\n?|\n?`{3}\s*$")


def build_prompt(
    params: GenerationParams,
    *,
    function_name: str = "generateSampleData",
    language: str = "JavaScript",
    date_field: str = "date",
    metric_field: str = "value",
    category_field: str = "category",
) -> str:
    """Describe the series in `params` as instructions for writing a standalone generator function."""

    if params.seasonality:
        seasonality = (
            "- Apply a cyclical seasonality effect.\n"
            f"- The period of the seasonality should be {params.seasonality_period:g} data points.\n"
            f"- The amplitude of the seasonal swing should be {params.seasonality_amplitude:g}."
        )
    else:
        seasonality = "- No seasonality should be applied."

    if params.categories:
        labels = ", ".join(f"'{c}'" for c in params.categories)
        categorical = (
            f"- Include a categorical field named '{category_field}'.\n"
            f"- This field should be randomly assigned one of the following string values: {labels}."
        )
    else:
        categorical = "- Do not include a categorical field."

    return f"""You are an expert {language} developer creating data generation functions for visualization notebooks.
Write a single, self-contained {language} function based on the following specifications.

**Function Specifications:**

- The function must be named `{function_name}`.
- It must accept one optional argument, `count`, to override the default number of data points. If `count` is not provided, it should generate {params.count} data points.
- It must return an array of data objects.

**Data Object Specifications:**

- Each object must have a date field named '{date_field}'. The dates should start from '{params.start_date}' and increment by one {params.increment} for each data point.
- Each object must have a primary numerical metric field named '{metric_field}'. Its value is calculated as follows:
  - Start with a base value of {params.base_value:g}.
  - Apply a linear trend of {params.trend_per_step:g} for each data point. This can be positive or negative.
{seasonality}
  - Add random noise to the value, up to a maximum of {params.noise_amount:g}.
{categorical}

**Output Requirements:**

- Provide ONLY the raw {language} code for the function.
- Do not include any explanations, comments, markdown formatting, or any other text outside of the function code itself.
- Ensure the date logic correctly handles increments of '{params.increment}'.
"""


def strip_code_fences(text: str) -> str:
    """Drop a leading ```lang fence and a trailing ``` fence if the model added them."""
    return _FENCE_RE.sub("", text).strip()


def request_generator_code(prompt: str) -> Optional[str]:
    """
    Send `prompt` to an OpenAI chat model when OPENAI_API_KEY is set.

    Best-effort: returns None when no key is configured or the call fails.
    """
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        return None
    try:
        # Lazy import so offline installs work without the llm extra.
        from openai import OpenAI  # type: ignore

        client = OpenAI(api_key=api_key)
        model = os.getenv("SERIES_SYNTH_LLM_MODEL", "gpt-4o-mini")
        resp = client.chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": "You write small, correct data generation functions."},
                {"role": "user", "content": prompt},
            ],
            temperature=0.2,
        )
        text = resp.choices[0].message.content or ""
        return strip_code_fences(text)
    except Exception:
        return None
