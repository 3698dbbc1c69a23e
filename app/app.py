"""Series Synth - interactive generator dashboard"""
import pandas as pd
import matplotlib.pyplot as plt
import streamlit as st

from series_synth import ComputationError, ValidationError, analyze, generate, to_csv
from series_synth.codegen import build_prompt, request_generator_code
from series_synth.dates import INCREMENTS
from series_synth.presets import get_preset, list_presets

st.set_page_config(
    page_title="Series Synth",
    layout="wide"
)


def sidebar_params():
    """Collect generation parameters from the sidebar, starting from a preset."""
    st.sidebar.header("Parameters")
    preset_name = st.sidebar.selectbox("Preset", list_presets())
    p = get_preset(preset_name)

    count = st.sidebar.slider("Steps", 0, 120, p.count)
    start_date = st.sidebar.text_input("Start date", p.start_date)
    increment = st.sidebar.selectbox("Increment", list(INCREMENTS), index=list(INCREMENTS).index(p.increment))
    base_value = st.sidebar.slider("Base value", 0.0, 100000.0, float(p.base_value), step=100.0)
    trend = st.sidebar.slider("Trend per step", -10000.0, 10000.0, float(p.trend_per_step), step=50.0)
    seasonality = st.sidebar.toggle("Seasonality", value=p.seasonality)
    amplitude = st.sidebar.slider("Seasonality amplitude", 0.0, 20000.0, float(p.seasonality_amplitude), step=100.0)
    period = st.sidebar.slider("Seasonality period", 1, 24, int(p.seasonality_period))
    noise = st.sidebar.slider("Noise", 0.0, 10000.0, float(p.noise_amount), step=50.0)
    categories = st.sidebar.text_input("Categories (comma separated)", ", ".join(p.categories))
    seed = st.sidebar.number_input("Seed", value=p.seed, step=1)

    return p.model_copy(
        update={
            "count": count,
            "start_date": start_date,
            "increment": increment,
            "base_value": base_value,
            "trend_per_step": trend,
            "seasonality": seasonality,
            "seasonality_amplitude": amplitude,
            "seasonality_period": period,
            "noise_amount": noise,
            "categories": [c.strip() for c in categories.split(",") if c.strip()],
            "seed": int(seed),
        }
    )


def render_chart(records, trends):
    df = pd.DataFrame([{"date": r.date, "category": r.category, "value": r.value} for r in records])
    fig, ax = plt.subplots(figsize=(9, 4.8))
    for cat, grp in df.groupby("category", sort=False):
        (line,) = ax.plot(grp["date"], grp["value"], marker="o", markersize=3, label=str(cat))
        fit = trends.get(cat)
        if fit is not None:
            xs = range(len(grp))
            ax.plot(grp["date"], [fit.slope * i + fit.intercept for i in xs],
                    linestyle="--", color=line.get_color(), label=f"{cat} trend")
    ax.set_xlabel("date")
    ax.set_ylabel("value")
    ax.legend(loc="best")
    st.pyplot(fig)
    plt.close(fig)


def render_trends(trends):
    rows = []
    for cat, fit in trends.items():
        if fit is None:
            rows.append({"category": cat, "slope": None, "intercept": None, "r_squared": None, "points": 1})
        else:
            rows.append({"category": cat, "slope": round(fit.slope, 2), "intercept": round(fit.intercept, 2),
                         "r_squared": round(fit.r_squared, 4), "points": fit.n_points})
    st.dataframe(pd.DataFrame(rows), hide_index=True)


def main():
    st.title("Series Synth")
    params = sidebar_params()

    try:
        records = generate(params.to_config())
    except ValidationError as e:
        for err in e.errors:
            st.error(err)
        return

    if not records:
        st.info("No steps requested.")
        return

    try:
        trends = analyze(records)
    except ComputationError as e:
        st.error(str(e))
        return

    render_chart(records, trends)

    st.subheader("Trend by category")
    render_trends(trends)

    st.download_button(
        "Download CSV",
        data=to_csv(records) + "\n",
        file_name="series.csv",
        mime="text/csv",
    )

    with st.expander("Code-generation prompt"):
        function_name = st.text_input("Function name", "generateSampleData")
        prompt = build_prompt(params, function_name=function_name)
        st.code(prompt, language="markdown")
        if st.button("Generate code with LLM"):
            code = request_generator_code(prompt)
            if code is None:
                st.warning("LLM unavailable. Set OPENAI_API_KEY to enable code generation.")
            else:
                st.code(code, language="javascript")


main()
