from __future__ import annotations

from typing import Any, Dict, List

import altair as alt
import pandas as pd

alt.data_transformers.disable_max_rows()

SERIES_LABELS = {
    "units": "Total Current",
    "prev_year_units": "Total (previous year)",
    "yoy_pct": "YoY %",
    "mom_pct": "MoM %",
}


def to_vega_spec(chart: alt.TopLevelMixin) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def series_chart(points: pd.DataFrame, totals: List[str], pcts: List[str]) -> alt.TopLevelMixin:
    """Line chart with totals on the left axis and growth percentages on the right."""
    order = points["label"].tolist()
    layers = []
    axes = (
        (totals, "Units", alt.Axis(format=",.2f", orient="left")),
        (pcts, "%", alt.Axis(format="+.2f", orient="right")),
    )
    for cols, y_title, axis in axes:
        if not cols:
            continue
        long_df = (
            points.melt(id_vars="label", value_vars=cols, var_name="series", value_name="value")
            .dropna(subset=["value"])
            .astype({"value": float})
            .assign(series=lambda d: d["series"].map(SERIES_LABELS))
        )
        hover = alt.selection_point(fields=["series"], on="mouseover", empty="all")
        layers.append(
            alt.Chart(long_df)
            .mark_line(strokeWidth=2)
            .encode(
                x=alt.X("label:O", title="Date", sort=order, axis=alt.Axis(labelOverlap=True, grid=False)),
                y=alt.Y("value:Q", title=y_title, axis=axis),
                color=alt.Color("series:N", title="Series"),
                opacity=alt.condition(hover, alt.value(1), alt.value(0.2)),
                tooltip=[
                    alt.Tooltip("label:N", title="Date"),
                    alt.Tooltip("series:N", title="Series"),
                    alt.Tooltip("value:Q", title="Value", format=",.2f"),
                ],
            )
            .add_params(hover)
        )
    if len(layers) == 2:
        return alt.layer(*layers).resolve_scale(y="independent").properties(height=320)
    return layers[0].properties(height=320)


def monthly_bar_chart(months: pd.DataFrame) -> alt.Chart:
    return (
        alt.Chart(months)
        .mark_bar()
        .encode(
            x=alt.X("month:O", title="Month"),
            y=alt.Y("total_units:Q", title="Monthly total (units)", axis=alt.Axis(format=",.2f", gridDash=[4, 4])),
            tooltip=[
                alt.Tooltip("month:N", title="Month"),
                alt.Tooltip("total_units:Q", title="Total", format=",.2f"),
                alt.Tooltip("mom_pct:Q", title="MoM %", format="+.2f"),
                alt.Tooltip("yoy_pct:Q", title="YoY %", format="+.2f"),
            ],
        )
        .properties(height=240)
    )
