from __future__ import annotations

from typing import Any, Dict

import altair as alt
import pandas as pd

alt.data_transformers.disable_max_rows()

PALETTE = ["#0088FE", "#00C49F", "#FFBB28", "#FF8042", "#8884d8", "#82ca9d", "#ffc658"]
BAR_COLOR = "#3b82f6"
LINE_COLOR = "#8b5cf6"


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def revenue_by_cut_chart(by_cut: pd.DataFrame) -> alt.Chart:
    return (
        alt.Chart(by_cut)
        .mark_bar(color=BAR_COLOR, cornerRadiusTopLeft=4, cornerRadiusTopRight=4, size=40)
        .encode(
            x=alt.X("name:N", title=None, sort=None, axis=alt.Axis(labelAngle=0, ticks=False, domain=False)),
            y=alt.Y("value:Q", title=None, axis=alt.Axis(format="~s", gridDash=[3, 3], domain=False, ticks=False)),
            tooltip=[alt.Tooltip("name:N", title="Cut"), alt.Tooltip("value:Q", title="Revenue", format=",.0f")],
        )
        .properties(height=320)
    )


def regional_split_chart(by_region: pd.DataFrame) -> alt.Chart:
    # Domain follows first-seen region order so colours match the legend order.
    domain = by_region["name"].tolist()
    palette = [PALETTE[i % len(PALETTE)] for i in range(len(domain))]
    return (
        alt.Chart(by_region)
        .mark_arc(innerRadius=60, outerRadius=100, padAngle=0.05)
        .encode(
            theta=alt.Theta("value:Q", stack=True),
            color=alt.Color(
                "name:N",
                title=None,
                sort=None,
                scale=alt.Scale(domain=domain, range=palette) if domain else alt.Undefined,
                legend=alt.Legend(orient="bottom", symbolType="circle"),
            ),
            tooltip=[alt.Tooltip("name:N", title="Region"), alt.Tooltip("value:Q", title="Revenue", format=",.0f")],
        )
        .properties(height=320)
    )


def revenue_trend_chart(by_month: pd.DataFrame) -> alt.Chart:
    return (
        alt.Chart(by_month)
        .mark_line(color=LINE_COLOR, strokeWidth=3, point={"filled": True, "size": 60, "color": LINE_COLOR})
        .encode(
            x=alt.X("name:O", title=None, axis=alt.Axis(labelAngle=0, grid=False)),
            y=alt.Y("value:Q", title=None, axis=alt.Axis(format="~s", gridDash=[3, 3], domain=False, ticks=False)),
            tooltip=[alt.Tooltip("name:N", title="Month"), alt.Tooltip("value:Q", title="Revenue", format=",.0f")],
        )
        .properties(height=320)
    )
