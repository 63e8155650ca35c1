from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

import pandas as pd

from meat_core.charts import regional_split_chart, revenue_by_cut_chart, revenue_trend_chart, to_vega_spec
from meat_core.filters import FilterSelection


def _empty_series() -> pd.DataFrame:
    return pd.DataFrame({"name": pd.Series(dtype=object), "value": pd.Series(dtype=float)})


def _revenue_by(view: pd.DataFrame, keys: pd.Series, *, sort_keys: bool) -> pd.DataFrame:
    if view.empty:
        return _empty_series()
    grouped = view["revenue"].groupby(keys.rename("name"), sort=sort_keys, dropna=False).sum()
    return grouped.rename("value").reset_index()


def total_revenue(view: pd.DataFrame) -> float:
    return float(view["revenue"].sum()) if not view.empty else 0.0


def total_weight(view: pd.DataFrame) -> float:
    return float(view["weight_kg"].sum()) if not view.empty else 0.0


def avg_price_per_kg(view: pd.DataFrame) -> float:
    weight = total_weight(view)
    return total_revenue(view) / weight if weight > 0 else 0.0


def transaction_count(view: pd.DataFrame) -> int:
    return int(len(view))


def revenue_by_cut(view: pd.DataFrame) -> pd.DataFrame:
    """Revenue per meat cut, largest first; ties keep first-seen order."""
    out = _revenue_by(view, view["meat_cut"], sort_keys=False)
    return out.sort_values("value", ascending=False, kind="stable").reset_index(drop=True)


def revenue_by_region(view: pd.DataFrame) -> pd.DataFrame:
    return _revenue_by(view, view["region"], sort_keys=False)


def month_key(date: object) -> str:
    return str(date)[:7]


def revenue_by_month(view: pd.DataFrame) -> pd.DataFrame:
    # YYYY-MM keys sort chronologically as plain strings.
    keys = view["date"].astype(str).str[:7]
    return _revenue_by(view, keys, sort_keys=True)


def compute_overview(selection: FilterSelection, ctx: Dict[str, Any], *, include_charts: bool = True) -> Dict[str, Any]:
    view: pd.DataFrame = ctx["filtered_sales"]
    dataset: pd.DataFrame = ctx["dataset"]

    by_cut = revenue_by_cut(view)
    by_region = revenue_by_region(view)
    by_month = revenue_by_month(view)

    charts: Dict[str, Any] = {}
    if include_charts:
        charts = {
            "revenue_by_cut": to_vega_spec(revenue_by_cut_chart(by_cut)),
            "regional_split": to_vega_spec(regional_split_chart(by_region)),
            "revenue_trend": to_vega_spec(revenue_trend_chart(by_month)),
        }

    return {
        "filters": asdict(selection),
        "kpis": {
            "total_revenue": total_revenue(view),
            "total_weight": total_weight(view),
            "avg_price_per_kg": avg_price_per_kg(view),
            "transaction_count": transaction_count(view),
        },
        "series": {
            "revenue_by_cut": by_cut.to_dict(orient="records"),
            "revenue_by_region": by_region.to_dict(orient="records"),
            "revenue_by_month": by_month.to_dict(orient="records"),
        },
        "options": {"regions": ctx["regions"], "channels": ctx["channels"]},
        "row_counts": {"dataset": int(len(dataset)), "filtered": int(len(view))},
        "charts": charts,
    }
