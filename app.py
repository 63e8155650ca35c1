import logging
from contextlib import contextmanager
from typing import Optional

import altair as alt
import pandas as pd
import streamlit as st

from meat_core.charts import regional_split_chart, revenue_by_cut_chart, revenue_trend_chart
from meat_core.formatting import format_count, format_currency, format_weight_kg
from meat_core.store import DatasetStore

alt.data_transformers.disable_max_rows()
logger = logging.getLogger(__name__)


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .app-top-bar {padding: 6px 0 4px;border-bottom: 1px solid #e2e8f0;margin-bottom: 10px;}
        .app-top-bar .page-title {font-size: 1.4rem;font-weight: 700;color: #1e293b;}
        .card {border: 1px solid #f1f5f9;border-radius: 12px;padding: 16px;background: #ffffff;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px;}
        .card-title {font-weight: 700;font-size: 1.05rem;color: #1e293b;margin-bottom: 8px;}
        .count-note {color: #94a3b8;font-size: 0.9rem;text-align: right;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str):
    container = st.container()
    container.markdown(f"<div class='card'><div class='card-title'>{title}</div>", unsafe_allow_html=True)
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def get_store() -> DatasetStore:
    if "store" not in st.session_state:
        st.session_state["store"] = DatasetStore(include_charts=False)
    return st.session_state["store"]


def handle_upload(store: DatasetStore, uploaded) -> None:
    if uploaded is None:
        return
    # Streamlit reruns the script on every interaction; parse each file once.
    file_key = getattr(uploaded, "file_id", None) or f"{uploaded.name}:{uploaded.size}"
    if st.session_state.get("_uploaded_file_key") == file_key:
        return
    st.session_state["_uploaded_file_key"] = file_key
    logger.info("Loading uploaded file %s", uploaded.name)
    store.load_csv(uploaded.getvalue())


def with_current(options, value: str):
    # A stale selection stays visible (and selected) after a new upload.
    return options if value in options else options + [value]


def render_kpis(kpis: dict):
    cols = st.columns(4)
    cols[0].metric("Total Revenue", format_currency(kpis["total_revenue"]), help="EGP (Gross)")
    cols[1].metric("Total Weight Sold", format_weight_kg(kpis["total_weight"]))
    cols[2].metric("Avg Price / KG", format_currency(kpis["avg_price_per_kg"]))
    cols[3].metric("Transactions", format_count(kpis["transaction_count"]))


def series_frame(points) -> pd.DataFrame:
    return pd.DataFrame(points, columns=["name", "value"])


def render_chart(chart: Optional[alt.Chart], empty_message: str):
    if chart is None:
        st.info(empty_message)
        return
    st.altair_chart(chart, use_container_width=True)


# ---------- UI setup ----------
st.set_page_config(page_title="Mansour's Meat Sales Analysis", layout="wide")
inject_base_styles()
store = get_store()

top = st.container()
c1, c2 = top.columns([6, 3])
with c1:
    st.markdown(
        "<div class='app-top-bar'><div class='page-title'>Mansour's Meat Sales Analysis</div></div>",
        unsafe_allow_html=True,
    )
with c2:
    handle_upload(store, st.file_uploader("Upload Full CSV", type=["csv"], accept_multiple_files=False))

regions = with_current(store.overview["options"]["regions"], store.selection.region)
channels = with_current(store.overview["options"]["channels"], store.selection.channel)

f1, f2, f3 = st.columns([2, 2, 4])
region = f1.selectbox("Region", regions, index=regions.index(store.selection.region))
channel = f2.selectbox("Sales Channel", channels, index=channels.index(store.selection.channel))
store.select(region=region, channel=channel)

f3.markdown(
    f"<div class='count-note'>Showing analysis for {store.overview['row_counts']['filtered']} transactions</div>",
    unsafe_allow_html=True,
)

render_kpis(store.overview["kpis"])
series = store.overview["series"]

left, right = st.columns([2, 1])
with left:
    with card("Revenue by Meat Cut"):
        by_cut = series_frame(series["revenue_by_cut"])
        render_chart(revenue_by_cut_chart(by_cut) if not by_cut.empty else None, "No transactions for the selected filters.")
with right:
    with card("Regional Split"):
        by_region = series_frame(series["revenue_by_region"])
        render_chart(regional_split_chart(by_region) if not by_region.empty else None, "No transactions for the selected filters.")

with card("Revenue Trend Over Time"):
    by_month = series_frame(series["revenue_by_month"])
    render_chart(revenue_trend_chart(by_month) if not by_month.empty else None, "No transactions for the selected filters.")
