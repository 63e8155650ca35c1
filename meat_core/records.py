from __future__ import annotations

from dataclasses import astuple, dataclass, fields
from typing import Iterable, List

import pandas as pd


@dataclass(frozen=True)
class SalesRecord:
    date: str
    meat_cut: str
    weight_kg: float
    kg_price: float
    region: str
    sales_channel: str
    customer_type: str
    promo_applied: str
    revenue: float


COLUMNS: List[str] = [f.name for f in fields(SalesRecord)]
NUMERIC_COLUMNS = ["weight_kg", "kg_price", "revenue"]
TEXT_COLUMNS = [c for c in COLUMNS if c not in NUMERIC_COLUMNS]

# Display names of the upload format, in positional order.
CSV_HEADER = [
    "Date",
    "Meat_Cut",
    "Weight_kg",
    "KG_Price",
    "Region",
    "Sales_Channel",
    "Customer_Type",
    "Promo_Applied",
]


SAMPLE_RECORDS: List[SalesRecord] = [
    SalesRecord("2024-04-12", "Liver", 24.73, 194.32, "Cairo", "Retail", "Supermarket", "No", 4805.53),
    SalesRecord("2024-12-14", "Flank", 4.78, 163.35, "Delta", "Retail", "Supermarket", "No", 780.81),
    SalesRecord("2024-09-27", "Ribeye", 5.59, 251.62, "Alexandria", "Butcher Shop", "Distributor", "No", 1406.55),
    SalesRecord("2024-04-16", "Short Ribs", 42.92, 424.47, "Upper Egypt", "HoReCa", "Restaurant", "No", 18218.25),
    SalesRecord("2024-03-12", "Round", 49.53, 275.78, "Cairo", "Online", "End Consumer", "Yes", 13659.38),
    SalesRecord("2024-07-07", "Kidney", 34.45, 124.42, "Giza", "Retail", "End Consumer", "No", 4286.27),
    SalesRecord("2024-01-21", "Sirloin", 23.41, 213.31, "Alexandria", "Wholesale", "Supermarket", "No", 4993.59),
    SalesRecord("2024-09-11", "Short Ribs", 35.49, 371.08, "Upper Egypt", "Online", "Distributor", "Yes", 13169.63),
    SalesRecord("2024-10-29", "Sirloin", 46.62, 300.46, "Giza", "Wholesale", "End Consumer", "No", 14007.44),
    SalesRecord("2024-07-25", "Flank", 39.56, 179.50, "Alexandria", "Online", "Distributor", "Yes", 7101.02),
]


def _with_dtypes(df: pd.DataFrame) -> pd.DataFrame:
    for col in NUMERIC_COLUMNS:
        df[col] = df[col].astype(float)
    for col in TEXT_COLUMNS:
        df[col] = df[col].astype(object)
    return df


def empty_dataset() -> pd.DataFrame:
    return _with_dtypes(pd.DataFrame(columns=COLUMNS))


def records_to_frame(records: Iterable[SalesRecord]) -> pd.DataFrame:
    rows = [astuple(r) for r in records]
    if not rows:
        return empty_dataset()
    return _with_dtypes(pd.DataFrame(rows, columns=COLUMNS))


def frame_to_records(df: pd.DataFrame) -> List[SalesRecord]:
    out: List[SalesRecord] = []
    for row in df[COLUMNS].itertuples(index=False, name=None):
        values = dict(zip(COLUMNS, row))
        for col in NUMERIC_COLUMNS:
            values[col] = float(values[col])
        out.append(SalesRecord(**values))
    return out


def sample_dataset() -> pd.DataFrame:
    """The built-in sample; revenue values are taken as authored, not recomputed."""
    return records_to_frame(SAMPLE_RECORDS)
