"""Permissive CSV ingestion for uploaded sales files.

Rows that cannot be mapped are dropped and unparseable numbers become zero;
nothing here raises on malformed content.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple, Union

import numpy as np
import pandas as pd

from meat_core.records import COLUMNS, empty_dataset

logger = logging.getLogger(__name__)

MIN_FIELDS = 8
FIELD_COLUMNS = COLUMNS[:MIN_FIELDS]

# A comma separates fields only when an even number of quotes follows it.
_SPLIT_RE = re.compile(r',(?=(?:(?:[^"]*"){2})*[^"]*$)')
_NUMBER_PREFIX_RE = r"^([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"


def _unquote(field: str) -> str:
    if len(field) >= 2 and field[0] == '"' and field[-1] == '"':
        return field[1:-1]
    return field


def split_csv_line(line: str) -> List[str]:
    """Split on commas outside double-quoted spans.

    One pair of enclosing quotes is removed from each field, so `"Cairo, Egypt"`
    yields `Cairo, Egypt`; there is no escaped-quote handling.
    """
    return [_unquote(f) for f in _SPLIT_RE.split(line)]


def decode_content(content: Union[str, bytes]) -> str:
    if isinstance(content, bytes):
        return content.decode("utf-8-sig", errors="replace")
    return content


def coerce_decimal(series: pd.Series) -> Tuple[pd.Series, int]:
    """Parse a text column as floats, falling back to a leading number.

    A cell that is not a number as a whole falls back to its leading numeric
    part (`12kg` -> 12, `1.5.2` -> 1.5). Blanks, junk and inf/nan become 0.
    Returns the parsed column and how many cells were defaulted.
    """
    cleaned = series.astype(str).str.strip()
    parsed = pd.to_numeric(cleaned, errors="coerce").astype(float)
    prefix = pd.to_numeric(cleaned.str.extract(_NUMBER_PREFIX_RE, expand=False), errors="coerce").astype(float)
    parsed = parsed.fillna(prefix).replace([np.inf, -np.inf], np.nan)
    defaulted = int(parsed.isna().sum())
    return parsed.fillna(0.0), defaulted


def parse_sales_csv(content: Optional[Union[str, bytes]]) -> Optional[pd.DataFrame]:
    """Parse uploaded CSV content into a dataset frame.

    Returns None when no content was supplied so callers can treat it as a
    no-op. Column order is positional: Date, Meat_Cut, Weight_kg, KG_Price,
    Region, Sales_Channel, Customer_Type, Promo_Applied; extra columns are
    ignored and the header line is never validated.
    """
    if content is None:
        return None

    lines = decode_content(content).split("\n")
    header = lines[0].rstrip("\r")
    logger.debug("CSV header: %s", header)

    rows: List[List[str]] = []
    dropped = 0
    for raw in lines[1:]:
        line = raw[:-1] if raw.endswith("\r") else raw
        if not line.strip():
            continue
        values = split_csv_line(line)
        if len(values) < MIN_FIELDS:
            dropped += 1
            continue
        rows.append(values[:MIN_FIELDS])

    if not rows:
        logger.info("Parsed 0 sales rows (%d short rows dropped)", dropped)
        return empty_dataset()

    df = pd.DataFrame(rows, columns=FIELD_COLUMNS)
    df["weight_kg"], bad_weight = coerce_decimal(df["weight_kg"])
    df["kg_price"], bad_price = coerce_decimal(df["kg_price"])
    df["revenue"] = df["weight_kg"] * df["kg_price"]
    df = df[COLUMNS]

    logger.info(
        "Parsed %d sales rows (%d short rows dropped, %d numeric cells defaulted to 0)",
        len(df),
        dropped,
        bad_weight + bad_price,
    )
    return df
