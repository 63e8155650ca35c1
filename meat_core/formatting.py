from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

import pandas as pd

CURRENCY = "EGP"


def round_half_up(value: object, ndigits: int = 0) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    q = Decimal(10) ** -ndigits
    return float(Decimal(str(value)).quantize(q, rounding=ROUND_HALF_UP))


def format_currency(value: object, currency: str = CURRENCY) -> str:
    rounded = round_half_up(value)
    if rounded is None:
        return "N/A"
    return f"{currency} {rounded:,.0f}"


def format_weight_kg(value: object) -> str:
    rounded = round_half_up(value)
    if rounded is None:
        return "N/A"
    return f"{rounded:,.0f} kg"


def format_count(value: object) -> str:
    if value is None or pd.isna(value):
        return "N/A"
    return f"{int(value):,}"
