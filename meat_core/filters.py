from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

import pandas as pd

ALL = "All"


@dataclass(frozen=True)
class FilterSelection:
    region: str = ALL
    channel: str = ALL


def _as_choice(value: Optional[object]) -> str:
    if value is None:
        return ALL
    s = str(value)
    return s if s else ALL


def normalize_selection(raw: Optional[dict]) -> FilterSelection:
    raw = raw or {}
    return FilterSelection(region=_as_choice(raw.get("region")), channel=_as_choice(raw.get("channel")))


def apply_filters(dataset: pd.DataFrame, selection: FilterSelection) -> pd.DataFrame:
    """Stable subset of `dataset` matching the selection; exact, case-sensitive."""
    mask = pd.Series(True, index=dataset.index)
    if selection.region != ALL:
        mask &= dataset["region"] == selection.region
    if selection.channel != ALL:
        mask &= dataset["sales_channel"] == selection.channel
    return dataset[mask].reset_index(drop=True)


def distinct_options(dataset: pd.DataFrame, column: str) -> List[str]:
    if dataset.empty or column not in dataset.columns:
        return [ALL]
    return [ALL] + list(pd.unique(dataset[column]))


def distinct_regions(dataset: pd.DataFrame) -> List[str]:
    return distinct_options(dataset, "region")


def distinct_channels(dataset: pd.DataFrame) -> List[str]:
    return distinct_options(dataset, "sales_channel")


def prepare_context(selection: dict | FilterSelection, dataset: pd.DataFrame) -> Dict[str, object]:
    sel = selection if isinstance(selection, FilterSelection) else normalize_selection(selection)
    return {
        "selection": sel,
        "dataset": dataset,
        "filtered_sales": apply_filters(dataset, sel),
        # Options come from the raw dataset so they stay stable while filtering.
        "regions": distinct_regions(dataset),
        "channels": distinct_channels(dataset),
    }
