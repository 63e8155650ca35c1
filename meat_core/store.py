"""Owned dashboard state: the current dataset and filter selection.

Derived data (filtered view, KPIs, series) is produced by `derive`, a pure
function of `(dataset, selection)`. The store re-runs it after each state
change and notifies subscribers; nothing is recomputed implicitly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

import pandas as pd

from meat_core.filters import ALL, FilterSelection, prepare_context
from meat_core.metrics import compute_overview
from meat_core.parser import parse_sales_csv
from meat_core.records import sample_dataset

logger = logging.getLogger(__name__)

Content = Union[str, bytes]
Listener = Callable[["DatasetStore"], None]


@dataclass(frozen=True)
class Derived:
    filtered_view: pd.DataFrame
    overview: Dict[str, Any]


def derive(dataset: pd.DataFrame, selection: FilterSelection, *, include_charts: bool = True) -> Derived:
    ctx = prepare_context(selection, dataset)
    return Derived(
        filtered_view=ctx["filtered_sales"],
        overview=compute_overview(selection, ctx, include_charts=include_charts),
    )


class DatasetStore:
    def __init__(self, dataset: Optional[pd.DataFrame] = None, *, include_charts: bool = True):
        self._dataset = dataset if dataset is not None else sample_dataset()
        self._selection = FilterSelection()
        self._include_charts = include_charts
        self._listeners: List[Listener] = []
        # Upload tickets: issued when a load starts, applied in start order.
        self._issued = 0
        self._applied = 0
        self._derived = derive(self._dataset, self._selection, include_charts=include_charts)

    @property
    def dataset(self) -> pd.DataFrame:
        return self._dataset

    @property
    def selection(self) -> FilterSelection:
        return self._selection

    @property
    def filtered_view(self) -> pd.DataFrame:
        return self._derived.filtered_view

    @property
    def overview(self) -> Dict[str, Any]:
        return self._derived.overview

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _recompute(self) -> None:
        self._derived = derive(self._dataset, self._selection, include_charts=self._include_charts)
        for listener in list(self._listeners):
            listener(self)

    def select(self, region: Optional[str] = None, channel: Optional[str] = None) -> bool:
        """Update the selection; returns False when nothing changed."""
        selection = FilterSelection(
            region=self._selection.region if region is None else region,
            channel=self._selection.channel if channel is None else channel,
        )
        if selection == self._selection:
            return False
        self._selection = selection
        self._recompute()
        return True

    def clear_filters(self) -> bool:
        return self.select(region=ALL, channel=ALL)

    def _begin_load(self) -> int:
        self._issued += 1
        return self._issued

    def _complete_load(self, ticket: int, dataset: pd.DataFrame) -> bool:
        if ticket <= self._applied:
            logger.info("Discarding stale dataset load #%d (already applied #%d)", ticket, self._applied)
            return False
        self._applied = ticket
        # Selection is kept; values missing from the new data yield an empty view.
        self._dataset = dataset
        self._recompute()
        logger.info("Dataset replaced (%d rows, load #%d)", len(dataset), ticket)
        return True

    def replace_dataset(self, dataset: pd.DataFrame) -> bool:
        return self._complete_load(self._begin_load(), dataset)

    def load_csv(self, content: Optional[Content]) -> bool:
        """Parse and replace synchronously; no content is a no-op."""
        ticket = self._begin_load()
        parsed = parse_sales_csv(content)
        if parsed is None:
            return False
        return self._complete_load(ticket, parsed)

    async def upload(self, read: Callable[[], Awaitable[Optional[Content]]]) -> bool:
        """Read file content asynchronously, then parse and replace.

        A read that finishes after a later-started load was applied is
        discarded, so the most recently started upload always wins.
        """
        ticket = self._begin_load()
        content = await read()
        parsed = parse_sales_csv(content)
        if parsed is None:
            return False
        return self._complete_load(ticket, parsed)

    def reset(self) -> bool:
        return self.replace_dataset(sample_dataset())
