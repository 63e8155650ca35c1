from __future__ import annotations

import logging
import math
import os
from typing import List, Optional

import numpy as np
import pandas as pd
from fastapi import FastAPI, File, Request, UploadFile
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from meat_api.schemas import FilterSelectionModel, MetaListResponse, UploadResponse
from meat_core.filters import FilterSelection, apply_filters, distinct_channels, distinct_regions, normalize_selection
from meat_core.records import COLUMNS, CSV_HEADER
from meat_core.store import DatasetStore

DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000", "http://localhost:8501"]


def _cors_origins() -> List[str]:
    raw = os.environ.get("MEAT_DASHBOARD_CORS_ORIGINS", "")
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or DEFAULT_CORS_ORIGINS


app = FastAPI(title="Meat Sales Dashboard API", version="0.1.0")
app.state.store = DatasetStore()
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _store(request: Request) -> DatasetStore:
    return request.app.state.store


def _selection_from_model(model: FilterSelectionModel) -> FilterSelection:
    return normalize_selection(model.model_dump())


def _error(exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
            },
        )
    )


@app.get("/meta/regions", response_model=MetaListResponse)
def meta_regions(request: Request):
    try:
        return _json({"values": distinct_regions(_store(request).dataset)})
    except Exception as exc:
        logger.exception("meta_regions failed")
        return _error(exc)


@app.get("/meta/channels", response_model=MetaListResponse)
def meta_channels(request: Request):
    try:
        return _json({"values": distinct_channels(_store(request).dataset)})
    except Exception as exc:
        logger.exception("meta_channels failed")
        return _error(exc)


@app.post("/overview")
def overview(request: Request, filters: FilterSelectionModel):
    try:
        store = _store(request)
        sel = _selection_from_model(filters)
        store.select(region=sel.region, channel=sel.channel)
        return _json(store.overview)
    except Exception as exc:
        logger.exception("overview failed")
        return _error(exc)


@app.post("/upload", response_model=UploadResponse)
async def upload(request: Request, file: Optional[UploadFile] = File(default=None)):
    try:
        store = _store(request)
        if file is None:
            return _json({"applied": False, "rows": int(len(store.dataset))})
        logger.info("Received upload %s", file.filename)
        applied = await store.upload(file.read)
        return _json({"applied": applied, "rows": int(len(store.dataset))})
    except Exception as exc:
        logger.exception("upload failed")
        return _error(exc)


@app.post("/reset", response_model=UploadResponse)
def reset(request: Request):
    try:
        store = _store(request)
        applied = store.reset()
        return _json({"applied": applied, "rows": int(len(store.dataset))})
    except Exception as exc:
        logger.exception("reset failed")
        return _error(exc)


@app.post("/export")
def export_view(request: Request, filters: FilterSelectionModel):
    view = apply_filters(_store(request).dataset, _selection_from_model(filters))
    export_df = view.rename(columns=dict(zip(COLUMNS, CSV_HEADER + ["Revenue"])))
    csv_bytes = export_df.to_csv(index=False).encode("utf-8")
    return Response(
        content=csv_bytes,
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=meat_sales_filtered.csv"},
    )
