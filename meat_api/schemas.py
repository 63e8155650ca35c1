from __future__ import annotations

from typing import List

from pydantic import BaseModel


class FilterSelectionModel(BaseModel):
    region: str = "All"
    channel: str = "All"


class MetaListResponse(BaseModel):
    values: List[str]


class UploadResponse(BaseModel):
    applied: bool
    rows: int
