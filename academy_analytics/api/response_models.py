"""
Pydantic request/response schemas for the API.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    loaded: bool
    records: int
    date_range: str
    source: str


class FieldInfo(BaseModel):
    name: str
    label: str
    currency: bool


class FieldsResponse(BaseModel):
    fields: list[FieldInfo]


class PeriodsResponse(BaseModel):
    periods: list[dict]


class UploadResponse(BaseModel):
    status: str
    filename: str
    sheet: str
    records: int
    date_range: str


class QueryRequest(BaseModel):
    text: str


class QueryResponse(BaseModel):
    intent: str
    field: Optional[str] = None
    horizon: int
    report: str