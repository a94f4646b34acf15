"""
Meta endpoints: health, fields, periods.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from academy_analytics.data.store import DataStore
from academy_analytics.data.schemas import Field
from academy_analytics.api.dependencies import get_store_or_empty
from academy_analytics.api.response_models import (
    FieldInfo, FieldsResponse, HealthResponse, PeriodsResponse,
)

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health(store: DataStore = Depends(get_store_or_empty)):
    return HealthResponse(
        status="ok",
        loaded=store.is_loaded,
        records=store.row_count(),
        date_range=store.date_range(),
        source=store.series.source,
    )


@router.get("/fields", response_model=FieldsResponse)
def list_fields():
    return FieldsResponse(fields=[
        FieldInfo(name=f.value, label=f.label, currency=f.is_currency) for f in Field
    ])


@router.get("/periods", response_model=PeriodsResponse)
def list_periods(store: DataStore = Depends(get_store_or_empty)):
    return PeriodsResponse(periods=store.periods_available())
