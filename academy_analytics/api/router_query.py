"""
Conversational query endpoint — intent routing over the working series.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from academy_analytics.data.store import DataStore
from academy_analytics.api.dependencies import get_store_or_empty
from academy_analytics.api.response_models import QueryRequest, QueryResponse
from academy_analytics.reports.intents import classify
from academy_analytics.reports.router import answer

router = APIRouter(prefix="/api", tags=["query"])


@router.post("/query", response_model=QueryResponse)
def query(req: QueryRequest, store: DataStore = Depends(get_store_or_empty)):
    intent = classify(req.text)
    # Snapshot the reference so the answer is computed over one series
    series = store.series
    return QueryResponse(
        intent=intent.kind.value,
        field=intent.field.value if intent.field else None,
        horizon=intent.horizon,
        report=answer(intent, series),
    )
