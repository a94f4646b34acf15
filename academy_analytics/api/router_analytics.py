"""
Analytics endpoints: forecasts, moving average, growth, seasonality, correlation,
anomalies, summary. All read the working series; none mutate it.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from academy_analytics.config import DEFAULT_Z_THRESHOLD
from academy_analytics.data.store import DataStore
from academy_analytics.api.dependencies import get_store, parse_field, parse_horizon, parse_window
from academy_analytics.analytics.anomalies import detect_anomalies
from academy_analytics.analytics.common import sanitize_for_json
from academy_analytics.analytics.correlation import correlation, correlation_matrix
from academy_analytics.analytics.forecast import MODELS, moving_average, run_model
from academy_analytics.analytics.growth import growth_analysis
from academy_analytics.analytics.seasonality import seasonal_pattern
from academy_analytics.analytics.summary import summarize

router = APIRouter(prefix="/api", tags=["analytics"])


@router.get("/forecast/{field}")
def forecast(
    field: str,
    horizon: int = Depends(parse_horizon),
    model: str = Query("ensemble", description="|".join(MODELS)),
    store: DataStore = Depends(get_store),
):
    fld = parse_field(field)
    if model not in MODELS:
        raise HTTPException(400, f"Unknown model: {model}. Valid: {list(MODELS)}")
    result = run_model(model, store.series, fld, horizon)
    return sanitize_for_json({"field": fld.value, "horizon": horizon, **result.to_dict()})


@router.get("/moving-average/{field}")
def moving_average_endpoint(
    field: str,
    window: int = Depends(parse_window),
    store: DataStore = Depends(get_store),
):
    fld = parse_field(field)
    result = moving_average(store.series, fld, window)
    return sanitize_for_json({"field": fld.value, **result.to_dict()})


@router.get("/growth/{field}")
def growth(field: str, store: DataStore = Depends(get_store)):
    fld = parse_field(field)
    return sanitize_for_json({"field": fld.value, **growth_analysis(store.series, fld).to_dict()})


@router.get("/seasonal/{field}")
def seasonal(field: str, store: DataStore = Depends(get_store)):
    fld = parse_field(field)
    return sanitize_for_json({"field": fld.value, **seasonal_pattern(store.series, fld).to_dict()})


@router.get("/anomalies/{field}")
def anomalies(
    field: str,
    z: float = Query(DEFAULT_Z_THRESHOLD, gt=0),
    store: DataStore = Depends(get_store),
):
    fld = parse_field(field)
    found = detect_anomalies(store.series, fld, z)
    return sanitize_for_json({
        "field": fld.value,
        "z_threshold": z,
        "count": len(found),
        "anomalies": [a.to_dict() for a in found],
    })


@router.get("/correlation")
def correlation_endpoint(
    a: Optional[str] = Query(None),
    b: Optional[str] = Query(None),
    store: DataStore = Depends(get_store),
):
    """One pair when both a and b are given, otherwise the default pair set."""
    if a is None and b is None:
        return sanitize_for_json({"pairs": correlation_matrix(store.series)})
    if a is None or b is None:
        raise HTTPException(400, "Provide both a and b, or neither")
    fa, fb = parse_field(a), parse_field(b)
    result = correlation(store.series, fa, fb)
    return sanitize_for_json({"field_a": fa.value, "field_b": fb.value, **result.to_dict()})


@router.get("/summary")
def summary(store: DataStore = Depends(get_store)):
    return sanitize_for_json(summarize(store.series))
