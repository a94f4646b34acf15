"""
Query router — free-text question → one analytics call → plain-text report.
"""
from __future__ import annotations

from academy_analytics.config import DEFAULT_Z_THRESHOLD
from academy_analytics.data.schemas import Field, TimeSeries
from academy_analytics.analytics.anomalies import detect_anomalies
from academy_analytics.analytics.correlation import correlation_matrix
from academy_analytics.analytics.forecast import (
    ensemble_prediction, exponential_smoothing, linear_regression, polynomial_regression,
)
from academy_analytics.analytics.growth import growth_analysis
from academy_analytics.analytics.seasonality import seasonal_pattern
from academy_analytics.analytics.summary import summarize
from academy_analytics.reports import narrative
from academy_analytics.reports.intents import Intent, IntentType, classify


def forecast_report(ts: TimeSeries, field: Field, horizon: int) -> str:
    if ts.is_empty:
        return narrative.NO_DATA
    members = [
        linear_regression(ts, field, horizon),
        polynomial_regression(ts, field, horizon),
        exponential_smoothing(ts, field, horizon=horizon),
    ]
    ensemble = ensemble_prediction(ts, field, horizon)
    last = ts[-1]
    return narrative.render_forecast(field, ensemble, members, (last.year, last.month))


def _dispatch(intent: Intent, ts: TimeSeries) -> str:
    field = intent.field or Field.TOTAL_STUDENTS

    if intent.kind == IntentType.PREDICT:
        return forecast_report(ts, field, intent.horizon)
    if intent.kind == IntentType.GROWTH:
        return narrative.render_growth(field, growth_analysis(ts, field))
    if intent.kind == IntentType.ANOMALY:
        anomalies = detect_anomalies(ts, field, DEFAULT_Z_THRESHOLD)
        return narrative.render_anomalies(field, anomalies, DEFAULT_Z_THRESHOLD, len(ts))
    if intent.kind == IntentType.SEASONAL:
        return narrative.render_seasonal(field, seasonal_pattern(ts, field))
    if intent.kind == IntentType.CORRELATION:
        return narrative.render_correlations(correlation_matrix(ts))
    if intent.kind == IntentType.SUMMARY:
        return narrative.render_summary(summarize(ts))
    return narrative.CAPABILITIES


def answer(intent: Intent, ts: TimeSeries) -> str:
    """Report for an already-classified question. Never raises on short or empty data."""
    if intent.kind == IntentType.UNKNOWN:
        return narrative.CAPABILITIES
    if ts.is_empty:
        return narrative.NO_DATA
    return _dispatch(intent, ts)


def route(text: str, ts: TimeSeries) -> str:
    """Answer a free-text question about the working series."""
    return answer(classify(text or ""), ts)
