"""
Anomaly detection — population z-scores over the full field series.
"""
from __future__ import annotations

from academy_analytics.config import DEFAULT_Z_THRESHOLD, MIN_POINTS
from academy_analytics.data.schemas import Field, TimeSeries
from academy_analytics.analytics.common import is_constant, population_stats, safe_divide
from academy_analytics.analytics.results import Anomaly


def detect_anomalies(
    ts: TimeSeries,
    field: Field,
    z_threshold: float = DEFAULT_Z_THRESHOLD,
) -> list[Anomaly]:
    """Records whose |value - mean| / std exceeds z_threshold, in chronological order."""
    values = ts.values(field)
    if len(values) < MIN_POINTS["anomalies"]:
        return []

    mean, std = population_stats(values)
    if std == 0 or is_constant(values):
        return []

    anomalies = []
    for record, value in zip(ts, values):
        z = abs(value - mean) / std
        if z > z_threshold:
            anomalies.append(Anomaly(
                year_month=record.year_month,
                value=float(value),
                z_score=round(float(z), 2),
                deviation_pct=round(safe_divide(value - mean, mean) * 100, 1),
            ))
    return anomalies
