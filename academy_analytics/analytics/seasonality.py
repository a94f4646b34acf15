"""
Seasonal analytics — year-agnostic mean of a field per canonical month.
"""
from __future__ import annotations

from academy_analytics.config import MIN_POINTS, MONTHS
from academy_analytics.data.schemas import Field, TimeSeries
from academy_analytics.analytics.results import ResultStatus, SeasonalResult


def seasonal_pattern(ts: TimeSeries, field: Field) -> SeasonalResult:
    """Mean per month across all years; months with no records report 0."""
    if len(ts) < MIN_POINTS["seasonal"]:
        return SeasonalResult(ResultStatus.INSUFFICIENT_DATA)

    df = ts.to_frame()
    grouped = df.groupby("month")[field.value].agg(["mean", "count"])

    means = {m: round(float(grouped["mean"].get(m, 0.0)), 2) for m in MONTHS}
    counts = {m: int(grouped["count"].get(m, 0)) for m in MONTHS}

    observed = [m for m in MONTHS if counts[m] > 0]
    peak = max(observed, key=lambda m: means[m])
    low = min(observed, key=lambda m: means[m])
    return SeasonalResult(ResultStatus.OK, means, counts, peak, low)
