"""
Growth analytics — period-over-period growth rates and a trend label.
"""
from __future__ import annotations

from academy_analytics.config import MIN_POINTS, SHARP_DECLINE_PCT, STRONG_GROWTH_PCT
from academy_analytics.data.schemas import Field, TimeSeries
from academy_analytics.analytics.common import pct_change
from academy_analytics.analytics.results import GrowthResult, ResultStatus


def trend_label(avg_growth: float) -> str:
    if avg_growth > STRONG_GROWTH_PCT:
        return "Strong Growth"
    if avg_growth >= 0:
        return "Moderate Growth"
    if avg_growth >= SHARP_DECLINE_PCT:
        return "Declining"
    return "Sharp Decline"


def growth_rates(values) -> list[float]:
    """Growth % for each transition whose previous value is non-zero; zero-previous steps are dropped."""
    rates = []
    for prev, cur in zip(values[:-1], values[1:]):
        change = pct_change(float(cur), float(prev))
        if change is not None:
            rates.append(change)
    return rates


def growth_analysis(ts: TimeSeries, field: Field) -> GrowthResult:
    values = ts.values(field)
    if len(values) < MIN_POINTS["growth"]:
        return GrowthResult(ResultStatus.INSUFFICIENT_DATA)

    rates = growth_rates(values)
    if not rates:
        return GrowthResult(ResultStatus.INSUFFICIENT_DATA)

    average = sum(rates) / len(rates)
    return GrowthResult(
        status=ResultStatus.OK,
        rates=[round(r, 2) for r in rates],
        average=round(average, 2),
        minimum=round(min(rates), 2),
        maximum=round(max(rates), 2),
        trend=trend_label(average),
    )
