"""
Summary KPIs — totals, per-year rollups, placement/collection rates, year × month matrix.

Per-year sums add every record as stored; if an export repeats a month, that month is
counted twice.
"""
from __future__ import annotations

import pandas as pd

from academy_analytics.config import MONTHS
from academy_analytics.data.schemas import Field, TimeSeries
from academy_analytics.analytics.common import safe_divide


def field_totals(ts: TimeSeries) -> dict[str, float]:
    return {f.value: float(ts.values(f).sum()) for f in Field}


def yearly_totals(ts: TimeSeries, field: Field = Field.TOTAL_STUDENTS) -> dict[str, float]:
    if ts.is_empty:
        return {}
    by_year = ts.to_frame().groupby("year")[field.value].sum()
    return {str(y): float(v) for y, v in by_year.items()}


def year_month_matrix(ts: TimeSeries, field: Field = Field.TOTAL_STUDENTS) -> dict[str, dict[str, float]]:
    """{year: {month: value}} with every canonical month present (0 where unobserved)."""
    if ts.is_empty:
        return {}
    pivot = pd.pivot_table(
        ts.to_frame(), index="year", columns="month", values=field.value,
        aggfunc="sum", fill_value=0,
    ).reindex(columns=MONTHS, fill_value=0)
    return {
        str(year): {m: float(row[m]) for m in MONTHS}
        for year, row in pivot.iterrows()
    }


def summarize(ts: TimeSeries) -> dict:
    totals = field_totals(ts)
    paid, pending = totals["total_paid"], totals["total_pending"]
    return {
        "records": len(ts),
        "source": ts.source,
        "first_period": ts[0].year_month if not ts.is_empty else None,
        "last_period": ts[-1].year_month if not ts.is_empty else None,
        "date_range": ts.date_range(),
        "totals": totals,
        "avg_students_per_month": round(safe_divide(totals["total_students"], len(ts)), 1),
        "placement_rate": round(safe_divide(totals["offered"], totals["total_students"]) * 100, 1),
        "dropout_rate": round(safe_divide(totals["dropped"], totals["total_students"]) * 100, 1),
        "collection_rate": round(safe_divide(paid, paid + pending) * 100, 1),
        "yearly_students": yearly_totals(ts, Field.TOTAL_STUDENTS),
        "yearly_revenue": yearly_totals(ts, Field.TOTAL_PAID),
        "year_month_students": year_month_matrix(ts, Field.TOTAL_STUDENTS),
    }
