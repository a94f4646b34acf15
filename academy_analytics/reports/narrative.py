"""
Plain-text report rendering for analytics results.
"""
from __future__ import annotations

from academy_analytics.config import MONTHS
from academy_analytics.data.schemas import Field
from academy_analytics.analytics.results import (
    Anomaly, CorrelationResult, GrowthResult, ModelResult, ResultStatus, SeasonalResult,
)

CAPABILITIES = (
    "I can help with:\n"
    "  • Forecasts — \"predict students for the next 6 months\", \"forecast revenue\", "
    "\"predict placements\", \"forecast the python batch\"\n"
    "  • Growth & trends — \"what is the enrollment trend?\"\n"
    "  • Anomalies — \"any unusual months?\"\n"
    "  • Seasonality — \"which is the peak month?\"\n"
    "  • Correlations — \"how are students and revenue related?\"\n"
    "  • Summary — \"give me an overview\""
)

NO_DATA = "No data loaded yet. Upload a monthly records spreadsheet to get started."


def fmt_value(value: float, field: Field) -> str:
    if field.is_currency:
        return f"₹{value:,.0f}"
    return f"{value:,.0f}"


def _future_labels(last_year: str, last_month: str, horizon: int) -> list[str]:
    """Calendar labels for the months after the last observed one."""
    year, idx = int(last_year), MONTHS.index(last_month)
    labels = []
    for _ in range(horizon):
        idx += 1
        if idx == 12:
            idx, year = 0, year + 1
        labels.append(f"{year}-{MONTHS[idx]}")
    return labels


def _status_note(result) -> str:
    if result.status == ResultStatus.DEGENERATE:
        return "not computable (numerically degenerate)"
    return "not enough data"


def render_forecast(
    field: Field,
    ensemble: ModelResult,
    members: list[ModelResult],
    last_period: tuple[str, str],
) -> str:
    horizon = len(ensemble.values)
    labels = _future_labels(*last_period, horizon)
    lines = [f"📈 {field.label} forecast — next {horizon} month(s)", ""]
    for label, value in zip(labels, ensemble.values):
        lines.append(f"  {label}: {fmt_value(value, field)}")

    lines.append("")
    lines.append("Models:")
    for m in members:
        if m.ok:
            shown = ", ".join(fmt_value(v, field) for v in m.values)
            lines.append(f"  {m.model:<12} {shown}")
        else:
            lines.append(f"  {m.model:<12} {_status_note(m)}")

    used = ensemble.params.get("models", [])
    if used:
        lines.append(f"Ensemble average of: {', '.join(used)}")
    else:
        lines.append("No model had enough data; forecast defaults to 0.")
    return "\n".join(lines)


def render_growth(field: Field, result: GrowthResult) -> str:
    if not result.ok:
        return f"📊 {field.label} growth: not enough data (need two months with a non-zero starting value)."
    return "\n".join([
        f"📊 {field.label} growth — {result.trend}",
        "",
        f"  Average month-over-month growth: {result.average:+.2f}%",
        f"  Best month-over-month change:    {result.maximum:+.2f}%",
        f"  Worst month-over-month change:   {result.minimum:+.2f}%",
        f"  Transitions measured:            {len(result.rates)}",
    ])


def render_anomalies(field: Field, anomalies: list[Anomaly], z_threshold: float, points: int) -> str:
    if points < 3:
        return f"🔍 {field.label} anomalies: not enough data (need at least 3 months)."
    if not anomalies:
        return f"🔍 No unusual months in {field.label} (|z| > {z_threshold:g})."
    lines = [f"🔍 {len(anomalies)} unusual month(s) in {field.label} (|z| > {z_threshold:g}):", ""]
    for a in anomalies:
        lines.append(
            f"  {a.year_month}: {fmt_value(a.value, field)}  "
            f"(z = {a.z_score:.2f}, {a.deviation_pct:+.1f}% vs mean)"
        )
    return "\n".join(lines)


def render_seasonal(field: Field, result: SeasonalResult) -> str:
    if not result.ok:
        return f"📅 {field.label} seasonality: not enough data (need at least 12 months)."
    lines = [f"📅 {field.label} by month (average across years)", ""]
    for m in MONTHS:
        marker = "  ← peak" if m == result.peak_month else "  ← low" if m == result.low_month else ""
        lines.append(f"  {m}: {fmt_value(result.month_means[m], field)}{marker}")
    return "\n".join(lines)


def render_correlations(rows: list[dict]) -> str:
    lines = ["🔗 Correlations (Pearson r)", ""]
    for row in rows:
        a, b = Field(row["field_a"]), Field(row["field_b"])
        if row["status"] != ResultStatus.OK:
            lines.append(f"  {a.label} ↔ {b.label}: not enough data")
            continue
        lines.append(
            f"  {a.label} ↔ {b.label}: {row['coefficient']:+.2f} "
            f"({row['strength']} {row['direction']})"
        )
    return "\n".join(lines)


def render_correlation(a: Field, b: Field, result: CorrelationResult) -> str:
    return render_correlations([{"field_a": a.value, "field_b": b.value, **result.to_dict()}])


def render_summary(summary: dict) -> str:
    t = summary["totals"]
    lines = [
        f"📋 Summary — {summary['records']} month(s), {summary['date_range']}",
        "",
        f"  Students:        {t['total_students']:,.0f}  (avg {summary['avg_students_per_month']:,.1f}/month)",
        f"  Male / Female:   {t['male']:,.0f} / {t['female']:,.0f}",
        f"  Interested:      {t['interested']:,.0f}",
        f"  Offers:          {t['offered']:,.0f}  ({summary['placement_rate']:.1f}% placement rate)",
        f"  Dropped:         {t['dropped']:,.0f}  ({summary['dropout_rate']:.1f}%)",
        f"  Java / Python:   {t['java_fs']:,.0f} / {t['python_fs']:,.0f}",
        f"  Revenue paid:    ₹{t['total_paid']:,.0f}",
        f"  Revenue pending: ₹{t['total_pending']:,.0f}  ({summary['collection_rate']:.1f}% collected)",
    ]
    if summary["yearly_students"]:
        lines.append("")
        lines.append("  Students by year:")
        for year, total in summary["yearly_students"].items():
            lines.append(f"    {year}: {total:,.0f}")
    return "\n".join(lines)
