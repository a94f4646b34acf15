"""
Correlation analytics — Pearson coefficient between two fields.
"""
from __future__ import annotations

import numpy as np

from academy_analytics.config import CORRELATION_STRENGTH, MIN_POINTS
from academy_analytics.data.schemas import Field, TimeSeries
from academy_analytics.analytics.common import is_constant
from academy_analytics.analytics.results import CorrelationResult, ResultStatus


def pearson(xs, ys) -> CorrelationResult:
    """Pearson r for equal-length samples. Zero variance in either sample gives 0, not NaN."""
    x = np.asarray(xs, dtype=float)
    y = np.asarray(ys, dtype=float)
    if len(x) != len(y) or len(x) < MIN_POINTS["correlation"]:
        return CorrelationResult(ResultStatus.INSUFFICIENT_DATA)

    dx = x - x.mean()
    dy = y - y.mean()
    denom = float(np.sqrt((dx ** 2).sum() * (dy ** 2).sum()))
    r = 0.0 if is_constant(x) or is_constant(y) or denom == 0 else float((dx * dy).sum()) / denom
    r = max(-1.0, min(1.0, r))

    strength = "weak"
    for threshold, label in CORRELATION_STRENGTH:
        if abs(r) >= threshold:
            strength = label
            break
    direction = "positive" if r > 0 else "negative" if r < 0 else "none"
    return CorrelationResult(ResultStatus.OK, round(r, 4), strength, direction)


def correlation(ts: TimeSeries, field_a: Field, field_b: Field) -> CorrelationResult:
    return pearson(ts.values(field_a), ts.values(field_b))


# Pairs reported when no specific pair is requested
DEFAULT_PAIRS = [
    (Field.TOTAL_STUDENTS, Field.TOTAL_PAID),
    (Field.INTERESTED, Field.OFFERED),
    (Field.TOTAL_STUDENTS, Field.OFFERED),
    (Field.TOTAL_STUDENTS, Field.DROPPED),
    (Field.JAVA_FS, Field.PYTHON_FS),
]


def correlation_matrix(ts: TimeSeries, pairs=DEFAULT_PAIRS) -> list[dict]:
    results = []
    for a, b in pairs:
        res = correlation(ts, a, b)
        results.append({"field_a": a.value, "field_b": b.value, **res.to_dict()})
    return results
