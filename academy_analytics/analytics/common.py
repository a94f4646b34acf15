"""
Safe math helpers used across all analytics modules.
"""
from __future__ import annotations

import math

import numpy as np
import pandas as pd


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide safely, returning default if denominator is zero or NaN."""
    if denominator == 0 or pd.isna(denominator):
        return default
    result = numerator / denominator
    return default if pd.isna(result) else result


def pct_change(current: float, previous: float) -> float | None:
    """Percentage change from previous to current. Returns None if previous is 0."""
    if previous == 0 or pd.isna(previous):
        return None
    return (current - previous) / previous * 100


def non_negative_int(value: float) -> int:
    """Round to the nearest integer and clamp at zero (counts and amounts can't go negative)."""
    if value is None or not math.isfinite(value):
        return 0
    return max(int(round(value)), 0)


def population_stats(values: np.ndarray) -> tuple[float, float]:
    """(mean, population standard deviation); (0, 0) for an empty array."""
    if len(values) == 0:
        return 0.0, 0.0
    return float(np.mean(values)), float(np.std(values))


def is_constant(values) -> bool:
    """True when every value is identical, compared by range rather than by deviation from the mean."""
    arr = np.asarray(values, dtype=float)
    return len(arr) == 0 or float(np.ptp(arr)) == 0.0


def sanitize_for_json(obj):
    """Recursively convert numpy/pandas types to native Python for JSON serialization."""
    if isinstance(obj, dict):
        return {str(k): sanitize_for_json(v) for k, v in obj.items() if k is not None}
    if isinstance(obj, (list, tuple)):
        return [sanitize_for_json(v) for v in obj]
    if isinstance(obj, (np.integer,)):
        return int(obj)
    if isinstance(obj, (np.floating,)):
        v = float(obj)
        return 0.0 if (math.isnan(v) or math.isinf(v)) else v
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, np.ndarray):
        return sanitize_for_json(obj.tolist())
    if isinstance(obj, float):
        return 0.0 if (math.isnan(obj) or math.isinf(obj)) else obj
    if pd.api.types.is_scalar(obj) and pd.isna(obj):
        return None
    return obj
