"""
Forecast engine — regression, smoothing, moving average, and the ensemble combiner.

Every method works on one field of the TimeSeries in its stored chronological order,
using the record position (0..n-1) as x. Short or degenerate inputs return a status,
never raise, so the ensemble can combine whatever is available.
"""
from __future__ import annotations

from typing import Optional

import numpy as np
import pandas as pd

from academy_analytics.config import (
    DEFAULT_ALPHA, DEFAULT_HORIZON, DEFAULT_WINDOW, MIN_POINTS, SINGULAR_EPSILON,
)
from academy_analytics.data.schemas import Field, TimeSeries
from academy_analytics.analytics.common import non_negative_int, safe_divide
from academy_analytics.analytics.results import ModelResult, ResultStatus


def prepare_series(ts: TimeSeries, field: Field) -> np.ndarray:
    """Field values across the full series, chronological."""
    return ts.values(field)


def _check_horizon(horizon: int) -> None:
    if horizon < 1:
        raise ValueError(f"horizon must be >= 1 (got {horizon})")


# ---------------------------------------------------------------------------
# Linear regression
# ---------------------------------------------------------------------------

def linear_regression(ts: TimeSeries, field: Field, horizon: int = DEFAULT_HORIZON) -> ModelResult:
    """Ordinary least squares of value vs index, projected to indices n..n+horizon-1."""
    _check_horizon(horizon)
    y = prepare_series(ts, field)
    n = len(y)
    if n < MIN_POINTS["linear"]:
        return ModelResult.insufficient("linear", MIN_POINTS["linear"], n)

    x = np.arange(n, dtype=float)
    sum_x, sum_y = x.sum(), y.sum()
    sum_xy, sum_x2 = (x * y).sum(), (x * x).sum()

    slope = (n * sum_xy - sum_x * sum_y) / (n * sum_x2 - sum_x ** 2)
    intercept = (sum_y - slope * sum_x) / n

    fitted = intercept + slope * x
    ss_res = float(((y - fitted) ** 2).sum())
    ss_tot = float(((y - y.mean()) ** 2).sum())
    r_squared = 1.0 - safe_divide(ss_res, ss_tot)

    values = [non_negative_int(intercept + slope * (n + k)) for k in range(horizon)]
    return ModelResult(
        "linear", ResultStatus.OK, values,
        {"slope": float(slope), "intercept": float(intercept), "r_squared": round(r_squared, 4)},
    )


# ---------------------------------------------------------------------------
# Polynomial (quadratic) regression
# ---------------------------------------------------------------------------

def _det3(m: np.ndarray) -> float:
    return float(
        m[0, 0] * (m[1, 1] * m[2, 2] - m[1, 2] * m[2, 1])
        - m[0, 1] * (m[1, 0] * m[2, 2] - m[1, 2] * m[2, 0])
        + m[0, 2] * (m[1, 0] * m[2, 1] - m[1, 1] * m[2, 0])
    )


def fit_quadratic(x: np.ndarray, y: np.ndarray) -> Optional[tuple[float, float, float]]:
    """Solve the degree-2 normal equations by Cramer's rule.

    Returns (a, b, c) for y = a + b*x + c*x^2, or None when the system is near-singular
    (too few distinct x values).
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    n = len(x)
    s1, s2, s3, s4 = x.sum(), (x ** 2).sum(), (x ** 3).sum(), (x ** 4).sum()
    matrix = np.array([
        [n, s1, s2],
        [s1, s2, s3],
        [s2, s3, s4],
    ])
    rhs = np.array([y.sum(), (x * y).sum(), (x ** 2 * y).sum()])

    det = _det3(matrix)
    if abs(det) < SINGULAR_EPSILON:
        return None

    coeffs = []
    for col in range(3):
        replaced = matrix.copy()
        replaced[:, col] = rhs
        coeffs.append(_det3(replaced) / det)
    if not all(np.isfinite(coeffs)):
        return None
    a, b, c = coeffs
    return a, b, c


def polynomial_regression(ts: TimeSeries, field: Field, horizon: int = DEFAULT_HORIZON) -> ModelResult:
    _check_horizon(horizon)
    y = prepare_series(ts, field)
    n = len(y)
    if n < MIN_POINTS["polynomial"]:
        return ModelResult.insufficient("polynomial", MIN_POINTS["polynomial"], n)

    coeffs = fit_quadratic(np.arange(n, dtype=float), y)
    if coeffs is None:
        return ModelResult("polynomial", ResultStatus.DEGENERATE, params={"points": n})

    a, b, c = coeffs
    values = [non_negative_int(a + b * (n + k) + c * (n + k) ** 2) for k in range(horizon)]
    return ModelResult("polynomial", ResultStatus.OK, values, {"a": a, "b": b, "c": c})


# ---------------------------------------------------------------------------
# Exponential smoothing & moving average
# ---------------------------------------------------------------------------

def exponential_smoothing(
    ts: TimeSeries,
    field: Field,
    alpha: float = DEFAULT_ALPHA,
    horizon: int = DEFAULT_HORIZON,
) -> ModelResult:
    """Simple exponential smoothing; every future step repeats the last smoothed level."""
    _check_horizon(horizon)
    if not 0 < alpha <= 1:
        raise ValueError(f"alpha must be in (0, 1] (got {alpha})")
    y = prepare_series(ts, field)
    n = len(y)
    if n < MIN_POINTS["exponential"]:
        return ModelResult.insufficient("exponential", MIN_POINTS["exponential"], n)

    smoothed = [float(y[0])]
    for v in y[1:]:
        smoothed.append(alpha * float(v) + (1 - alpha) * smoothed[-1])

    level = non_negative_int(smoothed[-1])
    return ModelResult(
        "exponential", ResultStatus.OK, [level] * horizon,
        {"alpha": alpha, "level": smoothed[-1], "smoothed": smoothed},
    )


def moving_average(ts: TimeSeries, field: Field, window: int = DEFAULT_WINDOW) -> ModelResult:
    """Trailing mean, one value per index window-1..n-1."""
    if window < 1:
        raise ValueError(f"window must be >= 1 (got {window})")
    y = prepare_series(ts, field)
    n = len(y)
    if n < window:
        return ModelResult.insufficient("moving_average", window, n)

    means = pd.Series(y).rolling(window).mean().iloc[window - 1:]
    return ModelResult(
        "moving_average", ResultStatus.OK, [float(v) for v in means],
        {"window": window, "keys": ts.keys()[window - 1:]},
    )


# ---------------------------------------------------------------------------
# Ensemble
# ---------------------------------------------------------------------------

def ensemble_prediction(ts: TimeSeries, field: Field, horizon: int = DEFAULT_HORIZON) -> ModelResult:
    """Per step, the mean of whichever of linear/polynomial/exponential produced a value.

    A step no model could predict is 0.
    """
    _check_horizon(horizon)
    members = [
        linear_regression(ts, field, horizon),
        polynomial_regression(ts, field, horizon),
        exponential_smoothing(ts, field, horizon=horizon),
    ]

    values = []
    for step in range(horizon):
        available = [v for v in (m.value_at(step) for m in members) if v is not None]
        values.append(non_negative_int(float(np.mean(available))) if available else 0)

    return ModelResult(
        "ensemble", ResultStatus.OK, values,
        {
            "models": [m.model for m in members if m.ok],
            "members": {m.model: m.values for m in members},
        },
    )


MODELS = {
    "linear": linear_regression,
    "polynomial": polynomial_regression,
    "exponential": lambda ts, field, horizon=DEFAULT_HORIZON: exponential_smoothing(ts, field, horizon=horizon),
    "ensemble": ensemble_prediction,
}


def run_model(name: str, ts: TimeSeries, field: Field, horizon: int = DEFAULT_HORIZON) -> ModelResult:
    """Dispatch a forecast by model name."""
    try:
        fn = MODELS[name]
    except KeyError:
        raise ValueError(f"Unknown model: {name}. Valid: {list(MODELS)}") from None
    return fn(ts, field, horizon)
