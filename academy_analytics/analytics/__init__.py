"""Forecasting and diagnostic analytics over a TimeSeries."""
from .forecast import (
    prepare_series, linear_regression, polynomial_regression, exponential_smoothing,
    moving_average, ensemble_prediction, run_model,
)
from .growth import growth_analysis
from .seasonality import seasonal_pattern
from .correlation import correlation, pearson
from .anomalies import detect_anomalies
from .summary import summarize
from .results import ModelResult, ResultStatus
