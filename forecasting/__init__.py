"""
Forecasting models — turn a risk-score history into multi-period predictions.
"""

from .base import ForecastModel
from .linear import LinearTrendModel
from .smoothing import ExponentialSmoothingModel
from .autoregressive import DampedAutoregressiveModel
from .ensemble import EnsembleForecaster, Forecast, run_forecast, trend_direction
from .registry import (
    MODEL_REGISTRY,
    ConfidenceBound,
    ModelInfo,
    ModelMetrics,
    confidence_bounds,
    get_model_info,
    model_metrics,
    parse_horizon,
)

__all__ = [
    "ForecastModel",
    "LinearTrendModel",
    "ExponentialSmoothingModel",
    "DampedAutoregressiveModel",
    "EnsembleForecaster",
    "Forecast",
    "run_forecast",
    "trend_direction",
    "MODEL_REGISTRY",
    "ConfidenceBound",
    "ModelInfo",
    "ModelMetrics",
    "confidence_bounds",
    "get_model_info",
    "model_metrics",
    "parse_horizon",
]
