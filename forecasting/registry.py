"""
Forecast model metadata, horizon labels and derived reliability metrics.

The accuracy figures are the calibration quoted alongside each model; the
confidence threshold sets the width of the confidence bounds:

    lower = value * (1 - (1 - threshold) * 0.5)
    upper = value * (1 + (1 - threshold) * 0.5)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Union

from core.errors import UnknownModel
from core.schema import ForecastPoint
from core.utils import clamp_score


@dataclass(frozen=True)
class ModelInfo:
    key: str
    name: str
    description: str
    accuracy: float
    confidence_threshold: float


MODEL_REGISTRY: Dict[str, ModelInfo] = {
    "linear_regression": ModelInfo(
        key="linear_regression",
        name="Linear Regression",
        description="Simple trend-based prediction",
        accuracy=0.75,
        confidence_threshold=0.6,
    ),
    "exponential_smoothing": ModelInfo(
        key="exponential_smoothing",
        name="Exponential Smoothing",
        description="Weighted historical data analysis",
        accuracy=0.82,
        confidence_threshold=0.7,
    ),
    "arima": ModelInfo(
        key="arima",
        name="ARIMA Model",
        description="Autoregressive integrated moving average",
        accuracy=0.88,
        confidence_threshold=0.8,
    ),
    "ensemble": ModelInfo(
        key="ensemble",
        name="Ensemble Prediction",
        description="Combined multiple model approach",
        accuracy=0.91,
        confidence_threshold=0.85,
    ),
}

HORIZON_LABELS: Dict[str, int] = {"3m": 3, "6m": 6, "12m": 12, "24m": 24}


def get_model_info(model: str) -> ModelInfo:
    if model not in MODEL_REGISTRY:
        raise UnknownModel(model, MODEL_REGISTRY.keys())
    return MODEL_REGISTRY[model]


def parse_horizon(horizon: Union[str, int]) -> int:
    """
    Turn a horizon label ("3m", "6m", "12m", "24m") or a positive int into months.
    """
    if isinstance(horizon, str):
        label = horizon.strip().lower()
        if label in HORIZON_LABELS:
            return HORIZON_LABELS[label]
        if label.isdigit():
            horizon = int(label)
        else:
            raise ValueError(
                f"Unknown horizon '{horizon}'. Available: {list(HORIZON_LABELS.keys())} or a month count"
            )
    if isinstance(horizon, bool) or int(horizon) != horizon or horizon <= 0:
        raise ValueError(f"Forecast horizon must be a positive integer, got {horizon!r}.")
    return int(horizon)


@dataclass(frozen=True)
class ConfidenceBound:
    period_index: int
    lower: float
    upper: float


def confidence_bounds(points: Sequence[ForecastPoint], model: str) -> List[ConfidenceBound]:
    half_width = (1 - get_model_info(model).confidence_threshold) * 0.5
    return [
        ConfidenceBound(
            period_index=p.period_index,
            lower=clamp_score(p.predicted_score * (1 - half_width)),
            upper=clamp_score(p.predicted_score * (1 + half_width)),
        )
        for p in points
    ]


@dataclass(frozen=True)
class ModelMetrics:
    model_name: str
    base_accuracy: float
    adjusted_accuracy: float
    confidence_threshold: float
    data_sufficiency: str
    recommendation: str


def model_metrics(model: str, n_points: int) -> ModelMetrics:
    """Reliability summary: more history nudges accuracy up by 1% per point, at most 10%."""
    info = get_model_info(model)
    data_adjustment = min(0.1, n_points * 0.01)
    return ModelMetrics(
        model_name=info.name,
        base_accuracy=info.accuracy,
        adjusted_accuracy=min(0.95, info.accuracy + data_adjustment),
        confidence_threshold=info.confidence_threshold,
        data_sufficiency="Sufficient" if n_points >= 5 else "Limited",
        recommendation="High confidence predictions" if n_points >= 10 else "Use with caution",
    )
