"""
EnsembleForecaster — weighted blend of the three forecast models.

For each period the predicted score and the confidence are blended with
fixed weights {linear_regression: 0.3, exponential_smoothing: 0.3, arima: 0.4}.
Because the weights are non-negative and sum to 1, every blended value lies
between the smallest and largest model prediction for that period.

run_forecast() is the single entry point callers use: it selects one model
by name or the ensemble, and wraps the points with trend direction,
volatility and confidence bounds.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import pandas as pd

from core.config import ForecastConfig
from core.errors import UnknownModel
from core.schema import ForecastPoint, HistoricalSeries
from core.utils import clamp_score, population_std, weighted_blend

from .autoregressive import DampedAutoregressiveModel
from .base import ForecastModel, check_horizon
from .linear import LinearTrendModel
from .registry import MODEL_REGISTRY, ConfidenceBound, confidence_bounds
from .smoothing import ExponentialSmoothingModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Forecast:
    """Forecast points plus the summary statistics derived from them."""

    model: str
    points: List[ForecastPoint]
    trend_direction: str
    volatility: float
    bounds: List[ConfidenceBound] = field(default_factory=list)

    @property
    def values(self) -> List[float]:
        return [p.predicted_score for p in self.points]

    @property
    def confidences(self) -> List[float]:
        return [p.confidence for p in self.points]

    def to_dataframe(self) -> pd.DataFrame:
        bounds = {b.period_index: b for b in self.bounds}
        rows = []
        for p in self.points:
            b = bounds.get(p.period_index)
            rows.append({
                "period": p.period_index,
                "label": p.label,
                "predicted_score": p.predicted_score,
                "confidence": p.confidence,
                "lower_bound": b.lower if b else math.nan,
                "upper_bound": b.upper if b else math.nan,
            })
        return pd.DataFrame(rows)


def trend_direction(values: Sequence[float], threshold: float = 0.05) -> str:
    """
    "increasing" / "decreasing" when the last value is more than threshold
    (relative to the first value) above / below the first, else "stable".
    """
    if len(values) < 2:
        return "stable"
    first, last = float(values[0]), float(values[-1])
    if first == 0:
        return "increasing" if last > 0 else "stable"
    change = (last - first) / abs(first)
    if change > threshold:
        return "increasing"
    if change < -threshold:
        return "decreasing"
    return "stable"


class EnsembleForecaster:
    """Runs every registered model over the same inputs and blends them."""

    def __init__(self, config: Optional[ForecastConfig] = None):
        self.config = config or ForecastConfig()
        self._models: Dict[str, ForecastModel] = {
            "linear_regression": LinearTrendModel(self.config),
            "exponential_smoothing": ExponentialSmoothingModel(self.config),
            "arima": DampedAutoregressiveModel(self.config),
        }
        weights = self.config.ensemble_weights
        if set(weights) != set(self._models):
            raise ValueError(
                f"Ensemble weights must cover exactly {sorted(self._models)}, got {sorted(weights)}."
            )
        if any(w < 0 for w in weights.values()) or not math.isclose(sum(weights.values()), 1.0):
            raise ValueError(f"Ensemble weights must be non-negative and sum to 1, got {weights}.")

    @property
    def model_names(self) -> List[str]:
        return list(self._models)

    def model(self, name: str) -> ForecastModel:
        if name not in self._models:
            raise UnknownModel(name, list(self._models) + ["ensemble"])
        return self._models[name]

    def component_forecasts(
        self,
        series: HistoricalSeries,
        current_value: float,
        horizon: int,
    ) -> Dict[str, List[ForecastPoint]]:
        return {
            name: model.predict(series, current_value, horizon)
            for name, model in self._models.items()
        }

    def blend(self, components: Dict[str, List[ForecastPoint]], horizon: int) -> List[ForecastPoint]:
        names = list(components)
        weights = [self.config.ensemble_weights[n] for n in names]
        points = []
        for i in range(horizon):
            value = weighted_blend([components[n][i].predicted_score for n in names], weights)
            confidence = weighted_blend([components[n][i].confidence for n in names], weights)
            points.append(
                ForecastPoint(
                    period_index=i + 1,
                    predicted_score=clamp_score(value),
                    confidence=min(1.0, confidence),
                )
            )
        return points

    def summarize(self, model: str, points: List[ForecastPoint]) -> Forecast:
        values = [p.predicted_score for p in points]
        return Forecast(
            model=model,
            points=points,
            trend_direction=trend_direction(values, self.config.trend_threshold),
            volatility=population_std(values),
            bounds=confidence_bounds(points, model),
        )

    def forecast(
        self,
        series: HistoricalSeries,
        current_value: float,
        horizon: int,
    ) -> Forecast:
        horizon = check_horizon(horizon)
        components = self.component_forecasts(series, current_value, horizon)
        points = self.blend(components, horizon)
        result = self.summarize("ensemble", points)
        logger.debug(
            "Ensemble forecast over %d point(s), horizon %d: trend=%s volatility=%.3f",
            len(series), horizon, result.trend_direction, result.volatility,
        )
        return result

    def forecast_with(
        self,
        model: str,
        series: HistoricalSeries,
        current_value: float,
        horizon: int,
    ) -> Forecast:
        """Forecast with a single named model or, for "ensemble", the blend."""
        if model == "ensemble":
            return self.forecast(series, current_value, horizon)
        points = self.model(model).predict(series, current_value, check_horizon(horizon))
        return self.summarize(model, points)


def run_forecast(
    series: HistoricalSeries,
    current_value: float,
    horizon: int,
    model: str = "ensemble",
    *,
    config: Optional[ForecastConfig] = None,
) -> Forecast:
    """
    Forecast risk scores for `horizon` periods.

    Parameters
    ----------
    series : HistoricalSeries
        Past (timestamp, risk_score) observations; may be empty.
    current_value : float
        Current risk score the forecast starts from.
    horizon : int
        Number of periods to predict.
    model : str
        One of "linear_regression", "exponential_smoothing", "arima", "ensemble".
    """
    if model not in MODEL_REGISTRY:
        raise UnknownModel(model, MODEL_REGISTRY.keys())
    return EnsembleForecaster(config).forecast_with(model, series, current_value, horizon)
