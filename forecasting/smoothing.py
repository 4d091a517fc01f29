"""
ExponentialSmoothingModel — single-parameter smoothing, flat forecast.

    smoothed = alpha * point + (1 - alpha) * smoothed

seeded at the current value and applied once per historical point in
chronological order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from core.config import ForecastConfig
from core.schema import ForecastPoint, HistoricalSeries

from .base import ForecastModel, check_horizon, flat_points


@dataclass(frozen=True)
class ExponentialSmoothingModel(ForecastModel):
    config: ForecastConfig = field(default_factory=ForecastConfig)

    name = "exponential_smoothing"

    def smooth(self, series: HistoricalSeries, current_value: float) -> float:
        alpha = self.config.smoothing_alpha
        smoothed = float(current_value)
        for point in series:
            smoothed = alpha * point.risk_score + (1 - alpha) * smoothed
        return smoothed

    def predict(
        self,
        series: HistoricalSeries,
        current_value: float,
        horizon: int,
    ) -> List[ForecastPoint]:
        horizon = check_horizon(horizon)
        level = self.smooth(series, current_value)
        return flat_points(level, horizon, self.config.smoothing_confidence)
