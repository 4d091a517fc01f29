"""
DampedAutoregressiveModel — the "ARIMA-like" heuristic.

Takes the mean of successive first differences of the history and
extrapolates it linearly from the current value:

    predicted[i] = current_value + mean_step * i

Needs at least three points; shorter histories fall back to exponential
smoothing (confidence schedule included).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

import numpy as np

from core.config import ForecastConfig
from core.schema import ForecastPoint, HistoricalSeries

from .base import ForecastModel, build_points, check_horizon
from .smoothing import ExponentialSmoothingModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DampedAutoregressiveModel(ForecastModel):
    config: ForecastConfig = field(default_factory=ForecastConfig)

    name = "arima"

    def mean_step(self, series: HistoricalSeries) -> float:
        return float(np.mean(np.diff(series.scores)))

    def predict(
        self,
        series: HistoricalSeries,
        current_value: float,
        horizon: int,
    ) -> List[ForecastPoint]:
        horizon = check_horizon(horizon)
        cfg = self.config

        if len(series) < cfg.min_points_autoregressive:
            logger.debug(
                "Autoregressive: %d point(s) < %d, falling back to exponential smoothing",
                len(series), cfg.min_points_autoregressive,
            )
            return ExponentialSmoothingModel(cfg).predict(series, current_value, horizon)

        step = self.mean_step(series)
        values = [float(current_value) + step * i for i in range(1, horizon + 1)]
        return build_points(values, cfg.autoregressive_confidence)
