"""
LinearTrendModel — ordinary least squares trend over the history.

Time is measured in days since the first observation; forecast periods are
spaced step_days (30) apart starting after the last observation. With fewer
than two points there is no trend to fit and the forecast is flat at the
current value with a lower, slower-decaying confidence.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from core.config import ForecastConfig
from core.schema import ForecastPoint, HistoricalSeries
from core.utils import ols_fit

from .base import ForecastModel, build_points, check_horizon, flat_points

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LinearTrendModel(ForecastModel):
    config: ForecastConfig = field(default_factory=ForecastConfig)

    name = "linear_regression"

    def predict(
        self,
        series: HistoricalSeries,
        current_value: float,
        horizon: int,
    ) -> List[ForecastPoint]:
        horizon = check_horizon(horizon)
        cfg = self.config

        if len(series) < cfg.min_points_linear:
            logger.debug("Linear trend: %d point(s), using flat forecast", len(series))
            return flat_points(float(current_value), horizon, cfg.flat_confidence)

        days = series.days_elapsed()
        slope, intercept = ols_fit(days, series.scores)
        last = days[-1]
        values = [slope * (last + i * cfg.step_days) + intercept for i in range(1, horizon + 1)]

        logger.debug("Linear trend: slope=%.5f/day intercept=%.3f", slope, intercept)
        return build_points(values, cfg.linear_confidence)
