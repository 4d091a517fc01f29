"""
Base class for forecast models.

Every model maps (history, current value, horizon) to `horizon` ForecastPoints,
1-indexed, with confidence that never increases along the horizon and
predicted scores clamped to [0, 100].
"""

from __future__ import annotations

from typing import List, Sequence

from core.config import ConfidenceSchedule
from core.schema import ForecastPoint, HistoricalSeries
from core.utils import clamp_score


class ForecastModel:
    """Interface for risk-score forecasters (heuristic or statistical)."""

    name: str = "base"

    def predict(
        self,
        series: HistoricalSeries,
        current_value: float,
        horizon: int,
    ) -> List[ForecastPoint]:
        raise NotImplementedError


def check_horizon(horizon: int) -> int:
    if isinstance(horizon, bool) or int(horizon) != horizon or horizon <= 0:
        raise ValueError(f"Forecast horizon must be a positive integer, got {horizon!r}.")
    return int(horizon)


def build_points(values: Sequence[float], schedule: ConfidenceSchedule) -> List[ForecastPoint]:
    """Clamp values and attach the schedule's confidence for each period."""
    return [
        ForecastPoint(
            period_index=i,
            predicted_score=clamp_score(v),
            confidence=schedule.at(i),
        )
        for i, v in enumerate(values, start=1)
    ]


def flat_points(value: float, horizon: int, schedule: ConfidenceSchedule) -> List[ForecastPoint]:
    return build_points([value] * horizon, schedule)
