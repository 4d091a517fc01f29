"""
Tunable constants for the scenario, factor and forecasting layers.

Defaults reproduce the production calibration. Components take a config at
construction and fall back to these defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class ScenarioConfig:
    # risk reduction per deductible dollar ($1000 ≈ 10%)
    deductible_sensitivity: float = 0.0001
    # no-op detection tolerance on profile fields
    tolerance: float = 1e-9

    # clamp applied once, after every multiplication
    score_bounds: Tuple[float, float] = (0.0, 100.0)
    probability_bounds: Tuple[float, float] = (0.0, 1.0)


@dataclass(frozen=True)
class FactorConfig:
    weather_threshold: float = 0.2
    weather_scale: float = 10.0
    hazard_region_bonus: float = 3.0

    economic_threshold: float = 0.06
    economic_scale: float = 50.0

    traffic_scale: float = 20.0
    market_scale: float = 15.0

    # damps single-call volatility of the combined delta
    smoothing: float = 0.7

    confidence_range: Tuple[float, float] = (0.85, 0.95)
    seed: Optional[int] = None

    model_version: str = "v2.1.3"


@dataclass(frozen=True)
class ConfidenceSchedule:
    """Linear confidence decay: max(floor, start - decay * (period - 1))."""

    start: float
    decay: float
    floor: float

    def at(self, period_index: int) -> float:
        return max(self.floor, self.start - self.decay * (period_index - 1))


@dataclass(frozen=True)
class ForecastConfig:
    # spacing of forecast periods after the last observation
    step_days: int = 30

    smoothing_alpha: float = 0.3
    min_points_linear: int = 2
    min_points_autoregressive: int = 3

    linear_confidence: ConfidenceSchedule = ConfidenceSchedule(0.9, 0.1, 0.3)
    flat_confidence: ConfidenceSchedule = ConfidenceSchedule(0.8, 0.05, 0.3)
    smoothing_confidence: ConfidenceSchedule = ConfidenceSchedule(0.85, 0.08, 0.4)
    autoregressive_confidence: ConfidenceSchedule = ConfidenceSchedule(0.9, 0.05, 0.5)

    ensemble_weights: Dict[str, float] = field(
        default_factory=lambda: {
            "linear_regression": 0.3,
            "exponential_smoothing": 0.3,
            "arima": 0.4,
        }
    )

    # +/- fraction of the first blended value that counts as a trend
    trend_threshold: float = 0.05
