"""
Core package — record types, configuration, errors and shared numeric helpers.
No business logic lives here.
"""

from .schema import (
    ForecastPoint,
    HistoricalPoint,
    HistoricalSeries,
    JurisdictionRiskTable,
    RiskProfile,
)
from .config import ConfidenceSchedule, FactorConfig, ForecastConfig, ScenarioConfig
from .errors import InvalidScenario, MissingProfile, RiskTwinError, UnknownModel
from .utils import clamp, clamp_score, ols_fit, population_std, weighted_blend

__all__ = [
    "ForecastPoint",
    "HistoricalPoint",
    "HistoricalSeries",
    "JurisdictionRiskTable",
    "RiskProfile",
    "ConfidenceSchedule",
    "FactorConfig",
    "ForecastConfig",
    "ScenarioConfig",
    "InvalidScenario",
    "MissingProfile",
    "RiskTwinError",
    "UnknownModel",
    "clamp",
    "clamp_score",
    "ols_fit",
    "population_std",
    "weighted_blend",
]
