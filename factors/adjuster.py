"""
External factor adjuster — combines exogenous signals into one bounded risk delta.

Each factor category contributes independently:

  weather    weather * 10 once above 0.2, +3 when the region carries a hazard flag
  economic   (economic - 0.06) * 50 once above 0.06
  traffic    traffic * 20
  market     market * 15
  temporal   caller-supplied loading (time of day, weekend, night), summed as-is

delta = 0.7 * sum(contributions). The 0.7 smoothing factor damps single-call
volatility. Factor values are produced elsewhere; this module only combines
them.

Confidence is sampled uniformly from [0.85, 0.95] with a numpy Generator so
the draw is reproducible when a seed is configured.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

import numpy as np
import pandas as pd
from pydantic import BaseModel, ConfigDict, Field

from core.config import FactorConfig
from core.errors import MissingProfile
from core.schema import RiskProfile
from core.utils import clamp_score

logger = logging.getLogger(__name__)

FACTOR_CATEGORIES = ("weather", "economic", "traffic", "market", "temporal")


class ExternalFactors(BaseModel):
    """Exogenous signal bundle for one recalculation."""

    model_config = ConfigDict(frozen=True)

    weather: float = Field(default=0.0, ge=0, le=1, description="Severe weather probability")
    economic: float = Field(default=0.0, ge=0, description="Economic stress index, e.g. unemployment rate")
    traffic: float = Field(default=0.0, ge=0, description="Accident rate increase")
    market: float = Field(default=0.0, ge=-1, le=1, description="Claims frequency trend")
    weather_flag_region: bool = Field(default=False, description="Jurisdiction-specific hazard flag")
    temporal: float = Field(default=0.0, description="Time-of-day / weekend / night loading")


@dataclass(frozen=True)
class FactorAdjustment:
    delta: float
    breakdown: Dict[str, float]
    confidence: float

    @property
    def raw_total(self) -> float:
        return float(sum(self.breakdown.values()))


@dataclass(frozen=True)
class RiskRecalculation:
    """Result of applying a factor delta to a profile's base score."""

    customer_id: object
    original_score: float
    new_score: float
    delta: float
    breakdown: Dict[str, float] = field(default_factory=dict)
    confidence: float = 0.0
    model_version: str = ""

    @property
    def score_change(self) -> float:
        """Change actually applied after clamping to [0, 100]."""
        return self.new_score - self.original_score

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(
            [{"category": k, "contribution": v} for k, v in self.breakdown.items()],
            columns=["category", "contribution"],
        )


class ExternalFactorAdjuster:
    """
    Pure numeric combiner of external factors.

    Parameters
    ----------
    config : FactorConfig, optional
        Thresholds, scales, smoothing and confidence range.
    rng : np.random.Generator, optional
        Source of the confidence draw. Defaults to default_rng(config.seed).
    """

    def __init__(
        self,
        config: Optional[FactorConfig] = None,
        *,
        rng: Optional[np.random.Generator] = None,
    ):
        self.config = config or FactorConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)

    def contributions(self, factors: ExternalFactors) -> Dict[str, float]:
        cfg = self.config

        weather = 0.0
        if factors.weather > cfg.weather_threshold:
            weather += factors.weather * cfg.weather_scale
        if factors.weather_flag_region:
            weather += cfg.hazard_region_bonus

        economic = 0.0
        if factors.economic > cfg.economic_threshold:
            economic = (factors.economic - cfg.economic_threshold) * cfg.economic_scale

        return {
            "weather": float(weather),
            "economic": float(economic),
            "traffic": float(factors.traffic * cfg.traffic_scale),
            "market": float(factors.market * cfg.market_scale),
            "temporal": float(factors.temporal),
        }

    def sample_confidence(self) -> float:
        lo, hi = self.config.confidence_range
        return float(self.rng.uniform(lo, hi))

    def adjust(self, profile: RiskProfile, factors) -> FactorAdjustment:
        """
        Combine factors into a smoothed delta for profile.

        factors may be an ExternalFactors or a plain dict of its fields;
        out-of-range values raise pydantic.ValidationError.
        """
        if not isinstance(profile, RiskProfile):
            raise MissingProfile(getattr(profile, "customer_id", profile))
        if not isinstance(factors, ExternalFactors):
            factors = ExternalFactors.model_validate(factors)

        breakdown = self.contributions(factors)
        raw = sum(breakdown.values())
        delta = raw * self.config.smoothing
        confidence = self.sample_confidence()

        logger.debug(
            "Factor delta for customer %s: raw=%.3f smoothed=%.3f breakdown=%s",
            profile.customer_id, raw, delta, breakdown,
        )
        return FactorAdjustment(delta=float(delta), breakdown=breakdown, confidence=confidence)

    def recalculate(self, profile: RiskProfile, factors) -> RiskRecalculation:
        """Apply the factor delta to base_risk_score and re-clamp to [0, 100]."""
        adjustment = self.adjust(profile, factors)
        original = float(profile.base_risk_score)
        new_score = clamp_score(original + adjustment.delta)

        logger.info(
            "Risk recalculated for customer %s: %.1f -> %.1f (delta %+.2f, confidence %.1f%%)",
            profile.customer_id, original, new_score, adjustment.delta, adjustment.confidence * 100,
        )
        return RiskRecalculation(
            customer_id=profile.customer_id,
            original_score=original,
            new_score=new_score,
            delta=adjustment.delta,
            breakdown=dict(adjustment.breakdown),
            confidence=adjustment.confidence,
            model_version=self.config.model_version,
        )
