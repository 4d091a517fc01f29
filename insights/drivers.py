"""
Key risk drivers — the factors behind a customer's current risk, ranked by influence.

  Geographic Location        state hazard profile (multiplier 1.0 - 1.3)
  Historical Risk Patterns   mean change between successive historical scores
  Claims History             1 + 0.1 per claim on record (only when a count is supplied)
  Market Conditions          fixed moderate volatility index
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np

from core.schema import HistoricalSeries, RiskProfile


STANDARD_MITIGATIONS: Tuple[str, ...] = ("Regular monitoring", "Standard protocols")


@dataclass(frozen=True)
class GeographicRisk:
    impact_level: str
    risk_multiplier: float
    description: str
    mitigation_strategies: Tuple[str, ...] = STANDARD_MITIGATIONS


GEOGRAPHIC_RISK: Dict[str, GeographicRisk] = {
    "CA": GeographicRisk("high", 1.3, "High wildfire and earthquake risk"),
    "FL": GeographicRisk("high", 1.25, "Hurricane and flooding risk"),
    "TX": GeographicRisk("medium", 1.1, "Severe weather and tornado risk"),
    "NY": GeographicRisk("medium", 1.05, "Urban density and weather risks"),
}

DEFAULT_GEOGRAPHIC_RISK = GeographicRisk("low", 1.0, "Standard risk profile")

MARKET_VOLATILITY_INDEX = 0.15


@dataclass(frozen=True)
class RiskDriver:
    factor: str
    impact_level: str
    current_influence: float
    description: str
    mitigation_options: Tuple[str, ...]


def geographic_driver(jurisdiction: str) -> RiskDriver:
    geo = GEOGRAPHIC_RISK.get(jurisdiction.upper(), DEFAULT_GEOGRAPHIC_RISK)
    return RiskDriver(
        factor="Geographic Location",
        impact_level=geo.impact_level,
        current_influence=geo.risk_multiplier,
        description=f"Located in {jurisdiction.upper()} - {geo.description}",
        mitigation_options=geo.mitigation_strategies,
    )


def historical_pattern_driver(series: HistoricalSeries) -> Optional[RiskDriver]:
    """None when the history has fewer than two points (no change to measure)."""
    if len(series) < 2:
        return None
    avg_change = float(np.mean(np.diff(series.scores)))
    direction = "increasing" if avg_change > 0 else "decreasing"
    return RiskDriver(
        factor="Historical Risk Patterns",
        impact_level="high" if abs(avg_change) > 10 else "medium",
        current_influence=abs(avg_change),
        description=f"Historical pattern shows {direction} risk trend",
        mitigation_options=("Monitor trend continuation", "Consider preventive measures"),
    )


def claims_history_driver(claim_count: int) -> RiskDriver:
    if claim_count < 0:
        raise ValueError(f"claim_count must be >= 0, got {claim_count}.")
    if claim_count > 2:
        level = "high"
    elif claim_count > 0:
        level = "medium"
    else:
        level = "low"
    options = (
        ("Enhanced monitoring", "Risk mitigation review")
        if claim_count > 0
        else ("Maintain current protocols",)
    )
    return RiskDriver(
        factor="Claims History",
        impact_level=level,
        current_influence=1 + claim_count * 0.1,
        description=f"{claim_count} historical claims on record",
        mitigation_options=options,
    )


def market_conditions_driver() -> RiskDriver:
    return RiskDriver(
        factor="Market Conditions",
        impact_level="medium",
        current_influence=MARKET_VOLATILITY_INDEX,
        description="Current market conditions show moderate volatility",
        mitigation_options=("Diversification", "Regular portfolio review"),
    )


def identify_risk_drivers(
    profile: RiskProfile,
    series: HistoricalSeries,
    *,
    claim_count: Optional[int] = None,
) -> List[RiskDriver]:
    """
    Collect the applicable drivers for a profile, strongest influence first.

    Parameters
    ----------
    profile : RiskProfile
        Supplies the jurisdiction for the geographic driver.
    series : HistoricalSeries
        Score history for the pattern driver.
    claim_count : int, optional
        Claims on record; the claims driver is omitted when not supplied.
    """
    drivers = [geographic_driver(profile.jurisdiction)]
    pattern = historical_pattern_driver(series)
    if pattern is not None:
        drivers.append(pattern)
    if claim_count is not None:
        drivers.append(claims_history_driver(claim_count))
    drivers.append(market_conditions_driver())
    return sorted(drivers, key=lambda d: d.current_influence, reverse=True)
