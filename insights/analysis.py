"""
Predictive analysis report — what an operator reads after requesting a forecast.

Built on top of one Forecast:
  - claim probability path derived from the predicted scores
  - peak-risk period
  - financial projection against the profile's current expected loss
  - best / most likely / worst scenario bands around the forecast
  - key risk drivers, strongest first
  - model reliability metrics and the next review date
  - flags for conditions that deserve attention

Expected loss for a predicted score is score * 100.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

import pandas as pd
from dateutil.relativedelta import relativedelta

from core.config import ForecastConfig
from core.schema import HistoricalSeries, RiskProfile
from core.utils import clamp, clamp_score
from forecasting.ensemble import Forecast, run_forecast
from forecasting.registry import ModelMetrics, get_model_info, model_metrics, parse_horizon

from .drivers import RiskDriver, identify_risk_drivers

LOSS_PER_SCORE_POINT = 100.0


@dataclass(frozen=True)
class ScenarioBand:
    name: str
    description: str
    probability: float
    risk_adjustment: float
    mitigation_actions: Tuple[str, ...] = ("Standard monitoring",)


SCENARIO_BANDS = (
    ScenarioBand(
        "Best Case Scenario", "Optimal conditions with proactive risk management", 0.15, -0.20,
        ("Maintain current strategies", "Continue monitoring"),
    ),
    ScenarioBand(
        "Most Likely Scenario", "Current trends continue with normal market conditions", 0.70, 0.00,
        ("Regular review", "Standard protocols"),
    ),
    ScenarioBand(
        "Worst Case Scenario", "Multiple adverse events occur simultaneously", 0.15, 0.35,
        ("Emergency protocols", "Immediate intervention", "Risk transfer options"),
    ),
)


def risk_to_claim_probability(risk_score: float) -> float:
    """Map a risk score to a 12-month claim probability in [0.01, 0.95]."""
    return clamp(risk_score / 100 * 0.8, 0.01, 0.95)


def risk_to_expected_loss(risk_score: float) -> float:
    return risk_score * LOSS_PER_SCORE_POINT


def calculate_roi(savings: float, costs: float) -> float:
    """Percentage return of savings over costs; inf when there are savings and no costs."""
    if costs == 0:
        return math.inf if savings > 0 else 0.0
    return (savings - costs) / costs * 100


@dataclass(frozen=True)
class ClaimForecastPoint:
    period_index: int
    claim_probability: float
    confidence: float


@dataclass(frozen=True)
class FinancialProjectionPoint:
    period_index: int
    predicted_expected_loss: float
    potential_savings: float
    potential_additional_cost: float
    confidence: float
    risk_adjusted_value: float


@dataclass(frozen=True)
class FinancialImpact:
    """Per-period expected loss against the current one, with totals."""

    current_expected_loss: float
    points: List[FinancialProjectionPoint]

    @property
    def total_potential_savings(self) -> float:
        return float(sum(p.potential_savings for p in self.points))

    @property
    def total_potential_additional_costs(self) -> float:
        return float(sum(p.potential_additional_cost for p in self.points))

    @property
    def net_financial_impact(self) -> float:
        return self.total_potential_savings - self.total_potential_additional_costs

    @property
    def roi_on_risk_management(self) -> float:
        return calculate_roi(self.total_potential_savings, self.total_potential_additional_costs)


def project_financial_impact(current_expected_loss: float, forecast: Forecast) -> FinancialImpact:
    points = []
    for p in forecast.points:
        loss = risk_to_expected_loss(p.predicted_score)
        points.append(
            FinancialProjectionPoint(
                period_index=p.period_index,
                predicted_expected_loss=loss,
                potential_savings=max(0.0, current_expected_loss - loss),
                potential_additional_cost=max(0.0, loss - current_expected_loss),
                confidence=p.confidence,
                risk_adjusted_value=loss * risk_to_claim_probability(p.predicted_score),
            )
        )
    return FinancialImpact(current_expected_loss=float(current_expected_loss), points=points)


@dataclass(frozen=True)
class ScenarioProjection:
    band: ScenarioBand
    predicted_scores: List[float]
    confidences: List[float]

    @property
    def expected_financial_impact(self) -> float:
        """Expected loss summed over the projected periods."""
        return float(sum(risk_to_expected_loss(s) for s in self.predicted_scores))

    @property
    def mitigation_actions(self) -> Tuple[str, ...]:
        return self.band.mitigation_actions


def project_scenario(band: ScenarioBand, forecast: Forecast) -> ScenarioProjection:
    return ScenarioProjection(
        band=band,
        predicted_scores=[clamp_score(v * (1 + band.risk_adjustment)) for v in forecast.values],
        confidences=[c * band.probability for c in forecast.confidences],
    )


@dataclass
class PredictiveAnalysis:
    """Structured predictive analysis for one customer."""

    customer_id: object
    current_risk_score: float
    current_claim_probability: float
    horizon: int
    forecast: Forecast
    claim_forecast: List[ClaimForecastPoint]
    peak_risk_period: int
    financial_impact: FinancialImpact
    scenarios: List[ScenarioProjection]
    risk_drivers: List[RiskDriver]
    metrics: ModelMetrics
    next_review_date: pd.Timestamp
    flags: List[str] = field(default_factory=list)

    def to_dataframe(self) -> pd.DataFrame:
        """Period-by-period table: forecast, bounds, claim probability, losses and scenario bands."""
        table = self.forecast.to_dataframe()
        table["claim_probability"] = [c.claim_probability for c in self.claim_forecast]
        table["expected_loss"] = [p.predicted_expected_loss for p in self.financial_impact.points]
        table["risk_adjusted_value"] = [p.risk_adjusted_value for p in self.financial_impact.points]
        for projection in self.scenarios:
            col = projection.band.name.lower().replace(" scenario", "").replace(" ", "_")
            table[col] = projection.predicted_scores
        return table

    def drivers_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(
            [
                {
                    "factor": d.factor,
                    "impact_level": d.impact_level,
                    "current_influence": d.current_influence,
                    "description": d.description,
                }
                for d in self.risk_drivers
            ],
            columns=["factor", "impact_level", "current_influence", "description"],
        )

    def summary(self) -> str:
        fin = self.financial_impact
        lines = [
            f"Customer {self.customer_id}: {self.metrics.model_name}, {self.horizon} periods",
            f"  current score {self.current_risk_score:.1f}, trend {self.forecast.trend_direction}, "
            f"volatility {self.forecast.volatility:.2f}",
            f"  peak risk in period {self.peak_risk_period}, next review {self.next_review_date.date()}",
            f"  net financial impact {fin.net_financial_impact:,.0f} "
            f"(savings {fin.total_potential_savings:,.0f}, costs {fin.total_potential_additional_costs:,.0f})",
        ]
        if self.risk_drivers:
            top = self.risk_drivers[0]
            lines.append(f"  top driver: {top.factor} ({top.impact_level})")
        for flag in self.flags:
            lines.append(f"  ⚠ {flag}")
        return "\n".join(lines)


def generate_predictive_analysis(
    profile: RiskProfile,
    series: HistoricalSeries,
    horizon: Union[str, int] = "12m",
    model: str = "ensemble",
    *,
    as_of: Optional[pd.Timestamp] = None,
    claim_count: Optional[int] = None,
    config: Optional[ForecastConfig] = None,
) -> PredictiveAnalysis:
    """
    Forecast a profile's risk score and derive the decision-support views.

    Parameters
    ----------
    profile : RiskProfile
        Current risk twin; its base_risk_score seeds the forecast and its
        expected_loss is the baseline for the financial projection.
    series : HistoricalSeries
        Past scores for this customer.
    horizon : str or int
        "3m", "6m", "12m", "24m" or a month count.
    model : str
        Model selector passed to run_forecast().
    as_of : pd.Timestamp, optional
        Reference date for the next review. Defaults to today.
    claim_count : int, optional
        Claims on record; adds the claims-history driver when given.
    """
    get_model_info(model)
    months = parse_horizon(horizon)
    forecast = run_forecast(series, profile.base_risk_score, months, model, config=config)

    claim_forecast = [
        ClaimForecastPoint(
            period_index=p.period_index,
            claim_probability=risk_to_claim_probability(p.predicted_score),
            confidence=p.confidence * 0.9,
        )
        for p in forecast.points
    ]
    peak = max(claim_forecast, key=lambda c: c.claim_probability).period_index

    financial = project_financial_impact(profile.expected_loss, forecast)
    scenarios = [project_scenario(band, forecast) for band in SCENARIO_BANDS]
    drivers = identify_risk_drivers(profile, series, claim_count=claim_count)

    as_of_ts = pd.Timestamp(as_of) if as_of is not None else pd.Timestamp.today().normalize()
    next_review = as_of_ts + relativedelta(months=months // 3)

    metrics = model_metrics(model, len(series))

    flags = []
    if forecast.trend_direction == "increasing":
        flags.append("RISING_RISK: forecast trend is increasing")
    if max(forecast.values) >= 80:
        flags.append("HIGH_RISK: forecast reaches a score of 80 or more")
    if forecast.volatility > 5:
        flags.append(f"VOLATILE: forecast volatility {forecast.volatility:.1f} exceeds 5 points")
    if metrics.data_sufficiency == "Limited":
        flags.append(f"LIMITED_HISTORY: only {len(series)} historical point(s)")

    return PredictiveAnalysis(
        customer_id=profile.customer_id,
        current_risk_score=profile.base_risk_score,
        current_claim_probability=profile.claim_probability,
        horizon=months,
        forecast=forecast,
        claim_forecast=claim_forecast,
        peak_risk_period=peak,
        financial_impact=financial,
        scenarios=scenarios,
        risk_drivers=drivers,
        metrics=metrics,
        next_review_date=pd.Timestamp(next_review),
        flags=flags,
    )
