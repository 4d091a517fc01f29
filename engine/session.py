"""
Risk twin session — the entry point a request-handling layer talks to.

Holds the profiles loaded for a session together with one DeductibleLedger,
and routes the three boundary operations:

  1. apply_scenario     (profile, change)  -> ScenarioResult, profile replaced
  2. recalculate_risk   (profile, factors) -> RiskRecalculation
  3. forecast           (series, horizon, model) -> Forecast, seeded with the
                        current score (or the factor-adjusted score)

Forecast and recalculation for a customer that was never loaded raise
MissingProfile. There is no locking: one session per worker, or serialize
calls per customer.
"""

from __future__ import annotations

import logging
from typing import Dict, Hashable, Optional, Union

from core.config import FactorConfig, ForecastConfig, ScenarioConfig
from core.errors import MissingProfile
from core.schema import HistoricalSeries, JurisdictionRiskTable, RiskProfile
from core.utils import clamp_score
from factors.adjuster import ExternalFactorAdjuster, ExternalFactors, RiskRecalculation
from forecasting.ensemble import EnsembleForecaster, Forecast
from forecasting.registry import get_model_info, parse_horizon
from scenarios.calculator import ScenarioImpactCalculator, ScenarioResult
from scenarios.changes import ScenarioChange, change_from_payload
from scenarios.ledger import DeductibleLedger

logger = logging.getLogger(__name__)


class RiskTwinSession:
    def __init__(
        self,
        *,
        jurisdiction_table: Optional[JurisdictionRiskTable] = None,
        ledger: Optional[DeductibleLedger] = None,
        scenario_config: Optional[ScenarioConfig] = None,
        factor_config: Optional[FactorConfig] = None,
        forecast_config: Optional[ForecastConfig] = None,
    ):
        self.ledger = ledger if ledger is not None else DeductibleLedger()
        self.calculator = ScenarioImpactCalculator(
            jurisdiction_table, ledger=self.ledger, config=scenario_config
        )
        self.adjuster = ExternalFactorAdjuster(factor_config)
        self.forecaster = EnsembleForecaster(forecast_config)
        self._profiles: Dict[Hashable, RiskProfile] = {}

    # ---------------- Profiles ---------------- #

    def load_profile(self, profile: RiskProfile, *, deductible: Optional[float] = None) -> None:
        """
        Register a customer's current profile.

        deductible, when given, is the onboarding deductible and becomes the
        first ledger entry for the profile's jurisdiction.
        """
        self._profiles[profile.customer_id] = profile
        if deductible is not None:
            self.ledger.record_onboarding(profile.customer_id, profile.jurisdiction, deductible)
        logger.debug("Loaded profile for customer %s (%s)", profile.customer_id, profile.jurisdiction)

    def get_profile(self, customer_id: Hashable) -> RiskProfile:
        try:
            return self._profiles[customer_id]
        except KeyError:
            raise MissingProfile(customer_id) from None

    def has_profile(self, customer_id: Hashable) -> bool:
        return customer_id in self._profiles

    # ---------------- Operations ---------------- #

    def apply_scenario(
        self,
        customer_id: Hashable,
        change: Union[ScenarioChange, dict],
    ) -> ScenarioResult:
        """Apply a change (variant or raw change document) and keep the new profile."""
        profile = self.get_profile(customer_id)
        if isinstance(change, dict):
            change = change_from_payload(change)
        result = self.calculator.apply(profile, change, self.ledger)
        self._profiles[customer_id] = result.profile
        return result

    def recalculate_risk(
        self,
        customer_id: Hashable,
        factors: Union[ExternalFactors, dict],
    ) -> RiskRecalculation:
        """Score the current profile against external factors; the stored profile is unchanged."""
        return self.adjuster.recalculate(self.get_profile(customer_id), factors)

    def forecast(
        self,
        customer_id: Hashable,
        series: HistoricalSeries,
        horizon: Union[str, int] = "12m",
        model: str = "ensemble",
        *,
        factors: Union[ExternalFactors, dict, None] = None,
    ) -> Forecast:
        """
        Forecast a customer's risk score.

        With factors, the forecast starts from base_risk_score + factor delta
        (clamped to [0, 100]) instead of the stored score.
        """
        profile = self.get_profile(customer_id)
        get_model_info(model)
        months = parse_horizon(horizon)

        current = profile.base_risk_score
        if factors is not None:
            current = clamp_score(current + self.adjuster.adjust(profile, factors).delta)

        logger.info(
            "Forecasting customer %s with %s over %d period(s) from score %.1f",
            customer_id, model, months, current,
        )
        return self.forecaster.forecast_with(model, series, current, months)
