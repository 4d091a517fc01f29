"""
ScenarioImpactCalculator — deterministic recomputation of a risk profile under a what-if.

Order of operations for one change:

  1. NoChange                → input returned untouched, is_no_op=True
  2. MoveJurisdiction        → scale by multiplier[target] / multiplier[current],
                               then apply the deductible memory rule
  3. AdjustDeductible        → scale by 1 - signed_amount * 0.0001 and record
                               the new deductible for the (possibly new) jurisdiction
  4. Clamp                   → score [0,100], claim probability [0,1], loss >= 0
  5. No-op detection         → nothing moved beyond 1e-9 and nothing written

Deductible memory rule for a move:
  - target already in the ledger and no explicit deductible term
        → the stored deductible is restored (no ledger write)
  - target not in the ledger
        → the last deductible held in the prior jurisdiction is carried over

The change is fully validated, and all ledger writes are staged, before
anything is committed: a rejected scenario never leaves a partial update.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Hashable, Literal, Optional

from core.config import ScenarioConfig
from core.errors import InvalidScenario
from core.schema import JurisdictionRiskTable, RiskProfile

from .changes import NoChange, ScenarioChange, validate_change
from .jurisdictions import get_jurisdiction_table
from .ledger import DeductibleLedger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerUpdate:
    """What happened to the deductible of one customer in one jurisdiction."""

    customer_id: Hashable
    jurisdiction: str
    previous_deductible: Optional[float]
    deductible: float
    outcome: Literal["restored", "carried", "adjusted"]

    @property
    def writes_ledger(self) -> bool:
        return self.outcome != "restored"


@dataclass(frozen=True)
class ScenarioResult:
    """
    Outcome of one apply() call.

    Unpacks as (profile, ledger_update, is_no_op).
    """

    profile: RiskProfile
    ledger_update: Optional[LedgerUpdate]
    is_no_op: bool
    multiplier_ratio: float = 1.0
    impact_factor: float = 1.0

    def __iter__(self):
        return iter((self.profile, self.ledger_update, self.is_no_op))


class ScenarioImpactCalculator:
    """
    Applies one ScenarioChange to a RiskProfile.

    Parameters
    ----------
    jurisdiction_table : JurisdictionRiskTable, optional
        Read-only multipliers. Defaults to the built-in US state table.
    ledger : DeductibleLedger, optional
        Ledger used when apply() is not handed one explicitly.
    config : ScenarioConfig, optional
        Deductible sensitivity and no-op tolerance.
    """

    def __init__(
        self,
        jurisdiction_table: Optional[JurisdictionRiskTable] = None,
        ledger: Optional[DeductibleLedger] = None,
        config: Optional[ScenarioConfig] = None,
    ):
        self.jurisdiction_table = (
            jurisdiction_table if jurisdiction_table is not None else get_jurisdiction_table()
        )
        self.ledger = ledger if ledger is not None else DeductibleLedger()
        self.config = config or ScenarioConfig()

    def deductible_impact_factor(self, signed_amount: float) -> float:
        """1 - signed_amount * sensitivity: a larger deductible strictly reduces risk."""
        return 1.0 - signed_amount * self.config.deductible_sensitivity

    def _multiplier_ratio(self, source: str, target: str) -> float:
        table = self.jurisdiction_table
        for code in (source, target):
            if code.upper() not in table:
                logger.warning("Jurisdiction %s has no risk multiplier; using %.2f", code, table.default)
        return table.ratio(source, target)

    def apply(
        self,
        profile: RiskProfile,
        change: ScenarioChange,
        ledger: Optional[DeductibleLedger] = None,
    ) -> ScenarioResult:
        change = validate_change(change)
        if not isinstance(profile, RiskProfile):
            raise InvalidScenario(f"Expected a RiskProfile, got {type(profile).__name__}.")
        ledger = ledger if ledger is not None else self.ledger

        if isinstance(change, NoChange):
            logger.debug("No-change scenario for customer %s: %s", profile.customer_id, change.reason)
            return ScenarioResult(profile=profile, ledger_update=None, is_no_op=True)

        customer = profile.customer_id
        move = change.move
        adjustment = change.deductible

        working = profile
        staged: Dict[str, float] = {}
        update: Optional[LedgerUpdate] = None
        ratio = 1.0
        factor = 1.0

        if move is not None:
            prior = profile.jurisdiction
            target = move.target
            ratio = self._multiplier_ratio(prior, target)
            working = working.scaled(ratio).with_values(jurisdiction=target)

            stored = ledger.get(customer, target)
            if stored is not None:
                if adjustment is None:
                    update = LedgerUpdate(customer, target, stored, stored, "restored")
            else:
                carried = ledger.get(customer, prior)
                if carried is not None:
                    staged[target] = carried
                    update = LedgerUpdate(customer, target, None, carried, "carried")

        if adjustment is not None:
            jurisdiction = working.jurisdiction
            previous = ledger.get(customer, jurisdiction)
            current = staged.get(jurisdiction, previous if previous is not None else 0.0)
            if adjustment.direction == "increase":
                new_deductible = current + adjustment.amount
            else:
                new_deductible = max(0.0, current - adjustment.amount)

            factor = self.deductible_impact_factor(adjustment.signed_amount)
            working = working.scaled(factor)
            staged[jurisdiction] = new_deductible
            update = LedgerUpdate(customer, jurisdiction, previous, new_deductible, "adjusted")

        new_profile = working.clamped(self.config.score_bounds, self.config.probability_bounds)

        tol = self.config.tolerance
        written = False
        for jurisdiction, deductible in staged.items():
            existing = ledger.get(customer, jurisdiction)
            if existing is None or abs(existing - deductible) > tol:
                written = True
            ledger.set(customer, jurisdiction, deductible)

        is_no_op = not written and not new_profile.differs_from(profile, tolerance=tol)

        logger.info(
            "Scenario applied for customer %s: score %.1f -> %.1f, claim prob %.1f%% -> %.1f%%, "
            "expected loss %.0f -> %.0f%s",
            customer,
            profile.base_risk_score,
            new_profile.base_risk_score,
            profile.claim_probability * 100,
            new_profile.claim_probability * 100,
            profile.expected_loss,
            new_profile.expected_loss,
            " (no-op)" if is_no_op else "",
        )

        return ScenarioResult(
            profile=new_profile,
            ledger_update=update,
            is_no_op=is_no_op,
            multiplier_ratio=ratio,
            impact_factor=factor,
        )
