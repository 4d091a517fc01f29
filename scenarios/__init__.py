"""
Scenario layer — what-if changes, deductible memory and impact recomputation.
"""

from .changes import (
    AdjustDeductible,
    CombinedChange,
    MoveJurisdiction,
    NoChange,
    ScenarioChange,
    ScenarioPayload,
    change_from_payload,
)
from .ledger import DeductibleLedger
from .calculator import LedgerUpdate, ScenarioImpactCalculator, ScenarioResult
from .jurisdictions import DEFAULT_JURISDICTION_FACTORS, get_jurisdiction_table

__all__ = [
    "AdjustDeductible",
    "CombinedChange",
    "MoveJurisdiction",
    "NoChange",
    "ScenarioChange",
    "ScenarioPayload",
    "change_from_payload",
    "DeductibleLedger",
    "LedgerUpdate",
    "ScenarioImpactCalculator",
    "ScenarioResult",
    "DEFAULT_JURISDICTION_FACTORS",
    "get_jurisdiction_table",
]
