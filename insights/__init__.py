"""
Operator-facing outputs — predictive analysis reports, risk drivers and timeline entries.
"""

from .analysis import (
    SCENARIO_BANDS,
    FinancialImpact,
    PredictiveAnalysis,
    calculate_roi,
    generate_predictive_analysis,
    project_financial_impact,
    risk_to_claim_probability,
    risk_to_expected_loss,
)
from .drivers import RiskDriver, identify_risk_drivers
from .timeline import TimelineEntry, describe_recalculation, describe_scenario

__all__ = [
    "SCENARIO_BANDS",
    "FinancialImpact",
    "PredictiveAnalysis",
    "calculate_roi",
    "generate_predictive_analysis",
    "project_financial_impact",
    "risk_to_claim_probability",
    "risk_to_expected_loss",
    "RiskDriver",
    "identify_risk_drivers",
    "TimelineEntry",
    "describe_recalculation",
    "describe_scenario",
]
