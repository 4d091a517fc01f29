"""
External factor layer — turns weather/economic/traffic/market/temporal signals into a risk delta.
"""

from .adjuster import (
    FACTOR_CATEGORIES,
    ExternalFactorAdjuster,
    ExternalFactors,
    FactorAdjustment,
    RiskRecalculation,
)

__all__ = [
    "FACTOR_CATEGORIES",
    "ExternalFactorAdjuster",
    "ExternalFactors",
    "FactorAdjustment",
    "RiskRecalculation",
]
