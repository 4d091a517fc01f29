"""
Session engine — loaded profiles, the deductible ledger and the boundary operations.
"""

from .session import RiskTwinSession

__all__ = ["RiskTwinSession"]
