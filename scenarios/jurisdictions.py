"""
Jurisdiction risk multipliers used when a customer relocates.

The ratio target/source scales the whole risk profile, so only relative
values matter: 1.00 is a neutral jurisdiction, FL at 1.15 carries hurricane
and flood exposure, CA at 1.12 wildfire and earthquake exposure.

Unknown jurisdictions read as 1.0 (no risk effect) rather than failing.
"""

from __future__ import annotations

from typing import Dict

from core.schema import JurisdictionRiskTable


DEFAULT_JURISDICTION_FACTORS: Dict[str, float] = {
    "FL": 1.15, "CA": 1.12, "TX": 1.08, "NY": 1.10, "IL": 1.05,
    "PA": 1.02, "OH": 0.98, "GA": 1.06, "NC": 1.04, "MI": 1.01,
    "NJ": 1.09, "VA": 1.03, "WA": 1.00, "AZ": 1.07, "MA": 1.11,
    "TN": 0.99, "IN": 0.97, "MO": 0.96, "MD": 1.08, "WI": 0.95,
}

JURISDICTION_TABLES: Dict[str, Dict[str, float]] = {
    "us_states": DEFAULT_JURISDICTION_FACTORS,
}


def get_jurisdiction_table(name: str = "us_states") -> JurisdictionRiskTable:
    """
    Return a named jurisdiction table.

    Parameters
    ----------
    name : str
        Table identifier. Currently only "us_states".
    """
    if name not in JURISDICTION_TABLES:
        raise KeyError(
            f"Unknown jurisdiction table '{name}'. "
            f"Available: {list(JURISDICTION_TABLES.keys())}"
        )
    return JurisdictionRiskTable(dict(JURISDICTION_TABLES[name]))
