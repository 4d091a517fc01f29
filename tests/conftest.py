"""Pytest configuration and shared fixtures."""

import pytest

from core.schema import HistoricalSeries, RiskProfile
from scenarios.jurisdictions import get_jurisdiction_table
from scenarios.ledger import DeductibleLedger


@pytest.fixture
def fl_profile():
    """Florida customer used in the worked relocation example."""
    return RiskProfile(
        customer_id=101,
        base_risk_score=78.5,
        claim_probability=0.38,
        expected_loss=4200.0,
        jurisdiction="FL",
    )


@pytest.fixture
def jurisdiction_table():
    return get_jurisdiction_table()


@pytest.fixture
def ledger():
    return DeductibleLedger()


@pytest.fixture
def rising_series():
    """Three monthly observations climbing 2 points per month."""
    return HistoricalSeries.from_scores([60.0, 62.0, 64.0], start="2024-01-01")


@pytest.fixture
def empty_series():
    return HistoricalSeries()
