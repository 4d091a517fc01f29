"""
Caller-contract errors raised by the core.

Nothing here is retried: every operation is a pure computation that either
returns a value or raises one of these.
"""

from __future__ import annotations


class RiskTwinError(Exception):
    """Base class for errors raised by the risk twin core."""


class InvalidScenario(RiskTwinError, ValueError):
    """A scenario change is missing required fields or carries invalid values."""


class MissingProfile(RiskTwinError, LookupError):
    """A forecast/adjust call referenced a customer with no loaded RiskProfile."""

    def __init__(self, customer_id):
        self.customer_id = customer_id
        super().__init__(f"No risk profile loaded for customer {customer_id!r}.")


class UnknownModel(RiskTwinError, KeyError):
    """The model selector named a forecast model that is not registered."""

    def __init__(self, name, available):
        self.name = name
        self.available = list(available)
        super().__init__(f"Unknown forecast model '{name}'. Available: {self.available}")

    def __str__(self) -> str:
        return self.args[0]
