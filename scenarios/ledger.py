"""
DeductibleLedger — per-customer memory of the last deductible held in each jurisdiction.

    customer_id -> {jurisdiction -> last_deductible}

An entry exists only once the customer has actually held a deductible there
(onboarding counts as the first entry). Entries are never deleted within a
session. Unknown customers read as an empty ledger.

The ledger is the only mutable state in the core and provides no locking;
callers running concurrently must serialize access per customer.
"""

from __future__ import annotations

from typing import Dict, Hashable, Iterator, Mapping, Optional

import pandas as pd


class DeductibleLedger:
    """In-memory keyed store, injected into ScenarioImpactCalculator."""

    def __init__(self, entries: Optional[Mapping[Hashable, Mapping[str, float]]] = None):
        self._entries: Dict[Hashable, Dict[str, float]] = {}
        for customer_id, by_jurisdiction in (entries or {}).items():
            for jurisdiction, deductible in by_jurisdiction.items():
                self.set(customer_id, jurisdiction, deductible)

    def get(self, customer_id: Hashable, jurisdiction: str, default: Optional[float] = None) -> Optional[float]:
        return self._entries.get(customer_id, {}).get(jurisdiction.upper(), default)

    def has_entry(self, customer_id: Hashable, jurisdiction: str) -> bool:
        return jurisdiction.upper() in self._entries.get(customer_id, {})

    def entries_for(self, customer_id: Hashable) -> Dict[str, float]:
        """Copy of one customer's jurisdiction -> deductible map (empty if unseen)."""
        return dict(self._entries.get(customer_id, {}))

    def set(self, customer_id: Hashable, jurisdiction: str, deductible: float) -> None:
        deductible = float(deductible)
        if deductible < 0:
            raise ValueError(f"Deductible must be >= 0, got {deductible}.")
        self._entries.setdefault(customer_id, {})[jurisdiction.upper()] = deductible

    def record_onboarding(self, customer_id: Hashable, jurisdiction: str, deductible: float) -> None:
        """Record the deductible a customer starts with; existing entries win."""
        if not self.has_entry(customer_id, jurisdiction):
            self.set(customer_id, jurisdiction, deductible)

    def customers(self) -> Iterator[Hashable]:
        return iter(self._entries)

    def __contains__(self, customer_id: Hashable) -> bool:
        return customer_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def to_dataframe(self) -> pd.DataFrame:
        rows = [
            {"customer_id": c, "jurisdiction": j, "deductible": d}
            for c, by_j in self._entries.items()
            for j, d in by_j.items()
        ]
        return pd.DataFrame(rows, columns=["customer_id", "jurisdiction", "deductible"])
