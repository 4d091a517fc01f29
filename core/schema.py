"""
Record types shared by the scenario, factor and forecasting layers.

RiskProfile is the "risk twin": the numeric risk record for one customer.
It is owned by the caller between calls. Everything in this package returns
new values instead of mutating the records it was given.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Hashable, Iterable, Mapping, Sequence, Tuple

import numpy as np
import pandas as pd


SCORE_BOUNDS: Tuple[float, float] = (0.0, 100.0)
PROBABILITY_BOUNDS: Tuple[float, float] = (0.0, 1.0)

# Columns produced by HistoricalSeries.to_frame() and expected by from_frame().
SERIES_COLUMNS: Tuple[str, ...] = ("timestamp", "risk_score")


@dataclass(frozen=True)
class RiskProfile:
    """
    Numeric risk profile for one customer.

    base_risk_score is in [0, 100], claim_probability in [0, 1] and
    expected_loss is non-negative once clamped.
    """

    customer_id: Hashable
    base_risk_score: float
    claim_probability: float
    expected_loss: float
    jurisdiction: str

    def __post_init__(self) -> None:
        # same normalization as the ledger and the multiplier table
        object.__setattr__(self, "jurisdiction", str(self.jurisdiction).strip().upper())

    def with_values(self, **changes) -> "RiskProfile":
        return replace(self, **changes)

    def scaled(self, factor: float) -> "RiskProfile":
        """Multiply the three risk numbers by the same factor (no clamping)."""
        return replace(
            self,
            base_risk_score=self.base_risk_score * factor,
            claim_probability=self.claim_probability * factor,
            expected_loss=self.expected_loss * factor,
        )

    def clamped(
        self,
        score_bounds: Tuple[float, float] = SCORE_BOUNDS,
        probability_bounds: Tuple[float, float] = PROBABILITY_BOUNDS,
    ) -> "RiskProfile":
        lo, hi = score_bounds
        p_lo, p_hi = probability_bounds
        return replace(
            self,
            base_risk_score=min(max(float(self.base_risk_score), lo), hi),
            claim_probability=min(max(float(self.claim_probability), p_lo), p_hi),
            expected_loss=max(float(self.expected_loss), 0.0),
        )

    def differs_from(self, other: "RiskProfile", *, tolerance: float = 1e-9) -> bool:
        if self.customer_id != other.customer_id or self.jurisdiction != other.jurisdiction:
            return True
        pairs = (
            (self.base_risk_score, other.base_risk_score),
            (self.claim_probability, other.claim_probability),
            (self.expected_loss, other.expected_loss),
        )
        return any(abs(a - b) > tolerance for a, b in pairs)

    def to_dict(self) -> dict:
        return {
            "customer_id": self.customer_id,
            "base_risk_score": self.base_risk_score,
            "claim_probability": self.claim_probability,
            "expected_loss": self.expected_loss,
            "jurisdiction": self.jurisdiction,
        }


@dataclass(frozen=True)
class HistoricalPoint:
    timestamp: pd.Timestamp
    risk_score: float


@dataclass(frozen=True)
class HistoricalSeries:
    """
    Ordered (timestamp, risk_score) observations used as forecasting input.

    Timestamps must be strictly increasing. An empty series is valid: every
    forecast model has a fallback for short histories.
    """

    points: Tuple[HistoricalPoint, ...] = ()

    def __post_init__(self) -> None:
        points = tuple(
            HistoricalPoint(pd.Timestamp(p.timestamp), float(p.risk_score)) for p in self.points
        )
        for prev, cur in zip(points, points[1:]):
            if cur.timestamp <= prev.timestamp:
                raise ValueError(
                    f"Historical series timestamps must be strictly increasing: "
                    f"{prev.timestamp} is followed by {cur.timestamp}."
                )
        object.__setattr__(self, "points", points)

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        return iter(self.points)

    @property
    def scores(self) -> np.ndarray:
        return np.array([p.risk_score for p in self.points], dtype=float)

    def days_elapsed(self) -> np.ndarray:
        """Days since the first observation, one entry per point."""
        if not self.points:
            return np.array([], dtype=float)
        first = self.points[0].timestamp
        return np.array(
            [(p.timestamp - first) / pd.Timedelta(days=1) for p in self.points], dtype=float
        )

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[object, float]]) -> "HistoricalSeries":
        return cls(tuple(HistoricalPoint(pd.Timestamp(ts), float(v)) for ts, v in pairs))

    @classmethod
    def from_scores(
        cls,
        scores: Sequence[float],
        *,
        start: object = "2024-01-01",
        step_days: int = 30,
    ) -> "HistoricalSeries":
        """Build an evenly spaced series, handy for tests and quick what-ifs."""
        start_ts = pd.Timestamp(start)
        return cls.from_pairs(
            (start_ts + pd.Timedelta(days=step_days * i), v) for i, v in enumerate(scores)
        )

    @classmethod
    def from_frame(
        cls,
        df: pd.DataFrame,
        *,
        time_col: str = "timestamp",
        score_col: str = "risk_score",
    ) -> "HistoricalSeries":
        """Build from a DataFrame; rows are sorted by time first."""
        missing = [c for c in (time_col, score_col) if c not in df.columns]
        if missing:
            raise ValueError(f"Missing required columns: {missing}")
        data = df[[time_col, score_col]].copy()
        data[time_col] = pd.to_datetime(data[time_col], errors="coerce")
        data[score_col] = pd.to_numeric(data[score_col], errors="coerce")
        data = data.dropna().sort_values(time_col)
        return cls.from_pairs(zip(data[time_col], data[score_col]))

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "timestamp": [p.timestamp for p in self.points],
                "risk_score": [p.risk_score for p in self.points],
            },
            columns=list(SERIES_COLUMNS),
        )


@dataclass(frozen=True)
class ForecastPoint:
    """One forecast period: 1-indexed, score in [0, 100], confidence in (0, 1]."""

    period_index: int
    predicted_score: float
    confidence: float

    @property
    def label(self) -> str:
        return f"Month {self.period_index}"


class JurisdictionRiskTable(Mapping):
    """
    Read-only jurisdiction -> risk multiplier lookup.

    Missing jurisdictions read as 1.0 through multiplier(); the Mapping
    interface itself only exposes the stored entries.
    """

    def __init__(self, factors: Mapping[str, float], *, default: float = 1.0):
        bad = {k: v for k, v in factors.items() if not float(v) > 0}
        if bad:
            raise ValueError(f"Jurisdiction multipliers must be positive: {bad}")
        self._factors = {str(k).upper(): float(v) for k, v in factors.items()}
        self.default = float(default)

    def __getitem__(self, key: str) -> float:
        return self._factors[str(key).upper()]

    def __iter__(self):
        return iter(self._factors)

    def __len__(self) -> int:
        return len(self._factors)

    def multiplier(self, jurisdiction: str) -> float:
        return self._factors.get(str(jurisdiction).upper(), self.default)

    def ratio(self, source: str, target: str) -> float:
        """multiplier(target) / multiplier(source)."""
        return self.multiplier(target) / self.multiplier(source)

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(
            sorted(self._factors.items()), columns=["jurisdiction", "multiplier"]
        )
