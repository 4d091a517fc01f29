"""
Data quality validation for risk-score histories before they reach the forecasters.

Catches problems early:
- Missing columns
- Unparseable timestamps or scores
- Duplicate or out-of-order timestamps
- Scores outside [0, 100]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import pandas as pd


@dataclass
class ValidationResult:
    """Collects all validation warnings/errors for a history."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        lines = []
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  ✗ {e}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  ⚠ {w}")
        if not lines:
            lines.append("✓ All checks passed.")
        return "\n".join(lines)


def validate_history(
    df: pd.DataFrame,
    *,
    time_col: str = "timestamp",
    score_col: str = "risk_score",
) -> ValidationResult:
    """
    Run all validation checks on a risk-score history.
    Returns a ValidationResult with errors (blocking) and warnings (informational).
    An empty history is only a warning: every forecast model has a fallback for it.
    """
    result = ValidationResult()

    missing = [c for c in (time_col, score_col) if c not in df.columns]
    if missing:
        result.errors.append(f"Missing required columns: {missing}")
        return result  # can't continue without columns

    if len(df) == 0:
        result.warnings.append("History is empty; forecasts will use fallbacks.")
        return result

    # --- Timestamps ---
    ts = pd.to_datetime(df[time_col], errors="coerce")
    n_null = int(ts.isna().sum())
    if n_null > 0:
        result.warnings.append(f"{n_null} rows have null/unparseable {time_col}.")

    n_dup = int(ts.dropna().duplicated().sum())
    if n_dup > 0:
        result.warnings.append(f"{n_dup} duplicate timestamps found; the last score is kept.")

    if not ts.dropna().is_monotonic_increasing:
        result.warnings.append("Timestamps are not in chronological order; rows will be sorted.")

    # --- Scores ---
    scores = pd.to_numeric(df[score_col], errors="coerce")
    n_null = int(scores.isna().sum())
    if n_null > 0:
        result.warnings.append(f"{n_null} rows have null/unparseable {score_col}.")

    n_out = int(((scores < 0) | (scores > 100)).sum())
    if n_out > 0:
        result.errors.append(f"{n_out} rows have {score_col} outside [0, 100].")

    if n_null == len(df):
        result.errors.append(f"No usable {score_col} values.")

    return result
