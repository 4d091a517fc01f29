from __future__ import annotations

import pandas as pd

from core.schema import HistoricalSeries


def load_history_csv(path: str, *, low_memory: bool = False) -> pd.DataFrame:
    """Load a risk-score history export (one row per observation)."""
    return pd.read_csv(path, low_memory=low_memory)


def history_to_series(
    df: pd.DataFrame,
    *,
    time_col: str = "timestamp",
    score_col: str = "risk_score",
) -> HistoricalSeries:
    """Drop unusable rows, keep the last score per timestamp, and build the series."""
    data = df[[time_col, score_col]].copy()
    data[time_col] = pd.to_datetime(data[time_col], errors="coerce")
    data[score_col] = pd.to_numeric(data[score_col], errors="coerce")
    data = data.dropna().sort_values(time_col, kind="stable")
    data = data.drop_duplicates(subset=[time_col], keep="last")
    return HistoricalSeries.from_frame(data, time_col=time_col, score_col=score_col)
