"""Tests for history loading and validation."""

import pandas as pd
import pytest

from data_prep.loader import history_to_series, load_history_csv
from data_prep.validators import validate_history


@pytest.fixture
def messy_history():
    return pd.DataFrame(
        {
            "timestamp": ["2024-03-01", "2024-01-01", "2024-02-01", "2024-02-01", "bad"],
            "risk_score": [64, 60, 61, 62, 70],
        }
    )


class TestValidateHistory:
    def test_clean_history(self, rising_series):
        result = validate_history(rising_series.to_frame())
        assert result.is_valid
        assert result.warnings == []
        assert "All checks passed" in result.summary()

    def test_missing_columns(self):
        result = validate_history(pd.DataFrame({"date": [], "score": []}))
        assert not result.is_valid
        assert "Missing required columns" in result.errors[0]

    def test_empty_is_warning_only(self):
        result = validate_history(pd.DataFrame({"timestamp": [], "risk_score": []}))
        assert result.is_valid
        assert len(result.warnings) == 1

    def test_messy_history_warns(self, messy_history):
        result = validate_history(messy_history)
        assert result.is_valid
        joined = " ".join(result.warnings)
        assert "null/unparseable timestamp" in joined
        assert "duplicate timestamps" in joined
        assert "chronological order" in joined

    def test_out_of_range_scores(self):
        df = pd.DataFrame({"timestamp": ["2024-01-01", "2024-02-01"], "risk_score": [50, 150]})
        result = validate_history(df)
        assert not result.is_valid
        assert "outside [0, 100]" in result.summary()

    def test_no_usable_scores(self):
        df = pd.DataFrame({"timestamp": ["2024-01-01"], "risk_score": ["n/a"]})
        assert not validate_history(df).is_valid


class TestHistoryToSeries:
    def test_cleans_sorts_and_dedupes(self, messy_history):
        series = history_to_series(messy_history)
        assert list(series.scores) == [60.0, 62.0, 64.0]
        assert series.points[0].timestamp == pd.Timestamp("2024-01-01")

    def test_custom_columns(self):
        df = pd.DataFrame({"as_of": ["2024-01-01", "2024-02-01"], "score": [10, 20]})
        series = history_to_series(df, time_col="as_of", score_col="score")
        assert len(series) == 2

    def test_csv_round_trip(self, tmp_path, rising_series):
        path = tmp_path / "history.csv"
        rising_series.to_frame().to_csv(path, index=False)
        loaded = history_to_series(load_history_csv(str(path)))
        assert list(loaded.scores) == [60.0, 62.0, 64.0]
