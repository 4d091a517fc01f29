"""Tests for the core record types."""

import pandas as pd
import pytest

from core.schema import HistoricalSeries, JurisdictionRiskTable, RiskProfile


class TestRiskProfile:
    def test_clamped_bounds(self):
        profile = RiskProfile(1, 130.0, 1.4, -20.0, "TX").clamped()
        assert profile.base_risk_score == 100.0
        assert profile.claim_probability == 1.0
        assert profile.expected_loss == 0.0

    def test_scaled_does_not_clamp(self):
        profile = RiskProfile(1, 80.0, 0.5, 1000.0, "TX").scaled(1.5)
        assert profile.base_risk_score == pytest.approx(120.0)
        assert profile.claim_probability == pytest.approx(0.75)
        assert profile.expected_loss == pytest.approx(1500.0)

    def test_differs_from_tolerance(self, fl_profile):
        nudged = fl_profile.with_values(base_risk_score=fl_profile.base_risk_score + 1e-12)
        assert not nudged.differs_from(fl_profile)
        assert fl_profile.with_values(expected_loss=4201.0).differs_from(fl_profile)
        assert fl_profile.with_values(jurisdiction="CA").differs_from(fl_profile)

    def test_jurisdiction_normalized(self):
        profile = RiskProfile(1, 50.0, 0.3, 1000.0, " fl ")
        assert profile.jurisdiction == "FL"
        assert not profile.differs_from(RiskProfile(1, 50.0, 0.3, 1000.0, "FL"))
        assert profile.with_values(jurisdiction="ca").jurisdiction == "CA"

    def test_frozen(self, fl_profile):
        with pytest.raises(Exception):
            fl_profile.base_risk_score = 10.0


class TestHistoricalSeries:
    def test_empty_is_valid(self, empty_series):
        assert len(empty_series) == 0
        assert empty_series.scores.size == 0
        assert empty_series.days_elapsed().size == 0

    def test_from_scores_spacing(self, rising_series):
        assert list(rising_series.days_elapsed()) == [0.0, 30.0, 60.0]
        assert list(rising_series.scores) == [60.0, 62.0, 64.0]

    def test_rejects_non_increasing_timestamps(self):
        with pytest.raises(ValueError, match="strictly increasing"):
            HistoricalSeries.from_pairs([("2024-02-01", 50), ("2024-01-01", 55)])
        with pytest.raises(ValueError):
            HistoricalSeries.from_pairs([("2024-01-01", 50), ("2024-01-01", 55)])

    def test_from_frame_sorts_and_drops_bad_rows(self):
        df = pd.DataFrame({
            "timestamp": ["2024-03-01", "2024-01-01", "not a date", "2024-02-01"],
            "risk_score": [70, 60, 65, "n/a"],
        })
        series = HistoricalSeries.from_frame(df)
        assert list(series.scores) == [60.0, 70.0]

    def test_from_frame_missing_column(self):
        with pytest.raises(ValueError, match="Missing required columns"):
            HistoricalSeries.from_frame(pd.DataFrame({"timestamp": []}))

    def test_to_frame(self, rising_series):
        df = rising_series.to_frame()
        assert list(df.columns) == ["timestamp", "risk_score"]
        assert len(df) == 3


class TestJurisdictionRiskTable:
    def test_default_multiplier(self):
        table = JurisdictionRiskTable({"FL": 1.15})
        assert table.multiplier("fl") == 1.15
        assert table.multiplier("ZZ") == 1.0
        assert "ZZ" not in table

    def test_ratio(self, jurisdiction_table):
        assert jurisdiction_table.ratio("FL", "CA") == pytest.approx(1.12 / 1.15)

    def test_rejects_non_positive(self):
        with pytest.raises(ValueError):
            JurisdictionRiskTable({"FL": 0.0})

    def test_to_dataframe(self, jurisdiction_table):
        df = jurisdiction_table.to_dataframe()
        assert len(df) == 20
        assert df.loc[df["jurisdiction"] == "WI", "multiplier"].iloc[0] == 0.95
