"""Tests for the predictive analysis report."""

import math

import pandas as pd
import pytest

from core.errors import UnknownModel
from core.schema import HistoricalSeries, RiskProfile
from insights.analysis import (
    calculate_roi,
    generate_predictive_analysis,
    risk_to_claim_probability,
    risk_to_expected_loss,
)

AS_OF = pd.Timestamp("2025-01-15")


@pytest.fixture
def analysis(fl_profile, rising_series):
    return generate_predictive_analysis(fl_profile, rising_series, "12m", as_of=AS_OF)


class TestClaimProbability:
    @pytest.mark.parametrize("score,expected", [(50.0, 0.4), (0.0, 0.01), (100.0, 0.8), (1.0, 0.01)])
    def test_mapping(self, score, expected):
        assert risk_to_claim_probability(score) == pytest.approx(expected)


class TestPredictiveAnalysis:
    def test_shape(self, analysis):
        assert analysis.horizon == 12
        assert len(analysis.forecast.points) == 12
        assert len(analysis.claim_forecast) == 12
        assert analysis.current_risk_score == 78.5

    def test_claim_path_follows_forecast(self, analysis):
        for point, claim in zip(analysis.forecast.points, analysis.claim_forecast):
            assert claim.claim_probability == pytest.approx(risk_to_claim_probability(point.predicted_score))
            assert claim.confidence == pytest.approx(point.confidence * 0.9)

    def test_peak_is_last_period_on_rising_forecast(self, analysis):
        assert analysis.peak_risk_period == 12

    def test_scenario_bands(self, analysis):
        best, likely, worst = analysis.scenarios
        values = analysis.forecast.values
        assert best.predicted_scores == pytest.approx([v * 0.8 for v in values])
        assert likely.predicted_scores == pytest.approx(values)
        assert all(w <= 100.0 for w in worst.predicted_scores)
        assert sum(s.band.probability for s in analysis.scenarios) == pytest.approx(1.0)

    def test_next_review_date(self, analysis):
        assert analysis.next_review_date == pd.Timestamp("2025-05-15")

    def test_short_horizon_review(self, fl_profile, rising_series):
        report = generate_predictive_analysis(fl_profile, rising_series, "3m", as_of=AS_OF)
        assert report.next_review_date == pd.Timestamp("2025-02-15")

    def test_flags_on_rising_high_risk(self, analysis):
        prefixes = [f.split(":")[0] for f in analysis.flags]
        assert "RISING_RISK" in prefixes
        assert "HIGH_RISK" in prefixes
        assert "LIMITED_HISTORY" in prefixes

    def test_quiet_profile_has_no_flags(self):
        profile = RiskProfile(2, 50.0, 0.4, 1000.0, "OH")
        series = HistoricalSeries.from_scores([50.0] * 10)
        report = generate_predictive_analysis(profile, series, 6, as_of=AS_OF)
        assert report.flags == []
        assert report.forecast.trend_direction == "stable"
        assert report.metrics.recommendation == "High confidence predictions"

    def test_dataframe_columns(self, analysis):
        df = analysis.to_dataframe()
        for col in ("predicted_score", "claim_probability", "best_case", "most_likely", "worst_case"):
            assert col in df.columns
        assert len(df) == 12

    def test_summary_mentions_peak(self, analysis):
        assert "peak risk in period 12" in analysis.summary()

    def test_unknown_model(self, fl_profile, rising_series):
        with pytest.raises(UnknownModel):
            generate_predictive_analysis(fl_profile, rising_series, model="neural_net")

    def test_risk_drivers_attached(self, analysis):
        assert analysis.risk_drivers[0].factor == "Historical Risk Patterns"
        assert list(analysis.drivers_dataframe()["factor"]) == [d.factor for d in analysis.risk_drivers]
        assert "top driver: Historical Risk Patterns" in analysis.summary()


class TestFinancialImpact:
    @pytest.mark.parametrize(
        "savings,costs,expected",
        [(300.0, 100.0, 200.0), (0.0, 50.0, -100.0), (10.0, 0.0, math.inf), (0.0, 0.0, 0.0)],
    )
    def test_roi(self, savings, costs, expected):
        assert calculate_roi(savings, costs) == expected

    def test_rising_risk_costs_more(self, analysis):
        fin = analysis.financial_impact
        assert fin.current_expected_loss == 4200.0
        assert len(fin.points) == 12
        for point, forecast_point in zip(fin.points, analysis.forecast.points):
            assert point.predicted_expected_loss == pytest.approx(risk_to_expected_loss(forecast_point.predicted_score))
            assert point.potential_savings == 0.0
            assert point.potential_additional_cost == pytest.approx(point.predicted_expected_loss - 4200.0)
            assert point.confidence == forecast_point.confidence
        assert fin.total_potential_savings == 0.0
        assert fin.net_financial_impact == pytest.approx(-fin.total_potential_additional_costs)
        assert fin.roi_on_risk_management == pytest.approx(-100.0)

    def test_lower_forecast_saves(self):
        profile = RiskProfile(3, 50.0, 0.4, 6000.0, "OH")
        series = HistoricalSeries.from_scores([50.0] * 10)
        fin = generate_predictive_analysis(profile, series, 6, as_of=AS_OF).financial_impact
        assert [p.predicted_expected_loss for p in fin.points] == pytest.approx([5000.0] * 6)
        assert [p.risk_adjusted_value for p in fin.points] == pytest.approx([2000.0] * 6)
        assert fin.total_potential_savings == pytest.approx(6000.0)
        assert fin.total_potential_additional_costs == 0.0
        assert fin.roi_on_risk_management == math.inf

    def test_dataframe_has_losses(self, analysis):
        df = analysis.to_dataframe()
        assert list(df["expected_loss"]) == pytest.approx([p.predicted_expected_loss for p in analysis.financial_impact.points])
        assert "risk_adjusted_value" in df.columns


class TestScenarioProjections:
    def test_confidence_scaled_by_band_probability(self, analysis):
        for projection in analysis.scenarios:
            expected = [c * projection.band.probability for c in analysis.forecast.confidences]
            assert projection.confidences == pytest.approx(expected)

    def test_expected_financial_impact(self, analysis):
        likely = analysis.scenarios[1]
        assert likely.expected_financial_impact == pytest.approx(sum(v * 100 for v in analysis.forecast.values))

    def test_mitigations(self, analysis):
        best, likely, worst = analysis.scenarios
        assert best.mitigation_actions == ("Maintain current strategies", "Continue monitoring")
        assert likely.mitigation_actions == ("Regular review", "Standard protocols")
        assert "Risk transfer options" in worst.mitigation_actions
