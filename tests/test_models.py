"""Tests for the individual forecast models."""

import pytest

from core.config import ForecastConfig
from core.schema import HistoricalSeries
from forecasting.autoregressive import DampedAutoregressiveModel
from forecasting.linear import LinearTrendModel
from forecasting.smoothing import ExponentialSmoothingModel

ALL_MODELS = [LinearTrendModel(), ExponentialSmoothingModel(), DampedAutoregressiveModel()]


def _values(points):
    return [p.predicted_score for p in points]


def _confidences(points):
    return [p.confidence for p in points]


class TestLinearTrend:
    def test_extrapolates_trend(self, rising_series):
        points = LinearTrendModel().predict(rising_series, 64.0, 3)
        assert _values(points) == pytest.approx([66.0, 68.0, 70.0])
        assert _confidences(points) == pytest.approx([0.9, 0.8, 0.7])
        assert [p.period_index for p in points] == [1, 2, 3]

    def test_confidence_floor(self, rising_series):
        points = LinearTrendModel().predict(rising_series, 64.0, 12)
        assert points[-1].confidence == pytest.approx(0.3)
        assert min(_confidences(points)) == pytest.approx(0.3)

    @pytest.mark.parametrize("scores", [[], [55.0]])
    def test_flat_fallback(self, scores):
        series = HistoricalSeries.from_scores(scores)
        points = LinearTrendModel().predict(series, 42.0, 4)
        assert _values(points) == [42.0] * 4
        assert _confidences(points) == pytest.approx([0.8, 0.75, 0.7, 0.65])

    def test_uneven_spacing_uses_time(self):
        series = HistoricalSeries.from_pairs([("2024-01-01", 50), ("2024-01-31", 53), ("2024-03-31", 59)])
        points = LinearTrendModel().predict(series, 59.0, 1)
        # 0.1 points per day: next period is 30 days after the last observation
        assert points[0].predicted_score == pytest.approx(62.0)

    def test_clamped_to_100(self):
        series = HistoricalSeries.from_scores([90.0, 95.0, 100.0])
        assert max(_values(LinearTrendModel().predict(series, 100.0, 5))) == 100.0


class TestExponentialSmoothing:
    def test_single_point(self):
        series = HistoricalSeries.from_scores([60.0])
        points = ExponentialSmoothingModel().predict(series, 50.0, 2)
        assert _values(points) == pytest.approx([53.0, 53.0])

    def test_smooths_in_chronological_order(self, rising_series):
        points = ExponentialSmoothingModel().predict(rising_series, 64.0, 3)
        assert _values(points) == pytest.approx([62.992] * 3)
        assert _confidences(points) == pytest.approx([0.85, 0.77, 0.69])

    def test_empty_series_is_flat_at_current(self, empty_series):
        assert _values(ExponentialSmoothingModel().predict(empty_series, 33.0, 3)) == [33.0] * 3

    def test_confidence_floor(self, empty_series):
        points = ExponentialSmoothingModel().predict(empty_series, 33.0, 10)
        assert points[-1].confidence == pytest.approx(0.4)

    def test_custom_alpha(self):
        series = HistoricalSeries.from_scores([60.0])
        model = ExponentialSmoothingModel(ForecastConfig(smoothing_alpha=0.5))
        assert model.predict(series, 50.0, 1)[0].predicted_score == pytest.approx(55.0)


class TestDampedAutoregressive:
    def test_mean_step_extrapolation(self, rising_series):
        points = DampedAutoregressiveModel().predict(rising_series, 64.0, 3)
        assert _values(points) == pytest.approx([66.0, 68.0, 70.0])
        assert _confidences(points) == pytest.approx([0.9, 0.85, 0.8])

    def test_clamped_to_bounds(self):
        falling = HistoricalSeries.from_scores([30.0, 20.0, 10.0])
        points = DampedAutoregressiveModel().predict(falling, 10.0, 3)
        assert _values(points) == [0.0, 0.0, 0.0]

    def test_fallback_to_smoothing(self):
        short = HistoricalSeries.from_scores([60.0, 62.0])
        expected = ExponentialSmoothingModel().predict(short, 64.0, 4)
        assert DampedAutoregressiveModel().predict(short, 64.0, 4) == expected

    def test_confidence_floor(self, rising_series):
        points = DampedAutoregressiveModel().predict(rising_series, 50.0, 20)
        assert points[-1].confidence == pytest.approx(0.5)


class TestCommonContract:
    @pytest.mark.parametrize("model", ALL_MODELS, ids=lambda m: m.name)
    @pytest.mark.parametrize("scores", [[], [70.0], [60.0, 40.0], [10.0, 50.0, 90.0, 99.0]])
    def test_monotonic_confidence_and_bounds(self, model, scores):
        series = HistoricalSeries.from_scores(scores)
        points = model.predict(series, 75.0, 15)
        assert len(points) == 15
        for a, b in zip(points, points[1:]):
            assert a.confidence >= b.confidence
        for p in points:
            assert 0.0 < p.confidence <= 1.0
            assert 0.0 <= p.predicted_score <= 100.0

    @pytest.mark.parametrize("model", ALL_MODELS, ids=lambda m: m.name)
    @pytest.mark.parametrize("horizon", [0, -3, 2.5, True])
    def test_rejects_bad_horizon(self, model, horizon, rising_series):
        with pytest.raises(ValueError):
            model.predict(rising_series, 50.0, horizon)
