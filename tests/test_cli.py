"""Tests for the risktwin command-line entry point."""

import pandas as pd
import pytest

from app.cli import main


@pytest.fixture
def history_csv(tmp_path):
    path = tmp_path / "history.csv"
    pd.DataFrame(
        {"timestamp": ["2024-01-01", "2024-01-31", "2024-03-01"], "risk_score": [60, 62, 64]}
    ).to_csv(path, index=False)
    return str(path)


class TestForecastCommand:
    def test_prints_table_and_trend(self, history_csv, capsys):
        code = main(["forecast", history_csv, "--current", "64", "--horizon", "3m"])
        out = capsys.readouterr().out
        assert code == 0
        assert "Month 3" in out
        assert "Trend: " in out

    def test_invalid_history(self, tmp_path, capsys):
        path = tmp_path / "bad.csv"
        pd.DataFrame({"timestamp": ["2024-01-01"], "risk_score": [150]}).to_csv(path, index=False)
        assert main(["forecast", str(path), "--current", "50"]) == 1
        assert "ERRORS" in capsys.readouterr().out

    def test_bad_horizon(self, history_csv, capsys):
        assert main(["forecast", history_csv, "--current", "64", "--horizon", "1y"]) == 2
        assert "Unknown horizon" in capsys.readouterr().err


class TestScenarioCommand:
    BASE = ["scenario", "--score", "78.5", "--claim-prob", "0.38", "--loss", "4200", "--state", "FL"]

    def test_relocation_with_increase(self, capsys):
        assert main(self.BASE + ["--move", "CA", "--increase", "500"]) == 0
        out = capsys.readouterr().out
        assert "-$75/year" in out
        assert "Ledger: {'CA': 500.0}" in out

    def test_carries_onboarding_deductible(self, capsys):
        assert main(self.BASE + ["--deductible", "1000", "--move", "TX"]) == 0
        assert "'TX': 1000.0" in capsys.readouterr().out

    def test_conflicting_adjustments(self, capsys):
        assert main(self.BASE + ["--increase", "100", "--decrease", "100"]) == 2
        assert capsys.readouterr().err.startswith("✗")
