"""
Command-line entry point for quick what-if and forecast runs.

Usage (from project root, or via the installed `risktwin` script):

    python -m app.cli forecast history.csv --current 72.5 --horizon 12m --model ensemble
    python -m app.cli scenario --score 78.5 --claim-prob 0.38 --loss 4200 --state FL \
        --move CA --increase 500

The history CSV needs `timestamp` and `risk_score` columns.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

import pandas as pd

from core.errors import RiskTwinError
from core.schema import RiskProfile
from data_prep.loader import history_to_series, load_history_csv
from data_prep.validators import validate_history
from forecasting.ensemble import run_forecast
from forecasting.registry import MODEL_REGISTRY, parse_horizon
from insights.timeline import describe_scenario
from scenarios.calculator import ScenarioImpactCalculator
from scenarios.changes import change_from_payload
from scenarios.ledger import DeductibleLedger


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="risktwin", description="Risk twin what-if and forecasting tools")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    fc = sub.add_parser("forecast", help="Forecast a risk score from a history CSV")
    fc.add_argument("history", help="CSV with timestamp,risk_score columns")
    fc.add_argument("--current", type=float, required=True, help="Current risk score")
    fc.add_argument("--horizon", default="12m", help="3m, 6m, 12m, 24m or a month count")
    fc.add_argument("--model", default="ensemble", choices=sorted(MODEL_REGISTRY))

    sc = sub.add_parser("scenario", help="Apply a what-if change to a risk profile")
    sc.add_argument("--customer", default="cli")
    sc.add_argument("--score", type=float, required=True)
    sc.add_argument("--claim-prob", type=float, required=True)
    sc.add_argument("--loss", type=float, required=True)
    sc.add_argument("--state", required=True)
    sc.add_argument("--deductible", type=float, default=None, help="Deductible held in --state")
    sc.add_argument("--move", default=None, help="Target state code")
    sc.add_argument("--increase", type=float, default=None)
    sc.add_argument("--decrease", type=float, default=None)
    sc.add_argument("--name", default="CLI scenario")
    return parser


def _run_forecast(args: argparse.Namespace) -> int:
    df = load_history_csv(args.history)
    check = validate_history(df)
    print(check.summary())
    if not check.is_valid:
        return 1

    series = history_to_series(df)
    forecast = run_forecast(series, args.current, parse_horizon(args.horizon), args.model)

    with pd.option_context("display.float_format", "{:.2f}".format):
        print(forecast.to_dataframe().to_string(index=False))
    print(f"Trend: {forecast.trend_direction} | Volatility: {forecast.volatility:.2f}")
    return 0


def _run_scenario(args: argparse.Namespace) -> int:
    profile = RiskProfile(
        customer_id=args.customer,
        base_risk_score=args.score,
        claim_probability=args.claim_prob,
        expected_loss=args.loss,
        jurisdiction=args.state.upper(),
    )
    ledger = DeductibleLedger()
    if args.deductible is not None:
        ledger.record_onboarding(profile.customer_id, profile.jurisdiction, args.deductible)

    payload = {
        "move_state": args.move,
        "increase_deductible": args.increase,
        "decrease_deductible": args.decrease,
    }
    change = change_from_payload({k: v for k, v in payload.items() if v is not None})
    result = ScenarioImpactCalculator(ledger=ledger).apply(profile, change)

    table = pd.DataFrame([profile.to_dict(), result.profile.to_dict()], index=["before", "after"])
    print(table.to_string())
    entry = describe_scenario(args.name, change, result)
    print(f"{entry.title}\n{entry.details}")
    print(f"Ledger: {ledger.entries_for(profile.customer_id)}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        if args.command == "forecast":
            return _run_forecast(args)
        return _run_scenario(args)
    except (RiskTwinError, ValueError) as exc:
        print(f"✗ {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
