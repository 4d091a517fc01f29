"""
Timeline entries — human-readable audit lines for applied scenarios and recalculations.

Premium impact estimates:
  deductible increase   saves $0.15 per deductible dollar per year
  risk score change     $45 per score point per year
"""

from __future__ import annotations

from dataclasses import dataclass

from factors.adjuster import RiskRecalculation
from scenarios.calculator import ScenarioResult
from scenarios.changes import ScenarioChange

DEDUCTIBLE_PREMIUM_RATE = 0.15
PREMIUM_PER_SCORE_POINT = 45


@dataclass(frozen=True)
class TimelineEntry:
    title: str
    details: str
    tag: str


def describe_scenario(name: str, change: ScenarioChange, result: ScenarioResult) -> TimelineEntry:
    title = "📅 What-if Scenario Applied"
    details = f"Applied scenario: {name}"

    move = change.move
    adjustment = change.deductible
    if move is not None:
        details += f", relocated to {move.target}"
        update = result.ledger_update
        if update is not None and update.outcome == "restored":
            details += f" (restored ${update.deductible:,.0f} deductible)"
    if adjustment is not None:
        verb = "increased" if adjustment.direction == "increase" else "decreased"
        details += f", {verb} deductible by ${adjustment.amount:,.0f}"
        if adjustment.direction == "increase":
            saving = round(adjustment.amount * DEDUCTIBLE_PREMIUM_RATE)
            title = f"💰 Deductible Adjustment - Est. Premium Impact: -${saving}/year"
    if result.is_no_op:
        details += " (no change to risk profile)"

    return TimelineEntry(title=title, details=details, tag="scenario")


def describe_recalculation(recalc: RiskRecalculation) -> TimelineEntry:
    change = recalc.new_score - recalc.original_score
    amount = round(abs(change) * PREMIUM_PER_SCORE_POINT)
    premium = f"+${amount}" if change > 0 else f"-${amount}"
    details = (
        f"Risk Score: {recalc.original_score:.1f}→{recalc.new_score:.1f} | "
        f"Premium Impact: {premium}/year | "
        f"Confidence: {recalc.confidence * 100:.1f}%"
    )
    return TimelineEntry(title="🤖 AI Risk Assessment Update", details=details, tag="ml_update")
