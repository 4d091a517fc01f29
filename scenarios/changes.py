"""
Scenario change variants — the already-disambiguated what-if a caller applies.

    NoChange            record the scenario, touch nothing
    MoveJurisdiction    relocate the customer
    AdjustDeductible    raise or lower the deductible by an amount
    CombinedChange      relocate, then adjust the deductible in the new place

Raw request documents ({"move_state": "CA", "increase_deductible": 500})
are turned into variants by change_from_payload().
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from core.errors import InvalidScenario


DEDUCTIBLE_DIRECTIONS = ("increase", "decrease")
MAX_DEDUCTIBLE_CHANGE = 10_000.0


@dataclass(frozen=True)
class NoChange:
    reason: str = "no change requested"

    @property
    def move(self) -> Optional["MoveJurisdiction"]:
        return None

    @property
    def deductible(self) -> Optional["AdjustDeductible"]:
        return None


@dataclass(frozen=True)
class MoveJurisdiction:
    target: str

    def __post_init__(self) -> None:
        if not isinstance(self.target, str) or not self.target.strip():
            raise InvalidScenario("MoveJurisdiction requires a non-empty target jurisdiction.")
        object.__setattr__(self, "target", self.target.strip().upper())

    @property
    def move(self) -> "MoveJurisdiction":
        return self

    @property
    def deductible(self) -> Optional["AdjustDeductible"]:
        return None


@dataclass(frozen=True)
class AdjustDeductible:
    direction: Literal["increase", "decrease"]
    amount: float

    def __post_init__(self) -> None:
        if self.direction not in DEDUCTIBLE_DIRECTIONS:
            raise InvalidScenario(
                f"AdjustDeductible direction must be one of {DEDUCTIBLE_DIRECTIONS}, "
                f"got {self.direction!r}."
            )
        try:
            amount = float(self.amount)
        except (TypeError, ValueError):
            raise InvalidScenario(
                f"AdjustDeductible amount must be numeric, got {self.amount!r}."
            ) from None
        if amount != amount or amount < 0:  # NaN or negative
            raise InvalidScenario(f"AdjustDeductible amount must be >= 0, got {self.amount!r}.")
        object.__setattr__(self, "amount", amount)

    @property
    def signed_amount(self) -> float:
        """Positive for an increase, negative for a decrease."""
        return self.amount if self.direction == "increase" else -self.amount

    @property
    def move(self) -> Optional[MoveJurisdiction]:
        return None

    @property
    def deductible(self) -> "AdjustDeductible":
        return self


@dataclass(frozen=True)
class CombinedChange:
    """Relocation followed by a deductible adjustment in the new jurisdiction."""

    move: MoveJurisdiction
    deductible: AdjustDeductible

    def __post_init__(self) -> None:
        if not isinstance(self.move, MoveJurisdiction):
            raise InvalidScenario("CombinedChange.move must be a MoveJurisdiction.")
        if not isinstance(self.deductible, AdjustDeductible):
            raise InvalidScenario("CombinedChange.deductible must be an AdjustDeductible.")


ScenarioChange = Union[NoChange, MoveJurisdiction, AdjustDeductible, CombinedChange]
SCENARIO_CHANGE_TYPES = (NoChange, MoveJurisdiction, AdjustDeductible, CombinedChange)


def validate_change(change: object) -> ScenarioChange:
    """Reject anything that is not one of the four variants."""
    if not isinstance(change, SCENARIO_CHANGE_TYPES):
        raise InvalidScenario(
            f"Unsupported scenario change {type(change).__name__}; expected one of "
            f"{[t.__name__ for t in SCENARIO_CHANGE_TYPES]}."
        )
    return change


# ---------------- Raw payload parsing ---------------- #

class ScenarioPayload(BaseModel):
    """Raw change document as submitted with a scenario request."""

    model_config = ConfigDict(extra="ignore")

    no_change: bool = False
    move_state: Optional[str] = None
    increase_deductible: Optional[float] = Field(default=None, ge=0, le=MAX_DEDUCTIBLE_CHANGE)
    decrease_deductible: Optional[float] = Field(default=None, ge=0, le=MAX_DEDUCTIBLE_CHANGE)

    @field_validator("move_state")
    @classmethod
    def validate_state_code(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        code = v.strip().upper()
        if len(code) != 2 or not code.isalpha():
            raise ValueError(f"State code must be two letters, got {v!r}")
        return code

    @model_validator(mode="after")
    def validate_single_direction(self) -> "ScenarioPayload":
        if self.increase_deductible is not None and self.decrease_deductible is not None:
            raise ValueError("Provide increase_deductible OR decrease_deductible, not both")
        return self


def change_from_payload(payload: dict) -> ScenarioChange:
    """
    Build the disambiguated ScenarioChange from a raw change document.

    An empty document, or one with no_change set, is a NoChange.
    Pydantic validation failures are reported as InvalidScenario.
    """
    try:
        parsed = ScenarioPayload.model_validate(payload or {})
    except ValidationError as exc:
        raise InvalidScenario(f"Invalid scenario payload: {exc}") from exc

    if parsed.no_change:
        return NoChange(reason="no_change flag set")

    move = MoveJurisdiction(parsed.move_state) if parsed.move_state else None

    deductible = None
    if parsed.increase_deductible is not None:
        deductible = AdjustDeductible("increase", parsed.increase_deductible)
    elif parsed.decrease_deductible is not None:
        deductible = AdjustDeductible("decrease", parsed.decrease_deductible)

    if move is not None and deductible is not None:
        return CombinedChange(move=move, deductible=deductible)
    if move is not None:
        return move
    if deductible is not None:
        return deductible
    return NoChange(reason="empty change document")
