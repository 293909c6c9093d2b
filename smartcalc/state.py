"""Calculator state and actions for SmartCalc.

The calculator keeps exactly the triple a two-operand calculator needs:
- previous_operand: left operand once an operator has been chosen
- operation: the pending operator
- current_operand: the digits being typed

Actions are small frozen dataclasses, one per user intent. Only the
actions that need a payload carry one.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

__all__ = [
    "Operation",
    "CalculatorState",
    "INITIAL_STATE",
    "AddDigit",
    "ChooseOperation",
    "Clear",
    "DeleteDigit",
    "Evaluate",
    "SetResult",
    "Percentage",
    "ToggleSign",
    "Action",
]


class Operation(Enum):
    """Binary operators, valued by their display symbol."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "×"
    DIVIDE = "÷"
    NONE = ""

    @property
    def symbol(self) -> str:
        return self.value


@dataclass(frozen=True)
class CalculatorState:
    """Complete calculator state.

    Attributes:
        current_operand: Digits being entered. "" is a valid empty value
            distinct from "0".
        previous_operand: Left operand, "" when no operator is pending.
        operation: Pending operator, Operation.NONE when there is none.
        overwrite: When True the next digit replaces current_operand.
    """

    current_operand: str = "0"
    previous_operand: str = ""
    operation: Operation = Operation.NONE
    overwrite: bool = False

    @property
    def has_pending_operation(self) -> bool:
        return self.operation is not Operation.NONE

    def can_evaluate(self) -> bool:
        """Check if an Evaluate action would do anything."""
        return (
            self.has_pending_operation
            and self.current_operand != ""
            and self.previous_operand != ""
        )

    def to_dict(self) -> dict:
        return {
            "current_operand": self.current_operand,
            "previous_operand": self.previous_operand,
            "operation": self.operation.symbol,
            "overwrite": self.overwrite,
        }


INITIAL_STATE = CalculatorState()


@dataclass(frozen=True)
class AddDigit:
    """Type a digit or the decimal point."""

    digit: str


@dataclass(frozen=True)
class ChooseOperation:
    """Pick an operator, folding any pending operation first."""

    operation: Operation


@dataclass(frozen=True)
class Clear:
    """Reset to the initial state."""


@dataclass(frozen=True)
class DeleteDigit:
    """Remove the last typed character."""


@dataclass(frozen=True)
class Evaluate:
    """Compute the pending operation."""


@dataclass(frozen=True)
class SetResult:
    """Inject an externally computed value (solver answers)."""

    value: str


@dataclass(frozen=True)
class Percentage:
    """Divide the current operand by 100."""


@dataclass(frozen=True)
class ToggleSign:
    """Negate the current operand."""


Action = Union[
    AddDigit,
    ChooseOperation,
    Clear,
    DeleteDigit,
    Evaluate,
    SetResult,
    Percentage,
    ToggleSign,
]
