"""Display formatting for SmartCalc.

Turns calculator state into the two rows a user sees:
- pending row: previous operand and operator, blank with no operation
- current row: the operand being typed, or the last result
"""

from dataclasses import dataclass
from typing import Optional

from .state import CalculatorState


@dataclass(frozen=True)
class Display:
    """Rendered display rows."""

    pending: str
    current: str


def truncate_text(text: str, max_length: int = 24, suffix: str = "…") -> str:
    """Truncate text to max length with suffix.

    Args:
        text: Text to truncate.
        max_length: Maximum length including suffix (0 = unlimited).
        suffix: Suffix to add when truncated.

    Returns:
        Truncated text or original if within limit.
    """
    if max_length <= 0 or len(text) <= max_length:
        return text
    return text[: max_length - len(suffix)] + suffix


def format_operand(operand: Optional[str]) -> str:
    """Group the integer part of an operand with commas.

    The decimal part is kept as typed so "0." and "1.50" survive. Text
    that is not a plain decimal ("Error", "Infinity", "1e+21") is
    returned unchanged.
    """
    if not operand:
        return ""

    sign = ""
    body = operand
    if body[0] in "+-":
        sign, body = body[0], body[1:]

    integer, dot, decimal = body.partition(".")
    if integer == "":
        integer = "0" if dot else ""
    if not integer.isdigit() or (decimal and not decimal.isdigit()):
        return operand

    return f"{sign}{int(integer):,}{dot}{decimal}"


def render(state: CalculatorState, max_length: int = 0) -> Display:
    """Build the display rows for a state.

    Args:
        state: Calculator state.
        max_length: Truncate each row to this length (0 = unlimited).

    Returns:
        Display with the pending and current rows.
    """
    pending = ""
    if state.has_pending_operation:
        pending = f"{format_operand(state.previous_operand)} {state.operation.symbol}"

    current = format_operand(state.current_operand) or "0"
    return Display(
        pending=truncate_text(pending, max_length),
        current=truncate_text(current, max_length),
    )
