"""Evaluate a (previous, operation, current) triple.

Operands are decimal text. Parsing is lenient about trailing garbage the
same way a typed operand can be half-finished ("12." is 12), and strict
about text that has no number at all, which yields an empty result
instead of an exception.
"""

import math
import re
from decimal import Decimal
from typing import Optional

from .state import Operation

__all__ = ["evaluate", "parse_operand", "format_number", "NOT_COMPUTABLE"]


# Returned when either operand is not a number
NOT_COMPUTABLE = ""

_NUMBER_PREFIX = re.compile(
    r"^\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))"
)
_EXPONENT = re.compile(r"e([+-])0*(\d)")

# Plain decimal range of the leading digit, matching how JavaScript prints numbers
_MIN_EXPONENT = -6
_MAX_EXPONENT = 21


def parse_operand(text: str) -> Optional[float]:
    """Parse the leading number of an operand.

    Args:
        text: Operand text such as "12", "-0.5", "3." or "Infinity".

    Returns:
        The parsed float, or None when the text does not start with a number.
    """
    if text is None:
        return None
    match = _NUMBER_PREFIX.match(text)
    if not match:
        return None
    number = match.group(1)
    if number.lstrip("+-") == "Infinity":
        number = number.replace("Infinity", "inf")
    return float(number)


def format_number(value: float) -> str:
    """Format a float as the shortest decimal text that reads back the same.

    Integral values drop the trailing ".0" and infinities read "Infinity".
    Magnitudes from 1e-6 up to 1e21 use plain decimals ("0.00001"); the
    rest use an exponent without zero padding ("1e-7").
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    digits = Decimal(repr(value))
    if _MIN_EXPONENT <= digits.adjusted() < _MAX_EXPONENT:
        return format(digits, "f")
    return _EXPONENT.sub(r"e\1\2", repr(value))


def evaluate(previous_operand: str, operation: Operation, current_operand: str) -> str:
    """Compute previous_operand <operation> current_operand.

    Division by zero follows float semantics and returns "Infinity",
    "-Infinity" or "NaN".

    Args:
        previous_operand: Left operand text.
        operation: Operator to apply.
        current_operand: Right operand text.

    Returns:
        Result text, or NOT_COMPUTABLE if an operand is not a number.
    """
    prev = parse_operand(previous_operand)
    current = parse_operand(current_operand)
    if prev is None or current is None:
        return NOT_COMPUTABLE

    computation = 0.0
    if operation is Operation.ADD:
        computation = prev + current
    elif operation is Operation.SUBTRACT:
        computation = prev - current
    elif operation is Operation.MULTIPLY:
        computation = prev * current
    elif operation is Operation.DIVIDE:
        if current == 0:
            if prev == 0 or math.isnan(prev):
                computation = math.nan
            else:
                computation = math.copysign(math.inf, prev) * math.copysign(1.0, current)
        else:
            computation = prev / current

    return format_number(computation)
