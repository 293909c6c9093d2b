"""Keyboard bindings for SmartCalc.

Every key maps to exactly one action. Named keys (Enter, Backspace,
Escape) are written in angle brackets when typed on a line, e.g.
"12+7<Enter>".
"""

import re
from typing import Dict, List, Optional

from .state import (
    Action,
    AddDigit,
    ChooseOperation,
    Clear,
    DeleteDigit,
    Evaluate,
    Operation,
    Percentage,
    ToggleSign,
)

__all__ = ["KEYMAP", "EVALUATE_KEYS", "action_for_key", "tokenize", "describe_bindings"]


KEYMAP: Dict[str, Action] = {
    **{digit: AddDigit(digit) for digit in "0123456789"},
    ".": AddDigit("."),
    "+": ChooseOperation(Operation.ADD),
    "-": ChooseOperation(Operation.SUBTRACT),
    "*": ChooseOperation(Operation.MULTIPLY),
    "x": ChooseOperation(Operation.MULTIPLY),
    "×": ChooseOperation(Operation.MULTIPLY),
    "/": ChooseOperation(Operation.DIVIDE),
    "÷": ChooseOperation(Operation.DIVIDE),
    "=": Evaluate(),
    "Enter": Evaluate(),
    "<": DeleteDigit(),
    "Backspace": DeleteDigit(),
    "c": Clear(),
    "Escape": Clear(),
    "%": Percentage(),
    "n": ToggleSign(),
    "±": ToggleSign(),
}

# Keys the shell routes through its own evaluate step so history is recorded
EVALUATE_KEYS = frozenset(key for key, action in KEYMAP.items() if isinstance(action, Evaluate))

_NAMED_KEY = re.compile(r"<([A-Za-z]+)>")


def action_for_key(key: str) -> Optional[Action]:
    """Look up the action bound to a key, None for unbound keys."""
    return KEYMAP.get(key)


def tokenize(line: str) -> List[str]:
    """Split a typed line into keys.

    Whitespace is ignored and "<Name>" becomes the named key "Name".

    Args:
        line: Keys as typed, e.g. "2 + 3 × 4 <Enter>".

    Returns:
        List of keys in order.
    """
    keys = []
    pos = 0
    while pos < len(line):
        match = _NAMED_KEY.match(line, pos)
        if match:
            keys.append(match.group(1))
            pos = match.end()
            continue
        char = line[pos]
        if not char.isspace():
            keys.append(char)
        pos += 1
    return keys


def describe_bindings() -> List[tuple]:
    """Group keys by the action they trigger, for help output."""
    grouped: Dict[str, List[str]] = {}
    for key, action in KEYMAP.items():
        if isinstance(action, AddDigit):
            label = "AddDigit"
        elif isinstance(action, ChooseOperation):
            label = f"ChooseOperation({action.operation.symbol})"
        else:
            label = type(action).__name__
        grouped.setdefault(label, []).append(key)
    return [(label, " ".join(keys)) for label, keys in grouped.items()]
