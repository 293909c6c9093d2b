"""SmartCalc - keypad calculator with a natural-language solver.

A pocket-calculator state machine driven from the terminal:
- Pure transition function over discrete key actions
- Left-to-right chained evaluation (no operator precedence)
- In-memory history of keypad and solver results
- Free-text questions answered by a local LLM through ollama
"""

__version__ = "1.0.0"

from .state import (
    Operation,
    CalculatorState,
    INITIAL_STATE,
    AddDigit,
    ChooseOperation,
    Clear,
    DeleteDigit,
    Evaluate,
    SetResult,
    Percentage,
    ToggleSign,
)
from .machine import transition
from .evaluator import evaluate
from .history import HistoryItem, HistoryLog
from .session import CalculatorSession

__all__ = [
    # State machine
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
    "transition",
    "evaluate",
    # Shell
    "HistoryItem",
    "HistoryLog",
    "CalculatorSession",
]
