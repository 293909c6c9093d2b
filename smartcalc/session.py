"""Calculator session: the shell around the state machine.

A session owns everything that is not pure calculator state:
- the current CalculatorState, replaced on every dispatch
- the history log and whether it is shown
- the solver and whether a solve is pending

Nothing here persists; a new session starts empty.
"""

import logging
from typing import Optional

from .config import CalcConfig
from .display import Display, render
from .evaluator import evaluate
from .history import HistoryItem, HistoryLog
from .keymap import EVALUATE_KEYS, action_for_key, tokenize
from .machine import transition
from .solver import Solver
from .state import (
    INITIAL_STATE,
    Action,
    AddDigit,
    CalculatorState,
    ChooseOperation,
    Evaluate,
    SetResult,
)

logger = logging.getLogger(__name__)

# Ignored while the solver is working
_INPUT_ACTIONS = (AddDigit, ChooseOperation)


class UnknownKeyError(KeyError):
    """Raised when a pressed key has no binding."""


class CalculatorSession:
    """Drives one calculator from keys, solver answers and shell commands."""

    def __init__(
        self,
        config: Optional[CalcConfig] = None,
        solver: Optional[Solver] = None,
    ):
        """Initialize a session.

        Args:
            config: Configuration. Defaults are used when omitted.
            solver: Natural-language solver. Built from config when omitted.
        """
        self.config = config or CalcConfig()
        self.solver = solver or Solver(self.config)
        self.state: CalculatorState = INITIAL_STATE
        self.history = HistoryLog()
        self.show_history = False
        self.solving = False

    def dispatch(self, action: Action) -> CalculatorState:
        """Apply one action to the calculator.

        Digit and operator entry is dropped while a solve is pending.
        """
        if self.solving and isinstance(action, _INPUT_ACTIONS):
            logger.debug("Ignoring %s while solving", action)
            return self.state
        self.state = transition(self.state, action)
        return self.state

    def evaluate(self) -> Optional[HistoryItem]:
        """Evaluate the pending operation and record it in history.

        Returns:
            The new history item, or None if there was nothing to evaluate.
        """
        state = self.state
        if not state.can_evaluate():
            return None

        result = evaluate(state.previous_operand, state.operation, state.current_operand)
        expression = f"{state.previous_operand} {state.operation.symbol} {state.current_operand}"
        item = self.history.append(expression, result)
        self.dispatch(Evaluate())
        return item

    def press(self, key: str) -> CalculatorState:
        """Press one key.

        Raises:
            UnknownKeyError: If the key has no binding.
        """
        if key in EVALUATE_KEYS:
            self.evaluate()
            return self.state

        action = action_for_key(key)
        if action is None:
            raise UnknownKeyError(key)
        return self.dispatch(action)

    def enter(self, line: str) -> CalculatorState:
        """Press every key in a typed line, in order.

        The whole line is checked before any key is pressed, so a typo
        leaves the calculator untouched.

        Raises:
            UnknownKeyError: Listing the unbound keys in the line.
        """
        keys = tokenize(line)
        unknown = [key for key in keys if key not in EVALUATE_KEYS and action_for_key(key) is None]
        if unknown:
            raise UnknownKeyError(" ".join(unknown))
        for key in keys:
            self.press(key)
        return self.state

    async def ask(self, query: str) -> Optional[HistoryItem]:
        """Ask the solver and show its answer as the current result.

        Failures come back as an error string and are shown and recorded
        the same way as answers.

        Returns:
            The new history item, or None for a blank query or while
            another solve is pending.
        """
        query = (query or "").strip()
        if not query or self.solving:
            return None

        self.solving = True
        try:
            outcome = await self.solver.solve(query)
        finally:
            self.solving = False

        self.dispatch(SetResult(outcome.display))
        return self.history.append(query, outcome.display, is_ai_generated=True)

    def toggle_history(self) -> bool:
        self.show_history = not self.show_history
        return self.show_history

    def clear_history(self) -> None:
        self.history.clear()

    def display(self) -> Display:
        """Render the current state for the terminal."""
        return render(self.state, self.config.display_max_length)
