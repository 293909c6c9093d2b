"""Calculator state machine.

transition(state, action) is the single way calculator state changes. It
is total: an action whose precondition fails returns the state it was
given, and unknown actions are ignored the same way.

Chained operators fold left with no precedence, so "2 + 3 × 4 =" is
(2 + 3) × 4 = 20.
"""

from dataclasses import replace
from typing import Callable, Dict, Type

from .evaluator import evaluate, format_number, parse_operand
from .state import (
    INITIAL_STATE,
    Action,
    AddDigit,
    CalculatorState,
    ChooseOperation,
    Clear,
    DeleteDigit,
    Evaluate,
    Operation,
    Percentage,
    SetResult,
    ToggleSign,
)

__all__ = ["transition", "run"]


def _numeric(text: str) -> float:
    value = parse_operand(text)
    return float("nan") if value is None else value


def _add_digit(state: CalculatorState, action: AddDigit) -> CalculatorState:
    digit = action.digit
    if state.overwrite:
        return replace(state, current_operand=digit, overwrite=False)
    if digit == "0" and state.current_operand == "0":
        return state
    if digit == "." and "." in state.current_operand:
        return state
    if state.current_operand == "0" and digit != ".":
        return replace(state, current_operand=digit)
    return replace(state, current_operand=state.current_operand + digit)


def _choose_operation(state: CalculatorState, action: ChooseOperation) -> CalculatorState:
    if state.current_operand == "" and state.previous_operand == "":
        return state

    # Operator substitution before the right operand is typed
    if state.current_operand == "":
        return replace(state, operation=action.operation)

    if state.previous_operand == "":
        return replace(
            state,
            operation=action.operation,
            previous_operand=state.current_operand,
            current_operand="",
        )

    return replace(
        state,
        previous_operand=evaluate(
            state.previous_operand, state.operation, state.current_operand
        ),
        operation=action.operation,
        current_operand="",
    )


def _clear(state: CalculatorState, action: Clear) -> CalculatorState:
    return INITIAL_STATE


def _delete_digit(state: CalculatorState, action: DeleteDigit) -> CalculatorState:
    # Never delete into a stale result
    if state.overwrite:
        return replace(state, overwrite=False, current_operand="0")
    if state.current_operand == "":
        return state
    if len(state.current_operand) == 1:
        return replace(state, current_operand="0")
    return replace(state, current_operand=state.current_operand[:-1])


def _evaluate(state: CalculatorState, action: Evaluate) -> CalculatorState:
    if not state.can_evaluate():
        return state
    return replace(
        state,
        overwrite=True,
        previous_operand="",
        operation=Operation.NONE,
        current_operand=evaluate(
            state.previous_operand, state.operation, state.current_operand
        ),
    )


def _set_result(state: CalculatorState, action: SetResult) -> CalculatorState:
    return replace(INITIAL_STATE, current_operand=action.value, overwrite=True)


def _percentage(state: CalculatorState, action: Percentage) -> CalculatorState:
    if state.current_operand in ("", "0"):
        return state
    return replace(
        state,
        current_operand=format_number(_numeric(state.current_operand) / 100),
        overwrite=True,
    )


def _toggle_sign(state: CalculatorState, action: ToggleSign) -> CalculatorState:
    if state.current_operand in ("", "0"):
        return state
    return replace(
        state,
        current_operand=format_number(_numeric(state.current_operand) * -1),
    )


_HANDLERS: Dict[Type, Callable[[CalculatorState, Action], CalculatorState]] = {
    AddDigit: _add_digit,
    ChooseOperation: _choose_operation,
    Clear: _clear,
    DeleteDigit: _delete_digit,
    Evaluate: _evaluate,
    SetResult: _set_result,
    Percentage: _percentage,
    ToggleSign: _toggle_sign,
}


def transition(state: CalculatorState, action: Action) -> CalculatorState:
    """Apply one action to a state.

    Args:
        state: Current calculator state.
        action: Action to apply.

    Returns:
        The next state. The same object is returned when the action
        does not apply.
    """
    handler = _HANDLERS.get(type(action))
    if handler is None:
        return state
    return handler(state, action)


def run(actions, state: CalculatorState = INITIAL_STATE) -> CalculatorState:
    """Apply a sequence of actions in order and return the final state."""
    for action in actions:
        state = transition(state, action)
    return state
