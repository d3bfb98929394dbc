"""
The calculator brain: a pure fold of keypad events into calculator state.

``apply`` never raises. Arithmetic failures (division by zero, results that
leave the float range) become ``ErrorState``, which absorbs every event
except clear.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from functools import reduce

from replaycalc.events import (
    Command,
    CommandType,
    DecimalPoint,
    Digit,
    Event,
    Operation,
    Operator,
)
from replaycalc.exceptions import CalculationOverflowError, CalculatorError
from replaycalc.operations import (
    DISPLAY_FRACTION_DIGITS,
    ERROR_DISPLAY,
    add,
    canonical,
    divide,
    format_display,
    multiply,
    parse_operand,
    percent,
    subtract,
)


@dataclass(frozen=True)
class LeftOnly:
    """Only the left operand exists (typed, or the result of ``=``)."""

    text: str


@dataclass(frozen=True)
class LeftOperatorPending:
    """Left operand and operator chosen; right operand not started."""

    left: str
    operator: Operation


@dataclass(frozen=True)
class LeftOperatorRight:
    """Left operand, operator and the right operand being typed."""

    left: str
    operator: Operation
    right: str


@dataclass(frozen=True)
class ErrorState:
    """Absorbing state after an invalid calculation."""


CalculatorState = LeftOnly | LeftOperatorPending | LeftOperatorRight | ErrorState

INITIAL_STATE: CalculatorState = LeftOnly("0")

_ARITHMETIC: dict[Operation, Callable[[float, float], float]] = {
    Operation.ADD: add,
    Operation.SUBTRACT: subtract,
    Operation.MULTIPLY: multiply,
    Operation.DIVIDE: divide,
}


def _append_digit(text: str, digit: int) -> str:
    typed = str(digit) if text == "0" else f"{text}{digit}"
    try:
        parse_operand(typed)
    except CalculationOverflowError:
        # the keypad ignores a digit the operand cannot hold
        return text
    return typed


def _append_point(text: str) -> str:
    return text if "." in text else f"{text}."


def _calculate(left: str, operator: Operation, right: str) -> str:
    result = _ARITHMETIC[operator](parse_operand(left), parse_operand(right))
    return canonical(result)


def _toggle_sign(text: str) -> str:
    if text.startswith("-"):
        return text[1:]
    if text == "0":
        return text
    return f"-{text}"


def _transform_operand(text: str, command: CommandType) -> str:
    if command is CommandType.TOGGLE_SIGN:
        return _toggle_sign(text)
    return canonical(percent(parse_operand(text)))


def _apply_digit(state: CalculatorState, digit: int) -> CalculatorState:
    if isinstance(state, LeftOnly):
        return LeftOnly(_append_digit(state.text, digit))
    if isinstance(state, LeftOperatorPending):
        return LeftOperatorRight(state.left, state.operator, str(digit))
    if isinstance(state, LeftOperatorRight):
        return replace(state, right=_append_digit(state.right, digit))
    return state


def _apply_point(state: CalculatorState) -> CalculatorState:
    if isinstance(state, LeftOnly):
        return LeftOnly(_append_point(state.text))
    if isinstance(state, LeftOperatorPending):
        return LeftOperatorRight(state.left, state.operator, "0.")
    if isinstance(state, LeftOperatorRight):
        return replace(state, right=_append_point(state.right))
    return state


def _apply_operator(state: CalculatorState, operation: Operation) -> CalculatorState:
    if isinstance(state, LeftOperatorRight):
        result = _calculate(state.left, state.operator, state.right)
        if operation is Operation.EQUAL:
            return LeftOnly(result)
        return LeftOperatorPending(result, operation)
    if operation is Operation.EQUAL:
        return state
    if isinstance(state, LeftOnly):
        return LeftOperatorPending(state.text, operation)
    if isinstance(state, LeftOperatorPending):
        # last operator wins, nothing is computed
        return replace(state, operator=operation)
    return state


def _apply_command(state: CalculatorState, command: CommandType) -> CalculatorState:
    if command is CommandType.CLEAR:
        return INITIAL_STATE
    if isinstance(state, LeftOnly):
        return LeftOnly(_transform_operand(state.text, command))
    if isinstance(state, LeftOperatorPending):
        return replace(state, left=_transform_operand(state.left, command))
    if isinstance(state, LeftOperatorRight):
        return replace(state, right=_transform_operand(state.right, command))
    return state


def apply(state: CalculatorState, event: Event) -> CalculatorState:
    """
    Compute the state that follows ``state`` once ``event`` is pressed.

    Total and pure: every (state, event) pair yields a state, and invalid
    arithmetic yields ``ErrorState`` instead of raising.

    Args:
        state: Current calculator state
        event: The key that was pressed

    Returns:
        The next calculator state
    """
    if isinstance(state, ErrorState):
        if isinstance(event, Command) and event.command is CommandType.CLEAR:
            return INITIAL_STATE
        return state

    try:
        if isinstance(event, Digit):
            return _apply_digit(state, event.value)
        if isinstance(event, DecimalPoint):
            return _apply_point(state)
        if isinstance(event, Operator):
            return _apply_operator(state, event.operation)
        if isinstance(event, Command):
            return _apply_command(state, event.command)
    except CalculatorError:
        return ErrorState()

    raise TypeError(f"Not a keypad event: {event!r}")


def fold(
    events: Iterable[Event], initial: CalculatorState = INITIAL_STATE
) -> CalculatorState:
    """Replay ``events`` in order starting from ``initial``."""
    return reduce(apply, events, initial)


def active_operand(state: CalculatorState) -> str | None:
    """Text of the operand the display shows, or None in the error state."""
    if isinstance(state, LeftOnly):
        return state.text
    if isinstance(state, LeftOperatorPending):
        return state.left
    if isinstance(state, LeftOperatorRight):
        return state.right
    return None


def output(
    state: CalculatorState, max_fraction_digits: int = DISPLAY_FRACTION_DIGITS
) -> str:
    """Display string for ``state``."""
    text = active_operand(state)
    if text is None:
        return ERROR_DISPLAY
    return format_display(parse_operand(text), max_fraction_digits)
