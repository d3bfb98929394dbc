"""Keypad events: one immutable value per button press."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from replaycalc.exceptions import InvalidInputError
from replaycalc.validators import validate_digit


class Operation(Enum):
    """Binary operators plus the equals key. Values are the button labels."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "×"
    DIVIDE = "÷"
    EQUAL = "="


class CommandType(Enum):
    """Commands acting on the operand being typed. Values are the button labels."""

    CLEAR = "AC"
    TOGGLE_SIGN = "+/-"
    PERCENT = "%"


@dataclass(frozen=True)
class Digit:
    """A digit key, 0 through 9."""

    value: int

    def __post_init__(self) -> None:
        validate_digit(self.value)

    @property
    def label(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class DecimalPoint:
    """The decimal point key."""

    @property
    def label(self) -> str:
        return "."


@dataclass(frozen=True)
class Operator:
    """An operator key (including equals)."""

    operation: Operation

    def __post_init__(self) -> None:
        if not isinstance(self.operation, Operation):
            raise InvalidInputError(self.operation, "Unknown operation")

    @property
    def label(self) -> str:
        return self.operation.value


@dataclass(frozen=True)
class Command:
    """A command key: clear, toggle sign or percent."""

    command: CommandType

    def __post_init__(self) -> None:
        if not isinstance(self.command, CommandType):
            raise InvalidInputError(self.command, "Unknown command")

    @property
    def label(self) -> str:
        return self.command.value


Event = Digit | DecimalPoint | Operator | Command

KEYPAD: tuple[tuple[Event, ...], ...] = (
    (
        Command(CommandType.CLEAR),
        Command(CommandType.TOGGLE_SIGN),
        Command(CommandType.PERCENT),
        Operator(Operation.DIVIDE),
    ),
    (Digit(7), Digit(8), Digit(9), Operator(Operation.MULTIPLY)),
    (Digit(4), Digit(5), Digit(6), Operator(Operation.SUBTRACT)),
    (Digit(1), Digit(2), Digit(3), Operator(Operation.ADD)),
    (Digit(0), DecimalPoint(), Operator(Operation.EQUAL)),
)

# ASCII spellings accepted alongside the button labels
ALIASES: dict[str, str] = {
    "*": "×",
    "x": "×",
    "/": "÷",
    "C": "AC",
    "c": "AC",
    "±": "+/-",
}

_EVENTS_BY_LABEL: dict[str, Event] = {
    event.label: event for row in KEYPAD for event in row
}

# Longest first so "+/-" wins over "+"
_TOKENS = sorted([*_EVENTS_BY_LABEL, *ALIASES], key=len, reverse=True)


def event_for_label(label: str) -> Event:
    """
    Resolve a button label (or one of its ASCII aliases) to its event.

    Raises:
        InvalidInputError: If no key carries that label
    """
    event = _EVENTS_BY_LABEL.get(ALIASES.get(label, label))
    if event is None:
        raise InvalidInputError(label, "Unknown key")
    return event


def parse_keys(text: str) -> list[Event]:
    """
    Split a string of key labels into events, ignoring whitespace.

    Example:
        >>> [event.label for event in parse_keys("12 + 8 =")]
        ['1', '2', '+', '8', '=']

    Raises:
        InvalidInputError: If part of the text matches no key
    """
    events: list[Event] = []
    position = 0
    while position < len(text):
        if text[position].isspace():
            position += 1
            continue
        for token in _TOKENS:
            if text.startswith(token, position):
                events.append(event_for_label(token))
                position += len(token)
                break
        else:
            raise InvalidInputError(text[position:], "Unknown key")
    return events
