"""
Calculator with replayable history and time-travel editing.

Every key press is recorded as an event, the display is a pure fold of
the brain over the committed events, and the history can be scrubbed back
to any earlier position. New input after a scrub branches off from there.
"""

from replaycalc.brain import (
    ERROR_DISPLAY,
    INITIAL_STATE,
    CalculatorState,
    ErrorState,
    LeftOnly,
    LeftOperatorPending,
    LeftOperatorRight,
    apply,
    fold,
    output,
)
from replaycalc.core import HistoryController, Snapshot
from replaycalc.events import (
    KEYPAD,
    Command,
    CommandType,
    DecimalPoint,
    Digit,
    Event,
    Operation,
    Operator,
    event_for_label,
    parse_keys,
)
from replaycalc.exceptions import (
    CalculationOverflowError,
    CalculatorError,
    DivisionByZeroError,
    InvalidInputError,
    OutOfRangeError,
)

__all__ = [
    "ERROR_DISPLAY",
    "INITIAL_STATE",
    "KEYPAD",
    "CalculationOverflowError",
    "CalculatorError",
    "CalculatorState",
    "Command",
    "CommandType",
    "DecimalPoint",
    "Digit",
    "DivisionByZeroError",
    "ErrorState",
    "Event",
    "HistoryController",
    "InvalidInputError",
    "LeftOnly",
    "LeftOperatorPending",
    "LeftOperatorRight",
    "Operation",
    "Operator",
    "OutOfRangeError",
    "Snapshot",
    "apply",
    "event_for_label",
    "fold",
    "output",
    "parse_keys",
]

__version__ = "0.1.0"
