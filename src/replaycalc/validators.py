"""Input validation for digits and history indices."""

import math

from replaycalc.exceptions import InvalidInputError, OutOfRangeError


def _require_int(value: object) -> int:
    # bool is an int subclass but never a meaningful digit or index
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(value, f"Expected int, got {type(value).__name__}")
    return value


def validate_digit(value: int) -> int:
    """
    Validate that a value is a single decimal digit.

    Args:
        value: The value to validate

    Returns:
        The validated digit

    Raises:
        InvalidInputError: If value is not an int in 0..9
    """
    _require_int(value)

    if not 0 <= value <= 9:
        raise InvalidInputError(value, "Digit must be between 0 and 9")

    return value


def validate_index(index: int, total: int) -> int:
    """
    Validate that a scrub index lies within ``[0, total]``.

    Args:
        index: Proposed cursor position
        total: Number of events in the log

    Returns:
        The validated index

    Raises:
        InvalidInputError: If index is not an int
        OutOfRangeError: If index is negative or past the end of the log
    """
    _require_int(index)

    if index < 0 or index > total:
        raise OutOfRangeError(index, 0, total)

    return index


def round_position(position: float) -> int:
    """Round a slider position to the nearest whole event index (halves up)."""
    if isinstance(position, bool) or not isinstance(position, (int, float)):
        raise InvalidInputError(
            position, f"Expected number, got {type(position).__name__}"
        )
    if not math.isfinite(position):
        raise InvalidInputError(position, "Slider position must be finite")

    return math.floor(position + 0.5)
