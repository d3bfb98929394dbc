"""Arithmetic on operand values and conversion between floats and operand text."""

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext

from replaycalc.exceptions import (
    CalculationOverflowError,
    DivisionByZeroError,
    InvalidInputError,
)

# Fraction digits shown on the display
DISPLAY_FRACTION_DIGITS = 8

ERROR_DISPLAY = "Error"

# Integer digits of the largest finite float
_MAX_FLOAT_DIGITS = 309


def _checked(result: float, operation: str, *operands: float) -> float:
    if not math.isfinite(result):
        raise CalculationOverflowError(operation, *operands)
    return result


def add(a: float, b: float) -> float:
    """
    Add two operands.

    Raises:
        CalculationOverflowError: If the sum is not finite
    """
    return _checked(a + b, "addition", a, b)


def subtract(a: float, b: float) -> float:
    """
    Subtract b from a.

    Raises:
        CalculationOverflowError: If the difference is not finite
    """
    return _checked(a - b, "subtraction", a, b)


def multiply(a: float, b: float) -> float:
    """
    Multiply two operands.

    Raises:
        CalculationOverflowError: If the product is not finite
    """
    return _checked(a * b, "multiplication", a, b)


def divide(a: float, b: float) -> float:
    """
    Divide a by b.

    Properties:
        - Identity: divide(a, 1) == a
        - Self-division: divide(a, a) == 1 (for a != 0)

    Args:
        a: Dividend
        b: Divisor

    Returns:
        Quotient of a and b

    Raises:
        DivisionByZeroError: If b is zero
        CalculationOverflowError: If the quotient is not finite
    """
    if b == 0:
        raise DivisionByZeroError(a)

    return _checked(a / b, "division", a, b)


def percent(value: float) -> float:
    """Express an operand as a fraction of one hundred."""
    return _checked(value / 100, "percent", value)


def parse_operand(text: str) -> float:
    """
    Parse operand text typed on the keypad (or produced by ``canonical``).

    Raises:
        InvalidInputError: If the text is not a number
        CalculationOverflowError: If the number does not fit in a float
    """
    try:
        value = float(text)
    except ValueError as e:
        raise InvalidInputError(text, "Operand text is not a number") from e

    return _checked(value, "parsing", value)


def _trim(text: str) -> str:
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        return "0"
    return text


def canonical(value: float) -> str:
    """
    Shortest positional text that parses back to ``value``.

    Results are stored as operand text and may be typed onto, so the text
    never uses an exponent and never ends in a bare decimal point.

    Examples:
        >>> canonical(20.0)
        '20'
        >>> canonical(0.1 + 0.2)
        '0.30000000000000004'
        >>> canonical(1e-7)
        '0.0000001'

    Raises:
        CalculationOverflowError: If value is not finite
    """
    _checked(value, "formatting", value)
    return _trim(format(Decimal(repr(value)), "f"))


def format_display(
    value: float, max_fraction_digits: int = DISPLAY_FRACTION_DIGITS
) -> str:
    """
    Display text for an operand value.

    Rounds the shortest representation of ``value`` to
    ``max_fraction_digits`` places and trims trailing zeros and a trailing
    decimal point, so ``12.`` shows as ``12``, ``0.1 + 0.2`` as ``0.3`` and
    ``1e23`` as ``100000000000000000000000``. Non-finite values show
    ``ERROR_DISPLAY``.
    """
    if not math.isfinite(value):
        return ERROR_DISPLAY

    with localcontext() as ctx:
        # wide enough for every finite float at any display precision
        ctx.prec = _MAX_FLOAT_DIGITS + max_fraction_digits
        ctx.rounding = ROUND_HALF_UP
        rounded = round(Decimal(repr(value)), max_fraction_digits)
    return _trim(format(rounded, "f"))
