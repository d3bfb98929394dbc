"""Unit tests for the brain's state transitions."""

import pytest

from replaycalc import (
    ERROR_DISPLAY,
    INITIAL_STATE,
    Command,
    CommandType,
    DecimalPoint,
    Digit,
    ErrorState,
    LeftOnly,
    LeftOperatorPending,
    LeftOperatorRight,
    Operation,
    Operator,
    apply,
    fold,
    output,
    parse_keys,
)

CLEAR = Command(CommandType.CLEAR)
TOGGLE = Command(CommandType.TOGGLE_SIGN)
PERCENT = Command(CommandType.PERCENT)
EQUAL = Operator(Operation.EQUAL)


class TestDigits:
    """Tests for digit entry."""

    def test_initial_state(self):
        assert INITIAL_STATE == LeftOnly("0")
        assert output(INITIAL_STATE) == "0"

    def test_replaces_lone_zero(self):
        assert apply(LeftOnly("0"), Digit(7)) == LeftOnly("7")

    def test_no_leading_zeros(self, press):
        assert press("007") == LeftOnly("7")

    def test_appends(self, press):
        assert press("123") == LeftOnly("123")

    def test_starts_right_operand(self):
        state = LeftOperatorPending("12", Operation.ADD)
        assert apply(state, Digit(0)) == LeftOperatorRight("12", Operation.ADD, "0")

    def test_appends_to_right_operand(self, press):
        assert press("12+80") == LeftOperatorRight("12", Operation.ADD, "80")

    def test_appends_to_result(self, press):
        assert press("2+3=4") == LeftOnly("54")

    def test_long_operand_displays_exactly(self, press):
        assert output(press("1" + "0" * 23)) == "100000000000000000000000"

    def test_digit_that_would_overflow_is_ignored(self, press):
        state = press("9" * 400)
        assert state == LeftOnly("9" * 308)
        assert output(state) != "inf"
        assert output(state) == "1" + "0" * 308

    def test_right_operand_overflow_is_ignored(self, press):
        state = press("1+" + "9" * 400)
        assert state == LeftOperatorRight("1", Operation.ADD, "9" * 308)


class TestDecimalPoint:
    """Tests for the decimal point key."""

    def test_appends_point(self, press):
        assert press("1.5") == LeftOnly("1.5")

    def test_point_on_zero(self, press):
        assert press(".5") == LeftOnly("0.5")

    def test_second_point_ignored(self, press):
        assert press("1.2.3") == LeftOnly("1.23")

    def test_starts_right_operand(self, press):
        assert press("3×.") == LeftOperatorRight("3", Operation.MULTIPLY, "0.")

    def test_display_hides_trailing_point(self, press):
        assert output(press("12.")) == "12"


class TestOperators:
    """Tests for operator keys."""

    def test_sets_pending_operator(self, press):
        assert press("12+") == LeftOperatorPending("12", Operation.ADD)

    def test_last_operator_wins(self, press):
        assert press("12+-×") == LeftOperatorPending("12", Operation.MULTIPLY)

    def test_chained_operator_computes(self, press):
        assert press("2+3×") == LeftOperatorPending("5", Operation.MULTIPLY)

    def test_equal_computes(self, press):
        assert press("12+8=") == LeftOnly("20")

    @pytest.mark.parametrize(
        ("keys", "expected"),
        [
            ("9-12=", "-3"),
            ("6×7=", "42"),
            ("7÷2=", "3.5"),
            ("1÷3=", "0.33333333"),
            ("0.1+0.2=", "0.3"),
            ("2+3×4=", "20"),
        ],
    )
    def test_results(self, press, keys, expected):
        assert output(press(keys)) == expected

    def test_equal_without_right_operand_is_noop(self, press):
        state = press("12+")
        assert apply(state, EQUAL) == state

    def test_equal_on_left_only_is_noop(self):
        assert apply(LeftOnly("12"), EQUAL) == LeftOnly("12")

    def test_division_by_zero(self, press):
        assert press("5÷0=") == ErrorState()

    def test_chained_division_by_zero(self, press):
        assert press("5÷0+") == ErrorState()

    def test_large_product(self, press):
        assert output(press("99999999×99999999×99999999=")) == "999999970000000300000000"

    def test_overflow_is_error(self):
        state = LeftOperatorRight("1" + "0" * 300, Operation.MULTIPLY, "1" + "0" * 300)
        assert apply(state, EQUAL) == ErrorState()


class TestCommands:
    """Tests for clear, toggle sign and percent."""

    @pytest.mark.parametrize("keys", ["", "12", "12+", "12+8", "5÷0="])
    def test_clear_always_resets(self, press, keys):
        assert apply(press(keys), CLEAR) == INITIAL_STATE

    def test_toggle_left(self, press):
        assert press("12+/-") == LeftOnly("-12")

    def test_toggle_twice(self, press):
        assert press("12+/-+/-") == LeftOnly("12")

    def test_toggle_zero_stays_zero(self):
        assert apply(INITIAL_STATE, TOGGLE) == LeftOnly("0")

    def test_toggle_keeps_trailing_point(self, press):
        assert press("0.+/-") == LeftOnly("-0.")
        assert press("0.+/-5") == LeftOnly("-0.5")
        assert output(press("0.+/-5")) == "-0.5"

    def test_toggle_then_fraction_digits(self, press):
        assert press("12.+/-5") == LeftOnly("-12.5")

    def test_toggle_keeps_typed_zeros(self, press):
        assert press("1.50+/-") == LeftOnly("-1.50")

    def test_toggle_result(self, press):
        assert press("2-5=+/-") == LeftOnly("3")

    def test_toggle_pending_left(self, press):
        state = apply(press("12+"), TOGGLE)
        assert state == LeftOperatorPending("-12", Operation.ADD)

    def test_toggle_right(self, press):
        state = apply(press("12+8"), TOGGLE)
        assert state == LeftOperatorRight("12", Operation.ADD, "-8")
        assert output(apply(state, EQUAL)) == "4"

    def test_percent_left(self, press):
        assert apply(press("50"), PERCENT) == LeftOnly("0.5")

    def test_percent_right(self, press):
        state = apply(press("200+5"), PERCENT)
        assert state == LeftOperatorRight("200", Operation.ADD, "0.05")

    def test_percent_pending_left(self, press):
        assert apply(press("5×"), PERCENT) == LeftOperatorPending("0.05", Operation.MULTIPLY)

    def test_digits_after_percent(self, press):
        assert apply(apply(press("5"), PERCENT), Digit(1)) == LeftOnly("0.051")


class TestErrorState:
    """Tests for the absorbing error state."""

    @pytest.mark.parametrize(
        "event",
        [Digit(1), DecimalPoint(), Operator(Operation.ADD), EQUAL, TOGGLE, PERCENT],
    )
    def test_absorbs_everything_but_clear(self, event):
        assert apply(ErrorState(), event) == ErrorState()

    def test_output(self):
        assert output(ErrorState()) == ERROR_DISPLAY == "Error"

    def test_recovers_on_clear(self, press):
        assert output(press("5÷0=AC7")) == "7"


class TestFoldAndOutput:
    """Tests for fold and output."""

    def test_fold_empty(self):
        assert fold([]) == INITIAL_STATE

    def test_fold_from_custom_state(self):
        assert fold(parse_keys("+1="), LeftOnly("41")) == LeftOnly("42")

    def test_output_shows_left_while_pending(self, press):
        assert output(press("12+")) == "12"

    def test_output_shows_right_operand(self, press):
        assert output(press("12+9")) == "9"

    def test_output_precision(self, press):
        assert output(press("1÷3="), max_fraction_digits=3) == "0.333"

    def test_rejects_non_events(self):
        with pytest.raises(TypeError):
            apply(INITIAL_STATE, "1")
