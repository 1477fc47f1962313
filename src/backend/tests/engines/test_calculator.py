"""
Tests for the keystroke calculator engine.
"""

import math

import pytest

from core.exceptions import DomainError, UnknownKeyError
from engines.calculator import (
    BinaryOperator,
    Calculator,
    ScientificFunction,
    apply_operator,
    evaluate_function,
    factorial,
    format_number,
)


def run(*keys: str, **kwargs) -> Calculator:
    return Calculator(**kwargs).run(keys)


@pytest.mark.unit
class TestArithmetic:
    """Binary operations applied in keystroke order."""

    def test_simple_addition(self) -> None:
        calc = run("7", "+", "3", "=")

        assert calc.display == "10"
        assert calc.history == ["7 + 3 = 10"]

    def test_no_operator_precedence(self) -> None:
        calc = run("2", "+", "3", "*", "4", "=")

        assert calc.display == "20"
        assert calc.history == ["5 * 4 = 20", "2 + 3 = 5"]

    def test_chained_operator_shows_intermediate_result(self) -> None:
        calc = run("2", "+", "3", "*")

        assert calc.display == "5"
        assert calc.accumulator == 5
        assert calc.pending_operation is BinaryOperator.MULTIPLY
        assert calc.awaiting_new_operand is True

    def test_division_by_zero_yields_zero(self) -> None:
        calc = run("5", "/", "0", "=")

        assert calc.display == "0"
        assert calc.history == ["5 / 0 = 0"]

    def test_decimal_result(self) -> None:
        assert run("1", "/", "4", "=").display == "0.25"

    def test_modulo_follows_dividend_sign(self) -> None:
        assert apply_operator(BinaryOperator.MODULO, -7, 3) == -1
        assert apply_operator(BinaryOperator.MODULO, 7, -3) == 1
        assert run("7", "%", "3", "=").display == "1"

    def test_modulo_by_zero_is_nan(self) -> None:
        assert math.isnan(apply_operator(BinaryOperator.MODULO, 5, 0))

    def test_power(self) -> None:
        assert run("2", "^", "1", "0", "=").display == "1024"

    def test_power_edge_cases(self) -> None:
        assert apply_operator(BinaryOperator.POWER, 0, -1) == math.inf
        assert math.isnan(apply_operator(BinaryOperator.POWER, -8, 0.5))
        assert apply_operator(BinaryOperator.POWER, 10, 400) == math.inf
        assert apply_operator(BinaryOperator.POWER, -10, 401) == -math.inf

    def test_equals_without_pending_operation_is_noop(self) -> None:
        calc = run("4", "2", "=")

        assert calc.display == "42"
        assert calc.history == []

    def test_equals_returns_to_idle(self) -> None:
        calc = run("1", "+", "1", "=")

        assert calc.accumulator is None
        assert calc.pending_operation is None
        assert calc.awaiting_new_operand is True

    def test_digit_after_equals_starts_new_number(self) -> None:
        assert run("1", "+", "1", "=", "9").display == "9"

    def test_repeated_operator_uses_display_as_operand(self) -> None:
        # Pressing "+" twice commits 3 + 3
        calc = run("3", "+", "+")
        assert calc.display == "6"
        assert calc.history == ["3 + 3 = 6"]


@pytest.mark.unit
class TestEntry:
    """Digit, decimal point, backspace and sign entry."""

    def test_leading_zero_replaced(self) -> None:
        assert run("0", "0", "7").display == "7"

    def test_single_decimal_point(self) -> None:
        assert run("1", ".", ".", "5", ".").display == "1.5"

    def test_decimal_on_fresh_operand(self) -> None:
        assert run("3", "+", ".", "5").display == "0.5"

    def test_decimal_then_operation(self) -> None:
        assert run("1", ".", "5", "+", "1", "=").display == "2.5"

    def test_backspace_to_zero(self) -> None:
        calc = run("5", "backspace")
        assert calc.display == "0"

        calc.backspace()
        assert calc.display == "0"

    def test_backspace_removes_last_character(self) -> None:
        assert run("1", "2", "3", "backspace").display == "12"

    def test_backspace_leaving_lone_minus_resets(self) -> None:
        assert run("5", "+/-", "backspace").display == "0"

    def test_toggle_sign(self) -> None:
        calc = run("5", "+/-")
        assert calc.display == "-5"

        calc.toggle_sign()
        assert calc.display == "5"

    def test_clear_entry_keeps_pending_operation(self) -> None:
        calc = run("8", "-", "9", "CE", "3", "=")
        assert calc.display == "5"

    def test_clear_keeps_memory_and_history(self) -> None:
        calc = run("2", "+", "2", "=", "M+", "C")

        assert calc.display == "0"
        assert calc.pending_operation is None
        assert calc.memory == 4
        assert calc.history == ["2 + 2 = 4"]


@pytest.mark.unit
class TestScientific:
    """Unary functions and constants."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0, 1), (1, 1), (5, 120), (5.9, 120)],
    )
    def test_factorial(self, value: float, expected: int) -> None:
        assert factorial(value) == expected

    def test_factorial_upper_bound_is_finite(self) -> None:
        assert math.isfinite(factorial(170))

    def test_factorial_overflow_is_infinite(self) -> None:
        assert factorial(171) == math.inf

    def test_factorial_truncates_before_overflow_check(self) -> None:
        assert factorial(170.5) == float(math.factorial(170))

    def test_factorial_of_infinity(self) -> None:
        assert factorial(math.inf) == math.inf
        with pytest.raises(DomainError):
            factorial(-math.inf)

    def test_factorial_key_on_fraction_just_above_limit(self) -> None:
        calc = run("1", "7", "0", ".", "5", "fact")

        assert calc.display != "Infinity"
        assert float(calc.display) == float(math.factorial(170))
        assert calc.history[0].startswith("fact(170.5) = ")

    def test_factorial_of_negative_raises(self) -> None:
        with pytest.raises(DomainError):
            factorial(-3)

    def test_factorial_of_small_negative_fraction_truncates_to_zero(self) -> None:
        assert factorial(-0.5) == 1

    def test_factorial_key_leaves_state_on_domain_error(self) -> None:
        calc = run("3", "+/-")

        with pytest.raises(DomainError):
            calc.press("fact")

        assert calc.display == "-3"
        assert calc.history == []

    def test_factorial_key_records_history(self) -> None:
        calc = run("5", "fact")

        assert calc.display == "120"
        assert calc.history == ["fact(5) = 120"]

    def test_trig_uses_degrees(self) -> None:
        assert evaluate_function(ScientificFunction.SIN, 90) == pytest.approx(1)
        assert evaluate_function(ScientificFunction.COS, 180) == pytest.approx(-1)
        assert evaluate_function(ScientificFunction.TAN, 45) == pytest.approx(1)

    def test_sqrt_and_square(self) -> None:
        assert run("1", "6", "sqrt").display == "4"
        assert run("1", "2", "square").display == "144"

    def test_sqrt_of_negative_shows_nan(self) -> None:
        assert run("4", "+/-", "sqrt").display == "NaN"

    def test_log_of_zero_shows_negative_infinity(self) -> None:
        calc = run("log")

        assert calc.display == "-Infinity"
        assert calc.history == ["log(0) = -Infinity"]

    def test_logarithms(self) -> None:
        assert run("1", "0", "0", "0", "log").display == "3"
        assert evaluate_function(ScientificFunction.LN, math.e) == pytest.approx(1)

    def test_reciprocal(self) -> None:
        assert run("4", "1/x").display == "0.25"
        assert run("1/x").display == "Infinity"

    def test_exp_overflow(self) -> None:
        assert evaluate_function(ScientificFunction.EXP, 1000) == math.inf

    def test_constants_ignore_display(self) -> None:
        assert run("9", "pi").display == format_number(math.pi)
        assert run("9", "e").display == format_number(math.e)

    def test_function_keeps_pending_operation(self) -> None:
        calc = run("2", "+", "9", "sqrt", "=")

        assert calc.display == "5"
        assert calc.history[0] == "2 + 3 = 5"

    def test_digit_after_non_finite_starts_fresh(self) -> None:
        assert run("log", "7").display == "7"
        assert run("log", ".").display == "0."

    def test_non_finite_carries_through_arithmetic(self) -> None:
        assert run("log", "+", "1", "=").display == "-Infinity"


@pytest.mark.unit
class TestMemoryAndHistory:
    """Memory register and bounded history."""

    def test_memory_add_subtract_recall(self) -> None:
        calc = run("5", "M+", "C", "2", "M-", "C", "MR")

        assert calc.memory == 3
        assert calc.display == "3"

    def test_memory_clear(self) -> None:
        calc = run("5", "M+", "MC", "MR")
        assert calc.display == "0"

    def test_initial_memory(self) -> None:
        assert run("MR", memory=2.5).display == "2.5"

    def test_history_bounded_most_recent_first(self) -> None:
        calc = Calculator()
        for _ in range(12):
            calc.run(["1", "+", "1", "="])

        assert len(calc.history) == 10
        assert all(entry == "1 + 1 = 2" for entry in calc.history)

    def test_history_order(self) -> None:
        calc = run("1", "+", "1", "=", "3", "*", "3", "=")
        assert calc.history == ["3 * 3 = 9", "1 + 1 = 2"]

    def test_clear_history(self) -> None:
        calc = run("1", "+", "1", "=", "clear-history")
        assert calc.history == []

    def test_custom_history_limit(self) -> None:
        calc = Calculator(history_limit=2)
        for digit in "123":
            calc.run([digit, "+", "0", "="])

        assert calc.history == ["3 + 0 = 3", "2 + 0 = 2"]


@pytest.mark.unit
class TestKeys:
    """Keystroke dispatch."""

    def test_unknown_key_rejected(self) -> None:
        calc = Calculator()

        with pytest.raises(UnknownKeyError) as exc_info:
            calc.press("sinh")

        assert exc_info.value.key == "sinh"
        assert "sinh" in str(exc_info.value)

    def test_multi_digit_string_is_not_a_digit(self) -> None:
        with pytest.raises(UnknownKeyError):
            Calculator().input_digit("12")


@pytest.mark.unit
class TestFormatting:
    """Display formatting of floats."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (10.0, "10"),
            (-3.0, "-3"),
            (0.1 + 0.2, "0.30000000000000004"),
            (2.5, "2.5"),
            (1e21, "1e+21"),
            (math.inf, "Infinity"),
            (-math.inf, "-Infinity"),
            (math.nan, "NaN"),
        ],
    )
    def test_format_number(self, value: float, expected: str) -> None:
        assert format_number(value) == expected

    def test_non_finite_tokens_parse_back(self) -> None:
        for token in ("Infinity", "-Infinity"):
            assert format_number(float(token)) == token
        assert math.isnan(float("NaN"))
