"""
Tests for the arithmetic evaluator.
"""

import math

import pytest
from unittest.mock import patch

from badcalc.errors import InvalidInput
from badcalc.evaluator import apply, compute, is_undefined, operator_for_code


class TestOperatorCodes:
    """Tests for menu code resolution."""

    @pytest.mark.parametrize("code,symbol", [
        ("1", "+"), ("2", "-"), ("3", "*"), ("4", "/"), ("5", "^"), ("6", "%"),
    ])
    def test_known_codes(self, code, symbol):
        assert operator_for_code(code) == symbol

    @pytest.mark.parametrize("code", ["8", "9", "", "x", " 1"])
    def test_unknown_codes_give_empty_operator(self, code):
        assert operator_for_code(code) == ""


class TestCompute:
    """Tests for compute."""

    def test_basic_operators(self):
        """Should do standard float arithmetic."""
        assert compute("5", "3", "+") == 8.0
        assert compute("5", "3", "-") == 2.0
        assert compute("5", "3", "*") == 15.0
        assert compute("6", "4", "/") == 1.5

    def test_comma_operands(self):
        """Should parse comma decimals before computing."""
        assert compute("3,5", "2", "*") == 7.0

    @pytest.mark.parametrize("operator", ["/", "%"])
    def test_zero_divisor_is_undefined(self, operator):
        """Division and modulo by zero should return the sentinel."""
        assert is_undefined(compute("5", "0", operator))

    @pytest.mark.parametrize("operator", ["/", "%"])
    def test_negative_zero_divisor_is_undefined(self, operator):
        assert is_undefined(compute("5", "-0", operator))

    def test_remainder_follows_dividend_sign(self):
        """Remainder should take the sign of the dividend."""
        assert compute("-7", "3", "%") == -1.0
        assert compute("7", "-3", "%") == 1.0
        assert compute("7,5", "2", "%") == 1.5

    @pytest.mark.parametrize("a,b,expected", [
        ("2", "3", 8.0),
        ("2", "0", 1.0),
        ("2", "-1", 1.0),
        ("2", "-3", 1.0),
        ("2", "2,9", 4.0),
        ("2", "0,5", 1.0),
        ("-3", "3", -27.0),
        ("1,5", "2", 2.25),
    ])
    def test_power_uses_truncated_integer_exponent(self, a, b, expected):
        """Exponent is truncated; exponents <= 0 give 1.0."""
        assert compute(a, b, "^") == expected

    def test_power_huge_exponent_overflows(self):
        """Large exponents should finish and saturate to infinity."""
        assert compute("2", "1e300", "^") == math.inf

    def test_power_underflows_to_zero(self):
        assert compute("0,5", "5000", "^") == 0.0

    def test_power_keeps_sign_parity_after_overflow(self):
        """A negative base keeps alternating sign past overflow."""
        assert compute("-2", "5000", "^") == math.inf
        assert compute("-2", "5001", "^") == -math.inf

    def test_power_of_minus_one(self):
        assert compute("-1", "1000000001", "^") == -1.0
        assert compute("-1", "1000000000", "^") == 1.0

    def test_power_exponent_saturates_to_32_bit_range(self):
        """Exponents past 2**31 - 1 behave as 2**31 - 1, which is odd."""
        assert compute("-1", "1e10", "^") == -1.0
        assert compute("-2", "1e10", "^") == -math.inf
        assert compute("-1", "2147483648", "^") == compute("-1", "2147483647", "^")

    def test_power_very_negative_exponent(self):
        assert compute("2", "-1e10", "^") == 1.0

    @pytest.mark.parametrize("operator", ["", "?", "**", "sqrt"])
    def test_unknown_operator_returns_zero(self, operator):
        """Unrecognized operators silently yield 0.0."""
        assert compute("5", "3", operator) == 0.0

    def test_overflow_is_not_undefined(self):
        """Float overflow in multiplication gives infinity, not NaN."""
        assert compute("1e308", "10", "*") == math.inf

    def test_parse_failure_propagates(self):
        """Operand errors should abort before any arithmetic."""
        with pytest.raises(InvalidInput):
            compute("abc", "1", "+")
        with pytest.raises(InvalidInput):
            compute("1", "", "+")

    def test_parse_failure_even_for_unknown_operator(self):
        with pytest.raises(InvalidInput):
            compute("", "", "")


class TestApply:
    """Tests for apply."""

    def test_arithmetic_error_maps_to_undefined(self):
        """ArithmeticError from an operation should become NaN."""
        def overflowing(a, b):
            raise OverflowError("too big")

        with patch.dict("badcalc.evaluator.OPERATIONS", {"+": overflowing}):
            assert is_undefined(apply(1.0, 2.0, "+"))

    def test_other_errors_propagate(self):
        def broken(a, b):
            raise RuntimeError("boom")

        with patch.dict("badcalc.evaluator.OPERATIONS", {"+": broken}):
            with pytest.raises(RuntimeError):
                apply(1.0, 2.0, "+")


class TestIsUndefined:
    """Tests for the sentinel check."""

    def test_nan(self):
        assert is_undefined(math.nan)

    def test_ordinary_values(self):
        assert not is_undefined(0.0)
        assert not is_undefined(math.inf)
