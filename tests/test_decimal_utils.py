"""Tests for decimal_utils module."""

import math
from decimal import ROUND_HALF_EVEN, Decimal, DivisionByZero

import pytest

from number_lab.numerics.decimal_utils import (
    CONTEXT,
    DECIMAL_PRECISION,
    FLOAT_EXP_LIMIT,
    can_be_decimal,
    can_be_float,
    max_pow10,
    min_pow10,
    normal_pow10,
    pow10,
    process_error_digits,
    round_places,
    round_to_int,
    scale,
    to_float,
)


class TestContext:
    """Tests for the shared fixed-point context."""

    def test_precision_and_rounding(self) -> None:
        """28 digits, ties to even."""
        assert CONTEXT.prec == DECIMAL_PRECISION == 28
        assert CONTEXT.rounding == ROUND_HALF_EVEN

    def test_division_by_zero_traps(self) -> None:
        """Division by zero must raise, not return infinity."""
        with pytest.raises(DivisionByZero):
            CONTEXT.divide(Decimal(1), Decimal(0))

    def test_float_limit(self) -> None:
        """Largest binary64 value is about 1.8e308."""
        assert FLOAT_EXP_LIMIT == 308


class TestRanges:
    """Tests for can_be_decimal and can_be_float."""

    @pytest.mark.parametrize("exp,expected", [(0, True), (27, True), (-27, True), (28, False), (-28, False)])
    def test_can_be_decimal(self, exp: int, expected: bool) -> None:
        """Fixed-point range is the open interval (-28, 28)."""
        assert can_be_decimal(exp) is expected

    @pytest.mark.parametrize("exp,expected", [(0, True), (307, True), (308, False), (-308, False)])
    def test_can_be_float(self, exp: int, expected: bool) -> None:
        """Float range is the open interval (-308, 308)."""
        assert can_be_float(exp) is expected


class TestDigitPositions:
    """Tests for normal_pow10, max_pow10 and min_pow10."""

    @pytest.mark.parametrize(
        "text,expected",
        [("314.15", 2), ("3.1415", 0), ("0.0123", -2), ("-4500", 3), ("0", 0)],
    )
    def test_normal_pow10(self, text: str, expected: int) -> None:
        """Position of the leading digit."""
        assert normal_pow10(Decimal(text)) == expected
        assert max_pow10(Decimal(text)) == expected

    @pytest.mark.parametrize(
        "text,expected",
        [("314.15", -2), ("3.140", -2), ("4500", 2), ("0.0005", -4), ("0", 0), ("7", 0)],
    )
    def test_min_pow10(self, text: str, expected: int) -> None:
        """Position of the last non-zero digit; trailing zeros ignored."""
        assert min_pow10(Decimal(text)) == expected


class TestScaling:
    """Tests for pow10, scale and to_float."""

    def test_pow10(self) -> None:
        """Exact powers of ten, both directions."""
        assert pow10(3) == 1000
        assert pow10(-2) == Decimal("0.01")

    def test_scale_keeps_digits(self) -> None:
        """Scaling only moves the decimal point."""
        assert scale(Decimal("3.14"), 2) == Decimal("314")
        assert scale(Decimal("3.14"), -2) == Decimal("0.0314")

    def test_scale_beyond_precision(self) -> None:
        """Huge shifts never round or overflow."""
        x = scale(Decimal("1.5"), 100000)
        assert scale(x, -100000) == Decimal("1.5")

    def test_to_float_in_range(self) -> None:
        """Values inside the binary64 range convert exactly."""
        assert to_float(Decimal("1.5"), 3) == 1500.0
        assert to_float(Decimal("0.1")) == 0.1
        assert to_float(Decimal(0), 10**6) == 0.0

    def test_to_float_saturates(self) -> None:
        """Out-of-range magnitudes become infinities or zero."""
        assert to_float(Decimal(5), 400) == math.inf
        assert to_float(Decimal(-5), 400) == -math.inf
        assert to_float(Decimal(5), -400) == 0.0


class TestRounding:
    """Tests for round_places and round_to_int."""

    @pytest.mark.parametrize(
        "text,places,expected",
        [
            ("3.145", 2, "3.14"),
            ("3.155", 2, "3.16"),
            ("2.5", 0, "2"),
            ("1234", -2, "1200"),
            ("0.000123456", 5, "0.00012"),
        ],
    )
    def test_round_places(self, text: str, places: int, expected: str) -> None:
        """Ties round to the even neighbour."""
        assert round_places(Decimal(text), places) == Decimal(expected)

    def test_round_places_extends_precision(self) -> None:
        """Quantizing never loses integer digits."""
        big = Decimal("123456789012345678901234567")
        assert round_places(big, 3) == big

    @pytest.mark.parametrize("text,expected", [("2.5", 2), ("3.5", 4), ("-2.5", -2), ("2.51", 3)])
    def test_round_to_int(self, text: str, expected: int) -> None:
        """Banker's rounding to an integer."""
        assert round_to_int(Decimal(text)) == expected


class TestProcessErrorDigits:
    """Tests for process_error_digits."""

    def test_two_significant_digits(self) -> None:
        """Error is cut to two significant digits."""
        error, least = process_error_digits(Decimal("0.0234"), 2, 39, 0, -2, -2, -4)
        assert error == Decimal("0.023")
        assert least == -3

    def test_cap_drops_one_digit(self) -> None:
        """46 exceeds the cap of 39, so one more digit is rounded away."""
        error, least = process_error_digits(Decimal("0.046"), 2, 39, 0, -3, -2, -3)
        assert error == Decimal("0.05")
        assert least == -2

    def test_unlimited_digits(self) -> None:
        """max_error_digits=0 keeps every error digit and skips the cap."""
        error, least = process_error_digits(Decimal("0.0234"), 0, 39, 0, -2, -2, -4)
        assert error == Decimal("0.0234")
        assert least == -4

    def test_clamped_to_leading_value_digit(self) -> None:
        """Rounding position never moves above the value's leading digit."""
        error, least = process_error_digits(Decimal("500"), 2, 39, 0, 0, 2, 2)
        assert error == Decimal("500")
        assert least == 0
