"""Fixed-point helpers shared by the number type and the formatting engine.

Digit positions are expressed as powers of ten: for 314.15 the most
significant digit sits at position 2 and the least significant one at -2.

All fixed-point work goes through ``CONTEXT``: 28 significant digits,
banker's rounding, and an exponent range wide enough that rescaling a
mantissa by any representable power of ten never underflows.
"""

from __future__ import annotations

from decimal import (
    MAX_EMAX,
    MIN_EMIN,
    ROUND_HALF_EVEN,
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
)
from typing import cast

import numpy as np

DECIMAL_PRECISION = 28
"""Significant digits kept by fixed-point arithmetic."""

DECIMAL_EXP_LIMIT = 28
"""Normal power of ten above which a result is not held as fixed-point."""

FLOAT_EXP_LIMIT = int(np.floor(np.log10(np.finfo(np.float64).max)))
"""Normal power of ten of the largest finite binary64 value (308)."""

CONTEXT = Context(
    prec=DECIMAL_PRECISION,
    rounding=ROUND_HALF_EVEN,
    Emax=MAX_EMAX,
    Emin=MIN_EMIN,
    traps=[InvalidOperation, DivisionByZero, Overflow],
)


def can_be_decimal(exp: int) -> bool:
    """True if a number with normal power ``exp`` fits the fixed-point range."""
    return -DECIMAL_EXP_LIMIT < exp < DECIMAL_EXP_LIMIT


def can_be_float(exp: int) -> bool:
    """True if a number with normal power ``exp`` fits the binary64 range."""
    return -FLOAT_EXP_LIMIT < exp < FLOAT_EXP_LIMIT


def normal_pow10(x: Decimal) -> int:
    """Power of ten that brings ``|x|`` into [1, 10); 0 for zero."""
    if not x:
        return 0
    return x.adjusted()


def max_pow10(x: Decimal) -> int:
    """Position of the most significant digit of ``x``."""
    return normal_pow10(x)


def min_pow10(x: Decimal) -> int:
    """Position of the least significant non-zero digit of ``x``; 0 for zero.

    Example:
        >>> min_pow10(Decimal("3.140"))
        -2
        >>> min_pow10(Decimal("4500"))
        2
    """
    if not x:
        return 0
    return cast(int, x.normalize(CONTEXT).as_tuple().exponent)


def pow10(k: int) -> Decimal:
    """Exact fixed-point power of ten."""
    return Decimal(1).scaleb(k, CONTEXT)


def scale(x: Decimal, k: int) -> Decimal:
    """Multiply ``x`` by ``10**k`` without touching its digits."""
    return x.scaleb(k, CONTEXT)


def to_float(x: Decimal, k: int = 0) -> float:
    """Correctly rounded binary64 value of ``x * 10**k``.

    Magnitudes beyond the binary64 range become ``±inf`` or ``±0.0``.
    """
    if not x:
        return 0.0
    if can_be_float(normal_pow10(x) + k):
        return float(scale(x, k))
    with np.errstate(over="ignore", under="ignore"):
        return float(np.float64(float(x)) * np.float_power(10.0, k))


def round_places(value: Decimal, places: int) -> Decimal:
    """Round ``value`` keeping ``places`` digits after the decimal point.

    Negative ``places`` round to tens, hundreds, ...; ties go to even.

    Example:
        >>> round_places(Decimal("3.145"), 2)
        Decimal('3.14')
        >>> round_places(Decimal("1234"), -2)
        Decimal('1.2E+3')
    """
    digits = max(normal_pow10(value) + places + 2, DECIMAL_PRECISION)
    context = Context(
        prec=digits,
        rounding=ROUND_HALF_EVEN,
        Emax=MAX_EMAX,
        Emin=MIN_EMIN,
        traps=[InvalidOperation],
    )
    return value.quantize(Decimal(1).scaleb(-places), context=context)


def round_to_int(x: Decimal) -> int:
    """Round to the nearest integer, ties to even."""
    return int(x.to_integral_value(rounding=ROUND_HALF_EVEN))


def process_error_digits(
    error: Decimal,
    max_error_digits: int,
    max_error_value: int,
    value_max_pow: int,
    value_min_pow: int,
    error_max_pow: int,
    error_min_pow: int,
) -> tuple[Decimal, int]:
    """Round an error to the digits a formatted number will display.

    Algorithm:
        1. With ``max_error_digits > 0`` the least significant error position
           is moved down to the value's least significant position, then up
           so that at most ``max_error_digits`` error digits remain.
        2. The position is clamped so it never lies above the value's most
           significant digit.
        3. The error is rounded to an integer at that position. While that
           integer exceeds the cap derived from ``max_error_value`` (scaled
           to ``max_error_digits`` digits), one more digit is rounded away,
           until the value's most significant position is reached.

    Args:
        error: Raw error (non-negative).
        max_error_digits: Maximum displayed error digits (0 disables step 1).
        max_error_value: Largest displayed error integer (0 disables step 3).
        value_max_pow: Most significant digit position of the value.
        value_min_pow: Least significant digit position of the value.
        error_max_pow: Most significant digit position of the error.
        error_min_pow: Least significant digit position of the error.

    Returns:
        Tuple of (rounded error, least significant error position).

    Example:
        >>> process_error_digits(Decimal("0.0234"), 2, 39, 0, -2, -2, -4)
        (Decimal('0.023'), -3)
    """
    least = error_min_pow
    if max_error_digits > 0:
        least = min(least, value_min_pow)
        least = max(error_max_pow - max_error_digits + 1, least)

    least = min(value_max_pow, least)
    rounded = round_to_int(scale(error, -least))

    if max_error_value > 0 and max_error_digits > 0:
        cap_digits = max_pow10(Decimal(max_error_value)) + 1
        if max_error_digits > cap_digits:
            limit = max_error_value * 10 ** (max_error_digits - cap_digits)
        else:
            limit = max_error_value
        while rounded > limit and least < value_max_pow:
            rounded = round_to_int(Decimal(rounded) / 10)
            least += 1

    return scale(Decimal(rounded), least), least
