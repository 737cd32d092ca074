"""Value-error-exponent number with uncertainty-propagating arithmetic.

An ``AdvancedNumber`` stores ``mantissa ± error`` scaled by ``10**exponent``,
so 3.141(5)×10⁹ is ``AdvancedNumber(Decimal("3.141"), Decimal("0.005"), 9)``.

Propagation rules:
- Addition/subtraction rebase both operands to the larger exponent and
  combine absolute errors in quadrature.
- Multiplication/division work in binary64 and combine relative errors in
  quadrature.
- A zero error is "absent": it never takes part in a quadrature sum.

References:
- JCGM 100:2008 "Guide to the expression of uncertainty in measurement", §5.1
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

import numpy as np

from number_lab.errors import DomainError, NumberOverflowError
from number_lab.numerics.decimal_utils import (
    CONTEXT,
    DECIMAL_EXP_LIMIT,
    can_be_decimal,
    can_be_float,
    max_pow10,
    min_pow10,
    normal_pow10,
    round_places,
    scale,
    to_float,
)
from number_lab.numerics.formatting import NumberFormat, format_number, get_current_format

if TYPE_CHECKING:
    from numpy.typing import NDArray

MAX_POWER_OF_10 = 0x00FFFFFF
"""Exponent at or above which a number is treated as infinity."""


@dataclass(frozen=True, slots=True, eq=False)
class AdvancedNumber:
    """Immutable ``mantissa ± error`` times ``10**exponent``.

    Mantissa and error accept ``int`` or ``Decimal``. Floats are rejected
    because their binary value is rarely the decimal the caller meant; use
    ``AdvancedNumber.from_float`` to convert them explicitly.

    Example:
        >>> x = AdvancedNumber(Decimal("3.0"), Decimal("0.1"))
        >>> y = AdvancedNumber(Decimal("4.0"), Decimal("0.1"))
        >>> (x + y).mantissa
        Decimal('7.0')
        >>> AdvancedNumber(1, 0, 10) > AdvancedNumber(9, 0, 9)
        True
    """

    mantissa: Decimal
    """Value without the power-of-10 multiplier."""

    error: Decimal = Decimal(0)
    """Absolute uncertainty without the power-of-10 multiplier (>= 0)."""

    exponent: int = 0
    """Power of ten applied to mantissa and error."""

    def __post_init__(self) -> None:
        mantissa = _as_decimal(self.mantissa, "mantissa")
        error = _as_decimal(self.error, "error")
        if isinstance(self.exponent, bool) or not isinstance(self.exponent, int):
            msg = f"exponent must be int, got {type(self.exponent).__name__}"
            raise TypeError(msg)
        if error < 0:
            msg = f"error must be non-negative, got {error}"
            raise DomainError(msg)
        object.__setattr__(self, "mantissa", mantissa)
        object.__setattr__(self, "error", error)

    # =========================================================================
    # CONSTRUCTION
    # =========================================================================

    @classmethod
    def from_float(
        cls, value: float, error: float = 0.0, exponent: int = 0
    ) -> AdvancedNumber:
        """Build a number from binary64 inputs.

        The value is normalized into [1, 10) and its decade folded into the
        exponent. Digits come from the shortest repr of each float.

        Args:
            value: Value (may be infinite).
            error: Absolute error at the same scale as ``value``.
            exponent: Extra power of ten applied to both.

        Returns:
            Normalized number, or a signed infinity for infinite ``value``.

        Raises:
            DomainError: If an input is NaN or the error is negative/infinite.
        """
        if math.isnan(value) or math.isnan(error):
            msg = f"Cannot represent NaN (value={value}, error={error})"
            raise DomainError(msg)
        if math.isinf(value):
            return POSITIVE_INFINITY if value > 0 else NEGATIVE_INFINITY
        if error < 0 or math.isinf(error):
            msg = f"error must be finite and non-negative, got {error}"
            raise DomainError(msg)

        dvalue = Decimal(repr(float(value)))
        derror = Decimal(repr(float(error)))
        k = normal_pow10(dvalue)
        return cls(scale(dvalue, -k), scale(derror, -k), exponent + k)

    @classmethod
    def parse(cls, text: str, strict: bool = False) -> AdvancedNumber:
        """Parse text in any supported notation (see ``number_lab.parsing``)."""
        from number_lab.parsing.parser import parse_number

        return parse_number(text, strict=strict)

    @classmethod
    def try_parse(cls, text: str, strict: bool = False) -> AdvancedNumber | None:
        """Like ``parse`` but returns None instead of raising."""
        from number_lab.parsing.parser import try_parse_number

        return try_parse_number(text, strict=strict)

    # =========================================================================
    # DERIVED VALUES
    # =========================================================================

    @property
    def result_value(self) -> float:
        """``mantissa * 10**exponent`` as float."""
        return to_float(self.mantissa, self.exponent)

    @property
    def result_error(self) -> float:
        """``error * 10**exponent`` as float."""
        return to_float(self.error, self.exponent)

    @property
    def relative_error(self) -> float:
        """``error / |mantissa|``; 0 when the mantissa is 0."""
        if not self.mantissa:
            return 0.0
        return float(self.error) / float(abs(self.mantissa))

    @property
    def normal_power_of_10(self) -> int:
        """Exponent that brings the resulting value into [1, 10)."""
        return normal_pow10(self.mantissa) + self.exponent

    @property
    def result_is_decimal(self) -> bool:
        return can_be_decimal(self.normal_power_of_10)

    @property
    def result_is_float(self) -> bool:
        return can_be_float(self.normal_power_of_10)

    @property
    def decimal_result_value(self) -> Decimal:
        """Resulting value as Decimal.

        Raises:
            NumberOverflowError: If the magnitude reaches 10**28.
        """
        return self._decimal_result(self.mantissa)

    @property
    def decimal_result_error(self) -> Decimal:
        """Resulting error as Decimal.

        Raises:
            NumberOverflowError: If the magnitude reaches 10**28.
        """
        return self._decimal_result(self.error)

    def _decimal_result(self, x: Decimal) -> Decimal:
        if x and normal_pow10(x) + self.exponent >= DECIMAL_EXP_LIMIT:
            msg = f"{self!r} does not fit the fixed-point range"
            raise NumberOverflowError(msg)
        return scale(x, self.exponent)

    @property
    def is_positive_infinity(self) -> bool:
        return self.mantissa > 0 and self.exponent >= MAX_POWER_OF_10

    @property
    def is_negative_infinity(self) -> bool:
        return self.mantissa < 0 and self.exponent >= MAX_POWER_OF_10

    @property
    def is_infinite(self) -> bool:
        """True for either infinity; different triples may both qualify."""
        return self.mantissa != 0 and self.exponent >= MAX_POWER_OF_10

    # =========================================================================
    # NORMALIZATION
    # =========================================================================

    def normalize(self) -> AdvancedNumber:
        """Equal number whose mantissa lies in [1, 10)."""
        k = normal_pow10(self.mantissa)
        return AdvancedNumber(
            scale(self.mantissa, -k), scale(self.error, -k), self.exponent + k
        )

    def normalize_to(self, exponent: int) -> AdvancedNumber:
        """Equal number expressed with the given exponent."""
        shift = self.exponent - exponent
        return AdvancedNumber(
            scale(self.mantissa, shift), scale(self.error, shift), exponent
        )

    def normalize_error(self, digits: int | None = None) -> AdvancedNumber:
        """Round the error to ``digits`` significant digits.

        The mantissa is rounded to the same decimal place so that it never
        carries more precision than its error. Without ``digits`` the count
        is the distance between the error's most and least significant
        digits, and the number is returned unchanged when that is <= 0.

        Args:
            digits: Significant digits to keep in the error.

        Returns:
            New number with rounded mantissa and error.

        Raises:
            DomainError: If ``digits`` is not positive.

        Example:
            >>> AdvancedNumber(Decimal("3.14159"), Decimal("0.0234")).normalize_error(1)
            AdvancedNumber(mantissa=Decimal('3.14'), error=Decimal('0.02'), exponent=0)
        """
        if digits is None:
            digits = max_pow10(self.error) - min_pow10(self.error)
            if digits <= 0:
                return self
        elif digits <= 0:
            msg = f"digits must be positive, got {digits}"
            raise DomainError(msg)

        places = digits - 1 - max_pow10(self.error)
        return AdvancedNumber(
            round_places(self.mantissa, places),
            round_places(self.error, places),
            self.exponent,
        )

    # =========================================================================
    # ARITHMETIC
    # =========================================================================

    def __add__(self, other: object) -> AdvancedNumber:
        rhs = _promote(other)
        if rhs is None:
            return NotImplemented
        common = max(self.exponent, rhs.exponent)
        a = self.normalize_to(common)
        b = rhs.normalize_to(common)
        return AdvancedNumber(
            CONTEXT.add(a.mantissa, b.mantissa), _combine_errors(a.error, b.error), common
        )

    def __radd__(self, other: object) -> AdvancedNumber:
        lhs = _promote(other)
        if lhs is None:
            return NotImplemented
        return lhs + self

    def __sub__(self, other: object) -> AdvancedNumber:
        rhs = _promote(other)
        if rhs is None:
            return NotImplemented
        return self + (-rhs)

    def __rsub__(self, other: object) -> AdvancedNumber:
        lhs = _promote(other)
        if lhs is None:
            return NotImplemented
        return lhs + (-self)

    def __mul__(self, other: object) -> AdvancedNumber:
        if isinstance(other, AdvancedNumber):
            value = float(self.mantissa) * float(other.mantissa)
            rel = _combine_relative(self.relative_error, other.relative_error)
            return AdvancedNumber.from_float(
                value, abs(value) * rel, self.exponent + other.exponent
            )
        if _is_scalar(other):
            value = float(self.mantissa) * float(other)  # type: ignore[arg-type]
            return AdvancedNumber.from_float(
                value, abs(value) * self.relative_error, self.exponent
            )
        return NotImplemented

    def __rmul__(self, other: object) -> AdvancedNumber:
        if _is_scalar(other):
            return self * other
        return NotImplemented

    def __truediv__(self, other: object) -> AdvancedNumber:
        if isinstance(other, AdvancedNumber):
            if not other.mantissa:
                msg = "division by a zero-valued AdvancedNumber"
                raise ZeroDivisionError(msg)
            value = float(self.mantissa) / float(other.mantissa)
            rel = _combine_relative(self.relative_error, other.relative_error)
            return AdvancedNumber.from_float(
                value, abs(value) * rel, self.exponent - other.exponent
            )
        if _is_scalar(other):
            if not other:
                msg = "division of an AdvancedNumber by zero"
                raise ZeroDivisionError(msg)
            value = float(self.mantissa) / float(other)  # type: ignore[arg-type]
            return AdvancedNumber.from_float(
                value, abs(value) * self.relative_error, self.exponent
            )
        return NotImplemented

    def __rtruediv__(self, other: object) -> AdvancedNumber:
        lhs = _promote(other)
        if lhs is None:
            return NotImplemented
        return lhs / self

    def __neg__(self) -> AdvancedNumber:
        return AdvancedNumber(CONTEXT.minus(self.mantissa), self.error, self.exponent)

    def __pos__(self) -> AdvancedNumber:
        return self

    def __abs__(self) -> AdvancedNumber:
        return AdvancedNumber(CONTEXT.abs(self.mantissa), self.error, self.exponent)

    # =========================================================================
    # COMPARISON
    # =========================================================================

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AdvancedNumber):
            return NotImplemented
        if self.result_is_decimal and other.result_is_decimal:
            return scale(self.mantissa, self.exponent) == scale(
                other.mantissa, other.exponent
            ) and scale(self.error, self.exponent) == scale(other.error, other.exponent)
        return (
            self.result_value == other.result_value
            and self.result_error == other.result_error
        )

    def __hash__(self) -> int:
        return hash(self.result_value)

    def _compare(self, other: object) -> int | None:
        if isinstance(other, AdvancedNumber):
            shift = other.exponent - self.exponent
            if shift + normal_pow10(other.mantissa) < DECIMAL_EXP_LIMIT:
                return _sign_of(self.mantissa, scale(other.mantissa, shift))
            return _sign_of(self.result_value, other.result_value)
        if isinstance(other, (int, Decimal)) and self.result_is_decimal:
            return _sign_of(scale(self.mantissa, self.exponent), Decimal(other))
        if _is_scalar(other):
            return _sign_of(self.result_value, float(other))  # type: ignore[arg-type]
        return None

    def __lt__(self, other: object) -> bool:
        result = self._compare(other)
        return NotImplemented if result is None else result < 0

    def __le__(self, other: object) -> bool:
        result = self._compare(other)
        return NotImplemented if result is None else result <= 0

    def __gt__(self, other: object) -> bool:
        result = self._compare(other)
        return NotImplemented if result is None else result > 0

    def __ge__(self, other: object) -> bool:
        result = self._compare(other)
        return NotImplemented if result is None else result >= 0

    # =========================================================================
    # CONVERSION
    # =========================================================================

    def __float__(self) -> float:
        return self.result_value

    def to_decimal(self) -> Decimal:
        """Resulting value as Decimal (see ``decimal_result_value``)."""
        return self.decimal_result_value

    def to_string(self, fmt: NumberFormat | None = None) -> str:
        """Format with ``fmt``, or the process-wide current format if None."""
        return format_number(self, get_current_format() if fmt is None else fmt)

    def __str__(self) -> str:
        return self.to_string()


def result_arrays(
    numbers: Iterable[AdvancedNumber],
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Collect resulting values and errors into float64 arrays.

    Args:
        numbers: Numbers to export.

    Returns:
        Tuple of (values, errors), both of shape (n,).

    Example:
        >>> values, errors = result_arrays([AdvancedNumber(1, 0, 3)])
        >>> values
        array([1000.])
    """
    items = list(numbers)
    values = np.fromiter((n.result_value for n in items), dtype=np.float64, count=len(items))
    errors = np.fromiter((n.result_error for n in items), dtype=np.float64, count=len(items))
    return values, errors


# =============================================================================
# INTERNAL HELPERS
# =============================================================================


def _as_decimal(value: object, name: str) -> Decimal:
    if isinstance(value, Decimal):
        if not value.is_finite():
            msg = f"{name} must be finite, got {value}"
            raise DomainError(msg)
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return Decimal(value)
    if isinstance(value, float):
        msg = f"{name} must be int or Decimal; use AdvancedNumber.from_float for floats"
        raise TypeError(msg)
    msg = f"{name} must be int or Decimal, got {type(value).__name__}"
    raise TypeError(msg)


def _is_scalar(value: object) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _promote(value: object) -> AdvancedNumber | None:
    """Exact AdvancedNumber for a plain number; None for anything else."""
    if isinstance(value, AdvancedNumber):
        return value
    if isinstance(value, float):
        return AdvancedNumber.from_float(value)
    if _is_scalar(value):
        return AdvancedNumber(value)  # type: ignore[arg-type]
    return None


def _combine_errors(e1: Decimal, e2: Decimal) -> Decimal:
    if e1 <= 0:
        return e2
    if e2 <= 0:
        return e1
    return CONTEXT.add(CONTEXT.multiply(e1, e1), CONTEXT.multiply(e2, e2)).sqrt(CONTEXT)


def _combine_relative(r1: float, r2: float) -> float:
    if r1 <= 0:
        return r2
    if r2 <= 0:
        return r1
    return float(np.hypot(r1, r2))


def _sign_of(a: Decimal | float, b: Decimal | float) -> int:
    return (a > b) - (a < b)


POSITIVE_INFINITY = AdvancedNumber(1, 0, MAX_POWER_OF_10)
NEGATIVE_INFINITY = AdvancedNumber(-1, 0, MAX_POWER_OF_10)
