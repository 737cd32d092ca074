"""Formatting engine and output configuration for AdvancedNumber.

Rendering follows the usual conventions for measured values:
- The error is rounded to at most ``max_error_digits`` significant digits,
  backing off one more digit while the shown error integer exceeds
  ``max_error_value`` (1.234 ± 0.046 shows as 1.23 (5), not 1.234 (46)).
- The value is rounded to the same decimal place as its error.
- Small exponents are folded into the digits, large ones are written out.

Output forms:
    short:  3.14 (2)          3.14 (2) × 10E5
    long:   3.14 ± 0.02       (3.14 ± 0.02) × 10E5

Available presets:
    default     3.14 (2) × 10E5
    compact     3.14(2)E5
    plus_minus  (3.14 ± 0.02) × 10E5
    scientific  3.14(2)·10⁵ (every non-zero exponent written out)
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from number_lab.numerics.decimal_utils import (
    max_pow10,
    min_pow10,
    process_error_digits,
    round_places,
    round_to_int,
    scale,
)

if TYPE_CHECKING:
    from number_lab.numerics.advanced_number import AdvancedNumber

MULTIPLY_EXP = "E"
MULTIPLY_DOT = "·"
MULTIPLY_CROSS = "×"
POINT_DOT = "."
POINT_COMMA = ","
PLUS_MINUS = "±"

_SUPERSCRIPT = str.maketrans("0123456789-", "⁰¹²³⁴⁵⁶⁷⁸⁹⁻")


@dataclass(frozen=True, slots=True)
class NumberFormat:
    """Typographic rules for rendering an AdvancedNumber."""

    short_format: bool = True
    """Bracket error ``3.14(2)`` instead of ``3.14 ± 0.02``."""

    decimal_point: str = POINT_DOT
    """Decimal point character."""

    multiply_sign: str = MULTIPLY_CROSS
    """Glyph before ``10E<n>``; ``E`` writes a bare ``E<n>`` instead."""

    min_power_of_10: int = 5
    """Exponents strictly inside (-n, n) are folded into the digits; 0 always folds."""

    max_error_digits: int = 2
    """Maximum significant digits shown for the error (0 = unlimited)."""

    max_error_value: int = 39
    """Largest error integer shown before one more digit is rounded away (0 = no cap)."""

    max_value_digits: int = 0
    """Maximum significant digits of the value (0 = unlimited)."""

    spaces_near_multiply: bool = True
    spaces_near_plus_minus: bool = True
    space_before_exp: bool = False
    space_before_bracket: bool = True

    plus_minus_sign: str = PLUS_MINUS
    """Glyph used by the long form, e.g. ``+/-`` for ASCII output."""

    superscript_exponent: bool = False
    """Write ``×10⁵`` instead of ``×10E5`` (ignored when multiply_sign is E)."""

    def __post_init__(self) -> None:
        if len(self.decimal_point) != 1:
            msg = f"decimal_point must be one character, got '{self.decimal_point}'"
            raise ValueError(msg)
        if len(self.multiply_sign) != 1:
            msg = f"multiply_sign must be one character, got '{self.multiply_sign}'"
            raise ValueError(msg)
        if not self.plus_minus_sign:
            msg = "plus_minus_sign must not be empty"
            raise ValueError(msg)
        for name in ("min_power_of_10", "max_error_digits", "max_error_value", "max_value_digits"):
            if getattr(self, name) < 0:
                msg = f"{name} must be non-negative, got {getattr(self, name)}"
                raise ValueError(msg)

    @property
    def uses_exp_marker(self) -> bool:
        """True if exponents are written as a bare ``E<n>``."""
        return self.multiply_sign.upper() == MULTIPLY_EXP

    def copy(self, **changes: Any) -> NumberFormat:
        """Return a new format with the given fields replaced."""
        return replace(self, **changes)


# =============================================================================
# PRESETS
# =============================================================================

_FORMAT_PRESETS: dict[str, NumberFormat] = {
    "default": NumberFormat(),
    "compact": NumberFormat(multiply_sign=MULTIPLY_EXP, space_before_bracket=False),
    "plus_minus": NumberFormat(short_format=False),
    "scientific": NumberFormat(
        multiply_sign=MULTIPLY_DOT,
        min_power_of_10=1,
        spaces_near_multiply=False,
        space_before_bracket=False,
        superscript_exponent=True,
    ),
}

DEFAULT_FORMAT = _FORMAT_PRESETS["default"]

_current_format: NumberFormat = DEFAULT_FORMAT


def get_format(name: str) -> NumberFormat:
    """
    Get a named format preset.

    Args:
        name: Preset name (e.g. 'compact', 'Plus-Minus')

    Returns:
        The preset NumberFormat

    Raises:
        ValueError: If the preset is unknown

    Example:
        >>> get_format("compact").space_before_bracket
        False
    """
    key = name.strip().lower().replace("-", "_")
    if key not in _FORMAT_PRESETS:
        valid = list_formats()
        raise ValueError(f"Unknown number format: '{name}'. Valid: {valid}")
    return _FORMAT_PRESETS[key]


def list_formats() -> list[str]:
    """List preset names."""
    return list(_FORMAT_PRESETS)


def get_current_format() -> NumberFormat:
    """Process-wide format used by ``str()``."""
    return _current_format


def set_current_format(fmt: NumberFormat | str) -> NumberFormat:
    """
    Replace the process-wide format used by ``str()``.

    Last writer wins; no synchronization is provided.

    Args:
        fmt: A NumberFormat or preset name

    Returns:
        The previously current format
    """
    global _current_format
    previous = _current_format
    _current_format = get_format(fmt) if isinstance(fmt, str) else fmt
    return previous


# =============================================================================
# RENDERING
# =============================================================================


def format_number(number: AdvancedNumber, fmt: NumberFormat | None = None) -> str:
    """Render ``number`` under ``fmt`` (``DEFAULT_FORMAT`` if None).

    Algorithm:
        1. Infinities render as ``inf`` / ``-inf``.
        2. Digit bounds of the value are taken, after cutting it to
           ``max_value_digits`` significant digits when that is set.
        3. A non-zero error is rounded (``process_error_digits``) and the
           value is rounded to the error's last digit.
        4. Both are scaled so the leading digit sits at position 0 and the
           scale moves into the exponent.
        5. Exponents inside (-min_power_of_10, min_power_of_10) are folded
           back into the digits.
        6. Short or long form is written, followed by the exponent.

    Example:
        >>> from number_lab.numerics.advanced_number import AdvancedNumber
        >>> format_number(AdvancedNumber(Decimal("3.14"), Decimal("0.02"), 7))
        '3.14 (2) × 10E7'
    """
    if fmt is None:
        fmt = DEFAULT_FORMAT
    if number.is_positive_infinity:
        return "inf"
    if number.is_negative_infinity:
        return "-inf"

    value = number.mantissa
    value_max = max_pow10(value)
    cut_value = value
    if fmt.max_value_digits > 0:
        cut_value = round_places(value, fmt.max_value_digits - 1 - value_max)
    value_min = min_pow10(cut_value)

    lead = value_max
    error = number.error
    if error > 0:
        error_max = max_pow10(error)
        error, error_min = process_error_digits(
            error,
            fmt.max_error_digits,
            fmt.max_error_value,
            value_max,
            value_min,
            error_max,
            min_pow10(error),
        )
        value = round_places(value, -error_min)
        lead = max(lead, error_max)
        error = scale(error, -lead)
    else:
        value = cut_value

    value = scale(value, -lead)
    exp = number.exponent + lead

    if fmt.min_power_of_10 == 0 or -fmt.min_power_of_10 < exp < fmt.min_power_of_10:
        value = scale(value, exp)
        error = scale(error, exp)
        exp = 0

    if fmt.short_format:
        value_least = min_pow10(value)
        least = min(min_pow10(error), value_least) if error > 0 else value_least
        text = _fixed(value, least, fmt.decimal_point)
        if error > 0:
            shown = error if least >= 0 else scale(error, -least)
            if fmt.space_before_bracket:
                text += " "
            text += f"({round_to_int(shown)})"
    else:
        value_least = min_pow10(value)
        least = min(min_pow10(error), value_least) if error > 0 else value_least
        text = _fixed(value, least, fmt.decimal_point)
        if error > 0:
            sign = fmt.plus_minus_sign
            text += f" {sign} " if fmt.spaces_near_plus_minus else sign
            text += _fixed(error, least, fmt.decimal_point)
            if exp != 0:
                text = f"({text})"

    if exp != 0:
        text += _exponent_suffix(exp, fmt)
    return text


def _fixed(x: Decimal, least: int, point: str) -> str:
    """Fixed-point text of ``x`` down to digit position ``least``."""
    places = -least if least < 0 else 0
    text = f"{x:.{places}f}"
    return text if point == POINT_DOT else text.replace(POINT_DOT, point)


def _exponent_suffix(exp: int, fmt: NumberFormat) -> str:
    if fmt.uses_exp_marker:
        marker = " E" if fmt.space_before_exp else "E"
        return f"{marker}{exp}"
    sign = f" {fmt.multiply_sign} " if fmt.spaces_near_multiply else fmt.multiply_sign
    if fmt.superscript_exponent:
        return f"{sign}10{str(exp).translate(_SUPERSCRIPT)}"
    return f"{sign}10E{exp}"
