"""Quantity container: a number with a unit and an approximation modifier.

Parsing splits free text such as ``≈ 2.5(1) km`` into a number, a trailing
unit token and a modifier derived from the leading qualifier glyph, the
range syntax ``3–5`` or surrounding parentheses. The modifier only
describes how the number approximates the true value; it never changes
arithmetic.

Range handling:
    A minus-like glyph that directly follows a digit (whitespace allowed)
    separates the bounds of a range. The text is reparsed with ``±`` in
    its place and, if that succeeds, folded to ``midpoint ± half-width``.
    ``3E-5`` is never a range because its minus follows the exponent
    marker, not a digit.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from number_lab.errors import FormatError, InvalidStateError, NumberOverflowError
from number_lab.numerics.advanced_number import AdvancedNumber
from number_lab.numerics.decimal_utils import CONTEXT
from number_lab.numerics.formatting import NumberFormat, get_current_format
from number_lab.parsing.grammar import (
    MINUS_SIGNS,
    MULTIPLY_SIGNS,
    SUPERSCRIPT_DIGITS,
    SUPERSCRIPT_MINUS,
    SUPERSCRIPT_PLUS,
)
from number_lab.parsing.parser import parse_number, try_parse_number
from number_lab.units.metric_units import (
    UnitNames,
    resolve_unit,
    time_scale,
    units_are_compatible,
    validate_time_unit,
    validate_unit,
)

logger = logging.getLogger(__name__)

RANGE_SEPARATOR = "–"

_RANGE_MINUS = re.compile(r"(?<=[0-9])\s*([" + re.escape(MINUS_SIGNS) + r"])(?=\s*[0-9])")

# A superscript run after "×10" is an exponent; anywhere else it belongs to the unit.
_SUPERSCRIPT_POWER = re.compile(
    "[" + re.escape(MULTIPLY_SIGNS) + r"]\s*10\s*"
    + f"[{SUPERSCRIPT_MINUS}{SUPERSCRIPT_PLUS}]?[{SUPERSCRIPT_DIGITS}]+",
    re.IGNORECASE,
)


class ModifierType(Enum):
    """How a parsed number relates to the true value."""

    NORMAL = "normal"
    APPROXIMATE = "approximate"
    APPROXIMATE_EQUALS = "approximate_equals"
    APPROXIMATE_BRACKETS = "approximate_brackets"
    LESS_THAN = "less_than"
    GREATER_THAN = "greater_than"
    LESS_OR_EQUAL_THAN = "less_or_equal_than"
    GREATER_OR_EQUAL_THAN = "greater_or_equal_than"
    RANGE = "range"


_QUALIFIERS: dict[str, ModifierType] = {
    "~": ModifierType.APPROXIMATE,
    "∼": ModifierType.APPROXIMATE,
    "≈": ModifierType.APPROXIMATE_EQUALS,
    "<": ModifierType.LESS_THAN,
    ">": ModifierType.GREATER_THAN,
    "≤": ModifierType.LESS_OR_EQUAL_THAN,
    "≥": ModifierType.GREATER_OR_EQUAL_THAN,
}

# First glyph per modifier wins, so "~" is written for APPROXIMATE.
_QUALIFIER_GLYPHS: dict[ModifierType, str] = {
    modifier: glyph for glyph, modifier in reversed(_QUALIFIERS.items())
}


@dataclass(frozen=True, slots=True)
class NumberContainer:
    """An AdvancedNumber tagged with a unit and a modifier.

    Example:
        >>> c = NumberContainer.parse("3–5 m")
        >>> c.number, c.unit, c.modifier
        (AdvancedNumber(mantissa=Decimal('4'), error=Decimal('1'), exponent=0), 'm', <ModifierType.RANGE: 'range'>)
    """

    number: AdvancedNumber
    unit: str = ""
    """Unit token; empty when unitless."""

    modifier: ModifierType = ModifierType.NORMAL

    # =========================================================================
    # PARSING
    # =========================================================================

    @classmethod
    def parse(cls, text: str) -> NumberContainer:
        """
        Parse free text into a container.

        Args:
            text: Text such as '~5 ms', '<0.1', '3–5 m' or '(2.5)'

        Returns:
            Parsed container

        Raises:
            FormatError: If no number can be read
            NumberOverflowError: If a component exceeds the supported range
        """
        stripped = text.rstrip()
        if not stripped:
            msg = "Cannot parse a quantity from empty text"
            raise FormatError(msg)

        number_text, unit = _split_unit(stripped)
        if not number_text:
            msg = f"No number in '{text}'"
            raise FormatError(msg)

        modifier = _QUALIFIERS.get(number_text[0])
        if modifier is not None:
            return cls(parse_number(number_text[1:].lstrip()), unit, modifier)

        folded = _try_parse_range(number_text)
        if folded is not None:
            return cls(folded, unit, ModifierType.RANGE)

        if number_text.startswith("(") and number_text.endswith(")"):
            inner = try_parse_number(number_text[1:-1].strip())
            if inner is not None:
                return cls(inner, unit, ModifierType.APPROXIMATE_BRACKETS)

        return cls(parse_number(number_text), unit, ModifierType.NORMAL)

    @classmethod
    def try_parse(cls, text: str) -> NumberContainer | None:
        """Like ``parse`` but returns None instead of raising."""
        try:
            return cls.parse(text)
        except (FormatError, NumberOverflowError) as exc:
            logger.debug("Could not parse quantity from %r: %s", text, exc)
            return None

    # =========================================================================
    # DELEGATED VALUES
    # =========================================================================

    @property
    def mantissa(self) -> Decimal:
        return self.number.mantissa

    @property
    def error(self) -> Decimal:
        return self.number.error

    @property
    def exponent(self) -> int:
        return self.number.exponent

    @property
    def result_value(self) -> float:
        return self.number.result_value

    @property
    def result_error(self) -> float:
        return self.number.result_error

    @property
    def relative_error(self) -> float:
        return self.number.relative_error

    # =========================================================================
    # UNITS
    # =========================================================================

    def has_unit(self) -> bool:
        return bool(self.unit)

    def is_valid_unit(self, base_units: UnitNames = ()) -> bool:
        """True if the unit resolves against ``base_units``.

        A unitless container is valid only when no base units are named.
        """
        if not self.unit:
            return not base_units
        return validate_unit(self.unit, base_units)

    def is_valid_time_unit(self) -> bool:
        return bool(self.unit) and validate_time_unit(self.unit)

    def is_compatible_with(self, other: NumberContainer, base_units: UnitNames = ()) -> bool:
        """True if both values can be normalized to a common unit.

        Without ``base_units`` two unitless containers, or two containers
        with time units, are compatible. Otherwise both units must reduce to
        the same base unit.
        """
        if not base_units:
            if not self.has_unit() and not other.has_unit():
                return True
            if self.is_valid_time_unit() and other.is_valid_time_unit():
                return True
        return units_are_compatible(self.unit, other.unit, base_units)

    # =========================================================================
    # NORMALIZATION
    # =========================================================================

    def try_get_normalized_time_value(self) -> AdvancedNumber | None:
        """The number in seconds, or None if the unit is not a time unit."""
        seconds, power = time_scale(self.unit)
        if not seconds:
            return None
        factor = Decimal(seconds)
        n = self.number
        return AdvancedNumber(
            CONTEXT.multiply(n.mantissa, factor),
            CONTEXT.multiply(n.error, factor),
            n.exponent + power,
        )

    def get_normalized_time_value(self) -> AdvancedNumber:
        """
        The number in seconds.

        Raises:
            InvalidStateError: If the unit is not a time unit
        """
        value = self.try_get_normalized_time_value()
        if value is None:
            msg = f"'{self.unit}' is not a time unit"
            raise InvalidStateError(msg)
        return value

    def try_get_normalized_value(self, base_units: UnitNames = ()) -> AdvancedNumber | None:
        """The number in unprefixed base units, or None if unresolvable.

        Without ``base_units`` a unitless number is returned as is and time
        units are converted to seconds before registered base units are
        tried.
        """
        if not base_units:
            if not self.has_unit():
                return self.number
            time_value = self.try_get_normalized_time_value()
            if time_value is not None:
                return time_value
        resolved = resolve_unit(self.unit, base_units)
        if resolved is None:
            return None
        n = self.number
        return AdvancedNumber(n.mantissa, n.error, n.exponent + resolved[1])

    def get_normalized_value(self, base_units: UnitNames = ()) -> AdvancedNumber:
        """
        The number in unprefixed base units.

        Raises:
            InvalidStateError: If the unit cannot be resolved
        """
        value = self.try_get_normalized_value(base_units)
        if value is None:
            msg = f"Cannot normalize unit '{self.unit}'"
            raise InvalidStateError(msg)
        return value

    def try_get_normalized_result_time_value(self) -> float | None:
        value = self.try_get_normalized_time_value()
        return None if value is None else value.result_value

    def get_normalized_result_time_value(self) -> float:
        return self.get_normalized_time_value().result_value

    def try_get_normalized_result_value(self, base_units: UnitNames = ()) -> float | None:
        value = self.try_get_normalized_value(base_units)
        return None if value is None else value.result_value

    def get_normalized_result_value(self, base_units: UnitNames = ()) -> float:
        return self.get_normalized_value(base_units).result_value

    def to_comparable(self, base_units: UnitNames = ()) -> AdvancedNumber | None:
        """Normalized number usable as a sort key, or None."""
        return self.try_get_normalized_value(base_units)

    def to_comparable_time(self) -> AdvancedNumber | None:
        """Number in seconds usable as a sort key, or None."""
        return self.try_get_normalized_time_value()

    # =========================================================================
    # RENDERING
    # =========================================================================

    def to_string(self, fmt: NumberFormat | None = None) -> str:
        """Render modifier, number and unit (current format if ``fmt`` is None)."""
        if fmt is None:
            fmt = get_current_format()
        n = self.number
        if self.modifier is ModifierType.RANGE:
            low = AdvancedNumber(CONTEXT.subtract(n.mantissa, n.error), 0, n.exponent)
            high = AdvancedNumber(CONTEXT.add(n.mantissa, n.error), 0, n.exponent)
            text = f"{low.to_string(fmt)}{RANGE_SEPARATOR}{high.to_string(fmt)}"
        elif self.modifier is ModifierType.APPROXIMATE_BRACKETS:
            text = f"({n.to_string(fmt)})"
        else:
            text = _QUALIFIER_GLYPHS.get(self.modifier, "") + n.to_string(fmt)
        return f"{text} {self.unit}" if self.unit else text

    def __str__(self) -> str:
        return self.to_string()


# =============================================================================
# INTERNAL HELPERS
# =============================================================================


def _split_unit(text: str) -> tuple[str, str]:
    """Split trailing unit token from the number; unit is '' if none.

    Superscript digits count as unit text (``m²``) unless they are the
    exponent of a ``×10⁵`` power, which the number always keeps.
    """
    floor = 0
    for power in _SUPERSCRIPT_POWER.finditer(text):
        floor = power.end()

    number, unit = text.strip(), ""
    for index in range(len(text) - 1, floor - 1, -1):
        char = text[index]
        if char.isspace():
            number, unit = text[:index].rstrip(), text[index + 1:]
            break
        if char.isdecimal() or char == ")":
            number, unit = text[: index + 1], text[index + 1:]
            break
    else:
        if floor:
            number, unit = text[:floor], text[floor:]

    if not number or any(c.isdecimal() or c in "()" for c in unit):
        return text.strip(), ""
    return number.lstrip(), unit


def _try_parse_range(text: str) -> AdvancedNumber | None:
    separators = list(_RANGE_MINUS.finditer(text))
    if not separators:
        return None
    at = separators[-1].start(1)
    bounds = try_parse_number(text[:at] + "±" + text[at + 1:])
    if bounds is None:
        return None

    low, high = bounds.mantissa, bounds.error
    logger.debug("Reading %r as range %s..%s", text, low, high)
    two = Decimal(2)
    midpoint = CONTEXT.divide(CONTEXT.add(low, high), two)
    half_width = CONTEXT.divide(CONTEXT.abs(CONTEXT.subtract(low, high)), two)
    return AdvancedNumber(midpoint, half_width, bounds.exponent)
