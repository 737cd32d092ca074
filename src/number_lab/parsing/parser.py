"""Text to AdvancedNumber: whole-string parsing and search in free text.

Reconstruction rules:
- The mantissa is read as a Decimal rounded to 28 significant digits.
- A missing exponent means 0.
- Bracket error digits count units of the mantissa's last digit, so
  ``3.14(2)`` has error 0.02 and ``3.14E5(2)`` also has error 0.02.
- A ± error with its own exponent is rescaled to the mantissa's exponent.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass
from decimal import Decimal

from number_lab.errors import FormatError, NumberOverflowError
from number_lab.numerics.advanced_number import AdvancedNumber
from number_lab.numerics.decimal_utils import CONTEXT, DECIMAL_EXP_LIMIT, normal_pow10, scale
from number_lab.parsing.grammar import (
    MINUS_SIGNS,
    SUPERSCRIPT_DIGITS,
    SUPERSCRIPT_MINUS,
    get_regex,
    get_search_regex,
    match_groups,
)

logger = logging.getLogger(__name__)

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

_FROM_SUPERSCRIPT = str.maketrans(SUPERSCRIPT_DIGITS, "0123456789")


@dataclass(frozen=True, slots=True)
class NumberMatch:
    """A number found inside free text."""

    start: int
    """Index of the first matched character."""

    end: int
    """Index one past the last matched character."""

    text: str
    """Matched substring."""

    number: AdvancedNumber
    """Reconstructed number."""


def match_number(text: str, strict: bool = False) -> re.Match[str] | None:
    """Match ``text`` as a whole against the number grammar."""
    return get_regex(strict).fullmatch(text)


def search_number(text: str, strict: bool = True) -> re.Match[str] | None:
    """Find the first number anywhere in ``text``."""
    return get_search_regex(strict).search(text)


def find_numbers(text: str, strict: bool = True) -> Iterator[re.Match[str]]:
    """Iterate over all non-overlapping numbers in ``text``."""
    return get_search_regex(strict).finditer(text)


def number_from_match(match: re.Match[str]) -> AdvancedNumber:
    """
    Rebuild the AdvancedNumber captured by a grammar match.

    Args:
        match: Match from ``match_number``, ``search_number`` or ``find_numbers``

    Returns:
        The reconstructed number

    Raises:
        NumberOverflowError: If the mantissa or error reaches 10**28, or the
            exponent leaves the 32-bit range

    Example:
        >>> number_from_match(match_number("3.14E5(2)"))
        AdvancedNumber(mantissa=Decimal('3.14'), error=Decimal('0.02'), exponent=5)
    """
    groups = match_groups(match)

    fraction = groups.get("f", "")
    mantissa = _read_decimal(groups["i"], fraction, "mantissa")
    sign = groups.get("m")
    if sign is not None and sign in MINUS_SIGNS:
        mantissa = CONTEXT.minus(mantissa)

    exponent = 0
    if "e" in groups:
        exponent = _read_exponent(groups["e"], groups.get("em", ""))
    elif "se" in groups:
        digits = groups["se"].translate(_FROM_SUPERSCRIPT)
        sign = "-" if groups.get("sem") == SUPERSCRIPT_MINUS else ""
        exponent = _read_exponent(digits, sign)

    error = Decimal(0)
    if "d" in groups:
        error = _read_decimal(groups["d"], "", "error")
        if fraction:
            error = scale(error, -len(fraction))
    elif "di" in groups:
        error = _read_decimal(groups["di"], groups.get("df", ""), "error")
        if "sd" in groups:
            error_exponent = 0
            if "de" in groups:
                error_exponent = _read_exponent(groups["de"], groups.get("dem", ""))
            shift = error_exponent - exponent
            if shift:
                error = scale(error, shift)

    return AdvancedNumber(mantissa, error, exponent)


def parse_number(text: str, strict: bool = False) -> AdvancedNumber:
    """
    Parse ``text`` as exactly one number.

    Args:
        text: Text such as '3.14(2)', '-1,5 ± 0,2' or '(3.14±0.02)E5'
        strict: Forbid whitespace inside and around the number

    Returns:
        The parsed number

    Raises:
        FormatError: If the text does not match the grammar
        NumberOverflowError: If a component exceeds the supported range
    """
    match = match_number(text, strict)
    if match is None:
        msg = f"Not a number: '{text}'"
        raise FormatError(msg)
    return number_from_match(match)


def try_parse_number(text: str, strict: bool = False) -> AdvancedNumber | None:
    """Like ``parse_number`` but returns None instead of raising."""
    try:
        return parse_number(text, strict)
    except (FormatError, NumberOverflowError) as exc:
        logger.debug("Could not parse number from %r: %s", text, exc)
        return None


def parse_all(text: str, strict: bool = True) -> list[NumberMatch]:
    """
    Extract every number embedded in free text.

    Matches whose components overflow are skipped.

    Args:
        text: Free text
        strict: Forbid whitespace inside the numbers

    Returns:
        List of NumberMatch in order of appearance

    Example:
        >>> [m.text for m in parse_all("T = 3.14(2) K at 5E3 Pa")]
        ['3.14(2)', '5E3']
    """
    results = []
    for match in find_numbers(text, strict):
        try:
            number = number_from_match(match)
        except NumberOverflowError as exc:
            logger.debug("Skipping %r at %d: %s", match.group(0), match.start(), exc)
            continue
        results.append(NumberMatch(match.start(), match.end(), match.group(0), number))
    return results


# =============================================================================
# INTERNAL HELPERS
# =============================================================================


def _read_decimal(integer: str, fraction: str, what: str) -> Decimal:
    literal = f"{integer}.{fraction}" if fraction else integer
    value = CONTEXT.create_decimal(literal)
    if normal_pow10(value) >= DECIMAL_EXP_LIMIT:
        msg = f"{what} '{literal}' exceeds the fixed-point range"
        raise NumberOverflowError(msg)
    return value


def _read_exponent(digits: str, sign: str) -> int:
    if len(digits.lstrip("0")) > len(str(INT32_MAX)):
        msg = f"exponent {sign}{digits} is outside the 32-bit range"
        raise NumberOverflowError(msg)
    value = int(digits)
    if sign and sign in MINUS_SIGNS:
        value = -value
    if not INT32_MIN <= value <= INT32_MAX:
        msg = f"exponent {value} is outside the 32-bit range"
        raise NumberOverflowError(msg)
    return value
