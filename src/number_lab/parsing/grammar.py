"""Regular grammar for numbers with uncertainty and power-of-ten scale.

Recognized forms (case-insensitive):
    -3.14  3,14                    plain signed decimal
    3.14(2)                        bracket error, in units of the last digit
    3.14±0.02  3.14+-0.02          ± error
    3.14±2E-2                      ± error with its own exponent
    3.14E5  3.14×10E5  3.14·10^5   exponent only
    3.14×10⁵                       superscript exponent
    3.14E5(2)  3.14E5±2E3          exponent, then error
    3.14(2)E5  3.14(2)×10E5        error, then exponent
    (3.14±0.02)E5                  parenthesized ± value, exponent required

Strict patterns allow no whitespace inside the value or the bracket error;
spaced patterns tolerate it around signs, digits, decimal points and
delimiters.

Python patterns cannot reuse a group name across alternatives, so each
fragment receives suffixed names (``e__0``, ``e__1``, ...). ``match_groups``
folds them back to their base names; at most one alternative per base name
takes part in any match.

Group names:
    m, i, f       mantissa sign, integer digits, fraction digits
    em, e         exponent sign and digits
    sem, se       superscript exponent sign and digits
    d             bracket error digits
    di, df        ± error integer and fraction digits
    sd            ± error that carries its own exponent
    dem, de       sign and digits of that error exponent
"""

from __future__ import annotations

import re
from collections import Counter
from functools import cache

MINUS_SIGNS = "-−—–"
PLUS_SIGNS = "+"
MULTIPLY_SIGNS = "*•·×⨯x"
PLUS_MINUS_SIGNS = ("±", "+/-", "+-")
SUPERSCRIPT_DIGITS = "⁰¹²³⁴⁵⁶⁷⁸⁹"
SUPERSCRIPT_MINUS = "⁻"
SUPERSCRIPT_PLUS = "⁺"

_SIGN = "[" + re.escape(MINUS_SIGNS + PLUS_SIGNS) + "]"
_MULTIPLY = "[" + re.escape(MULTIPLY_SIGNS) + "]"
_PLUS_MINUS = "(?:" + "|".join(re.escape(s) for s in sorted(PLUS_MINUS_SIGNS, key=len, reverse=True)) + ")"
_SUPER_SIGN = "[" + SUPERSCRIPT_MINUS + SUPERSCRIPT_PLUS + "]"
_SUPER_DIGITS = "[" + SUPERSCRIPT_DIGITS + "]"

_NAME_SEPARATOR = "__"


class _GroupNamer:
    """Hands out unique group names for repeated fragments."""

    def __init__(self) -> None:
        self._counts: Counter[str] = Counter()

    def __call__(self, base: str) -> str:
        index = self._counts[base]
        self._counts[base] += 1
        return f"{base}{_NAME_SEPARATOR}{index}"


# =============================================================================
# FRAGMENTS
# =============================================================================


def _value(n: _GroupNamer, spaced: bool) -> str:
    ws = r"\s*" if spaced else ""
    return (
        f"(?P<{n('m')}>{_SIGN})?{ws}"
        f"(?P<{n('i')}>[0-9]+){ws}"
        f"(?:[.,]{ws}(?P<{n('f')}>[0-9]*))?"
    )


def _error_value(n: _GroupNamer, spaced: bool) -> str:
    ws = r"\s*" if spaced else ""
    return f"(?P<{n('di')}>[0-9]+){ws}(?:[.,]{ws}(?P<{n('df')}>[0-9]*))?"


def _exp_marker(n: _GroupNamer) -> str:
    return rf"(?:E\s*(?P<{n('em')}>{_SIGN})?(?P<{n('e')}>[0-9]+))"


def _exp_multiply(n: _GroupNamer) -> str:
    return (
        rf"(?:{_MULTIPLY}\s*10\s*(?:"
        rf"(?:E|\^)?\s*(?P<{n('em')}>{_SIGN})?(?P<{n('e')}>[0-9]+)"
        rf"|(?P<{n('sem')}>{_SUPER_SIGN})?(?P<{n('se')}>{_SUPER_DIGITS}+)"
        r"))"
    )


def _any_exp(n: _GroupNamer) -> str:
    return f"(?:{_exp_marker(n)}|{_exp_multiply(n)})"


def _error_exp(n: _GroupNamer) -> str:
    return rf"(?:E\s*(?P<{n('dem')}>{_SIGN})?(?P<{n('de')}>[0-9]+))"


def _bracket_error(n: _GroupNamer, spaced: bool) -> str:
    if spaced:
        return rf"(?:\(\s*(?P<{n('d')}>[0-9]+)\s*\))"
    return rf"(?:\((?P<{n('d')}>[0-9]+)\))"


def _pm_error(n: _GroupNamer, spaced: bool) -> str:
    return rf"(?:{_PLUS_MINUS}\s*{_error_value(n, spaced)})"


def _pm_error_exp(n: _GroupNamer, spaced: bool) -> str:
    return rf"(?P<{n('sd')}>{_PLUS_MINUS}\s*{_error_value(n, spaced)}\s*{_error_exp(n)})"


def _build(spaced: bool) -> str:
    n = _GroupNamer()

    exp_then_error = (
        rf"{_exp_marker(n)}\s*(?:{_bracket_error(n, spaced)}|{_pm_error_exp(n, spaced)})"
    )
    error_then_exp = rf"{_bracket_error(n, spaced)}\s*{_any_exp(n)}"
    error_only = (
        f"(?:{_bracket_error(n, spaced)}|{_pm_error_exp(n, spaced)}|{_pm_error(n, spaced)})"
    )
    exp_only = _any_exp(n)

    bare = (
        rf"{_value(n, spaced)}"
        rf"(?:\s*(?:{exp_then_error}|{error_then_exp}|{error_only}|{exp_only}))?"
    )
    wrapped = (
        rf"\(\s*{_value(n, spaced)}\s*{_pm_error(n, spaced)}\s*\)\s*{_any_exp(n)}"
    )
    return f"(?:{bare}|{wrapped})"


# =============================================================================
# PUBLIC API
# =============================================================================


@cache
def get_pattern(strict: bool = True) -> str:
    """
    Get the pattern source for one number (no anchors).

    Args:
        strict: Forbid whitespace inside the value and bracket error

    Returns:
        Pattern string to embed in larger expressions
    """
    return _build(spaced=not strict)


@cache
def get_regex(strict: bool = False) -> re.Pattern[str]:
    """
    Get the compiled pattern for matching a whole string.

    Use with ``fullmatch``. The spaced variant also accepts surrounding
    whitespace.

    Args:
        strict: Forbid whitespace inside and around the number
    """
    source = get_pattern(strict)
    if not strict:
        source = rf"\s*{source}\s*"
    return re.compile(source, re.IGNORECASE)


@cache
def get_search_regex(strict: bool = True) -> re.Pattern[str]:
    """Get the compiled pattern for finding numbers inside free text."""
    return re.compile(get_pattern(strict), re.IGNORECASE)


def match_groups(match: re.Match[str]) -> dict[str, str]:
    """
    Collect the participating groups of a match under their base names.

    Args:
        match: Match produced by one of this module's patterns

    Returns:
        Mapping of base group name (see module docstring) to matched text;
        groups that did not participate are absent

    Example:
        >>> match_groups(get_regex().fullmatch("3.14(2)"))
        {'i': '3', 'f': '14', 'd': '2'}
    """
    groups: dict[str, str] = {}
    for name, text in match.groupdict().items():
        if text is None:
            continue
        base = name.split(_NAME_SEPARATOR, 1)[0]
        groups.setdefault(base, text)
    return groups
