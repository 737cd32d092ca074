"""
Unit Tables - Single Source of Truth

This module defines the static lookup data used by the unit layer: metric
prefixes with their powers of ten, and time-unit spellings with their length
in seconds. The tables are read-only for the lifetime of the process.

Variant ordering:
    - Prefix variants: index 0 is the Latin symbol, index 1 the Cyrillic
      symbol, further entries are accepted aliases.
    - Time-unit groups: group 0 holds English spellings, group 1 Russian
      spellings. Entry 0 of every group is the canonical spelling.

References:
    - BIPM: "The International System of Units (SI)", 9th ed., Table 7
    - IERS: mean Gregorian year of 365.2425 days
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType


class TimeUnit(Enum):
    """Supported time units, longest first."""

    YEAR = "year"
    MONTH = "month"
    WEEK = "week"
    DAY = "day"
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"


@dataclass(frozen=True, slots=True)
class PrefixSpec:
    """Specification for a metric prefix."""

    name: str
    power_of_10: int
    variants: tuple[str, ...]

    @property
    def symbol(self) -> str:
        """Canonical (Latin) symbol of the prefix."""
        return self.variants[0]


@dataclass(frozen=True, slots=True)
class TimeUnitSpec:
    """Specification for a time unit."""

    unit: TimeUnit
    seconds: int
    variant_groups: tuple[tuple[str, ...], ...]

    @property
    def symbol(self) -> str:
        """Canonical English spelling."""
        return self.variant_groups[0][0]

    @property
    def spellings(self) -> tuple[str, ...]:
        """All accepted spellings across every language group."""
        return tuple(s for group in self.variant_groups for s in group)


# =============================================================================
# METRIC PREFIXES
# =============================================================================
# The empty prefix (power 0) is implicit and never listed.

_PREFIX_SPECS: dict[int, PrefixSpec] = {
    spec.power_of_10: spec
    for spec in (
        PrefixSpec("yotta", 24, ("Y", "И")),
        PrefixSpec("zetta", 21, ("Z", "З")),
        PrefixSpec("exa", 18, ("E", "Э")),
        PrefixSpec("peta", 15, ("P", "П")),
        PrefixSpec("tera", 12, ("T", "Т")),
        PrefixSpec("giga", 9, ("G", "Г")),
        PrefixSpec("mega", 6, ("M", "М")),
        PrefixSpec("kilo", 3, ("k", "к")),
        PrefixSpec("hecto", 2, ("h", "г")),
        PrefixSpec("deca", 1, ("da", "да")),
        PrefixSpec("deci", -1, ("d", "д")),
        PrefixSpec("centi", -2, ("c", "с")),
        PrefixSpec("milli", -3, ("m", "м")),
        PrefixSpec("micro", -6, ("µ", "мк", "μ", "u")),  # micro sign, Greek mu, ASCII
        PrefixSpec("nano", -9, ("n", "н")),
        PrefixSpec("pico", -12, ("p", "п")),
        PrefixSpec("femto", -15, ("f", "ф")),
        PrefixSpec("atto", -18, ("a", "а")),
        PrefixSpec("zepto", -21, ("z", "з")),
        PrefixSpec("yocto", -24, ("y", "и")),
    )
}


# =============================================================================
# TIME UNITS
# =============================================================================
# Year and month use Gregorian averages (365.2425 days, 1/12 of that).
# Bare "m" is not a month spelling; it stays reserved for
# the metre and the milli prefix.

SECONDS_PER_YEAR = 31_556_952
SECONDS_PER_MONTH = 2_629_746
SECONDS_PER_WEEK = 604_800
SECONDS_PER_DAY = 86_400
SECONDS_PER_HOUR = 3_600
SECONDS_PER_MINUTE = 60

_TIME_UNIT_SPECS: dict[TimeUnit, TimeUnitSpec] = {
    TimeUnit.YEAR: TimeUnitSpec(
        unit=TimeUnit.YEAR,
        seconds=SECONDS_PER_YEAR,
        variant_groups=(
            ("y", "years", "year", "yr", "yrs"),
            ("лет", "год", "года", "г", "л"),
        ),
    ),
    TimeUnit.MONTH: TimeUnitSpec(
        unit=TimeUnit.MONTH,
        seconds=SECONDS_PER_MONTH,
        variant_groups=(
            ("mon", "months", "month", "mo"),
            ("мес", "месяцев", "месяц", "месяца"),
        ),
    ),
    TimeUnit.WEEK: TimeUnitSpec(
        unit=TimeUnit.WEEK,
        seconds=SECONDS_PER_WEEK,
        variant_groups=(
            ("w", "weeks", "week", "wk"),
            ("нед", "недель", "неделя", "недели", "н"),
        ),
    ),
    TimeUnit.DAY: TimeUnitSpec(
        unit=TimeUnit.DAY,
        seconds=SECONDS_PER_DAY,
        variant_groups=(
            ("d", "days", "day"),
            ("сут", "дней", "день", "дня", "суток", "д"),
        ),
    ),
    TimeUnit.HOUR: TimeUnitSpec(
        unit=TimeUnit.HOUR,
        seconds=SECONDS_PER_HOUR,
        variant_groups=(
            ("h", "hours", "hour", "hr", "hrs"),
            ("ч", "часов", "час", "часа"),
        ),
    ),
    TimeUnit.MINUTE: TimeUnitSpec(
        unit=TimeUnit.MINUTE,
        seconds=SECONDS_PER_MINUTE,
        variant_groups=(
            ("min", "minutes", "minute", "mins"),
            ("мин", "минут", "минута", "минуты"),
        ),
    ),
    TimeUnit.SECOND: TimeUnitSpec(
        unit=TimeUnit.SECOND,
        seconds=1,
        variant_groups=(
            ("s", "seconds", "second", "sec", "secs"),
            ("с", "секунд", "секунда", "секунды", "сек"),
        ),
    ),
}


# =============================================================================
# PUBLIC API
# =============================================================================


def get_prefix_spec(prefix: int | str) -> PrefixSpec:
    """
    Get the specification of a metric prefix.

    Args:
        prefix: Power of ten (e.g. 3) or prefix name (e.g. 'kilo', 'Micro')

    Returns:
        PrefixSpec with name, power of ten and glyph variants

    Raises:
        ValueError: If the prefix is unknown

    Example:
        >>> get_prefix_spec(3).symbol
        'k'
        >>> get_prefix_spec("milli").power_of_10
        -3
    """
    if isinstance(prefix, str):
        normalized = prefix.strip().lower()
        for spec in _PREFIX_SPECS.values():
            if spec.name == normalized:
                return spec
        valid = [s.name for s in list_prefixes()]
        raise ValueError(f"Unknown metric prefix: '{prefix}'. Valid: {valid}")

    if prefix not in _PREFIX_SPECS:
        valid_powers = sorted(_PREFIX_SPECS)
        raise ValueError(f"No metric prefix for 10^{prefix}. Valid: {valid_powers}")
    return _PREFIX_SPECS[prefix]


def get_prefix_table() -> Mapping[int, tuple[str, ...]]:
    """
    Get the read-only mapping of powers of ten to prefix glyph variants.

    Returns:
        Mapping such as {3: ('k', 'к'), -3: ('m', 'м'), ...}
    """
    return _PREFIX_TABLE


def list_prefixes() -> list[PrefixSpec]:
    """
    List all metric prefixes from largest to smallest power of ten.

    Returns:
        List of PrefixSpec
    """
    return sorted(_PREFIX_SPECS.values(), key=lambda s: -s.power_of_10)


def get_time_spec(unit: TimeUnit | str) -> TimeUnitSpec:
    """
    Get the specification of a time unit.

    Args:
        unit: Time unit (enum or name like 'hour', 'MINUTE')

    Returns:
        TimeUnitSpec with length in seconds and spelling groups

    Raises:
        ValueError: If the unit is unknown

    Example:
        >>> get_time_spec("hour").seconds
        3600
    """
    if isinstance(unit, str):
        unit = _parse_time_unit(unit)
    return _TIME_UNIT_SPECS[unit]


def get_time_table() -> Mapping[int, tuple[tuple[str, ...], ...]]:
    """
    Get the read-only mapping of seconds-multipliers to spelling groups.

    Returns:
        Mapping such as {3600: (('h', 'hours', ...), ('ч', 'часов', ...)), ...}
    """
    return _TIME_TABLE


def list_time_units() -> list[TimeUnitSpec]:
    """
    List all time units from longest to shortest.

    Returns:
        List of TimeUnitSpec
    """
    return [_TIME_UNIT_SPECS[u] for u in TimeUnit]


# =============================================================================
# INTERNAL HELPERS
# =============================================================================


def _parse_time_unit(name: str) -> TimeUnit:
    """Parse a string into a TimeUnit enum."""
    normalized = name.strip().lower()

    for unit in TimeUnit:
        if unit.value == normalized:
            return unit

    valid = [u.value for u in TimeUnit]
    raise ValueError(f"Unknown time unit: '{name}'. Valid: {valid}")


_PREFIX_TABLE: Mapping[int, tuple[str, ...]] = MappingProxyType(
    {power: spec.variants for power, spec in _PREFIX_SPECS.items()}
)

_TIME_TABLE: Mapping[int, tuple[tuple[str, ...], ...]] = MappingProxyType(
    {spec.seconds: spec.variant_groups for spec in _TIME_UNIT_SPECS.values()}
)
