"""Metric prefixes, base-unit registry and time units.

A unit string is a metric prefix followed by a base-unit spelling
(``km`` = ``k`` + ``m``). Base units are not built in: callers register
synonym groups such as ``("m", "meter", "metre")`` at start-up. Time units
come from the static tables in ``number_lab.data``; sub-second units are
handled as prefixed seconds (``ms``, ``µs``).

Most lookups take a ``base_units`` argument naming candidate base-unit
spellings. A plain string counts as a one-element list, and an empty value
means "every registered spelling".

Variant indices select a language: 0 for Latin/English spellings, 1 for
Cyrillic/Russian spellings.

Note:
    Registration mutates process-wide state. Register during
    initialization; concurrent registration must be serialized by the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from decimal import Decimal

from number_lab.data.unit_tables import (
    TimeUnit,
    get_prefix_table,
    get_time_spec,
    get_time_table,
    list_time_units,
)
from number_lab.errors import DomainError, UnitError
from number_lab.numerics.decimal_utils import scale

logger = logging.getLogger(__name__)

UnitNames = str | Sequence[str]

_SECOND_SPELLINGS: tuple[str, ...] = tuple(
    group[0] for group in get_time_spec(TimeUnit.SECOND).variant_groups
)


class BaseUnitRegistry:
    """Ordered synonym groups of base-unit spellings.

    Entry 0 of a group is its key. No two groups may share a spelling
    (compared case-insensitively); registering a group under an existing
    key replaces that group.
    """

    __slots__ = ("_groups",)

    def __init__(self) -> None:
        self._groups: list[tuple[str, ...]] = []

    def register(self, *variants: str) -> None:
        """Register one synonym group.

        Args:
            *variants: Interchangeable spellings, canonical key first.

        Raises:
            DomainError: If no spelling is given, or a spelling already
                belongs to a group with a different key.
        """
        if not variants or not all(variants):
            msg = f"Base unit needs non-empty spellings, got {variants!r}"
            raise DomainError(msg)

        group = tuple(variants)
        index = self._index_for(group)
        if index is None:
            self._groups.append(group)
            logger.debug("Registered base unit %r: %s", group[0], group)
        else:
            self._groups[index] = group
            logger.debug("Replaced base unit %r: %s", group[0], group)

    def register_variant(self, key: str, variant_index: int, unit: str) -> None:
        """Set one spelling at a variant index of the group keyed by ``key``.

        A missing group is created. A group too short for ``variant_index``
        is grown, and skipped slots repeat the key so that every entry stays
        a usable spelling.

        Args:
            key: Canonical key of the group (entry 0).
            variant_index: Slot to set, 1 or above; the key itself is fixed.
            unit: Spelling to store.

        Raises:
            DomainError: If an argument is empty or out of range, or ``unit``
                already belongs to a group with a different key.
        """
        if not key or not unit:
            msg = f"Base unit needs non-empty spellings, got {key!r} and {unit!r}"
            raise DomainError(msg)
        if variant_index < 1:
            msg = f"variant_index must be at least 1, got {variant_index}"
            raise DomainError(msg)

        index = self._index_for((key, unit))
        group = [key] if index is None else list(self._groups[index])
        if len(group) <= variant_index:
            group.extend([key] * (variant_index + 1 - len(group)))
        group[variant_index] = unit

        if index is None:
            self._groups.append(tuple(group))
        else:
            self._groups[index] = tuple(group)
        logger.debug("Set variant %d of base unit %r to %r", variant_index, key, unit)

    def clear(self) -> None:
        """Remove every registered group."""
        self._groups.clear()
        logger.debug("Cleared base-unit registry")

    def groups(self) -> tuple[tuple[str, ...], ...]:
        """All groups in registration order."""
        return tuple(self._groups)

    def spellings(self) -> list[str]:
        """All registered spellings, group by group, without repeats."""
        return list(dict.fromkeys(s for group in self._groups for s in group))

    def variants_for(self, unit: str) -> tuple[str, ...] | None:
        """The group containing ``unit`` (case-insensitive), or None."""
        if not unit:
            return None
        folded = unit.casefold()
        for group in self._groups:
            if any(s.casefold() == folded for s in group):
                return group
        return None

    def __len__(self) -> int:
        return len(self._groups)

    def _index_for(self, group: tuple[str, ...]) -> int | None:
        wanted = {s.casefold() for s in group}
        key = group[0]
        index = None
        for ix, registered in enumerate(self._groups):
            if wanted.isdisjoint(s.casefold() for s in registered):
                continue
            if registered[0] != key:
                shared = sorted(wanted.intersection(s.casefold() for s in registered))
                msg = (
                    f"Base unit '{key}' conflicts with registered unit "
                    f"'{registered[0]}' on spellings {shared}"
                )
                raise DomainError(msg)
            index = ix
        return index


_REGISTRY = BaseUnitRegistry()


# =============================================================================
# BASE-UNIT REGISTRY
# =============================================================================


def get_registry() -> BaseUnitRegistry:
    """Process-wide base-unit registry."""
    return _REGISTRY


def register_base_unit(*variants: str) -> None:
    """
    Register a synonym group for a base unit.

    Args:
        *variants: Interchangeable spellings, canonical key first

    Raises:
        DomainError: If a spelling belongs to another group

    Example:
        >>> register_base_unit("m", "meter", "metre")
        >>> get_base_unit_variants_for("Metre")
        ('m', 'meter', 'metre')
    """
    _REGISTRY.register(*variants)


def register_base_unit_variant(key: str, variant_index: int, unit: str) -> None:
    """
    Set one language variant of a base unit.

    Args:
        key: Canonical key of the group; created if unregistered
        variant_index: 1 for Cyrillic, higher for further spellings
        unit: Spelling to store at that index

    Raises:
        DomainError: If ``unit`` belongs to another group or the index is below 1

    Example:
        >>> register_base_unit("m", "meter")
        >>> register_base_unit_variant("m", 1, "м")
        >>> get_base_unit_variants_for("м")
        ('m', 'м')
    """
    _REGISTRY.register_variant(key, variant_index, unit)


def clear_base_units() -> None:
    """Remove every registered base unit."""
    _REGISTRY.clear()


def get_registered_base_units() -> list[str]:
    """List every registered spelling."""
    return _REGISTRY.spellings()


def get_base_unit_variants_for(unit: str) -> tuple[str, ...] | None:
    """Synonym group containing ``unit``, or None if unregistered."""
    return _REGISTRY.variants_for(unit)


# =============================================================================
# PREFIXES AND UNITS
# =============================================================================


def prefix_for(power_of_10: int, variant_index: int = 0) -> str | None:
    """
    Get the prefix glyph for a power of ten.

    Args:
        power_of_10: Power of ten (0 gives the empty prefix)
        variant_index: 0 for Latin, 1 for Cyrillic

    Returns:
        Prefix glyph, or None if no prefix exists for that power or variant
    """
    if power_of_10 == 0:
        return ""
    variants = get_prefix_table().get(power_of_10)
    if variants is None or not 0 <= variant_index < len(variants):
        return None
    return variants[variant_index]


def extract_prefix(unit: str, base_units: UnitNames = ()) -> str | None:
    """
    Split the prefix off a unit string.

    The longest base-unit spelling that ends ``unit`` (case-insensitive)
    wins; whatever precedes it is the prefix. The prefix is not validated.

    Args:
        unit: Unit string such as 'km'
        base_units: Candidate base-unit spellings (empty = registered ones)

    Returns:
        The prefix ('' for a bare base unit), or None if no spelling matches

    Example:
        >>> extract_prefix("km", "m")
        'k'
    """
    best: str | None = None
    for spelling in _candidates(base_units):
        cut = len(unit) - len(spelling)
        if not spelling or cut < 0:
            continue
        if unit[cut:].casefold() == spelling.casefold():
            if best is None or cut < len(best):
                best = unit[:cut]
    return best


def validate_prefix(prefix: str | None) -> bool:
    """True for the empty prefix or a known prefix glyph (case-sensitive)."""
    return _lookup_prefix(prefix) is not None


def prefix_power(prefix: str) -> int:
    """
    Get the power of ten of a prefix glyph.

    Raises:
        UnitError: If the prefix is unknown
    """
    power = _lookup_prefix(prefix)
    if power is None:
        msg = f"Unknown metric prefix: '{prefix}'"
        raise UnitError(msg)
    return power


def resolve_unit(unit: str, base_units: UnitNames = ()) -> tuple[str, int] | None:
    """
    Resolve a unit into its prefix and the prefix's power of ten.

    Returns:
        Tuple of (prefix, power of ten), or None if the unit does not end in
        a candidate spelling or its prefix is unknown
    """
    if not unit:
        return None
    prefix = extract_prefix(unit, base_units)
    power = _lookup_prefix(prefix)
    if prefix is None or power is None:
        return None
    return prefix, power


def validate_unit(unit: str, base_units: UnitNames = ()) -> bool:
    """True if ``unit`` is a known prefix followed by a candidate spelling."""
    return resolve_unit(unit, base_units) is not None


def get_power_of_10(unit: str, base_units: UnitNames = ()) -> int:
    """
    Get the power of ten contributed by the prefix of ``unit``.

    Raises:
        UnitError: If the unit cannot be resolved

    Example:
        >>> get_power_of_10("km", "m")
        3
    """
    resolved = resolve_unit(unit, base_units)
    if resolved is None:
        msg = f"Cannot resolve unit '{unit}' against base units {list(_candidates(base_units))}"
        raise UnitError(msg)
    return resolved[1]


def extract_base_unit(
    unit: str, base_units: UnitNames = (), variant_index: int | None = None
) -> str | None:
    """
    Strip the prefix from a unit.

    Args:
        unit: Unit string such as 'kmetre'
        base_units: Candidate base-unit spellings (empty = registered ones)
        variant_index: If given, return that spelling of the base unit:
            from its registered group when ``base_units`` is empty, from
            ``base_units`` otherwise, which then names one unit's synonyms

    Returns:
        The base unit as written (no ``variant_index``), the requested
        spelling, or None if it is unavailable
    """
    prefix = extract_prefix(unit, base_units)
    base = unit if prefix is None else unit[len(prefix):]
    if variant_index is None:
        return base
    if prefix is None and base_units:
        return None
    group = _group_for(base, base_units)
    if group is None or not 0 <= variant_index < len(group):
        return None
    return group[variant_index]


def normalize_unit(
    unit: str, variant_index: int = 0, base_units: UnitNames = ()
) -> str | None:
    """
    Respell a unit with the given variant of its prefix and base unit.

    Example:
        >>> normalize_unit("km", 0, "m")
        'km'
    """
    resolved = resolve_unit(unit, base_units)
    if resolved is None:
        return None
    prefix, power = resolved
    new_prefix = prefix_for(power, variant_index)
    group = _group_for(unit[len(prefix):], base_units)
    if new_prefix is None or group is None or not 0 <= variant_index < len(group):
        return None
    return new_prefix + group[variant_index]


def units_are_compatible(unit1: str, unit2: str, base_units: UnitNames = ()) -> bool:
    """True if both units reduce to the same base unit."""
    base1 = extract_base_unit(unit1, base_units, 0)
    base2 = extract_base_unit(unit2, base_units, 0)
    return base1 is not None and base1 == base2


# =============================================================================
# TIME UNITS
# =============================================================================


def time_scale(unit: str) -> tuple[int, int]:
    """
    Get the factor converting a time unit to seconds.

    Sub-second units are prefixed seconds and scale by a power of ten;
    longer units come from the time table (exact, case-sensitive spelling).

    Args:
        unit: Time unit such as 'ms', 'min' or 'ч'

    Returns:
        Tuple of (multiplier in seconds, power of ten); (0, 0) if unknown

    Example:
        >>> time_scale("ms")
        (1, -3)
        >>> time_scale("h")
        (3600, 0)
    """
    if not unit:
        return 0, 0
    resolved = resolve_unit(unit, _SECOND_SPELLINGS)
    if resolved is not None and resolved[1] <= 0:
        return 1, resolved[1]
    for spec in list_time_units():
        if unit in spec.spellings:
            return spec.seconds, 0
    return 0, 0


def get_time_multiplier(unit: str) -> Decimal:
    """Length of one ``unit`` in seconds; 0 if unknown."""
    seconds, power = time_scale(unit)
    return scale(Decimal(seconds), power)


def validate_time_unit(unit: str) -> bool:
    """True for any known time unit, including prefixed seconds."""
    return time_scale(unit)[0] > 0


def normalize_time_unit(unit: str, variant_index: int = 0) -> str | None:
    """
    Respell a time unit in the canonical form of the given language.

    Example:
        >>> normalize_time_unit("hours")
        'h'
        >>> normalize_time_unit("мс")
        'ms'
    """
    seconds, power = time_scale(unit)
    if not seconds:
        return None
    if power < 0:
        return normalize_unit(unit, variant_index, _SECOND_SPELLINGS)
    return get_time_unit(seconds, variant_index)


def get_time_unit(multiplier: int, variant_index: int = 0) -> str | None:
    """Canonical spelling of the time unit lasting ``multiplier`` seconds."""
    groups = get_time_table().get(multiplier)
    if groups is None or not 0 <= variant_index < len(groups):
        return None
    return groups[variant_index][0]


# =============================================================================
# INTERNAL HELPERS
# =============================================================================


def _candidates(base_units: UnitNames) -> tuple[str, ...]:
    if isinstance(base_units, str):
        return (base_units,) if base_units else tuple(_REGISTRY.spellings())
    if not base_units:
        return tuple(_REGISTRY.spellings())
    return tuple(base_units)


def _group_for(base: str, base_units: UnitNames) -> tuple[str, ...] | None:
    if not base_units:
        return _REGISTRY.variants_for(base)
    return _candidates(base_units)


def _lookup_prefix(prefix: str | None) -> int | None:
    if prefix is None:
        return None
    if prefix == "":
        return 0
    for power, variants in get_prefix_table().items():
        if prefix in variants:
            return power
    return None
