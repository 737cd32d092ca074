"""Units module for quantities with metric and time units.

This module contains:
- Metric-prefix resolution and the base-unit registry
- Time-unit conversion to seconds
- NumberContainer, a number with unit and approximation modifier
"""

from number_lab.units.container import RANGE_SEPARATOR, ModifierType, NumberContainer
from number_lab.units.metric_units import (
    BaseUnitRegistry,
    UnitNames,
    clear_base_units,
    extract_base_unit,
    extract_prefix,
    get_base_unit_variants_for,
    get_power_of_10,
    get_registered_base_units,
    get_registry,
    get_time_multiplier,
    get_time_unit,
    normalize_time_unit,
    normalize_unit,
    prefix_for,
    prefix_power,
    register_base_unit,
    register_base_unit_variant,
    resolve_unit,
    time_scale,
    units_are_compatible,
    validate_prefix,
    validate_time_unit,
    validate_unit,
)

__all__ = [
    # Container
    "ModifierType",
    "NumberContainer",
    "RANGE_SEPARATOR",
    # Base-unit registry
    "BaseUnitRegistry",
    "UnitNames",
    "clear_base_units",
    "get_base_unit_variants_for",
    "get_registered_base_units",
    "get_registry",
    "register_base_unit",
    "register_base_unit_variant",
    # Prefixes and units
    "extract_base_unit",
    "extract_prefix",
    "get_power_of_10",
    "normalize_unit",
    "prefix_for",
    "prefix_power",
    "resolve_unit",
    "units_are_compatible",
    "validate_prefix",
    "validate_unit",
    # Time units
    "get_time_multiplier",
    "get_time_unit",
    "normalize_time_unit",
    "time_scale",
    "validate_time_unit",
]
