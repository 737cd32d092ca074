"""Data module for metric prefix and time-unit lookup tables."""

from number_lab.data.unit_tables import (
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
    SECONDS_PER_MONTH,
    SECONDS_PER_WEEK,
    SECONDS_PER_YEAR,
    PrefixSpec,
    TimeUnit,
    TimeUnitSpec,
    get_prefix_spec,
    get_prefix_table,
    get_time_spec,
    get_time_table,
    list_prefixes,
    list_time_units,
)

__all__ = [
    "SECONDS_PER_DAY",
    "SECONDS_PER_HOUR",
    "SECONDS_PER_MINUTE",
    "SECONDS_PER_MONTH",
    "SECONDS_PER_WEEK",
    "SECONDS_PER_YEAR",
    "PrefixSpec",
    "TimeUnit",
    "TimeUnitSpec",
    "get_prefix_spec",
    "get_prefix_table",
    "get_time_spec",
    "get_time_table",
    "list_prefixes",
    "list_time_units",
]
