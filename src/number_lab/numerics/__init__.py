"""Number type and formatting module.

This module contains:
- AdvancedNumber, the value-error-exponent number with error propagation
- The formatting engine and its NumberFormat configuration
- Fixed-point digit helpers shared by both
"""

from number_lab.numerics.advanced_number import (
    MAX_POWER_OF_10,
    NEGATIVE_INFINITY,
    POSITIVE_INFINITY,
    AdvancedNumber,
    result_arrays,
)
from number_lab.numerics.formatting import (
    DEFAULT_FORMAT,
    NumberFormat,
    format_number,
    get_current_format,
    get_format,
    list_formats,
    set_current_format,
)

__all__ = [
    # Number type
    "AdvancedNumber",
    "MAX_POWER_OF_10",
    "NEGATIVE_INFINITY",
    "POSITIVE_INFINITY",
    "result_arrays",
    # Formatting
    "DEFAULT_FORMAT",
    "NumberFormat",
    "format_number",
    "get_current_format",
    "get_format",
    "list_formats",
    "set_current_format",
]
