"""Number Lab: parsing, uncertainty arithmetic and formatting of measured numbers."""

import logging

__version__ = "0.1.0"

from number_lab.errors import (
    DomainError,
    FormatError,
    InvalidStateError,
    NumberLabError,
    NumberOverflowError,
    UnitError,
)
from number_lab.numerics import (
    DEFAULT_FORMAT,
    NEGATIVE_INFINITY,
    POSITIVE_INFINITY,
    AdvancedNumber,
    NumberFormat,
    format_number,
    get_current_format,
    get_format,
    set_current_format,
)
from number_lab.parsing import parse_all, parse_number, try_parse_number
from number_lab.units import (
    ModifierType,
    NumberContainer,
    clear_base_units,
    register_base_unit,
    register_base_unit_variant,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    # Errors
    "DomainError",
    "FormatError",
    "InvalidStateError",
    "NumberLabError",
    "NumberOverflowError",
    "UnitError",
    # Numbers and formatting
    "AdvancedNumber",
    "DEFAULT_FORMAT",
    "NEGATIVE_INFINITY",
    "NumberFormat",
    "POSITIVE_INFINITY",
    "format_number",
    "get_current_format",
    "get_format",
    "set_current_format",
    # Parsing
    "parse_all",
    "parse_number",
    "try_parse_number",
    # Quantities
    "ModifierType",
    "NumberContainer",
    "clear_base_units",
    "register_base_unit",
    "register_base_unit_variant",
]
