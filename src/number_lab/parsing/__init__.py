"""Parsing module for textual numbers with uncertainty.

This module contains:
- The regular grammar recognizing bracket, ± and exponent notations
- Whole-string parsing and extraction of numbers from free text
"""

from number_lab.parsing.grammar import (
    MINUS_SIGNS,
    MULTIPLY_SIGNS,
    PLUS_MINUS_SIGNS,
    PLUS_SIGNS,
    get_pattern,
    get_regex,
    get_search_regex,
    match_groups,
)
from number_lab.parsing.parser import (
    NumberMatch,
    find_numbers,
    match_number,
    number_from_match,
    parse_all,
    parse_number,
    search_number,
    try_parse_number,
)

__all__ = [
    # Grammar
    "MINUS_SIGNS",
    "MULTIPLY_SIGNS",
    "PLUS_MINUS_SIGNS",
    "PLUS_SIGNS",
    "get_pattern",
    "get_regex",
    "get_search_regex",
    "match_groups",
    # Parser
    "NumberMatch",
    "find_numbers",
    "match_number",
    "number_from_match",
    "parse_all",
    "parse_number",
    "search_number",
    "try_parse_number",
]
