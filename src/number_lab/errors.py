"""Error types raised by number-lab.

Every error derives from ``NumberLabError`` and from the built-in exception
that best describes it, so callers may catch either family.
"""


class NumberLabError(Exception):
    """Base class for all number-lab errors."""


class FormatError(NumberLabError, ValueError):
    """Text does not match the number grammar."""


class NumberOverflowError(NumberLabError, OverflowError):
    """Parsed magnitude or exponent exceeds the supported native range."""


class DomainError(NumberLabError, ValueError):
    """Argument outside the domain of an operation.

    Raised for negative errors, NaN inputs, non-positive digit counts and
    conflicting base-unit registrations.
    """


class UnitError(DomainError):
    """Unit or metric prefix cannot be resolved against the unit tables."""


class InvalidStateError(NumberLabError, RuntimeError):
    """Normalization requested for a unit the value is not compatible with."""
