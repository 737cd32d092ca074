"""Shared fixtures for number-lab tests."""

import pytest

from number_lab.numerics.formatting import DEFAULT_FORMAT, set_current_format
from number_lab.units.metric_units import clear_base_units


@pytest.fixture(autouse=True)
def isolated_state():
    """Start every test with an empty base-unit registry and default format."""
    clear_base_units()
    set_current_format(DEFAULT_FORMAT)
    yield
    clear_base_units()
    set_current_format(DEFAULT_FORMAT)
