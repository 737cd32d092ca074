"""Tests for metric prefixes, the base-unit registry and time units."""

from decimal import Decimal

import pytest

from number_lab.errors import DomainError, UnitError
from number_lab.units.metric_units import (
    BaseUnitRegistry,
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

METRE = ("m", "meter", "metre")


class TestBaseUnitRegistry:
    """Tests for base-unit registration."""

    def test_register_and_lookup(self) -> None:
        """Lookup by any spelling, ignoring case."""
        register_base_unit(*METRE)
        assert get_base_unit_variants_for("Metre") == METRE
        assert get_base_unit_variants_for("m") == METRE
        assert get_base_unit_variants_for("g") is None
        assert get_base_unit_variants_for("") is None

    def test_registered_spellings_in_order(self) -> None:
        """Spellings are listed group by group."""
        register_base_unit(*METRE)
        register_base_unit("g", "gram")
        assert get_registered_base_units() == ["m", "meter", "metre", "g", "gram"]

    def test_same_key_replaces_group(self) -> None:
        """Re-registering a key swaps its synonyms."""
        register_base_unit("m", "meter")
        register_base_unit("m", "metre")
        assert get_registry().groups() == (("m", "metre"),)

    def test_conflicting_spelling_raises(self) -> None:
        """Two groups cannot share a spelling."""
        register_base_unit(*METRE)
        with pytest.raises(DomainError, match="conflicts"):
            register_base_unit("M", "meter")

    @pytest.mark.parametrize("variants", [(), ("",), ("m", "")])
    def test_empty_spellings_raise(self, variants: tuple[str, ...]) -> None:
        """Every spelling must be non-empty."""
        with pytest.raises(DomainError):
            register_base_unit(*variants)

    def test_clear(self) -> None:
        """Clearing empties the registry."""
        register_base_unit(*METRE)
        clear_base_units()
        assert len(get_registry()) == 0
        assert get_registered_base_units() == []

    def test_variant_extends_group(self) -> None:
        """A Cyrillic spelling lands at index 1 and drives respelling."""
        register_base_unit("m", "meter")
        register_base_unit_variant("m", 1, "м")
        assert get_base_unit_variants_for("М") == ("m", "м")
        assert normalize_unit("km", 1) == "км"
        assert normalize_unit("км", 0) == "km"

    def test_variant_grows_group(self) -> None:
        """Skipped slots repeat the key and spellings are listed once."""
        register_base_unit("m", "meter")
        register_base_unit_variant("m", 3, "metr")
        assert get_base_unit_variants_for("metr") == ("m", "meter", "m", "metr")
        assert get_registered_base_units() == ["m", "meter", "metr"]

    def test_variant_creates_missing_group(self) -> None:
        """An unregistered key gets a new group."""
        register_base_unit_variant("g", 1, "г")
        assert get_registry().groups() == (("g", "г"),)
        assert units_are_compatible("кг", "g")

    def test_variant_conflict_raises(self) -> None:
        """A spelling owned by another group is rejected."""
        register_base_unit(*METRE)
        register_base_unit("g", "gram")
        with pytest.raises(DomainError, match="conflicts"):
            register_base_unit_variant("g", 2, "metre")
        assert get_base_unit_variants_for("g") == ("g", "gram")

    @pytest.mark.parametrize(
        "key,index,unit", [("m", 0, "м"), ("m", -1, "м"), ("", 1, "м"), ("m", 1, "")]
    )
    def test_variant_invalid_arguments_raise(self, key: str, index: int, unit: str) -> None:
        """The key slot is fixed and spellings must be non-empty."""
        with pytest.raises(DomainError):
            register_base_unit_variant(key, index, unit)

    def test_independent_registry(self) -> None:
        """A private registry does not touch the process-wide one."""
        registry = BaseUnitRegistry()
        registry.register("Pa", "pascal")
        assert registry.variants_for("PASCAL") == ("Pa", "pascal")
        assert len(get_registry()) == 0


class TestPrefixes:
    """Tests for prefix lookup and extraction."""

    @pytest.mark.parametrize(
        "power,variant,expected",
        [(3, 0, "k"), (3, 1, "к"), (-6, 0, "µ"), (0, 0, ""), (0, 1, ""), (4, 0, None), (3, 7, None)],
    )
    def test_prefix_for(self, power: int, variant: int, expected: str | None) -> None:
        """Glyph per power and language."""
        assert prefix_for(power, variant) == expected

    @pytest.mark.parametrize(
        "unit,base_units,expected",
        [
            ("km", "m", "k"),
            ("m", "m", ""),
            ("KM", "m", "K"),
            ("kg", "m", None),
            ("mmin", ["in", "min"], "m"),
            ("kmetre", METRE, "k"),
        ],
    )
    def test_extract_prefix(self, unit: str, base_units: object, expected: str | None) -> None:
        """Longest matching base spelling wins; prefix is not validated."""
        assert extract_prefix(unit, base_units) == expected  # type: ignore[arg-type]

    def test_extract_prefix_uses_registry(self) -> None:
        """Empty base_units means every registered spelling."""
        register_base_unit(*METRE)
        assert extract_prefix("kmeter") == "k"
        assert extract_prefix("kg") is None

    @pytest.mark.parametrize("prefix,expected", [("k", True), ("", True), ("мк", True), ("K", False), ("q", False), (None, False)])
    def test_validate_prefix(self, prefix: str | None, expected: bool) -> None:
        """Prefix glyphs are case-sensitive."""
        assert validate_prefix(prefix) is expected

    def test_prefix_power(self) -> None:
        """Known glyphs map to their power."""
        assert prefix_power("M") == 6
        assert prefix_power("н") == -9
        assert prefix_power("") == 0

    def test_prefix_power_unknown(self) -> None:
        """Unknown glyph raises UnitError."""
        with pytest.raises(UnitError, match="Unknown metric prefix"):
            prefix_power("q")


class TestUnits:
    """Tests for unit resolution."""

    def test_resolve_unit(self) -> None:
        """Prefix and power for valid units, None otherwise."""
        assert resolve_unit("km", "m") == ("k", 3)
        assert resolve_unit("m", "m") == ("", 0)
        assert resolve_unit("Km", "m") is None
        assert resolve_unit("", "m") is None

    def test_validate_unit_against_registry(self) -> None:
        """Units validate against registered spellings."""
        register_base_unit(*METRE)
        assert validate_unit("km")
        assert not validate_unit("nanometre")
        assert validate_unit("nmetre")
        assert not validate_unit("kg")

    @pytest.mark.parametrize("unit,expected", [("km", 3), ("µm", -6), ("m", 0), ("Mm", 6), ("mm", -3)])
    def test_get_power_of_10(self, unit: str, expected: int) -> None:
        """Power contributed by the prefix."""
        assert get_power_of_10(unit, "m") == expected

    def test_get_power_of_10_unresolvable(self) -> None:
        """Unresolvable unit raises UnitError."""
        with pytest.raises(UnitError, match="Cannot resolve unit"):
            get_power_of_10("kg", "m")

    def test_unit_error_is_domain_error(self) -> None:
        """UnitError belongs to the domain-error family."""
        with pytest.raises(DomainError):
            get_power_of_10("kg", "m")

    def test_extract_base_unit(self) -> None:
        """Base unit as written, or a chosen synonym."""
        assert extract_base_unit("kmetre", METRE) == "metre"
        assert extract_base_unit("kmetre", METRE, 0) == "m"
        assert extract_base_unit("kmetre", METRE, 5) is None
        assert extract_base_unit("kg", METRE, 0) is None

    def test_extract_base_unit_from_registry(self) -> None:
        """Without base_units the registered group is used."""
        register_base_unit(*METRE)
        assert extract_base_unit("kmetre", variant_index=1) == "meter"
        assert extract_base_unit("kg", variant_index=0) is None

    def test_normalize_unit(self) -> None:
        """Respelling with another language variant."""
        assert normalize_unit("km", 0, "m") == "km"
        assert normalize_unit("km", 1, ["m", "м"]) == "км"
        assert normalize_unit("xyz", 0, "m") is None

    def test_normalize_unit_from_registry(self) -> None:
        """Registered groups supply the target spelling."""
        register_base_unit("m", "м")
        assert normalize_unit("км") == "km"
        assert normalize_unit("mm", 1) == "мм"

    def test_units_are_compatible(self) -> None:
        """Compatible units share a base unit."""
        register_base_unit(*METRE)
        register_base_unit("g", "gram")
        assert units_are_compatible("km", "mmetre")
        assert not units_are_compatible("km", "kg")
        assert units_are_compatible("km", "mm", "m")
        assert not units_are_compatible("km", "kg", "m")


class TestTimeUnits:
    """Tests for time-unit handling."""

    @pytest.mark.parametrize(
        "unit,expected",
        [
            ("ms", (1, -3)),
            ("µs", (1, -6)),
            ("ns", (1, -9)),
            ("мс", (1, -3)),
            ("s", (1, 0)),
            ("с", (1, 0)),
            ("min", (60, 0)),
            ("mins", (60, 0)),
            ("h", (3600, 0)),
            ("ч", (3600, 0)),
            ("days", (86400, 0)),
            ("y", (31556952, 0)),
            ("Ms", (0, 0)),
            ("ks", (0, 0)),
            ("parsec", (0, 0)),
            ("", (0, 0)),
        ],
    )
    def test_time_scale(self, unit: str, expected: tuple[int, int]) -> None:
        """Multiplier and power of ten for each unit."""
        assert time_scale(unit) == expected

    def test_time_spelling_case_sensitive(self) -> None:
        """Time spellings must match exactly."""
        assert time_scale("H") == (0, 0)

    def test_get_time_multiplier(self) -> None:
        """Length of one unit in seconds."""
        assert get_time_multiplier("ms") == Decimal("0.001")
        assert get_time_multiplier("h") == 3600
        assert get_time_multiplier("parsec") == 0

    @pytest.mark.parametrize("unit,expected", [("ms", True), ("week", True), ("сут", True), ("m", False), ("km", False)])
    def test_validate_time_unit(self, unit: str, expected: bool) -> None:
        """Bare m is not a time unit."""
        assert validate_time_unit(unit) is expected

    @pytest.mark.parametrize(
        "unit,variant,expected",
        [
            ("hours", 0, "h"),
            ("часов", 0, "h"),
            ("hours", 1, "ч"),
            ("мс", 0, "ms"),
            ("ms", 1, "мс"),
            ("seconds", 0, "s"),
            ("minutes", 1, "мин"),
            ("parsec", 0, None),
        ],
    )
    def test_normalize_time_unit(self, unit: str, variant: int, expected: str | None) -> None:
        """Canonical spelling per language."""
        assert normalize_time_unit(unit, variant) == expected

    def test_get_time_unit(self) -> None:
        """Canonical spelling by length in seconds."""
        assert get_time_unit(60) == "min"
        assert get_time_unit(60, 1) == "мин"
        assert get_time_unit(61) is None
        assert get_time_unit(60, 2) is None
