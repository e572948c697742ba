# pawdiary/api/units/test_registry.py
import itertools

import pytest

from pawdiary.models.unit import UnitCategory, NOMINAL_CATEGORIES
from pawdiary.api.units.registry import (
    UNIT_DEFINITIONS,
    get_unit_definition,
    get_units_for_category,
    get_base_unit,
    convert_units,
    convert_to_optimal_display_unit,
    format_value_with_unit,
)

MAGNITUDE_CATEGORIES = [c for c in UnitCategory if c not in NOMINAL_CATEGORIES]


def test_every_category_has_exactly_one_base_unit():
    for category in UnitCategory:
        base_units = [u for u in get_units_for_category(category) if u.is_base_unit]
        assert len(base_units) == 1, category
        assert get_base_unit(category.value) == base_units[0]

def test_lookups():
    assert get_unit_definition('kg').category == UnitCategory.WEIGHT
    assert get_unit_definition('parsec') is None
    assert [u.id for u in get_units_for_category('length')] == ['cm', 'm', 'mm', 'in', 'ft']
    assert get_units_for_category('bogus') == []
    assert get_base_unit('bogus') is None

def test_identity_conversion_for_all_units():
    for unit_id in UNIT_DEFINITIONS:
        assert convert_units(7.5, unit_id, unit_id) == 7.5

def test_basic_conversions():
    assert convert_units(1, 'kg', 'g') == 1000
    assert convert_units(500, 'g', 'kg') == pytest.approx(0.5)
    assert convert_units(1, 'lb', 'g') == pytest.approx(453.592)
    assert convert_units(1, 'cup', 'ml') == pytest.approx(236.588)
    assert convert_units(1, 'm', 'cm') == 100
    assert convert_units(12, 'in', 'ft') == pytest.approx(1.0, rel=1e-3)

def test_temperature_is_affine():
    assert convert_units(100, 'celsius', 'fahrenheit') == pytest.approx(212)
    assert convert_units(0, 'celsius', 'fahrenheit') == pytest.approx(32)
    assert convert_units(98.6, 'fahrenheit', 'celsius') == pytest.approx(37)
    assert convert_units(-40, 'fahrenheit', 'celsius') == pytest.approx(-40)

def test_inverse_conversion_within_category():
    for category in MAGNITUDE_CATEGORIES:
        unit_ids = [u.id for u in get_units_for_category(category)]
        for u1, u2 in itertools.permutations(unit_ids, 2):
            forward = convert_units(12.34, u1, u2)
            assert forward is not None, (u1, u2)
            assert convert_units(forward, u2, u1) == pytest.approx(12.34), (u1, u2)

def test_cross_category_returns_none():
    assert convert_units(5, 'kg', 'ml') is None
    assert convert_units(5, 'cm', 'celsius') is None
    assert convert_units(5, 'piece', 'portion') is None

def test_unknown_unit_returns_none():
    assert convert_units(5, 'kg', 'stone') is None
    assert convert_units(5, 'stone', 'kg') is None

def test_nominal_units_never_convert():
    for category in NOMINAL_CATEGORIES:
        unit_ids = [u.id for u in get_units_for_category(category)]
        for u1, u2 in itertools.permutations(unit_ids, 2):
            assert convert_units(3, u1, u2) is None

def test_optimal_display_unit():
    assert convert_to_optimal_display_unit(1500, 'g') == (pytest.approx(1.5), 'kg')
    assert convert_to_optimal_display_unit(2500, 'ml') == (pytest.approx(2.5), 'l')
    assert convert_to_optimal_display_unit(6, 'tsp') == (pytest.approx(2.0, rel=1e-3), 'tbsp')
    assert convert_to_optimal_display_unit(25, 'mm') == (pytest.approx(2.5), 'cm')
    assert convert_to_optimal_display_unit(150, 'cm') == (pytest.approx(1.5), 'm')

def test_optimal_display_unit_below_threshold_unchanged():
    assert convert_to_optimal_display_unit(999, 'g') == (999, 'g')
    assert convert_to_optimal_display_unit(3, 'kg') == (3, 'kg')
    assert convert_to_optimal_display_unit(10, 'unknown') == (10, 'unknown')

def test_format_value_with_unit():
    assert format_value_with_unit(5.2, 'kg') == '5.20 kg'
    assert format_value_with_unit(5.2, 'kg', decimals=0) == '5 kg'
    assert format_value_with_unit(1, 'cup', decimals=0, show_label=True) == '1 Cup'
    assert format_value_with_unit(2, 'cup', decimals=0, show_label=True) == '2 Cups'
    assert format_value_with_unit(3.14159, 'unknown') == '3.14159'
