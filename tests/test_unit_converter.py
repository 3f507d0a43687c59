"""Tests for UnitConverter."""

import pytest

from omnibox.models.query import QueryType
from omnibox.units import UnitConverter, convert_value


@pytest.fixture
def converter():
    return UnitConverter()


def test_celsius_to_fahrenheit(converter):
    suggestion = converter.convert("0 celsius to fahrenheit")

    assert suggestion is not None
    assert suggestion.title == "0 celsius = 32.00 fahrenheit"
    assert suggestion.type == QueryType.UNIT_CONVERSION
    assert suggestion.metadata["result"] == "32.00"


def test_fahrenheit_to_celsius_short_target(converter):
    suggestion = converter.convert("212 fahrenheit to c")
    assert suggestion is not None
    assert suggestion.title == "212 fahrenheit = 100.00 c"


def test_miles_to_km(converter):
    suggestion = converter.convert("10 miles to km")
    assert suggestion is not None
    assert suggestion.title == "10 miles = 16.09 km"
    assert suggestion.metadata["from"] == "miles"
    assert suggestion.metadata["to"] == "km"


def test_value_without_space_before_unit(converter):
    suggestion = converter.convert("5kg to pounds")
    assert suggestion is not None
    assert suggestion.title == "5 kg = 11.02 pounds"


def test_singular_unit_names(converter):
    suggestion = converter.convert("1 mile to km")
    assert suggestion is not None
    assert suggestion.title == "1 mile = 1.61 km"

    assert converter.convert("1 foot to meters").title == "1 foot = 0.30 meters"


def test_case_insensitive(converter):
    suggestion = converter.convert("10 Miles TO KM")
    assert suggestion is not None
    assert suggestion.title == "10 miles = 16.09 km"


def test_fractional_value(converter):
    assert converter.convert("2.5 feet to m").title == "2.5 feet = 0.76 m"


@pytest.mark.parametrize(
    "phrase",
    [
        "",
        "10 miles",
        "miles to km",
        "10 miles to",
        "10 miles to km to m",
        "10 apples to oranges",
        "10 miles to pounds",
        "1.2.3 miles to km",
    ],
)
def test_unconvertible_phrases(converter, phrase):
    assert converter.convert(phrase) is None


@pytest.mark.parametrize(
    "unit_a,unit_b",
    [
        ("miles", "km"),
        ("km", "miles"),
        ("pounds", "kg"),
        ("kg", "pounds"),
        ("feet", "meters"),
        ("meters", "feet"),
    ],
)
def test_linear_pairs_invert(unit_a, unit_b):
    there = convert_value(42.0, unit_a, unit_b)
    back = convert_value(there, unit_b, unit_a)
    assert back == pytest.approx(42.0, rel=1e-4)


def test_temperature_inverts():
    assert convert_value(convert_value(37.0, "celsius", "fahrenheit"), "fahrenheit", "celsius") == pytest.approx(37.0)


def test_unknown_pair():
    assert convert_value(1.0, "miles", "celsius") is None
