"""Unit conversion for phrases like ``"10 miles to km"``."""

import math
import re
from typing import Optional

from ..calc.evaluator import format_number
from ..models.query import QueryType
from ..models.suggestion import SearchSuggestion

SEPARATOR = " to "
VALUE_AND_UNIT = re.compile(r"([0-9.]+)\s*([a-zA-Z]+)")

# from_unit -> to_unit -> multiplier
LINEAR_CONVERSIONS: dict[str, dict[str, float]] = {
    "miles": {"km": 1.60934, "kilometers": 1.60934},
    "km": {"miles": 0.621371},
    "kilometers": {"miles": 0.621371},
    "pounds": {"kg": 0.453592, "kilograms": 0.453592},
    "kg": {"pounds": 2.20462},
    "kilograms": {"pounds": 2.20462},
    "feet": {"meters": 0.3048, "m": 0.3048},
    "meters": {"feet": 3.28084},
    "m": {"feet": 3.28084},
}

# Singular spellings the classifier accepts, folded onto table keys.
UNIT_ALIASES: dict[str, str] = {
    "mile": "miles",
    "kilometer": "kilometers",
    "pound": "pounds",
    "kilogram": "kilograms",
    "foot": "feet",
    "meter": "meters",
}

FAHRENHEIT_TARGETS = frozenset({"fahrenheit", "f"})
CELSIUS_TARGETS = frozenset({"celsius", "c"})


def _canonical(unit: str) -> str:
    unit = unit.strip().lower()
    return UNIT_ALIASES.get(unit, unit)


def convert_value(value: float, from_unit: str, to_unit: str) -> Optional[float]:
    """Convert a number between two units, or None if the pair is unknown."""
    src = _canonical(from_unit)
    dst = _canonical(to_unit)

    # Temperature is affine, not a multiplier.
    if src == "fahrenheit" and dst in CELSIUS_TARGETS:
        return (value - 32) * 5 / 9
    if src == "celsius" and dst in FAHRENHEIT_TARGETS:
        return value * 9 / 5 + 32

    multiplier = LINEAR_CONVERSIONS.get(src, {}).get(dst)
    if multiplier is None:
        return None
    return value * multiplier


class UnitConverter:
    """Turns a conversion phrase into a unit_conversion suggestion."""

    def convert(self, phrase: str) -> Optional[SearchSuggestion]:
        """Convert ``"<number><unit> to <unit>"``.

        Args:
            phrase: Raw query text

        Returns:
            A suggestion titled ``"<value> <from> = <result> <to>"``, or None
            when the phrase cannot be parsed or the unit pair is unknown
        """
        parts = phrase.lower().split(SEPARATOR)
        if len(parts) != 2:
            return None
        from_part = parts[0].strip()
        to_unit = parts[1].strip()

        match = VALUE_AND_UNIT.search(from_part)
        if match is None or not to_unit:
            return None
        try:
            value = float(match.group(1))
        except ValueError:
            return None
        from_unit = match.group(2)

        converted = convert_value(value, from_unit, to_unit)
        if converted is None or not math.isfinite(converted):
            return None

        return SearchSuggestion(
            title=f"{format_number(value)} {from_unit} = {converted:.2f} {to_unit}",
            subtitle="Unit Conversion",
            type=QueryType.UNIT_CONVERSION,
            icon=QueryType.UNIT_CONVERSION.icon,
            metadata={"from": from_unit, "to": to_unit, "result": f"{converted:.2f}"},
            relevance_score=1.0,
        )
