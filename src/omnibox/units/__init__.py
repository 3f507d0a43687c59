"""Unit conversion suggestions."""

from .converter import UnitConverter, convert_value

__all__ = ["UnitConverter", "convert_value"]
