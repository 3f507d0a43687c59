"""Arithmetic evaluation for calculator suggestions."""

from .errors import CalculatorError, DivisionByZero, InvalidExpression, UnsupportedOperation
from .evaluator import ExpressionEvaluator, evaluate, format_number

__all__ = [
    "CalculatorError",
    "DivisionByZero",
    "ExpressionEvaluator",
    "InvalidExpression",
    "UnsupportedOperation",
    "evaluate",
    "format_number",
]
