"""Tests for the arithmetic expression evaluator."""

import pytest

from omnibox.calc import (
    CalculatorError,
    DivisionByZero,
    ExpressionEvaluator,
    InvalidExpression,
    UnsupportedOperation,
    evaluate,
    format_number,
)
from omnibox.calc.evaluator import NEGATE, to_rpn, tokenize, validate
from omnibox.models.query import QueryType


@pytest.mark.parametrize(
    "expression,expected",
    [
        ("2+2", 4.0),
        ("(2+3)*4", 20.0),
        ("2+2*3", 8.0),
        ("10/4", 2.5),
        ("2^3^2", 512.0),
        ("-2^2", -4.0),
        ("-(3+2)", -5.0),
        ("--5", 5.0),
        ("(-3)*2", -6.0),
        ("1.5 + 2.25", 3.75),
        (" 7 - 10 ", -3.0),
        ("((1+2)*(3+4))/7", 3.0),
    ],
)
def test_evaluate_valid_expressions(expression, expected):
    assert evaluate(expression) == pytest.approx(expected)


@pytest.mark.parametrize(
    "expression",
    [
        "",
        "   ",
        "2+",
        "*2",
        "2**3",
        "2+*3",
        "2*-3",
        "()",
        "(2+3",
        "2+3)",
        ")2+3(",
        "1..2",
        "1.2.3",
        "abc",
        "2 < 3",
        "2==2",
        "1e5",
        "import os",
    ],
)
def test_evaluate_invalid_expressions(expression):
    with pytest.raises(InvalidExpression):
        evaluate(expression)


def test_division_by_zero():
    with pytest.raises(DivisionByZero):
        evaluate("10/0")
    # DivisionByZero is a refinement of InvalidExpression.
    with pytest.raises(InvalidExpression):
        evaluate("1/(2-2)")


def test_overflow_is_invalid():
    with pytest.raises(InvalidExpression):
        evaluate("10^400")


def test_negative_base_fractional_power_is_unsupported():
    with pytest.raises(UnsupportedOperation):
        evaluate("(-8)^0.5")


def test_implicit_multiplication_is_unsupported():
    with pytest.raises(UnsupportedOperation):
        evaluate("2(3)")
    with pytest.raises(UnsupportedOperation):
        evaluate("(2)3")
    with pytest.raises(UnsupportedOperation):
        evaluate("(2)(3)")


def test_negative_zero_is_folded():
    result = evaluate("-0")
    assert result == 0.0
    assert format_number(result) == "0"


def test_evaluator_never_raises_foreign_exceptions():
    """Every string over the legal character set either evaluates or raises CalculatorError."""
    alphabet = "0123456789.+-*/^()"
    samples = [alphabet[i:j] for i in range(len(alphabet)) for j in range(i + 1, len(alphabet) + 1)]
    samples += ["((((1))))", "9^9^9", "0^-1", ".5+.5", "5.", "-.5", "(((", ")))", "1/3"]

    for sample in samples:
        try:
            result = evaluate(sample)
        except CalculatorError:
            continue
        assert result == result  # not NaN
        assert result not in (float("inf"), float("-inf"))


def test_validate_strips_whitespace():
    assert validate(" 1 + 2 ") == "1+2"


def test_tokenize_marks_unary_minus():
    assert tokenize("-2") == [NEGATE, 2.0]
    assert tokenize("3-2") == [3.0, "-", 2.0]
    assert tokenize("(-2)") == ["(", NEGATE, 2.0, ")"]


def test_power_binds_tighter_than_negation():
    assert to_rpn(tokenize("-2^2")) == [2.0, 2.0, "^", NEGATE]


def test_format_number():
    assert format_number(8.0) == "8"
    assert format_number(-3.0) == "-3"
    assert format_number(2.5) == "2.5"
    assert format_number(1 / 3) == "0.333333"
    assert format_number(0.1 + 0.2) == "0.3"


def test_suggest_builds_calculation_suggestion():
    suggestion = ExpressionEvaluator().suggest("2+2*3")

    assert suggestion is not None
    assert suggestion.title == "2+2*3 = 8"
    assert suggestion.type == QueryType.CALCULATION
    assert suggestion.subtitle == "Calculator"
    assert suggestion.metadata == {"result": "8"}


def test_suggest_returns_none_on_failure():
    evaluator = ExpressionEvaluator()
    assert evaluator.suggest("10/0") is None
    assert evaluator.suggest("555-") is None
    assert evaluator.suggest("hello") is None
