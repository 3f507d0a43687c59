"""Safe arithmetic evaluation for calculator suggestions.

Input is untrusted text typed one keystroke at a time, so every failure mode
(malformed syntax, overflow, division by zero, absurd nesting) surfaces as a
CalculatorError and nothing else. Evaluation never goes through eval() or any
other general-purpose interpreter: expressions are tokenized, converted to
reverse Polish notation with a shunting-yard pass, and reduced on a stack.
"""

from __future__ import annotations

import math
import operator
from dataclasses import dataclass
from typing import Callable, Optional, Union

from ..models.query import QueryType
from ..models.suggestion import SearchSuggestion
from .errors import CalculatorError, DivisionByZero, InvalidExpression, UnsupportedOperation

VALID_CHARACTERS = frozenset("0123456789.+-*/^()")
BINARY_OPERATORS = frozenset("+-*/^")
COMPARISON_OPERATORS = ("==", "!=", "<=", ">=", "<", ">", "&&", "||")
LEADING_OPERATORS = ("+", "*", "/", "^")
TRAILING_OPERATORS = ("+", "-", "*", "/", "^")
OPERATOR_RUNS = (
    "++", "**", "//", "^^", "+-+", "-+-",
    "*+", "/+", "^+", "*-", "/-", "^-",
    "*/", "/*", "*^", "^*", "/^", "^/",
    "+*", "+/", "+^", "-*", "-/", "-^",
)

# Unary minus is tracked as its own token so the RPN stage can tell it apart.
NEGATE = "neg"

_PRECEDENCE = {"+": 1, "-": 1, "*": 2, "/": 2, NEGATE: 3, "^": 4}
_RIGHT_ASSOCIATIVE = frozenset({"^", NEGATE})


def _divide(a: float, b: float) -> float:
    if b == 0:
        raise DivisionByZero("division by zero")
    return a / b


def _power(a: float, b: float) -> float:
    try:
        result = math.pow(a, b)
    except OverflowError as e:
        raise InvalidExpression("result out of range") from e
    except ValueError as e:
        # Negative base with fractional exponent, or 0 to a negative power.
        raise UnsupportedOperation(str(e)) from e
    return result


_BINARY: dict[str, Callable[[float, float], float]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": _divide,
    "^": _power,
}

Token = Union[float, str]


def validate(expression: str) -> str:
    """Run the syntactic checks and return the whitespace-free expression.

    Raises:
        InvalidExpression: On the first check that fails
    """
    clean = "".join(expression.split())
    if not clean:
        raise InvalidExpression("empty expression")
    if not set(clean) <= VALID_CHARACTERS:
        raise InvalidExpression("unsupported characters")
    if any(op in clean for op in COMPARISON_OPERATORS):
        raise InvalidExpression("comparison operators are not supported")
    if clean.startswith(LEADING_OPERATORS) or clean.endswith(TRAILING_OPERATORS):
        raise InvalidExpression("incomplete expression")
    if "()" in clean:
        raise InvalidExpression("empty parentheses")
    if any(run in clean for run in OPERATOR_RUNS):
        raise InvalidExpression("invalid operator sequence")

    depth = 0
    for ch in clean:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth < 0:
                raise InvalidExpression("unbalanced parentheses")
    if depth != 0:
        raise InvalidExpression("unbalanced parentheses")
    return clean


def tokenize(clean: str) -> list[Token]:
    tokens: list[Token] = []
    i = 0
    n = len(clean)
    while i < n:
        ch = clean[i]
        if ch.isdigit() or ch == ".":
            if tokens and tokens[-1] == ")":
                raise UnsupportedOperation("implicit multiplication")
            start = i
            while i < n and (clean[i].isdigit() or clean[i] == "."):
                i += 1
            literal = clean[start:i]
            if literal.count(".") > 1 or literal == ".":
                raise InvalidExpression(f"malformed number: {literal}")
            tokens.append(float(literal))
            continue

        prev = tokens[-1] if tokens else None
        if ch == "-" and (prev is None or prev == "(" or prev in BINARY_OPERATORS or prev == NEGATE):
            tokens.append(NEGATE)
        elif ch == "(" and (isinstance(prev, float) or prev == ")"):
            raise UnsupportedOperation("implicit multiplication")
        else:
            tokens.append(ch)
        i += 1
    return tokens


def to_rpn(tokens: list[Token]) -> list[Token]:
    output: list[Token] = []
    stack: list[str] = []
    for tok in tokens:
        if isinstance(tok, float):
            output.append(tok)
        elif tok == "(":
            stack.append(tok)
        elif tok == ")":
            while stack and stack[-1] != "(":
                output.append(stack.pop())
            if not stack:
                raise InvalidExpression("unbalanced parentheses")
            stack.pop()
        else:
            prec = _PRECEDENCE[tok]
            while stack and stack[-1] != "(":
                top = _PRECEDENCE[stack[-1]]
                if top > prec or (top == prec and tok not in _RIGHT_ASSOCIATIVE):
                    output.append(stack.pop())
                else:
                    break
            stack.append(tok)
    while stack:
        top = stack.pop()
        if top == "(":
            raise InvalidExpression("unbalanced parentheses")
        output.append(top)
    return output


def reduce_rpn(rpn: list[Token]) -> float:
    stack: list[float] = []
    for tok in rpn:
        if isinstance(tok, float):
            stack.append(tok)
        elif tok == NEGATE:
            if not stack:
                raise InvalidExpression("dangling minus")
            stack.append(-stack.pop())
        else:
            if len(stack) < 2:
                raise InvalidExpression(f"missing operand for {tok}")
            b = stack.pop()
            a = stack.pop()
            stack.append(_BINARY[tok](a, b))
    if len(stack) != 1:
        raise InvalidExpression("missing operator")
    return stack[0]


def evaluate(expression: str) -> float:
    """Evaluate an arithmetic expression.

    Args:
        expression: Untrusted user text, e.g. ``"(2+3)*4"``

    Returns:
        A finite float

    Raises:
        CalculatorError: For any input that is not a well-formed expression
            with a finite result. No other exception escapes.
    """
    clean = validate(expression)
    try:
        result = reduce_rpn(to_rpn(tokenize(clean)))
    except CalculatorError:
        raise
    except (ArithmeticError, ValueError) as e:
        raise InvalidExpression(str(e)) from e
    if math.isnan(result) or math.isinf(result):
        raise InvalidExpression("result is not finite")
    # Fold -0.0 onto 0.0 so it never renders as "-0".
    return result + 0.0


def format_number(value: float) -> str:
    """Whole numbers without decimals, everything else to 6 significant digits."""
    if value == int(value):
        return f"{value:.0f}"
    return f"{value:.6g}"


@dataclass(frozen=True)
class ExpressionEvaluator:
    """Produces calculator suggestions; invalid input yields no suggestion."""

    icon: str = QueryType.CALCULATION.icon

    def evaluate(self, expression: str) -> float:
        return evaluate(expression)

    def suggest(self, expression: str) -> Optional[SearchSuggestion]:
        try:
            result = evaluate(expression)
        except CalculatorError:
            return None
        return SearchSuggestion(
            title=f"{expression.strip()} = {format_number(result)}",
            subtitle="Calculator",
            type=QueryType.CALCULATION,
            icon=self.icon,
            metadata={"result": format_number(result)},
            relevance_score=1.0,
        )
