"""Calculator error hierarchy.

Every failure is an InvalidExpression; the subclasses only say why.
"""


class CalculatorError(Exception):
    """Base class for calculator failures."""


class InvalidExpression(CalculatorError):
    """The text is not a well-formed arithmetic expression with a finite result."""


class DivisionByZero(InvalidExpression):
    pass


class UnsupportedOperation(InvalidExpression):
    pass
