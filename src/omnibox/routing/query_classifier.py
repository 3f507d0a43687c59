"""Deterministic query classification for the address bar.

Rules are ordered predicates; the first one that matches decides the
QueryType. The order is part of the contract: a query that looks both like a
command and like a URL is a command.
"""

import re
from typing import Callable

from ..models.query import QueryType, SearchCommand

# Version constant - bump when rules, keywords or their order change
CLASSIFIER_VERSION = "1.0.0"

MATH_OPERATORS = ("+", "-", "*", "/", "^", "(", ")", "=")
TRAILING_OPERATORS = ("+", "-", "*", "/", "^")
LEADING_OPERATORS = ("+", "*", "/", "^")
COMPARISON_OPERATORS = ("==", "!=", "<=", ">=", "<", ">", "&&", "||")

WEATHER_KEYWORDS = ("weather", "temperature", "forecast", "rain", "sunny", "cloudy")
TIME_KEYWORDS = ("time", "date", "today", "tomorrow", "yesterday", "now")

URL_PATTERN = re.compile(
    r"^(https?://)?([a-zA-Z0-9]([a-zA-Z0-9\-]{0,61}[a-zA-Z0-9])?\.)+[a-zA-Z]{2,}(/.*)?$"
)
BINARY_OPERATION_PATTERN = re.compile(r"\d+\s*[+\-*/^]\s*\d+")
UNIT_PATTERNS = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"miles? to k?m",
        r"k?m to miles?",
        r"fahrenheit to celsius",
        r"celsius to fahrenheit",
        r"pounds? to k?g",
        r"k?g to pounds?",
        r"feet to meters?",
        r"meters? to feet",
    )
)


def normalize(query: str) -> str:
    return query.strip().lower()


def is_command(text: str) -> bool:
    """A space-separated query whose first word is a command keyword."""
    if " " not in text:
        return False
    first_word = text.split(" ", 1)[0]
    return SearchCommand.from_keyword(first_word) is not None


def is_url(text: str) -> bool:
    return URL_PATTERN.match(text) is not None


def is_calculation(text: str) -> bool:
    """Heuristic: a digit, an operator, and at least one `<num> <op> <num>` run.

    Phone numbers and version strings such as ``555-1234`` pass this check.
    The evaluator is the real gate; a false positive here only means the
    calculation producer returns nothing.
    """
    if not any(ch.isdigit() for ch in text):
        return False
    if not any(op in text for op in MATH_OPERATORS):
        return False
    if text.endswith(TRAILING_OPERATORS):
        return False
    if text.startswith(LEADING_OPERATORS):
        return False
    if any(op in text for op in COMPARISON_OPERATORS):
        return False
    return BINARY_OPERATION_PATTERN.search(text) is not None


def is_unit_conversion(text: str) -> bool:
    return any(p.search(text) for p in UNIT_PATTERNS)


def is_weather(text: str) -> bool:
    return any(k in text for k in WEATHER_KEYWORDS)


def is_time(text: str) -> bool:
    return any(k in text for k in TIME_KEYWORDS)


class QueryClassifier:
    """Maps raw address-bar input to a QueryType.

    Pure and context-free: the same input always yields the same type.
    """

    RULES: tuple[tuple[Callable[[str], bool], QueryType], ...] = (
        (is_command, QueryType.COMMAND),
        (is_url, QueryType.URL),
        (is_calculation, QueryType.CALCULATION),
        (is_unit_conversion, QueryType.UNIT_CONVERSION),
        (is_weather, QueryType.WEATHER),
        (is_time, QueryType.TIME),
    )

    def classify(self, query: str) -> QueryType:
        """Classify a query.

        Args:
            query: Raw user input, untrimmed

        Returns:
            The first matching QueryType, or QueryType.SEARCH
        """
        text = normalize(query)
        for predicate, query_type in self.RULES:
            if predicate(text):
                return query_type
        return QueryType.SEARCH


def parse_command(query: str) -> tuple[SearchCommand, str] | None:
    """Split ``"bm rust book"`` into ``(SearchCommand.BOOKMARKS, "rust book")``."""
    text = query.strip()
    if " " not in text:
        return None
    keyword, argument = text.split(" ", 1)
    command = SearchCommand.from_keyword(keyword.lower())
    if command is None:
        return None
    return command, argument.strip()
