"""Query classification types and the command keyword table."""

from enum import Enum


class QueryType(str, Enum):
    """What the user most likely meant by an address-bar query."""

    URL = "url"
    CALCULATION = "calculation"
    UNIT_CONVERSION = "unit_conversion"
    WEATHER = "weather"
    TIME = "time"
    QUICK_ANSWER = "quick_answer"
    SEARCH = "search"
    COMMAND = "command"
    BOOKMARK = "bookmark"
    HISTORY = "history"
    TAB = "tab"

    @property
    def priority(self) -> int:
        """Fixed ranking weight, higher is more important."""
        return _PRIORITY[self]

    @property
    def icon(self) -> str:
        """Display icon tag for the presentation layer."""
        return _ICON[self]


_PRIORITY: dict[QueryType, int] = {
    QueryType.QUICK_ANSWER: 100,
    QueryType.CALCULATION: 100,
    QueryType.UNIT_CONVERSION: 100,
    QueryType.URL: 90,
    QueryType.COMMAND: 85,
    QueryType.WEATHER: 80,
    QueryType.TIME: 80,
    QueryType.BOOKMARK: 70,
    QueryType.HISTORY: 60,
    QueryType.TAB: 55,
    QueryType.SEARCH: 50,
}

MAX_PRIORITY = max(_PRIORITY.values())

_ICON: dict[QueryType, str] = {
    QueryType.URL: "link",
    QueryType.CALCULATION: "plus.forwardslash.minus",
    QueryType.UNIT_CONVERSION: "arrow.left.arrow.right",
    QueryType.WEATHER: "cloud.sun",
    QueryType.TIME: "clock",
    QueryType.QUICK_ANSWER: "lightbulb",
    QueryType.SEARCH: "magnifyingglass",
    QueryType.COMMAND: "terminal",
    QueryType.BOOKMARK: "bookmark",
    QueryType.HISTORY: "clock.arrow.circlepath",
    QueryType.TAB: "square.stack",
}


class SearchCommand(str, Enum):
    """Address-bar command keywords (`bm rust book`, `w london`, ...)."""

    BOOKMARKS = "bm"
    HISTORY = "h"
    TABS = "t"
    DOWNLOADS = "dl"
    SETTINGS = "set"
    CALCULATOR = "calc"
    WEATHER = "w"
    TRANSLATE = "tr"

    @property
    def description(self) -> str:
        return _COMMAND_DESCRIPTIONS[self]

    @property
    def placeholder(self) -> str:
        return _COMMAND_PLACEHOLDERS[self]

    @classmethod
    def from_keyword(cls, keyword: str) -> "SearchCommand | None":
        try:
            return cls(keyword)
        except ValueError:
            return None


_COMMAND_DESCRIPTIONS: dict[SearchCommand, str] = {
    SearchCommand.BOOKMARKS: "Search bookmarks",
    SearchCommand.HISTORY: "Search browsing history",
    SearchCommand.TABS: "Search open tabs",
    SearchCommand.DOWNLOADS: "Search downloads",
    SearchCommand.SETTINGS: "Open settings",
    SearchCommand.CALCULATOR: "Calculator",
    SearchCommand.WEATHER: "Weather",
    SearchCommand.TRANSLATE: "Translate",
}

_COMMAND_PLACEHOLDERS: dict[SearchCommand, str] = {
    SearchCommand.BOOKMARKS: "bm search term",
    SearchCommand.HISTORY: "h search term",
    SearchCommand.TABS: "t search term",
    SearchCommand.DOWNLOADS: "dl search term",
    SearchCommand.SETTINGS: "set preference",
    SearchCommand.CALCULATOR: "calc 2+2",
    SearchCommand.WEATHER: "w location",
    SearchCommand.TRANSLATE: "tr hello to spanish",
}
