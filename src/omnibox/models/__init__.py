"""Pydantic models for Omnibox."""

from .analytics import SearchAction, SearchAnalyticsEvent
from .context import (
    DayOfWeek,
    SearchContext,
    TimeOfDay,
    UnitSystem,
    UserPreferences,
)
from .query import QueryType, SearchCommand
from .suggestion import (
    CachedSuggestions,
    FieldsPreview,
    ImagePreview,
    PreviewContent,
    SearchSuggestion,
    TextPreview,
)

__all__ = [
    "QueryType",
    "SearchCommand",
    "SearchSuggestion",
    "CachedSuggestions",
    # Previews
    "PreviewContent",
    "TextPreview",
    "ImagePreview",
    "FieldsPreview",
    # Context
    "SearchContext",
    "TimeOfDay",
    "DayOfWeek",
    "UnitSystem",
    "UserPreferences",
    # Analytics
    "SearchAction",
    "SearchAnalyticsEvent",
]
