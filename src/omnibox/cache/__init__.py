"""Suggestion caching with durable popularity."""

from .popularity import InMemoryPopularityStore, PopularityStore, SqlitePopularityStore
from .suggestion_cache import SuggestionCache

__all__ = ["InMemoryPopularityStore", "PopularityStore", "SqlitePopularityStore", "SuggestionCache"]
