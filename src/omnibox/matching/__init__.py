"""Fuzzy label matching for corpus search."""

from .fuzzy import FuzzyMatcher, ScoredItem, fuzzy_score, levenshtein_distance

__all__ = ["FuzzyMatcher", "ScoredItem", "fuzzy_score", "levenshtein_distance"]
