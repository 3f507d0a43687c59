"""Query classification and command parsing."""

from .query_classifier import CLASSIFIER_VERSION, QueryClassifier, parse_command

__all__ = ["CLASSIFIER_VERSION", "QueryClassifier", "parse_command"]
