"""Omnibox - address-bar query understanding and suggestion ranking."""

__version__ = "0.1.0"

from .config import OmniboxConfig
from .orchestrator import RankingPolicy, SuggestionOrchestrator

__all__ = ["OmniboxConfig", "RankingPolicy", "SuggestionOrchestrator", "__version__"]
