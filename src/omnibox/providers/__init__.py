"""External collaborators consumed by the orchestrator."""

from .corpus import CorpusCategory, CorpusItem, CorpusProvider, InMemoryCorpusProvider, JsonCorpusProvider
from .weather import HttpWeatherProvider, StaticWeatherProvider, WeatherProvider, weather_search_link

__all__ = [
    "CorpusCategory",
    "CorpusItem",
    "CorpusProvider",
    "InMemoryCorpusProvider",
    "JsonCorpusProvider",
    "HttpWeatherProvider",
    "StaticWeatherProvider",
    "WeatherProvider",
    "weather_search_link",
]
