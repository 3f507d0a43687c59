"""Weather suggestions: an immediate search link plus a deferred live lookup."""

import re
from typing import Optional

from ..providers.weather import WeatherProvider, weather_search_link
from .base import BaseProducer, Candidate, Production, ProductionRequest

FILLER_WORDS = frozenset({
    "weather", "temperature", "forecast", "rain", "sunny", "cloudy",
    "in", "for", "at", "the", "what", "what's", "whats", "is", "will", "it",
    "today", "tomorrow", "now", "current", "like",
})

FALLBACK_QUALITY = 0.7
LIVE_QUALITY = 0.9


def extract_location(query: str) -> Optional[str]:
    """``"weather in new york"`` -> ``"new york"``; None when only filler remains."""
    words = [w for w in re.split(r"[\s,?!]+", query.lower()) if w]
    remainder = [w for w in words if w not in FILLER_WORDS]
    return " ".join(remainder) or None


class WeatherProducer(BaseProducer):
    def __init__(self, provider: Optional[WeatherProvider] = None):
        self.provider = provider

    def resolve_location(self, request: ProductionRequest) -> Optional[str]:
        return (
            extract_location(request.query)
            or request.context.user_location
            or request.preferences.location
        )

    def produce(self, request: ProductionRequest) -> Production:
        location = self.resolve_location(request)
        fallback = weather_search_link(location)
        production = Production(candidates=[Candidate(fallback, FALLBACK_QUALITY)])

        if self.provider is None or not location or not request.preferences.enable_weather_suggestions:
            return production

        provider = self.provider
        units = request.preferences.preferred_units

        def fetch_live() -> list[Candidate]:
            suggestion = provider.fetch(location, units=units)
            if suggestion is None:
                return []
            return [Candidate(suggestion, LIVE_QUALITY)]

        production.deferred.append(fetch_live)
        return production
