"""Weather providers for weather suggestions."""

from abc import ABC, abstractmethod
from typing import Optional
from urllib.parse import quote

import requests

from ..models.context import UnitSystem
from ..models.query import QueryType
from ..models.suggestion import FieldsPreview, SearchSuggestion


def _format_temperature(celsius: float, units: UnitSystem) -> str:
    if units == UnitSystem.IMPERIAL:
        return f"{round(celsius * 9 / 5 + 32)}°F"
    return f"{round(celsius)}°C"


def weather_search_link(location: Optional[str]) -> SearchSuggestion:
    """Fallback suggestion pointing at a weather site, used when no live data is available."""
    if location:
        title, url = f"Get weather for {location}", f"https://weather.com/search?query={quote(location)}"
    else:
        title, url = "Get weather", "https://weather.com/"
    return SearchSuggestion(
        title=title,
        subtitle="Weather",
        url=url,
        type=QueryType.WEATHER,
        icon=QueryType.WEATHER.icon,
        relevance_score=0.7,
    )


class WeatherProvider(ABC):
    """Current conditions for a location, or None when unknown."""

    @abstractmethod
    def fetch(self, location: str, *, units: UnitSystem = UnitSystem.METRIC) -> Optional[SearchSuggestion]:
        pass


class StaticWeatherProvider(WeatherProvider):
    """Fixed sample conditions; no network access."""

    SAMPLE_CONDITIONS: dict[str, tuple[float, str, str]] = {
        "new york": (22.0, "Partly Cloudy", "cloud.sun"),
        "london": (15.0, "Rainy", "cloud.rain"),
        "tokyo": (28.0, "Sunny", "sun.max"),
        "paris": (18.0, "Overcast", "cloud"),
    }

    def fetch(self, location: str, *, units: UnitSystem = UnitSystem.METRIC) -> Optional[SearchSuggestion]:
        sample = self.SAMPLE_CONDITIONS.get(location.strip().lower())
        if sample is None:
            return None
        celsius, condition, icon = sample
        return SearchSuggestion(
            title=f"{_format_temperature(celsius, units)} {condition}",
            subtitle=f"Weather in {location.strip().title()}",
            type=QueryType.WEATHER,
            icon=icon,
            relevance_score=0.9,
        )


class HttpWeatherProvider(WeatherProvider):
    """Client for the wttr.in JSON API.

    Network and HTTP errors propagate as requests exceptions; the
    orchestrator treats them as "no weather suggestion".
    """

    BASE_URL = "https://wttr.in"

    def __init__(self, timeout_seconds: float = 5.0, session: Optional[requests.Session] = None):
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    def fetch(self, location: str, *, units: UnitSystem = UnitSystem.METRIC) -> Optional[SearchSuggestion]:
        """Fetch current conditions.

        Args:
            location: Free-text place name
            units: Unit system used to render the temperature

        Returns:
            A weather suggestion, or None if the response has no current conditions

        Raises:
            requests.RequestException: If the API request fails
        """
        endpoint = f"{self.BASE_URL}/{quote(location.strip())}"
        response = self.session.get(endpoint, params={"format": "j1"}, timeout=self.timeout_seconds)
        response.raise_for_status()

        data = response.json()
        current = (data.get("current_condition") or [None])[0] if isinstance(data, dict) else None
        if not current:
            return None

        try:
            celsius = float(current["temp_C"])
            feels_like = float(current.get("FeelsLikeC", celsius))
            descriptions = current.get("weatherDesc") or []
            condition = str(descriptions[0].get("value", "")) if descriptions else ""
        except (AttributeError, IndexError, KeyError, TypeError, ValueError):
            return None

        fields = {
            "humidity": f"{current.get('humidity', '?')}%",
            "feels_like": _format_temperature(feels_like, units),
        }

        return SearchSuggestion(
            title=f"{_format_temperature(celsius, units)} {condition}".strip(),
            subtitle=f"Weather in {location.strip().title()}",
            type=QueryType.WEATHER,
            icon=QueryType.WEATHER.icon,
            preview=FieldsPreview(fields=fields),
            relevance_score=0.9,
        )
