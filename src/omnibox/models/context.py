"""Read-only inputs to suggestion resolution: situational context and user preferences."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from .query import SearchCommand


class TimeOfDay(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"

    @classmethod
    def from_hour(cls, hour: int) -> "TimeOfDay":
        if 6 <= hour < 12:
            return cls.MORNING
        if 12 <= hour < 17:
            return cls.AFTERNOON
        if 17 <= hour < 21:
            return cls.EVENING
        return cls.NIGHT


class DayOfWeek(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def from_date(cls, value: datetime) -> "DayOfWeek":
        return list(cls)[value.weekday()]


class UnitSystem(str, Enum):
    METRIC = "metric"
    IMPERIAL = "imperial"


class SearchContext(BaseModel):
    """Snapshot of the user's situation when a query is resolved."""

    current_url: Optional[str] = None
    time_of_day: TimeOfDay = TimeOfDay.MORNING
    day_of_week: DayOfWeek = DayOfWeek.MONDAY
    user_location: Optional[str] = None
    recent_activity: list[str] = Field(default_factory=list)
    open_tabs: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}

    @classmethod
    def current(cls, now: Optional[datetime] = None, **kwargs) -> "SearchContext":
        """Build a context whose time buckets come from the local wall clock."""
        now = now or datetime.now()
        return cls(
            time_of_day=TimeOfDay.from_hour(now.hour),
            day_of_week=DayOfWeek.from_date(now),
            **kwargs,
        )


SEARCH_ENGINE_TEMPLATES: dict[str, str] = {
    "google": "https://www.google.com/search?q={query}",
    "duckduckgo": "https://duckduckgo.com/?q={query}",
    "bing": "https://www.bing.com/search?q={query}",
}


class UserPreferences(BaseModel):
    """User-controlled settings read by the orchestrator."""

    preferred_search_engine: str = Field(
        default="google",
        description="Engine name from SEARCH_ENGINE_TEMPLATES or a URL template containing {query}",
    )
    enable_voice_search: bool = False
    enable_quick_answers: bool = True
    enable_weather_suggestions: bool = True
    preferred_units: UnitSystem = UnitSystem.METRIC
    location: Optional[str] = None
    recent_searches: list[str] = Field(default_factory=list)
    favorite_commands: list[SearchCommand] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def search_url_template(self) -> str:
        engine = self.preferred_search_engine.strip()
        if "{query}" in engine:
            return engine
        return SEARCH_ENGINE_TEMPLATES.get(engine.lower(), SEARCH_ENGINE_TEMPLATES["google"])
