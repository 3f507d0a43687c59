"""Local time and date answers."""

from datetime import datetime, timedelta
from typing import Callable

from ..models.query import QueryType
from ..models.suggestion import SearchSuggestion
from .base import BaseProducer, Candidate, Production, ProductionRequest

DATE_FORMAT = "%A, %B %d, %Y"
TIME_FORMAT = "%H:%M"


class TimeProducer(BaseProducer):
    """Answers ``time``/``now``, ``date``/``today``, ``tomorrow`` and ``yesterday``."""

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self._clock = clock

    def produce(self, request: ProductionRequest) -> Production:
        text = request.query.lower()
        now = self._clock()
        metadata = {
            "time_of_day": request.context.time_of_day.value,
            "day_of_week": request.context.day_of_week.value,
        }

        answers: list[tuple[str, str]] = []
        if "tomorrow" in text:
            answers.append(((now + timedelta(days=1)).strftime(DATE_FORMAT), "Tomorrow"))
        if "yesterday" in text:
            answers.append(((now - timedelta(days=1)).strftime(DATE_FORMAT), "Yesterday"))
        if "date" in text or "today" in text:
            answers.append((now.strftime(DATE_FORMAT), "Today's date"))
        if "time" in text or "now" in text or not answers:
            answers.append((now.strftime(TIME_FORMAT), "Current time"))

        candidates = [
            Candidate(
                SearchSuggestion(
                    title=title,
                    subtitle=subtitle,
                    type=QueryType.TIME,
                    icon=QueryType.TIME.icon,
                    metadata=dict(metadata),
                ),
                1.0,
            )
            for title, subtitle in answers
        ]
        return Production(candidates=candidates)
