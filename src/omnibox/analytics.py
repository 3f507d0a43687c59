"""Append-only search analytics ledger for Omnibox."""

import json
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console

from .models.analytics import SearchAction, SearchAnalyticsEvent
from .models.query import QueryType
from .models.suggestion import SearchSuggestion

console = Console(stderr=True)


class AnalyticsLedger:
    """Append-only analytics writer.

    Writes events to <state_dir>/analytics.jsonl.
    Never truncates or rewrites; only appends.
    """

    def __init__(self, ledger_path: Path, run_id: str | None = None):
        """Initialize analytics ledger.

        Args:
            ledger_path: Path to analytics.jsonl file
            run_id: Optional run ID; if None, generates a new uuid4
        """
        self.ledger_path = ledger_path
        self.run_id = run_id or str(uuid.uuid4())
        self._lock = threading.Lock()

    def append_event(
        self,
        action: SearchAction,
        query: str,
        *,
        query_type: QueryType | None = None,
        suggestion: SearchSuggestion | None = None,
        response_time_ms: float | None = None,
        position: int | None = None,
    ) -> SearchAnalyticsEvent:
        """Append an event to the ledger.

        Args:
            action: What the user did
            query: Normalized query text
            query_type: Classifier result, if known
            suggestion: Selected (or top) suggestion, if any
            response_time_ms: Resolution latency for query events
            position: Index of a selected suggestion

        Returns:
            The created SearchAnalyticsEvent
        """
        event = SearchAnalyticsEvent(
            event_id=str(uuid.uuid4()),
            run_id=self.run_id,
            ts=datetime.now(timezone.utc),
            action=action,
            query=query,
            query_type=query_type,
            suggestion_title=suggestion.title if suggestion is not None else None,
            suggestion_type=suggestion.type if suggestion is not None else None,
            response_time_ms=response_time_ms,
            position=position,
        )

        json_str = json.dumps(event.model_dump(mode="json"))
        with self._lock:
            self.ledger_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.ledger_path, "a", encoding="utf-8") as f:
                f.write(json_str + "\n")

        return event


def read_analytics_tail(ledger_path: Path, n: int = 20) -> list[SearchAnalyticsEvent]:
    """Read the last N events from the ledger.

    Robust parsing: skips malformed lines with a warning.

    Args:
        ledger_path: Path to analytics.jsonl file
        n: Number of events to read from the end

    Returns:
        List of SearchAnalyticsEvent objects (last N events)
    """
    if not ledger_path.exists():
        return []

    with open(ledger_path, "r", encoding="utf-8") as f:
        lines = f.readlines()

    events: list[SearchAnalyticsEvent] = []
    malformed_count = 0
    for line in lines[-n:] if n > 0 else []:
        line = line.strip()
        if not line:
            continue
        try:
            events.append(SearchAnalyticsEvent(**json.loads(line)))
        except (json.JSONDecodeError, ValidationError, TypeError) as e:
            malformed_count += 1
            console.print(f"[yellow]Warning: Skipping malformed line: {e}[/yellow]")

    if malformed_count > 0:
        console.print(f"[yellow]Skipped {malformed_count} malformed line(s)[/yellow]")

    return events

