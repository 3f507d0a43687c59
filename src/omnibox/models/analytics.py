"""Pydantic models for search analytics events."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from .query import QueryType


class SearchAction(str, Enum):
    QUERY = "query"
    SUGGESTION_CLICK = "suggestion_click"
    AUTOCOMPLETE_ACCEPT = "autocomplete_accept"
    VOICE_SEARCH = "voice_search"
    COMMAND_USE = "command_use"


class SearchAnalyticsEvent(BaseModel):
    """Append-only analytics record.

    Written as JSONL to <state_dir>/analytics.jsonl.
    Never mutate or delete; only append.
    """

    event_id: str = Field(description="Unique event identifier (uuid4)")
    run_id: str = Field(description="Process/session identifier (uuid4)")
    ts: datetime = Field(description="Event timestamp (ISO8601 UTC)")
    action: SearchAction = Field(description="What the user did")
    query: str = Field(description="Normalized query text")
    query_type: Optional[QueryType] = Field(default=None, description="Classifier result for the query")
    suggestion_title: Optional[str] = Field(default=None, description="Selected or top suggestion title")
    suggestion_type: Optional[QueryType] = Field(default=None, description="Selected or top suggestion type")
    response_time_ms: Optional[float] = Field(default=None, ge=0.0, description="Resolution latency")
    position: Optional[int] = Field(default=None, ge=0, description="Index of the selected suggestion")

    model_config = {"frozen": True}
