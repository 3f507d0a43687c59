"""Pydantic models for suggestions and cached suggestion lists."""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from .query import QueryType

CACHE_TTL = timedelta(minutes=5)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TextPreview(BaseModel):
    """Plain text preview."""

    kind: Literal["text"] = "text"
    text: str

    model_config = {"frozen": True}


class ImagePreview(BaseModel):
    """Preview rendered from an image URL."""

    kind: Literal["image"] = "image"
    image_url: str

    model_config = {"frozen": True}


class FieldsPreview(BaseModel):
    """Preview made of labelled string fields (e.g. weather details)."""

    kind: Literal["fields"] = "fields"
    fields: dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}


PreviewContent = Annotated[
    Union[TextPreview, ImagePreview, FieldsPreview],
    Field(discriminator="kind"),
]


class SearchSuggestion(BaseModel):
    """A single ranked entry in the address-bar suggestion list.

    Identity is ``(title, type, url)``: two suggestions built by different
    resolution passes compare equal when those three fields match, regardless
    of ``id`` or ``relevance_score``. Only ``relevance_score`` is reassigned
    after construction (by the ranking step).
    """

    id: str = Field(default_factory=lambda: uuid.uuid4().hex, description="Opaque unique token")
    title: str
    subtitle: Optional[str] = None
    url: Optional[str] = None
    type: QueryType = QueryType.SEARCH
    icon: Optional[str] = None
    metadata: Optional[dict[str, str]] = None
    preview: Optional[PreviewContent] = None
    relevance_score: float = Field(default=0.5, ge=0.0, le=1.0)
    timestamp: datetime = Field(default_factory=_utc_now)

    model_config = {"validate_assignment": True}

    @property
    def identity(self) -> tuple[str, QueryType, Optional[str]]:
        return (self.title, self.type, self.url)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SearchSuggestion):
            return NotImplemented
        return self.identity == other.identity

    def __hash__(self) -> int:
        return hash(self.identity)


class CachedSuggestions(BaseModel):
    """Immutable cache entry; expiry is checked lazily at read time."""

    suggestions: list[SearchSuggestion]
    created_at: datetime = Field(default_factory=_utc_now)
    popularity: float = Field(default=0.5, ge=0.0, le=1.0)
    ttl: timedelta = Field(default=CACHE_TTL)

    model_config = {"frozen": True}

    @property
    def expires_at(self) -> datetime:
        return self.created_at + self.ttl

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or _utc_now()) > self.expires_at
