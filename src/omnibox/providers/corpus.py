"""Corpus providers: the bookmark, history and open-tab pools for fuzzy search."""

import json
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from ..models.query import QueryType


class CorpusCategory(str, Enum):
    BOOKMARK = "bookmark"
    HISTORY = "history"
    TAB = "tab"

    @property
    def query_type(self) -> QueryType:
        return QueryType(self.value)


class CorpusItem(BaseModel):
    """One candidate from the corpus."""

    label: str
    url: Optional[str] = None
    metadata: dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}


class CorpusProvider(ABC):
    """Supplies candidates for a category.

    Implementations may use ``query_hint`` to pre-filter, but returning the
    whole category is always acceptable; scoring happens in the core.
    """

    @abstractmethod
    def search(self, category: CorpusCategory, query_hint: str) -> list[CorpusItem]:
        pass


class InMemoryCorpusProvider(CorpusProvider):
    def __init__(self, items: Optional[dict[CorpusCategory, list[CorpusItem]]] = None):
        self._items: dict[CorpusCategory, list[CorpusItem]] = {
            CorpusCategory(k): list(v) for k, v in (items or {}).items()
        }

    def add(self, category: CorpusCategory, item: CorpusItem) -> None:
        self._items.setdefault(category, []).append(item)

    def search(self, category: CorpusCategory, query_hint: str) -> list[CorpusItem]:
        return list(self._items.get(category, []))


class JsonCorpusProvider(InMemoryCorpusProvider):
    """Loads a corpus file shaped like ``{"bookmark": [{"label": ..., "url": ...}], ...}``.

    Unknown top-level keys are ignored.
    """

    def __init__(self, path: Path):
        self.path = path
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"Corpus file must contain a JSON object: {path}")

        items: dict[CorpusCategory, list[CorpusItem]] = {}
        for category in CorpusCategory:
            raw = data.get(category.value) or []
            if not isinstance(raw, list):
                raise ValueError(f"Corpus category '{category.value}' must be a list in {path}")
            items[category] = [CorpusItem(**entry) for entry in raw]
        super().__init__(items)
