"""Producer interface shared by every suggestion source."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Optional

from ..models.context import SearchContext, UserPreferences
from ..models.query import QueryType
from ..models.suggestion import SearchSuggestion
from ..providers.corpus import CorpusProvider


@dataclass(frozen=True)
class ProductionRequest:
    """Everything a producer may look at for one resolve() call."""

    query: str
    query_type: QueryType
    context: SearchContext
    preferences: UserPreferences
    corpus: Optional[CorpusProvider] = None

    def with_query(self, query: str, query_type: Optional[QueryType] = None) -> "ProductionRequest":
        return ProductionRequest(
            query=query,
            query_type=query_type or self.query_type,
            context=self.context,
            preferences=self.preferences,
            corpus=self.corpus,
        )


@dataclass(frozen=True)
class Candidate:
    """A suggestion plus how well it matches the query, in [0, 1]."""

    suggestion: SearchSuggestion
    match_quality: float


@dataclass
class Production:
    """Producer output.

    ``candidates`` are available immediately. Each ``deferred`` callable is
    slow work (network I/O) that the orchestrator runs off the calling thread.
    """

    candidates: list[Candidate] = field(default_factory=list)
    deferred: list[Callable[[], list[Candidate]]] = field(default_factory=list)

    def extend(self, other: "Production") -> None:
        self.candidates.extend(other.candidates)
        self.deferred.extend(other.deferred)


class BaseProducer(ABC):
    @abstractmethod
    def produce(self, request: ProductionRequest) -> Production:
        """Build candidates for a request; must not raise for ordinary bad input."""
        pass


class NullProducer(BaseProducer):
    def produce(self, request: ProductionRequest) -> Production:
        return Production()
