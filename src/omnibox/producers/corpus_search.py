"""Fuzzy search over bookmarks, history and open tabs."""

import logging
from typing import Sequence

from ..matching.fuzzy import FuzzyMatcher
from ..models.suggestion import SearchSuggestion
from ..providers.corpus import CorpusCategory, CorpusItem
from .base import BaseProducer, Candidate, Production, ProductionRequest

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.4


class CorpusSearchProducer(BaseProducer):
    """Scores every corpus item of the configured categories against the query.

    A provider that raises only loses its own category; the other categories
    are still searched.
    """

    def __init__(
        self,
        matcher: FuzzyMatcher,
        *,
        categories: Sequence[CorpusCategory] = tuple(CorpusCategory),
        threshold: float = DEFAULT_THRESHOLD,
    ):
        self.matcher = matcher
        self.categories = tuple(categories)
        self.threshold = threshold

    def for_category(self, category: CorpusCategory) -> "CorpusSearchProducer":
        return CorpusSearchProducer(self.matcher, categories=(category,), threshold=self.threshold)

    def produce(self, request: ProductionRequest) -> Production:
        production = Production()
        if request.corpus is None or not request.query:
            return production

        for category in self.categories:
            try:
                items = request.corpus.search(category, request.query)
            except Exception as e:
                logger.warning("Corpus search failed for %s: %s", category.value, e)
                continue

            labels = [item.label for item in items]
            for scored in self.matcher.rank(request.query, labels, threshold=self.threshold):
                suggestion = _to_suggestion(items[scored.index], category)
                production.candidates.append(Candidate(suggestion, scored.score))
        return production


def _to_suggestion(item: CorpusItem, category: CorpusCategory) -> SearchSuggestion:
    query_type = category.query_type
    return SearchSuggestion(
        title=item.label,
        subtitle=item.url,
        url=item.url,
        type=query_type,
        icon=query_type.icon,
        metadata=dict(item.metadata) or None,
    )
