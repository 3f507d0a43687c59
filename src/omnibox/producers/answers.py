"""Producers for instant answers: calculation, unit conversion and direct navigation."""

from ..calc.evaluator import ExpressionEvaluator
from ..models.query import QueryType
from ..models.suggestion import SearchSuggestion
from ..units.converter import UnitConverter
from .base import BaseProducer, Candidate, Production, ProductionRequest


class CalculationProducer(BaseProducer):
    def __init__(self, evaluator: ExpressionEvaluator):
        self.evaluator = evaluator

    def produce(self, request: ProductionRequest) -> Production:
        suggestion = self.evaluator.suggest(request.query)
        if suggestion is None:
            return Production()
        return Production(candidates=[Candidate(suggestion, 1.0)])


class UnitConversionProducer(BaseProducer):
    def __init__(self, converter: UnitConverter):
        self.converter = converter

    def produce(self, request: ProductionRequest) -> Production:
        suggestion = self.converter.convert(request.query)
        if suggestion is None:
            return Production()
        return Production(candidates=[Candidate(suggestion, 1.0)])


def normalize_url(text: str) -> str:
    """Default to https when the user typed a bare host."""
    text = text.strip()
    lowered = text.lower()
    if lowered.startswith("http://") or lowered.startswith("https://"):
        return text
    return f"https://{text}"


class UrlProducer(BaseProducer):
    def produce(self, request: ProductionRequest) -> Production:
        suggestion = SearchSuggestion(
            title=request.query,
            subtitle="Open website",
            url=normalize_url(request.query),
            type=QueryType.URL,
            icon=QueryType.URL.icon,
            relevance_score=1.0,
        )
        return Production(candidates=[Candidate(suggestion, 1.0)])
