"""Suggestion producers, one per query type."""

from .answers import CalculationProducer, UnitConversionProducer, UrlProducer
from .base import BaseProducer, Candidate, NullProducer, Production, ProductionRequest
from .commands import CommandProducer
from .corpus_search import CorpusSearchProducer
from .time import TimeProducer
from .weather import WeatherProducer
from .web_search import WebSearchProducer, is_question_like

__all__ = [
    "BaseProducer",
    "Candidate",
    "NullProducer",
    "Production",
    "ProductionRequest",
    "CalculationProducer",
    "UnitConversionProducer",
    "UrlProducer",
    "CommandProducer",
    "CorpusSearchProducer",
    "TimeProducer",
    "WeatherProducer",
    "WebSearchProducer",
    "is_question_like",
]
