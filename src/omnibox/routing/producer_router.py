"""Router for mapping query types to suggestion producers."""

from ..models.query import QueryType
from ..producers import (
    BaseProducer,
    CalculationProducer,
    CommandProducer,
    CorpusSearchProducer,
    NullProducer,
    TimeProducer,
    UnitConversionProducer,
    UrlProducer,
    WeatherProducer,
)
from ..providers.corpus import CorpusCategory


class ProducerRouter:
    """Maps QueryType to the producer that answers it."""

    def __init__(
        self,
        *,
        calculation: CalculationProducer,
        unit_conversion: UnitConversionProducer,
        corpus_search: CorpusSearchProducer,
        weather: WeatherProducer,
        time: TimeProducer,
        url: UrlProducer,
    ):
        command = CommandProducer(corpus_search=corpus_search, calculation=calculation, weather=weather)
        self._producers: dict[QueryType, BaseProducer] = {
            QueryType.CALCULATION: calculation,
            QueryType.UNIT_CONVERSION: unit_conversion,
            QueryType.WEATHER: weather,
            QueryType.TIME: time,
            QueryType.URL: url,
            QueryType.COMMAND: command,
            QueryType.SEARCH: corpus_search,
            QueryType.BOOKMARK: corpus_search.for_category(CorpusCategory.BOOKMARK),
            QueryType.HISTORY: corpus_search.for_category(CorpusCategory.HISTORY),
            QueryType.TAB: corpus_search.for_category(CorpusCategory.TAB),
        }

    def get_producer(self, query_type: QueryType) -> BaseProducer:
        """Get the producer for a given query type.

        Args:
            query_type: The classified query type.

        Returns:
            The corresponding producer, or a NullProducer for types that are
            only ever produced as side results (quick answers).
        """
        return self._producers.get(query_type, NullProducer())
