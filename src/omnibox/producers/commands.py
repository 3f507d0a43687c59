"""Address-bar commands such as ``bm rust book`` or ``w london``."""

from typing import Optional
from urllib.parse import quote, urlencode

from ..models.query import QueryType, SearchCommand
from ..models.suggestion import SearchSuggestion
from ..providers.corpus import CorpusCategory
from ..routing.query_classifier import parse_command
from .answers import CalculationProducer
from .base import BaseProducer, Candidate, Production, ProductionRequest
from .corpus_search import CorpusSearchProducer
from .weather import WeatherProducer

CORPUS_COMMANDS: dict[SearchCommand, CorpusCategory] = {
    SearchCommand.BOOKMARKS: CorpusCategory.BOOKMARK,
    SearchCommand.HISTORY: CorpusCategory.HISTORY,
    SearchCommand.TABS: CorpusCategory.TAB,
}

INTERNAL_PAGES: dict[SearchCommand, str] = {
    SearchCommand.DOWNLOADS: "vela://downloads",
    SearchCommand.SETTINGS: "vela://settings",
}

LANGUAGE_CODES = {
    "english": "en",
    "spanish": "es",
    "french": "fr",
    "german": "de",
    "italian": "it",
    "portuguese": "pt",
    "russian": "ru",
    "japanese": "ja",
    "korean": "ko",
    "chinese": "zh-CN",
    "arabic": "ar",
    "hindi": "hi",
}


def translate_url(argument: str) -> str:
    """``"hello to spanish"`` -> a Google Translate URL targeting Spanish."""
    text = argument
    target: Optional[str] = None
    head, sep, tail = argument.rpartition(" to ")
    if sep and head.strip():
        code = LANGUAGE_CODES.get(tail.strip().lower())
        if code is not None:
            text, target = head.strip(), code

    params = {"sl": "auto", "text": text, "op": "translate"}
    if target:
        params["tl"] = target
    return "https://translate.google.com/?" + urlencode(params, quote_via=quote)


class CommandProducer(BaseProducer):
    """Expands a command into its own suggestion plus the results it stands for."""

    def __init__(
        self,
        *,
        corpus_search: CorpusSearchProducer,
        calculation: CalculationProducer,
        weather: WeatherProducer,
    ):
        self.corpus_search = corpus_search
        self.calculation = calculation
        self.weather = weather

    def produce(self, request: ProductionRequest) -> Production:
        parsed = parse_command(request.query)
        if parsed is None:
            return Production()
        command, argument = parsed

        production = Production(candidates=[Candidate(self._command_suggestion(command, argument), 1.0)])

        if command in CORPUS_COMMANDS:
            category = CORPUS_COMMANDS[command]
            sub_request = request.with_query(argument, category.query_type)
            production.extend(self.corpus_search.for_category(category).produce(sub_request))
        elif command == SearchCommand.CALCULATOR:
            production.extend(self.calculation.produce(request.with_query(argument, QueryType.CALCULATION)))
        elif command == SearchCommand.WEATHER:
            production.extend(self.weather.produce(request.with_query(argument, QueryType.WEATHER)))
        return production

    def _command_suggestion(self, command: SearchCommand, argument: str) -> SearchSuggestion:
        url: Optional[str] = None
        if command == SearchCommand.TRANSLATE:
            url = translate_url(argument)
        elif command in INTERNAL_PAGES:
            url = f"{INTERNAL_PAGES[command]}?q={quote(argument)}"

        return SearchSuggestion(
            title=f"{command.description}: {argument}",
            subtitle=command.placeholder,
            url=url,
            type=QueryType.COMMAND,
            icon=QueryType.COMMAND.icon,
            metadata={"command": command.value, "argument": argument},
        )
