"""Search-engine links and quick-answer suggestions for free text."""

from urllib.parse import quote_plus

from ..models.query import QueryType
from ..models.suggestion import SearchSuggestion
from .base import BaseProducer, Candidate, Production, ProductionRequest

QUESTION_WORDS = (
    "what", "how", "why", "when", "where", "who", "which", "can", "is", "are",
    "do", "does", "did", "will", "would", "could", "should",
)

ENGINE_LABELS = {"google": "Google", "duckduckgo": "DuckDuckGo", "bing": "Bing"}

SEARCH_QUALITY = 0.5
QUICK_ANSWER_QUALITY = 0.6


def is_question_like(query: str) -> bool:
    text = query.strip().lower()
    if text.endswith("?"):
        return True
    return any(text.startswith(word + " ") for word in QUESTION_WORDS)


def search_url(template: str, query: str) -> str:
    return template.replace("{query}", quote_plus(query))


class WebSearchProducer(BaseProducer):
    """Always offers a search-engine link so no query resolves to nothing.

    Question-like free-text searches also get a quick-answer entry when the
    user has quick answers enabled.
    """

    def produce(self, request: ProductionRequest) -> Production:
        if not request.query:
            return Production()

        template = request.preferences.search_url_template
        url = search_url(template, request.query)
        label = ENGINE_LABELS.get(request.preferences.preferred_search_engine.strip().lower(), "the web")

        production = Production(
            candidates=[
                Candidate(
                    SearchSuggestion(
                        title=request.query,
                        subtitle=f"Search {label}",
                        url=url,
                        type=QueryType.SEARCH,
                        icon=QueryType.SEARCH.icon,
                    ),
                    SEARCH_QUALITY,
                )
            ]
        )

        if (
            request.query_type == QueryType.SEARCH
            and request.preferences.enable_quick_answers
            and is_question_like(request.query)
        ):
            production.candidates.append(
                Candidate(
                    SearchSuggestion(
                        title=request.query,
                        subtitle="Ask this question",
                        url=url,
                        type=QueryType.QUICK_ANSWER,
                        icon=QueryType.QUICK_ANSWER.icon,
                    ),
                    QUICK_ANSWER_QUALITY,
                )
            )
        return production
