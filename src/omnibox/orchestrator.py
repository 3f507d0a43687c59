"""Suggestion resolution: classify, produce, rank, cache.

The synchronous path never waits on the network. Slow producers (live
weather) run on a thread pool and report back through ``on_update``; each
resolve() call takes a new generation number and late results from an older
generation are cached under their own query but never delivered.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from .analytics import AnalyticsLedger
from .cache.popularity import PopularityStore, SqlitePopularityStore
from .cache.suggestion_cache import SuggestionCache, normalize_key
from .calc.evaluator import ExpressionEvaluator
from .config import OmniboxConfig
from .matching.fuzzy import FuzzyMatcher
from .models.analytics import SearchAction
from .models.context import SearchContext, UserPreferences
from .models.query import MAX_PRIORITY, QueryType
from .models.suggestion import SearchSuggestion
from .producers import (
    CalculationProducer,
    Candidate,
    CorpusSearchProducer,
    Production,
    ProductionRequest,
    TimeProducer,
    UnitConversionProducer,
    UrlProducer,
    WeatherProducer,
    WebSearchProducer,
)
from .providers.corpus import CorpusProvider
from .providers.weather import HttpWeatherProvider, WeatherProvider
from .routing.producer_router import ProducerRouter
from .routing.query_classifier import QueryClassifier
from .units.converter import UnitConverter

logger = logging.getLogger(__name__)

UpdateCallback = Callable[[list[SearchSuggestion]], None]

# Answers that go stale within the cache TTL; recomputed on every resolve.
UNCACHED_TYPES = frozenset({QueryType.TIME})


@dataclass(frozen=True)
class RankingPolicy:
    priority_weight: float = 0.5
    match_weight: float = 0.5
    max_results: int = 20

    def score(self, candidate: Candidate) -> float:
        priority = candidate.suggestion.type.priority / MAX_PRIORITY
        quality = min(1.0, max(0.0, candidate.match_quality))
        raw = self.priority_weight * priority + self.match_weight * quality
        return min(1.0, max(0.0, raw))


def rank(candidates: list[Candidate], policy: RankingPolicy) -> list[SearchSuggestion]:
    """Dedupe by (title, type, url), score, stable-sort descending, truncate.

    A duplicate keeps the position of its first occurrence and the best score
    seen for it. Scores are written to ``relevance_score`` in place.
    """
    best: dict[tuple, tuple[int, SearchSuggestion, float]] = {}
    for position, candidate in enumerate(candidates):
        key = candidate.suggestion.identity
        score = policy.score(candidate)
        if key in best:
            first_position, _, best_score = best[key]
            if score > best_score:
                best[key] = (first_position, candidate.suggestion, score)
        else:
            best[key] = (position, candidate.suggestion, score)

    ordered = sorted(best.values(), key=lambda entry: (-entry[2], entry[0]))
    ranked: list[SearchSuggestion] = []
    for _, suggestion, score in ordered[: policy.max_results]:
        suggestion.relevance_score = score
        ranked.append(suggestion)
    return ranked


class SuggestionOrchestrator:
    """Entry point for the presentation layer.

    Build one per process (see ``from_config``) and call ``resolve`` on every
    input change.
    """

    def __init__(
        self,
        *,
        classifier: QueryClassifier,
        router: ProducerRouter,
        cache: SuggestionCache,
        web_search: Optional[WebSearchProducer] = None,
        corpus: Optional[CorpusProvider] = None,
        analytics: Optional[AnalyticsLedger] = None,
        policy: Optional[RankingPolicy] = None,
        executor: Optional[Executor] = None,
        worker_threads: int = 4,
        preload_top_n: int = 20,
    ):
        self.classifier = classifier
        self.router = router
        self.cache = cache
        self.web_search = web_search or WebSearchProducer()
        self.corpus = corpus
        self.analytics = analytics
        self.policy = policy or RankingPolicy()
        self.preload_top_n = preload_top_n
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=worker_threads, thread_name_prefix="omnibox")
        self._generation = 0
        self._generation_lock = threading.Lock()

    @classmethod
    def from_config(
        cls,
        config: OmniboxConfig,
        *,
        corpus: Optional[CorpusProvider] = None,
        weather_provider: Optional[WeatherProvider] = None,
        popularity_store: Optional[PopularityStore] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> "SuggestionOrchestrator":
        """Wire every component once, at process start."""
        evaluator = ExpressionEvaluator()
        calculation = CalculationProducer(evaluator)
        corpus_search = CorpusSearchProducer(FuzzyMatcher(), threshold=config.fuzzy_threshold)
        weather = WeatherProducer(weather_provider or HttpWeatherProvider(config.weather_timeout_seconds))
        router = ProducerRouter(
            calculation=calculation,
            unit_conversion=UnitConversionProducer(UnitConverter()),
            corpus_search=corpus_search,
            weather=weather,
            time=TimeProducer(clock),
            url=UrlProducer(),
        )
        cache = SuggestionCache(
            popularity_store or SqlitePopularityStore(config.popularity_db_path),
            capacity=config.cache_capacity,
            ttl=timedelta(seconds=config.cache_ttl_seconds),
            shards=config.cache_shards,
            recent_queries_cap=config.recent_queries_cap,
        )
        analytics = AnalyticsLedger(config.analytics_path) if config.analytics_enabled else None
        return cls(
            classifier=QueryClassifier(),
            router=router,
            cache=cache,
            corpus=corpus,
            analytics=analytics,
            policy=RankingPolicy(
                priority_weight=config.priority_weight,
                match_weight=config.match_weight,
                max_results=config.max_results,
            ),
            worker_threads=config.worker_threads,
            preload_top_n=config.preload_top_n,
        )

    @property
    def generation(self) -> int:
        return self._generation

    def _next_generation(self) -> int:
        with self._generation_lock:
            self._generation += 1
            return self._generation

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    def resolve(
        self,
        query: str,
        context: SearchContext,
        preferences: UserPreferences,
        corpus: Optional[CorpusProvider] = None,
        on_update: Optional[UpdateCallback] = None,
    ) -> list[SearchSuggestion]:
        """Resolve a query into a ranked suggestion list.

        Args:
            query: Raw address-bar input
            context: Situational snapshot
            preferences: User preferences
            corpus: Corpus override for this call; defaults to the injected one
            on_update: Called from a worker thread with a re-ranked list when
                slow producers finish, unless a newer resolve() superseded
                this one

        Returns:
            Ranked suggestions, at most ``policy.max_results`` long
        """
        generation = self._next_generation()
        key = normalize_key(query)
        if not key:
            return []

        started = time.perf_counter()
        cached = self.cache.get(key)
        if cached is not None:
            self._record_query(key, self.classifier.classify(key), cached, (time.perf_counter() - started) * 1000.0)
            return cached

        query_type = self.classifier.classify(key)
        request = ProductionRequest(
            query=key,
            query_type=query_type,
            context=context,
            preferences=preferences,
            corpus=corpus if corpus is not None else self.corpus,
        )
        production = self._produce(request)
        suggestions = rank(production.candidates, self.policy)
        if query_type in UNCACHED_TYPES:
            self.cache.record_query(key)
        else:
            self.cache.put(key, suggestions)

        for task in production.deferred:
            self._schedule(task, key, generation, production.candidates, on_update)

        self._record_query(key, query_type, suggestions, (time.perf_counter() - started) * 1000.0)
        return suggestions

    def _produce(self, request: ProductionRequest) -> Production:
        production = Production()
        producers = (self.router.get_producer(request.query_type), self.web_search)
        for producer in producers:
            try:
                production.extend(producer.produce(request))
            except Exception:
                logger.exception("Producer %s failed for %s query", type(producer).__name__, request.query_type.value)
        return production

    def _schedule(
        self,
        task: Callable[[], list[Candidate]],
        key: str,
        generation: int,
        base: list[Candidate],
        on_update: Optional[UpdateCallback],
    ) -> Future:
        def run() -> None:
            try:
                late = task()
            except Exception as e:
                logger.warning("Deferred producer failed for %r: %s", key, e)
                return
            if not late:
                return

            # Copies, so lists already handed to the caller keep their scores.
            fresh = [Candidate(c.suggestion.model_copy(), c.match_quality) for c in base]
            merged = rank(fresh + late, self.policy)
            # The merged list still answers ``key``; only delivery is generation-bound.
            self.cache.put(key, merged, count_popularity=False)
            if not self.is_current(generation):
                logger.debug("Not delivering stale results for %r (generation %d < %d)", key, generation, self._generation)
                return
            if on_update is not None:
                on_update(merged)

        return self._executor.submit(run)

    def _record_query(
        self,
        key: str,
        query_type: QueryType,
        suggestions: list[SearchSuggestion],
        elapsed_ms: float,
    ) -> None:
        if self.analytics is None:
            return
        top = suggestions[0] if suggestions else None
        action = SearchAction.COMMAND_USE if query_type == QueryType.COMMAND else SearchAction.QUERY
        try:
            self.analytics.append_event(
                action,
                key,
                query_type=query_type,
                suggestion=top,
                response_time_ms=elapsed_ms,
            )
        except OSError as e:
            logger.warning("Could not write analytics event: %s", e)

    def record_selection(self, query: str, suggestion: SearchSuggestion, position: int) -> None:
        """Log that the user picked ``suggestion`` at ``position``."""
        if self.analytics is None:
            return
        try:
            self.analytics.append_event(
                SearchAction.SUGGESTION_CLICK,
                normalize_key(query),
                suggestion=suggestion,
                position=position,
            )
        except OSError as e:
            logger.warning("Could not write analytics event: %s", e)

    def preload_popular(
        self,
        context: SearchContext,
        preferences: UserPreferences,
        *,
        top_n: Optional[int] = None,
    ) -> list[Future]:
        """Resolve the most popular queries in the background to warm the cache.

        Preloading does not advance the generation counter, so it never
        cancels an interactive weather lookup, and it does not count towards
        popularity.
        """
        queries = self.cache.popular_queries(self.preload_top_n if top_n is None else top_n)
        return [self._executor.submit(self._preload_one, q, context, preferences) for q in queries]

    def _preload_one(self, query: str, context: SearchContext, preferences: UserPreferences) -> None:
        key = normalize_key(query)
        if not key or self.cache.get(key) is not None:
            return
        query_type = self.classifier.classify(key)
        if query_type in UNCACHED_TYPES:
            return
        request = ProductionRequest(
            query=key,
            query_type=query_type,
            context=context,
            preferences=preferences,
            corpus=self.corpus,
        )
        suggestions = rank(self._produce(request).candidates, self.policy)
        self.cache.put(key, suggestions, count_popularity=False)
        logger.debug("Preloaded %d suggestions for %r", len(suggestions), key)

    def close(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    def __enter__(self) -> "SuggestionOrchestrator":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
