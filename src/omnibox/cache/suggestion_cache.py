"""Time- and popularity-aware cache of resolved suggestion lists.

Entries live in a fixed number of shards, each an LRU-ordered dict behind its
own lock, so a reader only contends with writers of the same shard. All
writes (entry insertion, popularity increments, recent-query bookkeeping) are
additionally serialized by one write lock.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from ..models.suggestion import CACHE_TTL, CachedSuggestions, SearchSuggestion
from .popularity import InMemoryPopularityStore, PopularityStore

logger = logging.getLogger(__name__)

POPULARITY_STEP = 0.1
MAX_POPULARITY = 1.0


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def normalize_key(query: str) -> str:
    return query.strip()


def popularity_key(query: str) -> str:
    return query.strip().lower()


class _Shard:
    def __init__(self, capacity: int):
        self.capacity = capacity
        self.lock = threading.Lock()
        self.entries: OrderedDict[str, CachedSuggestions] = OrderedDict()


class SuggestionCache:
    """Bounded LRU cache with a lazy TTL and durable popularity scores."""

    def __init__(
        self,
        popularity_store: Optional[PopularityStore] = None,
        *,
        capacity: int = 1000,
        ttl: timedelta = CACHE_TTL,
        shards: int = 8,
        recent_queries_cap: int = 100,
        clock: Callable[[], datetime] = _utc_now,
    ):
        if capacity <= 0:
            raise ValueError("capacity must be > 0")
        if shards <= 0:
            raise ValueError("shards must be > 0")
        shards = min(shards, capacity)
        per_shard = -(-capacity // shards)  # ceil

        self.ttl = ttl
        self.recent_queries_cap = recent_queries_cap
        self._clock = clock
        self._shards = [_Shard(per_shard) for _ in range(shards)]
        self._write_lock = threading.Lock()
        self._store = popularity_store or InMemoryPopularityStore()
        self._popularity: dict[str, float] = {
            q: min(MAX_POPULARITY, max(0.0, s)) for q, s in self._store.load_all().items()
        }
        self._recent: list[str] = []

    def _shard_for(self, key: str) -> _Shard:
        return self._shards[hash(key) % len(self._shards)]

    def get(self, query: str) -> Optional[list[SearchSuggestion]]:
        """Return the cached list, or None if absent or past its expiry."""
        key = normalize_key(query)
        shard = self._shard_for(key)
        with shard.lock:
            entry = shard.entries.get(key)
            if entry is None:
                return None
            if entry.is_expired(self._clock()):
                del shard.entries[key]
                return None
            shard.entries.move_to_end(key)
            return entry.suggestions

    def put(
        self,
        query: str,
        suggestions: list[SearchSuggestion],
        *,
        count_popularity: bool = True,
    ) -> CachedSuggestions:
        """Store a suggestion list, bump its popularity and record it as recent.

        Background writes (preloading, late async results) pass
        ``count_popularity=False`` so only user-issued queries are counted.
        """
        key = normalize_key(query)
        with self._write_lock:
            if count_popularity:
                popularity = self._bump_popularity(key)
                self._remember(key)
            else:
                popularity = self._popularity.get(popularity_key(key), 0.0)
            entry = CachedSuggestions(
                suggestions=suggestions,
                created_at=self._clock(),
                popularity=popularity,
                ttl=self.ttl,
            )
            shard = self._shard_for(key)
            with shard.lock:
                shard.entries[key] = entry
                shard.entries.move_to_end(key)
                while len(shard.entries) > shard.capacity:
                    evicted, _ = shard.entries.popitem(last=False)
                    logger.debug("Evicted cached suggestions for %r", evicted)
        return entry

    def record_query(self, query: str) -> float:
        """Count a user-issued query without caching its suggestions."""
        key = normalize_key(query)
        with self._write_lock:
            popularity = self._bump_popularity(key)
            self._remember(key)
        return popularity

    def _bump_popularity(self, key: str) -> float:
        pkey = popularity_key(key)
        # Rounded so ten steps land exactly on 1.0.
        score = min(MAX_POPULARITY, round(self._popularity.get(pkey, 0.0) + POPULARITY_STEP, 10))
        self._popularity[pkey] = score
        self._store.set(pkey, score)
        return score

    def _remember(self, key: str) -> None:
        if key in self._recent:
            self._recent.remove(key)
        self._recent.insert(0, key)
        if self.recent_queries_cap > 0:
            del self._recent[self.recent_queries_cap:]

    def popularity(self, query: str) -> float:
        return self._popularity.get(popularity_key(query), 0.0)

    def popular_queries(self, limit: int = 20) -> list[str]:
        """Top queries by popularity, ties broken alphabetically."""
        with self._write_lock:
            items = list(self._popularity.items())
        ranked = sorted(items, key=lambda kv: (-kv[1], kv[0]))
        return [q for q, _ in ranked[:limit]]

    @property
    def recent_queries(self) -> list[str]:
        return list(self._recent)

    def __len__(self) -> int:
        return sum(len(s.entries) for s in self._shards)

    def clear(self) -> None:
        """Drop cached entries; popularity and recent queries are kept."""
        with self._write_lock:
            for shard in self._shards:
                with shard.lock:
                    shard.entries.clear()
