from __future__ import annotations

import sqlite3
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


class PopularityStore(ABC):
    """Durable query -> popularity mapping.

    Read in full once when a SuggestionCache starts, then written through on
    every update.
    """

    @abstractmethod
    def load_all(self) -> dict[str, float]:
        pass

    @abstractmethod
    def set(self, query: str, score: float) -> None:
        pass

    def get(self, query: str) -> Optional[float]:
        return self.load_all().get(query)


class InMemoryPopularityStore(PopularityStore):
    """Non-durable store for tests and throwaway sessions."""

    def __init__(self, initial: Optional[dict[str, float]] = None):
        self._scores: dict[str, float] = dict(initial or {})

    def load_all(self) -> dict[str, float]:
        return dict(self._scores)

    def set(self, query: str, score: float) -> None:
        self._scores[query] = float(score)

    def get(self, query: str) -> Optional[float]:
        return self._scores.get(query)


class SqlitePopularityStore(PopularityStore):
    def __init__(self, db_path: Path):
        self.db_path = db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path), timeout=10)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        conn = self._connect()
        try:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS popularity(
                  query TEXT PRIMARY KEY,
                  score REAL NOT NULL,
                  updated_at TEXT NOT NULL
                );
                """
            )
            conn.commit()
        finally:
            conn.close()

    def load_all(self) -> dict[str, float]:
        conn = self._connect()
        try:
            rows = conn.execute("SELECT query, score FROM popularity").fetchall()
            return {str(r["query"]): float(r["score"]) for r in rows}
        finally:
            conn.close()

    def get(self, query: str) -> Optional[float]:
        conn = self._connect()
        try:
            row = conn.execute("SELECT score FROM popularity WHERE query = ?", (query,)).fetchone()
            return float(row["score"]) if row is not None else None
        finally:
            conn.close()

    def set(self, query: str, score: float) -> None:
        conn = self._connect()
        try:
            with conn:
                conn.execute(
                    "INSERT INTO popularity(query, score, updated_at) VALUES(?, ?, ?) "
                    "ON CONFLICT(query) DO UPDATE SET score=excluded.score, updated_at=excluded.updated_at",
                    (query, float(score), _iso_now()),
                )
        finally:
            conn.close()
