from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

EXACT_SCORE = 1.0
PREFIX_SCORE = 0.9
CONTAINS_SCORE = 0.7


def levenshtein_distance(a: str, b: str) -> int:
    """Classic edit distance; insert, delete and substitute all cost 1."""
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    # Two rolling rows of the DP matrix.
    prev = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        cur = [i] + [0] * len(b)
        for j, cb in enumerate(b, start=1):
            if ca == cb:
                cur[j] = prev[j - 1]
            else:
                cur[j] = 1 + min(prev[j], cur[j - 1], prev[j - 1])
        prev = cur
    return prev[len(b)]


def fuzzy_score(candidate: str, query: str) -> float:
    """Similarity of a candidate label to the query, in [0, 1].

    Tiers, first match wins: exact, prefix, substring, then normalized
    Levenshtein similarity. The last tier is capped at the substring score so
    a near-miss never outranks a label that actually contains the query.
    """
    text = candidate.lower()
    q = query.lower()

    if text == q:
        return EXACT_SCORE
    if text.startswith(q):
        return PREFIX_SCORE
    if q in text:
        return CONTAINS_SCORE

    distance = levenshtein_distance(text, q)
    longest = max(len(text), len(q))
    return min(CONTAINS_SCORE, max(0.0, 1.0 - distance / longest))


@dataclass(frozen=True)
class ScoredItem:
    index: int
    score: float


class FuzzyMatcher:
    def score(self, candidate: str, query: str) -> float:
        return fuzzy_score(candidate, query)

    def rank(self, query: str, labels: Iterable[str], *, threshold: float = 0.0) -> list[ScoredItem]:
        """Score every label and keep those strictly above the threshold.

        Order: score DESC, then original position ASC.
        """
        scored: list[ScoredItem] = []
        for i, label in enumerate(labels):
            s = fuzzy_score(label, query)
            if s > threshold:
                scored.append(ScoredItem(index=i, score=s))
        scored.sort(key=lambda item: (-item.score, item.index))
        return scored
