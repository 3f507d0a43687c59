"""Tests for fuzzy label matching."""

import pytest

from omnibox.matching import FuzzyMatcher, ScoredItem, fuzzy_score, levenshtein_distance


@pytest.mark.parametrize(
    "a,b,expected",
    [
        ("", "", 0),
        ("abc", "", 3),
        ("", "abc", 3),
        ("kitten", "sitting", 3),
        ("flaw", "lawn", 2),
        ("same", "same", 0),
    ],
)
def test_levenshtein_distance(a, b, expected):
    assert levenshtein_distance(a, b) == expected


def test_score_tiers():
    assert fuzzy_score("GitHub", "github") == 1.0
    assert fuzzy_score("GitHub Issues", "git") == 0.9
    assert fuzzy_score("My GitHub", "hub") == 0.7


def test_score_edit_distance():
    # Three substitutions over six characters.
    assert fuzzy_score("gitlab", "github") == pytest.approx(0.5)


def test_near_miss_never_beats_substring():
    assert fuzzy_score("gothub", "github") == 0.7
    assert fuzzy_score("vila", "vela") <= fuzzy_score("the vela", "vela")


def test_score_floor_is_zero():
    assert fuzzy_score("abc", "xyz") == 0.0


def test_score_of_self_is_one():
    for text in ["a", "vela", "Rust Book", "https://example.com"]:
        assert fuzzy_score(text, text) == 1.0


def test_score_tiers_are_monotonic():
    query = "vela"
    exact = fuzzy_score("vela", query)
    prefix = fuzzy_score("vela browser", query)
    contains = fuzzy_score("the vela browser", query)
    edit = fuzzy_score("vila", query)
    assert exact >= prefix >= contains >= edit


def test_rank_orders_by_score_then_position():
    matcher = FuzzyMatcher()
    labels = ["My GitHub", "GitHub", "GitHub Issues", "Gitlab", "unrelated"]

    ranked = matcher.rank("github", labels, threshold=0.4)

    assert ranked[0] == ScoredItem(index=1, score=1.0)
    assert ranked[1] == ScoredItem(index=2, score=0.9)
    assert ranked[2] == ScoredItem(index=0, score=0.7)
    assert 4 not in [item.index for item in ranked]


def test_rank_threshold_is_strict():
    matcher = FuzzyMatcher()
    assert matcher.rank("vela", ["the vela"], threshold=0.7) == []
    assert matcher.rank("vela", ["the vela"], threshold=0.69) == [ScoredItem(index=0, score=0.7)]


def test_rank_ties_keep_input_order():
    matcher = FuzzyMatcher()
    ranked = matcher.rank("doc", ["docs b", "docs a"])
    assert [item.index for item in ranked] == [0, 1]
