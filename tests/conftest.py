"""Pytest fixtures for Omnibox tests."""

from datetime import datetime

import pytest

from omnibox.config import OmniboxConfig
from omnibox.models.context import SearchContext, UserPreferences
from omnibox.providers.corpus import CorpusCategory, CorpusItem, InMemoryCorpusProvider


@pytest.fixture
def state_dir(tmp_path):
    """Create a temporary state directory for popularity and analytics files.

    Args:
        tmp_path: pytest's built-in temporary directory fixture

    Returns:
        Path to the state directory
    """
    path = tmp_path / "omnibox_state"
    path.mkdir()
    return path


@pytest.fixture
def omnibox_config(state_dir):
    """OmniboxConfig pointing at the temporary state directory."""
    return OmniboxConfig(state_dir=state_dir)


@pytest.fixture
def fixed_now():
    # A Tuesday afternoon.
    return datetime(2024, 3, 12, 14, 30)


@pytest.fixture
def context(fixed_now):
    return SearchContext.current(now=fixed_now)


@pytest.fixture
def preferences():
    return UserPreferences()


@pytest.fixture
def corpus():
    """In-memory corpus with a few bookmarks, history entries and tabs."""
    return InMemoryCorpusProvider(
        {
            CorpusCategory.BOOKMARK: [
                CorpusItem(label="Vela Browser", url="https://vela.app"),
                CorpusItem(label="Rust Book", url="https://doc.rust-lang.org/book/"),
                CorpusItem(label="Python Docs", url="https://docs.python.org/3/"),
            ],
            CorpusCategory.HISTORY: [
                CorpusItem(label="vela release notes", url="https://vela.app/releases"),
                CorpusItem(label="Weather in Paris", url="https://weather.com/paris"),
            ],
            CorpusCategory.TAB: [
                CorpusItem(label="GitHub", url="https://github.com"),
            ],
        }
    )
