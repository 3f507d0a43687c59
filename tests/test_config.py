"""Tests for OmniboxConfig loading."""

from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from omnibox.config import OmniboxConfig


@pytest.fixture
def repo(tmp_path, monkeypatch):
    """Empty repo root (marked by pyproject.toml) used as the working directory."""
    (tmp_path / "pyproject.toml").write_text("[project]\nname = 'x'\n")
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _write_repo_config(repo: Path, body: str) -> None:
    config_dir = repo / ".omnibox"
    config_dir.mkdir(exist_ok=True)
    (config_dir / "config.toml").write_text(body)


def test_defaults(repo):
    with patch.dict("os.environ", {}, clear=True):
        config = OmniboxConfig.from_env(cli_state_dir=str(repo / "state"))

    assert config.cache_capacity == 1000
    assert config.cache_ttl_seconds == 300
    assert config.max_results == 20
    assert config.fuzzy_threshold == 0.4
    assert config.priority_weight == 0.5
    assert config.match_weight == 0.5
    assert config.recent_queries_cap == 100
    assert config.analytics_enabled is False
    assert config.popularity_db_path == repo / "state" / "popularity.sqlite"
    assert config.analytics_path == repo / "state" / "analytics.jsonl"


def test_env_overrides(repo):
    env = {
        "OMNIBOX_STATE_DIR": str(repo / "env_state"),
        "OMNIBOX_CACHE_CAPACITY": "50",
        "OMNIBOX_FUZZY_THRESHOLD": "0.6",
        "OMNIBOX_ANALYTICS_ENABLED": "yes",
    }
    with patch.dict("os.environ", env, clear=True):
        config = OmniboxConfig.from_env()

    assert config.state_dir == repo / "env_state"
    assert config.cache_capacity == 50
    assert config.fuzzy_threshold == 0.6
    assert config.analytics_enabled is True


def test_cli_state_dir_wins_over_env(repo):
    with patch.dict("os.environ", {"OMNIBOX_STATE_DIR": str(repo / "env_state")}, clear=True):
        config = OmniboxConfig.from_env(cli_state_dir=str(repo / "cli_state"))
    assert config.state_dir == repo / "cli_state"


def test_repo_config_file(repo):
    _write_repo_config(repo, '[omnibox]\nmax_results = 7\nworker_threads = 2\nstate_dir = "/tmp/omnibox-test"\n')

    with patch.dict("os.environ", {}, clear=True):
        config = OmniboxConfig.from_env()

    assert config.max_results == 7
    assert config.worker_threads == 2
    assert config.state_dir == Path("/tmp/omnibox-test")


def test_repo_config_found_from_subdirectory(repo, monkeypatch):
    _write_repo_config(repo, "cache_shards = 4\n")
    nested = repo / "a" / "b"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)

    with patch.dict("os.environ", {}, clear=True):
        assert OmniboxConfig.from_env().cache_shards == 4


def test_env_beats_repo_config(repo):
    _write_repo_config(repo, "[omnibox]\nmax_results = 7\n")
    with patch.dict("os.environ", {"OMNIBOX_MAX_RESULTS": "9"}, clear=True):
        assert OmniboxConfig.from_env().max_results == 9


def test_malformed_toml_is_ignored(repo):
    _write_repo_config(repo, "this is = = not toml [")
    with patch.dict("os.environ", {}, clear=True):
        assert OmniboxConfig.from_env().max_results == 20


@pytest.mark.parametrize(
    "key,value",
    [
        ("OMNIBOX_CACHE_CAPACITY", "lots"),
        ("OMNIBOX_FUZZY_THRESHOLD", "high"),
        ("OMNIBOX_ANALYTICS_ENABLED", "maybe"),
    ],
)
def test_malformed_env_values_raise(repo, key, value):
    with patch.dict("os.environ", {key: value}, clear=True):
        with pytest.raises(ValueError):
            OmniboxConfig.from_env()


def test_out_of_range_values_raise(repo):
    # pydantic's ValidationError is a ValueError.
    with patch.dict("os.environ", {"OMNIBOX_FUZZY_THRESHOLD": "1.5"}, clear=True):
        with pytest.raises(ValidationError):
            OmniboxConfig.from_env()


def test_config_is_frozen(tmp_path):
    config = OmniboxConfig(state_dir=tmp_path)
    with pytest.raises(ValidationError):
        config.max_results = 5
