"""Configuration management for Omnibox."""

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # Python < 3.11


def _find_repo_root(start_dir: Path) -> Path:
    """Find repository root by walking upward looking for .git or pyproject.toml."""
    current_dir = start_dir

    while True:
        if (current_dir / ".git").exists() or (current_dir / "pyproject.toml").exists():
            return current_dir

        parent_dir = current_dir.parent

        # Stop if we reach filesystem root
        if parent_dir == current_dir:
            return start_dir

        current_dir = parent_dir


def _load_repo_config_data(repo_root: Path) -> Optional[dict]:
    """Load repo config data from .omnibox/config.toml if it exists."""
    config_file = repo_root / ".omnibox" / "config.toml"

    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        # If config file is malformed, ignore it
        return None


def _as_int(value: Any, *, name: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Invalid config: {name} must be an int")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise ValueError(f"Invalid config: {name} must be an int")


def _as_float(value: Any, *, name: str) -> float:
    if isinstance(value, bool):
        raise ValueError(f"Invalid config: {name} must be a float")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            pass
    raise ValueError(f"Invalid config: {name} must be a float")


def _as_bool(value: Any, *, name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"1", "true", "yes", "y", "on"}:
            return True
        if lowered in {"0", "false", "no", "n", "off", ""}:
            return False
    raise ValueError(f"Invalid config: {name} must be a bool")


def _default_state_dir() -> Path:
    return Path(os.environ.get("OMNIBOX_STATE_DIR", "~/.omnibox")).expanduser()


class OmniboxConfig(BaseModel):
    """Configuration for suggestion resolution, caching and persistence."""

    state_dir: Path = Field(default_factory=_default_state_dir)

    # Cache
    cache_capacity: int = Field(default=1000, gt=0)
    cache_ttl_seconds: float = Field(default=300.0, gt=0)
    cache_shards: int = Field(default=8, gt=0)
    recent_queries_cap: int = Field(default=100, ge=0)
    preload_top_n: int = Field(default=20, ge=0)

    # Ranking
    max_results: int = Field(default=20, gt=0)
    fuzzy_threshold: float = Field(default=0.4, ge=0.0, le=1.0)
    priority_weight: float = Field(default=0.5, ge=0.0, le=1.0)
    match_weight: float = Field(default=0.5, ge=0.0, le=1.0)

    # Background work
    weather_timeout_seconds: float = Field(default=5.0, gt=0)
    worker_threads: int = Field(default=4, gt=0)

    analytics_enabled: bool = Field(default=False)

    model_config = {"frozen": True}

    @property
    def popularity_db_path(self) -> Path:
        return self.state_dir / "popularity.sqlite"

    @property
    def analytics_path(self) -> Path:
        return self.state_dir / "analytics.jsonl"

    @classmethod
    def from_env(cls, cli_state_dir: Optional[str] = None) -> "OmniboxConfig":
        """Load configuration with the following precedence:

        1. CLI --state-dir option (state_dir only)
        2. OMNIBOX_* environment variables
        3. repo-local .omnibox/config.toml (walk upward from CWD)
        4. Defaults

        Raises:
            ValueError: If any provided value has the wrong type or range
        """
        data = _load_repo_config_data(_find_repo_root(Path.cwd())) or {}
        section = data.get("omnibox") if isinstance(data.get("omnibox"), dict) else data

        def pick(key: str, default: Any) -> Any:
            env_value = os.environ.get(f"OMNIBOX_{key.upper()}")
            if env_value is not None:
                return env_value
            return section.get(key, default)

        state_dir_value = cli_state_dir or os.environ.get("OMNIBOX_STATE_DIR") or section.get("state_dir")
        state_dir = Path(str(state_dir_value)).expanduser() if state_dir_value else _default_state_dir()

        return cls(
            state_dir=state_dir,
            cache_capacity=_as_int(pick("cache_capacity", 1000), name="cache_capacity"),
            cache_ttl_seconds=_as_float(pick("cache_ttl_seconds", 300), name="cache_ttl_seconds"),
            cache_shards=_as_int(pick("cache_shards", 8), name="cache_shards"),
            recent_queries_cap=_as_int(pick("recent_queries_cap", 100), name="recent_queries_cap"),
            preload_top_n=_as_int(pick("preload_top_n", 20), name="preload_top_n"),
            max_results=_as_int(pick("max_results", 20), name="max_results"),
            fuzzy_threshold=_as_float(pick("fuzzy_threshold", 0.4), name="fuzzy_threshold"),
            priority_weight=_as_float(pick("priority_weight", 0.5), name="priority_weight"),
            match_weight=_as_float(pick("match_weight", 0.5), name="match_weight"),
            weather_timeout_seconds=_as_float(pick("weather_timeout_seconds", 5.0), name="weather_timeout_seconds"),
            worker_threads=_as_int(pick("worker_threads", 4), name="worker_threads"),
            analytics_enabled=_as_bool(pick("analytics_enabled", False), name="analytics_enabled"),
        )
