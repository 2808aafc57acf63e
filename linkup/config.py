"""Configuration loading for LinkUp.

Settings come from ``linkup/inputs/config.yml``; a few can be overridden
through environment variables:

- ``DATAMUSE_API_BASE``: Datamuse base URL
- ``LINKUP_CACHE_TTL``: response cache lifetime in seconds
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from linkup.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_HUB_WORDS = ["thing", "good", "man", "time", "world", "go", "get"]


def _get_inputs_path() -> Path:
    """Get path to linkup/inputs directory."""
    return Path(__file__).parent / "inputs"


@dataclass
class LinkUpConfig:
    """Runtime settings for the validator and the Datamuse adapter."""
    api_base: str = "https://api.datamuse.com"
    timeout: float = 10.0
    max_retries: int = 2
    max_results: int = 100
    cache_ttl_seconds: float = 1800.0
    rarity_threshold: float = 0.01
    hub_words: List[str] = field(default_factory=lambda: list(DEFAULT_HUB_WORDS))
    max_workers: int = 1

    def validate(self) -> None:
        """Raise ConfigError if any value is out of range."""
        if self.timeout <= 0:
            raise ConfigError(f"datamuse.timeout must be positive, got {self.timeout}")
        if self.max_retries < 0:
            raise ConfigError(f"datamuse.max_retries must be >= 0, got {self.max_retries}")
        if self.max_results < 1:
            raise ConfigError(f"datamuse.max_results must be >= 1, got {self.max_results}")
        if self.cache_ttl_seconds <= 0:
            raise ConfigError(f"datamuse.cache_ttl_seconds must be positive, got {self.cache_ttl_seconds}")
        if not 0 <= self.rarity_threshold <= 1:
            raise ConfigError(f"scoring.rarity_threshold must be in [0, 1], got {self.rarity_threshold}")
        if self.max_workers < 1:
            raise ConfigError(f"resolver.max_workers must be >= 1, got {self.max_workers}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LinkUpConfig":
        """Build a config from the nested YAML structure."""
        datamuse = data.get("datamuse") or {}
        scoring = data.get("scoring") or {}
        resolver = data.get("resolver") or {}
        defaults = cls()

        hub_words = scoring.get("hub_words", defaults.hub_words)
        if not isinstance(hub_words, (list, tuple)):
            raise ConfigError(f"scoring.hub_words must be a list of words, got {hub_words!r}")

        try:
            config = cls(
                api_base=str(datamuse.get("api_base", defaults.api_base)),
                timeout=float(datamuse.get("timeout", defaults.timeout)),
                max_retries=int(datamuse.get("max_retries", defaults.max_retries)),
                max_results=int(datamuse.get("max_results", defaults.max_results)),
                cache_ttl_seconds=float(datamuse.get("cache_ttl_seconds", defaults.cache_ttl_seconds)),
                rarity_threshold=float(scoring.get("rarity_threshold", defaults.rarity_threshold)),
                hub_words=[str(w).strip().lower() for w in hub_words],
                max_workers=int(resolver.get("max_workers", defaults.max_workers)),
            )
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid configuration value: {e}") from e

        config.validate()
        return config


def _apply_env_overrides(config: LinkUpConfig) -> LinkUpConfig:
    api_base = os.getenv("DATAMUSE_API_BASE")
    if api_base:
        config.api_base = api_base

    ttl = os.getenv("LINKUP_CACHE_TTL")
    if ttl:
        try:
            config.cache_ttl_seconds = float(ttl)
        except ValueError as e:
            raise ConfigError(f"LINKUP_CACHE_TTL must be a number, got {ttl!r}") from e

    config.validate()
    return config


def load_config(config_file: Optional[Path] = None) -> LinkUpConfig:
    """Load configuration from YAML, falling back to defaults if the file is missing."""
    if config_file is None:
        config_file = _get_inputs_path() / "config.yml"

    try:
        with open(config_file, "r") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning(f"Config file not found: {config_file}, using defaults")
        return _apply_env_overrides(LinkUpConfig())
    except yaml.YAMLError as e:
        raise ConfigError(f"Could not parse {config_file}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping at the top of {config_file}")

    config = LinkUpConfig.from_dict(data)
    logger.debug(f"Loaded config from {config_file}")
    return _apply_env_overrides(config)
