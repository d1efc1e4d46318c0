"""
Rate table cache.

This module provides in-memory caching of the rating configuration
to avoid re-reading and re-validating the YAML file on every quote.
"""

import os
from typing import Any, Dict, Optional
from threading import Lock

import yaml

from app.schemas import RatingConfig

DEFAULT_RATING_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "config", "rating.yaml")


def load_rating_config(path: Optional[str] = None) -> RatingConfig:
    """
    Load and validate a rate table from YAML.

    Args:
        path: YAML file path. Defaults to RATING_CONFIG_PATH or config/rating.yaml.

    Returns:
        Validated RatingConfig
    """
    config_path = path or os.getenv("RATING_CONFIG_PATH", DEFAULT_RATING_CONFIG_PATH)
    with open(config_path, 'r') as f:
        raw: Dict[str, Any] = yaml.safe_load(f) or {}
    return RatingConfig.model_validate(raw)


class RatingConfigCache:
    """Thread-safe rate table cache."""

    def __init__(self, path: Optional[str] = None):
        self._path = path
        self._config: Optional[RatingConfig] = None
        self._lock = Lock()

    def get_config(self) -> RatingConfig:
        """Get cached rate table, loading from disk if not cached."""
        if self._config is None:
            with self._lock:
                if self._config is None:  # Double-check locking
                    self._config = load_rating_config(self._path)
        return self._config

    def get_version(self) -> str:
        return self.get_config().version

    def clear_cache(self):
        """Clear cached data (useful for testing)."""
        with self._lock:
            self._config = None

# Global cache instance
rating_config_cache = RatingConfigCache()
