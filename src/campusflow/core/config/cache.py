"""Centralized configuration caching.

Provides a single source of truth for loaded configuration across all domain
configs. Domain configs use this module's caching instead of implementing
their own.
"""
from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Any, Dict, Optional

from campusflow.core.paths import get_user_config_dir, resolve_home

_config_cache: Dict[str, Dict[str, Any]] = {}


def _cache_key(home: Optional[Path]) -> str:
    """Generate a cache key from the home dir, env overrides, and config mtimes.

    Tests and long-running processes may mutate CAMPUSFLOW_* env vars or
    rewrite user config YAML after the first load; both are fingerprinted so
    a cache hit never returns stale config.
    """
    base = str(resolve_home(home))

    env_items = sorted(
        (k, os.environ.get(k, ""))
        for k in os.environ.keys()
        if k.startswith("CAMPUSFLOW_")
    )
    env_fp = hashlib.sha256(repr(env_items).encode("utf-8")).hexdigest()[:12]

    from campusflow.core.utils.io import iter_yaml_files

    files: list[tuple[str, int, int]] = []
    for p in iter_yaml_files(get_user_config_dir(home)):
        try:
            st = p.stat()
            files.append((p.name, int(st.st_mtime_ns), int(st.st_size)))
        except OSError:
            files.append((p.name, 0, 0))
    files_fp = hashlib.sha256(repr(files).encode("utf-8")).hexdigest()[:12]

    return f"{base}:{env_fp}:{files_fp}"


def get_cached_config(home: Optional[Path] = None) -> Dict[str, Any]:
    """Return the merged configuration for ``home``, loading it on first use."""
    key = _cache_key(home)
    cached = _config_cache.get(key)
    if cached is not None:
        return cached

    from .manager import ConfigManager

    cfg = ConfigManager(home=home).load_config_uncached()
    _config_cache[key] = cfg
    return cfg


def is_cached(home: Optional[Path] = None) -> bool:
    return _cache_key(home) in _config_cache


def clear_all_caches() -> None:
    """Drop every cached configuration (tests call this around each case)."""
    _config_cache.clear()


__all__ = ["get_cached_config", "is_cached", "clear_all_caches"]
