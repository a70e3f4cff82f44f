"""Campus Flow configuration system.

Usage:
    from campusflow.core.config import ConfigManager
    from campusflow.core.config.domains import RegistryConfig

    # Direct config manager usage
    config = ConfigManager(home=Path("/path/to/home")).load_config()

    # Domain-specific accessors (recommended)
    registry = RegistryConfig(home=Path("/path/to/home"))
    capacity = registry.capacity
"""
from __future__ import annotations

from .manager import ConfigManager
from .cache import get_cached_config, clear_all_caches, is_cached
from .base import BaseDomainConfig

from .domains import (
    RegistryConfig,
    StorageConfig,
    SearchConfig,
    TimeConfig,
    LoggingConfig,
)

__all__ = [
    "ConfigManager",
    "BaseDomainConfig",
    "get_cached_config",
    "clear_all_caches",
    "is_cached",
    "RegistryConfig",
    "StorageConfig",
    "SearchConfig",
    "TimeConfig",
    "LoggingConfig",
]
