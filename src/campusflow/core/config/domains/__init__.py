"""Domain-specific configuration accessors."""
from __future__ import annotations

from .registry import RegistryConfig
from .storage import StorageConfig
from .search import SearchConfig
from .time import TimeConfig
from .logging import LoggingConfig

__all__ = [
    "RegistryConfig",
    "StorageConfig",
    "SearchConfig",
    "TimeConfig",
    "LoggingConfig",
]
