"""Base class for domain-specific configuration accessors.

Provides a standardized pattern for all domain configs with:
- Centralized caching via cache.py
- Consistent home directory handling
- Type-safe section access
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from functools import cached_property
from pathlib import Path
from typing import Any, Dict, Optional

from campusflow.core.paths import resolve_home

from .cache import get_cached_config


class BaseDomainConfig(ABC):
    """Abstract base class for domain-specific configuration accessors.

    Usage:
        class MyConfig(BaseDomainConfig):
            def _config_section(self) -> str:
                return "mySection"

            @cached_property
            def my_setting(self) -> str:
                return self.section.get("mySetting", "default")

        cfg = MyConfig(home=Path("/path/to/home"))
        print(cfg.my_setting)
    """

    def __init__(self, home: Optional[Path] = None) -> None:
        self._home = home
        self._config = get_cached_config(home=home)

    @property
    def home(self) -> Path:
        return resolve_home(self._home)

    @abstractmethod
    def _config_section(self) -> str:
        """Return the top-level config key for this domain."""
        ...

    @cached_property
    def section(self) -> Dict[str, Any]:
        """Get this domain's configuration section (empty dict if absent)."""
        return self._config.get(self._config_section(), {}) or {}


__all__ = ["BaseDomainConfig"]
