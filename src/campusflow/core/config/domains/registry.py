"""Domain-specific configuration for the activity registry.

Holds the default daily capacity, the configured category set, and the
seed dataset location.
"""
from __future__ import annotations

from functools import cached_property
from pathlib import Path
from typing import List, Optional

from campusflow.core.exceptions import ConfigError
from campusflow.core.registry.models import DEFAULT_TIME, Category, Settings

from ..base import BaseDomainConfig


class RegistryConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "registry"

    @cached_property
    def capacity(self) -> float:
        raw = self.section.get("capacity", 8)
        try:
            value = float(raw)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"registry.capacity must be a number, got {raw!r}") from exc
        if value <= 0:
            raise ConfigError(f"registry.capacity must be positive, got {value}")
        return value

    @cached_property
    def default_time(self) -> str:
        return str(self.section.get("defaultTime") or DEFAULT_TIME)

    @cached_property
    def fallback_label(self) -> str:
        return str(self.section.get("fallbackLabel") or "General")

    @cached_property
    def burnout_threshold(self) -> float:
        return float(self.section.get("burnoutThreshold", 75))

    @cached_property
    def categories(self) -> List[Category]:
        raw = self.section.get("categories") or []
        if not isinstance(raw, list):
            raise ConfigError("registry.categories must be a list")
        categories = [Category.from_dict(item) for item in raw if isinstance(item, dict)]
        ids = [c.id for c in categories]
        if len(ids) != len(set(ids)):
            raise ConfigError("registry.categories contains duplicate ids")
        return categories

    @cached_property
    def seed_enabled(self) -> bool:
        seed = self.section.get("seed") or {}
        return bool(seed.get("enabled", True))

    @cached_property
    def seed_path(self) -> Optional[Path]:
        seed = self.section.get("seed") or {}
        raw = str(seed.get("path") or "").strip()
        if not raw:
            return None
        path = Path(raw).expanduser()
        if not path.is_absolute():
            path = self.home / path
        return path

    def default_settings(self) -> Settings:
        """Fresh settings built from configuration."""
        return Settings(capacity=self.capacity, categories=list(self.categories))


__all__ = ["RegistryConfig"]
