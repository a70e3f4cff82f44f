"""Domain-specific configuration for timestamp formatting."""
from __future__ import annotations

from functools import cached_property
from typing import Any, Dict

from ..base import BaseDomainConfig


class TimeConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "time"

    @cached_property
    def _iso8601(self) -> Dict[str, Any]:
        return self.section.get("iso8601") or {}

    @cached_property
    def timespec(self) -> str:
        return str(self._iso8601.get("timespec") or "")

    @cached_property
    def use_z_suffix(self) -> bool:
        return bool(self._iso8601.get("use_z_suffix", True))


__all__ = ["TimeConfig"]
