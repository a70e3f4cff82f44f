"""Domain-specific configuration for stdlib logging."""

from __future__ import annotations

from functools import cached_property
from pathlib import Path
from typing import Optional

from ..base import BaseDomainConfig


class LoggingConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "logging"

    @cached_property
    def level(self) -> str:
        return str(self.section.get("level", "WARNING") or "WARNING")

    @cached_property
    def path(self) -> Optional[Path]:
        raw = str(self.section.get("path") or "").strip()
        if not raw:
            return None
        expanded = Path(raw).expanduser()
        if not expanded.is_absolute():
            expanded = self.home / expanded
        return expanded.resolve()


__all__ = ["LoggingConfig"]
