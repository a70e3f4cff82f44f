"""Domain-specific configuration for registry search."""
from __future__ import annotations

from functools import cached_property

from ..base import BaseDomainConfig


class SearchConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "search"

    @cached_property
    def case_insensitive(self) -> bool:
        return bool(self.section.get("caseInsensitive", True))

    @cached_property
    def separator(self) -> str:
        sep = self.section.get("separator")
        return " " if sep is None else str(sep)


__all__ = ["SearchConfig"]
