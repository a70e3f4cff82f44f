"""Domain-specific configuration for registry persistence and export."""
from __future__ import annotations

from functools import cached_property
from pathlib import Path

from campusflow.core.paths import get_store_dir

from ..base import BaseDomainConfig


class StorageConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "storage"

    @cached_property
    def key(self) -> str:
        return str(self.section.get("key") or "campus_flow_registry")

    @cached_property
    def directory(self) -> Path:
        raw = str(self.section.get("directory") or "").strip()
        if not raw:
            return get_store_dir(self.home)
        path = Path(raw).expanduser()
        if not path.is_absolute():
            path = self.home / path
        return path.resolve()

    @cached_property
    def export_prefix(self) -> str:
        export = self.section.get("export") or {}
        return str(export.get("prefix") or "campus-flow-export")

    @cached_property
    def export_indent(self) -> int:
        export = self.section.get("export") or {}
        return int(export.get("indent", 2))


__all__ = ["StorageConfig"]
