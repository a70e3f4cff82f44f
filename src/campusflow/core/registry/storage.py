"""Registry persistence and data exchange.

``RegistryStorage`` is the only component that talks to the durable byte
store. It keeps one JSON document under a fixed key holding the whole
snapshot. Every operation is applied independently; none of them raise at
the caller:

- ``save`` logs and returns False when serialization or the write fails
- ``load`` returns None for a missing or unparsable document
- ``import_snapshot`` returns a failed ``ImportResult`` for bad payloads
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Protocol, Union

from campusflow.core.exceptions import PersistenceError, StructuralImportError
from campusflow.core.schemas import validate_payload_safe
from campusflow.core.utils.io import ensure_directory, read_text_locked, write_text_atomic

from .models import Snapshot

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "campus_flow_registry"
DEFAULT_EXPORT_PREFIX = "campus-flow-export"
SNAPSHOT_SCHEMA = "snapshot.schema"

SnapshotLike = Union[Snapshot, Mapping[str, Any]]


class ByteStore(Protocol):
    """Key/value text store holding durable registry copies."""

    def read(self, key: str) -> Optional[str]: ...

    def write(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class FileByteStore:
    """Byte store keeping one ``<key>.json`` file per key in ``directory``.

    Raises:
        PersistenceError: On any filesystem failure
    """

    file_extension: str = ".json"

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}{self.file_extension}"

    def read(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return read_text_locked(path)
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Cannot read {path}: {e}") from e

    def write(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            ensure_directory(self.directory)
            write_text_atomic(path, value)
        except OSError as e:
            raise PersistenceError(f"Cannot write {path}: {e}") from e

    def remove(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise PersistenceError(f"Cannot remove {path}: {e}") from e


@dataclass(frozen=True)
class ExportBlob:
    """A downloadable snapshot export."""
    filename: str
    text: str
    media_type: str = "application/json"

    @property
    def content(self) -> bytes:
        return self.text.encode("utf-8")

    def write_to(self, directory: Path) -> Path:
        """Write the export into ``directory`` and return its path."""
        target = ensure_directory(Path(directory)) / self.filename
        write_text_atomic(target, self.text)
        return target


@dataclass(frozen=True)
class ImportResult:
    """Outcome of ``import_snapshot``; exactly one of data / error is set."""
    success: bool
    data: Optional[Dict[str, Any]] = None
    error: Optional[StructuralImportError] = None

    @property
    def message(self) -> str:
        return self.error.message if self.error else ""


def _as_dict(snapshot: SnapshotLike) -> Dict[str, Any]:
    if isinstance(snapshot, Snapshot):
        return snapshot.to_dict()
    return dict(snapshot)


class RegistryStorage:
    """Persistence gateway for the registry snapshot."""

    def __init__(
        self,
        store: ByteStore,
        *,
        key: str = DEFAULT_STORAGE_KEY,
        export_prefix: str = DEFAULT_EXPORT_PREFIX,
        export_indent: int = 2,
    ) -> None:
        self.store = store
        self.key = key
        self.export_prefix = export_prefix
        self.export_indent = export_indent

    @classmethod
    def from_config(cls, home: Optional[Path] = None) -> "RegistryStorage":
        """Build a file-backed gateway from ``storage`` configuration."""
        from campusflow.core.config.domains import StorageConfig

        cfg = StorageConfig(home=home)
        return cls(
            FileByteStore(cfg.directory),
            key=cfg.key,
            export_prefix=cfg.export_prefix,
            export_indent=cfg.export_indent,
        )

    def save(self, snapshot: SnapshotLike) -> bool:
        """Overwrite the durable copy. Returns False (after logging) on failure."""
        try:
            payload = json.dumps(_as_dict(snapshot), ensure_ascii=False)
            self.store.write(self.key, payload)
        except (TypeError, ValueError, PersistenceError) as e:
            logger.error("Failed to save registry to durable store: %s", e)
            return False
        return True

    def load(self) -> Optional[Dict[str, Any]]:
        """Return the durable snapshot document, or None if absent or corrupt."""
        try:
            raw = self.store.read(self.key)
        except PersistenceError as e:
            logger.error("Failed to read registry from durable store: %s", e)
            return None
        if raw is None:
            return None
        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.warning("Durable registry data is corrupted; ignoring it: %s", e)
            return None
        if not isinstance(data, dict):
            logger.warning("Durable registry data is not an object; ignoring it")
            return None
        return data

    def export_filename(self, today: Optional[date] = None) -> str:
        return f"{self.export_prefix}-{(today or date.today()).isoformat()}.json"

    def export_snapshot(self, snapshot: SnapshotLike, *, today: Optional[date] = None) -> ExportBlob:
        """Serialize ``snapshot`` as pretty-printed JSON named with the date."""
        text = json.dumps(_as_dict(snapshot), indent=self.export_indent, ensure_ascii=False)
        return ExportBlob(filename=self.export_filename(today), text=text)

    def import_snapshot(self, text: Union[str, bytes]) -> ImportResult:
        """Parse an import payload; only the outer snapshot shape is checked."""
        try:
            if isinstance(text, bytes):
                text = text.decode("utf-8")
            parsed = json.loads(text)
            errors = validate_payload_safe(parsed, SNAPSHOT_SCHEMA)
            if errors:
                raise StructuralImportError(
                    "Invalid registry format: Missing mandatory 'tasks' array.",
                    context={"schema_errors": errors},
                )
        except StructuralImportError as e:
            return ImportResult(success=False, error=e)
        except (UnicodeDecodeError, ValueError, RecursionError) as e:
            return ImportResult(success=False, error=StructuralImportError(f"Invalid JSON: {e}"))
        return ImportResult(success=True, data=parsed)

    def clear(self) -> bool:
        """Delete the durable copy; clearing an empty store is not an error."""
        try:
            self.store.remove(self.key)
        except PersistenceError as e:
            logger.error("Failed to clear durable registry: %s", e)
            return False
        return True


__all__ = [
    "ByteStore",
    "FileByteStore",
    "ExportBlob",
    "ImportResult",
    "RegistryStorage",
    "DEFAULT_STORAGE_KEY",
]
