"""File I/O utilities for Campus Flow core.

Single source of truth for safe file access patterns:
- Atomic writes with fsync and advisory locks
- JSON and YAML reads with shared locks
- Directory management utilities
"""
from __future__ import annotations

import fcntl
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Iterator, Optional, TextIO

import yaml


def ensure_parent_dir(path: Path) -> None:
    """Ensure the parent directory for ``path`` exists."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def ensure_directory(path: Path, create: bool = True) -> Path:
    """Ensure directory exists.

    Args:
        path: Directory path to check/create
        create: If True, create directory if missing; if False, raise if missing

    Returns:
        Path: The directory path (guaranteed to exist if create=True)

    Raises:
        FileNotFoundError: If create=False and directory doesn't exist
        NotADirectoryError: If path exists but is not a directory
    """
    path = Path(path)

    if path.exists():
        if not path.is_dir():
            raise NotADirectoryError(f"Path exists but is not a directory: {path}")
        return path

    if create:
        path.mkdir(parents=True, exist_ok=True)
        return path
    raise FileNotFoundError(f"Directory does not exist: {path}")


def atomic_write(
    path: Path,
    write_fn: Callable[[TextIO], None],
    *,
    encoding: str = "utf-8",
) -> None:
    """Write to ``path`` atomically using a temp file + fsync + rename.

    - Parent directory is created if missing
    - Data is written to a temporary file in the same directory
    - File is fsync'd, unlocked, then atomically replaced
    - Any leftover temp file is cleaned up on failure
    """
    path = Path(path)
    ensure_parent_dir(path)

    tmp_path: Optional[Path] = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding=encoding,
            dir=str(path.parent),
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            write_fn(f)
            f.flush()
            os.fsync(f.fileno())
            fcntl.flock(f.fileno(), fcntl.LOCK_UN)

        os.replace(str(tmp_path), str(path))
    finally:
        if tmp_path is not None and tmp_path.exists():
            try:
                tmp_path.unlink()
            except OSError:
                # Temp removal must never mask the original error
                pass


def write_text_atomic(path: Path, text: str, *, encoding: str = "utf-8") -> None:
    """Atomically replace ``path`` with ``text``."""
    atomic_write(Path(path), lambda f: f.write(text), encoding=encoding)


def read_text_locked(path: Path, *, encoding: str = "utf-8") -> str:
    """Read a text file under a shared lock; raises FileNotFoundError when missing."""
    with open(path, "r", encoding=encoding) as f:
        fcntl.flock(f.fileno(), fcntl.LOCK_SH)
        try:
            return f.read()
        finally:
            fcntl.flock(f.fileno(), fcntl.LOCK_UN)


def read_yaml(path: Path, default: Any = None, raise_on_error: bool = False) -> Any:
    """Read YAML with error handling.

    Returns default if file is missing or invalid, unless raise_on_error is True.

    Examples:
        >>> config = read_yaml(Path("config.yaml"), default={})
        >>> assert isinstance(config, dict)
    """
    path = Path(path)
    if not path.exists():
        if raise_on_error:
            raise FileNotFoundError(f"File not found: {path}")
        return default

    try:
        data = yaml.safe_load(read_text_locked(path))
        return data if data is not None else default
    except (OSError, yaml.YAMLError):
        if raise_on_error:
            raise
        return default


def iter_yaml_files(directory: Path) -> Iterator[Path]:
    """Yield ``*.yaml`` / ``*.yml`` files in ``directory`` in alphabetical order."""
    directory = Path(directory)
    if not directory.is_dir():
        return iter(())
    files = [p for p in directory.iterdir() if p.is_file() and p.suffix in (".yaml", ".yml")]
    return iter(sorted(files, key=lambda p: p.name))


__all__ = [
    "ensure_parent_dir",
    "ensure_directory",
    "atomic_write",
    "write_text_atomic",
    "read_text_locked",
    "read_yaml",
    "iter_yaml_files",
]
