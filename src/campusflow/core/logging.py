"""Process-wide logging setup for the campusflow CLI.

Library modules only call ``logging.getLogger(__name__)``; handlers are
installed here, once, by the entry point.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from campusflow.core.utils.io import ensure_directory

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_INSTALLED_HANDLER: logging.Handler | None = None


def _level_from_name(name: str) -> int:
    value = getattr(logging, str(name).upper(), None)
    return value if isinstance(value, int) else logging.WARNING


def configure_logging(level: str = "WARNING", log_path: Optional[Path] = None) -> logging.Handler:
    """Install a single handler on the root logger.

    Writes to ``log_path`` when given, otherwise to stderr. Calling again
    replaces the handler installed by the previous call.
    """
    global _INSTALLED_HANDLER

    root = logging.getLogger()
    root.setLevel(_level_from_name(level))

    if _INSTALLED_HANDLER is not None:
        root.removeHandler(_INSTALLED_HANDLER)
        _INSTALLED_HANDLER.close()
        _INSTALLED_HANDLER = None

    handler: logging.Handler
    if log_path is not None:
        resolved = Path(log_path).resolve()
        ensure_directory(resolved.parent)
        handler = logging.FileHandler(resolved, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(_level_from_name(level))
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)

    _INSTALLED_HANDLER = handler
    return handler


def configure_from_config(home: Optional[Path] = None, *, level: Optional[str] = None) -> logging.Handler:
    """Configure logging from the ``logging`` config section."""
    from campusflow.core.config.domains import LoggingConfig

    cfg = LoggingConfig(home=home)
    return configure_logging(level or cfg.level, cfg.path)


def reset_logging_for_tests() -> None:
    """Test-only: remove the handler installed by ``configure_logging``."""
    global _INSTALLED_HANDLER
    if _INSTALLED_HANDLER is not None:
        logging.getLogger().removeHandler(_INSTALLED_HANDLER)
        _INSTALLED_HANDLER.close()
    _INSTALLED_HANDLER = None


__all__ = ["LOG_FORMAT", "configure_logging", "configure_from_config", "reset_logging_for_tests"]
