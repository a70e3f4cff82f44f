"""Home directory resolution for Campus Flow.

The home directory holds the user config overlay (``config/*.yaml``), the
durable registry store, and optional log files.

Resolution order:
1. Explicit ``home`` argument
2. ``CAMPUSFLOW_HOME`` environment variable
3. ``~/.campusflow``
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

HOME_ENV_VAR = "CAMPUSFLOW_HOME"
DEFAULT_HOME_DIRNAME = ".campusflow"


def resolve_home(home: Optional[Path] = None) -> Path:
    """Return the absolute Campus Flow home directory (not created)."""
    if home is not None:
        return Path(home).expanduser().resolve()
    env_home = os.environ.get(HOME_ENV_VAR, "").strip()
    if env_home:
        return Path(env_home).expanduser().resolve()
    return (Path.home() / DEFAULT_HOME_DIRNAME).resolve()


def get_user_config_dir(home: Optional[Path] = None) -> Path:
    return resolve_home(home) / "config"


def get_store_dir(home: Optional[Path] = None) -> Path:
    return resolve_home(home) / "store"


__all__ = [
    "HOME_ENV_VAR",
    "resolve_home",
    "get_user_config_dir",
    "get_store_dir",
]
