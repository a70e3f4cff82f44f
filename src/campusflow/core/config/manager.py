"""
Campus Flow configuration management (YAML-only).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from campusflow.core.exceptions import ConfigError
from campusflow.core.paths import HOME_ENV_VAR, get_user_config_dir, resolve_home
from campusflow.core.utils.io import iter_yaml_files, read_yaml
from campusflow.core.utils.merge import deep_merge
from campusflow.data import get_data_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "CAMPUSFLOW_"

# Env vars that share the prefix but are not config overrides.
_RESERVED_ENV_KEYS = frozenset({HOME_ENV_VAR})


class ConfigManager:
    """Load and merge Campus Flow configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: CAMPUSFLOW_<section>__<key>
    2. User config: <home>/config/*.yaml (alphabetical order)
    3. Bundled defaults: campusflow.data/config/*.yaml (alphabetical order)
    """

    def __init__(self, home: Optional[Path] = None) -> None:
        self.home = resolve_home(home)
        self.core_config_dir = get_data_path("config")
        self.user_config_dir = get_user_config_dir(self.home)

    def deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        return deep_merge(base, override)

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        # Fail closed: configuration must never silently ignore invalid YAML.
        try:
            data = read_yaml(path, default={}, raise_on_error=True)
        except Exception as exc:
            raise ConfigError(f"Invalid configuration file {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration file {path} must contain a mapping")
        return data

    def _load_directory(self, directory: Path, cfg: Dict[str, Any]) -> Dict[str, Any]:
        for path in iter_yaml_files(directory):
            cfg = self.deep_merge(cfg, self.load_yaml(path))
        return cfg

    # ---------- Environment overrides ----------

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except ValueError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _parse_env_key(self, raw: str) -> List[str]:
        segs = raw.split("__") if "__" in raw else raw.split("_")
        if any(seg == "" for seg in segs):
            logger.warning("Ignoring malformed %s* key: %s", ENV_PREFIX, raw)
            return []
        return [seg.lower() for seg in segs]

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX) or key in _RESERVED_ENV_KEYS:
                continue
            path = self._parse_env_key(key[len(ENV_PREFIX):])
            if not path:
                continue
            yield path, self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur: Union[Dict[str, Any], Any] = root
        for part in path[:-1]:
            if not isinstance(cur, dict):
                raise ConfigError(f"Environment override traverses a non-mapping at '{part}'")
            lower_map = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
            use_key = lower_map.get(part, part)
            if use_key not in cur or not isinstance(cur[use_key], dict):
                cur[use_key] = {}
            cur = cur[use_key]
        if not isinstance(cur, dict):
            raise ConfigError("Environment override targets a non-mapping")
        lower_map = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
        cur[lower_map.get(path[-1], path[-1])] = value

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, typed_value in self._iter_env_overrides():
            self._set_nested(cfg, path, typed_value)

    # ---------- Loading ----------

    def load_config_uncached(self) -> Dict[str, Any]:
        """Load and merge configuration from all sources (UNCACHED)."""
        cfg: Dict[str, Any] = {}
        cfg = self._load_directory(self.core_config_dir, cfg)
        cfg = self._load_directory(self.user_config_dir, cfg)
        self.apply_env_overrides(cfg)
        return cfg

    def load_config(self) -> Dict[str, Any]:
        """Load configuration through the shared cache."""
        from .cache import get_cached_config

        return get_cached_config(home=self.home)


__all__ = ["ConfigManager", "ENV_PREFIX"]
