"""Seed dataset loading.

The seed follows the ``{dailyCapacity, tasks}`` contract and is read once,
at startup, when there is no prior registry data.
"""
from __future__ import annotations

import json
import math
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from campusflow.data import get_data_path

logger = logging.getLogger(__name__)

BUNDLED_SEED = ("seed", "seed.json")


class SeedError(Exception):
    """The seed dataset could not be fetched or does not follow the contract."""


@dataclass
class SeedData:
    tasks: List[Dict[str, Any]] = field(default_factory=list)
    daily_capacity: Optional[float] = None


SeedSource = Callable[[], SeedData]


def parse_seed(raw: Any) -> SeedData:
    """Validate the seed contract and return its parts.

    Raises:
        SeedError: If ``raw`` is not an object or ``tasks`` is not a list
    """
    if not isinstance(raw, dict):
        raise SeedError("Seed data must be a JSON object")
    tasks = raw.get("tasks", [])
    if not isinstance(tasks, list):
        raise SeedError("Seed data 'tasks' must be a list")
    capacity = raw.get("dailyCapacity")
    try:
        capacity = float(capacity) if capacity else None
    except (TypeError, ValueError, OverflowError):
        capacity = None
    if capacity is not None and not (math.isfinite(capacity) and capacity > 0):
        capacity = None
    return SeedData(tasks=[t for t in tasks if isinstance(t, dict)], daily_capacity=capacity)


def file_seed_source(path: Optional[Path] = None) -> SeedSource:
    """Seed source reading a JSON file (the bundled seed when ``path`` is None)."""
    seed_path = Path(path) if path is not None else get_data_path(*BUNDLED_SEED)

    def _fetch() -> SeedData:
        try:
            raw = json.loads(seed_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise SeedError(f"Seed data not found or unreadable at {seed_path}: {e}") from e
        return parse_seed(raw)

    return _fetch


__all__ = ["SeedData", "SeedError", "SeedSource", "parse_seed", "file_seed_source"]
