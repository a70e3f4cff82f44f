"""In-memory byte stores and task factories for registry tests."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from campusflow.core.exceptions import PersistenceError
from campusflow.core.registry.seed import SeedData


class MemoryByteStore:
    """Dict-backed ByteStore; can be told to fail reads or writes."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self.data: Dict[str, str] = dict(initial or {})
        self.fail_writes = False
        self.fail_reads = False
        self.writes = 0

    def read(self, key: str) -> Optional[str]:
        if self.fail_reads:
            raise PersistenceError("read failed")
        return self.data.get(key)

    def write(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise PersistenceError("quota exceeded")
        self.writes += 1
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


def task_dict(**overrides: Any) -> Dict[str, Any]:
    """A valid task candidate in wire form."""
    data: Dict[str, Any] = {
        "title": "Study for exam",
        "date": "2024-03-01",
        "duration": 1.5,
        "category": "academic",
        "time": "10:00",
        "status": "planned",
    }
    data.update(overrides)
    return data


def static_seed(tasks: Optional[List[Dict[str, Any]]] = None, capacity: Optional[float] = 6):
    def _fetch() -> SeedData:
        return SeedData(tasks=list(tasks or []), daily_capacity=capacity)

    return _fetch


def failing_seed():
    def _fetch() -> SeedData:
        raise OSError("network unreachable")

    return _fetch


class Clock:
    """Deterministic, strictly increasing timestamps."""

    def __init__(self) -> None:
        self.ticks = 0

    def __call__(self) -> str:
        self.ticks += 1
        return f"2024-03-01T00:00:{self.ticks:02d}.000Z"
