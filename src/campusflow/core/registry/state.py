"""Registry state: the single authority over the live snapshot.

All mutations go through ``RegistryState``. Each one validates before it
touches the collection, never applies a partial change, and persists the
whole snapshot afterwards. Reads hand out copies so callers cannot bypass
validation by editing records in place.
"""
from __future__ import annotations

import copy
import logging
import math
import time
import uuid
import dataclasses
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from campusflow.core.exceptions import NotFoundError, RegistryError, ValidationError

from . import aggregates
from .models import DEFAULT_TIME, Settings, Snapshot, Task, TaskStatus, ViewDate
from .search import CompileResult, compile_pattern, filter_tasks
from .seed import SeedSource
from .storage import ExportBlob, ImportResult, RegistryStorage
from .validation import first_error, validate_task, validate_task_codes

logger = logging.getLogger(__name__)

# Fields owned by the registry; callers can never set them.
ENGINE_FIELDS = frozenset({"id", "createdAt", "updatedAt", "created_at", "updated_at"})

# Alternate caller keys and the wire key they stand for.
FIELD_ALIASES = {"name": "title", "cancel_reason": "cancelReason"}

CAPACITY_INVALID = "CapacityInvalid"


class InitialState(str, Enum):
    RESTORED = "restored"
    SEEDED = "seeded"
    EMPTY = "empty"


@dataclass(frozen=True)
class MutationResult:
    """Outcome of a registry mutation.

    Attributes:
        ok: True when the mutation was applied
        task: The stored record after the mutation (copy)
        errors: field -> message for rejected mutations
        codes: field -> rule code for rejected mutations
        error: The typed error for rejected mutations
        persisted: Whether the follow-up save reached the durable store
    """
    ok: bool
    task: Optional[Task] = None
    errors: Dict[str, str] = field(default_factory=dict)
    codes: Dict[str, str] = field(default_factory=dict)
    error: Optional[RegistryError] = None
    persisted: bool = False

    @property
    def message(self) -> str:
        """One representative message for the user."""
        if self.errors:
            return first_error(self.errors) or ""
        if self.error is not None:
            return self.error.message
        return ""

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error

    @classmethod
    def rejected(cls, codes: Dict[str, str], errors: Dict[str, str], entity_id: Optional[str] = None) -> "MutationResult":
        return cls(
            ok=False,
            errors=errors,
            codes=codes,
            error=ValidationError(errors, codes=codes, entity_id=entity_id),
        )


def generate_id() -> str:
    """Opaque record id: ``rec_<epoch ms>_<random>``."""
    return f"rec_{int(time.time() * 1000)}_{uuid.uuid4().hex[:6]}"


class RegistryState:
    """Owns the in-memory registry snapshot and its mutation surface."""

    def __init__(
        self,
        storage: RegistryStorage,
        *,
        defaults: Optional[Settings] = None,
        default_time: str = DEFAULT_TIME,
        seed_source: Optional[SeedSource] = None,
        clock: Optional[Callable[[], str]] = None,
        id_factory: Callable[[], str] = generate_id,
        burnout_threshold: float = aggregates.DEFAULT_BURNOUT_THRESHOLD,
        fallback_label: str = aggregates.DEFAULT_FALLBACK_LABEL,
        case_insensitive: bool = True,
        search_separator: str = " ",
    ) -> None:
        self._storage = storage
        self._defaults = defaults or Settings()
        self._default_time = default_time
        self._seed_source = seed_source
        self._clock = clock or _default_clock
        self._id_factory = id_factory
        self._burnout_threshold = burnout_threshold
        self._fallback_label = fallback_label
        self._case_insensitive = case_insensitive
        self._search_separator = search_separator
        self._snapshot = self._fresh_snapshot()
        self.initial_state: Optional[InitialState] = None

    @classmethod
    def from_config(cls, home: Optional[Path] = None, *, seed_source: Optional[SeedSource] = None) -> "RegistryState":
        """Wire storage, defaults, and seed source from configuration."""
        from campusflow.core.config.domains import RegistryConfig, SearchConfig
        from campusflow.core.utils.time import utc_timestamp
        from .seed import file_seed_source

        reg = RegistryConfig(home=home)
        search_cfg = SearchConfig(home=home)
        if seed_source is None and reg.seed_enabled:
            seed_source = file_seed_source(reg.seed_path)
        return cls(
            RegistryStorage.from_config(home),
            defaults=reg.default_settings(),
            default_time=reg.default_time,
            seed_source=seed_source,
            clock=lambda: utc_timestamp(home=home),
            burnout_threshold=reg.burnout_threshold,
            fallback_label=reg.fallback_label,
            case_insensitive=search_cfg.case_insensitive,
            search_separator=search_cfg.separator,
        )

    # ---------- Lifecycle ----------

    def _fresh_snapshot(self) -> Snapshot:
        return Snapshot(settings=copy.deepcopy(self._defaults))

    def _snapshot_from(self, data: Mapping[str, Any]) -> Snapshot:
        return Snapshot.from_dict(data, defaults=copy.deepcopy(self._defaults), default_time=self._default_time)

    def initialize(self) -> InitialState:
        """Restore the durable copy, else seed, else start empty."""
        stored = self._storage.load()
        restored = self._snapshot_from(stored) if stored is not None else None
        if restored is not None and restored.tasks:
            self._snapshot = restored
            self._ensure_unique_ids()
            self.initial_state = InitialState.RESTORED
            logger.info("Registry restored with %d task(s)", len(self._snapshot.tasks))
            return self.initial_state

        base = restored if restored is not None else self._fresh_snapshot()
        self._snapshot = base

        if self._seed_source is None:
            self.initial_state = InitialState.EMPTY
            logger.info("Registry started empty (seeding disabled)")
            return self.initial_state

        try:
            seed = self._seed_source()
        except Exception as e:
            # The seed is an external collaborator; any failure degrades to empty.
            logger.info("Could not load seed data; starting with an empty registry: %s", e)
            self.initial_state = InitialState.EMPTY
            return self.initial_state

        base.tasks = [Task.from_dict(t, default_time=self._default_time) for t in seed.tasks]
        base.settings.capacity = seed.daily_capacity or self._defaults.capacity
        self._ensure_unique_ids()
        self._persist()
        self.initial_state = InitialState.SEEDED
        logger.info("Registry seeded with %d task(s)", len(base.tasks))
        return self.initial_state

    def _ensure_unique_ids(self) -> None:
        seen: set[str] = set()
        for t in self._snapshot.tasks:
            if not t.id or t.id in seen:
                old = t.id
                t.id = self._new_id(seen)
                logger.warning("Reassigned duplicate or missing task id %r to %s", old, t.id)
            seen.add(t.id)

    def _new_id(self, taken: Optional[set[str]] = None) -> str:
        taken = taken if taken is not None else {t.id for t in self._snapshot.tasks}
        new_id = self._id_factory()
        while new_id in taken:
            new_id = self._id_factory()
        return new_id

    def _persist(self) -> bool:
        return self._storage.save(self._snapshot)

    # ---------- Reads ----------

    @property
    def tasks(self) -> Tuple[Task, ...]:
        return tuple(dataclasses.replace(t) for t in self._snapshot.tasks)

    @property
    def settings(self) -> Settings:
        return copy.deepcopy(self._snapshot.settings)

    @property
    def view_date(self) -> ViewDate:
        return dataclasses.replace(self._snapshot.view_date)

    def snapshot(self) -> Snapshot:
        """A deep copy of the live snapshot."""
        return copy.deepcopy(self._snapshot)

    def get(self, task_id: str) -> Optional[Task]:
        idx = self._index_of(task_id)
        return None if idx is None else dataclasses.replace(self._snapshot.tasks[idx])

    def _index_of(self, task_id: str) -> Optional[int]:
        for i, t in enumerate(self._snapshot.tasks):
            if t.id == task_id:
                return i
        return None

    # ---------- Mutations ----------

    def _known_categories(self) -> List[str]:
        return self._snapshot.settings.category_ids()

    def _caller_fields(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        fields = {k: v for k, v in data.items() if k not in ENGINE_FIELDS}
        for alias, key in FIELD_ALIASES.items():
            if alias in fields:
                value = fields.pop(alias)
                fields.setdefault(key, value)
        return fields

    def _normalize(self, record: Dict[str, Any]) -> Dict[str, Any]:
        if not record.get("time"):
            record["time"] = self._default_time
        return record

    def create(self, candidate: Mapping[str, Any]) -> MutationResult:
        """Validate and append a new task; the registry assigns id and timestamps."""
        record: Dict[str, Any] = {
            "time": self._default_time,
            "status": TaskStatus.PLANNED.value,
            "urgent": False,
            "cancelReason": "",
            "notes": "",
        }
        record.update(self._caller_fields(candidate))
        record = self._normalize(record)
        record["id"] = self._new_id()
        record["createdAt"] = self._clock()

        codes = validate_task_codes(record, known_categories=self._known_categories())
        if codes:
            errors = validate_task(record, known_categories=self._known_categories())
            logger.debug("Rejected task create: %s", codes)
            return MutationResult.rejected(codes, errors)

        task = Task.from_dict(record, default_time=self._default_time)
        task.updated_at = self._clock()
        self._snapshot.tasks.append(task)
        persisted = self._persist()
        return MutationResult(ok=True, task=dataclasses.replace(task), persisted=persisted)

    def update(self, task_id: str, patch: Mapping[str, Any]) -> MutationResult:
        """Merge ``patch`` over the stored task, validate, and replace it in place."""
        idx = self._index_of(task_id)
        if idx is None:
            return MutationResult(ok=False, error=NotFoundError(task_id))

        current = self._snapshot.tasks[idx]
        merged = current.to_dict()
        merged.update(self._caller_fields(patch))
        merged = self._normalize(merged)

        codes = validate_task_codes(merged, known_categories=self._known_categories())
        if codes:
            errors = validate_task(merged, known_categories=self._known_categories())
            logger.debug("Rejected task update for %s: %s", task_id, codes)
            return MutationResult.rejected(codes, errors, entity_id=task_id)

        task = Task.from_dict(merged, default_time=self._default_time)
        task.created_at = current.created_at
        task.updated_at = self._clock()
        self._snapshot.tasks[idx] = task
        persisted = self._persist()
        return MutationResult(ok=True, task=dataclasses.replace(task), persisted=persisted)

    def delete(self, task_id: str) -> bool:
        """Remove a task if present; unknown ids are a no-op. Always persists."""
        idx = self._index_of(task_id)
        if idx is not None:
            del self._snapshot.tasks[idx]
        self._persist()
        return idx is not None

    def set_capacity(self, value: Any) -> MutationResult:
        """Replace the daily capacity (hours); must be a positive number."""
        try:
            capacity = float(value)
        except (TypeError, ValueError, OverflowError):
            capacity = 0.0
        if isinstance(value, bool) or not capacity > 0 or not math.isfinite(capacity):
            codes = {"capacity": CAPACITY_INVALID}
            return MutationResult.rejected(codes, {"capacity": "Capacity must be a positive number of hours."})
        self._snapshot.settings.capacity = capacity
        persisted = self._persist()
        return MutationResult(ok=True, persisted=persisted)

    def change_month(self, delta: int) -> ViewDate:
        """Move the calendar view month by ``delta`` and persist the new view."""
        self._snapshot.view_date = self._snapshot.view_date.shifted(int(delta))
        self._persist()
        return dataclasses.replace(self._snapshot.view_date)

    def replace(self, data: Mapping[str, Any]) -> bool:
        """Swap in an imported snapshot document and persist it.

        Settings absent from ``data`` keep their current values.
        """
        self._snapshot = Snapshot.from_dict(
            data, defaults=copy.deepcopy(self._snapshot.settings), default_time=self._default_time
        )
        self._ensure_unique_ids()
        return self._persist()

    def wipe(self) -> bool:
        """Delete the durable copy and reset the live registry to defaults."""
        cleared = self._storage.clear()
        self._snapshot = self._fresh_snapshot()
        return cleared

    # ---------- Exchange ----------

    def export(self, *, today: Optional[date] = None) -> ExportBlob:
        return self._storage.export_snapshot(self._snapshot, today=today)

    def import_text(self, text: Any) -> ImportResult:
        """Parse an import payload and, only if it is well formed, apply it."""
        result = self._storage.import_snapshot(text)
        if result.success and result.data is not None:
            self.replace(result.data)
        return result

    def audit(self) -> Dict[str, Dict[str, str]]:
        """Task id -> validation errors for stored records that fail validation.

        Imports and restores defer per-record validation; this reports it.
        """
        known = self._known_categories()
        report: Dict[str, Dict[str, str]] = {}
        for t in self._snapshot.tasks:
            errors = validate_task(t.to_dict(), known_categories=known)
            if errors:
                report[t.id] = errors
        return report

    # ---------- Derived views ----------

    def compile_search(self, pattern: Optional[str], case_insensitive: Optional[bool] = None) -> CompileResult:
        ci = self._case_insensitive if case_insensitive is None else case_insensitive
        return compile_pattern(pattern, ci)

    def search(self, pattern: Optional[str], case_insensitive: Optional[bool] = None) -> List[Task]:
        """Tasks matching ``pattern``; blank or invalid patterns match everything."""
        compiled = self.compile_search(pattern, case_insensitive)
        if compiled.error is not None:
            logger.debug("Search disabled for this query: %s", compiled.error.message)
        return list(filter_tasks(self.tasks, compiled.matcher, separator=self._search_separator))

    def today_load(self, today: Optional[date] = None) -> aggregates.TodayLoad:
        return aggregates.today_load(self.tasks, self._snapshot.settings.capacity, today)

    def urgent_tasks(self) -> List[Task]:
        return aggregates.urgent_tasks(self.tasks)

    def urgent_count(self) -> int:
        return aggregates.urgent_count(self._snapshot.tasks)

    def balance(self) -> aggregates.Balance:
        return aggregates.balance(
            self._snapshot.tasks, self._snapshot.settings, burnout_threshold=self._burnout_threshold
        )

    def planner_segments(self, today: Optional[date] = None) -> Dict[str, List[Task]]:
        return aggregates.planner_segments(self.tasks, today)

    def tasks_on(self, day: str) -> List[Task]:
        return aggregates.tasks_on(self.tasks, day)

    def category_label(self, task: Task) -> str:
        return aggregates.category_label(task, self._snapshot.settings, self._fallback_label)


def _default_clock() -> str:
    from campusflow.core.utils.time import utc_now

    return utc_now().isoformat(timespec="milliseconds").replace("+00:00", "Z")


__all__ = [
    "InitialState",
    "MutationResult",
    "RegistryState",
    "generate_id",
    "CAPACITY_INVALID",
]
