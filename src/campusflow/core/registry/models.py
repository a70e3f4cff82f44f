"""Registry entity models.

This module defines the task record, the category label set, registry
settings, and the snapshot that is persisted, imported, and exported as a
single unit. Wire keys are camelCase; attributes are snake_case.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

DEFAULT_TIME = "09:00"
DEFAULT_CAPACITY = 8.0


class TaskStatus(str, Enum):
    PLANNED = "planned"
    COMPLETED = "completed"
    CANCELED = "canceled"


TASK_STATUSES = tuple(s.value for s in TaskStatus)

# Statuses that take a task out of the active workload.
CLOSED_STATUSES = frozenset({TaskStatus.COMPLETED.value, TaskStatus.CANCELED.value})


class CategoryType(str, Enum):
    WORK = "work"
    LIFE = "life"


def parse_category_type(raw: Optional[str]) -> CategoryType:
    """Return the category type; anything unrecognized counts as work."""
    v = str(raw or "").strip().lower()
    for t in CategoryType:
        if v == t.value:
            return t
    return CategoryType.WORK


@dataclass
class Task:
    """A single logged or planned activity.

    Attributes:
        id: Opaque unique identifier (generated, immutable after creation)
        title: Activity title
        date: Calendar date ``YYYY-MM-DD``
        time: Clock time ``HH:MM``
        duration: Hours, in quarter-hour steps
        category: Category id
        status: One of ``planned``, ``completed``, ``canceled``
        urgent: Urgency flag
        cancel_reason: Justification, required when canceled
        notes: Free text
        created_at: ISO timestamp set by the registry on creation
        updated_at: ISO timestamp set by the registry on every mutation
    """
    id: str
    title: str
    date: str
    duration: float
    category: str
    time: str = DEFAULT_TIME
    status: str = TaskStatus.PLANNED.value
    urgent: bool = False
    cancel_reason: str = ""
    notes: str = ""
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.status not in CLOSED_STATUSES

    def searchable_fields(self) -> List[str]:
        """Fields the search engine matches against, in order."""
        return [self.title or "", self.category or "", self.notes or "", self.cancel_reason or ""]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "date": self.date,
            "time": self.time,
            "duration": self.duration,
            "category": self.category,
            "status": self.status,
            "urgent": self.urgent,
            "cancelReason": self.cancel_reason,
            "notes": self.notes,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, default_time: str = DEFAULT_TIME) -> "Task":
        """Create a Task from its wire form.

        Accepts the legacy ``name`` key for ``title`` and snake_case variants
        of the camelCase keys.
        """
        duration = data.get("duration", 0)
        try:
            duration = float(duration)
        except (TypeError, ValueError, OverflowError):
            duration = 0.0

        return cls(
            id=str(data.get("id") or ""),
            title=str(data.get("title") or data.get("name") or ""),
            date=str(data.get("date") or ""),
            time=str(data.get("time") or default_time),
            duration=duration,
            category=str(data.get("category") or ""),
            status=str(data.get("status") or TaskStatus.PLANNED.value),
            urgent=bool(data.get("urgent", False)),
            cancel_reason=str(data.get("cancelReason") or data.get("cancel_reason") or ""),
            notes=str(data.get("notes") or ""),
            created_at=data.get("createdAt") or data.get("created_at"),
            updated_at=data.get("updatedAt") or data.get("updated_at"),
        )


@dataclass
class Category:
    """A task label with presentation metadata."""
    id: str
    label: str
    color: str = ""
    type: CategoryType = CategoryType.WORK

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "label": self.label, "color": self.color, "type": self.type.value}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Category":
        cid = str(data.get("id") or "")
        return cls(
            id=cid,
            label=str(data.get("label") or cid),
            color=str(data.get("color") or ""),
            type=parse_category_type(data.get("type")),
        )


@dataclass
class Settings:
    capacity: float = DEFAULT_CAPACITY
    categories: List[Category] = field(default_factory=list)

    def category_ids(self) -> List[str]:
        return [c.id for c in self.categories]

    def find_category(self, ref: str) -> Optional[Category]:
        """Resolve a category by id, falling back to a label match."""
        for c in self.categories:
            if c.id == ref:
                return c
        for c in self.categories:
            if c.label == ref:
                return c
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "capacity": self.capacity,
            "categories": [c.to_dict() for c in self.categories],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, defaults: Optional["Settings"] = None) -> "Settings":
        """Build settings, taking missing fields from ``defaults``."""
        base = defaults or cls()
        raw_capacity = data.get("capacity", base.capacity)
        try:
            capacity = float(raw_capacity)
        except (TypeError, ValueError, OverflowError):
            capacity = base.capacity
        if not math.isfinite(capacity) or capacity <= 0:
            capacity = base.capacity

        raw_categories = data.get("categories")
        if isinstance(raw_categories, list):
            categories = [Category.from_dict(c) for c in raw_categories if isinstance(c, Mapping)]
        else:
            categories = list(base.categories)
        return cls(capacity=capacity, categories=categories)


@dataclass
class ViewDate:
    """Month currently shown by calendar views (month is 0-11)."""
    month: int
    year: int

    @classmethod
    def current(cls, today: Optional[date] = None) -> "ViewDate":
        d = today or date.today()
        return cls(month=d.month - 1, year=d.year)

    def shifted(self, delta: int) -> "ViewDate":
        total = self.year * 12 + self.month + delta
        return ViewDate(month=total % 12, year=total // 12)

    def to_dict(self) -> Dict[str, Any]:
        return {"month": self.month, "year": self.year}

    @classmethod
    def from_dict(cls, data: Any) -> "ViewDate":
        if not isinstance(data, Mapping):
            return cls.current()
        try:
            return cls(month=int(data["month"]) % 12, year=int(data["year"]))
        except (KeyError, TypeError, ValueError, OverflowError):
            return cls.current()


@dataclass
class Snapshot:
    """The full registry: settings plus tasks, persisted as one unit."""
    settings: Settings
    tasks: List[Task] = field(default_factory=list)
    view_date: ViewDate = field(default_factory=ViewDate.current)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "settings": self.settings.to_dict(),
            "tasks": [t.to_dict() for t in self.tasks],
            "viewDate": self.view_date.to_dict(),
        }

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        *,
        defaults: Optional[Settings] = None,
        default_time: str = DEFAULT_TIME,
    ) -> "Snapshot":
        """Build a snapshot, filling absent settings from ``defaults``.

        Task records are taken as-is; per-record validation is the job of the
        validation engine, not of deserialization.
        """
        raw_settings = data.get("settings")
        settings = Settings.from_dict(raw_settings if isinstance(raw_settings, Mapping) else {}, defaults=defaults)
        raw_tasks = data.get("tasks")
        tasks = [
            Task.from_dict(t, default_time=default_time)
            for t in (raw_tasks if isinstance(raw_tasks, list) else [])
            if isinstance(t, Mapping)
        ]
        return cls(settings=settings, tasks=tasks, view_date=ViewDate.from_dict(data.get("viewDate")))


__all__ = [
    "DEFAULT_TIME",
    "DEFAULT_CAPACITY",
    "TaskStatus",
    "TASK_STATUSES",
    "CLOSED_STATUSES",
    "CategoryType",
    "parse_category_type",
    "Task",
    "Category",
    "Settings",
    "ViewDate",
    "Snapshot",
]
