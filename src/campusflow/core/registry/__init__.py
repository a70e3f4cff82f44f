"""Activity registry: task model, validation, search, persistence, and state.

Models, validation, search, and aggregates are imported eagerly. Storage and
state are resolved lazily because they pull in configuration, which itself
depends on the models defined here.
"""
from __future__ import annotations

from .models import (
    Category,
    CategoryType,
    Settings,
    Snapshot,
    Task,
    TaskStatus,
    ViewDate,
)
from .validation import first_error, is_quarter_hour, validate_task, validate_task_codes
from .search import Matcher, compile_pattern, filter_tasks, search
from .aggregates import Balance, TodayLoad, format_duration

_LAZY = {
    "RegistryStorage": ".storage",
    "FileByteStore": ".storage",
    "ExportBlob": ".storage",
    "ImportResult": ".storage",
    "RegistryState": ".state",
    "MutationResult": ".state",
    "InitialState": ".state",
}


def __getattr__(name: str):
    if name in _LAZY:
        from importlib import import_module

        return getattr(import_module(_LAZY[name], __name__), name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "Category",
    "CategoryType",
    "Settings",
    "Snapshot",
    "Task",
    "TaskStatus",
    "ViewDate",
    "first_error",
    "is_quarter_hour",
    "validate_task",
    "validate_task_codes",
    "Matcher",
    "compile_pattern",
    "filter_tasks",
    "search",
    "Balance",
    "TodayLoad",
    "format_duration",
    *_LAZY,
]
