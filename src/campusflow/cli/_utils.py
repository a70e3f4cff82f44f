"""Shared CLI utility functions."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict, Optional

from campusflow.core.paths import resolve_home

# argparse dest -> task wire key
TASK_ARG_FIELDS = {
    "title": "title",
    "date": "date",
    "time": "time",
    "duration": "duration",
    "category": "category",
    "status": "status",
    "urgent": "urgent",
    "cancel_reason": "cancelReason",
    "notes": "notes",
}


def get_home(args: argparse.Namespace) -> Path:
    """Home directory from --home, else $CAMPUSFLOW_HOME, else ~/.campusflow."""
    raw = getattr(args, "home", None)
    return resolve_home(Path(raw) if raw else None)


def load_state(args: argparse.Namespace):
    """Build a RegistryState for the selected home and initialize it."""
    from campusflow.core.registry.state import RegistryState

    state = RegistryState.from_config(get_home(args))
    state.initialize()
    return state


def task_fields_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    """Collect the task fields the user actually passed."""
    fields: Dict[str, Any] = {}
    for dest, key in TASK_ARG_FIELDS.items():
        value = getattr(args, dest, None)
        if value is None:
            continue
        if key == "duration":
            value = parse_number(value)
        fields[key] = value
    return fields


def parse_number(raw: Any) -> Any:
    """Parse a numeric CLI value; unparsable input is passed through for validation to reject."""
    try:
        return float(raw)
    except (TypeError, ValueError):
        return raw


def task_line(task, label: Optional[str] = None, *, title: Optional[str] = None) -> str:
    """One-line text rendering of a task; ``title`` overrides the shown title."""
    from campusflow.core.registry.aggregates import format_duration

    flags = " !" if task.urgent and task.is_open else ""
    return (
        f"{task.id}  {task.date} {task.time}  [{task.status}]{flags}  "
        f"{title or task.title} ({label or task.category}, {format_duration(task.duration)})"
    )


__all__ = [
    "get_home",
    "load_state",
    "task_fields_from_args",
    "parse_number",
    "task_line",
]
