"""Derived, read-only registry views.

Nothing here is stored; every view is recomputed from the live snapshot on
demand.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from campusflow.core.utils.time import parse_iso_date

from .models import CategoryType, Settings, Task, TaskStatus

DEFAULT_BURNOUT_THRESHOLD = 75.0
DEFAULT_FALLBACK_LABEL = "General"

PLANNER_SEGMENTS = ("upcoming", "passed", "completed", "canceled")


@dataclass(frozen=True)
class TodayLoad:
    """Scheduled hours for one day against the daily capacity."""
    date: str
    hours: float
    capacity: float
    tasks: List[Task] = field(default_factory=list)

    @property
    def percent(self) -> float:
        """Load as a percentage of capacity, capped at 100."""
        if self.capacity <= 0:
            return 100.0 if self.hours > 0 else 0.0
        return min(self.hours / self.capacity * 100.0, 100.0)

    @property
    def overloaded(self) -> bool:
        return self.hours > self.capacity


@dataclass(frozen=True)
class Balance:
    """Work vs life hours. Percentages are shares of work + life only."""
    work_hours: float
    life_hours: float
    unassigned_hours: float
    burnout_threshold: float = DEFAULT_BURNOUT_THRESHOLD

    @property
    def _total(self) -> float:
        # Floored to 1 so an empty registry reads as 0% / 0%.
        return (self.work_hours + self.life_hours) or 1.0

    @property
    def work_percent(self) -> float:
        return self.work_hours / self._total * 100.0

    @property
    def life_percent(self) -> float:
        return self.life_hours / self._total * 100.0

    @property
    def burnout_risk(self) -> bool:
        return self.work_percent > self.burnout_threshold


def tasks_on(tasks: Iterable[Task], day: str) -> List[Task]:
    """All tasks dated ``day`` (``YYYY-MM-DD``), in registry order."""
    return [t for t in tasks if t.date == day]


def today_load(tasks: Iterable[Task], capacity: float, today: Optional[date] = None) -> TodayLoad:
    """Hours scheduled for today, canceled tasks excluded."""
    day = (today or date.today()).isoformat()
    todays = [t for t in tasks_on(tasks, day) if t.status != TaskStatus.CANCELED.value]
    hours = sum(t.duration for t in todays)
    return TodayLoad(date=day, hours=hours, capacity=capacity, tasks=todays)


def urgent_tasks(tasks: Iterable[Task]) -> List[Task]:
    """Urgent tasks that are neither completed nor canceled."""
    return [t for t in tasks if t.urgent and t.is_open]


def urgent_count(tasks: Iterable[Task]) -> int:
    return len(urgent_tasks(tasks))


def balance(
    tasks: Iterable[Task],
    settings: Settings,
    *,
    burnout_threshold: float = DEFAULT_BURNOUT_THRESHOLD,
) -> Balance:
    """Sum durations per category type.

    Tasks whose category no longer resolves land in the unassigned bucket
    instead of being dropped silently.
    """
    hours: Dict[str, float] = {CategoryType.WORK.value: 0.0, CategoryType.LIFE.value: 0.0}
    unassigned = 0.0
    for t in tasks:
        cat = settings.find_category(t.category)
        if cat is None:
            unassigned += t.duration
            continue
        hours[cat.type.value] += t.duration
    return Balance(
        work_hours=hours[CategoryType.WORK.value],
        life_hours=hours[CategoryType.LIFE.value],
        unassigned_hours=unassigned,
        burnout_threshold=burnout_threshold,
    )


def planner_segments(tasks: Sequence[Task], today: Optional[date] = None) -> Dict[str, List[Task]]:
    """Group tasks into upcoming, passed, completed, and canceled.

    Open tasks are upcoming from today onward and passed before today; open
    tasks with an unparsable date belong to neither.
    """
    ref = today or date.today()
    segments: Dict[str, List[Task]] = {name: [] for name in PLANNER_SEGMENTS}
    for t in tasks:
        if t.status == TaskStatus.COMPLETED.value:
            segments["completed"].append(t)
        elif t.status == TaskStatus.CANCELED.value:
            segments["canceled"].append(t)
        else:
            day = parse_iso_date(t.date)
            if day is None:
                continue
            segments["upcoming" if day >= ref else "passed"].append(t)
    return segments


def category_label(task: Task, settings: Settings, fallback: str = DEFAULT_FALLBACK_LABEL) -> str:
    """Display label for a task's category; dangling references show ``fallback``."""
    cat = settings.find_category(task.category)
    return cat.label if cat else fallback


def format_duration(hours: float) -> str:
    """Render decimal hours, e.g. ``1.25 -> "1h 15m"``."""
    if not math.isfinite(hours):
        return f"{hours}h"
    h = int(hours)
    m = int(round((hours - h) * 60))
    if m == 60:
        h, m = h + 1, 0
    if h == 0:
        return f"{m}m"
    if m == 0:
        return f"{h}h"
    return f"{h}h {m}m"


__all__ = [
    "PLANNER_SEGMENTS",
    "TodayLoad",
    "Balance",
    "tasks_on",
    "today_load",
    "urgent_tasks",
    "urgent_count",
    "balance",
    "planner_segments",
    "category_label",
    "format_duration",
]
