"""Regex search and filtering over registry tasks.

Pattern compilation never raises: an invalid pattern yields a failed
``CompileResult`` and filtering with no matcher is the identity, so a user
typing a half-finished expression sees the unfiltered registry.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from campusflow.core.exceptions import PatternCompileError

from .models import Task

DEFAULT_SEPARATOR = " "


@dataclass(frozen=True)
class Matcher:
    """A compiled, reusable search pattern.

    Matching goes through ``re.Pattern.search`` which carries no position
    state between calls, so one matcher can be applied to any number of
    records in any order.
    """
    pattern: str
    regex: "re.Pattern[str]"
    case_insensitive: bool = True

    def matches(self, text: str) -> bool:
        return self.regex.search(text) is not None

    def highlight_spans(self, text: str) -> List[tuple[int, int]]:
        """(start, end) spans of every non-empty match in ``text``."""
        return [m.span() for m in self.regex.finditer(text) if m.end() > m.start()]


@dataclass(frozen=True)
class CompileResult:
    matcher: Optional[Matcher] = None
    error: Optional[PatternCompileError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def compile_pattern(pattern: Optional[str], case_insensitive: bool = True) -> CompileResult:
    """Compile a user-supplied pattern.

    A blank pattern and an invalid pattern both produce no matcher; only the
    latter carries an error.
    """
    if pattern is None or not str(pattern).strip():
        return CompileResult()
    flags = re.IGNORECASE if case_insensitive else 0
    try:
        regex = re.compile(str(pattern), flags)
    except (re.error, RecursionError, OverflowError) as exc:
        return CompileResult(error=PatternCompileError(str(pattern), str(exc)))
    return CompileResult(matcher=Matcher(pattern=str(pattern), regex=regex, case_insensitive=case_insensitive))


def compile(pattern: Optional[str], case_insensitive: bool = True) -> Optional[Matcher]:
    """Compile ``pattern`` or return None ("no filtering") when blank or invalid."""
    return compile_pattern(pattern, case_insensitive).matcher


def searchable_text(task: Task, separator: str = DEFAULT_SEPARATOR) -> str:
    """Join title, category id, notes, and cancel reason for matching."""
    return separator.join(task.searchable_fields())


def filter_tasks(
    tasks: Sequence[Task],
    matcher: Optional[Matcher],
    *,
    separator: str = DEFAULT_SEPARATOR,
) -> Sequence[Task]:
    """Return the tasks whose searchable text matches, preserving order.

    With no matcher the input sequence itself is returned.
    """
    if matcher is None:
        return tasks
    return [t for t in tasks if matcher.matches(searchable_text(t, separator))]


def search(tasks: Iterable[Task], pattern: Optional[str], case_insensitive: bool = True) -> List[Task]:
    """Compile and filter in one step."""
    items = list(tasks)
    return list(filter_tasks(items, compile(pattern, case_insensitive)))


__all__ = [
    "Matcher",
    "CompileResult",
    "compile_pattern",
    "compile",
    "searchable_text",
    "filter_tasks",
    "search",
]
