"""Task validation engine.

Pure checks that gate every registry mutation. ``validate_task`` returns a
mapping of field name -> message; an empty mapping means the candidate is
valid. Rules run independently per field and only the first failing rule of
a field is reported.
"""
from __future__ import annotations

import math
import re
from decimal import Decimal, InvalidOperation
from fractions import Fraction
from typing import Any, Collection, Dict, Mapping, Optional

from .models import TASK_STATUSES, TaskStatus

# Rule codes
TITLE_REQUIRED = "TitleRequired"
TITLE_PADDING = "TitlePadding"
TITLE_DUPLICATE_WORD = "TitleDuplicateWord"
DURATION_INVALID = "DurationInvalid"
DATE_INVALID = "DateInvalid"
CANCEL_REASON_REQUIRED = "CancelReasonRequired"
STATUS_INVALID = "StatusInvalid"
TIME_INVALID = "TimeInvalid"
CATEGORY_UNKNOWN = "CategoryUnknown"

MESSAGES: Dict[str, str] = {
    TITLE_REQUIRED: "Activity title is required.",
    TITLE_PADDING: "Title cannot have leading or trailing spaces.",
    TITLE_DUPLICATE_WORD: "Duplicate words detected. Please refine the title.",
    DURATION_INVALID: "Duration must be in 0.25 (15 min) increments.",
    DATE_INVALID: "Please provide a valid date (YYYY-MM-DD).",
    CANCEL_REASON_REQUIRED: "A justification is required for registry deviations.",
    STATUS_INVALID: "Status must be one of: planned, completed, canceled.",
    TIME_INVALID: "Please provide a valid time (HH:MM).",
    CATEGORY_UNKNOWN: "Please choose a configured category.",
}

MIN_CANCEL_REASON_LENGTH = 5

TITLE_PATTERN = re.compile(r"\S(?:.*\S)?", re.DOTALL)
DUPLICATE_WORD_PATTERN = re.compile(r"\b(\w+)\s+\1\b", re.IGNORECASE)
DATE_PATTERN = re.compile(r"\d{4}-(0[1-9]|1[0-2])-(0[1-9]|[12]\d|3[01])")
TIME_PATTERN = re.compile(r"([01]\d|2[0-3]):[0-5]\d")


def _title_code(raw: Any) -> Optional[str]:
    title = "" if raw is None else str(raw)
    if not title.strip():
        return TITLE_REQUIRED
    if not TITLE_PATTERN.fullmatch(title):
        return TITLE_PADDING
    if DUPLICATE_WORD_PATTERN.search(title):
        return TITLE_DUPLICATE_WORD
    return None


def is_quarter_hour(value: Any) -> bool:
    """True for non-negative numbers that are exact multiples of 0.25.

    Values too large to store as a finite float are rejected.
    """
    if isinstance(value, bool) or value is None:
        return False
    if isinstance(value, float) and not math.isfinite(value):
        return False
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return False
    if not amount.is_finite() or amount < 0:
        return False
    if not math.isfinite(float(amount)):
        return False
    return (Fraction(amount) * 4).denominator == 1


def _date_code(raw: Any) -> Optional[str]:
    if not isinstance(raw, str) or not DATE_PATTERN.fullmatch(raw):
        return DATE_INVALID
    return None


def _cancel_reason_code(status: Any, reason: Any) -> Optional[str]:
    if status != TaskStatus.CANCELED.value:
        return None
    text = "" if reason is None else str(reason)
    if len(text.strip()) < MIN_CANCEL_REASON_LENGTH:
        return CANCEL_REASON_REQUIRED
    return None


def validate_task_codes(
    candidate: Mapping[str, Any],
    *,
    known_categories: Optional[Collection[str]] = None,
) -> Dict[str, str]:
    """Run every rule and return field name -> rule code for failures.

    Args:
        candidate: Task data in wire form (camelCase keys)
        known_categories: When given, ``category`` must be one of these ids

    Returns:
        Empty dict when the candidate is valid
    """
    codes: Dict[str, str] = {}

    title = candidate.get("title")
    if title is None:
        title = candidate.get("name")
    code = _title_code(title)
    if code:
        codes["title"] = code

    if not is_quarter_hour(candidate.get("duration")):
        codes["duration"] = DURATION_INVALID

    code = _date_code(candidate.get("date"))
    if code:
        codes["date"] = code

    status = candidate.get("status")
    reason = candidate.get("cancelReason", candidate.get("cancel_reason"))
    code = _cancel_reason_code(status, reason)
    if code:
        codes["cancelReason"] = code

    if status is not None and status not in TASK_STATUSES:
        codes["status"] = STATUS_INVALID

    time = candidate.get("time")
    if time not in (None, "") and not (isinstance(time, str) and TIME_PATTERN.fullmatch(time)):
        codes["time"] = TIME_INVALID

    if known_categories is not None and candidate.get("category") not in known_categories:
        codes["category"] = CATEGORY_UNKNOWN

    return codes


def validate_task(
    candidate: Mapping[str, Any],
    *,
    known_categories: Optional[Collection[str]] = None,
) -> Dict[str, str]:
    """Validate a candidate task; returns field name -> message (empty if valid)."""
    codes = validate_task_codes(candidate, known_categories=known_categories)
    return {field: MESSAGES[code] for field, code in codes.items()}


def first_error(errors: Mapping[str, str]) -> Optional[str]:
    """The representative message surfaced to users for a failed mutation."""
    return next(iter(errors.values()), None)


__all__ = [
    "TITLE_REQUIRED",
    "TITLE_PADDING",
    "TITLE_DUPLICATE_WORD",
    "DURATION_INVALID",
    "DATE_INVALID",
    "CANCEL_REASON_REQUIRED",
    "STATUS_INVALID",
    "TIME_INVALID",
    "CATEGORY_UNKNOWN",
    "MESSAGES",
    "MIN_CANCEL_REASON_LENGTH",
    "is_quarter_hour",
    "validate_task_codes",
    "validate_task",
    "first_error",
]
