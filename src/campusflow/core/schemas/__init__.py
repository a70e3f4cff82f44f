"""Schema loading and structural validation helpers."""
from __future__ import annotations

from .validation import (
    load_schema,
    validate_payload_safe,
)

__all__ = [
    "load_schema",
    "validate_payload_safe",
]
