"""Registry error taxonomy.

Core operations report these through result objects rather than raising
them at callers; ``MutationResult.raise_for_error()`` and the CLI are the
places they actually get raised.
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class RegistryError(Exception):
    """Base exception for registry operations."""

    def __init__(
        self,
        message: str,
        *,
        entity_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.entity_id = entity_id
        self.context = context or {}


class ValidationError(RegistryError):
    """A candidate task failed one or more validation rules.

    Attributes:
        errors: field name -> human-readable message
        codes: field name -> rule code (e.g. ``TitleDuplicateWord``)
    """

    def __init__(
        self,
        errors: Dict[str, str],
        *,
        codes: Optional[Dict[str, str]] = None,
        entity_id: Optional[str] = None,
    ) -> None:
        first = next(iter(errors.values()), "Validation failed")
        super().__init__(first, entity_id=entity_id, context={"errors": dict(errors)})
        self.errors = dict(errors)
        self.codes = dict(codes or {})


class NotFoundError(RegistryError):
    """Raised when an operation targets an unknown task id."""

    def __init__(self, entity_id: str, message: Optional[str] = None) -> None:
        super().__init__(message or f"Task {entity_id} not found", entity_id=entity_id)


class PersistenceError(RegistryError):
    """The durable store could not be read, written, or parsed."""
    pass


class StructuralImportError(RegistryError):
    """An import payload is not a registry snapshot."""
    pass


class PatternCompileError(RegistryError):
    """A user-supplied search pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid search pattern {pattern!r}: {reason}", context={"pattern": pattern})
        self.pattern = pattern
        self.reason = reason


class ConfigError(RegistryError):
    """Configuration is missing or malformed."""
    pass


__all__ = [
    "RegistryError",
    "ValidationError",
    "NotFoundError",
    "PersistenceError",
    "StructuralImportError",
    "PatternCompileError",
    "ConfigError",
]
