"""Shared schema validation utilities.

Campus Flow validates structured payloads (imported snapshots) using JSON
Schema. Schemas are stored as YAML files under ``campusflow/data/schemas``
and loaded in a single, consistent way.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, List

from jsonschema import Draft202012Validator

from campusflow.core.utils.io import read_yaml
from campusflow.data import get_data_path


@lru_cache(maxsize=16)
def load_schema(schema_name: str) -> Dict[str, Any]:
    """Load a bundled schema dict.

    Automatically appends ``.yaml`` if no extension is present.

    Raises:
        FileNotFoundError: If schema file doesn't exist.
        ValueError: If schema is not a YAML mapping.
    """
    lowered = schema_name.lower()
    if not (lowered.endswith(".yaml") or lowered.endswith(".yml")):
        schema_name = f"{schema_name}.yaml"

    schema_path = get_data_path("schemas", schema_name)
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema not found: {schema_name}")

    schema = read_yaml(schema_path, default=None, raise_on_error=True)
    if not isinstance(schema, dict):
        raise ValueError(f"Schema must be a YAML mapping, got {type(schema).__name__}")
    return schema


def validate_payload_safe(payload: Any, schema_name: str) -> List[str]:
    """Validate a payload and return error messages (empty if valid)."""
    schema = load_schema(schema_name)
    validator = Draft202012Validator(schema)

    errors: List[str] = []
    for error in sorted(validator.iter_errors(payload), key=lambda e: str(e.path)):
        if error.path:
            path_str = ".".join(str(p) for p in error.path)
            errors.append(f"{path_str}: {error.message}")
        else:
            errors.append(error.message)
    return errors


__all__ = [
    "load_schema",
    "validate_payload_safe",
]
