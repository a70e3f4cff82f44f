"""CLI output formatting in JSON or text mode."""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Iterable, Optional

from campusflow.core.exceptions import RegistryError, ValidationError


class OutputFormatter:
    """Unified output formatter for CLI commands."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def success(
        self,
        data: Dict[str, Any],
        message: str,
        *,
        status: str = "success",
    ) -> None:
        """Print ``message`` in text mode, ``{"status", **data}`` in JSON mode."""
        if self.json_mode:
            output = {"status": status, **data}
            print(json.dumps(output, indent=self.indent, default=str))
        else:
            print(message)

    def error(
        self,
        error: Exception,
        message: Optional[str] = None,
        *,
        error_code: str = "error",
    ) -> None:
        """Report a failure on stderr.

        Validation failures also list every failing field.
        """
        msg = message or (error.message if isinstance(error, RegistryError) else str(error))
        if self.json_mode:
            output: Dict[str, Any] = {
                "error": error_code,
                "message": msg,
            }
            if isinstance(error, ValidationError):
                output["errors"] = error.errors
                output["codes"] = error.codes
            print(json.dumps(output, indent=self.indent), file=sys.stderr)
        else:
            print(f"Error: {msg}", file=sys.stderr)
            if isinstance(error, ValidationError) and len(error.errors) > 1:
                for field, text in error.errors.items():
                    print(f"  {field}: {text}", file=sys.stderr)

    def json_output(self, data: Any) -> None:
        print(json.dumps(data, indent=self.indent, default=str))

    def text(self, message: str) -> None:
        print(message)

    def text_kv(self, key: str, value: Any, prefix: str = "  ") -> None:
        if not self.json_mode:
            print(f"{prefix}{key}: {value}")

    def lines(self, rows: Iterable[str]) -> None:
        for row in rows:
            print(row)


def format_json(data: Any, indent: int = 2) -> str:
    return json.dumps(data, indent=indent, default=str)


__all__ = ["OutputFormatter", "format_json"]
