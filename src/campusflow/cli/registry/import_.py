"""
Campus Flow registry import command.

SUMMARY: Replace the registry with an exported JSON file
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from campusflow.cli import OutputFormatter, add_standard_flags, load_state
from campusflow.core.exceptions import PersistenceError

SUMMARY = "Replace the registry with an exported JSON file"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("file", help="Path to a registry export (JSON)")
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        source = Path(args.file)
        try:
            payload = source.read_bytes()
        except OSError as e:
            raise PersistenceError(f"Cannot read {source}: {e}") from e

        state = load_state(args)
        result = state.import_text(payload)
        if not result.success:
            raise result.error

        invalid = state.audit()
        if not formatter.json_mode:
            for task_id, errors in invalid.items():
                print(f"Warning: task {task_id}: {next(iter(errors.values()))}", file=sys.stderr)
        formatter.success(
            {"tasks": len(state.tasks), "invalid": invalid},
            f"Imported {len(state.tasks)} task(s) from {source}",
        )
        return 0
    except Exception as e:
        formatter.error(e, error_code="registry_import_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
