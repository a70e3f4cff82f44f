"""
Campus Flow registry export command.

SUMMARY: Export the whole registry as a dated JSON file
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from campusflow.cli import OutputFormatter, add_standard_flags, load_state

SUMMARY = "Export the whole registry as a dated JSON file"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--out",
        type=str,
        default=".",
        help="Directory to write the export into (default: current directory)",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the export document instead of writing a file",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        state = load_state(args)
        blob = state.export()
        if args.stdout:
            formatter.text(blob.text)
            return 0

        path = blob.write_to(Path(args.out))
        formatter.success(
            {"filename": blob.filename, "path": str(path), "tasks": len(state.tasks)},
            f"Exported {len(state.tasks)} task(s) to {path}",
        )
        return 0
    except Exception as e:
        formatter.error(e, error_code="registry_export_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
