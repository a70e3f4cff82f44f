"""
Campus Flow task add command.

SUMMARY: Create a new task
"""

from __future__ import annotations

import argparse
import sys

from campusflow.cli import (
    OutputFormatter,
    add_standard_flags,
    add_task_fields,
    load_state,
    task_fields_from_args,
    task_line,
)

SUMMARY = "Create a new task"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_task_fields(parser, required=True)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        state = load_state(args)
        result = state.create(task_fields_from_args(args))
        result.raise_for_error()

        task = result.task
        formatter.success(
            {"task": task.to_dict(), "persisted": result.persisted},
            f"Created {task_line(task, state.category_label(task))}",
        )
        return 0
    except Exception as e:
        formatter.error(e, error_code="task_add_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
