"""
Campus Flow task update command.

SUMMARY: Edit fields of an existing task
"""

from __future__ import annotations

import argparse
import sys

from campusflow.cli import (
    OutputFormatter,
    add_standard_flags,
    add_task_fields,
    add_task_id_arg,
    load_state,
    task_fields_from_args,
    task_line,
)

SUMMARY = "Edit fields of an existing task"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_task_id_arg(parser)
    add_task_fields(parser, required=False)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        state = load_state(args)
        result = state.update(str(args.task_id), task_fields_from_args(args))
        result.raise_for_error()

        task = result.task
        formatter.success(
            {"task": task.to_dict(), "persisted": result.persisted},
            f"Updated {task_line(task, state.category_label(task))}",
        )
        return 0
    except Exception as e:
        formatter.error(e, error_code="task_update_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
