"""
Campus Flow task show command.

SUMMARY: Show one task
"""

from __future__ import annotations

import argparse
import sys

from campusflow.cli import OutputFormatter, add_standard_flags, add_task_id_arg, load_state
from campusflow.core.exceptions import NotFoundError
from campusflow.core.registry.aggregates import format_duration

SUMMARY = "Show one task"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_task_id_arg(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        state = load_state(args)
        task = state.get(str(args.task_id))
        if task is None:
            raise NotFoundError(str(args.task_id))

        if formatter.json_mode:
            formatter.json_output({"task": task.to_dict(), "categoryLabel": state.category_label(task)})
            return 0

        formatter.text(task.title)
        formatter.text_kv("id", task.id)
        formatter.text_kv("when", f"{task.date} {task.time}")
        formatter.text_kv("duration", format_duration(task.duration))
        formatter.text_kv("category", state.category_label(task))
        formatter.text_kv("status", task.status)
        formatter.text_kv("urgent", "yes" if task.urgent else "no")
        if task.cancel_reason:
            formatter.text_kv("cancel reason", task.cancel_reason)
        if task.notes:
            formatter.text_kv("notes", task.notes)
        return 0
    except Exception as e:
        formatter.error(e, error_code="task_show_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
