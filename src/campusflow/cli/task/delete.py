"""
Campus Flow task delete command.

SUMMARY: Delete a task (unknown ids are a no-op)
"""

from __future__ import annotations

import argparse
import sys

from campusflow.cli import OutputFormatter, add_standard_flags, add_task_id_arg, load_state

SUMMARY = "Delete a task (unknown ids are a no-op)"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_task_id_arg(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        state = load_state(args)
        task_id = str(args.task_id)
        removed = state.delete(task_id)
        message = f"Deleted {task_id}" if removed else f"No task {task_id}; nothing deleted"
        formatter.success({"id": task_id, "deleted": removed}, message)
        return 0
    except Exception as e:
        formatter.error(e, error_code="task_delete_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
