"""
Campus Flow task list command.

SUMMARY: List tasks, optionally for one day or planner segment
"""

from __future__ import annotations

import argparse
import sys

from campusflow.cli import OutputFormatter, add_standard_flags, load_state, task_line
from campusflow.core.registry.aggregates import PLANNER_SEGMENTS

SUMMARY = "List tasks, optionally for one day or planner segment"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--date", help="Only tasks on this day (YYYY-MM-DD)")
    parser.add_argument(
        "--segment",
        choices=list(PLANNER_SEGMENTS),
        help="Only tasks in this planner segment",
    )
    parser.add_argument("--urgent", action="store_true", help="Only open urgent tasks")
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        state = load_state(args)
        if args.date:
            tasks = state.tasks_on(args.date)
        elif args.segment:
            tasks = state.planner_segments()[args.segment]
        else:
            tasks = list(state.tasks)
        if args.urgent:
            tasks = [t for t in tasks if t.urgent and t.is_open]

        if formatter.json_mode:
            formatter.json_output({"count": len(tasks), "tasks": [t.to_dict() for t in tasks]})
        elif not tasks:
            formatter.text("No tasks.")
        else:
            formatter.lines(task_line(t, state.category_label(t)) for t in tasks)
        return 0
    except Exception as e:
        formatter.error(e, error_code="task_list_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
