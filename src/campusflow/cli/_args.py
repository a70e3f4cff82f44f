"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_home_flag(parser: argparse.ArgumentParser) -> None:
    """Add --home to override the data/config directory ($CAMPUSFLOW_HOME)."""
    parser.add_argument(
        "--home",
        type=str,
        help="Override the campusflow home directory",
    )


def add_task_id_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("task_id", help="Task identifier (e.g., rec_1709290000000_a1b2c3)")


def add_task_fields(parser: argparse.ArgumentParser, *, required: bool) -> None:
    """Register the editable task fields.

    With ``required`` the fields a new task cannot do without are mandatory.
    """
    parser.add_argument("--title", required=required, help="Activity title")
    parser.add_argument("--date", required=required, help="Date (YYYY-MM-DD)")
    parser.add_argument("--duration", required=required, help="Duration in hours (0.25 steps)")
    parser.add_argument("--category", required=required, help="Category id")
    parser.add_argument("--time", help="Start time (HH:MM)")
    parser.add_argument(
        "--status",
        choices=["planned", "completed", "canceled"],
        help="Task status",
    )
    parser.add_argument("--cancel-reason", dest="cancel_reason", help="Reason, required when canceled")
    parser.add_argument("--notes", help="Free-text notes")
    urgent = parser.add_mutually_exclusive_group()
    urgent.add_argument("--urgent", dest="urgent", action="store_true", default=None, help="Mark as urgent")
    urgent.add_argument("--not-urgent", dest="urgent", action="store_false", help="Clear the urgent flag")


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Adds --json and --home."""
    add_json_flag(parser)
    add_home_flag(parser)


__all__ = [
    "add_json_flag",
    "add_home_flag",
    "add_task_id_arg",
    "add_task_fields",
    "add_standard_flags",
]
