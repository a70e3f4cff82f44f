"""
Campus Flow settings month command.

SUMMARY: Move the calendar view month forward or back
"""

from __future__ import annotations

import argparse
import sys

from campusflow.cli import OutputFormatter, add_standard_flags, load_state

SUMMARY = "Move the calendar view month forward or back"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("delta", type=int, help="Months to move (e.g. 1 or -1)")
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        state = load_state(args)
        view = state.change_month(args.delta)
        formatter.success({"viewDate": view.to_dict()}, f"Viewing {view.year}-{view.month + 1:02d}")
        return 0
    except Exception as e:
        formatter.error(e, error_code="settings_month_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
