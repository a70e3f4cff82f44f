"""
Campus Flow settings capacity command.

SUMMARY: Set the daily capacity in hours
"""

from __future__ import annotations

import argparse
import sys

from campusflow.cli import OutputFormatter, add_standard_flags, load_state, parse_number

SUMMARY = "Set the daily capacity in hours"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("value", help="Hours per day (positive number)")
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        state = load_state(args)
        result = state.set_capacity(parse_number(args.value))
        result.raise_for_error()
        capacity = state.settings.capacity
        formatter.success({"capacity": capacity}, f"Daily capacity set to {capacity:g}h")
        return 0
    except Exception as e:
        formatter.error(e, error_code="settings_capacity_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
