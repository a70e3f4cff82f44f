"""
Campus Flow registry wipe command.

SUMMARY: Delete all registry data and reset settings
"""

from __future__ import annotations

import argparse
import sys

from campusflow.cli import OutputFormatter, add_standard_flags, get_home
from campusflow.core.exceptions import PersistenceError

SUMMARY = "Delete all registry data and reset settings"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--yes",
        action="store_true",
        help="Confirm the wipe (required)",
    )
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        if not args.yes:
            raise ValueError("Refusing to wipe without --yes")

        from campusflow.core.registry.state import RegistryState

        # No initialize(): wiping must not seed first.
        state = RegistryState.from_config(get_home(args))
        if not state.wipe():
            raise PersistenceError("Could not remove the stored registry")
        formatter.success({"wiped": True}, "Registry wiped")
        return 0
    except Exception as e:
        formatter.error(e, error_code="registry_wipe_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
