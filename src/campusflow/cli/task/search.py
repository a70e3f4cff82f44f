"""
Campus Flow task search command.

SUMMARY: Filter tasks by a regular expression
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from campusflow.cli import OutputFormatter, add_standard_flags, load_state, task_line
from campusflow.core.registry.search import Matcher

SUMMARY = "Filter tasks by a regular expression"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("pattern", help="Regular expression matched against title, category, notes, cancel reason")
    parser.add_argument(
        "--case-sensitive",
        dest="case_sensitive",
        action="store_true",
        help="Match case exactly (default: case-insensitive)",
    )
    add_standard_flags(parser)


def mark_matches(text: str, matcher: Optional[Matcher], marker: str = "*") -> str:
    """Wrap every match of ``matcher`` in ``text`` with ``marker``."""
    if matcher is None:
        return text
    parts: List[str] = []
    pos = 0
    for start, end in matcher.highlight_spans(text):
        parts.append(text[pos:start])
        parts.append(f"{marker}{text[start:end]}{marker}")
        pos = end
    parts.append(text[pos:])
    return "".join(parts)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        state = load_state(args)
        case_insensitive = False if args.case_sensitive else None
        compiled = state.compile_search(args.pattern, case_insensitive)
        # Invalid patterns show the whole registry, as blank ones do.
        if compiled.error is not None and not formatter.json_mode:
            print(f"Warning: {compiled.error.message}; showing all tasks", file=sys.stderr)
        tasks = state.search(args.pattern, case_insensitive)

        if formatter.json_mode:
            formatter.json_output(
                {
                    "pattern": args.pattern,
                    "valid": compiled.error is None,
                    "count": len(tasks),
                    "tasks": [t.to_dict() for t in tasks],
                }
            )
        elif not tasks:
            formatter.text("No matching tasks.")
        else:
            formatter.lines(
                task_line(t, state.category_label(t), title=mark_matches(t.title, compiled.matcher)) for t in tasks
            )
        return 0
    except Exception as e:
        formatter.error(e, error_code="task_search_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
