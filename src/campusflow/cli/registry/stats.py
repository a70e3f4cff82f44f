"""
Campus Flow registry stats command.

SUMMARY: Show today's load, urgent count, and work/life balance
"""

from __future__ import annotations

import argparse
import sys

from campusflow.cli import OutputFormatter, add_standard_flags, load_state
from campusflow.core.registry.aggregates import format_duration

SUMMARY = "Show today's load, urgent count, and work/life balance"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        state = load_state(args)
        load = state.today_load()
        bal = state.balance()
        segments = state.planner_segments()

        data = {
            "tasks": len(state.tasks),
            "today": {
                "date": load.date,
                "hours": load.hours,
                "capacity": load.capacity,
                "percent": load.percent,
                "overloaded": load.overloaded,
            },
            "urgent": state.urgent_count(),
            "balance": {
                "workHours": bal.work_hours,
                "lifeHours": bal.life_hours,
                "unassignedHours": bal.unassigned_hours,
                "workPercent": bal.work_percent,
                "lifePercent": bal.life_percent,
                "burnoutRisk": bal.burnout_risk,
            },
            "planner": {name: len(items) for name, items in segments.items()},
            "viewDate": state.view_date.to_dict(),
        }
        if formatter.json_mode:
            formatter.json_output(data)
            return 0

        formatter.text(f"Tasks: {data['tasks']}")
        formatter.text(
            f"Today ({load.date}): {format_duration(load.hours)} of {format_duration(load.capacity)}"
            f" ({load.percent:.0f}%){' OVERLOADED' if load.overloaded else ''}"
        )
        formatter.text(f"Urgent: {data['urgent']}")
        formatter.text(
            f"Balance: work {bal.work_percent:.0f}% / life {bal.life_percent:.0f}%"
            f"{' (burnout risk)' if bal.burnout_risk else ''}"
        )
        for name, count in data["planner"].items():
            formatter.text_kv(name, count)
        return 0
    except Exception as e:
        formatter.error(e, error_code="registry_stats_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
