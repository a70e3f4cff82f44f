"""
Campus Flow CLI package.

Provides the command-line interface with auto-discovery of commands
from subfolders (task/, registry/, settings/).

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Shared CLI utilities
"""
from ._output import OutputFormatter, format_json
from ._args import (
    add_json_flag,
    add_home_flag,
    add_task_id_arg,
    add_task_fields,
    add_standard_flags,
)
from ._utils import (
    get_home,
    load_state,
    task_fields_from_args,
    parse_number,
    task_line,
)

__all__ = [
    # Output formatting
    "OutputFormatter",
    "format_json",
    # Argument helpers
    "add_json_flag",
    "add_home_flag",
    "add_task_id_arg",
    "add_task_fields",
    "add_standard_flags",
    # Utilities
    "get_home",
    "load_state",
    "task_fields_from_args",
    "parse_number",
    "task_line",
]
