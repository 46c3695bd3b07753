"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich text and tables) or
machines (--json). ``show`` results render as a settings table; every
other op falls through to key-value lines.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from pgbootstrap.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from pgbootstrap.services.result import ServiceResult


def format_result(result: ServiceResult, *, json_output: bool = False, quiet: bool = False) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        json_output: If True, return JSON; otherwise return human-readable text.
        quiet: Only the status line.
    """
    if json_output:
        return result.model_dump_json(indent=2)

    console = create_console()
    if not result.ok:
        _render_error(result, console)
    elif quiet:
        console.print(Text("OK", style="pg.ok"), Text(result.op, style="pg.op"))
    elif result.op == "show":
        _render_settings(result, console)
    else:
        _render_generic(result, console)
    return get_output(console).rstrip("\n")


def _format_value(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return _json.dumps(value, separators=(",", ":"))
    return str(value)


def _render_generic(result: ServiceResult, console: Console) -> None:
    console.print(Text("OK", style="pg.ok"), Text(result.op, style="pg.op"))
    for key, value in result.data.items():
        line = Text("  ")
        line.append(f"{key}: ", style="pg.key")
        line.append(_format_value(value))
        console.print(line)


def _render_settings(result: ServiceResult, console: Console) -> None:
    table = Table(show_header=True, header_style="bold", box=None)
    table.add_column("key")
    table.add_column("value")
    table.add_column("priority")
    table.add_column("source", style="pg.key")
    for item in result.data.get("items", []):
        priority = item["priority"]
        table.add_row(
            Text(item["key"]),
            Text(item["value"]),
            Text(priority, style=f"pg.priority.{priority}"),
            Text(item["source"]),
        )
    console.print(table)


def _render_error(result: ServiceResult, console: Console) -> None:
    error = result.error
    message = error.message if error else "Unknown error"
    line = Text("ERROR", style="pg.error")
    line.append(f" {result.op}: ", style="pg.op")
    line.append(message)
    console.print(line)
    if error is not None:
        details = error.detail.get("details")
        if details:
            console.print(Text(str(details)))
