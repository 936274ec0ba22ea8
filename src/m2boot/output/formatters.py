"""Human/JSON rendering of ServiceResult.

JSON mode dumps the result model verbatim. Human mode prints an
``OK: <op>`` / ``ERROR: <op>`` header followed by the data: scalars as
key-value pairs, lists of records as tables.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from m2boot.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from m2boot.services.result import ServiceResult


def _render_value(console: Console, key: str, value: Any) -> None:
    if isinstance(value, list) and value and all(isinstance(v, dict) for v in value):
        table = Table(title=key, title_justify="left", show_edge=False)
        columns = list(value[0].keys())
        for column in columns:
            table.add_column(column, style="m2.id" if column == "id" else None)
        for row in value:
            table.add_row(*(Text("" if row.get(c) is None else str(row.get(c))) for c in columns))
        console.print(table)
        return
    if isinstance(value, (dict, list)):
        value = _json.dumps(value, separators=(",", ":"))
    line = Text("  ")
    line.append(f"{key}:", style="m2.key")
    line.append(f" {value}")
    console.print(line)


def format_result(
    result: ServiceResult,
    *,
    json_output: bool = False,
    quiet: bool = False,
) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        json_output: Return JSON instead of human-readable text.
        quiet: Human mode only: print just the status line.
    """
    if json_output:
        return result.model_dump_json(indent=2)

    console = create_console()
    if result.ok:
        header = Text("OK", style="m2.ok")
        header.append(": ")
        header.append(result.op, style="m2.op")
        console.print(header)
        if not quiet:
            for key, value in result.data.items():
                _render_value(console, key, value)
    else:
        error_msg = result.error.message if result.error else "Unknown error"
        header = Text("ERROR", style="m2.error")
        header.append(f": {result.op} - {error_msg}")
        console.print(header)
        if not quiet and result.error is not None:
            for problem in result.error.detail.get("problems", []):
                console.print(Text(f"  {problem}"))
    return get_output(console).rstrip("\n")
