from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .results import CommandResult

_MAX_CELL = 80


@dataclass(frozen=True, slots=True)
class RenderSettings:
    output: str  # "table" | "json"
    quiet: bool
    verbosity: int


def _error_title(error_type: str) -> str:
    mapping = {
        "syntax_error": "Filter syntax error",
        "decode_error": "Filter decode error",
        "usage_error": "Usage error",
        "validation_error": "Validation error",
        "io_error": "I/O error",
        "input_error": "Input error",
    }
    return mapping.get((error_type or "").strip(), "Error")


def _format_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        text = json.dumps(value, ensure_ascii=False)
    else:
        text = str(value)
    text = " ".join(text.split())
    if len(text) <= _MAX_CELL:
        return text
    return text[: _MAX_CELL - 1].rstrip() + "…"


def _table_from_rows(rows: list[dict[str, Any]], columns: list[str] | None = None) -> Table:
    table = Table(show_header=True, header_style="bold")
    if not rows:
        table.add_column("result")
        table.add_row("No results")
        return table
    if not columns:
        columns = list(dict.fromkeys(key for row in rows for key in row))
    for col in columns:
        table.add_column(col)
    for row in rows:
        table.add_row(*[_format_cell(row.get(col)) for col in columns])
    return table


def _table_from_mapping(data: dict[str, Any]) -> Table:
    table = Table(show_header=False, box=None)
    table.add_column("key", style="bold")
    table.add_column("value")
    for key, value in data.items():
        table.add_row(str(key), _format_cell(value))
    return table


def _render_error(result: CommandResult, *, stderr: Console, settings: RenderSettings) -> None:
    error = result.error
    if error is None:
        return
    stderr.print(f"{_error_title(error.type)}: {error.message}")
    if settings.quiet:
        return
    if error.hint:
        stderr.print(f"Hint: {error.hint}")
    if error.details and settings.verbosity >= 1:
        stderr.print(Panel.fit(Text(json.dumps(error.details, ensure_ascii=False, indent=2))))


def render_result(result: CommandResult, *, settings: RenderSettings) -> None:
    stdout = Console(file=sys.stdout, force_terminal=False)
    stderr = Console(file=sys.stderr, force_terminal=False)

    if not result.ok:
        _render_error(result, stderr=stderr, settings=settings)
        return

    data = result.data
    if isinstance(data, dict) and isinstance(data.get("items"), list):
        rows = [row if isinstance(row, dict) else {"value": row} for row in data["items"]]
        stdout.print(_table_from_rows(rows, result.meta.columns))
        pagination = result.meta.pagination or {}
        if not settings.quiet and "count" in pagination:
            stderr.print(f"Showing {len(rows)} of {pagination['count']} matches")
        return
    if isinstance(data, dict):
        stdout.print(_table_from_mapping(data))
        return
    if data is not None:
        stdout.print(Text(str(data)))
