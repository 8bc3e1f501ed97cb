from __future__ import annotations

import json
from typing import Any

from rql import FilterOptions, apply_filter

from ..click_compat import RichCommand, click
from ..context import CLIContext
from ..errors import CLIError
from ..options import filter_argument, output_options, paging_options
from ..runner import CommandOutput, run_command


def _load_records(file_path: str) -> list[Any]:
    try:
        with click.open_file(file_path, "r", encoding="utf-8") as fh:
            payload = json.load(fh)
    except OSError as exc:
        raise CLIError(f"Cannot read {file_path}: {exc}", exit_code=2, error_type="io_error") from exc
    except UnicodeDecodeError as exc:
        raise CLIError(
            f"Cannot decode {file_path} as UTF-8: {exc}", exit_code=2, error_type="input_error"
        ) from exc
    except json.JSONDecodeError as exc:
        raise CLIError(
            f"Invalid JSON in {file_path}: {exc}", exit_code=2, error_type="input_error"
        ) from exc

    if isinstance(payload, dict) and isinstance(payload.get("items"), list):
        payload = payload["items"]
    if not isinstance(payload, list):
        raise CLIError(
            "Expected a JSON array of records (or an object with an 'items' array).",
            exit_code=2,
            error_type="input_error",
        )
    return payload


@click.command(name="filter", cls=RichCommand)
@click.option(
    "--file",
    "-f",
    "file_path",
    type=click.Path(dir_okay=False, allow_dash=True),
    default="-",
    show_default=True,
    help="JSON file with an array of records ('-' for stdin).",
)
@click.option(
    "--column",
    "columns",
    multiple=True,
    help="Column to show in table output (repeatable).",
)
@filter_argument(required=False)
@paging_options
@output_options
@click.pass_obj
def filter_cmd(
    ctx: CLIContext,
    *,
    filter_text: str,
    file_path: str,
    limit: int,
    offset: int,
    columns: tuple[str, ...],
    url_encoded: bool,
) -> None:
    """Filter a JSON array of records with a SQL WHERE-style expression.

    \b
    Examples:
      rql filter "Age >= 40" -f employees.json
      rql filter "ANY(Tags) = ANY('python', 'go') AND Active = true" --limit 10
    """

    def fn(_: CLIContext, warnings: list[str]) -> CommandOutput:
        options = FilterOptions(limit=limit, offset=offset)
        records = _load_records(file_path)
        result = apply_filter(filter_text, records, options, url_encoded=url_encoded)

        if result.count and not result.items:
            warnings.append(f"--offset {offset} is past the last of {result.count} matches.")

        return CommandOutput(
            data={"items": result.items, "count": result.count},
            pagination={
                "limit": options.limit,
                "offset": options.offset,
                "count": result.count,
                "returned": len(result.items),
            },
            columns=list(columns) or None,
            warnings=warnings,
        )

    run_command(ctx, command="filter", fn=fn)
