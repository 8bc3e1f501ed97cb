"""Option bundles shared by the rql commands.

The output format can be picked on the group (``rql --json filter ...``) or
after the command name (``rql filter ... --json``); the command-level flags
write straight into the :class:`CLIContext` built by the group.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from .click_compat import click
from .context import CLIContext

F = TypeVar("F", bound=Callable[..., object])


def _override_output(
    ctx: click.Context, param: click.Parameter, value: str | bool | None
) -> str | bool | None:
    if not value:
        return value
    obj = ctx.obj
    if isinstance(obj, CLIContext):
        obj.output = "json" if param.name == "json" else value  # type: ignore[assignment]
    return value


def output_options(fn: F) -> F:
    """Per-command ``--output`` and ``--json``."""
    fn = click.option(
        "--output",
        type=click.Choice(["table", "json"]),
        default=None,
        help="Output format for this command (overrides the group option).",
        callback=_override_output,
        expose_value=False,
    )(fn)
    fn = click.option(
        "--json",
        is_flag=True,
        help="Shorthand for --output json.",
        callback=_override_output,
        expose_value=False,
    )(fn)
    return fn


def filter_argument(*, required: bool = True) -> Callable[[F], F]:
    """The FILTER argument plus ``--url-encoded``.

    Passes ``filter_text`` and ``url_encoded`` to the command. An optional
    FILTER defaults to the empty filter, which matches every record.
    """

    def decorator(fn: F) -> F:
        fn = click.option(
            "--url-encoded",
            is_flag=True,
            help="Percent-decode FILTER first, as copied from a URL query string.",
        )(fn)
        if required:
            return click.argument("filter_text", metavar="FILTER")(fn)
        return click.argument("filter_text", metavar="FILTER", required=False, default="")(fn)

    return decorator


def paging_options(fn: F) -> F:
    """``--limit`` / ``--offset``, with ``RQL_LIMIT`` / ``RQL_OFFSET`` fallbacks."""
    fn = click.option(
        "--offset",
        type=int,
        default=0,
        envvar="RQL_OFFSET",
        show_default=True,
        help="Matching records to skip before returning results.",
    )(fn)
    fn = click.option(
        "--limit",
        type=int,
        default=0,
        envvar="RQL_LIMIT",
        show_default=True,
        help="Maximum records to return (0 = no limit).",
    )(fn)
    return fn
