from __future__ import annotations

from rql import compile_filter, decode_filter_text, parse

from ..click_compat import RichCommand, click
from ..context import CLIContext
from ..options import filter_argument, output_options
from ..runner import CommandOutput, run_command


@click.command(name="explain", cls=RichCommand)
@filter_argument()
@output_options
@click.pass_obj
def explain_cmd(ctx: CLIContext, *, filter_text: str, url_encoded: bool) -> None:
    """Show how FILTER is parsed and compiled, without evaluating it.

    \b
    Grammar:
      comparison  field OP value      (= != <> < <= > >= LIKE ILIKE)
      arrays      ANY(field) = 'x'    ANY(field) != ANY('x', 'y')
      boolean     a AND b, a OR b, ( ... )   -- OR binds looser than AND
      values      'quoted', 42, 3.5, true, bare_word
    """

    def fn(_: CLIContext, _warnings: list[str]) -> CommandOutput:
        text = decode_filter_text(filter_text) if url_encoded else filter_text
        if not text.strip():
            return CommandOutput(data={"filter": text, "parsed": "", "condition": "TRUE"})

        expr = parse(text)
        condition = compile_filter(expr)
        return CommandOutput(
            data={
                "filter": text,
                "parsed": expr.to_string(),
                "condition": condition.to_string(),
            }
        )

    run_command(ctx, command="explain", fn=fn)
