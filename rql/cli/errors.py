from __future__ import annotations

from typing import Any

from rql.exceptions import RQLError


class CLIError(RQLError):
    """A failure the CLI reports as a ``CommandResult`` error.

    ``error_type`` becomes ``error.type`` in JSON output and picks the title
    in table output; ``exit_code`` is the process exit status (2 for bad
    filters and bad input, 1 otherwise).
    """

    def __init__(
        self,
        message: str,
        *,
        exit_code: int = 1,
        error_type: str = "error",
        hint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code
        self.error_type = error_type
        self.hint = hint
        self.details = details

    def __str__(self) -> str:
        return self.message
