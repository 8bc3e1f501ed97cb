from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Literal

from pydantic import ValidationError

from rql.exceptions import FilterDecodeError, FilterSyntaxError, RQLError

from .errors import CLIError
from .results import CommandMeta, CommandResult, ErrorInfo

OutputFormat = Literal["table", "json"]


@dataclass
class CLIContext:
    output: OutputFormat
    quiet: bool
    verbosity: int


def normalize_exception(exc: Exception) -> Exception:
    """Translate library errors into CLIErrors with a type and exit code."""
    if isinstance(exc, CLIError):
        return exc
    if isinstance(exc, FilterSyntaxError):
        details = {"position": exc.position} if exc.position is not None else None
        return CLIError(
            exc.message,
            exit_code=2,
            error_type="syntax_error",
            hint="run `rql explain --help` for the filter grammar",
            details=details,
        )
    if isinstance(exc, FilterDecodeError):
        return CLIError(exc.message, exit_code=2, error_type="decode_error")
    if isinstance(exc, ValidationError):
        messages = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        return CLIError(messages, exit_code=2, error_type="validation_error")
    if isinstance(exc, RQLError):
        return CLIError(str(exc), exit_code=1, error_type=exc.__class__.__name__)
    return exc


def exit_code_for_exception(exc: Exception) -> int:
    if isinstance(exc, CLIError):
        return exc.exit_code
    return 1


def error_info_for_exception(exc: Exception) -> ErrorInfo:
    if isinstance(exc, CLIError):
        return ErrorInfo(
            type=exc.error_type, message=exc.message, hint=exc.hint, details=exc.details
        )
    return ErrorInfo(type=exc.__class__.__name__, message=str(exc), details=None)


def build_result(
    *,
    ok: bool,
    command: str,
    started_at: float,
    data: Any | None,
    warnings: list[str],
    pagination: dict[str, Any] | None = None,
    columns: list[str] | None = None,
    error: ErrorInfo | None = None,
) -> CommandResult:
    duration_ms = int(max(0.0, (time.time() - started_at) * 1000))
    meta = CommandMeta(
        duration_ms=duration_ms,
        pagination=pagination,
        columns=columns,
    )
    return CommandResult(
        ok=ok,
        command=command,
        data=data,
        warnings=warnings,
        meta=meta,
        error=error,
    )
