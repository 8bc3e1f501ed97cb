from __future__ import annotations

from typing import Any

from pydantic import Field

from rql.pagination import RQLModel


class ErrorInfo(RQLModel):
    type: str
    message: str
    hint: str | None = None
    details: dict[str, Any] | None = None


class CommandMeta(RQLModel):
    duration_ms: int = Field(..., alias="durationMs")
    pagination: dict[str, Any] | None = None
    columns: list[str] | None = None


class CommandResult(RQLModel):
    ok: bool
    command: str
    data: Any | None = None
    warnings: list[str] = Field(default_factory=list)
    meta: CommandMeta
    error: ErrorInfo | None = None
