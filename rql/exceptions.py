"""
Exceptions raised by rql.

All errors derive from :class:`RQLError`. Problems with the filter text itself
(grammar or percent-decoding) are :class:`FilterParseError` subclasses, which
are also ``ValueError``s so callers can treat them as bad input.
"""

from __future__ import annotations


class RQLError(Exception):
    """Base class for all rql errors."""


class FilterParseError(RQLError, ValueError):
    """The filter text could not be turned into a condition."""

    def __init__(self, message: str, *, text: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.text = text

    def __str__(self) -> str:
        return self.message


class FilterSyntaxError(FilterParseError):
    """The filter text does not reduce to the supported grammar."""

    def __init__(
        self,
        message: str,
        *,
        position: int | None = None,
        text: str | None = None,
    ) -> None:
        super().__init__(message, text=text)
        self.position = position

    def __repr__(self) -> str:
        return f"FilterSyntaxError({self.message!r}, position={self.position!r})"


class FilterDecodeError(FilterParseError):
    """Percent-decoding of the raw filter text failed."""
