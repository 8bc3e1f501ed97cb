"""
Apply a filter string to an in-memory collection.

Example:
    from rql import FilterOptions, apply_filter

    result = apply_filter(
        "Age >= 25 AND Department.Name = 'Engineering'",
        employees,
        FilterOptions(limit=10, offset=0),
    )
    result.count   # matches before paging
    result.items   # at most 10 matching employees, in input order
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from typing import Any, TypeVar
from urllib.parse import unquote

from .compiler import compile_filter
from .conditions import Condition, evaluate
from .exceptions import FilterDecodeError
from .pagination import FilterOptions, Result, paginate
from .parser import parse

logger = logging.getLogger(__name__)

T = TypeVar("T")


def decode_filter_text(raw: str) -> str:
    """Percent-decode a filter taken from a URL query parameter.

    Text without escapes is returned unchanged, so decoding is idempotent on
    plain filters.

    Raises:
        FilterDecodeError: If the escapes do not decode to valid UTF-8
    """
    if "%" not in raw:
        return raw
    try:
        return unquote(raw, encoding="utf-8", errors="strict")
    except UnicodeDecodeError as exc:
        raise FilterDecodeError(f"Invalid percent-encoding in filter: {exc}", text=raw) from exc


def build_condition(filter_text: str, *, url_encoded: bool = False) -> Condition | None:
    """Parse and compile ``filter_text``.

    Returns:
        The condition tree, or None when the filter is empty (matches all)

    Raises:
        FilterSyntaxError: If the text is not a valid filter
        FilterDecodeError: If ``url_encoded`` and decoding fails
    """
    text = decode_filter_text(filter_text) if url_encoded else filter_text
    if not text or not text.strip():
        return None

    condition = compile_filter(parse(text))
    logger.debug("Compiled filter %r into %s", text, condition.to_string())
    return condition


def iter_matches(condition: Condition | None, items: Iterable[T]) -> Iterator[T]:
    """Yield the items that satisfy ``condition``, in input order."""
    for item in items:
        if evaluate(condition, item):
            yield item


def apply_filter(
    filter_text: str,
    items: Sequence[T],
    options: FilterOptions | None = None,
    *,
    url_encoded: bool = False,
) -> Result[Any]:
    """Filter ``items`` with a SQL ``WHERE``-style expression, then paginate.

    Args:
        filter_text: Filter such as ``"Age >= 40 OR Name LIKE 'A%'"``. Empty
            text matches every item.
        items: Records to filter (mappings, dataclasses, pydantic models or
            plain objects)
        options: Pagination window; defaults to no limit and no offset
        url_encoded: Percent-decode ``filter_text`` before parsing

    Returns:
        Result with the paginated matches and the total number of matches

    Raises:
        FilterSyntaxError: If the filter is malformed
        FilterDecodeError: If ``url_encoded`` and decoding fails
    """
    opts = options or FilterOptions()
    condition = build_condition(filter_text, url_encoded=url_encoded)

    matched = list(iter_matches(condition, items))
    logger.debug("Filter matched %d of %d items", len(matched), len(items))

    return Result(items=paginate(matched, opts), count=len(matched))


__all__ = ["apply_filter", "build_condition", "decode_filter_text", "iter_matches"]
