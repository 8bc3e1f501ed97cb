"""SQL ``LIKE`` / ``ILIKE`` pattern matching.

``%`` matches any run of characters (including none) and ``_`` matches exactly
one character. Every other pattern character is literal.
"""

from __future__ import annotations

import re

_WILDCARDS = frozenset("%_")


def _is_literal(text: str) -> bool:
    return not any(ch in _WILDCARDS for ch in text)


def _to_regex(pattern: str) -> str:
    """Translate a LIKE pattern to a regular expression for ``re.fullmatch``."""
    parts: list[str] = []
    for ch in pattern:
        if ch == "%":
            parts.append(".*")
        elif ch == "_":
            parts.append(".")
        else:
            parts.append(re.escape(ch))
    return "".join(parts)


def matches(text: str, pattern: str, case_insensitive: bool = False) -> bool:
    """Match ``text`` against a LIKE pattern.

    Examples:
        >>> matches("alice@example.com", "%example.com")
        True
        >>> matches("Bob", "b_b")
        False
        >>> matches("Bob", "b_b", case_insensitive=True)
        True
    """
    if case_insensitive:
        text = text.lower()
        pattern = pattern.lower()

    if _is_literal(pattern):
        return text == pattern

    if not pattern.strip("%"):
        return True

    # Fast paths for %lit%, lit% and %lit
    if len(pattern) > 1 and pattern[0] == "%" and pattern[-1] == "%":
        if _is_literal(pattern[1:-1]):
            return pattern[1:-1] in text
    if pattern[-1] == "%" and _is_literal(pattern[:-1]):
        return text.startswith(pattern[:-1])
    if pattern[0] == "%" and _is_literal(pattern[1:]):
        return text.endswith(pattern[1:])

    try:
        return re.fullmatch(_to_regex(pattern), text, re.DOTALL) is not None
    except re.error:
        return pattern.strip("%") in text


__all__ = ["matches"]
