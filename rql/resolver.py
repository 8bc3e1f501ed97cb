"""
Field path resolution over arbitrary records.

A record is anything with named members: a mapping with string keys, a
pydantic model, a dataclass or a plain object. Paths use dots for nesting
(``Department.Name``). Each segment is matched case-sensitively first and
then case-insensitively, so ``department.name`` also resolves.

Values are returned as canonical text (see :func:`stringify`); comparisons
recover numeric meaning later, at evaluation time.

A property that raises while being read resolves as absent, like a missing
member.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence, Set
from dataclasses import fields, is_dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel

logger = logging.getLogger(__name__)

_MISSING: Any = object()

# Values that are never traversed into, even when they carry attributes
_SCALAR_TYPES = (
    str,
    bytes,
    bytearray,
    bool,
    int,
    float,
    complex,
    Decimal,
    Enum,
    date,
    time,
    timedelta,
    UUID,
)


def stringify(value: Any) -> str:
    """Format a value the way comparisons see it.

    Examples:
        >>> stringify(True)
        'true'
        >>> stringify(25.0)
        '25'
        >>> stringify(2.5)
        '2.5'
    """
    if isinstance(value, Enum):
        return stringify(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, str):
        return value
    return str(value)


def _is_namedtuple(value: Any) -> bool:
    return isinstance(value, tuple) and hasattr(value, "_fields")


def _is_composite(value: Any) -> bool:
    """Whether a value has named members that a path can descend into."""
    if isinstance(value, Mapping) or _is_namedtuple(value):
        return True
    if value is None or isinstance(value, _SCALAR_TYPES):
        return False
    if isinstance(value, (Sequence, Set)):
        return False
    return hasattr(value, "__dict__") or hasattr(type(value), "__slots__")


def _member_names(obj: Any) -> list[str]:
    """Public member names of a non-mapping record, declared fields first."""
    names: list[str] = []
    cls = type(obj)
    if isinstance(obj, BaseModel):
        names.extend(cls.model_fields)
    elif is_dataclass(obj):
        names.extend(f.name for f in fields(obj))
    if hasattr(obj, "__dict__"):
        names.extend(vars(obj))
    for klass in cls.__mro__:
        slots = klass.__dict__.get("__slots__", ())
        names.extend([slots] if isinstance(slots, str) else slots)
        names.extend(name for name, attr in klass.__dict__.items() if isinstance(attr, property))
    return [name for name in dict.fromkeys(names) if not name.startswith("_")]


def _aliases(obj: Any) -> dict[str, str]:
    if not isinstance(obj, BaseModel):
        return {}
    return {
        info.alias: name
        for name, info in type(obj).model_fields.items()
        if info.alias and info.alias != name
    }


def _read_member(obj: Any, name: str) -> Any:
    """Read an attribute; a failing property counts as an absent member."""
    try:
        return getattr(obj, name)
    except Exception as exc:
        logger.debug("Reading %s.%s failed: %r", type(obj).__name__, name, exc)
        return _MISSING


def _lookup(obj: Any, name: str) -> Any:
    """Look up one path segment; returns ``_MISSING`` when absent."""
    if _is_namedtuple(obj):
        obj = obj._asdict()
    if isinstance(obj, Mapping):
        if name in obj:
            return obj[name]
        lowered = name.lower()
        for key in obj:
            if isinstance(key, str) and key.lower() == lowered:
                return obj[key]
        return _MISSING

    names = _member_names(obj)
    aliases = _aliases(obj)
    if name in names:
        return _read_member(obj, name)
    if name in aliases:
        return _read_member(obj, aliases[name])

    lowered = name.lower()
    for candidate in names:
        if candidate.lower() == lowered:
            return _read_member(obj, candidate)
    for alias, candidate in aliases.items():
        if alias.lower() == lowered:
            return _read_member(obj, candidate)
    return _MISSING


def _resolve_value(record: Any, path: str) -> Any:
    """Walk ``path`` and return the raw leaf value, or ``_MISSING``."""
    if not path or not _is_composite(record):
        return _MISSING

    current = record
    parts = path.split(".")
    for i, part in enumerate(parts):
        if not _is_composite(current):
            return _MISSING
        current = _lookup(current, part)
        if current is _MISSING:
            return _MISSING
        # Absent optional values never resolve, at any depth
        if current is None:
            return _MISSING
        if i == len(parts) - 1:
            return current
    return _MISSING


def resolve(record: Any, path: str) -> tuple[str, bool]:
    """Resolve ``path`` on ``record`` to its canonical text.

    Returns:
        ``(value, found)``; ``value`` is ``""`` when ``found`` is False.
    """
    value = _resolve_value(record, path)
    if value is _MISSING:
        return "", False
    return stringify(value), True


def resolve_many(record: Any, path: str) -> tuple[list[str], bool]:
    """Resolve ``path`` to an array field and stringify every element.

    Lists and tuples keep their order; sets are returned sorted. A leaf that
    is not a sequence counts as not found.
    """
    value = _resolve_value(record, path)
    if value is _MISSING:
        return [], False
    if isinstance(value, (str, bytes, bytearray, Mapping)):
        return [], False
    if isinstance(value, Set):
        return sorted(stringify(item) for item in value), True
    if isinstance(value, Sequence):
        return [stringify(item) for item in value], True
    return [], False


__all__ = ["resolve", "resolve_many", "stringify"]
