"""
Evaluable condition tree.

Conditions are produced by :func:`rql.compiler.compile_filter` and evaluated
once per record. They are immutable, hold no references back into the tree,
and can be shared freely between threads.

Field values are compared as text (see :mod:`rql.resolver`). Ordering
comparisons first try both sides as numbers and fall back to string order,
so ``Age >= 40`` works whether ``Age`` holds ``45``, ``45.0`` or ``"45"``.
A field that cannot be resolved never satisfies any leaf condition, including
the negative ones (``!=`` and ``ANY(...) !=``).
"""

from __future__ import annotations

import operator as _op
import re
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .nodes import Operator
from .patterns import matches
from .resolver import resolve, resolve_many

_ORDERINGS: dict[Operator, Callable[[Any, Any], bool]] = {
    Operator.LT: _op.lt,
    Operator.LE: _op.le,
    Operator.GT: _op.gt,
    Operator.GE: _op.ge,
}


# ASCII decimal notation, optional exponent; no digit separators
_NUMBER = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


def _to_number(text: str) -> float | None:
    if not _NUMBER.fullmatch(text):
        return None
    try:
        return float(text)
    except ValueError:
        return None


def _quote(text: str) -> str:
    return "'" + text.replace("'", "''") + "'"


class Condition(ABC):
    """Base class for evaluable conditions."""

    @abstractmethod
    def evaluate(self, record: Any) -> bool:
        """Return True if ``record`` satisfies the condition."""
        ...

    @abstractmethod
    def to_string(self) -> str:
        """Human-readable form, used by ``rql explain`` and in logs."""
        ...

    def __str__(self) -> str:
        return self.to_string()


@dataclass(frozen=True)
class AndCondition(Condition):
    left: Condition
    right: Condition

    def evaluate(self, record: Any) -> bool:
        left_result = self.left.evaluate(record)
        right_result = self.right.evaluate(record)
        return left_result and right_result

    def to_string(self) -> str:
        return f"({self.left.to_string()} AND {self.right.to_string()})"


@dataclass(frozen=True)
class OrCondition(Condition):
    left: Condition
    right: Condition

    def evaluate(self, record: Any) -> bool:
        left_result = self.left.evaluate(record)
        right_result = self.right.evaluate(record)
        return left_result or right_result

    def to_string(self) -> str:
        return f"({self.left.to_string()} OR {self.right.to_string()})"


@dataclass(frozen=True)
class AlwaysTrue(Condition):
    def evaluate(self, record: Any) -> bool:
        return True

    def to_string(self) -> str:
        return "TRUE"


@dataclass(frozen=True)
class EqualCondition(Condition):
    field: str
    value: str

    def evaluate(self, record: Any) -> bool:
        field_value, found = resolve(record, self.field)
        if not found:
            return False
        return field_value == self.value

    def to_string(self) -> str:
        return f"{self.field} = {_quote(self.value)}"


@dataclass(frozen=True)
class NotEqualCondition(Condition):
    field: str
    value: str

    def evaluate(self, record: Any) -> bool:
        field_value, found = resolve(record, self.field)
        if not found:
            return False
        return field_value != self.value

    def to_string(self) -> str:
        return f"{self.field} != {_quote(self.value)}"


@dataclass(frozen=True)
class ComparisonCondition(Condition):
    """Ordering comparison (``<``, ``<=``, ``>``, ``>=``): numeric first, then text."""

    field: str
    value: str
    operator: Operator

    def __post_init__(self) -> None:
        if not self.operator.is_ordering:
            raise ValueError(f"Not an ordering operator: {self.operator.value}")

    def evaluate(self, record: Any) -> bool:
        field_value, found = resolve(record, self.field)
        if not found:
            return False

        compare = _ORDERINGS[self.operator]
        field_num = _to_number(field_value)
        value_num = _to_number(self.value)
        if field_num is None or value_num is None:
            return compare(field_value, self.value)
        return compare(field_num, value_num)

    def to_string(self) -> str:
        return f"{self.field} {self.operator.value} {_quote(self.value)}"


@dataclass(frozen=True)
class LikeCondition(Condition):
    field: str
    value: str
    case_insensitive: bool = False

    def evaluate(self, record: Any) -> bool:
        field_value, found = resolve(record, self.field)
        if not found:
            return False
        return matches(field_value, self.value, case_insensitive=self.case_insensitive)

    def to_string(self) -> str:
        keyword = "ILIKE" if self.case_insensitive else "LIKE"
        return f"{self.field} {keyword} {_quote(self.value)}"


@dataclass(frozen=True)
class ArrayContainsCondition(Condition):
    """Some element of the array field equals ``value``."""

    field: str
    value: str

    def evaluate(self, record: Any) -> bool:
        values, found = resolve_many(record, self.field)
        if not found:
            return False
        return self.value in values

    def to_string(self) -> str:
        return f"ANY({self.field}) = {_quote(self.value)}"


@dataclass(frozen=True)
class ArrayNotContainsCondition(Condition):
    """No element of the array field equals ``value``."""

    field: str
    value: str

    def evaluate(self, record: Any) -> bool:
        values, found = resolve_many(record, self.field)
        if not found:
            return False
        return self.value not in values

    def to_string(self) -> str:
        return f"ANY({self.field}) != {_quote(self.value)}"


@dataclass(frozen=True)
class ArrayContainsAnyCondition(Condition):
    """Some element of the array field equals one of ``values``."""

    field: str
    values: tuple[str, ...]

    def evaluate(self, record: Any) -> bool:
        field_values, found = resolve_many(record, self.field)
        if not found:
            return False
        return any(v in self.values for v in field_values)

    def to_string(self) -> str:
        listed = ", ".join(_quote(v) for v in self.values)
        return f"ANY({self.field}) = ANY({listed})"


@dataclass(frozen=True)
class ArrayNotContainsAnyCondition(Condition):
    """No element of the array field equals any of ``values``."""

    field: str
    values: tuple[str, ...]

    def evaluate(self, record: Any) -> bool:
        field_values, found = resolve_many(record, self.field)
        if not found:
            return False
        return not any(v in self.values for v in field_values)

    def to_string(self) -> str:
        listed = ", ".join(_quote(v) for v in self.values)
        return f"ANY({self.field}) != ANY({listed})"


def evaluate(condition: Condition | None, record: Any) -> bool:
    """Evaluate ``condition`` against one record; ``None`` matches everything."""
    if condition is None:
        return True
    return condition.evaluate(record)


__all__ = [
    "AlwaysTrue",
    "AndCondition",
    "ArrayContainsAnyCondition",
    "ArrayContainsCondition",
    "ArrayNotContainsAnyCondition",
    "ArrayNotContainsCondition",
    "ComparisonCondition",
    "Condition",
    "EqualCondition",
    "LikeCondition",
    "NotEqualCondition",
    "OrCondition",
    "evaluate",
]
