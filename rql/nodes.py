"""
Syntax tree produced by :func:`rql.parser.parse`.

The tree mirrors the filter text: every leaf is a :class:`Comparison` and
every inner node is a binary :class:`AndExpr` or :class:`OrExpr`. Nodes are
immutable, compare structurally, and render back to canonical filter text.

Example:
    from rql.nodes import Comparison, Literal, Operator

    expr = Comparison("Age", Operator.GE, Literal("40")) & Comparison(
        "Department.Name", Operator.EQ, Literal("Engineering", quoted=True)
    )
    expr.to_string()
    # "(Age >= 40) AND (Department.Name = 'Engineering')"
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Union


class Operator(Enum):
    """Comparison operators understood by the grammar."""

    EQ = "="
    NE = "!="
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    LIKE = "LIKE"
    ILIKE = "ILIKE"

    @classmethod
    def from_token(cls, token: str) -> Operator | None:
        """Map an operator token (symbol or keyword) to an operator."""
        if token == "<>":
            return cls.NE
        try:
            return cls(token.upper())
        except ValueError:
            return None

    @property
    def is_ordering(self) -> bool:
        return self in (Operator.LT, Operator.LE, Operator.GT, Operator.GE)


def _quote(text: str) -> str:
    return "'" + text.replace("'", "''") + "'"


@dataclass(frozen=True, slots=True)
class Literal:
    """A single literal value; ``quoted`` records whether it was a string."""

    text: str
    quoted: bool = False

    def to_string(self) -> str:
        return _quote(self.text) if self.quoted else self.text


@dataclass(frozen=True, slots=True)
class LiteralList:
    """The value list of ``ANY('x', 'y', ...)``."""

    items: tuple[Literal, ...]

    @property
    def values(self) -> tuple[str, ...]:
        return tuple(item.text for item in self.items)

    def to_string(self) -> str:
        return "ANY(" + ", ".join(item.to_string() for item in self.items) + ")"


class FilterExpr(ABC):
    """Base class for syntax tree nodes."""

    @abstractmethod
    def to_string(self) -> str:
        """Render the node as filter text."""
        ...

    def __and__(self, other: FilterExpr) -> FilterExpr:
        return AndExpr(self, other)

    def __or__(self, other: FilterExpr) -> FilterExpr:
        return OrExpr(self, other)

    def __str__(self) -> str:
        return self.to_string()


@dataclass(frozen=True)
class Comparison(FilterExpr):
    """``field <operator> rhs``, where either side may be wrapped in ``ANY(...)``."""

    field: str
    operator: Operator
    rhs: Literal | LiteralList
    field_is_any: bool = False
    rhs_is_any: bool = False

    def to_string(self) -> str:
        field = f"ANY({self.field})" if self.field_is_any else self.field
        return f"{field} {self.operator.value} {self.rhs.to_string()}"


@dataclass(frozen=True)
class AndExpr(FilterExpr):
    left: FilterExpr
    right: FilterExpr

    def to_string(self) -> str:
        # Parentheses keep precedence explicit when re-parsed
        return f"({self.left.to_string()}) AND ({self.right.to_string()})"


@dataclass(frozen=True)
class OrExpr(FilterExpr):
    left: FilterExpr
    right: FilterExpr

    def to_string(self) -> str:
        return f"({self.left.to_string()}) OR ({self.right.to_string()})"


Node = Union[Comparison, AndExpr, OrExpr]

__all__ = [
    "AndExpr",
    "Comparison",
    "FilterExpr",
    "Literal",
    "LiteralList",
    "Node",
    "Operator",
    "OrExpr",
]
