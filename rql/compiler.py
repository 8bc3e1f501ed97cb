"""Lowering of the syntax tree into an evaluable condition tree."""

from __future__ import annotations

from .conditions import (
    AlwaysTrue,
    AndCondition,
    ArrayContainsAnyCondition,
    ArrayContainsCondition,
    ArrayNotContainsAnyCondition,
    ArrayNotContainsCondition,
    ComparisonCondition,
    Condition,
    EqualCondition,
    LikeCondition,
    NotEqualCondition,
    OrCondition,
)
from .exceptions import FilterSyntaxError
from .nodes import AndExpr, Comparison, FilterExpr, Literal, LiteralList, Operator, OrExpr

# Left operands that stand for a constant rather than a field
_CONSTANT_FIELDS = frozenset(["true", "false"])


def compile_filter(expr: FilterExpr) -> Condition:
    """Compile a syntax tree into a condition tree.

    Args:
        expr: Root of the tree returned by :func:`rql.parser.parse`

    Returns:
        The equivalent condition tree

    Raises:
        FilterSyntaxError: If a hand-built tree uses ANY(...) in an
            unsupported shape
    """
    if isinstance(expr, AndExpr):
        return AndCondition(compile_filter(expr.left), compile_filter(expr.right))

    if isinstance(expr, OrExpr):
        return OrCondition(compile_filter(expr.left), compile_filter(expr.right))

    if isinstance(expr, Comparison):
        if expr.field_is_any:
            return _compile_any(expr)
        return _compile_comparison(expr)

    raise TypeError(f"Unknown filter node type: {type(expr).__name__}")


def _compile_comparison(expr: Comparison) -> Condition:
    if expr.rhs_is_any or isinstance(expr.rhs, LiteralList):
        raise FilterSyntaxError(
            f"ANY(...) value list requires ANY(field) on the left-hand side: {expr.to_string()}"
        )
    if expr.field.lower() in _CONSTANT_FIELDS:
        return AlwaysTrue()

    field = expr.field
    value = expr.rhs.text

    if expr.operator == Operator.NE:
        return NotEqualCondition(field, value)
    if expr.operator.is_ordering:
        return ComparisonCondition(field, value, expr.operator)
    if expr.operator == Operator.LIKE:
        return LikeCondition(field, value, case_insensitive=False)
    if expr.operator == Operator.ILIKE:
        return LikeCondition(field, value, case_insensitive=True)
    return EqualCondition(field, value)


def _compile_any(expr: Comparison) -> Condition:
    if expr.operator not in (Operator.EQ, Operator.NE):
        raise FilterSyntaxError(
            f"ANY({expr.field}) supports only '=' and '!=', got '{expr.operator.value}'"
        )
    negated = expr.operator == Operator.NE

    if isinstance(expr.rhs, LiteralList):
        values = expr.rhs.values
        if negated:
            return ArrayNotContainsAnyCondition(expr.field, values)
        return ArrayContainsAnyCondition(expr.field, values)

    if isinstance(expr.rhs, Literal):
        if negated:
            return ArrayNotContainsCondition(expr.field, expr.rhs.text)
        return ArrayContainsCondition(expr.field, expr.rhs.text)

    raise TypeError(f"Unknown literal type: {type(expr.rhs).__name__}")


__all__ = ["compile_filter"]
