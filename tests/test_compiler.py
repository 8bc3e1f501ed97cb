"""Tests for lowering syntax trees into condition trees."""

from __future__ import annotations

import pytest

from rql import FilterSyntaxError, compile_filter, parse
from rql.conditions import (
    AlwaysTrue,
    AndCondition,
    ArrayContainsAnyCondition,
    ArrayContainsCondition,
    ArrayNotContainsAnyCondition,
    ArrayNotContainsCondition,
    ComparisonCondition,
    EqualCondition,
    LikeCondition,
    NotEqualCondition,
    OrCondition,
)
from rql.nodes import Comparison, FilterExpr, Literal, LiteralList, Operator


class TestPlainComparisons:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Name = 'Alice'", EqualCondition("Name", "Alice")),
            ("Name != 'Alice'", NotEqualCondition("Name", "Alice")),
            ("Name <> 'Alice'", NotEqualCondition("Name", "Alice")),
            ("Age < 40", ComparisonCondition("Age", "40", Operator.LT)),
            ("Age <= 40", ComparisonCondition("Age", "40", Operator.LE)),
            ("Age > 40", ComparisonCondition("Age", "40", Operator.GT)),
            ("Age >= 40", ComparisonCondition("Age", "40", Operator.GE)),
            ("Email LIKE '%x'", LikeCondition("Email", "%x")),
            ("Email ILIKE '%x'", LikeCondition("Email", "%x", case_insensitive=True)),
            ("Active = true", EqualCondition("Active", "true")),
        ],
    )
    def test_operator_mapping(self, text: str, expected: object) -> None:
        assert compile_filter(parse(text)) == expected

    def test_boolean_structure(self) -> None:
        cond = compile_filter(parse("(Age = '25' OR Age = '30') AND Department.Name = 'Eng'"))
        assert cond == AndCondition(
            OrCondition(EqualCondition("Age", "25"), EqualCondition("Age", "30")),
            EqualCondition("Department.Name", "Eng"),
        )

    @pytest.mark.parametrize("text", ["true = 1", "false = 'x'", "TRUE != 0", "False LIKE '%'"])
    def test_constant_left_operand_is_always_true(self, text: str) -> None:
        assert compile_filter(parse(text)) == AlwaysTrue()

    def test_compiling_twice_is_structurally_equal(self) -> None:
        text = "ANY(Tags) = ANY('a', 'b') OR (Age > 3 AND Name ILIKE 'a%')"
        assert compile_filter(parse(text)) == compile_filter(parse(text))


class TestAny:
    def test_contains(self) -> None:
        assert compile_filter(parse("ANY(Tags) = 'x'")) == ArrayContainsCondition("Tags", "x")

    def test_not_contains(self) -> None:
        assert compile_filter(parse("ANY(Tags) != 'x'")) == ArrayNotContainsCondition("Tags", "x")

    def test_contains_any(self) -> None:
        assert compile_filter(parse("ANY(Tags) = ANY('x', 'y')")) == ArrayContainsAnyCondition(
            "Tags", ("x", "y")
        )

    def test_not_contains_any(self) -> None:
        cond = compile_filter(parse("ANY(Tags) <> ANY('x', 42)"))
        assert cond == ArrayNotContainsAnyCondition("Tags", ("x", "42"))

    def test_any_combined_with_plain_comparisons(self) -> None:
        cond = compile_filter(parse("Age > 30 OR ANY(Tags) = 'x' AND Name = 'Bob'"))
        assert cond == OrCondition(
            ComparisonCondition("Age", "30", Operator.GT),
            AndCondition(ArrayContainsCondition("Tags", "x"), EqualCondition("Name", "Bob")),
        )


class TestHandBuiltTrees:
    """Trees built in code go through the same shape checks as parsed ones."""

    def test_value_list_without_any_field(self) -> None:
        expr = Comparison(
            "Tags", Operator.EQ, LiteralList((Literal("x"),)), rhs_is_any=True
        )
        with pytest.raises(FilterSyntaxError):
            compile_filter(expr)

    def test_any_field_with_ordering_operator(self) -> None:
        expr = Comparison("Tags", Operator.LIKE, Literal("x%"), field_is_any=True)
        with pytest.raises(FilterSyntaxError, match="supports only"):
            compile_filter(expr)

    def test_operator_composition(self) -> None:
        expr = Comparison("Age", Operator.GT, Literal("1")) | Comparison(
            "Tags", Operator.EQ, Literal("x"), field_is_any=True
        )
        assert compile_filter(expr) == OrCondition(
            ComparisonCondition("Age", "1", Operator.GT), ArrayContainsCondition("Tags", "x")
        )

    def test_unknown_node(self) -> None:
        class Custom(FilterExpr):
            def to_string(self) -> str:
                return "custom"

        with pytest.raises(TypeError):
            compile_filter(Custom())
