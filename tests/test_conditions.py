"""Tests for condition evaluation."""

from __future__ import annotations

from typing import Any

import pytest

from rql import evaluate
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
from rql.nodes import Operator

RECORD: dict[str, Any] = {
    "Name": "Alice",
    "Age": 25,
    "AgeText": "25",
    "Score": 9.5,
    "Code": "b",
    "Email": "alice@Example.com",
    "Tags": ["frontend", "javascript"],
    "Empty": [],
}

TRUE = AlwaysTrue()
FALSE = EqualCondition("Name", "nobody")


class TestBoolean:
    def test_always_true(self) -> None:
        assert TRUE.evaluate(RECORD) is True
        assert TRUE.evaluate(None) is True

    @pytest.mark.parametrize(
        ("left", "right", "expected"),
        [(TRUE, TRUE, True), (TRUE, FALSE, False), (FALSE, TRUE, False), (FALSE, FALSE, False)],
    )
    def test_and(self, left: Any, right: Any, expected: bool) -> None:
        assert AndCondition(left, right).evaluate(RECORD) is expected

    @pytest.mark.parametrize(
        ("left", "right", "expected"),
        [(TRUE, TRUE, True), (TRUE, FALSE, True), (FALSE, TRUE, True), (FALSE, FALSE, False)],
    )
    def test_or(self, left: Any, right: Any, expected: bool) -> None:
        assert OrCondition(left, right).evaluate(RECORD) is expected

    def test_none_condition_matches_everything(self) -> None:
        assert evaluate(None, RECORD) is True
        assert evaluate(None, 42) is True


class TestScalarConditions:
    def test_equal(self) -> None:
        assert EqualCondition("Name", "Alice").evaluate(RECORD) is True
        assert EqualCondition("Name", "alice").evaluate(RECORD) is False
        assert EqualCondition("Age", "25").evaluate(RECORD) is True

    def test_equal_is_textual(self) -> None:
        assert EqualCondition("Age", "25.0").evaluate(RECORD) is False

    def test_not_equal(self) -> None:
        assert NotEqualCondition("Name", "Bob").evaluate(RECORD) is True
        assert NotEqualCondition("Name", "Alice").evaluate(RECORD) is False

    @pytest.mark.parametrize(
        ("field", "op", "value", "expected"),
        [
            ("Age", Operator.GE, "25", True),
            ("Age", Operator.GT, "25", False),
            ("Age", Operator.LT, "100", True),
            ("Age", Operator.LE, "24.9", False),
            ("AgeText", Operator.GE, "9", True),
            ("Score", Operator.LT, "10", True),
            ("Age", Operator.GT, "-1e3", True),
            # string fallback when either side is not numeric
            ("Code", Operator.GT, "a", True),
            ("Code", Operator.LT, "ab", False),
            ("Name", Operator.LT, "Bob", True),
            ("Age", Operator.LT, "abc", True),
        ],
    )
    def test_comparison(self, field: str, op: Operator, value: str, expected: bool) -> None:
        assert ComparisonCondition(field, value, op).evaluate(RECORD) is expected

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            # not decimal numbers, so compared as text: "1_000" < "999"
            ("1_000", False),
            ("\u0664\u0665", True),
            (" 1000", False),
            ("1e", False),
            # decimal forms compare numerically
            ("1000", True),
            ("+1e3", True),
            ("1000.", True),
            ("inf", True),
        ],
    )
    def test_only_decimal_text_is_numeric(self, text: str, expected: bool) -> None:
        cond = ComparisonCondition("Code", "999", Operator.GT)
        assert cond.evaluate({"Code": text}) is expected

    def test_comparison_rejects_non_ordering_operator(self) -> None:
        with pytest.raises(ValueError):
            ComparisonCondition("Age", "1", Operator.EQ)

    def test_like(self) -> None:
        assert LikeCondition("Email", "%example.com").evaluate(RECORD) is False
        assert LikeCondition("Email", "%Example.com").evaluate(RECORD) is True
        assert LikeCondition("Email", "%example.com", case_insensitive=True).evaluate(RECORD)

    def test_like_on_numeric_field(self) -> None:
        assert LikeCondition("Score", "9.%").evaluate(RECORD) is True


class TestArrayConditions:
    def test_contains(self) -> None:
        assert ArrayContainsCondition("Tags", "javascript").evaluate(RECORD) is True
        assert ArrayContainsCondition("Tags", "python").evaluate(RECORD) is False

    def test_not_contains(self) -> None:
        assert ArrayNotContainsCondition("Tags", "python").evaluate(RECORD) is True
        assert ArrayNotContainsCondition("Tags", "javascript").evaluate(RECORD) is False

    def test_contains_any(self) -> None:
        cond = ArrayContainsAnyCondition("Tags", ("python", "frontend"))
        assert cond.evaluate(RECORD) is True
        assert ArrayContainsAnyCondition("Tags", ("go", "rust")).evaluate(RECORD) is False

    def test_not_contains_any(self) -> None:
        assert ArrayNotContainsAnyCondition("Tags", ("go", "rust")).evaluate(RECORD) is True
        cond = ArrayNotContainsAnyCondition("Tags", ("go", "javascript"))
        assert cond.evaluate(RECORD) is False

    def test_empty_array(self) -> None:
        assert ArrayContainsCondition("Empty", "x").evaluate(RECORD) is False
        assert ArrayNotContainsCondition("Empty", "x").evaluate(RECORD) is True
        assert ArrayContainsAnyCondition("Empty", ("x",)).evaluate(RECORD) is False
        assert ArrayNotContainsAnyCondition("Empty", ("x",)).evaluate(RECORD) is True

    def test_scalar_field_is_not_an_array(self) -> None:
        assert ArrayContainsCondition("Name", "Alice").evaluate(RECORD) is False
        assert ArrayNotContainsCondition("Name", "x").evaluate(RECORD) is False


class TestMissingField:
    """An unresolvable field never satisfies a leaf, positive or negative."""

    @pytest.mark.parametrize(
        "condition",
        [
            EqualCondition("Missing", "x"),
            NotEqualCondition("Missing", "x"),
            ComparisonCondition("Missing", "1", Operator.GT),
            ComparisonCondition("Missing", "1", Operator.LT),
            LikeCondition("Missing", "%"),
            LikeCondition("Missing", "%", case_insensitive=True),
            ArrayContainsCondition("Missing", "x"),
            ArrayNotContainsCondition("Missing", "x"),
            ArrayContainsAnyCondition("Missing", ("x",)),
            ArrayNotContainsAnyCondition("Missing", ("x",)),
        ],
    )
    def test_false(self, condition: Any) -> None:
        assert condition.evaluate(RECORD) is False
        assert condition.evaluate(42) is False


class TestRendering:
    def test_to_string(self) -> None:
        cond = OrCondition(
            AndCondition(
                ArrayContainsAnyCondition("Tags", ("a", "b")),
                ComparisonCondition("Age", "40", Operator.GE),
            ),
            LikeCondition("Name", "O''%", case_insensitive=True),
        )
        assert str(cond) == (
            "((ANY(Tags) = ANY('a', 'b') AND Age >= '40') OR Name ILIKE 'O''''%')"
        )
        assert ArrayNotContainsCondition("Tags", "x").to_string() == "ANY(Tags) != 'x'"

    def test_structural_equality(self) -> None:
        assert AndCondition(EqualCondition("a", "1"), TRUE) == AndCondition(
            EqualCondition("a", "1"), AlwaysTrue()
        )
        assert hash(EqualCondition("a", "1")) == hash(EqualCondition("a", "1"))
