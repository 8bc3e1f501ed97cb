"""
Parser for SQL ``WHERE``-style filter strings.

Turns text such as::

    (Age = '25' OR Age = '30') AND Department.Name = 'Engineering'
    ANY(Tags) = ANY('python', 'content') OR Email ILIKE '%@EXAMPLE.COM'

into a :mod:`rql.nodes` syntax tree. ``OR`` binds looser than ``AND`` and
parentheses override both. ``ANY(...)`` is an ordinary operand of the
grammar: ``ANY(field)`` on the left selects an array field, ``ANY('x', ...)``
on the right supplies a value list.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto

from .exceptions import FilterSyntaxError
from .nodes import (
    AndExpr,
    Comparison,
    FilterExpr,
    Literal,
    LiteralList,
    Operator,
    OrExpr,
)

_PATH_SEGMENT = re.compile(r"\w+")

# Words that look like SQL operators we deliberately do not support
_UNSUPPORTED_OPERATORS = frozenset(["IN", "BETWEEN", "IS", "NOT", "SIMILAR", "REGEXP"])

_SUPPORTED_OPERATORS_HINT = "Supported operators: =, !=, <>, <, <=, >, >=, LIKE, ILIKE"


class _TokenType(Enum):
    """Token types for the filter parser."""

    WORD = auto()  # Field path, bare literal or keyword
    STRING = auto()  # 'single quoted'
    OPERATOR = auto()  # =, !=, <>, <, <=, >, >=
    LPAREN = auto()  # (
    RPAREN = auto()  # )
    COMMA = auto()  # ,
    EOF = auto()  # End of input


@dataclass
class _Token:
    """A token from the filter string."""

    type: _TokenType
    value: str
    pos: int  # Position in original string for error messages

    def is_keyword(self, keyword: str) -> bool:
        return self.type == _TokenType.WORD and self.value.upper() == keyword


class _Tokenizer:
    """Tokenizer for filter strings."""

    # Longer operators first
    OPERATORS = ("<=", ">=", "<>", "!=", "=", "<", ">")

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.length = len(text)

    def _error(self, message: str, pos: int) -> FilterSyntaxError:
        return FilterSyntaxError(message, position=pos, text=self.text)

    def _skip_whitespace(self) -> None:
        while self.pos < self.length and self.text[self.pos].isspace():
            self.pos += 1

    def _read_quoted_string(self) -> str:
        """Read a single-quoted string; ``''`` stands for one quote."""
        start_pos = self.pos
        self.pos += 1  # Skip opening quote
        result: list[str] = []

        while self.pos < self.length:
            ch = self.text[self.pos]
            if ch == "'":
                if self.text[self.pos + 1 : self.pos + 2] == "'":
                    result.append("'")
                    self.pos += 2
                    continue
                self.pos += 1  # Skip closing quote
                return "".join(result)
            result.append(ch)
            self.pos += 1

        raise self._error(
            f"Unterminated string literal starting at position {start_pos}", start_pos
        )

    def _is_word_char(self, ch: str) -> bool:
        return ch.isalnum() or ch in "_."

    def _read_word(self) -> str:
        start = self.pos
        if self.text[self.pos] in "+-":
            self.pos += 1
        while self.pos < self.length and self._is_word_char(self.text[self.pos]):
            self.pos += 1
        # Exponent sign in numbers such as 1e-5
        while (
            self.pos + 1 < self.length
            and self.text[self.pos] in "+-"
            and self.text[self.pos - 1] in "eE"
            and self.text[start : self.pos - 1].lstrip("+-").replace(".", "").isdigit()
            and self.text[self.pos + 1].isdigit()
        ):
            self.pos += 1
            while self.pos < self.length and self.text[self.pos].isdigit():
                self.pos += 1
        return self.text[start : self.pos]

    def _peek_operator(self) -> str | None:
        for op in self.OPERATORS:
            if self.text.startswith(op, self.pos):
                return op
        return None

    def tokenize(self) -> list[_Token]:
        """Tokenize the entire filter string."""
        tokens: list[_Token] = []

        while True:
            self._skip_whitespace()

            if self.pos >= self.length:
                tokens.append(_Token(_TokenType.EOF, "", self.pos))
                break

            ch = self.text[self.pos]
            start_pos = self.pos

            if ch == "(":
                tokens.append(_Token(_TokenType.LPAREN, "(", start_pos))
                self.pos += 1
            elif ch == ")":
                tokens.append(_Token(_TokenType.RPAREN, ")", start_pos))
                self.pos += 1
            elif ch == ",":
                tokens.append(_Token(_TokenType.COMMA, ",", start_pos))
                self.pos += 1
            elif ch == "'":
                value = self._read_quoted_string()
                tokens.append(_Token(_TokenType.STRING, value, start_pos))
            elif ch == '"':
                raise self._error(
                    f"Unexpected '\"' at position {start_pos}. "
                    "Hint: String literals use single quotes: Name = 'Alice'",
                    start_pos,
                )
            elif (op := self._peek_operator()) is not None:
                tokens.append(_Token(_TokenType.OPERATOR, op, start_pos))
                self.pos += len(op)
            elif self._is_word_char(ch) or (
                ch in "+-"
                and self.pos + 1 < self.length
                and (self.text[self.pos + 1].isdigit() or self.text[self.pos + 1] == ".")
            ):
                tokens.append(_Token(_TokenType.WORD, self._read_word(), start_pos))
            else:
                raise self._error(f"Unexpected character {ch!r} at position {start_pos}", start_pos)

        return tokens


class _Parser:
    """Recursive descent parser for filter expressions."""

    def __init__(self, tokens: list[_Token], text: str):
        self.tokens = tokens
        self.text = text
        self.pos = 0

    def _error(self, message: str, token: _Token) -> FilterSyntaxError:
        return FilterSyntaxError(message, position=token.pos, text=self.text)

    def _current(self) -> _Token:
        return self.tokens[self.pos]

    def _peek(self, offset: int = 1) -> _Token:
        index = min(self.pos + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def _advance(self) -> _Token:
        """Advance to next token and return previous."""
        token = self.tokens[self.pos]
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return token

    def _expect(self, token_type: _TokenType, context: str) -> _Token:
        token = self._current()
        if token.type != token_type:
            got = "end of input" if token.type == _TokenType.EOF else f"'{token.value}'"
            raise self._error(f"Expected {context} at position {token.pos}, got {got}", token)
        return self._advance()

    def _at_any(self) -> bool:
        return self._current().is_keyword("ANY") and self._peek().type == _TokenType.LPAREN

    def parse(self) -> FilterExpr:
        """Parse the token stream into a syntax tree."""
        if self._current().type == _TokenType.EOF:
            raise self._error("Empty filter expression", self._current())

        expr = self._parse_or_expr()

        token = self._current()
        if token.type == _TokenType.EOF:
            return expr
        if token.type == _TokenType.RPAREN:
            raise self._error(f"Unbalanced parentheses: unexpected ')' at position {token.pos}", token)
        if token.type in (_TokenType.WORD, _TokenType.STRING):
            # Collect remaining words to suggest quoting
            words = [token.value]
            for following in self.tokens[self.pos + 1 :]:
                if following.type != _TokenType.WORD:
                    break
                words.append(following.value)
            raise self._error(
                f"Unexpected token '{token.value}' at position {token.pos}. "
                f"Hint: Values with spaces must be quoted: '... {' '.join(words)}'",
                token,
            )
        raise self._error(f"Unexpected token '{token.value}' at position {token.pos}", token)

    def _parse_or_expr(self) -> FilterExpr:
        """Parse OR expressions (lowest precedence)."""
        left = self._parse_and_expr()

        while self._current().is_keyword("OR"):
            self._advance()
            right = self._parse_and_expr()
            left = OrExpr(left, right)

        return left

    def _parse_and_expr(self) -> FilterExpr:
        """Parse AND expressions."""
        left = self._parse_term()

        while self._current().is_keyword("AND"):
            self._advance()
            right = self._parse_term()
            left = AndExpr(left, right)

        return left

    def _parse_term(self) -> FilterExpr:
        """Parse a parenthesized expression or a comparison."""
        token = self._current()

        if token.type == _TokenType.LPAREN:
            self._advance()
            expr = self._parse_or_expr()
            closing = self._current()
            if closing.type != _TokenType.RPAREN:
                raise self._error(
                    f"Unbalanced parentheses: expected ')' at position {closing.pos}", closing
                )
            self._advance()
            return expr

        return self._parse_comparison()

    def _parse_comparison(self) -> FilterExpr:
        field_token = self._current()
        field, field_is_any = self._parse_field_operand()
        op_token = self._current()
        operator = self._parse_operator(field)
        rhs, rhs_is_any = self._parse_value_operand()

        if rhs_is_any and not field_is_any:
            raise self._error(
                f"ANY(...) value list at position {op_token.pos} requires ANY(field) "
                f"on the left-hand side: ANY({field}) {operator.value} {rhs.to_string()}",
                op_token,
            )
        if field_is_any and operator not in (Operator.EQ, Operator.NE):
            raise self._error(
                f"ANY({field}) at position {field_token.pos} supports only '=' and '!=', "
                f"got '{op_token.value}'",
                op_token,
            )

        return Comparison(
            field=field,
            operator=operator,
            rhs=rhs,
            field_is_any=field_is_any,
            rhs_is_any=rhs_is_any,
        )

    def _parse_field_operand(self) -> tuple[str, bool]:
        token = self._current()

        if self._at_any():
            self._advance()  # ANY
            self._advance()  # (
            path_token = self._expect(_TokenType.WORD, "field name inside ANY(...)")
            self._check_path(path_token)
            self._expect(_TokenType.RPAREN, "')' to close ANY(...)")
            return path_token.value, True

        if token.type == _TokenType.WORD:
            if token.is_keyword("AND") or token.is_keyword("OR"):
                raise self._error(
                    f"Missing comparison before '{token.value}' at position {token.pos}", token
                )
            self._advance()
            self._check_path(token)
            return token.value, False

        if token.type == _TokenType.EOF:
            raise self._error("Unexpected end of expression", token)
        if token.type == _TokenType.OPERATOR:
            raise self._error(
                f"Missing field name before operator '{token.value}' at position {token.pos}",
                token,
            )
        if token.type == _TokenType.STRING:
            raise self._error(
                f"Expected field name at position {token.pos}, got string literal "
                f"'{token.value}'. Hint: Put the field on the left: Name = '{token.value}'",
                token,
            )
        raise self._error(f"Unexpected token '{token.value}' at position {token.pos}", token)

    def _check_path(self, token: _Token) -> None:
        segments = token.value.split(".")
        if not all(_PATH_SEGMENT.fullmatch(segment) for segment in segments):
            raise self._error(
                f"Invalid field path '{token.value}' at position {token.pos}", token
            )

    def _parse_operator(self, field: str) -> Operator:
        token = self._current()

        if token.type == _TokenType.OPERATOR or token.is_keyword("LIKE") or token.is_keyword(
            "ILIKE"
        ):
            operator = Operator.from_token(token.value)
            if operator is not None:
                self._advance()
                return operator

        if token.type == _TokenType.WORD and token.value.upper() in _UNSUPPORTED_OPERATORS:
            raise self._error(
                f"Unsupported operator '{token.value}' at position {token.pos}. "
                f"{_SUPPORTED_OPERATORS_HINT}",
                token,
            )
        if token.type == _TokenType.WORD:
            raise self._error(
                f"Expected operator after '{field}' at position {token.pos}. "
                f"Hint: Nested fields use dots, not spaces: {field}.{token.value}",
                token,
            )
        if token.type == _TokenType.EOF:
            raise self._error(f"Expected operator after '{field}', got end of input", token)
        raise self._error(f"Expected operator after '{field}' at position {token.pos}", token)

    def _parse_value_operand(self) -> tuple[Literal | LiteralList, bool]:
        if self._at_any():
            self._advance()  # ANY
            self._advance()  # (
            return LiteralList(self._parse_literal_list()), True

        token = self._current()
        if token.type == _TokenType.OPERATOR and token.value == "=":
            raise self._error(
                f"Unexpected '=' at position {token.pos}. "
                "Hint: Use single '=' for equality, not '=='",
                token,
            )
        if token.is_keyword("AND") or token.is_keyword("OR"):
            raise self._error(f"Expected value before '{token.value}' at position {token.pos}", token)
        return self._parse_literal("value after operator"), False

    def _parse_literal(self, context: str) -> Literal:
        token = self._current()
        if token.type == _TokenType.STRING:
            self._advance()
            return Literal(token.value, quoted=True)
        if token.type == _TokenType.WORD:
            self._advance()
            text = token.value
            if text.lower() in ("true", "false"):
                text = text.lower()
            return Literal(text)
        got = "end of input" if token.type == _TokenType.EOF else f"'{token.value}'"
        raise self._error(f"Expected {context} at position {token.pos}, got {got}", token)

    def _parse_literal_list(self) -> tuple[Literal, ...]:
        if self._current().type == _TokenType.RPAREN:
            raise self._error(
                f"ANY() requires at least one value at position {self._current().pos}",
                self._current(),
            )
        items = [self._parse_literal("value inside ANY(...)")]
        while self._current().type == _TokenType.COMMA:
            self._advance()
            items.append(self._parse_literal("value after ','"))
        self._expect(_TokenType.RPAREN, "')' to close ANY(...)")
        return tuple(items)


def parse(filter_string: str) -> FilterExpr:
    """
    Parse a filter string into a syntax tree.

    Args:
        filter_string: The filter expression to parse

    Returns:
        The root node of the syntax tree

    Raises:
        FilterSyntaxError: If the filter string is not a well-formed expression

    Examples:
        >>> parse("Name = 'Alice'").to_string()
        "Name = 'Alice'"

        >>> parse("ANY(Tags) = 'javascript'").field_is_any
        True
    """
    tokens = _Tokenizer(filter_string).tokenize()
    return _Parser(tokens, filter_string).parse()
