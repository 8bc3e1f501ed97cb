"""
rql: filter in-memory records with SQL ``WHERE``-style expressions.

    from rql import FilterOptions, apply_filter

    result = apply_filter("ANY(Tags) = 'python' AND Age < 40", people)
"""

from __future__ import annotations

from .compiler import compile_filter
from .conditions import Condition, evaluate
from .exceptions import FilterDecodeError, FilterParseError, FilterSyntaxError, RQLError
from .filtering import apply_filter, build_condition, decode_filter_text, iter_matches
from .nodes import FilterExpr, Operator
from .pagination import FilterOptions, Result, paginate
from .parser import parse
from .patterns import matches
from .resolver import resolve, resolve_many, stringify

__version__ = "0.3.0"

__all__ = [
    "Condition",
    "FilterDecodeError",
    "FilterExpr",
    "FilterOptions",
    "FilterParseError",
    "FilterSyntaxError",
    "Operator",
    "RQLError",
    "Result",
    "__version__",
    "apply_filter",
    "build_condition",
    "compile_filter",
    "decode_filter_text",
    "evaluate",
    "iter_matches",
    "matches",
    "paginate",
    "parse",
    "resolve",
    "resolve_many",
    "stringify",
]
