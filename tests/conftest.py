"""Shared fixtures: a small employee directory in several record shapes."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

import pytest


@dataclass
class Department:
    Name: str
    Floor: int


@dataclass
class Employee:
    ID: int
    Name: str
    Age: int
    Email: str
    Department: Department | None
    Tags: list[str] = field(default_factory=list)
    Active: bool = True
    Salary: float = 0.0


ENGINEERING = Department("Engineering", 3)


def make_employees() -> list[Employee]:
    return [
        Employee(
            1, "Alice", 25, "alice@example.com", ENGINEERING,
            ["frontend", "javascript", "react"], True, 85000.0,
        ),
        Employee(
            2, "Bob", 30, "bob@example.com", ENGINEERING,
            ["backend", "python", "go"], True, 92000.5,
        ),
        Employee(
            3, "Carol", 35, "carol@EXAMPLE.COM", Department("Marketing", 2),
            ["content", "seo"], False, 70000.0,
        ),
        Employee(
            4, "Dave", 40, "dave@test.org", Department("Sales", 1),
            ["crm"], True, 65000.0,
        ),
        Employee(
            5, "Eve", 45, "eve@example.com", Department("HR", 1),
            [], False, 60000.0,
        ),
    ]


@pytest.fixture
def employees() -> list[Employee]:
    return make_employees()


@pytest.fixture
def employee_dicts() -> list[dict[str, Any]]:
    return [asdict(e) for e in make_employees()]
