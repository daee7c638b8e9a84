# seating_engine/tests/conftest.py

"""
Pytest configuration and fixtures for seating engine tests.
"""

import logging
import random
from typing import Callable, List
from uuid import uuid4

import pytest

from seating_engine.core.problem_model import (
    RosterEntry,
    Student,
    StudentGroup,
    StudentRegistry,
)

# Configure logging for tests
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


def make_student(class_no: int, name: str = "", group=StudentGroup.GROUP_A) -> Student:
    return Student(
        id=uuid4(),
        name_local=name or f"學生{class_no}",
        name_foreign=name or f"Student{class_no}",
        class_no=class_no,
        group=group,
    )


@pytest.fixture
def student_factory() -> Callable[[int], List[Student]]:
    """Build ``n`` students numbered from 1."""

    def _factory(n: int) -> List[Student]:
        return [make_student(i + 1) for i in range(n)]

    return _factory


@pytest.fixture
def named_students() -> List[Student]:
    """Students A..E with class numbers 1..5"""
    return [make_student(i + 1, name) for i, name in enumerate("ABCDE")]


@pytest.fixture
def roster_entries() -> List[RosterEntry]:
    return [
        RosterEntry("1", "陳大文", "Peter"),
        RosterEntry("2", "李小龍", "Bruce"),
        RosterEntry("3", "張學友", "Jacky"),
    ]


@pytest.fixture
def registry(roster_entries) -> StudentRegistry:
    return StudentRegistry.from_groups(
        roster_entries, [RosterEntry("11", "古天樂", "Louis")]
    )


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
