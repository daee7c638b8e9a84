# seating_engine/core/__init__.py

"""
Core module for seating engine data structures and interfaces
"""

from .problem_model import (
    RosterEntry,
    SeatGrid,
    Student,
    StudentGroup,
    StudentRegistry,
)
from .constraint_types import ConstraintKind, ConstraintViolation, SeatingConstraint
from .constraint_registry import ConstraintSet
from .metrics import ArrangementScore, evaluate_arrangement, find_violations
from .exceptions import (
    SeatingEngineError,
    InvalidInputError,
    SeatIndexOutOfRangeError,
    InvalidConstraintError,
    ArrangementCancelledError,
)

__all__ = [
    # Problem model
    "RosterEntry",
    "SeatGrid",
    "Student",
    "StudentGroup",
    "StudentRegistry",
    # Constraint system
    "ConstraintKind",
    "ConstraintViolation",
    "SeatingConstraint",
    "ConstraintSet",
    # Metrics
    "ArrangementScore",
    "evaluate_arrangement",
    "find_violations",
    # Errors
    "SeatingEngineError",
    "InvalidInputError",
    "SeatIndexOutOfRangeError",
    "InvalidConstraintError",
    "ArrangementCancelledError",
]
