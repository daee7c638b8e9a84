# seating_engine/core/metrics.py

"""
Arrangement quality metrics.
A violation is one adjacent pair of students sharing one SEPARATE constraint;
a pair that shares two constraints therefore counts twice.
"""

from typing import Dict, Iterable, List, Any
from dataclasses import dataclass, field
from itertools import combinations
from collections import defaultdict
import logging

from .constraint_types import ConstraintKind, ConstraintViolation, SeatingConstraint
from .problem_model import SeatGrid

logger = logging.getLogger(__name__)


@dataclass
class ArrangementScore:
    """Summary of how well a grid satisfies a set of constraints."""

    violation_count: int = 0
    violations: List[ConstraintViolation] = field(default_factory=list)
    violations_by_constraint: Dict[str, int] = field(default_factory=dict)
    placed_students: int = 0
    capacity: int = 0

    @property
    def is_conflict_free(self) -> bool:
        return self.violation_count == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "violation_count": self.violation_count,
            "is_conflict_free": self.is_conflict_free,
            "violations": [v.to_dict() for v in self.violations],
            "violations_by_constraint": dict(self.violations_by_constraint),
            "placed_students": self.placed_students,
            "capacity": self.capacity,
        }


def find_violations(
    grid: SeatGrid, constraints: Iterable[SeatingConstraint]
) -> List[ConstraintViolation]:
    """List every adjacent member pair of every SEPARATE constraint."""
    seat_by_id = {
        student.id: index
        for index, student in enumerate(grid.seats)
        if student is not None
    }
    violations: List[ConstraintViolation] = []
    for constraint in constraints:
        if constraint.kind != ConstraintKind.SEPARATE:
            continue
        seated = [m for m in dict.fromkeys(constraint.member_ids) if m in seat_by_id]
        for a, b in combinations(seated, 2):
            i, j = seat_by_id[a], seat_by_id[b]
            if grid.are_adjacent(i, j):
                violations.append(
                    ConstraintViolation(
                        constraint_id=constraint.id,
                        student_ids=(a, b),
                        seat_indices=(i, j),
                    )
                )
    return violations


def evaluate_arrangement(
    grid: SeatGrid, constraints: Iterable[SeatingConstraint]
) -> ArrangementScore:
    violations = find_violations(grid, constraints)
    by_constraint: Dict[str, int] = defaultdict(int)
    for v in violations:
        by_constraint[str(v.constraint_id)] += 1
    score = ArrangementScore(
        violation_count=len(violations),
        violations=violations,
        violations_by_constraint=dict(by_constraint),
        placed_students=grid.occupied_count,
        capacity=grid.capacity,
    )
    if violations:
        logger.debug(f"Arrangement has {len(violations)} constraint violations")
    return score
