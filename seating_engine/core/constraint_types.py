# seating_engine/core/constraint_types.py

"""
Constraint types shared by the constraint set, the metrics module and the solver.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, Optional, Tuple
from uuid import UUID, uuid4
from dataclasses import dataclass
from enum import Enum


class ConstraintKind(Enum):
    SEPARATE = "SEPARATE"


@dataclass(frozen=True)
class SeatingConstraint:
    """
    A rule over a set of student ids.

    ``member_ids`` is stored verbatim: ids that are not (or no longer) in the
    registry are kept and simply ignored when evaluating an arrangement.
    """

    id: UUID
    kind: ConstraintKind
    member_ids: Tuple[UUID, ...]
    label: Optional[str] = None

    @classmethod
    def separate(
        cls,
        member_ids: Iterable[UUID],
        constraint_id: Optional[UUID] = None,
        label: Optional[str] = None,
    ) -> "SeatingConstraint":
        """Build a SEPARATE constraint, dropping repeated members but keeping order."""
        return cls(
            id=constraint_id or uuid4(),
            kind=ConstraintKind.SEPARATE,
            member_ids=tuple(dict.fromkeys(member_ids)),
            label=label,
        )

    @property
    def distinct_members(self) -> frozenset:
        return frozenset(self.member_ids)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": str(self.id),
            "kind": self.kind.value,
            "member_ids": [str(m) for m in self.member_ids],
            "label": self.label,
        }


@dataclass(frozen=True)
class ConstraintViolation:
    """An adjacent pair of students that share a SEPARATE constraint."""

    constraint_id: UUID
    student_ids: Tuple[UUID, UUID]
    seat_indices: Tuple[int, int]
    kind: ConstraintKind = ConstraintKind.SEPARATE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "constraint_id": str(self.constraint_id),
            "kind": self.kind.value,
            "student_ids": [str(s) for s in self.student_ids],
            "seat_indices": list(self.seat_indices),
        }
