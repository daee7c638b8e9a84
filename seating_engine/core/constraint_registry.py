# seating_engine/core/constraint_registry.py

"""
Constraint Set - the user-maintained collection of "keep apart" rules.
No referential integrity is enforced against the student registry; the whole
set is cleared whenever a new roster is loaded.
"""

import logging
from typing import Dict, Iterable, Iterator, Optional
from uuid import UUID

from .constraint_types import SeatingConstraint
from .exceptions import InvalidConstraintError

logger = logging.getLogger(__name__)


class ConstraintSet:
    """Insertion-ordered collection of seating constraints with unique ids."""

    def __init__(self, constraints: Optional[Iterable[SeatingConstraint]] = None):
        self._constraints: Dict[UUID, SeatingConstraint] = {}
        for constraint in constraints or ():
            self.add(constraint)

    def add(self, constraint: SeatingConstraint) -> SeatingConstraint:
        """Validate and store a constraint verbatim."""
        distinct = len(constraint.distinct_members)
        if distinct < 2:
            raise InvalidConstraintError(
                f"A {constraint.kind.value} constraint needs at least 2 distinct members, got {distinct}",
                context={"constraint_id": str(constraint.id), "members": distinct},
            )
        if constraint.id in self._constraints:
            raise InvalidConstraintError(
                f"Constraint {constraint.id} already exists",
                context={"constraint_id": str(constraint.id)},
            )
        self._constraints[constraint.id] = constraint
        logger.debug(
            f"Added {constraint.kind.value} constraint {constraint.id} over {distinct} students"
        )
        return constraint

    def remove(self, constraint_id: UUID) -> None:
        """Remove by id; absent ids are ignored."""
        if self._constraints.pop(constraint_id, None) is not None:
            logger.debug(f"Removed constraint {constraint_id}")

    def clear(self) -> None:
        self._constraints.clear()

    def get(self, constraint_id: UUID) -> Optional[SeatingConstraint]:
        return self._constraints.get(constraint_id)

    def copy(self) -> "ConstraintSet":
        clone = ConstraintSet()
        clone._constraints = dict(self._constraints)
        return clone

    def __contains__(self, constraint_id: object) -> bool:
        return constraint_id in self._constraints

    def __iter__(self) -> Iterator[SeatingConstraint]:
        return iter(list(self._constraints.values()))

    def __len__(self) -> int:
        return len(self._constraints)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConstraintSet):
            return NotImplemented
        return list(self._constraints.items()) == list(other._constraints.items())

    def __repr__(self) -> str:
        return f"ConstraintSet({len(self._constraints)} constraints)"
