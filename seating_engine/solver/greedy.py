# seating_engine/solver/greedy.py

"""
Greedy construction: the most constrained students are seated first, each in
the free seat with the fewest conflict partners around it.
"""

import random
from typing import List, Optional

from ..config import get_logger
from ..core.problem_model import Student
from .search_state import Assignment, SearchSpace

logger = get_logger("solver.greedy")


def placement_order(
    space: SearchSpace, rng: Optional[random.Random] = None
) -> List[Student]:
    """
    Descending conflict degree; ties by ascending class number, or in random
    order when ``rng`` is given.
    """
    if rng is None:
        return sorted(
            space.students, key=lambda s: (-space.degrees.get(s.id, 0), s.class_no)
        )
    keys = {s.id: rng.random() for s in space.students}
    return sorted(
        space.students, key=lambda s: (-space.degrees.get(s.id, 0), keys[s.id])
    )


def greedy_construct(
    space: SearchSpace, rng: Optional[random.Random] = None
) -> Assignment:
    """
    Seat each student in the free candidate seat with the lowest cost, the
    lowest index on ties. The cost counts adjacent conflict partners weighted
    by the number of constraints each pair shares, so it equals the violations
    the placement adds.
    """
    assignment = Assignment(space)
    for student in placement_order(space, rng):
        free = assignment.free_seats()
        costs = [(assignment.seat_cost(student.id, seat), seat) for seat in free]
        best_cost = min(cost for cost, _ in costs)
        tied = [seat for cost, seat in costs if cost == best_cost]
        seat = tied[0] if rng is None else rng.choice(tied)
        assignment.place(student.id, seat)

    logger.debug(
        f"Greedy construction placed {space.size} students with "
        f"{assignment.total_violations()} violations"
    )
    return assignment
