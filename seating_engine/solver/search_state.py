# seating_engine/solver/search_state.py

"""
Mutable search state shared by greedy construction and local repair.

Only seats ``0..n-1`` are ever used (n = number of students), so a finished
assignment always fills the grid from the front with no gaps.
"""

from typing import List, Optional, Sequence, Tuple
from uuid import UUID

import networkx as nx

from ..core.problem_model import SeatGrid, Student
from .conflict_graph import conflict_degrees, partner_weights


class SearchSpace:
    """Immutable geometry and conflict data for one arrangement run."""

    def __init__(self, grid: SeatGrid, students: Sequence[Student], graph: nx.Graph):
        self.students = list(students)
        self.size = len(self.students)
        self.graph = graph
        self.degrees = conflict_degrees(graph)
        self.partners = partner_weights(graph)
        # Seats beyond the student count stay empty and never contribute.
        self.neighbours: List[List[int]] = [
            [j for j in grid.neighbours(i) if j < self.size] for i in range(self.size)
        ]

    def weight(self, a: UUID, b: Optional[UUID]) -> int:
        if b is None:
            return 0
        return self.partners.get(a, {}).get(b, 0)


class Assignment:
    """Seat index -> student id over the candidate seats ``0..n-1``."""

    def __init__(self, space: SearchSpace):
        self.space = space
        self.occupants: List[Optional[UUID]] = [None] * space.size

    def copy(self) -> "Assignment":
        clone = Assignment(self.space)
        clone.occupants = list(self.occupants)
        return clone

    def place(self, student_id: UUID, seat: int) -> None:
        self.occupants[seat] = student_id

    def free_seats(self) -> List[int]:
        return [i for i, occupant in enumerate(self.occupants) if occupant is None]

    def seat_cost(
        self, student_id: UUID, seat: int, exclude_seat: Optional[int] = None
    ) -> int:
        """Weighted count of conflict partners around ``seat``."""
        return sum(
            self.space.weight(student_id, self.occupants[nb])
            for nb in self.space.neighbours[seat]
            if nb != exclude_seat
        )

    def violating_pairs(self) -> List[Tuple[int, int]]:
        pairs = []
        for i, occupant in enumerate(self.occupants):
            if occupant is None:
                continue
            for nb in self.space.neighbours[i]:
                if nb > i and self.space.weight(occupant, self.occupants[nb]):
                    pairs.append((i, nb))
        return pairs

    def total_violations(self) -> int:
        total = 0
        for i, occupant in enumerate(self.occupants):
            if occupant is None:
                continue
            for nb in self.space.neighbours[i]:
                if nb > i:
                    total += self.space.weight(occupant, self.occupants[nb])
        return total

    def swap_delta(self, p: int, q: int) -> int:
        """Change in total violations if the occupants of ``p`` and ``q`` swap."""
        u, v = self.occupants[p], self.occupants[q]
        before = 0
        after = 0
        # The u-v relation itself is unchanged by the swap, so each side
        # excludes the other seat.
        if u is not None:
            before += self.seat_cost(u, p, exclude_seat=q)
            after += self.seat_cost(u, q, exclude_seat=p)
        if v is not None:
            before += self.seat_cost(v, q, exclude_seat=p)
            after += self.seat_cost(v, p, exclude_seat=q)
        return after - before

    def swap(self, p: int, q: int) -> None:
        self.occupants[p], self.occupants[q] = self.occupants[q], self.occupants[p]

    def ordered_ids(self) -> List[UUID]:
        return [o for o in self.occupants if o is not None]
