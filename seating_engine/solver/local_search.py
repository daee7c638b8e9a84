# seating_engine/solver/local_search.py

"""
Bounded local repair by pairwise swaps.

Each pass looks at the endpoints of every violating adjacent pair, evaluates a
swap with every other candidate seat, and applies the single best strictly
improving swap. A pass without an improving swap is a local optimum and ends
the repair.
"""

import threading
from typing import Optional, Tuple

from ..config import get_logger
from ..core.exceptions import ArrangementCancelledError
from .search_state import Assignment

logger = get_logger("solver.local_search")


def best_improving_swap(assignment: Assignment) -> Optional[Tuple[int, int, int]]:
    """Return ``(p, q, delta)`` for the best swap with ``delta < 0``, if any."""
    violating = assignment.violating_pairs()
    if not violating:
        return None

    endpoints = sorted({seat for pair in violating for seat in pair})
    best: Optional[Tuple[int, int, int]] = None
    for p in endpoints:
        for q in range(assignment.space.size):
            if q == p:
                continue
            delta = assignment.swap_delta(p, q)
            if delta < 0 and (best is None or delta < best[2]):
                best = (p, q, delta)
    return best


def local_repair(
    assignment: Assignment,
    max_passes: int,
    cancel_event: Optional[threading.Event] = None,
) -> int:
    """Improve ``assignment`` in place. Returns the number of swaps applied."""
    applied = 0
    for pass_no in range(max_passes):
        if cancel_event is not None and cancel_event.is_set():
            raise ArrangementCancelledError(
                "Arrangement cancelled during local repair",
                context={"pass": pass_no},
            )
        move = best_improving_swap(assignment)
        if move is None:
            logger.debug(f"Local repair reached a local optimum after {pass_no} passes")
            break
        p, q, delta = move
        assignment.swap(p, q)
        applied += 1
        logger.debug(f"Pass {pass_no}: swapped seats {p} and {q} ({delta:+d})")
    return applied
