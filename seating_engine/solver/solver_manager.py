# seating_engine/solver/solver_manager.py

"""
Arrangement engine: orchestrates conflict graph construction, greedy
construction, bounded local repair and bounded randomized restarts, and keeps
the candidate with the fewest violations.

The engine never fails because constraints cannot all be satisfied; it only
raises for input it cannot seat at all (more students than seats, duplicate
ids) or when its cancel event is set.
"""

import random
import threading
import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence
from uuid import UUID

from ..config import ArrangementConfig, SolverPhase, config as engine_config, get_logger
from ..core.constraint_types import SeatingConstraint
from ..core.exceptions import ArrangementCancelledError, InvalidInputError
from ..core.metrics import ArrangementScore, evaluate_arrangement
from ..core.problem_model import SeatGrid, Student
from ..utils.logging import PhaseTimings, phase_timer
from .conflict_graph import build_conflict_graph
from .greedy import greedy_construct
from .local_search import local_repair
from .reconciliation import reconcile_order
from .search_state import Assignment, SearchSpace

logger = get_logger("solver.solver_manager")


@dataclass
class ArrangementResult:
    grid: SeatGrid
    score: ArrangementScore
    ordered_ids: List[UUID] = field(default_factory=list)
    candidates_evaluated: int = 0
    repair_swaps: int = 0
    runtime_seconds: float = 0.0
    phase_timings: Dict[str, Dict[str, float]] = field(default_factory=dict)

    @property
    def violation_count(self) -> int:
        return self.score.violation_count

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seats": self.grid.to_export(),
            "score": self.score.to_dict(),
            "candidates_evaluated": self.candidates_evaluated,
            "repair_swaps": self.repair_swaps,
            "runtime_seconds": self.runtime_seconds,
            "phase_timings": self.phase_timings,
        }


class ArrangementEngine:
    """Best-effort seating optimizer for SEPARATE constraints."""

    def __init__(self, arrangement_config: Optional[ArrangementConfig] = None):
        self.config = arrangement_config or engine_config.arrangement

    def arrange_grid(
        self,
        grid: SeatGrid,
        constraints: Iterable[SeatingConstraint],
        cancel_event: Optional[threading.Event] = None,
    ) -> ArrangementResult:
        """Rearrange the students currently seated in ``grid``."""
        return self.arrange(
            grid.active_occupants(), grid.rows, grid.columns, constraints, cancel_event
        )

    def arrange(
        self,
        students: Sequence[Student],
        rows: int,
        columns: int,
        constraints: Iterable[SeatingConstraint],
        cancel_event: Optional[threading.Event] = None,
    ) -> ArrangementResult:
        start_time = time.perf_counter()
        students = list(students)
        constraints = list(constraints)
        self._validate_input(students, rows, columns)

        timings = PhaseTimings()
        empty_grid = SeatGrid.empty(rows, columns)

        with phase_timer(logger, SolverPhase.CONFLICT_GRAPH, timings):
            graph = build_conflict_graph(students, constraints)
            space = SearchSpace(empty_grid, students, graph)

        best: Optional[Assignment] = None
        best_violations = 0
        candidates = 0
        repair_swaps = 0

        if space.size:
            rng = random.Random(self.config.seed)
            # Run 0 is deterministic; the rest break ties randomly.
            for run in range(self.config.restarts + 1):
                self._check_cancelled(cancel_event, run)
                phase = (
                    SolverPhase.GREEDY_CONSTRUCTION
                    if run == 0
                    else SolverPhase.RANDOM_RESTART
                )
                with phase_timer(logger, phase, timings, {"run": run}):
                    candidate = greedy_construct(space, None if run == 0 else rng)
                with phase_timer(logger, SolverPhase.LOCAL_REPAIR, timings):
                    repair_swaps += local_repair(
                        candidate, self.config.max_repair_passes, cancel_event
                    )
                candidates += 1

                violations = candidate.total_violations()
                if best is None or violations < best_violations:
                    best, best_violations = candidate, violations
                if best_violations == 0 or graph.number_of_edges() == 0:
                    break

        ordered_ids = best.ordered_ids() if best is not None else []
        with phase_timer(logger, SolverPhase.RECONCILIATION, timings):
            grid, report = reconcile_order(students, ordered_ids, rows, columns)
        if not report.is_clean:
            logger.error(f"Engine produced an inconsistent ordering: {report.to_dict()}")

        score = evaluate_arrangement(grid, constraints)
        runtime = time.perf_counter() - start_time
        logger.info(
            f"Arranged {len(students)} students in a {rows}x{columns} grid: "
            f"{score.violation_count} violations after {candidates} candidates "
            f"({runtime * 1000:.1f}ms)"
        )
        return ArrangementResult(
            grid=grid,
            score=score,
            ordered_ids=[s.id for s in grid.active_occupants()],
            candidates_evaluated=candidates,
            repair_swaps=repair_swaps,
            runtime_seconds=runtime,
            phase_timings=timings.summary(),
        )

    @staticmethod
    def _validate_input(students: List[Student], rows: int, columns: int) -> None:
        capacity = rows * columns
        if rows < 1 or columns < 1:
            raise InvalidInputError(
                f"Grid dimensions must be positive, got {rows}x{columns}"
            )
        if len(students) > capacity:
            raise InvalidInputError(
                f"{len(students)} students do not fit into {capacity} seats; resize the grid first",
                context={"students": len(students), "capacity": capacity},
            )
        duplicates = [sid for sid, n in Counter(s.id for s in students).items() if n > 1]
        if duplicates:
            raise InvalidInputError(
                "Students must be seated at most once",
                details={"duplicate_ids": [str(d) for d in duplicates]},
            )

    @staticmethod
    def _check_cancelled(cancel_event: Optional[threading.Event], run: int) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise ArrangementCancelledError(
                "Arrangement cancelled", context={"run": run}
            )
