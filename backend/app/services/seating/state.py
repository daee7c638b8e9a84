# backend/app/services/seating/state.py
"""
Immutable classroom snapshot and the pure transitions between snapshots.

Every function here takes a ``ClassroomState`` and returns a new one; nothing
is mutated in place, so a reader holding an old snapshot always sees a
complete, consistent classroom. A transition that raises leaves the caller
with the state it passed in.
"""

import logging
import math
import random
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional
from uuid import UUID

from seating_engine.config import GridBounds
from seating_engine.core.constraint_registry import ConstraintSet
from seating_engine.core.constraint_types import SeatingConstraint
from seating_engine.core.metrics import ArrangementScore, evaluate_arrangement
from seating_engine.core.problem_model import SeatGrid, StudentRegistry

logger = logging.getLogger(__name__)


class ArrangementStatus(str, Enum):
    IDLE = "IDLE"
    PARSING = "PARSING"
    OPTIMIZING = "OPTIMIZING"
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


@dataclass(frozen=True)
class ClassroomState:
    registry: StudentRegistry
    grid: SeatGrid
    constraints: ConstraintSet = field(default_factory=ConstraintSet)
    status: ArrangementStatus = ArrangementStatus.IDLE
    roster_version: int = 0
    # Bumped by every transition that replaces the grid
    grid_version: int = 0
    last_score: Optional[ArrangementScore] = None
    last_error: Optional[str] = None

    @property
    def rows(self) -> int:
        return self.grid.rows

    @property
    def columns(self) -> int:
        return self.grid.columns

    def score(self) -> ArrangementScore:
        """Violations of the current seating under the current constraints."""
        return evaluate_arrangement(self.grid, self.constraints)

    def summary(self) -> Dict[str, Any]:
        return {
            "rows": self.rows,
            "columns": self.columns,
            "students": len(self.registry),
            "seated": self.grid.occupied_count,
            "constraints": len(self.constraints),
            "status": self.status.value,
            "roster_version": self.roster_version,
            "grid_version": self.grid_version,
        }


def initial_state(rows: int, columns: int, bounds: Optional[GridBounds] = None) -> ClassroomState:
    bounds = bounds or GridBounds()
    rows, columns = bounds.clamp(rows, columns)
    return ClassroomState(registry=StudentRegistry(()), grid=SeatGrid.empty(rows, columns))


def with_status(
    state: ClassroomState, status: ArrangementStatus, error: Optional[str] = None
) -> ClassroomState:
    if status == ArrangementStatus.ERROR:
        return replace(state, status=status, last_error=error)
    if status == ArrangementStatus.SUCCESS:
        return replace(state, status=status, last_error=None)
    return replace(state, status=status)


def with_layout(
    state: ClassroomState, rows: int, columns: int, bounds: Optional[GridBounds] = None
) -> ClassroomState:
    """Clamp the requested dimensions and resize, preserving seats by index."""
    bounds = bounds or GridBounds()
    clamped = bounds.clamp(rows, columns)
    if clamped != (rows, columns):
        logger.info(f"Layout {rows}x{columns} clamped to {clamped[0]}x{clamped[1]}")
    return replace(
        state, grid=state.grid.resize(*clamped), grid_version=state.grid_version + 1
    )


def with_roster(
    state: ClassroomState,
    registry: StudentRegistry,
    bounds: Optional[GridBounds] = None,
    rng: Optional[random.Random] = None,
) -> ClassroomState:
    """
    Replace the roster: rows grow until everyone fits, students are seated in
    shuffled order from the front, and constraints are cleared.
    """
    bounds = bounds or GridBounds()
    columns = state.columns
    needed_rows = math.ceil(len(registry) / columns) if len(registry) else 0
    rows = bounds.clamp_rows(max(state.rows, needed_rows))

    grid = SeatGrid.from_occupants(rows, columns, list(registry)).shuffle(rng)
    if rows != state.rows:
        logger.info(f"Grew layout to {rows}x{columns} for {len(registry)} students")

    return ClassroomState(
        registry=registry,
        grid=grid,
        constraints=ConstraintSet(),
        status=ArrangementStatus.SUCCESS,
        roster_version=state.roster_version + 1,
        grid_version=state.grid_version + 1,
    )


def with_swap(state: ClassroomState, i: int, j: int) -> ClassroomState:
    return replace(state, grid=state.grid.swap(i, j), grid_version=state.grid_version + 1)


def with_shuffle(state: ClassroomState, rng: Optional[random.Random] = None) -> ClassroomState:
    return replace(state, grid=state.grid.shuffle(rng), grid_version=state.grid_version + 1)


def with_constraint(state: ClassroomState, constraint: SeatingConstraint) -> ClassroomState:
    constraints = state.constraints.copy()
    constraints.add(constraint)
    return replace(state, constraints=constraints)


def without_constraint(state: ClassroomState, constraint_id: UUID) -> ClassroomState:
    if constraint_id not in state.constraints:
        return state
    constraints = state.constraints.copy()
    constraints.remove(constraint_id)
    return replace(state, constraints=constraints)


def with_arrangement(state: ClassroomState, grid: SeatGrid) -> ClassroomState:
    """Install a new seating of the same dimensions and record its score."""
    if (grid.rows, grid.columns) != (state.rows, state.columns):
        raise ValueError(
            f"Arrangement is {grid.rows}x{grid.columns}, classroom is {state.rows}x{state.columns}"
        )
    score = evaluate_arrangement(grid, state.constraints)
    return replace(
        state,
        grid=grid,
        grid_version=state.grid_version + 1,
        status=ArrangementStatus.SUCCESS,
        last_score=score,
        last_error=None,
    )
