# app/schemas/seating.py
"""Pydantic v2 schemas for the seating API."""

from __future__ import annotations
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional, Dict, Any
from uuid import UUID

from seating_engine.core.metrics import ArrangementScore
from seating_engine.core.problem_model import Student
from seating_engine.core.constraint_types import SeatingConstraint
from seating_engine.solver.reconciliation import ReconciliationReport
from seating_engine.solver.solver_manager import ArrangementResult

from ..services.seating.state import ClassroomState

MODEL_CONFIG = ConfigDict(from_attributes=True)


# --- Read Schemas ---


class StudentRead(BaseModel):
    model_config = MODEL_CONFIG

    id: UUID
    class_no: int
    display_class_no: str
    name_local: str
    name_foreign: str
    group: str

    @classmethod
    def from_student(cls, student: Student) -> "StudentRead":
        return cls(
            id=student.id,
            class_no=student.class_no,
            display_class_no=student.display_class_no,
            name_local=student.name_local,
            name_foreign=student.name_foreign,
            group=student.group.value,
        )


class ConstraintRead(BaseModel):
    model_config = MODEL_CONFIG

    id: UUID
    kind: str
    member_ids: List[UUID]
    label: Optional[str] = None

    @classmethod
    def from_constraint(cls, constraint: SeatingConstraint) -> "ConstraintRead":
        return cls(
            id=constraint.id,
            kind=constraint.kind.value,
            member_ids=list(constraint.member_ids),
            label=constraint.label,
        )


class ViolationRead(BaseModel):
    constraint_id: UUID
    student_ids: List[UUID]
    seat_indices: List[int]


class ScoreRead(BaseModel):
    violation_count: int
    violations: List[ViolationRead] = Field(default_factory=list)
    violations_by_constraint: Dict[str, int] = Field(default_factory=dict)
    placed_students: int
    capacity: int
    is_conflict_free: bool

    @classmethod
    def from_score(cls, score: ArrangementScore) -> "ScoreRead":
        return cls(
            violation_count=score.violation_count,
            violations=[
                ViolationRead(
                    constraint_id=v.constraint_id,
                    student_ids=list(v.student_ids),
                    seat_indices=list(v.seat_indices),
                )
                for v in score.violations
            ],
            violations_by_constraint=dict(score.violations_by_constraint),
            placed_students=score.placed_students,
            capacity=score.capacity,
            is_conflict_free=score.is_conflict_free,
        )


class ClassroomStateRead(BaseModel):
    rows: int
    columns: int
    status: str
    roster_version: int
    grid_version: int
    last_error: Optional[str] = None
    students: List[StudentRead] = Field(default_factory=list)
    seats: List[Optional[UUID]] = Field(
        ..., description="Row-major seat contents; index 0 is the back corner."
    )
    constraints: List[ConstraintRead] = Field(default_factory=list)
    score: ScoreRead

    @classmethod
    def from_state(cls, state: ClassroomState) -> "ClassroomStateRead":
        return cls(
            rows=state.rows,
            columns=state.columns,
            status=state.status.value,
            roster_version=state.roster_version,
            grid_version=state.grid_version,
            last_error=state.last_error,
            students=[StudentRead.from_student(s) for s in state.registry],
            seats=[s.id if s is not None else None for s in state.grid],
            constraints=[ConstraintRead.from_constraint(c) for c in state.constraints],
            score=ScoreRead.from_score(state.score()),
        )


class ReconciliationReportRead(BaseModel):
    unknown_ids: List[str] = Field(default_factory=list)
    duplicate_ids: List[str] = Field(default_factory=list)
    missing_ids: List[str] = Field(default_factory=list)
    is_clean: bool = True

    @classmethod
    def from_report(cls, report: ReconciliationReport) -> "ReconciliationReportRead":
        return cls(**report.to_dict(), is_clean=report.is_clean)


class ArrangementRunRead(BaseModel):
    violation_count: int
    candidates_evaluated: int
    repair_swaps: int
    runtime_seconds: float
    phase_timings: Dict[str, Dict[str, float]] = Field(default_factory=dict)

    @classmethod
    def from_result(cls, result: ArrangementResult) -> "ArrangementRunRead":
        return cls(
            violation_count=result.violation_count,
            candidates_evaluated=result.candidates_evaluated,
            repair_swaps=result.repair_swaps,
            runtime_seconds=result.runtime_seconds,
            phase_timings=result.phase_timings,
        )


# --- Request Schemas ---


class RosterLoadRequest(BaseModel):
    group_a_text: str = Field(default="", description="Roster text for group A.")
    group_b_text: str = Field(default="", description="Roster text for group B.")
    use_demo: bool = Field(
        default=False, description="Ignore the texts and load the sample rosters."
    )


class LayoutUpdate(BaseModel):
    rows: int = Field(..., description="Requested rows; clamped to the allowed range.")
    columns: int = Field(
        ..., description="Requested columns; clamped to the allowed range."
    )


class SwapRequest(BaseModel):
    seat_a: int = Field(..., description="Row-major index of the first seat.")
    seat_b: int = Field(..., description="Row-major index of the second seat.")


class ConstraintCreate(BaseModel):
    member_ids: List[UUID] = Field(
        ..., description="Students who must not sit next to each other."
    )
    label: Optional[str] = None


class SuggestedOrderRequest(BaseModel):
    ordered_ids: List[Any] = Field(
        ..., description="Student ids in the order they should fill the seats."
    )


# --- Response Schemas ---


class ClassroomResponse(BaseModel):
    success: bool = True
    message: str
    applied: bool = True
    state: ClassroomStateRead


class ConstraintCreatedResponse(ClassroomResponse):
    constraint: ConstraintRead


class OptimizeResponse(ClassroomResponse):
    run: Optional[ArrangementRunRead] = None


class ArrangementResponse(ClassroomResponse):
    report: ReconciliationReportRead


class ExportResponse(BaseModel):
    rows: int
    columns: int
    seats: List[Optional[str]]


class ViolationsResponse(BaseModel):
    score: ScoreRead
