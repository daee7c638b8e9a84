# backend/app/api/v1/routes/seating.py
"""
API endpoints for the classroom seating plan: roster loading, layout and manual
edits, keep-apart constraints, optimization and export.

Service and engine exceptions propagate to the handlers registered in
``main.py``, which render them through their ``to_dict`` payloads.
"""
from uuid import UUID
from fastapi import APIRouter, Depends

from ....api.deps import get_seating_service
from ....services.roster import DEMO_GROUP_A, DEMO_GROUP_B
from ....services.seating import SeatingService, ServiceOutcome
from ....schemas.seating import (
    ArrangementResponse,
    ArrangementRunRead,
    ClassroomResponse,
    ClassroomStateRead,
    ConstraintCreate,
    ConstraintCreatedResponse,
    ConstraintRead,
    ExportResponse,
    LayoutUpdate,
    OptimizeResponse,
    ReconciliationReportRead,
    RosterLoadRequest,
    ScoreRead,
    SuggestedOrderRequest,
    SwapRequest,
    ViolationsResponse,
)

router = APIRouter()


def _classroom_response(outcome: ServiceOutcome, message: str) -> ClassroomResponse:
    return ClassroomResponse(
        message=message,
        applied=outcome.applied,
        state=ClassroomStateRead.from_state(outcome.state),
    )


@router.get("/", response_model=ClassroomStateRead, summary="Current classroom state")
async def get_classroom(service: SeatingService = Depends(get_seating_service)):
    """Return the complete current snapshot: roster, seats, constraints and score."""
    return ClassroomStateRead.from_state(service.state)


@router.post("/roster", response_model=ClassroomResponse)
async def load_roster(
    request: RosterLoadRequest,
    service: SeatingService = Depends(get_seating_service),
):
    """
    Load a new roster for both groups. Students are numbered continuously
    across the groups, seated in shuffled order, and all constraints are
    cleared. A parse failure in either group leaves the classroom untouched.
    """
    if request.use_demo:
        group_a_text, group_b_text = DEMO_GROUP_A, DEMO_GROUP_B
    else:
        group_a_text, group_b_text = request.group_a_text, request.group_b_text

    outcome = await service.load_roster(group_a_text, group_b_text)
    message = (
        f"Loaded {len(outcome.state.registry)} students."
        if outcome.applied
        else "A newer request was applied first; this roster was discarded."
    )
    return _classroom_response(outcome, message)


@router.put("/layout", response_model=ClassroomResponse)
async def update_layout(
    layout: LayoutUpdate,
    service: SeatingService = Depends(get_seating_service),
):
    """Resize the grid. Dimensions are clamped, never rejected."""
    outcome = await service.update_layout(layout.rows, layout.columns)
    return _classroom_response(
        outcome, f"Layout set to {outcome.state.rows}x{outcome.state.columns}."
    )


@router.post("/swap", response_model=ClassroomResponse)
async def swap_seats(
    swap: SwapRequest,
    service: SeatingService = Depends(get_seating_service),
):
    outcome = await service.swap_seats(swap.seat_a, swap.seat_b)
    return _classroom_response(outcome, f"Swapped seats {swap.seat_a} and {swap.seat_b}.")


@router.post("/shuffle", response_model=ClassroomResponse)
async def shuffle_seats(service: SeatingService = Depends(get_seating_service)):
    outcome = await service.shuffle_seats()
    return _classroom_response(outcome, "Seats shuffled.")


@router.post("/constraints", response_model=ConstraintCreatedResponse, status_code=201)
async def add_constraint(
    payload: ConstraintCreate,
    service: SeatingService = Depends(get_seating_service),
):
    """Add a SEPARATE constraint over at least two distinct students."""
    outcome = await service.add_constraint(payload.member_ids, payload.label)
    return ConstraintCreatedResponse(
        message="Constraint added.",
        state=ClassroomStateRead.from_state(outcome.state),
        constraint=ConstraintRead.from_constraint(outcome.constraint),
    )


@router.delete("/constraints/{constraint_id}", response_model=ClassroomResponse)
async def remove_constraint(
    constraint_id: UUID,
    service: SeatingService = Depends(get_seating_service),
):
    """Remove a constraint. Removing an unknown id is not an error."""
    outcome = await service.remove_constraint(constraint_id)
    return _classroom_response(outcome, "Constraint removed.")


@router.post("/optimize", response_model=OptimizeResponse)
async def optimize(service: SeatingService = Depends(get_seating_service)):
    """
    Rearrange the seated students so that constrained students are not
    adjacent. Best effort: unavoidable violations are minimized, not rejected.
    """
    outcome = await service.optimize()
    if outcome.applied:
        message = f"Arrangement applied with {outcome.result.violation_count} violations."
    else:
        message = "The classroom changed while optimizing; the result was discarded."
    return OptimizeResponse(
        message=message,
        applied=outcome.applied,
        state=ClassroomStateRead.from_state(outcome.state),
        run=ArrangementRunRead.from_result(outcome.result) if outcome.result else None,
    )


@router.post("/arrangement", response_model=ArrangementResponse)
async def apply_arrangement(
    payload: SuggestedOrderRequest,
    service: SeatingService = Depends(get_seating_service),
):
    """
    Seat the current students in a suggested order. Unknown and repeated ids
    are skipped and left-out students are appended, so nobody is dropped.
    """
    outcome = await service.apply_suggested_order(payload.ordered_ids)
    return ArrangementResponse(
        message="Suggested arrangement applied.",
        state=ClassroomStateRead.from_state(outcome.state),
        report=ReconciliationReportRead.from_report(outcome.report),
    )


@router.get("/export", response_model=ExportResponse)
async def export_grid(service: SeatingService = Depends(get_seating_service)):
    """Row-major list of student ids, ``null`` for empty seats."""
    state = service.state
    return ExportResponse(rows=state.rows, columns=state.columns, seats=service.export())


@router.get("/violations", response_model=ViolationsResponse)
async def get_violations(service: SeatingService = Depends(get_seating_service)):
    return ViolationsResponse(score=ScoreRead.from_score(service.evaluate()))
