# seating_engine/solver/reconciliation.py

"""
Turns an ordered sequence of student identifiers, from the engine or from any
external suggestion, into a complete seat grid.

Unknown and repeated identifiers are skipped. Accepted students fill seats
``0, 1, 2, ...`` in suggestion order, then every student the suggestion left
out takes the next unused seats in original order. No student is ever dropped.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Sequence, Tuple
from uuid import UUID

from ..config import get_logger
from ..core.problem_model import SeatGrid, Student
from ..utils.logging import log_operation

logger = get_logger("solver.reconciliation")


@dataclass
class ReconciliationReport:
    unknown_ids: List[str] = field(default_factory=list)
    duplicate_ids: List[str] = field(default_factory=list)
    missing_ids: List[str] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not (self.unknown_ids or self.duplicate_ids or self.missing_ids)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "unknown_ids": list(self.unknown_ids),
            "duplicate_ids": list(self.duplicate_ids),
            "missing_ids": list(self.missing_ids),
        }


def _as_uuid(value: Any):
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (ValueError, TypeError, AttributeError):
        return None


@log_operation("reconcile_order")
def reconcile_order(
    students: Sequence[Student],
    ordered_ids: Iterable[Any],
    rows: int,
    columns: int,
) -> Tuple[SeatGrid, ReconciliationReport]:
    by_id = {s.id: s for s in students}
    report = ReconciliationReport()
    placed: List[Student] = []
    seen = set()

    for raw in ordered_ids:
        student_id = _as_uuid(raw)
        if student_id is None or student_id not in by_id:
            report.unknown_ids.append(str(raw))
            continue
        if student_id in seen:
            report.duplicate_ids.append(str(student_id))
            continue
        seen.add(student_id)
        placed.append(by_id[student_id])

    for student in students:
        if student.id not in seen:
            report.missing_ids.append(str(student.id))
            placed.append(student)

    if not report.is_clean:
        logger.warning(
            f"Reconciled suggestion: {len(report.unknown_ids)} unknown, "
            f"{len(report.duplicate_ids)} duplicate, {len(report.missing_ids)} missing ids"
        )
    return SeatGrid.from_occupants(rows, columns, placed), report
