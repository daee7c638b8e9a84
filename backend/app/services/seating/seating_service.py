# backend/app/services/seating/seating_service.py
"""
Service that owns the single authoritative classroom state.

All writes go through one ``asyncio.Lock`` and replace the state reference
with a new snapshot built by the pure transitions in ``state.py``. Parsing and
optimization run in the default executor so the event loop stays responsive.

Long-running requests (roster load, optimize) take a ticket from a
monotonically increasing counter. Their result is applied only if no later
ticket has been applied in the meantime, so the most recent request wins.
"""

import asyncio
import logging
import random
import threading
from dataclasses import dataclass
from functools import partial
from typing import Any, Iterable, List, Optional
from uuid import UUID

from seating_engine.core.constraint_types import SeatingConstraint
from seating_engine.core.exceptions import ArrangementCancelledError, SeatingEngineError
from seating_engine.core.metrics import ArrangementScore
from seating_engine.core.problem_model import RosterEntry, StudentGroup, StudentRegistry
from seating_engine.solver.reconciliation import ReconciliationReport, reconcile_order
from seating_engine.solver.solver_manager import ArrangementEngine, ArrangementResult

from ...config import Settings, get_settings
from ...core.exceptions import OptimizationError, RosterParseError
from ..roster.roster_parser import TextRosterParser
from .state import (
    ArrangementStatus,
    ClassroomState,
    initial_state,
    with_arrangement,
    with_constraint,
    with_layout,
    with_roster,
    with_shuffle,
    with_status,
    with_swap,
    without_constraint,
)

logger = logging.getLogger(__name__)


@dataclass
class ServiceOutcome:
    """State after a request, and whether the request's result was installed."""

    state: ClassroomState
    applied: bool = True
    result: Optional[ArrangementResult] = None
    report: Optional[ReconciliationReport] = None
    constraint: Optional[SeatingConstraint] = None


class SeatingService:
    """Single owner and single writer of the classroom state."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        parser: Optional[TextRosterParser] = None,
        engine: Optional[ArrangementEngine] = None,
        rng: Optional[random.Random] = None,
    ):
        self.settings = settings or get_settings()
        self.bounds = self.settings.grid_bounds
        self.parser = parser or TextRosterParser()
        self.engine = engine or ArrangementEngine(self.settings.arrangement_config)
        self.rng = rng or random.Random(self.settings.ARRANGEMENT_SEED)

        self._state = initial_state(
            self.settings.DEFAULT_ROWS, self.settings.DEFAULT_COLUMNS, self.bounds
        )
        self._lock = asyncio.Lock()
        self._last_ticket = 0
        self._applied_ticket = 0

    @property
    def state(self) -> ClassroomState:
        return self._state

    # ------------------------------------------------------------------
    # Ticketing
    # ------------------------------------------------------------------

    def _take_ticket(self) -> int:
        self._last_ticket += 1
        return self._last_ticket

    def _is_superseded(self, ticket: int) -> bool:
        return self._applied_ticket > ticket

    async def _fail(self, ticket: int, message: str) -> None:
        async with self._lock:
            if not self._is_superseded(ticket):
                self._state = with_status(self._state, ArrangementStatus.ERROR, message)

    # ------------------------------------------------------------------
    # Roster ingestion
    # ------------------------------------------------------------------

    async def _parse_group(self, text: Optional[str], group: StudentGroup) -> List[RosterEntry]:
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, self.parser.parse, text)
        except RosterParseError as e:
            raise e.with_context(group=group.value)

    async def load_roster(
        self, group_a_text: Optional[str], group_b_text: Optional[str]
    ) -> ServiceOutcome:
        """
        Parse both groups concurrently and replace the roster. Any parse
        failure leaves registry, grid and constraints untouched.
        """
        ticket = self._take_ticket()
        async with self._lock:
            self._state = with_status(self._state, ArrangementStatus.PARSING)

        try:
            group_a, group_b = await asyncio.gather(
                self._parse_group(group_a_text, StudentGroup.GROUP_A),
                self._parse_group(group_b_text, StudentGroup.GROUP_B),
            )
            registry = StudentRegistry.from_groups(group_a, group_b)
        except (RosterParseError, SeatingEngineError) as e:
            logger.warning(f"Roster load failed: {e}")
            await self._fail(ticket, e.message)
            raise

        async with self._lock:
            if self._is_superseded(ticket):
                logger.info(f"Roster load {ticket} superseded by {self._applied_ticket}")
                return ServiceOutcome(state=self._state, applied=False)
            try:
                new_state = with_roster(self._state, registry, self.bounds, self.rng)
            except SeatingEngineError as e:
                self._state = with_status(self._state, ArrangementStatus.ERROR, e.message)
                raise
            self._state = new_state
            self._applied_ticket = ticket

        sizes = registry.group_sizes()
        logger.info(
            f"Loaded roster v{new_state.roster_version}: "
            f"{sizes[StudentGroup.GROUP_A]} + {sizes[StudentGroup.GROUP_B]} students "
            f"in a {new_state.rows}x{new_state.columns} grid"
        )
        return ServiceOutcome(state=new_state)

    # ------------------------------------------------------------------
    # Manual edits
    # ------------------------------------------------------------------

    async def update_layout(self, rows: int, columns: int) -> ServiceOutcome:
        async with self._lock:
            self._state = with_layout(self._state, rows, columns, self.bounds)
            return ServiceOutcome(state=self._state)

    async def swap_seats(self, i: int, j: int) -> ServiceOutcome:
        async with self._lock:
            self._state = with_swap(self._state, i, j)
            return ServiceOutcome(state=self._state)

    async def shuffle_seats(self) -> ServiceOutcome:
        async with self._lock:
            self._state = with_shuffle(self._state, self.rng)
            return ServiceOutcome(state=self._state)

    async def add_constraint(
        self, member_ids: Iterable[UUID], label: Optional[str] = None
    ) -> ServiceOutcome:
        constraint = SeatingConstraint.separate(member_ids, label=label)
        async with self._lock:
            self._state = with_constraint(self._state, constraint)
            logger.info(
                f"Added SEPARATE constraint {constraint.id} with "
                f"{len(constraint.member_ids)} members"
            )
            return ServiceOutcome(state=self._state, constraint=constraint)

    async def remove_constraint(self, constraint_id: UUID) -> ServiceOutcome:
        async with self._lock:
            self._state = without_constraint(self._state, constraint_id)
            return ServiceOutcome(state=self._state)

    # ------------------------------------------------------------------
    # Optimization
    # ------------------------------------------------------------------

    async def optimize(self) -> ServiceOutcome:
        """
        Rearrange the seated students to minimize constraint violations.

        The engine works on a snapshot; its result is discarded when a later
        request has been applied, or the roster or the seating changed while
        it ran. Manual edits made meanwhile therefore always survive.
        """
        ticket = self._take_ticket()
        async with self._lock:
            self._state = with_status(self._state, ArrangementStatus.OPTIMIZING)
            snapshot = self._state

        timeout = self.settings.OPTIMIZE_TIMEOUT_SECONDS
        cancel_event = threading.Event()
        loop = asyncio.get_running_loop()
        job = loop.run_in_executor(
            None,
            partial(
                self.engine.arrange_grid,
                snapshot.grid,
                list(snapshot.constraints),
                cancel_event,
            ),
        )

        try:
            result = await asyncio.wait_for(job, timeout=timeout)
        except asyncio.TimeoutError as e:
            cancel_event.set()
            logger.error(f"Optimization {ticket} timed out after {timeout}s")
            error = OptimizationError(
                "Seat optimization timed out",
                timeout_seconds=timeout,
                cause=e,
            )
            await self._fail(ticket, error.message)
            raise error from e
        except asyncio.CancelledError:
            cancel_event.set()
            logger.warning(f"Optimization {ticket} cancelled")
            await self._fail(ticket, "Seat optimization was cancelled")
            raise
        except ArrangementCancelledError as e:
            await self._fail(ticket, e.message)
            raise OptimizationError(
                "Seat optimization was cancelled", phase="arrangement", cause=e
            ) from e
        except SeatingEngineError as e:
            await self._fail(ticket, e.message)
            raise
        except Exception as e:
            logger.error(f"Optimization {ticket} failed: {e}", exc_info=True)
            await self._fail(ticket, str(e))
            raise OptimizationError(
                "Seat optimization failed", phase="arrangement", cause=e
            ) from e

        async with self._lock:
            current = self._state
            stale_reason = None
            if self._is_superseded(ticket):
                stale_reason = f"superseded by request {self._applied_ticket}"
            elif current.roster_version != snapshot.roster_version:
                stale_reason = "roster changed"
            elif current.grid_version != snapshot.grid_version:
                stale_reason = "seating changed"

            if stale_reason:
                logger.info(f"Discarding optimization {ticket}: {stale_reason}")
                # Nothing newer is in flight to settle the status
                if (
                    current.status == ArrangementStatus.OPTIMIZING
                    and self._last_ticket == ticket
                ):
                    current = with_status(current, ArrangementStatus.SUCCESS)
                    self._state = current
                return ServiceOutcome(state=current, applied=False, result=result)

            self._state = with_arrangement(current, result.grid)
            self._applied_ticket = ticket
            logger.info(
                f"Applied optimization {ticket}: "
                f"{self._state.last_score.violation_count} violations"
            )
            return ServiceOutcome(state=self._state, result=result)

    async def apply_suggested_order(self, ordered_ids: Iterable[Any]) -> ServiceOutcome:
        """Seat the current students in a suggested order, repairing bad ids."""
        async with self._lock:
            current = self._state
            grid, report = reconcile_order(
                current.grid.active_occupants(),
                list(ordered_ids),
                current.rows,
                current.columns,
            )
            self._state = with_arrangement(current, grid)
            return ServiceOutcome(state=self._state, report=report)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def export(self) -> List[Optional[str]]:
        return self._state.grid.to_export()

    def evaluate(self) -> ArrangementScore:
        return self._state.score()

