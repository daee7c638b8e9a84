# backend/app/tests/unit/test_classroom_state.py

import random
from uuid import uuid4

import pytest

from seating_engine.config import GridBounds
from seating_engine.core.constraint_types import SeatingConstraint
from seating_engine.core.exceptions import (
    InvalidConstraintError,
    InvalidInputError,
    SeatIndexOutOfRangeError,
)
from seating_engine.core.problem_model import RosterEntry, SeatGrid, StudentRegistry

from backend.app.services.seating.state import (
    ArrangementStatus,
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


def make_registry(n_a: int, n_b: int = 0) -> StudentRegistry:
    group_a = [RosterEntry(str(i + 1), f"甲{i}", f"A{i}") for i in range(n_a)]
    group_b = [RosterEntry(str(i + 1), f"乙{i}", f"B{i}") for i in range(n_b)]
    return StudentRegistry.from_groups(group_a, group_b)


@pytest.fixture
def loaded():
    state = initial_state(2, 3)
    return with_roster(state, make_registry(3, 2), rng=random.Random(5))


class TestInitialAndLayout:
    def test_initial_state_is_idle_and_empty(self):
        state = initial_state(5, 6)
        assert state.status == ArrangementStatus.IDLE
        assert len(state.grid) == 30
        assert state.grid.occupied_count == 0
        assert len(state.registry) == 0

    def test_initial_dimensions_are_clamped(self):
        state = initial_state(50, 0)
        assert (state.rows, state.columns) == (20, 1)

    @pytest.mark.parametrize(
        "rows, columns, expected",
        [(0, 4, (1, 4)), (25, 13, (20, 12)), (-3, -3, (1, 1)), (3, 4, (3, 4))],
    )
    def test_layout_is_clamped_not_rejected(self, rows, columns, expected):
        state = with_layout(initial_state(5, 6), rows, columns)
        assert (state.rows, state.columns) == expected
        assert len(state.grid) == expected[0] * expected[1]

    def test_layout_honours_custom_bounds(self):
        bounds = GridBounds(max_rows=4, max_columns=4)
        state = with_layout(initial_state(2, 2, bounds), 10, 10, bounds)
        assert (state.rows, state.columns) == (4, 4)

    def test_layout_keeps_registry_and_constraints(self, loaded):
        ids = [s.id for s in loaded.registry]
        state = with_constraint(loaded, SeatingConstraint.separate(ids[:2]))

        resized = with_layout(state, 1, 2)

        assert resized.registry is state.registry
        assert len(resized.constraints) == 1
        assert resized.grid.occupied_count == 2


class TestRosterLoad:
    def test_roster_is_seated_from_the_front(self, loaded):
        assert loaded.status == ArrangementStatus.SUCCESS
        assert loaded.roster_version == 1
        assert loaded.grid.occupied_count == 5
        assert all(s is not None for s in loaded.grid.seats[:5])
        assert loaded.grid.seats[5] is None
        assert {s.id for s in loaded.grid.active_occupants()} == set(loaded.registry.ids())

    def test_rows_grow_to_fit_the_roster(self):
        state = with_roster(initial_state(1, 6), make_registry(10, 10))
        assert (state.rows, state.columns) == (4, 6)
        assert state.grid.occupied_count == 20

    def test_rows_never_shrink_on_load(self):
        state = with_roster(initial_state(5, 6), make_registry(2))
        assert state.rows == 5

    def test_roster_that_cannot_fit_is_rejected(self):
        state = initial_state(5, 12)
        with pytest.raises(InvalidInputError):
            with_roster(state, make_registry(200, 41))

    def test_new_roster_clears_constraints(self, loaded):
        ids = loaded.registry.ids()
        constrained = with_constraint(loaded, SeatingConstraint.separate(ids[:2]))
        reloaded = with_roster(constrained, make_registry(4))
        assert len(reloaded.constraints) == 0
        assert reloaded.roster_version == 2


class TestEdits:
    def test_swap_returns_new_state(self, loaded):
        swapped = with_swap(loaded, 0, 5)
        assert swapped.grid[5] is loaded.grid[0]
        assert swapped.grid[0] is None
        assert loaded.grid[5] is None

    def test_swap_out_of_range_leaves_state(self, loaded):
        with pytest.raises(SeatIndexOutOfRangeError):
            with_swap(loaded, 0, 6)
        assert loaded.grid.occupied_count == 5

    def test_shuffle_keeps_everyone(self, loaded):
        shuffled = with_shuffle(loaded, random.Random(1))
        assert sorted(s.class_no for s in shuffled.grid.active_occupants()) == [1, 2, 3, 4, 5]

    def test_constraint_add_copies_the_set(self, loaded):
        ids = loaded.registry.ids()
        added = with_constraint(loaded, SeatingConstraint.separate(ids[:3]))
        assert len(added.constraints) == 1
        assert len(loaded.constraints) == 0

    def test_invalid_constraint_leaves_state(self, loaded):
        with pytest.raises(InvalidConstraintError):
            with_constraint(loaded, SeatingConstraint.separate([loaded.registry.ids()[0]]))
        assert len(loaded.constraints) == 0

    def test_remove_unknown_constraint_is_noop(self, loaded):
        assert without_constraint(loaded, uuid4()) is loaded

    def test_remove_constraint(self, loaded):
        constraint = SeatingConstraint.separate(loaded.registry.ids()[:2])
        added = with_constraint(loaded, constraint)
        removed = without_constraint(added, constraint.id)
        assert len(removed.constraints) == 0
        assert len(added.constraints) == 1

    def test_grid_version_tracks_seating_changes(self, loaded):
        version = loaded.grid_version
        assert with_swap(loaded, 0, 1).grid_version == version + 1
        assert with_shuffle(loaded, random.Random(1)).grid_version == version + 1
        assert with_layout(loaded, 3, 3).grid_version == version + 1
        assert with_arrangement(loaded, loaded.grid).grid_version == version + 1

        constraint = SeatingConstraint.separate(loaded.registry.ids()[:2])
        assert with_constraint(loaded, constraint).grid_version == version
        assert with_status(loaded, ArrangementStatus.OPTIMIZING).grid_version == version


class TestArrangementAndStatus:
    def test_arrangement_records_score(self, loaded):
        students = list(loaded.registry)
        constraint = SeatingConstraint.separate([students[0].id, students[1].id])
        state = with_constraint(loaded, constraint)

        arranged = with_arrangement(state, SeatGrid.from_occupants(2, 3, students))

        assert arranged.status == ArrangementStatus.SUCCESS
        assert arranged.last_score.violation_count == 1

    def test_arrangement_must_match_dimensions(self, loaded):
        with pytest.raises(ValueError):
            with_arrangement(loaded, SeatGrid.empty(3, 2))

    def test_error_then_success_clears_message(self, loaded):
        failed = with_status(loaded, ArrangementStatus.ERROR, "boom")
        assert failed.last_error == "boom"
        assert with_status(failed, ArrangementStatus.OPTIMIZING).last_error == "boom"
        assert with_status(failed, ArrangementStatus.SUCCESS).last_error is None
