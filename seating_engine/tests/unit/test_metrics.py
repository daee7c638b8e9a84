# seating_engine/tests/unit/test_metrics.py

"""
Tests for violation detection and arrangement scoring.
"""

from uuid import uuid4

from seating_engine.core.constraint_types import SeatingConstraint
from seating_engine.core.metrics import evaluate_arrangement, find_violations
from seating_engine.core.problem_model import SeatGrid


class TestFindViolations:
    def test_adjacent_members_are_reported(self, named_students):
        a, b, c, d, e = named_students
        grid = SeatGrid.from_occupants(1, 5, named_students)
        constraint = SeatingConstraint.separate([a.id, b.id])

        violations = find_violations(grid, [constraint])

        assert len(violations) == 1
        assert violations[0].constraint_id == constraint.id
        assert violations[0].student_ids == (a.id, b.id)
        assert violations[0].seat_indices == (0, 1)

    def test_distant_members_are_fine(self, named_students):
        a, b, c, d, e = named_students
        grid = SeatGrid.from_occupants(1, 5, named_students)
        assert find_violations(grid, [SeatingConstraint.separate([a.id, c.id])]) == []

    def test_diagonal_counts_as_adjacent(self, student_factory):
        students = student_factory(4)
        grid = SeatGrid.from_occupants(2, 2, students)
        constraint = SeatingConstraint.separate([students[0].id, students[3].id])
        assert len(find_violations(grid, [constraint])) == 1

    def test_unseated_and_stale_members_ignored(self, named_students):
        a = named_students[0]
        grid = SeatGrid.from_occupants(1, 5, named_students)
        constraint = SeatingConstraint.separate([a.id, uuid4(), uuid4()])
        assert find_violations(grid, [constraint]) == []

    def test_pair_in_two_constraints_counts_twice(self, named_students):
        a, b = named_students[:2]
        grid = SeatGrid.from_occupants(1, 5, named_students)
        constraints = [
            SeatingConstraint.separate([a.id, b.id]),
            SeatingConstraint.separate([b.id, a.id]),
        ]
        assert len(find_violations(grid, constraints)) == 2


class TestArrangementScore:
    def test_score_summary(self, student_factory):
        students = student_factory(4)
        grid = SeatGrid.from_occupants(2, 3, students)
        constraint = SeatingConstraint.separate([s.id for s in students])

        score = evaluate_arrangement(grid, [constraint])

        # seats 0,1,2,3 in a 2x3 grid: pairs (0,1),(0,3),(1,2),(1,3) are adjacent
        assert score.violation_count == 4
        assert score.violations_by_constraint == {str(constraint.id): 4}
        assert score.placed_students == 4
        assert score.capacity == 6
        assert not score.is_conflict_free
        assert score.to_dict()["violation_count"] == 4

    def test_empty_grid_is_conflict_free(self):
        score = evaluate_arrangement(SeatGrid.empty(2, 2), [])
        assert score.is_conflict_free
        assert score.placed_students == 0
