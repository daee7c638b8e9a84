# seating_engine/tests/unit/test_problem_model.py

"""
Tests for the student registry and the seat grid.
"""

import random
from collections import Counter
from uuid import uuid4

import pytest

from seating_engine.core.exceptions import InvalidInputError, SeatIndexOutOfRangeError
from seating_engine.core.problem_model import (
    RosterEntry,
    SeatGrid,
    Student,
    StudentGroup,
    StudentRegistry,
)


class TestStudentRegistry:
    """Tests for class-number continuity and lookups"""

    def test_continuous_class_numbers_across_groups(self):
        group_a = [RosterEntry(str(i), f"甲{i}", f"A{i}") for i in range(1, 4)]
        group_b = [RosterEntry("99", f"乙{i}", f"B{i}") for i in range(1, 3)]

        registry = StudentRegistry.from_groups(group_a, group_b)
        students = list(registry)

        assert [s.class_no for s in students] == [1, 2, 3, 4, 5]
        assert [s.name_foreign for s in students] == ["A1", "A2", "A3", "B1", "B2"]
        assert [s.group for s in students[:3]] == [StudentGroup.GROUP_A] * 3
        assert [s.group for s in students[3:]] == [StudentGroup.GROUP_B] * 2

    def test_raw_class_tokens_do_not_override_numbering(self):
        registry = StudentRegistry.from_groups(
            [RosterEntry("7", "陳", "Chan")], [RosterEntry("1", "李", "Lee")]
        )
        assert [s.class_no for s in registry] == [1, 2]

    def test_empty_group_a_numbers_group_b_from_one(self):
        registry = StudentRegistry.from_groups([], [RosterEntry("x", "李", "Lee")])
        assert [s.class_no for s in registry] == [1]
        assert registry.group_sizes() == {
            StudentGroup.GROUP_A: 0,
            StudentGroup.GROUP_B: 1,
        }

    def test_ids_are_unique_and_lookups_work(self, registry):
        ids = registry.ids()
        assert len(set(ids)) == len(ids) == 4
        for student in registry:
            assert registry.get(student.id) is student
            assert student.id in registry
        assert registry.get(uuid4()) is None

    def test_duplicate_ids_rejected(self, student_factory):
        s = student_factory(1)[0]
        with pytest.raises(InvalidInputError):
            StudentRegistry((s, s))

    def test_display_class_no_override(self):
        s = Student(uuid4(), "陳", "Chan", 3, StudentGroup.GROUP_A)
        assert s.display_class_no == "3"
        labelled = Student(uuid4(), "陳", "Chan", 3, StudentGroup.GROUP_A, "3A")
        assert labelled.display_class_no == "3A"


class TestSeatGridGeometry:
    def test_length_matches_dimensions(self):
        for rows, columns in [(1, 1), (2, 3), (20, 12)]:
            assert len(SeatGrid.empty(rows, columns)) == rows * columns

    def test_position_is_row_major(self):
        grid = SeatGrid.empty(3, 4)
        assert grid.position(0) == (0, 0)
        assert grid.position(5) == (1, 1)
        assert grid.position(11) == (2, 3)
        assert grid.index_of(2, 1) == 9

    def test_adjacency_is_chebyshev_one(self):
        grid = SeatGrid.empty(3, 3)
        assert grid.are_adjacent(4, 0)  # diagonal
        assert grid.are_adjacent(4, 5)
        assert not grid.are_adjacent(0, 2)
        assert not grid.are_adjacent(4, 4)
        assert grid.neighbours(4) == [0, 1, 2, 3, 5, 6, 7, 8]
        assert grid.neighbours(0) == [1, 3, 4]

    def test_no_wraparound(self):
        grid = SeatGrid.empty(2, 3)
        # End of row 0 and start of row 1 are consecutive indices but not neighbours
        assert not grid.are_adjacent(2, 3)
        assert 3 not in grid.neighbours(2)

    def test_invalid_dimensions(self):
        with pytest.raises(InvalidInputError):
            SeatGrid.empty(0, 3)

    def test_from_occupants_rejects_overflow(self, student_factory):
        with pytest.raises(InvalidInputError):
            SeatGrid.from_occupants(1, 2, student_factory(3))


class TestSeatGridTransitions:
    def test_resize_preserves_prefix(self, student_factory):
        students = student_factory(6)
        grid = SeatGrid.from_occupants(2, 3, students)

        smaller = grid.resize(1, 4)
        assert len(smaller) == 4
        assert list(smaller.seats) == students[:4]

        larger = grid.resize(3, 3)
        assert len(larger) == 9
        assert list(larger.seats[:6]) == students
        assert list(larger.seats[6:]) == [None, None, None]

    def test_resize_same_capacity_reshapes(self, student_factory):
        grid = SeatGrid.from_occupants(2, 3, student_factory(6))
        reshaped = grid.resize(3, 2)
        assert (reshaped.rows, reshaped.columns) == (3, 2)
        assert reshaped.seats == grid.seats

    def test_resize_does_not_mutate_original(self, student_factory):
        grid = SeatGrid.from_occupants(2, 2, student_factory(4))
        grid.resize(1, 1)
        assert grid.occupied_count == 4

    def test_swap_is_an_involution(self, student_factory):
        grid = SeatGrid(2, 2, student_factory(3) + [None])
        for i in range(4):
            for j in range(4):
                assert grid.swap(i, j).swap(i, j) == grid

    def test_swap_exchanges_contents(self, student_factory):
        students = student_factory(2)
        grid = SeatGrid(1, 3, [students[0], None, students[1]])
        swapped = grid.swap(0, 1)
        assert swapped[0] is None
        assert swapped[1] is students[0]
        assert grid.swap(1, 1) == grid

    @pytest.mark.parametrize("i,j", [(-1, 0), (0, 4), (4, 4)])
    def test_swap_out_of_range(self, student_factory, i, j):
        grid = SeatGrid.from_occupants(2, 2, student_factory(2))
        with pytest.raises(SeatIndexOutOfRangeError) as exc_info:
            grid.swap(i, j)
        assert exc_info.value.capacity == 4
        assert isinstance(exc_info.value, IndexError)

    def test_shuffle_is_a_bijection_and_collapses_empties(self, student_factory):
        students = student_factory(4)
        grid = SeatGrid(2, 3, [None, students[0], students[1], None, students[2], students[3]])

        shuffled = grid.shuffle(random.Random(7))

        assert len(shuffled) == 6
        assert shuffled.occupied_count == 4
        assert Counter(s.id for s in shuffled.active_occupants()) == Counter(
            s.id for s in students
        )
        assert all(s is not None for s in shuffled.seats[:4])
        assert shuffled.seats[4:] == (None, None)

    def test_active_occupants_in_index_order(self, student_factory):
        a, b = student_factory(2)
        grid = SeatGrid(1, 4, [None, b, None, a])
        assert grid.active_occupants() == [b, a]
        assert grid.seat_of(a.id) == 3
        assert grid.seat_of(uuid4()) is None

    def test_export_uses_id_strings(self, student_factory):
        a = student_factory(1)[0]
        grid = SeatGrid(1, 2, [None, a])
        assert grid.to_export() == [None, str(a.id)]
