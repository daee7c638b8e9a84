# seating_engine/tests/unit/test_reconciliation.py

"""
Tests for turning an ordered id suggestion into a complete grid.
"""

import logging
from uuid import uuid4

from seating_engine.solver.reconciliation import reconcile_order


class TestReconcileOrder:
    def test_clean_suggestion_is_followed(self, named_students):
        a, b, c, d, e = named_students
        order = [e.id, d.id, c.id, b.id, a.id]

        grid, report = reconcile_order(named_students, order, 2, 3)

        assert report.is_clean
        assert grid.active_occupants() == [e, d, c, b, a]
        assert grid.seats[5] is None

    def test_string_ids_are_accepted(self, named_students):
        order = [str(s.id) for s in reversed(named_students)]
        grid, report = reconcile_order(named_students, order, 1, 5)
        assert report.is_clean
        assert grid.active_occupants() == list(reversed(named_students))

    def test_unknown_and_duplicate_ids_are_skipped(self, named_students):
        a, b, c, d, e = named_students
        stranger = uuid4()
        order = [b.id, stranger, b.id, "not-an-id", a.id]

        grid, report = reconcile_order(named_students, order, 2, 3)

        assert report.unknown_ids == [str(stranger), "not-an-id"]
        assert report.duplicate_ids == [str(b.id)]
        assert not report.is_clean
        # Accepted ids first, then the left-out students in original order
        assert grid.active_occupants() == [b, a, c, d, e]

    def test_missing_students_are_appended(self, named_students):
        a, b, c, d, e = named_students
        grid, report = reconcile_order(named_students, [d.id], 1, 5)
        assert report.missing_ids == [str(a.id), str(b.id), str(c.id), str(e.id)]
        assert grid.active_occupants() == [d, a, b, c, e]

    def test_empty_suggestion_keeps_original_order(self, named_students):
        grid, report = reconcile_order(named_students, [], 3, 2)
        assert grid.active_occupants() == named_students
        assert len(report.missing_ids) == 5

    def test_result_has_no_gaps(self, named_students):
        grid, _ = reconcile_order(named_students, [uuid4(), named_students[4].id], 3, 3)
        assert all(s is not None for s in grid.seats[:5])
        assert all(s is None for s in grid.seats[5:])

    def test_operation_is_tagged_on_log_record(self, named_students, caplog):
        with caplog.at_level(logging.INFO, logger="seating_engine.solver.reconciliation"):
            reconcile_order(named_students, [], 1, 5)

        records = [r for r in caplog.records if r.getMessage().startswith("Operation")]
        assert records
        assert records[-1].operation == "reconcile_order"
