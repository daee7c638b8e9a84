# seating_engine/solver/__init__.py

"""
Arrangement engine: conflict graph, greedy construction, local repair and
reconciliation of suggested orderings.
"""

from .conflict_graph import build_conflict_graph, conflict_degrees
from .reconciliation import ReconciliationReport, reconcile_order
from .solver_manager import ArrangementEngine, ArrangementResult

__all__ = [
    "build_conflict_graph",
    "conflict_degrees",
    "ReconciliationReport",
    "reconcile_order",
    "ArrangementEngine",
    "ArrangementResult",
]
