# seating_engine/__init__.py

"""
Seating Engine Package Initialization

Data model and arrangement engine for classroom seating plans: a row-major
seat grid, a student registry with continuous class numbering, "keep apart"
constraints, and a greedy + local-repair optimizer that minimizes the number
of constrained students seated next to each other.
"""

from .config import (
    SeatingEngineConfig,
    ArrangementConfig,
    GridBounds,
    SolverPhase,
    config,
    get_logger,
)

from .core import (
    RosterEntry,
    SeatGrid,
    Student,
    StudentGroup,
    StudentRegistry,
    ConstraintKind,
    ConstraintSet,
    SeatingConstraint,
    ArrangementScore,
    evaluate_arrangement,
)
from .solver import ArrangementEngine, ArrangementResult, reconcile_order

__version__ = "1.0.0"

# Package-level exports
__all__ = [
    # Configuration
    "SeatingEngineConfig",
    "ArrangementConfig",
    "GridBounds",
    "SolverPhase",
    "config",
    "get_logger",
    # Core components
    "RosterEntry",
    "SeatGrid",
    "Student",
    "StudentGroup",
    "StudentRegistry",
    "ConstraintKind",
    "ConstraintSet",
    "SeatingConstraint",
    "ArrangementScore",
    "evaluate_arrangement",
    # Engine
    "ArrangementEngine",
    "ArrangementResult",
    "reconcile_order",
]

# Initialize package-level logger
logger = get_logger("main")
logger.debug(f"Seating Engine v{__version__} initialized")
