# seating_engine/utils/__init__.py

"""
Utilities package for the seating engine.
"""

from .logging import PhaseTimings, phase_timer, log_operation

__all__ = [
    "PhaseTimings",
    "phase_timer",
    "log_operation",
]
