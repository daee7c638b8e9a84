# backend/app/__init__.py
"""
Classroom Seating Planner service: settings, exceptions, roster ingestion,
the seating service and its HTTP API.
"""

from .core.exceptions import AppError, RosterParseError, OptimizationError
from .services import roster, seating
from .services.seating import SeatingService

__all__ = [
    "AppError",
    "RosterParseError",
    "OptimizationError",
    "roster",
    "seating",
    "SeatingService",
]
