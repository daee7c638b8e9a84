# backend/app/services/seating/__init__.py
"""Classroom state and the service that owns it."""

from .state import ArrangementStatus, ClassroomState
from .seating_service import SeatingService, ServiceOutcome

__all__ = ["ArrangementStatus", "ClassroomState", "SeatingService", "ServiceOutcome"]
