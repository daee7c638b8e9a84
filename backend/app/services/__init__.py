# backend/app/services/__init__.py
"""
Services package for the application.

This package contains the business logic that owns the classroom state and
provides functionality to the API endpoints.
"""

from .roster import TextRosterParser, DEMO_GROUP_A, DEMO_GROUP_B
from .seating import ArrangementStatus, ClassroomState, SeatingService, ServiceOutcome

__all__ = [
    # Roster ingestion
    "TextRosterParser",
    "DEMO_GROUP_A",
    "DEMO_GROUP_B",
    # Seating
    "ArrangementStatus",
    "ClassroomState",
    "SeatingService",
    "ServiceOutcome",
]
