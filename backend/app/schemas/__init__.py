# backend/app/schemas/__init__.py
"""Expose schema modules and primary Pydantic models for convenient imports."""

from . import seating

from .seating import (
    StudentRead,
    ConstraintRead,
    ScoreRead,
    ClassroomStateRead,
    ReconciliationReportRead,
    ArrangementRunRead,
    RosterLoadRequest,
    LayoutUpdate,
    SwapRequest,
    ConstraintCreate,
    SuggestedOrderRequest,
    ClassroomResponse,
    ConstraintCreatedResponse,
    OptimizeResponse,
    ArrangementResponse,
    ExportResponse,
    ViolationsResponse,
)

__all__ = [
    "seating",
    "StudentRead",
    "ConstraintRead",
    "ScoreRead",
    "ClassroomStateRead",
    "ReconciliationReportRead",
    "ArrangementRunRead",
    "RosterLoadRequest",
    "LayoutUpdate",
    "SwapRequest",
    "ConstraintCreate",
    "SuggestedOrderRequest",
    "ClassroomResponse",
    "ConstraintCreatedResponse",
    "OptimizeResponse",
    "ArrangementResponse",
    "ExportResponse",
    "ViolationsResponse",
]
