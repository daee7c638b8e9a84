# backend/__init__.py

"""
Backend package for the Classroom Seating Planner.
Exposes the core service components.
"""

from .app import (
    AppError,
    RosterParseError,
    OptimizationError,
    SeatingService,
)

from .app.config import (
    Settings,
    get_settings,
    validate_settings,
    setup_logging,
    DevelopmentSettings,
    ProductionSettings,
    TestingSettings,
)

__all__ = [
    "AppError",
    "RosterParseError",
    "OptimizationError",
    "SeatingService",
    "Settings",
    "get_settings",
    "validate_settings",
    "setup_logging",
    "DevelopmentSettings",
    "ProductionSettings",
    "TestingSettings",
]
