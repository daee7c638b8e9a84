# backend/app/core/__init__.py

from ..config import get_settings
from .exceptions import (
    AppError,
    RosterParseError,
    OptimizationError,
)


__all__ = [
    "get_settings",  # Export the function, not a settings instance
    "AppError",
    "RosterParseError",
    "OptimizationError",
]
