# backend/app/api/__init__.py
from .deps import get_seating_service

__all__ = ["get_seating_service"]
