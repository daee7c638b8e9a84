# seating_engine/core/exceptions.py
"""Exceptions raised by the seating engine.

Every exception carries a machine friendly ``code``, a suggested HTTP
``status_code`` and optional ``details``/``context`` so the service layer can
log it and translate it into an API response without inspecting messages.

Constraint infeasibility is deliberately absent: the arrangement engine
minimizes violations instead of failing.
"""
from __future__ import annotations

from typing import Optional, Any, Dict
from datetime import datetime, timezone


class SeatingEngineError(Exception):
    """Base engine exception with structured metadata.

    Attributes
    ----------
    message
        Human readable message.
    code
        Machine friendly error code (snake_case).
    status_code
        Suggested HTTP status code for API responses.
    details
        Arbitrary extra data useful for debugging or UX.
    context
        Optional lightweight context dict (indices, counts, ids).
    """

    code: str = "seating_engine_error"
    status_code: int = 500

    def __init__(
        self,
        message: str = "A seating engine error occurred",
        *,
        details: Optional[Any] = None,
        cause: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details
        self.cause = cause
        self.context = context or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        base = f"{self.__class__.__name__}({self.code}): {self.message}"
        if self.context:
            base += f" | context={self.context}"
        return base

    def to_dict(self) -> Dict[str, Any]:
        """Return a serializable representation suitable for API responses."""
        return {
            "error": {
                "type": self.__class__.__name__,
                "code": self.code,
                "message": self.message,
                "status_code": self.status_code,
                "details": self.details,
                "context": self.context,
                "timestamp": self.timestamp,
            }
        }

    def with_context(self, **ctx: Any) -> "SeatingEngineError":
        """Return self after extending the context dict."""
        self.context.update({k: v for k, v in ctx.items() if v is not None})
        return self


class InvalidInputError(SeatingEngineError):
    """Raised when the engine receives input it cannot seat, e.g. more
    students than seats. Callers must resize the grid first."""

    code = "invalid_input"
    status_code = 422


class SeatIndexOutOfRangeError(SeatingEngineError, IndexError):
    """Raised when a seat index lies outside ``[0, capacity)``."""

    code = "index_out_of_range"
    status_code = 400

    def __init__(
        self,
        index: int,
        capacity: int,
        message: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        msg = message or f"Seat index {index} is outside [0, {capacity})"
        super().__init__(msg, **kwargs)
        self.index = index
        self.capacity = capacity
        self.context.setdefault("index", index)
        self.context.setdefault("capacity", capacity)


class InvalidConstraintError(SeatingEngineError, ValueError):
    """Raised at the constraint set boundary for malformed constraints."""

    code = "invalid_constraint"
    status_code = 422


class ArrangementCancelledError(SeatingEngineError):
    """Raised when an arrangement run observes its cancel event."""

    code = "arrangement_cancelled"
    status_code = 409


__all__ = [
    "SeatingEngineError",
    "InvalidInputError",
    "SeatIndexOutOfRangeError",
    "InvalidConstraintError",
    "ArrangementCancelledError",
]
