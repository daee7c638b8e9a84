# app/core/exceptions.py
"""Application-level exceptions used across services.

This module provides structured exceptions that carry metadata useful for
service-level error handling, logging, and HTTP translation in routers.

Design goals:
- Each exception is serializable via ``to_dict`` for API responses and logs.
- Exceptions include an explicit ``code`` and ``status_code`` for consistent
  error handling across the application.
- Provide helpers to attach contextual data and to wrap underlying exceptions.

Engine failures (``seating_engine.core.exceptions``) share the same ``to_dict``
shape, so both hierarchies render identically in API responses.
"""
from __future__ import annotations

from typing import Optional, Any, Dict
from datetime import datetime, timezone


class AppError(Exception):
    """Base application exception with structured metadata.

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
    timestamp
        UTC ISO timestamp when the exception was created.
    cause
        Optional underlying exception instance or string.
    context
        Optional lightweight context dict (ids, phase names, counts).
    """

    code: str = "app_error"
    status_code: int = 500

    def __init__(
        self,
        message: str = "An application error occurred",
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
        if self.details is not None:
            base += f" | details={self.details}"
        if self.cause is not None:
            base += f" | cause={repr(self.cause)}"
        return base

    def to_dict(self) -> Dict[str, Any]:
        """Return a serializable representation suitable for API responses.

        Note: Do not include large or sensitive objects inside ``details`` or
        ``cause`` when sending to untrusted clients.
        """
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

    def with_context(self, **ctx: Any) -> "AppError":
        """Return self after extending the context dict. Useful for chaining.

        Example:
        raise err.with_context(group="group_a")
        """
        self.context.update({k: v for k, v in ctx.items() if v is not None})
        return self


class RosterParseError(AppError):
    """Raised when roster text cannot be turned into entries.

    A single malformed line rejects the whole text; the offending group and
    1-based line number are kept so the client can point at it.
    """

    code = "roster_parse_error"
    status_code = 422

    def __init__(
        self,
        message: str = "Roster text could not be parsed",
        *,
        group: Optional[str] = None,
        line_number: Optional[int] = None,
        line: Optional[str] = None,
        details: Optional[Any] = None,
        cause: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details=details, cause=cause, context=context)
        self.group = group
        self.line_number = line_number
        if group:
            self.context.setdefault("group", group)
        if line_number is not None:
            self.context.setdefault("line_number", line_number)
        if line is not None:
            self.context.setdefault("line", line)

    def with_context(self, **ctx: Any) -> "RosterParseError":
        if ctx.get("group") is not None:
            self.group = ctx["group"]
        super().with_context(**ctx)
        return self


class OptimizationError(AppError):
    """Raised when an optimize request cannot produce an arrangement.

    Covers timeouts and unexpected engine failures. The prior seating is
    always left intact.
    """

    code = "optimization_error"
    status_code = 503

    def __init__(
        self,
        message: str = "Seat optimization failed",
        *,
        phase: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        details: Optional[Any] = None,
        cause: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details=details, cause=cause, context=context)
        if phase:
            self.context.setdefault("phase", phase)
        if timeout_seconds is not None:
            self.context.setdefault("timeout_seconds", timeout_seconds)


__all__ = [
    "AppError",
    "RosterParseError",
    "OptimizationError",
]
