"""Custom exception hierarchy for visql.

All public errors inherit from VisqlError so callers can catch the base
class for any visql-specific failure.
"""
from __future__ import annotations

from typing import Any


class VisqlError(Exception):
    """Base exception for all visql errors."""


class ValidationError(VisqlError):
    """Raised when a QueryModel fails a structural or reference check.

    Args:
        message: Human-readable description.
        code: Machine-readable error code (e.g. SCHEMA_ERROR).
        details: Extra context for the caller to show next to the field.
    """

    def __init__(
        self,
        message: str,
        code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details: dict[str, Any] = details or {}

    def to_error_response(self) -> dict[str, Any]:
        """Returns a structured error response suitable for the console UI."""
        return {
            "error": self.code,
            "message": str(self),
            "details": self.details,
        }


class SchemaError(ValidationError):
    """Raised when the model references an unknown table or column."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code="SCHEMA_ERROR", details=details or {})


class InvalidJoinError(ValidationError):
    """Raised when a join is incomplete or targets a table not in the model."""

    def __init__(self, join_id: str, reason: str) -> None:
        super().__init__(
            f"Join '{join_id}' is invalid: {reason}",
            code="INVALID_JOIN",
            details={"join_id": join_id, "reason": reason},
        )


class IncompleteQueryError(ValidationError):
    """Raised when an entry of the model is missing a required field."""

    def __init__(self, message: str, clause: str, entry_id: str | None = None) -> None:
        super().__init__(
            message,
            code="INCOMPLETE_QUERY",
            details={"clause": clause, "entry_id": entry_id},
        )


class ProfileConfigError(VisqlError):
    """Raised when a DialectProfile names a target with no registered compiler.

    Args:
        message: Human-readable description.
        target: The offending target name.
        registered: Targets that are available.
    """

    def __init__(
        self,
        message: str,
        target: str | None = None,
        registered: list[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.target = target
        self.registered = registered or []


class CompilationError(VisqlError):
    """Raised when SQL compilation fails.

    Args:
        message: Human-readable description.
        clause: The clause being compiled when the error occurred.
    """

    def __init__(self, message: str, clause: str | None = None) -> None:
        super().__init__(message)
        self.clause = clause


class StoreError(VisqlError):
    """Raised when the saved query store cannot save or load a query."""


class QueryNotFoundError(StoreError):
    """Raised when a saved query id is unknown to the store."""

    def __init__(self, query_id: str) -> None:
        super().__init__(f"Saved query '{query_id}' not found.")
        self.query_id = query_id
