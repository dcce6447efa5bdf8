"""Contracts for the services an editing session talks to.

The execution engine and the saved-query store live outside visql.  A
session receives one implementation of each at construction; visql ships
:class:`~visql.session.executor.SQLAlchemyExecutor` and
:class:`~visql.session.store.InMemoryQueryStore` as ready-made adapters.
"""
from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from visql.schema.query_model import QueryModel


class ExecutionResult(BaseModel):
    """What the execution engine returns for one statement.

    The session passes this through untouched; in particular ``error`` is
    the engine's message, verbatim.

    Attributes:
        columns: Result column names, in order.
        rows: One mapping per row, keyed by column name.
        execution_time_ms: Wall-clock duration of the call.
        affected_rows: Row count for INSERT / UPDATE / DELETE, when known.
        error: Engine error message, or ``None`` on success.
    """

    model_config = ConfigDict(extra="forbid")

    columns: list[str] = Field(default_factory=list)
    rows: list[dict[str, Any]] = Field(default_factory=list)
    execution_time_ms: float = 0.0
    affected_rows: int | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """True when the engine reported no error."""
        return self.error is None


@runtime_checkable
class ExecutionInvoker(Protocol):
    """Runs generated SQL against the database."""

    def execute(self, sql: str, params: dict[str, Any]) -> ExecutionResult:
        ...


@runtime_checkable
class SavedQueryStore(Protocol):
    """Persists named query models for reuse.

    Implementations raise :class:`~visql.errors.StoreError` (or
    :class:`~visql.errors.QueryNotFoundError`) on failure.
    """

    def save(self, model: QueryModel) -> str:
        ...

    def list(self) -> list[QueryModel]:
        ...

    def load(self, query_id: str) -> QueryModel:
        ...
