"""SQLAlchemy-backed execution invoker.

Install the optional dependency before using this module::

    pip install "visql[sqlalchemy]"

The executor runs SQL compiled with a ``:name`` placeholder style (the
``sqlite`` target), which is what :func:`sqlalchemy.text` binds on every
backend::

    from sqlalchemy import create_engine
    from visql import DialectProfile, QuerySession
    from visql.schema.converters import SQLAlchemyCatalog
    from visql.session.executor import SQLAlchemyExecutor

    engine = create_engine("sqlite:///console.db")
    session = QuerySession(
        catalog=SQLAlchemyCatalog(engine),
        executor=SQLAlchemyExecutor(engine),
        profile=DialectProfile(target="sqlite"),
    )
"""
from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from visql.session.interfaces import ExecutionResult

if TYPE_CHECKING:
    from sqlalchemy import Engine

logger = logging.getLogger(__name__)


class SQLAlchemyExecutor:
    """Executes one statement per call inside its own transaction.

    Driver errors are not raised: their message is returned in
    :attr:`ExecutionResult.error` and the transaction is rolled back.

    Args:
        engine: Engine to execute against.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def execute(self, sql: str, params: dict[str, Any]) -> ExecutionResult:
        from sqlalchemy import text
        from sqlalchemy.exc import SQLAlchemyError

        started = time.perf_counter()
        try:
            with self._engine.begin() as conn:
                result = conn.execute(text(sql), params)
                if result.returns_rows:
                    columns = list(result.keys())
                    rows = [dict(row) for row in result.mappings()]
                    affected = None
                else:
                    columns, rows = [], []
                    affected = result.rowcount
        except SQLAlchemyError as exc:
            elapsed = _elapsed_ms(started)
            logger.warning("Statement failed after %.1f ms: %s", elapsed, exc)
            message = str(getattr(exc, "orig", None) or exc)
            return ExecutionResult(execution_time_ms=elapsed, error=message)

        elapsed = _elapsed_ms(started)
        logger.info("Statement returned %d rows in %.1f ms", len(rows), elapsed)
        return ExecutionResult(
            columns=columns,
            rows=rows,
            execution_time_ms=elapsed,
            affected_rows=affected,
        )


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000.0
