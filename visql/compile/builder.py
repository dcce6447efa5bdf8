"""Core QueryModel → SQL compilation logic.

``QueryBuilder`` is the top-level orchestrator.  It wires together the
clause-level sub-builders, then dispatches on the model's statement kind.
All dialect-specific behaviour is delegated to the injected
``SQLCompiler``; clause rendering is delegated to the sub-builders.

Sub-builder hierarchy
---------------------
QueryBuilder
  ├── ConditionBuilder      (expression_builder.py)
  ├── SelectClauseBuilder   (clause_builders.py)
  ├── JoinClauseBuilder     (clause_builders.py)
  ├── GroupByClauseBuilder  (clause_builders.py)
  ├── OrderByClauseBuilder  (clause_builders.py)
  ├── LimitClauseBuilder    (clause_builders.py)
  └── AssignmentBuilder     (clause_builders.py)

Clause order
------------
SELECT statements always render in the fixed order SELECT, FROM, JOIN*,
WHERE, GROUP BY, HAVING, ORDER BY, LIMIT/OFFSET, regardless of the order in
which the model was edited.  UPDATE and DELETE reuse the WHERE rendering.

A single :class:`~visql.compile.expression_builder.RuntimeContext` is
created per ``build()`` call, so the same model always produces the same
text and the same parameter names.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from visql.compile.base import CompiledSQL, SQLCompiler
from visql.compile.clause_builders import (
    AssignmentBuilder,
    GroupByClauseBuilder,
    JoinClauseBuilder,
    LimitClauseBuilder,
    OrderByClauseBuilder,
    SelectClauseBuilder,
)
from visql.compile.context import CompilationContext
from visql.compile.expression_builder import ConditionBuilder, RuntimeContext
from visql.errors import CompilationError
from visql.schema.dialect import DialectProfile
from visql.schema.expressions import StatementKind
from visql.schema.query_model import QueryModel

logger = logging.getLogger(__name__)


class QueryBuilder:
    """Compiles a QueryModel to SQL text.

    Args:
        compiler: Dialect-specific compiler instance.
        profile: Layout options; defaults to newline-separated clauses.
    """

    def __init__(
        self,
        compiler: SQLCompiler,
        profile: DialectProfile | None = None,
    ) -> None:
        profile = profile or DialectProfile()
        self._ctx = CompilationContext(compiler=compiler, profile=profile)
        self._statements: dict[StatementKind, Callable[[QueryModel, dict], list[str]]] = {
            StatementKind.SELECT: self._build_select,
            StatementKind.INSERT: self._build_insert,
            StatementKind.UPDATE: self._build_update,
            StatementKind.DELETE: self._build_delete,
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build(self, model: QueryModel) -> CompiledSQL:
        """Compile ``model`` to SQL.

        Args:
            model: The query model to render.

        Returns:
            :class:`~visql.compile.base.CompiledSQL`.  Its ``sql`` is empty
            when the model has no table.

        Raises:
            CompilationError: If the statement kind has no renderer, or a
                parameterized INSERT / UPDATE has no assignments to bind.
        """
        compiler = self._ctx.compiler
        if not model.tables:
            return CompiledSQL(
                sql="",
                dialect=compiler.dialect_name,
                statement_kind=model.statement_kind,
            )

        render = self._statements.get(model.statement_kind)
        if render is None:
            raise CompilationError(
                f"No renderer for statement kind '{model.statement_kind}'.",
                clause="statement",
            )

        runtime = RuntimeContext()
        parts = render(model, self._make_sub_builders(runtime))
        sql = self._ctx.profile.clause_separator.join(parts)
        logger.debug(
            "Compiled %s for %s (%d params)",
            model.statement_kind.value,
            compiler.dialect_name,
            len(runtime.params),
        )
        return CompiledSQL(
            sql=sql,
            params=runtime.params,
            dialect=compiler.dialect_name,
            statement_kind=model.statement_kind,
        )

    # ------------------------------------------------------------------
    # Statement renderers
    # ------------------------------------------------------------------

    def _build_select(self, model: QueryModel, sub_builders: dict) -> list[str]:
        parts: list[str] = [sub_builders["select"].build(model)]
        parts.append(f"FROM {self._ctx.table(model.tables[0])}")

        for join in model.joins:
            parts.append(sub_builders["join"].build(join))

        parts.append(self._where(model, sub_builders))
        parts.append(sub_builders["group_by"].build(model.group_by))

        having = sub_builders["cond"].build_list(model.having)
        if having:
            parts.append(f"HAVING {having}")

        parts.append(sub_builders["order_by"].build(model.order_by))
        parts.append(sub_builders["limit"].build(model.limit, model.offset))
        return [p for p in parts if p]

    def _build_insert(self, model: QueryModel, sub_builders: dict) -> list[str]:
        self._require_assignments(model)
        columns, values = sub_builders["assign"].build_insert(model.assignments)
        return [
            f"INSERT INTO {self._ctx.table(model.tables[0])} {columns}",
            f"VALUES {values}",
        ]

    def _build_update(self, model: QueryModel, sub_builders: dict) -> list[str]:
        self._require_assignments(model)
        parts = [
            f"UPDATE {self._ctx.table(model.tables[0])}",
            f"SET {sub_builders['assign'].build_set(model.assignments)}",
            self._where(model, sub_builders),
        ]
        return [p for p in parts if p]

    def _build_delete(self, model: QueryModel, sub_builders: dict) -> list[str]:
        parts = [
            f"DELETE FROM {self._ctx.table(model.tables[0])}",
            self._where(model, sub_builders),
        ]
        return [p for p in parts if p]

    # ------------------------------------------------------------------
    # Shared pieces
    # ------------------------------------------------------------------

    @staticmethod
    def _where(model: QueryModel, sub_builders: dict) -> str:
        predicate = sub_builders["cond"].build_list(model.conditions)
        return f"WHERE {predicate}" if predicate else ""

    def _require_assignments(self, model: QueryModel) -> None:
        # The column1/value1 template is only meaningful as a preview.
        if model.assignments or self._ctx.compiler.inlines_literals:
            return
        raise CompilationError(
            f"{model.statement_kind.value} needs at least one column assignment.",
            clause="SET" if model.statement_kind is StatementKind.UPDATE else "VALUES",
        )

    # ------------------------------------------------------------------
    # Sub-builder wiring
    # ------------------------------------------------------------------

    def _make_sub_builders(self, runtime: RuntimeContext) -> dict:
        """Construct the sub-builder set for one compilation run."""
        return {
            "cond": ConditionBuilder(self._ctx, runtime),
            "select": SelectClauseBuilder(self._ctx),
            "join": JoinClauseBuilder(self._ctx),
            "group_by": GroupByClauseBuilder(self._ctx),
            "order_by": OrderByClauseBuilder(self._ctx),
            "limit": LimitClauseBuilder(),
            "assign": AssignmentBuilder(self._ctx, runtime),
        }
