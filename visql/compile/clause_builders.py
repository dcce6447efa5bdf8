"""Clause-level SQL builders.

Each class handles exactly one SQL clause and returns its text, or ``""``
when the model has nothing to render for that clause.

Classes
-------
SelectClauseBuilder   - ``SELECT <columns | *>``
JoinClauseBuilder     - ``<type> JOIN … ON … = …``
GroupByClauseBuilder  - ``GROUP BY …``
OrderByClauseBuilder  - ``ORDER BY … ASC|DESC``
LimitClauseBuilder    - ``LIMIT n [OFFSET m]``
AssignmentBuilder     - INSERT column / VALUES lists and UPDATE ``SET``
"""
from __future__ import annotations

from visql.compile.context import CompilationContext
from visql.compile.expression_builder import RuntimeContext
from visql.schema.query_model import Assignment, Join, Order, QueryModel

#: Placeholder text shown for INSERT before any assignment exists.
INSERT_TEMPLATE_COLUMNS = "(column1, column2)"
INSERT_TEMPLATE_VALUES = "(value1, value2)"
#: Placeholder text shown for UPDATE ... SET before any assignment exists.
UPDATE_TEMPLATE_SET = "column1 = value1"


class SelectClauseBuilder:
    """Builds the ``SELECT …`` clause."""

    def __init__(self, ctx: CompilationContext) -> None:
        self._ctx = ctx

    def build(self, model: QueryModel) -> str:
        if not model.columns:
            return "SELECT *"
        columns = ", ".join(self._ctx.column(c) for c in model.columns)
        return f"SELECT {columns}"


class JoinClauseBuilder:
    """Builds a single ``<type> JOIN … ON …`` fragment.

    Joins still being edited (no table or a missing side of the equality)
    are not rendered.
    """

    def __init__(self, ctx: CompilationContext) -> None:
        self._ctx = ctx

    def build(self, join: Join) -> str:
        if not join.is_complete:
            return ""
        left = self._ctx.column(join.left_column)
        right = self._ctx.column(join.right_column)
        table = self._ctx.table(join.table)
        return f"{join.join_type.value} JOIN {table} ON {left} = {right}"


class GroupByClauseBuilder:
    """Builds the ``GROUP BY`` clause."""

    def __init__(self, ctx: CompilationContext) -> None:
        self._ctx = ctx

    def build(self, columns: list[str]) -> str:
        exprs = [self._ctx.column(c) for c in columns if c]
        if not exprs:
            return ""
        return f"GROUP BY {', '.join(exprs)}"


class OrderByClauseBuilder:
    """Builds the ``ORDER BY`` clause, skipping keys with no column."""

    def __init__(self, ctx: CompilationContext) -> None:
        self._ctx = ctx

    def build(self, orders: list[Order]) -> str:
        order_parts = [
            f"{self._ctx.column(o.column)} {o.direction.value}"
            for o in orders
            if o.column
        ]
        if not order_parts:
            return ""
        return f"ORDER BY {', '.join(order_parts)}"


class LimitClauseBuilder:
    """Builds ``LIMIT n`` and, only together with a limit, `` OFFSET m``.

    Values are rendered as given; negative numbers are the caller's concern.
    """

    def build(self, limit: int | None, offset: int | None) -> str:
        if limit is None:
            return ""
        sql = f"LIMIT {int(limit)}"
        if offset is not None:
            sql += f" OFFSET {int(offset)}"
        return sql


class AssignmentBuilder:
    """Builds the column/value parts of INSERT and UPDATE statements.

    With no assignments the builder returns the fixed placeholder template
    the editor shows while the user has not picked any column yet.
    """

    def __init__(self, ctx: CompilationContext, runtime: RuntimeContext) -> None:
        self._ctx = ctx
        self._runtime = runtime

    def build_insert(self, assignments: list[Assignment]) -> tuple[str, str]:
        """Return ``("(c1, c2)", "(v1, v2)")`` for an INSERT statement."""
        if not assignments:
            return INSERT_TEMPLATE_COLUMNS, INSERT_TEMPLATE_VALUES
        columns = ", ".join(self._ctx.column(a.column) for a in assignments)
        values = ", ".join(self._literal(a) for a in assignments)
        return f"({columns})", f"({values})"

    def build_set(self, assignments: list[Assignment]) -> str:
        """Return ``"c1 = v1, c2 = v2"`` for an UPDATE statement."""
        if not assignments:
            return UPDATE_TEMPLATE_SET
        return ", ".join(
            f"{self._ctx.column(a.column)} = {self._literal(a)}" for a in assignments
        )

    def _literal(self, assignment: Assignment) -> str:
        return self._ctx.compiler.bind_literal(assignment.value, self._runtime)
