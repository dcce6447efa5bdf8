"""Condition SQL compiler.

``ConditionBuilder`` renders WHERE and HAVING condition lists.  It receives
a :class:`~visql.compile.context.CompilationContext` (static config) and a
:class:`RuntimeContext` (per-statement parameter state).

The operator mapping is an explicit table keyed by
:class:`~visql.schema.expressions.ConditionOperator`.  There is no fallback
branch: an operator missing from every table raises
:class:`~visql.errors.CompilationError` instead of rendering as ``=``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from visql.compile.context import CompilationContext
from visql.errors import CompilationError
from visql.schema.expressions import ConditionOperator
from visql.schema.query_model import Condition


# ---------------------------------------------------------------------------
# Runtime parameter accumulator (shared across all sub-builders in one run)
# ---------------------------------------------------------------------------


@dataclass
class RuntimeContext:
    """Accumulates named parameters during a single compilation run.

    A single instance is threaded through every sub-builder so that
    placeholder names are unique for the entire statement.
    """

    params: dict[str, Any] = field(default_factory=dict)
    _counter: int = 0

    def add_value(self, value: Any) -> str:
        """Store a literal value and return its placeholder name."""
        name = f"param_{self._counter}"
        self._counter += 1
        self.params[name] = value
        return name


# ---------------------------------------------------------------------------
# Operator tables
# ---------------------------------------------------------------------------

_COMPARISON: dict[ConditionOperator, str] = {
    ConditionOperator.EQUALS: "=",
    ConditionOperator.NOT_EQUALS: "!=",
    ConditionOperator.GREATER_THAN: ">",
    ConditionOperator.LESS_THAN: "<",
}

#: ``(prefix, suffix)`` wrapped around the value to build the LIKE pattern.
_PATTERN: dict[ConditionOperator, tuple[str, str]] = {
    ConditionOperator.CONTAINS: ("%", "%"),
    ConditionOperator.STARTS_WITH: ("", "%"),
    ConditionOperator.ENDS_WITH: ("%", ""),
}

_NULL_CHECK: dict[ConditionOperator, str] = {
    ConditionOperator.IS_NULL: "IS NULL",
    ConditionOperator.IS_NOT_NULL: "IS NOT NULL",
}

#: Every operator the builder knows how to render.
RENDERED_OPERATORS: frozenset[ConditionOperator] = frozenset(
    [*_COMPARISON, *_PATTERN, *_NULL_CHECK]
)


# ---------------------------------------------------------------------------
# Condition builder
# ---------------------------------------------------------------------------


class ConditionBuilder:
    """Compiles :class:`~visql.schema.query_model.Condition` lists to SQL.

    Args:
        ctx: Static compilation context.
        runtime: Shared parameter accumulator.
    """

    def __init__(self, ctx: CompilationContext, runtime: RuntimeContext) -> None:
        self._ctx = ctx
        self._runtime = runtime

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build_list(self, conditions: list[Condition]) -> str:
        """Render a condition list joined by the conditions' connectors.

        The connector of entry *i* glues entry *i-1* to entry *i*.  Entries
        with no column yet are skipped, and the first rendered entry never
        emits its connector.

        Returns:
            The predicate text, or ``""`` when nothing renders.
        """
        sql = ""
        for condition in conditions:
            if not condition.column:
                continue
            fragment = self.build(condition)
            if sql:
                sql += f" {condition.logical_connector.value} {fragment}"
            else:
                sql = fragment
        return sql

    def build(self, condition: Condition) -> str:
        """Compile a single condition to a SQL fragment."""
        op = condition.operator
        col = self._ctx.column(condition.column)

        if op in _COMPARISON:
            return f"{col} {_COMPARISON[op]} {self._literal(condition.value)}"

        if op in _PATTERN:
            prefix, suffix = _PATTERN[op]
            pattern = self._literal(f"{prefix}{condition.value}{suffix}")
            return f"{col} LIKE {pattern}"

        if op in _NULL_CHECK:
            return f"{col} {_NULL_CHECK[op]}"

        raise CompilationError(
            f"No rendering defined for operator '{op}'.", clause="WHERE"
        )

    def _literal(self, value: Any) -> str:
        return self._ctx.compiler.bind_literal(value, self._runtime)
