"""Pydantic models for the visual QueryModel.

A ``QueryModel`` is the structured description of one query under
construction in the visual builder.  It is mutated through
:class:`~visql.edit.editor.QueryEditor` and rendered by
:class:`~visql.compile.builder.QueryBuilder`.  Every model serialises with
``model_dump()`` and restores with ``model_validate()``, which is how saved
queries are persisted.
"""
from __future__ import annotations

import uuid
from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field

from visql.schema.expressions import (
    NULL_OPERATORS,
    ConditionOperator,
    JoinType,
    LogicalConnector,
    SortDirection,
    StatementKind,
)


def new_entry_id(prefix: str) -> str:
    """Return a fresh identity for a condition, join, order or saved query."""
    return f"{prefix}-{uuid.uuid4().hex}"


class Condition(BaseModel):
    """One WHERE / HAVING predicate.

    Attributes:
        id: Identity used by the editor to update or remove the entry.
        column: Qualified column reference; the entry renders only once set.
        operator: Comparison applied to ``column``.
        value: Free-form literal; ignored for null checks.
        logical_connector: Joins this condition to the previous one.  Not
            rendered for the first condition of a list.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(default_factory=lambda: new_entry_id("condition"))
    column: str = ""
    operator: ConditionOperator = ConditionOperator.EQUALS
    value: str = ""
    logical_connector: LogicalConnector = LogicalConnector.AND

    @property
    def takes_value(self) -> bool:
        """False for ``is_null`` / ``is_not_null``."""
        return self.operator not in NULL_OPERATORS


class Join(BaseModel):
    """One ``<type> JOIN <table> ON <left> = <right>`` entry.

    Attributes:
        id: Identity used by the editor.
        join_type: SQL join type.
        table: Name of the table being joined in.
        left_column: Qualified left-hand column of the equality.
        right_column: Qualified right-hand column of the equality.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(default_factory=lambda: new_entry_id("join"))
    join_type: JoinType = JoinType.INNER
    table: str = ""
    left_column: str = ""
    right_column: str = ""

    @property
    def is_complete(self) -> bool:
        """True once the table and both equality columns are filled in."""
        return bool(self.table and self.left_column and self.right_column)


class Order(BaseModel):
    """A single ORDER BY key."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(default_factory=lambda: new_entry_id("order"))
    column: str = ""
    direction: SortDirection = SortDirection.ASC


class Assignment(BaseModel):
    """A ``column = value`` pair for INSERT column lists and UPDATE SET.

    Attributes:
        column: Target column name.
        value: Literal to write; ``None`` writes SQL ``NULL``.
    """

    model_config = ConfigDict(extra="forbid")

    column: str
    value: str | None = None


_EntryT = TypeVar("_EntryT", Condition, Join, Order)


class QueryModel(BaseModel):
    """One query under construction.

    Attributes:
        id: Model identity (replaced by the store on save).
        name: Display name.
        statement_kind: SELECT / INSERT / UPDATE / DELETE.
        tables: Selected tables in insertion order; ``tables[0]`` is the
            FROM / target table.
        columns: Selected qualified columns; empty means ``*``.
        conditions: WHERE predicates.
        joins: Joins in order.
        order_by: Sort keys.
        group_by: GROUP BY column names.
        having: HAVING predicates (same shape as ``conditions``).
        assignments: Column values for INSERT / UPDATE.
        limit: Optional row limit.
        offset: Optional row offset; rendered only together with ``limit``.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = "new-query"
    name: str = "New Query"
    statement_kind: StatementKind = StatementKind.SELECT
    tables: list[str] = Field(default_factory=list)
    columns: list[str] = Field(default_factory=list)
    conditions: list[Condition] = Field(default_factory=list)
    joins: list[Join] = Field(default_factory=list)
    order_by: list[Order] = Field(default_factory=list)
    group_by: list[str] = Field(default_factory=list)
    having: list[Condition] = Field(default_factory=list)
    assignments: list[Assignment] = Field(default_factory=list)
    limit: int | None = None
    offset: int | None = None

    # ------------------------------------------------------------------
    # Domain methods
    # ------------------------------------------------------------------

    @property
    def primary_table(self) -> str | None:
        """The FROM / target table, or ``None`` when no table is selected."""
        return self.tables[0] if self.tables else None

    def find_condition(self, condition_id: str) -> Condition | None:
        """Returns the WHERE condition with ``condition_id``, or ``None``."""
        return _find(self.conditions, condition_id)

    def find_having(self, condition_id: str) -> Condition | None:
        """Returns the HAVING condition with ``condition_id``, or ``None``."""
        return _find(self.having, condition_id)

    def find_join(self, join_id: str) -> Join | None:
        """Returns the join with ``join_id``, or ``None``."""
        return _find(self.joins, join_id)

    def find_order(self, order_id: str) -> Order | None:
        """Returns the order entry with ``order_id``, or ``None``."""
        return _find(self.order_by, order_id)

    def collect_col_refs(self) -> list[str]:
        """Collect the column references rendered for the statement kind.

        SELECT uses every clause; UPDATE and DELETE only their WHERE
        conditions; INSERT none (its target columns are assignments).
        Empty (not yet filled) references are left out.
        """
        kind = self.statement_kind
        if kind is StatementKind.INSERT:
            return []
        if kind is not StatementKind.SELECT:
            return [c.column for c in self.conditions if c.column]

        refs: list[str] = list(self.columns)
        for join in self.joins:
            refs.extend([join.left_column, join.right_column])
        refs.extend(c.column for c in self.conditions)
        refs.extend(self.group_by)
        refs.extend(c.column for c in self.having)
        refs.extend(o.column for o in self.order_by)
        return [r for r in refs if r]


def _find(entries: list[_EntryT], entry_id: str) -> _EntryT | None:
    """Return the entry of ``entries`` whose id is ``entry_id``."""
    for entry in entries:
        if entry.id == entry_id:
            return entry
    return None
