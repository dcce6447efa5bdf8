"""Atomic mutations of a QueryModel.

``QueryEditor`` is the only code that changes a
:class:`~visql.schema.query_model.QueryModel`.  Every method applies one user
action from the visual builder and keeps the model's invariants:

* ``tables`` and ``columns`` never hold duplicates.
* Removing a table removes the columns qualified by it and the joins that
  target it.
* Updates and removals addressed to an unknown id are no-ops.

No method performs I/O.  Limits and offsets are stored as given; negative
values are the caller's concern.

Example::

    editor = QueryEditor()
    editor.add_table("users").add_column("users.id").set_limit(10)
    cid = editor.add_condition()
    editor.update_condition(cid, column="users.role", value="admin")
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import BaseModel

from visql.schema.column_reference import ColumnReference
from visql.schema.expressions import StatementKind
from visql.schema.query_model import Assignment, Condition, Join, Order, QueryModel

logger = logging.getLogger(__name__)

_ModelT = TypeVar("_ModelT", bound=BaseModel)


class QueryEditor:
    """Applies clause-level edits to a :class:`QueryModel`.

    Args:
        model: The model to edit in place; a fresh empty model when omitted.
    """

    def __init__(self, model: QueryModel | None = None) -> None:
        self._model = model if model is not None else QueryModel()

    @property
    def model(self) -> QueryModel:
        """The model being edited."""
        return self._model

    # ------------------------------------------------------------------
    # Statement-level settings
    # ------------------------------------------------------------------

    def set_statement_kind(self, kind: StatementKind | str) -> QueryEditor:
        self._model.statement_kind = StatementKind(kind)
        return self

    def rename(self, name: str) -> QueryEditor:
        self._model.name = name
        return self

    def set_limit(self, limit: int | None) -> QueryEditor:
        """Set the row limit; ``None`` clears it."""
        self._model.limit = limit
        return self

    def set_offset(self, offset: int | None) -> QueryEditor:
        """Set the row offset; ``None`` clears it.

        The offset only renders while a limit is also set.
        """
        self._model.offset = offset
        return self

    def reset(self) -> QueryEditor:
        """Clear every clause, keeping the model's id and name."""
        self._model = QueryModel(id=self._model.id, name=self._model.name)
        return self

    # ------------------------------------------------------------------
    # Tables and columns
    # ------------------------------------------------------------------

    def add_table(self, name: str) -> QueryEditor:
        if name not in self._model.tables:
            self._model.tables.append(name)
            logger.debug("Added table %s", name)
        return self

    def remove_table(self, name: str) -> QueryEditor:
        """Remove ``name`` with its qualified columns and the joins targeting it."""
        model = self._model
        model.tables = [t for t in model.tables if t != name]
        model.columns = [
            c for c in model.columns if not ColumnReference.parse(c).belongs_to(name)
        ]
        model.joins = [j for j in model.joins if j.table != name]
        logger.debug("Removed table %s", name)
        return self

    def add_column(self, ref: str) -> QueryEditor:
        if ref not in self._model.columns:
            self._model.columns.append(ref)
        return self

    def remove_column(self, ref: str) -> QueryEditor:
        self._model.columns = [c for c in self._model.columns if c != ref]
        return self

    # ------------------------------------------------------------------
    # WHERE conditions
    # ------------------------------------------------------------------

    def add_condition(self) -> str:
        """Append an empty ``equals`` condition joined with ``AND``.

        Returns:
            The new condition's id.
        """
        condition = Condition()
        self._model.conditions.append(condition)
        return condition.id

    def update_condition(self, condition_id: str, **changes: Any) -> None:
        """Apply ``changes`` (field name → value) to a WHERE condition."""
        self._model.conditions = _updated(self._model.conditions, condition_id, changes)

    def remove_condition(self, condition_id: str) -> None:
        self._model.conditions = _without(self._model.conditions, condition_id)

    # ------------------------------------------------------------------
    # GROUP BY / HAVING
    # ------------------------------------------------------------------

    def add_group_by(self, column: str) -> QueryEditor:
        if column not in self._model.group_by:
            self._model.group_by.append(column)
        return self

    def remove_group_by(self, column: str) -> QueryEditor:
        self._model.group_by = [c for c in self._model.group_by if c != column]
        return self

    def add_having(self) -> str:
        """Append an empty HAVING condition and return its id."""
        condition = Condition()
        self._model.having.append(condition)
        return condition.id

    def update_having(self, condition_id: str, **changes: Any) -> None:
        self._model.having = _updated(self._model.having, condition_id, changes)

    def remove_having(self, condition_id: str) -> None:
        self._model.having = _without(self._model.having, condition_id)

    # ------------------------------------------------------------------
    # Joins
    # ------------------------------------------------------------------

    def add_join(self) -> str:
        """Append an ``INNER`` join aimed at the second selected table.

        With fewer than two tables the join's table is left empty; the
        caller fills in the table and both equality columns afterwards.

        Returns:
            The new join's id.
        """
        tables = self._model.tables
        join = Join(table=tables[1] if len(tables) > 1 else "")
        self._model.joins.append(join)
        return join.id

    def update_join(self, join_id: str, **changes: Any) -> None:
        self._model.joins = _updated(self._model.joins, join_id, changes)

    def remove_join(self, join_id: str) -> None:
        self._model.joins = _without(self._model.joins, join_id)

    # ------------------------------------------------------------------
    # ORDER BY
    # ------------------------------------------------------------------

    def add_order(self) -> str:
        """Append an empty ascending sort key and return its id."""
        order = Order()
        self._model.order_by.append(order)
        return order.id

    def update_order(self, order_id: str, **changes: Any) -> None:
        self._model.order_by = _updated(self._model.order_by, order_id, changes)

    def remove_order(self, order_id: str) -> None:
        self._model.order_by = _without(self._model.order_by, order_id)

    # ------------------------------------------------------------------
    # INSERT / UPDATE assignments
    # ------------------------------------------------------------------

    def set_assignment(self, column: str, value: str | None) -> QueryEditor:
        """Set the value written to ``column``, replacing an earlier one."""
        assignment = Assignment(column=column, value=value)
        for i, existing in enumerate(self._model.assignments):
            if existing.column == column:
                self._model.assignments[i] = assignment
                return self
        self._model.assignments.append(assignment)
        return self

    def remove_assignment(self, column: str) -> QueryEditor:
        self._model.assignments = [
            a for a in self._model.assignments if a.column != column
        ]
        return self


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _updated(entries: list[_ModelT], entry_id: str, changes: dict[str, Any]) -> list[_ModelT]:
    """Return ``entries`` with ``changes`` merged into the entry ``entry_id``.

    The merged entry is re-validated, so enum fields accept their wire
    strings.  The ``id`` field is never changed.
    """
    changes = {k: v for k, v in changes.items() if k != "id"}
    result: list[_ModelT] = []
    for entry in entries:
        if entry.id == entry_id:  # type: ignore[attr-defined]
            entry = type(entry).model_validate({**entry.model_dump(), **changes})
        result.append(entry)
    return result


def _without(entries: list[_ModelT], entry_id: str) -> list[_ModelT]:
    return [e for e in entries if e.id != entry_id]  # type: ignore[attr-defined]
