"""Semantic / completeness validator.

Validates rules that are not schema existence checks: entries the user has
started but not finished, joins without a second table, HAVING without
GROUP BY, and negative LIMIT / OFFSET values.
"""

from __future__ import annotations

from visql.errors import IncompleteQueryError, InvalidJoinError, ValidationError
from visql.schema.query_model import Condition, QueryModel


class SemanticValidator:
    """Validates semantic constraints on a QueryModel."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def validate_conditions(self, conditions: list[Condition], clause: str) -> None:
        """Raise if a condition has no column yet.

        Raises:
            IncompleteQueryError: On the first condition without a column.
        """
        for condition in conditions:
            if not condition.column:
                raise IncompleteQueryError(
                    f"A {clause} condition has no column.",
                    clause=clause,
                    entry_id=condition.id,
                )

    def validate_joins(self, model: QueryModel) -> None:
        """Raise if a join is unfinished or there are not two tables to join."""
        if model.joins and len(model.tables) < 2:
            raise InvalidJoinError(
                model.joins[0].id, "a join needs at least two selected tables"
            )
        for join in model.joins:
            if not join.is_complete:
                raise InvalidJoinError(
                    join.id, "table, left column and right column are required"
                )

    def validate_orders(self, model: QueryModel) -> None:
        for order in model.order_by:
            if not order.column:
                raise IncompleteQueryError(
                    "An ORDER BY entry has no column.",
                    clause="ORDER BY",
                    entry_id=order.id,
                )

    def validate_having(self, model: QueryModel) -> None:
        """Raise if HAVING appears without a GROUP BY clause.

        Raises:
            ValidationError: If HAVING is present but GROUP BY is empty.
        """
        if model.having and not model.group_by:
            raise ValidationError(
                "HAVING requires GROUP BY.",
                code="HAVING_WITHOUT_GROUP_BY",
            )

    def validate_limit(self, model: QueryModel) -> None:
        """Raise if LIMIT or OFFSET is negative.

        Raises:
            ValidationError: On a negative LIMIT or OFFSET.
        """
        for clause, value in (("LIMIT", model.limit), ("OFFSET", model.offset)):
            if value is not None and value < 0:
                raise ValidationError(
                    f"{clause} value must be a non-negative integer.",
                    code="INVALID_LIMIT",
                    details={"clause": clause, "value": value},
                )
