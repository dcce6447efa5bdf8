"""Closed enumerations used by the QueryModel.

The string values are the wire format the console persists saved queries
in, so they must stay stable.
"""

from __future__ import annotations

from enum import Enum


class StatementKind(str, Enum):
    """The kind of statement a QueryModel renders to."""

    SELECT = "SELECT"
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class ConditionOperator(str, Enum):
    """Predicate operators offered by the condition editor."""

    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    CONTAINS = "contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    IS_NULL = "is_null"
    IS_NOT_NULL = "is_not_null"


class LogicalConnector(str, Enum):
    """Combinator joining a condition to the previous one in its list."""

    AND = "AND"
    OR = "OR"


class JoinType(str, Enum):
    """SQL join types."""

    INNER = "INNER"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    FULL = "FULL"


class SortDirection(str, Enum):
    """ORDER BY directions."""

    ASC = "ASC"
    DESC = "DESC"


#: Operators that test for NULL and never carry a value.
NULL_OPERATORS: frozenset[ConditionOperator] = frozenset(
    {ConditionOperator.IS_NULL, ConditionOperator.IS_NOT_NULL}
)
