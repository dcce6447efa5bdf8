"""visql schema models: QueryModel, CatalogSnapshot, DialectProfile."""
from visql.schema.catalog import CatalogSnapshot, ColumnInfo, SchemaCatalog, TableInfo
from visql.schema.dialect import DialectProfile
from visql.schema.expressions import (
    ConditionOperator,
    JoinType,
    LogicalConnector,
    SortDirection,
    StatementKind,
)
from visql.schema.query_model import (
    Assignment,
    Condition,
    Join,
    Order,
    QueryModel,
)

__all__ = [
    "CatalogSnapshot",
    "ColumnInfo",
    "SchemaCatalog",
    "TableInfo",
    "DialectProfile",
    "ConditionOperator",
    "JoinType",
    "LogicalConnector",
    "SortDirection",
    "StatementKind",
    "Assignment",
    "Condition",
    "Join",
    "Order",
    "QueryModel",
]
