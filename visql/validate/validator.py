"""Model validation orchestrator.

``QueryValidator`` is the public entry point.  It is opt-in: the SQL
generator never validates references, so an unchecked model with a typo
only fails when the database executes it.  Callers that want to catch such
mistakes before execution run the validator first.

Sub-validator hierarchy
-----------------------
QueryValidator
  ├── SemanticValidator   (semantic_validator.py) - completeness / LIMIT rules
  └── SchemaValidator     (schema_validator.py)   - table / column existence
"""
from __future__ import annotations

from visql.schema.catalog import CatalogSnapshot, SchemaCatalog
from visql.schema.expressions import StatementKind
from visql.schema.query_model import QueryModel
from visql.validate.schema_validator import SchemaValidator
from visql.validate.semantic_validator import SemanticValidator


class QueryValidator:
    """Validates a QueryModel against a schema catalog.

    Checks run in order and the first violation is raised as a subclass of
    :class:`~visql.errors.ValidationError`:

    1. Completeness – unfinished conditions, joins and sort keys.
    2. Semantics    – HAVING/GROUP BY pairing, LIMIT / OFFSET range.
    3. Schema       – table and column existence, join targets.

    Only the clauses the statement kind renders are checked: UPDATE and
    DELETE ignore joins, grouping and ordering left over from editing.

    Args:
        catalog: The catalog to check references against.  A live catalog
            is listed once, at construction.
    """

    def __init__(self, catalog: SchemaCatalog) -> None:
        snapshot = CatalogSnapshot.from_catalog(catalog)
        self._schema = SchemaValidator(snapshot)
        self._semantic = SemanticValidator()

    def validate(self, model: QueryModel) -> None:
        """Validate ``model`` and raise on the first violation found.

        A model without tables is valid: it renders to nothing.

        Raises:
            ValidationError: (or subclass) on the first violation.
        """
        if not model.tables:
            return

        if model.statement_kind is not StatementKind.INSERT:
            self._semantic.validate_conditions(model.conditions, "WHERE")
        if model.statement_kind is StatementKind.SELECT:
            self._semantic.validate_joins(model)
            self._semantic.validate_conditions(model.having, "HAVING")
            self._semantic.validate_orders(model)
            self._semantic.validate_having(model)
            self._semantic.validate_limit(model)

        self._schema.validate_tables(model)
        if model.statement_kind is StatementKind.SELECT:
            self._schema.validate_joins(model)
        self._schema.validate_columns(model)
        if model.statement_kind in (StatementKind.INSERT, StatementKind.UPDATE):
            self._schema.validate_assignments(model)
