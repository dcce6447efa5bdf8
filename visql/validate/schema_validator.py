"""Schema existence validator.

Checks that every table and column referenced in the model actually exists
in the :class:`~visql.schema.catalog.CatalogSnapshot`.
"""

from __future__ import annotations

from visql.errors import InvalidJoinError, SchemaError
from visql.schema.catalog import CatalogSnapshot
from visql.schema.column_reference import ColumnReference
from visql.schema.query_model import QueryModel


class SchemaValidator:
    """Validates table and column existence against the catalog.

    Args:
        catalog: The catalog snapshot the builder was populated from.
    """

    def __init__(self, catalog: CatalogSnapshot) -> None:
        self._catalog = catalog

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def assert_table_exists(self, table_name: str) -> None:
        """Raise :class:`~visql.errors.SchemaError` if the table is unknown."""
        if self._catalog.get_table(table_name) is None:
            raise SchemaError(
                f"Table '{table_name}' does not exist in the catalog.",
                details={
                    "table": table_name,
                    "allowed_tables": self._catalog.table_names,
                },
            )

    def validate_tables(self, model: QueryModel) -> None:
        for table in model.tables:
            self.assert_table_exists(table)

    def validate_columns(self, model: QueryModel) -> None:
        """Validate every filled-in column reference of the model."""
        for ref in model.collect_col_refs():
            ColumnReference.parse(ref).validate_against(self._catalog, model.tables)

    def validate_joins(self, model: QueryModel) -> None:
        """Validate that each join targets a selected, known table."""
        for join in model.joins:
            if join.table and join.table not in model.tables:
                raise InvalidJoinError(
                    join.id, f"table '{join.table}' is not selected in the query"
                )

    def validate_assignments(self, model: QueryModel) -> None:
        """Validate INSERT / UPDATE target columns against the target table."""
        target = model.primary_table
        if target is None:
            return
        for assignment in model.assignments:
            ColumnReference.parse(assignment.column).validate_against(
                self._catalog, [target]
            )
