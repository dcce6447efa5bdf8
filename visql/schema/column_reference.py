"""Typed column-reference class.

Replaces scattered ``ref.split(".", 1)`` / ``ref.startswith(table + ".")``
pattern-matching with a single object that owns both the parsing and the
catalog lookup for a column reference.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from visql.schema.catalog import CatalogSnapshot


@dataclass(frozen=True)
class ColumnReference:
    """A parsed ``table.column`` or bare ``column`` reference.

    Attributes:
        table: Table qualifier, or ``None`` for unqualified references.
        column: Column name.
    """

    table: str | None
    column: str

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def parse(cls, ref: str) -> ColumnReference:
        """Parse a ``"table.column"`` or bare ``"column"`` string.

        The column is the part after the last dot, so schema-qualified
        tables such as ``public.users.id`` keep their full table name.

        Args:
            ref: The raw column reference string from the model.

        Returns:
            A :class:`ColumnReference` instance.
        """
        if "." in ref:
            table, column = ref.rsplit(".", 1)
            return cls(table=table, column=column)
        return cls(table=None, column=ref)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate_against(
        self,
        catalog: CatalogSnapshot,
        tables: list[str],
    ) -> None:
        """Raise :class:`~visql.errors.SchemaError` if the reference is unknown.

        Qualified references must name a column of that table.  Bare
        references must name a column of at least one of ``tables`` (the
        tables selected in the model).

        Args:
            catalog: The catalog snapshot to validate against.
            tables: Tables currently selected in the model.

        Raises:
            SchemaError: On table or column not found.
        """
        from visql.errors import SchemaError  # avoid circular import

        if self.table is None:
            if any(catalog.get_column(t, self.column) is not None for t in tables):
                return
            raise SchemaError(
                f"Column '{self.column}' does not exist on any selected table.",
                details={"column": self.column, "tables": list(tables)},
            )

        if catalog.get_column(self.table, self.column) is None:
            raise SchemaError(
                f"Column '{self.column}' does not exist on table '{self.table}'.",
                details={
                    "table": self.table,
                    "column": self.column,
                    "allowed_columns": catalog.get_column_names(self.table),
                },
            )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @property
    def qualified(self) -> bool:
        """True when the reference includes a table qualifier."""
        return self.table is not None

    def belongs_to(self, table: str) -> bool:
        """True when the reference is qualified by ``table``."""
        return self.table == table

    def __str__(self) -> str:
        if self.table:
            return f"{self.table}.{self.column}"
        return self.column
