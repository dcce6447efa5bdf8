"""Pydantic models for the schema catalog read by the visual builder.

The catalog lists the tables and columns the user may pick from.  It is
produced by the caller (a static JSON snapshot, or a live reflection through
:mod:`visql.schema.converters`) and injected into the editing session.
visql never caches or invalidates it; staleness is the catalog's concern.
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field


class ColumnInfo(BaseModel):
    """Metadata for a single column.

    Attributes:
        name: Column name.
        type: SQL type string (e.g. ``'TEXT'``, ``'INTEGER'``, ``'TIMESTAMP'``).
        is_primary_key: Whether the column is part of the primary key.
        is_foreign_key: Whether the column references another table.
        nullable: Whether the column can be NULL.
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    type: str
    is_primary_key: bool = False
    is_foreign_key: bool = False
    nullable: bool = True


class TableInfo(BaseModel):
    """Metadata for a single table.

    Attributes:
        name: Table name.
        row_count: Approximate number of rows (0 when unknown).
        columns: Ordered list of column metadata.
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    row_count: int = 0
    columns: list[ColumnInfo] = Field(default_factory=list)

    @property
    def column_names(self) -> list[str]:
        """Returns all column names for this table."""
        return [c.name for c in self.columns]


@runtime_checkable
class SchemaCatalog(Protocol):
    """Anything that can list the tables of the connected database."""

    def list_tables(self) -> list[TableInfo]:
        ...


class CatalogSnapshot(BaseModel):
    """A static, in-memory schema catalog.

    Attributes:
        tables: All tables visible to the builder.
    """

    model_config = ConfigDict(extra="forbid")

    tables: list[TableInfo] = Field(default_factory=list)

    @classmethod
    def from_catalog(cls, catalog: SchemaCatalog) -> CatalogSnapshot:
        """Freeze the current listing of ``catalog`` into a snapshot."""
        if isinstance(catalog, CatalogSnapshot):
            return catalog
        return cls(tables=catalog.list_tables())

    def list_tables(self) -> list[TableInfo]:
        """Returns the tables of this snapshot."""
        return list(self.tables)

    def get_table(self, name: str) -> TableInfo | None:
        """Returns the TableInfo for the given table name, or ``None``."""
        for table in self.tables:
            if table.name == name:
                return table
        return None

    def get_column(self, table_name: str, column_name: str) -> ColumnInfo | None:
        """Returns the ColumnInfo for a table.column pair, or ``None``."""
        table = self.get_table(table_name)
        if table is None:
            return None
        for col in table.columns:
            if col.name == column_name:
                return col
        return None

    def get_column_names(self, table_name: str) -> list[str]:
        """Returns column names for ``table_name``, or ``[]`` if not found."""
        table = self.get_table(table_name)
        return table.column_names if table is not None else []

    def qualified_columns(self, tables: list[str]) -> list[str]:
        """Returns ``table.column`` for every column of the given tables.

        This is the list the column pickers offer.  Tables missing from the
        catalog contribute nothing.

        Args:
            tables: Table names, usually ``QueryModel.tables``.

        Returns:
            Qualified column references in table order, then column order.
        """
        return [
            f"{table_name}.{column_name}"
            for table_name in tables
            for column_name in self.get_column_names(table_name)
        ]

    @property
    def table_names(self) -> list[str]:
        """Returns all table names in the snapshot."""
        return [t.name for t in self.tables]
