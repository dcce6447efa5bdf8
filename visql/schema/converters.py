"""Utilities for building a schema catalog from a live database.

SQLAlchemy converter
--------------------
:func:`catalog_from_sqlalchemy` reflects a database engine and returns a
:class:`~visql.schema.catalog.CatalogSnapshot`.  :class:`SQLAlchemyCatalog`
wraps the same reflection behind the
:class:`~visql.schema.catalog.SchemaCatalog` protocol so a session always
sees the current tables.

Install the optional dependency before using this module::

    pip install "visql[sqlalchemy]"

Example::

    from sqlalchemy import create_engine
    from visql.schema.converters import catalog_from_sqlalchemy

    engine = create_engine("sqlite:///mydb.db")
    catalog = catalog_from_sqlalchemy(engine)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from visql.schema.catalog import CatalogSnapshot, ColumnInfo, TableInfo

if TYPE_CHECKING:
    from sqlalchemy import Connection, Engine, MetaData, Table

logger = logging.getLogger(__name__)


def catalog_from_sqlalchemy(
    engine: Engine,
    *,
    include_tables: list[str] | None = None,
    schema: str | None = None,
    include_row_counts: bool = True,
) -> CatalogSnapshot:
    """Build a :class:`CatalogSnapshot` by reflecting a SQLAlchemy engine.

    All tables visible to the engine (or a subset via *include_tables*) are
    reflected using SQLAlchemy's :class:`~sqlalchemy.schema.MetaData`.  Each
    column's primary-key and foreign-key flags are carried over.

    Args:
        engine: A :class:`sqlalchemy.engine.Engine` instance.
        include_tables: Optional allowlist of table names to reflect.
            When ``None`` all tables in the schema are reflected.
        schema: Optional database schema name (e.g. ``"public"`` for
            PostgreSQL).  Passed directly to
            :meth:`sqlalchemy.schema.MetaData.reflect`.
        include_row_counts: When ``True`` (default) a ``COUNT(*)`` is run per
            table to fill :attr:`TableInfo.row_count`.

    Returns:
        A fully populated :class:`CatalogSnapshot`.

    Raises:
        ImportError: If ``sqlalchemy`` is not installed.
    """
    try:
        from sqlalchemy import MetaData as _MetaData
    except ImportError as exc:
        raise ImportError(
            "SQLAlchemy is required for catalog_from_sqlalchemy(). "
            'Install it with: pip install "visql[sqlalchemy]"'
        ) from exc

    metadata = _MetaData()
    with engine.connect() as conn:
        metadata.reflect(bind=conn, only=include_tables, schema=schema)
        row_counts = _count_rows(conn, metadata) if include_row_counts else {}

    catalog = _metadata_to_catalog(metadata, row_counts)
    logger.debug("Reflected %d tables from %s", len(catalog.tables), engine.url)
    return catalog


class SQLAlchemyCatalog:
    """A :class:`~visql.schema.catalog.SchemaCatalog` backed by reflection.

    Every :meth:`list_tables` call reflects the database again.

    Args:
        engine: Engine to reflect.
        include_tables: Optional allowlist of table names.
        schema: Optional database schema name.
        include_row_counts: Whether to count rows per table.
    """

    def __init__(
        self,
        engine: Engine,
        *,
        include_tables: list[str] | None = None,
        schema: str | None = None,
        include_row_counts: bool = True,
    ) -> None:
        self._engine = engine
        self._include_tables = include_tables
        self._schema = schema
        self._include_row_counts = include_row_counts

    def list_tables(self) -> list[TableInfo]:
        return catalog_from_sqlalchemy(
            self._engine,
            include_tables=self._include_tables,
            schema=self._schema,
            include_row_counts=self._include_row_counts,
        ).tables


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _count_rows(conn: Connection, metadata: MetaData) -> dict[str, int]:
    """Return ``{table_name: row_count}`` for every reflected table."""
    from sqlalchemy import func, select

    counts: dict[str, int] = {}
    for table in metadata.sorted_tables:
        counts[table.name] = conn.execute(
            select(func.count()).select_from(table)
        ).scalar_one()
    return counts


def _metadata_to_catalog(
    metadata: MetaData, row_counts: dict[str, int] | None = None
) -> CatalogSnapshot:
    """Convert a reflected :class:`~sqlalchemy.schema.MetaData` into a
    :class:`CatalogSnapshot`.

    Separated from :func:`catalog_from_sqlalchemy` so it can be reused by
    callers that already hold a reflected ``MetaData`` object.
    """
    row_counts = row_counts or {}
    return CatalogSnapshot(
        tables=[
            _table_info(table, row_counts.get(table.name, 0))
            for table in metadata.sorted_tables
        ]
    )


def _table_info(table: Table, row_count: int) -> TableInfo:
    return TableInfo(
        name=table.name,
        row_count=row_count,
        columns=[
            ColumnInfo(
                name=col.name,
                type=str(col.type),
                is_primary_key=bool(col.primary_key),
                is_foreign_key=bool(col.foreign_keys),
                # col.nullable is True/False for reflected columns; treat
                # an unset value (None) as nullable.
                nullable=col.nullable is not False,
            )
            for col in table.columns
        ],
    )
