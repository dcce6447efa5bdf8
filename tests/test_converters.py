"""Unit tests for visql.schema.converters."""

from __future__ import annotations

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from visql.schema.catalog import CatalogSnapshot, SchemaCatalog
from visql.schema.converters import (
    SQLAlchemyCatalog,
    _metadata_to_catalog,
    catalog_from_sqlalchemy,
)
from tests.fixtures import load_ddl


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_engine() -> Engine:
    """Return an in-memory SQLite engine whose connections share one database."""
    return create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


def _sample_schema(engine: Engine) -> None:
    with engine.begin() as conn:
        for statement in load_ddl():
            conn.execute(text(statement))


def _seed_users(engine: Engine, count: int) -> None:
    with engine.begin() as conn:
        for i in range(count):
            conn.execute(
                text(
                    "INSERT INTO users (email, name, password_hash) "
                    "VALUES (:email, :name, 'x')"
                ),
                {"email": f"user{i}@example.com", "name": f"User {i}"},
            )


# ---------------------------------------------------------------------------
# Column reflection
# ---------------------------------------------------------------------------


class TestColumnReflection:
    def test_table_names(self) -> None:
        engine = _make_engine()
        _sample_schema(engine)
        catalog = catalog_from_sqlalchemy(engine)
        assert set(catalog.table_names) == {"users", "files", "sessions"}

    def test_column_names_keep_declaration_order(self) -> None:
        engine = _make_engine()
        _sample_schema(engine)
        catalog = catalog_from_sqlalchemy(engine)
        assert catalog.get_column_names("sessions") == [
            "id", "user_id", "ip_address", "user_agent", "expires_at", "created_at",
        ]

    def test_column_types_are_strings(self) -> None:
        engine = _make_engine()
        _sample_schema(engine)
        catalog = catalog_from_sqlalchemy(engine)
        users = catalog.get_table("users")
        assert users is not None
        assert all(isinstance(c.type, str) and c.type for c in users.columns)

    def test_key_flags(self) -> None:
        engine = _make_engine()
        _sample_schema(engine)
        catalog = catalog_from_sqlalchemy(engine)
        assert catalog.get_column("files", "id").is_primary_key is True
        assert catalog.get_column("files", "user_id").is_foreign_key is True
        assert catalog.get_column("files", "filename").is_foreign_key is False

    def test_nullability(self) -> None:
        engine = _make_engine()
        _sample_schema(engine)
        catalog = catalog_from_sqlalchemy(engine)
        assert catalog.get_column("users", "email").nullable is False
        assert catalog.get_column("users", "updated_at").nullable is True

    def test_include_tables(self) -> None:
        engine = _make_engine()
        _sample_schema(engine)
        catalog = catalog_from_sqlalchemy(engine, include_tables=["users"])
        assert catalog.table_names == ["users"]


# ---------------------------------------------------------------------------
# Row counts
# ---------------------------------------------------------------------------


class TestRowCounts:
    def test_row_counts(self) -> None:
        engine = _make_engine()
        _sample_schema(engine)
        _seed_users(engine, 3)
        catalog = catalog_from_sqlalchemy(engine)
        assert catalog.get_table("users").row_count == 3
        assert catalog.get_table("files").row_count == 0

    def test_row_counts_can_be_skipped(self) -> None:
        engine = _make_engine()
        _sample_schema(engine)
        _seed_users(engine, 2)
        catalog = catalog_from_sqlalchemy(engine, include_row_counts=False)
        assert catalog.get_table("users").row_count == 0


# ---------------------------------------------------------------------------
# Live catalog
# ---------------------------------------------------------------------------


class TestSQLAlchemyCatalog:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(SQLAlchemyCatalog(_make_engine()), SchemaCatalog)

    def test_reflects_on_every_call(self) -> None:
        engine = _make_engine()
        live = SQLAlchemyCatalog(engine)
        assert live.list_tables() == []

        _sample_schema(engine)
        assert {t.name for t in live.list_tables()} == {"users", "files", "sessions"}

    def test_snapshot_from_live_catalog(self) -> None:
        engine = _make_engine()
        _sample_schema(engine)
        snapshot = CatalogSnapshot.from_catalog(SQLAlchemyCatalog(engine))
        assert snapshot.qualified_columns(["files"])[:2] == ["files.id", "files.user_id"]


def test_empty_metadata_gives_empty_catalog() -> None:
    from sqlalchemy import MetaData

    assert _metadata_to_catalog(MetaData()).tables == []
