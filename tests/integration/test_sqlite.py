"""Integration tests: edit → compile → execute against an in-memory SQLite DB.

Every statement kind goes through QuerySession with the SQLAlchemy catalog
and executor, so the generated SQL and bound parameters are checked by a
real engine.
"""
from __future__ import annotations

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from visql.schema.converters import SQLAlchemyCatalog
from visql.session.executor import SQLAlchemyExecutor
from visql.session.session import QuerySession
from tests.fixtures import load_ddl

USERS = [
    (1, "ann@example.com", "Ann", "admin"),
    (2, "bob@example.com", "Bob", "user"),
    (3, "cat@corp.test", "Cat O'Hara", "user"),
]
FILES = [
    (1, 1, "report.pdf", 1200),
    (2, 1, "notes.txt", None),
    (3, 2, "photo.png", 5400),
]


@pytest.fixture()
def engine() -> Engine:
    eng = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    with eng.begin() as conn:
        for statement in load_ddl():
            conn.execute(text(statement))
        for uid, email, name, role in USERS:
            conn.execute(
                text(
                    "INSERT INTO users (id, email, name, password_hash, role) "
                    "VALUES (:id, :email, :name, 'x', :role)"
                ),
                {"id": uid, "email": email, "name": name, "role": role},
            )
        for fid, uid, filename, size in FILES:
            conn.execute(
                text(
                    "INSERT INTO files (id, user_id, filename, file_path, file_size) "
                    "VALUES (:id, :uid, :filename, '/f', :size)"
                ),
                {"id": fid, "uid": uid, "filename": filename, "size": size},
            )
    return eng


@pytest.fixture()
def session(engine: Engine) -> QuerySession:
    return QuerySession(SQLAlchemyCatalog(engine), SQLAlchemyExecutor(engine))


def _names(session: QuerySession) -> list[str]:
    result = session.execute()
    assert result is not None and result.ok, result
    return [row["name"] for row in result.rows]


# ---------------------------------------------------------------------------
# SELECT
# ---------------------------------------------------------------------------


def test_select_with_where_order_limit(session):
    editor = session.editor
    editor.add_table("users").add_column("users.name").set_limit(2)
    cid = editor.add_condition()
    editor.update_condition(cid, column="users.role", value="user")
    oid = editor.add_order()
    editor.update_order(oid, column="users.name", direction="DESC")

    assert _names(session) == ["Cat O'Hara", "Bob"]


def test_result_shape(session):
    session.editor.add_table("users").add_column("users.id").add_column("users.email")
    session.editor.set_limit(1)
    result = session.execute()
    assert result.columns == ["id", "email"]
    assert result.rows == [{"id": 1, "email": "ann@example.com"}]
    assert result.execution_time_ms >= 0
    assert result.affected_rows is None


def test_quote_in_value_is_bound(session):
    cid = session.editor.add_table("users").add_column("users.name").add_condition()
    session.editor.update_condition(cid, column="users.name", value="Cat O'Hara")
    assert _names(session) == ["Cat O'Hara"]


def test_injection_payload_matches_nothing(session):
    cid = session.editor.add_table("users").add_column("users.name").add_condition()
    session.editor.update_condition(cid, column="users.name", value="x' OR '1'='1")
    assert _names(session) == []


@pytest.mark.parametrize(
    "operator, value, expected",
    [
        ("contains", "example", ["Ann", "Bob"]),
        ("starts_with", "cat", ["Cat O'Hara"]),
        ("ends_with", ".test", ["Cat O'Hara"]),
        ("not_equals", "admin", ["Bob", "Cat O'Hara"]),
    ],
)
def test_pattern_and_comparison_operators(session, operator, value, expected):
    editor = session.editor
    editor.add_table("users").add_column("users.name")
    column = "users.role" if operator == "not_equals" else "users.email"
    cid = editor.add_condition()
    editor.update_condition(cid, column=column, operator=operator, value=value)
    oid = editor.add_order()
    editor.update_order(oid, column="users.name")
    assert _names(session) == expected


def test_join_with_null_check(session):
    editor = session.editor
    editor.add_table("users").add_table("files").add_column("files.filename")
    jid = editor.add_join()
    editor.update_join(jid, left_column="users.id", right_column="files.user_id")
    cid = editor.add_condition()
    editor.update_condition(cid, column="files.file_size", operator="is_null")

    result = session.execute()
    assert result.rows == [{"filename": "notes.txt"}]


def test_group_by(session):
    editor = session.editor
    editor.add_table("files").add_column("files.user_id").add_group_by("files.user_id")
    oid = editor.add_order()
    editor.update_order(oid, column="files.user_id")
    result = session.execute()
    assert [r["user_id"] for r in result.rows] == [1, 2]


def test_offset_pages_results(session):
    editor = session.editor
    editor.add_table("users").add_column("users.name").set_limit(1).set_offset(1)
    oid = editor.add_order()
    editor.update_order(oid, column="users.id")
    assert _names(session) == ["Bob"]


# ---------------------------------------------------------------------------
# INSERT / UPDATE / DELETE
# ---------------------------------------------------------------------------


def test_insert_then_select(session):
    editor = session.editor
    editor.set_statement_kind("INSERT").add_table("users")
    editor.set_assignment("email", "dan@example.com").set_assignment("name", "Dan")
    editor.set_assignment("password_hash", "x")
    result = session.execute()
    assert result.ok
    assert result.affected_rows == 1

    editor.reset().add_table("users").add_column("users.name")
    cid = editor.add_condition()
    editor.update_condition(cid, column="users.email", value="dan@example.com")
    assert _names(session) == ["Dan"]


def test_update_with_where(session):
    editor = session.editor
    editor.set_statement_kind("UPDATE").add_table("users").set_assignment("role", "admin")
    cid = editor.add_condition()
    editor.update_condition(cid, column="users.role", value="user")
    assert session.execute().affected_rows == 2


def test_delete_with_where(session):
    editor = session.editor
    editor.set_statement_kind("DELETE").add_table("files")
    cid = editor.add_condition()
    editor.update_condition(cid, column="files.user_id", value="1")
    assert session.execute().affected_rows == 2


# ---------------------------------------------------------------------------
# Errors and catalog
# ---------------------------------------------------------------------------


def test_engine_error_is_reported(session):
    session.editor.add_table("audit_logs")
    result = session.execute()
    assert not result.ok
    assert "audit_logs" in result.error
    assert result.rows == []


def test_failed_statement_is_rolled_back(session):
    editor = session.editor
    editor.set_statement_kind("INSERT").add_table("users")
    editor.set_assignment("id", "1").set_assignment("email", "dup@example.com")
    editor.set_assignment("name", "Dup").set_assignment("password_hash", "x")
    result = session.execute()
    assert result.error is not None

    editor.reset().add_table("users").add_column("users.name")
    assert len(_names(session)) == len(USERS)


def test_validate_against_live_catalog(session):
    session.editor.add_table("users").add_column("users.email")
    session.validate()
    assert "users.role" in session.available_columns()
