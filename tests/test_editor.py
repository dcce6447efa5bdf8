"""Unit tests for QueryEditor mutations."""

from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from visql.edit.editor import QueryEditor
from visql.schema.expressions import (
    ConditionOperator,
    JoinType,
    LogicalConnector,
    SortDirection,
    StatementKind,
)
from visql.schema.query_model import QueryModel


def _editor_with_users_and_files() -> QueryEditor:
    editor = QueryEditor()
    editor.add_table("users").add_table("files")
    editor.add_column("users.id").add_column("users.email").add_column("files.filename")
    return editor


# ---------------------------------------------------------------------------
# Tables and columns
# ---------------------------------------------------------------------------


class TestTablesAndColumns:
    def test_new_editor_starts_empty(self) -> None:
        model = QueryEditor().model
        assert model.tables == []
        assert model.statement_kind is StatementKind.SELECT

    def test_add_table_is_idempotent(self) -> None:
        editor = QueryEditor().add_table("users").add_table("users")
        assert editor.model.tables == ["users"]

    def test_add_column_is_idempotent(self) -> None:
        editor = QueryEditor().add_column("users.id").add_column("users.id")
        assert editor.model.columns == ["users.id"]

    def test_remove_column(self) -> None:
        editor = _editor_with_users_and_files().remove_column("users.email")
        assert editor.model.columns == ["users.id", "files.filename"]

    def test_remove_table_cascades_to_columns(self) -> None:
        editor = _editor_with_users_and_files().remove_table("files")
        assert editor.model.tables == ["users"]
        assert editor.model.columns == ["users.id", "users.email"]

    def test_remove_table_keeps_prefix_lookalikes(self) -> None:
        editor = QueryEditor().add_table("user").add_table("users")
        editor.add_column("users.id").add_column("user.id")
        editor.remove_table("user")
        assert editor.model.columns == ["users.id"]

    def test_remove_schema_qualified_table_cascades(self) -> None:
        editor = QueryEditor().add_table("public.users").add_table("files")
        editor.add_column("public.users.id").add_column("files.id")
        editor.remove_table("public.users")
        assert editor.model.tables == ["files"]
        assert editor.model.columns == ["files.id"]

    def test_remove_schema_keeps_other_schema_tables(self) -> None:
        editor = QueryEditor().add_table("public.users").add_table("audit.users")
        editor.add_column("public.users.id").add_column("audit.users.id")
        editor.remove_table("audit.users")
        assert editor.model.columns == ["public.users.id"]

    def test_remove_table_cascades_to_joins(self) -> None:
        editor = _editor_with_users_and_files()
        jid = editor.add_join()
        editor.update_join(jid, left_column="users.id", right_column="files.user_id")
        editor.remove_table("files")
        assert editor.model.joins == []
        assert all(not c.startswith("files.") for c in editor.model.columns)

    def test_remove_unknown_table_is_noop(self) -> None:
        editor = _editor_with_users_and_files()
        before = editor.model.model_dump()
        editor.remove_table("audit_logs")
        assert editor.model.model_dump() == before


# ---------------------------------------------------------------------------
# Conditions
# ---------------------------------------------------------------------------


class TestConditions:
    def test_add_condition_defaults(self) -> None:
        editor = QueryEditor()
        cid = editor.add_condition()
        condition = editor.model.find_condition(cid)
        assert condition is not None
        assert condition.column == ""
        assert condition.operator is ConditionOperator.EQUALS
        assert condition.logical_connector is LogicalConnector.AND

    def test_ids_are_unique(self) -> None:
        editor = QueryEditor()
        ids = {editor.add_condition() for _ in range(20)}
        assert len(ids) == 20

    def test_update_condition_accepts_wire_strings(self) -> None:
        editor = QueryEditor()
        cid = editor.add_condition()
        editor.update_condition(
            cid, column="users.email", operator="contains", logical_connector="OR"
        )
        condition = editor.model.find_condition(cid)
        assert condition.operator is ConditionOperator.CONTAINS
        assert condition.logical_connector is LogicalConnector.OR

    def test_update_never_changes_id(self) -> None:
        editor = QueryEditor()
        cid = editor.add_condition()
        editor.update_condition(cid, id="hijacked", value="x")
        assert editor.model.find_condition(cid).value == "x"
        assert editor.model.find_condition("hijacked") is None

    def test_update_unknown_id_is_noop(self) -> None:
        editor = QueryEditor()
        cid = editor.add_condition()
        editor.update_condition("condition-missing", value="x")
        assert editor.model.find_condition(cid).value == ""

    def test_update_rejects_unknown_operator(self) -> None:
        editor = QueryEditor()
        cid = editor.add_condition()
        with pytest.raises(PydanticValidationError):
            editor.update_condition(cid, operator="between")

    def test_remove_condition(self) -> None:
        editor = QueryEditor()
        first = editor.add_condition()
        second = editor.add_condition()
        editor.remove_condition(first)
        assert [c.id for c in editor.model.conditions] == [second]

    def test_having_is_separate_from_where(self) -> None:
        editor = QueryEditor()
        hid = editor.add_having()
        editor.update_having(hid, column="users.role")
        assert editor.model.conditions == []
        assert editor.model.find_having(hid).column == "users.role"
        editor.remove_having(hid)
        assert editor.model.having == []


# ---------------------------------------------------------------------------
# Joins and ordering
# ---------------------------------------------------------------------------


class TestJoinsAndOrders:
    def test_add_join_targets_second_table(self) -> None:
        editor = _editor_with_users_and_files()
        join = editor.model.find_join(editor.add_join())
        assert join.table == "files"
        assert join.join_type is JoinType.INNER
        assert not join.is_complete

    def test_add_join_with_one_table_leaves_table_empty(self) -> None:
        editor = QueryEditor().add_table("users")
        join = editor.model.find_join(editor.add_join())
        assert join.table == ""

    def test_update_and_remove_join(self) -> None:
        editor = _editor_with_users_and_files()
        jid = editor.add_join()
        editor.update_join(
            jid, join_type="LEFT", left_column="users.id", right_column="files.user_id"
        )
        join = editor.model.find_join(jid)
        assert join.join_type is JoinType.LEFT
        assert join.is_complete
        editor.remove_join(jid)
        assert editor.model.joins == []

    def test_order_lifecycle(self) -> None:
        editor = QueryEditor()
        oid = editor.add_order()
        assert editor.model.find_order(oid).direction is SortDirection.ASC
        editor.update_order(oid, column="users.created_at", direction="DESC")
        assert editor.model.find_order(oid).direction is SortDirection.DESC
        editor.remove_order(oid)
        assert editor.model.order_by == []

    def test_group_by_is_idempotent(self) -> None:
        editor = QueryEditor().add_group_by("users.role").add_group_by("users.role")
        assert editor.model.group_by == ["users.role"]
        editor.remove_group_by("users.role")
        assert editor.model.group_by == []


# ---------------------------------------------------------------------------
# Statement settings and assignments
# ---------------------------------------------------------------------------


class TestStatementSettings:
    def test_limit_and_offset(self) -> None:
        editor = QueryEditor().set_limit(10).set_offset(20)
        assert (editor.model.limit, editor.model.offset) == (10, 20)
        editor.set_limit(None)
        assert editor.model.limit is None

    def test_set_statement_kind_from_string(self) -> None:
        editor = QueryEditor().set_statement_kind("UPDATE")
        assert editor.model.statement_kind is StatementKind.UPDATE

    def test_set_assignment_replaces_existing(self) -> None:
        editor = QueryEditor()
        editor.set_assignment("role", "user").set_assignment("name", "Ann")
        editor.set_assignment("role", "admin")
        assert [(a.column, a.value) for a in editor.model.assignments] == [
            ("role", "admin"),
            ("name", "Ann"),
        ]
        editor.remove_assignment("role")
        assert [a.column for a in editor.model.assignments] == ["name"]

    def test_reset_keeps_identity(self) -> None:
        editor = QueryEditor(QueryModel(id="q-1", name="Admins"))
        editor.add_table("users").set_limit(5).add_condition()
        editor.reset()
        assert editor.model.id == "q-1"
        assert editor.model.name == "Admins"
        assert editor.model.tables == []
        assert editor.model.conditions == []
        assert editor.model.limit is None

    def test_editor_mutates_given_model(self) -> None:
        model = QueryModel()
        QueryEditor(model).add_table("users").rename("Users")
        assert model.tables == ["users"]
        assert model.name == "Users"
