"""visql – SQL generation for a visual query builder.

Point and click, not type.

Public API
----------
``generate``
    Render the human-readable preview of a QueryModel, literals inlined.

``compile_query``
    Render a QueryModel to parameterized SQL for a database dialect.

Re-exported types
-----------------
``QueryModel`` and its entries, ``QueryEditor``, ``QuerySession``,
``CatalogSnapshot``, ``DialectProfile``, ``CompiledSQL``, ``QueryValidator``
and all error classes.

Extensibility
-------------
New dialect compilers can be registered via::

    from visql.compile.registry import CompilerFactory

    @CompilerFactory.register("oracle")
    class OracleCompiler(SQLCompiler):
        ...

After registration, ``compile_query`` and ``QuerySession`` pick it up for
any ``DialectProfile`` with ``target="oracle"``.
"""

from __future__ import annotations

from visql.compile.ansi import AnsiCompiler
from visql.compile.base import CompiledSQL, SQLCompiler
from visql.compile.builder import QueryBuilder
from visql.compile.mysql import MySQLCompiler
from visql.compile.postgres import PostgresCompiler
from visql.compile.registry import CompilerFactory
from visql.compile.sqlite import SQLiteCompiler
from visql.edit.editor import QueryEditor
from visql.errors import (
    CompilationError,
    IncompleteQueryError,
    InvalidJoinError,
    ProfileConfigError,
    QueryNotFoundError,
    SchemaError,
    StoreError,
    ValidationError,
    VisqlError,
)
from visql.schema.catalog import CatalogSnapshot, ColumnInfo, SchemaCatalog, TableInfo
from visql.schema.converters import SQLAlchemyCatalog, catalog_from_sqlalchemy
from visql.schema.dialect import PREVIEW_PROFILE, DialectProfile
from visql.schema.expressions import (
    ConditionOperator,
    JoinType,
    LogicalConnector,
    SortDirection,
    StatementKind,
)
from visql.schema.query_model import Assignment, Condition, Join, Order, QueryModel
from visql.session.interfaces import ExecutionInvoker, ExecutionResult, SavedQueryStore
from visql.session.session import QuerySession
from visql.session.store import InMemoryQueryStore
from visql.validate.validator import QueryValidator

# ---------------------------------------------------------------------------
# Register built-in compilers with CompilerFactory
# ---------------------------------------------------------------------------

CompilerFactory.register_class("ansi", AnsiCompiler)
CompilerFactory.register_class("postgres", PostgresCompiler)
CompilerFactory.register_class("sqlite", SQLiteCompiler)
CompilerFactory.register_class("mysql", MySQLCompiler)

__all__ = [
    # Core pipeline
    "generate",
    "compile_query",
    # Query model
    "QueryModel",
    "Condition",
    "Join",
    "Order",
    "Assignment",
    "StatementKind",
    "ConditionOperator",
    "LogicalConnector",
    "JoinType",
    "SortDirection",
    # Editing
    "QueryEditor",
    "QuerySession",
    # Catalog
    "SchemaCatalog",
    "CatalogSnapshot",
    "TableInfo",
    "ColumnInfo",
    "SQLAlchemyCatalog",
    "catalog_from_sqlalchemy",
    "QueryValidator",
    # Execution and storage
    "ExecutionInvoker",
    "ExecutionResult",
    "SavedQueryStore",
    "InMemoryQueryStore",
    # Compilation
    "DialectProfile",
    "CompiledSQL",
    "CompilerFactory",
    "SQLCompiler",
    "AnsiCompiler",
    "MySQLCompiler",
    "PostgresCompiler",
    "SQLiteCompiler",
    "QueryBuilder",
    # Errors
    "VisqlError",
    "ValidationError",
    "SchemaError",
    "InvalidJoinError",
    "IncompleteQueryError",
    "ProfileConfigError",
    "CompilationError",
    "StoreError",
    "QueryNotFoundError",
]


def generate(model: QueryModel) -> str:
    """Render the preview text for ``model``.

    Literals are inlined as quoted strings with embedded quotes doubled, so
    the text is readable and safe to copy, and identifiers are emitted as
    the user picked them::

        >>> generate(QueryModel(tables=["users"]))
        'SELECT *\\nFROM users'

    A model without tables renders to ``""``.  INSERT and UPDATE models
    without assignments render a placeholder skeleton.

    Args:
        model: The model to render.

    Returns:
        The SQL text, clauses separated by newlines.
    """
    return QueryBuilder(AnsiCompiler(), PREVIEW_PROFILE).build(model).sql


def compile_query(
    model: QueryModel,
    target: str | DialectProfile = "postgres",
) -> CompiledSQL:
    """Compile ``model`` to parameterized SQL for a database dialect.

    ::

        compiled = visql.compile_query(model, target="sqlite")
        conn.execute(text(compiled.sql), compiled.params)

    Args:
        model: The model to compile.
        target: A registered dialect name, or a full :class:`DialectProfile`.

    Returns:
        ``CompiledSQL`` with ``sql``, bound ``params``, ``dialect`` and
        ``statement_kind``.

    Raises:
        ProfileConfigError: If no compiler is registered for the target.
        CompilationError: If an INSERT or UPDATE has no assignments, or an
            operator has no rendering.
    """
    profile = target if isinstance(target, DialectProfile) else DialectProfile(target=target)
    # dialect target resolved via CompilerFactory, no if-chain
    compiler = CompilerFactory.create(profile.target)
    return QueryBuilder(compiler, profile).build(model)
