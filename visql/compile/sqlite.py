"""SQLite dialect compiler."""
from __future__ import annotations

from visql.compile.base import SQLCompiler


class SQLiteCompiler(SQLCompiler):
    """Compiles a QueryModel to SQLite-flavoured parameterized SQL.

    Parameter style: ``:name`` – compatible with Python's built-in
    ``sqlite3`` named-parameter execution (``cursor.execute(sql, dict)``)
    and with SQLAlchemy's ``text()`` constructs.
    """

    @property
    def dialect_name(self) -> str:
        return "sqlite"

    def param_placeholder(self, name: str) -> str:
        return f":{name}"

    def quote_identifier(self, name: str) -> str:
        escaped = name.replace('"', '""')
        return f'"{escaped}"'
