"""MySQL dialect compiler."""

from __future__ import annotations

from visql.compile.base import SQLCompiler


class MySQLCompiler(SQLCompiler):
    """Compiles a QueryModel to MySQL-flavoured parameterized SQL.

    Parameter style: ``%(name)s`` – compatible with ``PyMySQL`` and
    ``mysql-connector-python`` named-parameter execution.

    Identifiers are quoted with backticks (`` ` ``) rather than double-quotes.
    MySQL has no ``FULL JOIN``; a model using one compiles as written and is
    rejected by the server at execution time.
    """

    @property
    def dialect_name(self) -> str:
        return "mysql"

    def param_placeholder(self, name: str) -> str:
        return f"%({name})s"

    def quote_identifier(self, name: str) -> str:
        escaped = name.replace("`", "``")
        return f"`{escaped}`"
