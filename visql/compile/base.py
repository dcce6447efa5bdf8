"""Compiler abstractions: CompiledSQL and the SQLCompiler ABC.

The Template Method pattern (GoF) is used:
- ``SQLCompiler`` defines how identifiers and literals are emitted.
- ``AnsiCompiler`` inlines escaped literals for the live preview;
  ``PostgresCompiler``, ``SQLiteCompiler`` and ``MySQLCompiler`` bind them
  as named parameters and quote identifiers.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar

from visql.schema.expressions import StatementKind

if TYPE_CHECKING:
    from visql.compile.expression_builder import RuntimeContext


@dataclass
class CompiledSQL:
    """The output of a compilation.

    Attributes:
        sql: The compiled SQL string, empty when the model has no table.
        params: Values for the named placeholders in ``sql``.
        dialect: The target dialect name.
        statement_kind: The kind of statement ``sql`` holds.
    """

    sql: str
    params: dict[str, Any] = field(default_factory=dict)
    dialect: str = "ansi"
    statement_kind: StatementKind = StatementKind.SELECT

    @property
    def is_empty(self) -> bool:
        """True when there is nothing to execute."""
        return not self.sql


class SQLCompiler(ABC):
    """Abstract base for dialect-specific SQL compilers.

    Subclasses implement the dialect-specific methods; the ``QueryBuilder``
    uses this interface via the Strategy / Template Method patterns.

    Attributes:
        inlines_literals: True when literals are written into the SQL text
            rather than bound as parameters.  Such output is for display.
    """

    inlines_literals: ClassVar[bool] = False

    @abstractmethod
    def param_placeholder(self, name: str) -> str:
        """Return the SQL placeholder string for a named parameter.

        Args:
            name: Parameter name (e.g. ``'param_0'``).

        Returns:
            Dialect-specific placeholder string.
        """

    @abstractmethod
    def quote_identifier(self, name: str) -> str:
        """Return a properly-quoted SQL identifier.

        Args:
            name: Unquoted identifier (table or column name).

        Returns:
            Quoted identifier.
        """

    @property
    @abstractmethod
    def dialect_name(self) -> str:
        """Return the canonical dialect name (e.g. ``'postgres'``)."""

    def bind_literal(self, value: Any, runtime: RuntimeContext) -> str:
        """Return the SQL fragment standing for a user-supplied literal.

        The default stores ``value`` in ``runtime`` and emits its placeholder,
        so user input never becomes part of the SQL text.

        Args:
            value: The literal (``None`` renders ``NULL``).
            runtime: Parameter accumulator for the current compilation.

        Returns:
            A placeholder, or ``NULL``.
        """
        if value is None:
            return "NULL"
        return self.param_placeholder(runtime.add_value(value))
