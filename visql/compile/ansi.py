"""ANSI preview compiler."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from visql.compile.base import SQLCompiler

if TYPE_CHECKING:
    from visql.compile.expression_builder import RuntimeContext


class AnsiCompiler(SQLCompiler):
    """Compiles a QueryModel to self-contained SQL text for display.

    Identifiers are emitted exactly as they appear in the model, matching
    what the user picked.  Literals are inlined as single-quoted strings with
    every embedded quote doubled, so a value such as ``O'Brien`` renders as
    ``'O''Brien'`` and can never close the literal early.
    """

    inlines_literals = True

    @property
    def dialect_name(self) -> str:
        return "ansi"

    def param_placeholder(self, name: str) -> str:
        return f":{name}"

    def quote_identifier(self, name: str) -> str:
        return name

    def bind_literal(self, value: Any, runtime: RuntimeContext) -> str:
        if value is None:
            return "NULL"
        return quote_literal(str(value))


def quote_literal(text: str) -> str:
    """Return ``text`` as a single-quoted SQL string literal."""
    escaped = text.replace("'", "''")
    return f"'{escaped}'"
