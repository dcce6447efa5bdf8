"""Compilation context value object.

Packages the ``(compiler, profile)`` pair that every clause-level
sub-builder needs into a single cohesive object.
"""
from __future__ import annotations

from dataclasses import dataclass

from visql.compile.base import SQLCompiler
from visql.schema.column_reference import ColumnReference
from visql.schema.dialect import DialectProfile


@dataclass(frozen=True)
class CompilationContext:
    """Immutable context for a single compilation run.

    Attributes:
        compiler: Dialect-specific SQL compiler instance.
        profile: Layout options (clause separator).
    """

    compiler: SQLCompiler
    profile: DialectProfile

    def column(self, ref: str) -> str:
        """Render a ``table.column`` or bare ``column`` reference."""
        quote = self.compiler.quote_identifier
        parsed = ColumnReference.parse(ref)
        if parsed.qualified:
            return f"{self.table(parsed.table)}.{quote(parsed.column)}"
        return quote(parsed.column)

    def table(self, name: str) -> str:
        """Render a table name, quoting each part of a dotted name."""
        quote = self.compiler.quote_identifier
        return ".".join(quote(part) for part in name.split("."))
