"""visql compilation layer: QueryModel → SQL."""
from visql.compile.ansi import AnsiCompiler
from visql.compile.base import CompiledSQL, SQLCompiler
from visql.compile.builder import QueryBuilder
from visql.compile.mysql import MySQLCompiler
from visql.compile.postgres import PostgresCompiler
from visql.compile.sqlite import SQLiteCompiler

__all__ = [
    "AnsiCompiler",
    "CompiledSQL",
    "SQLCompiler",
    "QueryBuilder",
    "MySQLCompiler",
    "PostgresCompiler",
    "SQLiteCompiler",
]
