"""Test fixtures: sample schema DDL, CatalogSnapshot JSON and service doubles."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from visql.schema.catalog import CatalogSnapshot
from visql.session.interfaces import ExecutionResult

_FIXTURES_DIR = Path(__file__).parent


def load_catalog() -> CatalogSnapshot:
    """Load the canonical sample CatalogSnapshot from catalog.json."""
    data = json.loads((_FIXTURES_DIR / "catalog.json").read_text())
    return CatalogSnapshot.model_validate(data)


def load_ddl() -> list[str]:
    """Return the sample SQLite DDL split into single statements.

    SQLAlchemy's ``text()`` executes one statement per call, so the script
    is split on ``;``.
    """
    script = (_FIXTURES_DIR / "ddl_sqlite.sql").read_text()
    return [stmt.strip() for stmt in script.split(";") if stmt.strip()]


class RecordingExecutor:
    """ExecutionInvoker double that records calls and replays one result."""

    def __init__(self, result: ExecutionResult | None = None) -> None:
        self.result = result or ExecutionResult(columns=["id"], rows=[{"id": 1}])
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def execute(self, sql: str, params: dict[str, Any]) -> ExecutionResult:
        self.calls.append((sql, params))
        return self.result
