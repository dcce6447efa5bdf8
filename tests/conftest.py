"""Shared pytest fixtures for visql unit and integration tests."""
from __future__ import annotations

import pytest

from visql.schema.catalog import CatalogSnapshot
from tests.fixtures import RecordingExecutor, load_catalog


@pytest.fixture(scope="session")
def catalog() -> CatalogSnapshot:
    """Canonical catalog snapshot shared across all tests."""
    return load_catalog()


@pytest.fixture()
def executor() -> RecordingExecutor:
    return RecordingExecutor()
