"""Shared test fixtures."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from typing import Any

import pytest

from row_mapper.core.row import DictRow


@pytest.fixture
def make_row():
    """Helper to build a DictRow from keyword columns.

    Usage:
        make_row(id=1, name="Alice")
    """

    def _make(**values: Any) -> DictRow:
        return DictRow(values)

    return _make


@pytest.fixture
def sqlite_conn() -> Iterator[sqlite3.Connection]:
    """SQLite in-memory connection, closed after the test."""
    conn = sqlite3.connect(":memory:")
    try:
        yield conn
    finally:
        conn.close()
