"""Shared test fixtures."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator, Sequence
from typing import Any

import pytest

from row_bind.core.config import BindConfig


class FakeRows:
    """In-memory Rows cursor that records how it is driven."""

    def __init__(self, columns: list[str], data: list[Sequence[Any]]) -> None:
        self._columns = columns
        self._data = list(data)
        self._index = -1
        self.next_calls = 0
        self.scan_calls = 0
        self.closed = False

    def close(self) -> None:
        self.closed = True

    def columns(self) -> list[str]:
        return list(self._columns)

    def next(self) -> bool:
        self.next_calls += 1
        self._index += 1
        return self._index < len(self._data)

    def scan(self) -> Sequence[Any]:
        self.scan_calls += 1
        return tuple(self._data[self._index])


@pytest.fixture
def make_rows():
    """Factory for in-memory cursors.

    Usage:
        rows = make_rows(["id", "name"], [(1, "Alice"), (2, "Bob")])
    """

    def _make(columns: list[str], data: list[Sequence[Any]]) -> FakeRows:
        return FakeRows(columns, data)

    return _make


@pytest.fixture
def bind_config() -> BindConfig:
    """Default bind configuration."""
    return BindConfig()


@pytest.fixture
def sqlite_conn() -> Iterator[sqlite3.Connection]:
    """SQLite in-memory connection."""
    conn = sqlite3.connect(":memory:")
    try:
        yield conn
    finally:
        conn.close()
