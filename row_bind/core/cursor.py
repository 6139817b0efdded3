"""PEP 249 cursor adapter.

Wraps a DB-API cursor (sqlite3, psycopg, mysql-connector, oracledb, ...)
so it can be handed to the row scanner.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class DBAPIRows:
    """Rows implementation over a DB-API cursor.

    Each next() fetches exactly one row. Tuple rows, ``sqlite3.Row`` and
    dict rows (e.g. psycopg ``dict_row``) are all accepted.

    Args:
        cursor: An executed DB-API cursor.
    """

    def __init__(self, cursor: Any) -> None:
        self._cursor = cursor
        self._current: Sequence[Any] | None = None
        self._columns: list[str] | None = None

    def columns(self) -> list[str]:
        if self._columns is None:
            description = self._cursor.description
            self._columns = [desc[0] for desc in description] if description else []
        return list(self._columns)

    def next(self) -> bool:
        row = self._cursor.fetchone()
        if row is None:
            self._current = None
            return False
        if isinstance(row, dict):
            row = [row[col] for col in self.columns()]
        self._current = row
        return True

    def scan(self) -> Sequence[Any]:
        if self._current is None:
            raise RuntimeError("scan() called without a current row; call next() first")
        return tuple(self._current)

    def close(self) -> None:
        self._cursor.close()

    def __enter__(self) -> DBAPIRows:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
