"""INSERT / REPLACE statement builder.

Usage:
    sb = insert("user", dialect="postgresql")
    sb.cols("username", "age").values("new user", 18)
    sql, args = sb.build()
    # INSERT INTO "user" ("username", "age") VALUES ($1, $2)

A builder accumulates rows through sequential calls and is not safe for
concurrent use; build batches with one builder per thread.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from row_bind.builder.normalize import RowSet
from row_bind.core.config import BindConfig, resolve_config
from row_bind.core.enums import StatementMode
from row_bind.core.exceptions import ArgCountMismatchError, NoDataError, ShapeError
from row_bind.dialects.protocol import Dialect
from row_bind.dialects.registry import resolve_dialect

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Raw:
    """Literal SQL spliced into the VALUES list instead of a placeholder.

    The text is not escaped; only pass trusted SQL.
    """

    sql: str

    def __str__(self) -> str:
        return self.sql


class InsertBuilder:
    """Builds a parameterized INSERT or REPLACE statement.

    Args:
        table: Target table, optionally schema-qualified with a dot.
        mode: INSERT or REPLACE.
        dialect: Dialect instance or registered name. Defaults to the
            configured default dialect.
        config: Bind configuration.
    """

    def __init__(
        self,
        table: str,
        mode: StatementMode = StatementMode.INSERT,
        dialect: Dialect | str | None = None,
        config: BindConfig | None = None,
    ) -> None:
        self._config = resolve_config(config)
        self._table = table
        self._mode = mode
        self._dialect = resolve_dialect(dialect, self._config.default_dialect)
        self._cols: list[str] = []
        self._rows: list[tuple[Any, ...]] = []
        self._options: list[str] = []

    @property
    def table(self) -> str:
        return self._table

    @property
    def mode(self) -> StatementMode:
        return self._mode

    @property
    def dialect(self) -> Dialect:
        return self._dialect

    @property
    def columns(self) -> tuple[str, ...]:
        return tuple(self._cols)

    def set_dialect(self, dialect: Dialect | str) -> InsertBuilder:
        """Render with *dialect* from now on."""
        self._dialect = resolve_dialect(dialect, self._config.default_dialect)
        return self

    def cols(self, *names: str) -> InsertBuilder:
        """Append column names.

        Raises:
            ShapeError: If a column is already present.
        """
        for name in names:
            if name in self._cols:
                raise ShapeError(f"duplicate column '{name}'")
            self._cols.append(name)
        return self

    def values(self, *args: Any) -> InsertBuilder:
        """Append one row. Wrap an argument in Raw to splice it as SQL.

        Raises:
            ArgCountMismatchError: If the argument count differs from the
                current column count.
        """
        if len(args) != len(self._cols):
            raise ArgCountMismatchError(len(self._cols), len(args), len(self._rows))
        self._rows.append(tuple(args))
        return self

    def option(self, clause: str) -> InsertBuilder:
        """Append a raw clause after the VALUES list."""
        self._options.append(clause)
        return self

    def from_rowset(self, rowset: RowSet) -> InsertBuilder:
        """Append the columns and every row of a normalized RowSet."""
        self.cols(*rowset.columns)
        for row in rowset.rows:
            self.values(*row)
        return self

    def safety(self) -> None:
        """Guard against statements that affect every row.

        INSERT and REPLACE only touch the rows they list, so there is
        nothing to check. Callers run it before executing any builder.
        """
        return None

    def build(self) -> tuple[str, list[Any]]:
        """Render the statement.

        Returns:
            Tuple of (sql, args). The number of placeholders in sql always
            equals len(args); Raw values consume neither.

        Raises:
            NoDataError: If no row was added.
            ArgCountMismatchError: If a row no longer matches the columns.
        """
        if not self._rows:
            raise NoDataError(self._table)

        width = len(self._cols)
        args: list[Any] = []
        groups: list[str] = []
        for index, row in enumerate(self._rows):
            if len(row) != width:
                raise ArgCountMismatchError(width, len(row), index)
            parts: list[str] = []
            for arg in row:
                if isinstance(arg, Raw):
                    parts.append(arg.sql)
                else:
                    args.append(arg)
                    parts.append(self._dialect.placeholder(len(args)))
            groups.append(f"({', '.join(parts)})")

        table = self._dialect.quote_cols([self._table])[0]
        cols = ", ".join(self._dialect.quote_cols(self._cols))
        sql = f"{self._mode.value} INTO {table} ({cols}) VALUES {', '.join(groups)}"
        if self._options:
            sql = f"{sql} {' '.join(self._options)}"

        logger.debug(
            "Built %s for %s: %d rows, %d args (%s)",
            self._mode.value,
            self._table,
            len(self._rows),
            len(args),
            self._dialect.name,
        )
        return sql, args


def insert(
    table: str,
    dialect: Dialect | str | None = None,
    config: BindConfig | None = None,
) -> InsertBuilder:
    """Start an INSERT statement for *table*."""
    return InsertBuilder(table, StatementMode.INSERT, dialect, config)


def replace(
    table: str,
    dialect: Dialect | str | None = None,
    config: BindConfig | None = None,
) -> InsertBuilder:
    """Start a REPLACE statement for *table*."""
    return InsertBuilder(table, StatementMode.REPLACE, dialect, config)
