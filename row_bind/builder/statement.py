"""One-call statement construction from any supported input shape."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from row_bind.builder.insert import InsertBuilder
from row_bind.builder.normalize import Normalizer
from row_bind.core.config import BindConfig, resolve_config
from row_bind.core.enums import StatementMode
from row_bind.dialects.protocol import Dialect


@dataclass(frozen=True)
class BuiltStatement:
    """Statement text and its ordered arguments.

    Unpacks like a tuple: ``sql, args = stmt``.
    """

    sql: str
    args: list[Any] = field(default_factory=list)

    def __iter__(self) -> Iterator[Any]:
        yield self.sql
        yield self.args


def build_statement(
    table: str,
    data: Any,
    *,
    mode: StatementMode = StatementMode.INSERT,
    dialect: Dialect | str | None = None,
    option: str | None = None,
    config: BindConfig | None = None,
) -> BuiltStatement:
    """Normalize *data* and build an INSERT or REPLACE statement for it.

    Args:
        table: Target table.
        data: A mapping, a sequence of mappings, a record, a sequence of
            records, or any of these wrapped in QuoteCols.
        mode: INSERT or REPLACE.
        dialect: Dialect instance or registered name.
        option: Raw clause appended after the VALUES list.
        config: Bind configuration.

    Raises:
        EmptyInputError, ShapeError, ColumnMismatchError: From normalization.
    """
    config = resolve_config(config)
    rowset = Normalizer(config).normalize(data)
    builder = InsertBuilder(table, mode, dialect, config).from_rowset(rowset)
    if option:
        builder.option(option)
    sql, args = builder.build()
    return BuiltStatement(sql, args)


def build_insert(
    table: str,
    data: Any,
    *,
    dialect: Dialect | str | None = None,
    option: str | None = None,
    config: BindConfig | None = None,
) -> BuiltStatement:
    """Build an INSERT statement for *data*."""
    return build_statement(
        table, data, mode=StatementMode.INSERT, dialect=dialect, option=option, config=config
    )


def build_replace(
    table: str,
    data: Any,
    *,
    dialect: Dialect | str | None = None,
    option: str | None = None,
    config: BindConfig | None = None,
) -> BuiltStatement:
    """Build a REPLACE statement for *data*."""
    return build_statement(
        table, data, mode=StatementMode.REPLACE, dialect=dialect, option=option, config=config
    )
