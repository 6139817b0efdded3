"""RowBind exception hierarchy.

Builder and normalizer errors abort the whole build. Scanner errors abort
only the row being bound. Errors raised by a caller-supplied cursor are
never wrapped.
"""

from __future__ import annotations


class RowBindError(Exception):
    """Base exception for all RowBind errors."""


# --- Build ---


class BuildError(RowBindError):
    """Base for statement building errors."""


class ShapeError(BuildError):
    """Raised when input data has an unsupported shape."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Unsupported input shape: {detail}")


class EmptyInputError(ShapeError):
    """Raised when there is no input data to build from."""

    def __init__(self, detail: str = "no data") -> None:
        super().__init__(detail)


class ColumnMismatchError(BuildError):
    """Raised when a row does not supply a column fixed by the first row."""

    def __init__(self, row_index: int, column: str) -> None:
        self.row_index = row_index
        self.column = column
        super().__init__(f"Invalid values[{row_index}] for column: '{column}'")


class ArgCountMismatchError(BuildError):
    """Raised when a row's argument count differs from the column count."""

    def __init__(self, expected: int, got: int, row_index: int | None = None) -> None:
        self.expected = expected
        self.got = got
        self.row_index = row_index
        where = "" if row_index is None else f" in row {row_index}"
        super().__init__(f"Expected {expected} values{where}, got {got}")


class NoDataError(BuildError):
    """Raised when build() is called before any row was added."""

    def __init__(self, table: str) -> None:
        self.table = table
        super().__init__(f"No values to insert into '{table}'")


# --- Dialect ---


class DialectError(RowBindError):
    """Base for dialect errors."""


class DialectNotFoundError(DialectError):
    """Raised when no dialect is registered under a name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown SQL dialect: '{name}'")


# --- Scan ---


class ScanError(RowBindError):
    """Base for row scanning errors."""


class NilCursorError(ScanError):
    """Raised when no cursor is given to the scanner."""

    def __init__(self) -> None:
        super().__init__("rows can't be None")


class NotSettableError(ScanError):
    """Raised when the scan target cannot be written to."""

    def __init__(self, target: object) -> None:
        self.target = target
        super().__init__(f"Target is not settable: {target!r}")


class EmptyResultError(ScanError):
    """Raised when a single-record scan finds no rows."""

    def __init__(self) -> None:
        super().__init__("empty result")


class ConversionError(ScanError):
    """Raised when a column value cannot be bound to a field."""

    def __init__(
        self,
        source_type: str,
        target: str,
        column: str | None = None,
        detail: str | None = None,
    ) -> None:
        self.source_type = source_type
        self.target = target
        self.column = column
        self.detail = detail
        message = f"Cannot convert {source_type} to {target}"
        if column is not None:
            message += f" (column '{column}')"
        if detail:
            message += f": {detail}"
        super().__init__(message)
