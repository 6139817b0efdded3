"""RowBind - dialect-aware INSERT building and typed row binding."""

from __future__ import annotations

from row_bind.builder.insert import InsertBuilder, Raw, insert, replace
from row_bind.builder.normalize import Normalizer, QuoteCols, RowSet, normalize
from row_bind.builder.statement import BuiltStatement, build_insert, build_replace
from row_bind.core.config import DEFAULT_CONFIG, BindConfig
from row_bind.core.cursor import DBAPIRows
from row_bind.core.enums import FieldKind, InputShape, PlaceholderStyle, StatementMode
from row_bind.core.exceptions import (
    ArgCountMismatchError,
    BuildError,
    ColumnMismatchError,
    ConversionError,
    DialectError,
    DialectNotFoundError,
    EmptyInputError,
    EmptyResultError,
    NilCursorError,
    NoDataError,
    NotSettableError,
    RowBindError,
    ScanError,
    ShapeError,
)
from row_bind.dialects.protocol import Dialect
from row_bind.dialects.registry import (
    MSSQL,
    MYSQL,
    ORACLE,
    POSTGRESQL,
    SQLITE,
    get_dialect,
    register_dialect,
)
from row_bind.dialects.standard import StandardDialect
from row_bind.mapping.protocol import ByteUnmarshaler, Rows, ValueScanner
from row_bind.mapping.scanner import RowScanner, scan, scan_to_maps
from row_bind.types import JsonTime, UInt, Unsigned

__all__ = [
    # Config
    "BindConfig",
    "DEFAULT_CONFIG",
    # Dialects
    "Dialect",
    "StandardDialect",
    "get_dialect",
    "register_dialect",
    "MYSQL",
    "POSTGRESQL",
    "SQLITE",
    "ORACLE",
    "MSSQL",
    # Builder
    "InsertBuilder",
    "Raw",
    "insert",
    "replace",
    "Normalizer",
    "QuoteCols",
    "RowSet",
    "normalize",
    "BuiltStatement",
    "build_insert",
    "build_replace",
    # Scanner
    "RowScanner",
    "Rows",
    "DBAPIRows",
    "ByteUnmarshaler",
    "ValueScanner",
    "scan",
    "scan_to_maps",
    # Types
    "JsonTime",
    "UInt",
    "Unsigned",
    # Enums
    "StatementMode",
    "PlaceholderStyle",
    "InputShape",
    "FieldKind",
    # Exceptions
    "RowBindError",
    "BuildError",
    "ShapeError",
    "EmptyInputError",
    "ColumnMismatchError",
    "ArgCountMismatchError",
    "NoDataError",
    "DialectError",
    "DialectNotFoundError",
    "ScanError",
    "NilCursorError",
    "NotSettableError",
    "EmptyResultError",
    "ConversionError",
]
