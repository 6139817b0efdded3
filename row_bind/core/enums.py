"""Enumerations shared across the builder, dialects and scanner."""

from __future__ import annotations

from enum import Enum


class StatementMode(Enum):
    """Leading keyword of a built statement."""

    INSERT = "INSERT"
    REPLACE = "REPLACE"


class PlaceholderStyle(Enum):
    """How a dialect renders positional parameters."""

    QMARK = "qmark"  # ?
    DOLLAR = "dollar"  # $1, $2
    NUMERIC = "numeric"  # :1, :2


class InputShape(Enum):
    """Input shapes accepted by the normalizer."""

    MAPPING = "mapping"
    MAPPINGS = "mappings"
    RECORD = "record"
    RECORDS = "records"
    QUOTED = "quoted"


class FieldKind(Enum):
    """Declared kind of a record field, used by the conversion matrix."""

    INT = "int"
    UINT = "uint"
    FLOAT = "float"
    BOOL = "bool"
    STR = "str"
    BYTES = "bytes"
    DATETIME = "datetime"
    DATE = "date"
    DECIMAL = "decimal"
    OTHER = "other"
