"""Mapping layer - bind cursor rows into typed records."""

from __future__ import annotations

from row_bind.mapping.fields import FieldDescriptor, camel_to_snake, describe
from row_bind.mapping.protocol import ByteUnmarshaler, Rows, ValueScanner
from row_bind.mapping.scanner import RowScanner, scan, scan_to_maps

__all__ = [
    "RowScanner",
    "scan",
    "scan_to_maps",
    "FieldDescriptor",
    "describe",
    "camel_to_snake",
    "Rows",
    "ByteUnmarshaler",
    "ValueScanner",
]
