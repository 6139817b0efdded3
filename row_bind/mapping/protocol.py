"""Scanner protocols.

Rows is the cursor abstraction consumed by the scanner. ByteUnmarshaler and
ValueScanner are capabilities a field type may declare to take over its own
decoding.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Rows(Protocol):
    """Cursor over query result rows."""

    def close(self) -> None:
        """Release the underlying cursor."""
        ...

    def columns(self) -> list[str]:
        """Column names, in result order."""
        ...

    def next(self) -> bool:
        """Advance to the next row. Returns False when exhausted."""
        ...

    def scan(self) -> Sequence[Any]:
        """Values of the current row, in column order."""
        ...


@runtime_checkable
class ByteUnmarshaler(Protocol):
    """Field type that decodes itself from a raw byte payload."""

    def unmarshal_bytes(self, data: bytes) -> None:
        """Populate this instance from *data*."""
        ...


@runtime_checkable
class ValueScanner(Protocol):
    """Field type that accepts the driver's raw value unmodified."""

    def scan_value(self, value: Any) -> None:
        """Populate this instance from *value*."""
        ...
