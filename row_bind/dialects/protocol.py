"""Dialect protocol.

Every dialect MUST implement this protocol. The builder only ever talks to
a dialect through these members.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Dialect(Protocol):
    """Backend-specific identifier quoting and placeholder rendering."""

    @property
    def name(self) -> str:
        """Registered backend name, e.g. 'mysql'."""
        ...

    def quote(self, identifier: str) -> str:
        """Quote a single identifier."""
        ...

    def quote_cols(self, cols: list[str]) -> list[str]:
        """Quote column names, quoting each segment of dotted names."""
        ...

    def placeholder(self, index: int) -> str:
        """Render the placeholder for 1-based parameter position *index*."""
        ...
