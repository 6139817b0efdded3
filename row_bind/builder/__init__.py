"""Builder layer - normalize input and render INSERT/REPLACE statements."""

from __future__ import annotations

from row_bind.builder.insert import InsertBuilder, Raw, insert, replace
from row_bind.builder.normalize import Normalizer, QuoteCols, RowSet, classify, normalize
from row_bind.builder.statement import (
    BuiltStatement,
    build_insert,
    build_replace,
    build_statement,
)

__all__ = [
    "InsertBuilder",
    "Raw",
    "insert",
    "replace",
    "Normalizer",
    "QuoteCols",
    "RowSet",
    "classify",
    "normalize",
    "BuiltStatement",
    "build_insert",
    "build_replace",
    "build_statement",
]
