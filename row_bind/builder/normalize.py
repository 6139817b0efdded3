"""Input normalization.

Reduces every supported input shape to a RowSet: an ordered tuple of unique
column names plus one argument tuple per row, each exactly as wide as the
column tuple.

Supported shapes:
    * a mapping with str keys                -> one row
    * a list/tuple of such mappings          -> columns fixed by the first
    * a dataclass or Pydantic record         -> one row, unset fields skipped
    * a list/tuple of records                -> columns fixed by the first
    * QuoteCols(<any of the above>)          -> same, marked as quoted
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from row_bind.core.config import BindConfig, resolve_config
from row_bind.core.enums import InputShape
from row_bind.core.exceptions import ColumnMismatchError, EmptyInputError, ShapeError
from row_bind.mapping.fields import FieldDescriptor, describe, is_record, is_zero


@dataclass(frozen=True)
class QuoteCols:
    """Wraps input data whose keys are identifiers to be quoted."""

    data: Any


@dataclass(frozen=True)
class RowSet:
    """Canonical (columns, rows) form of builder input.

    ``quoted`` records that the input came wrapped in QuoteCols. It is
    informational only: the builder quotes every column regardless.
    """

    columns: tuple[str, ...]
    rows: tuple[tuple[Any, ...], ...]
    quoted: bool = False


def classify(data: Any) -> InputShape:
    """Return the InputShape of *data*.

    Raises:
        EmptyInputError: If *data* is None or an empty sequence.
        ShapeError: If *data* is not a supported shape.
    """
    if data is None:
        raise EmptyInputError()
    if isinstance(data, QuoteCols):
        return InputShape.QUOTED
    if isinstance(data, Mapping):
        return InputShape.MAPPING
    if is_record(data):
        return InputShape.RECORD
    if isinstance(data, (list, tuple)):
        if not data:
            raise EmptyInputError("empty sequence")
        if all(isinstance(item, Mapping) for item in data):
            return InputShape.MAPPINGS
        if all(is_record(item) for item in data):
            return InputShape.RECORDS
        raise ShapeError("sequence items must be all mappings or all records")
    raise ShapeError(type(data).__name__)


class Normalizer:
    """Turns builder input into a RowSet.

    Args:
        config: Tag name for record column overrides and mapping key order.
    """

    def __init__(self, config: BindConfig | None = None) -> None:
        self._config = resolve_config(config)
        self._handlers: dict[InputShape, Callable[[Any], RowSet]] = {
            InputShape.MAPPING: self._from_mapping,
            InputShape.MAPPINGS: self._from_mappings,
            InputShape.RECORD: self._from_record,
            InputShape.RECORDS: self._from_records,
            InputShape.QUOTED: self._from_quoted,
        }

    def normalize(self, data: Any) -> RowSet:
        """Normalize *data* into a RowSet.

        Raises:
            EmptyInputError: If there is nothing to insert.
            ShapeError: If *data* has an unsupported shape.
            ColumnMismatchError: If a later row lacks a column of the first.
        """
        return self._handlers[classify(data)](data)

    # --- Mappings ---

    def _mapping_columns(self, data: Mapping[Any, Any]) -> list[str]:
        for key in data:
            if not isinstance(key, str):
                raise ShapeError(f"mapping keys must be str, got {type(key).__name__}")
        if not data:
            raise EmptyInputError("empty mapping")
        columns = list(data)
        if self._config.sort_mapping_keys:
            columns.sort()
        return columns

    def _from_mapping(self, data: Mapping[str, Any]) -> RowSet:
        columns = self._mapping_columns(data)
        return RowSet(tuple(columns), (tuple(data[col] for col in columns),))

    def _from_mappings(self, data: Sequence[Mapping[str, Any]]) -> RowSet:
        columns = self._mapping_columns(data[0])
        rows = []
        for index, item in enumerate(data):
            row = []
            for col in columns:
                if col not in item:
                    raise ColumnMismatchError(index, col)
                row.append(item[col])
            rows.append(tuple(row))
        return RowSet(tuple(columns), tuple(rows))

    # --- Records ---

    def _descriptors_by_column(self, record: Any) -> dict[str, FieldDescriptor]:
        by_column: dict[str, FieldDescriptor] = {}
        for desc in describe(type(record), self._config.tag_name):
            if desc.column in by_column:
                raise ShapeError(
                    f"{type(record).__name__} maps '{by_column[desc.column].attr}' "
                    f"and '{desc.attr}' to the same column '{desc.column}'"
                )
            by_column[desc.column] = desc
        return by_column

    def _from_record(self, data: Any) -> RowSet:
        columns = []
        values = []
        for col, desc in self._descriptors_by_column(data).items():
            value = getattr(data, desc.attr)
            # Zero values count as unset
            if is_zero(value):
                continue
            columns.append(col)
            values.append(value)
        if not columns:
            raise EmptyInputError(f"all fields of {type(data).__name__} are unset")
        return RowSet(tuple(columns), (tuple(values),))

    def _from_records(self, data: Sequence[Any]) -> RowSet:
        first = self._from_record(data[0])
        rows = [first.rows[0]]
        for index, item in enumerate(data[1:], start=1):
            # Later records are read against the first record's columns
            by_column = self._descriptors_by_column(item)
            row = []
            for col in first.columns:
                if col not in by_column:
                    raise ColumnMismatchError(index, col)
                row.append(getattr(item, by_column[col].attr))
            rows.append(tuple(row))
        return RowSet(first.columns, tuple(rows))

    def _from_quoted(self, data: QuoteCols) -> RowSet:
        inner = self.normalize(data.data)
        return RowSet(inner.columns, inner.rows, quoted=True)


def normalize(data: Any, config: BindConfig | None = None) -> RowSet:
    """Normalize *data* with a one-off Normalizer."""
    return Normalizer(config).normalize(data)
