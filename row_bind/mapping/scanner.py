"""Row scanner.

Binds rows read from a Rows cursor into dataclass or Pydantic records, or
returns them as plain dicts. The scanner advances the cursor exactly once
per produced row and never reads ahead; closing the cursor is left to the
caller that opened it.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, TypeVar, get_args, get_origin

from row_bind.core.config import BindConfig, resolve_config
from row_bind.core.exceptions import (
    ConversionError,
    EmptyResultError,
    NilCursorError,
    NotSettableError,
)
from row_bind.mapping.convert import as_text, convert
from row_bind.mapping.fields import (
    FieldDescriptor,
    describe,
    is_frozen,
    is_pydantic_model,
    is_record,
    is_record_type,
)
from row_bind.mapping.protocol import Rows

logger = logging.getLogger(__name__)

T = TypeVar("T")

_TEXTUAL = (bytes, bytearray, memoryview)


def _construct(cls: type[T], values: dict[str, Any]) -> T:
    """Create a record of type *cls* from already converted field values."""
    if is_pydantic_model(cls):
        return cls.model_construct(**values)  # type: ignore[attr-defined, no-any-return]

    init_names = {f.name for f in dataclasses.fields(cls) if f.init}  # type: ignore[arg-type]
    instance = cls(**{k: v for k, v in values.items() if k in init_names})
    for name, value in values.items():
        if name not in init_names:
            object.__setattr__(instance, name, value)
    return instance


class RowScanner:
    """Binds cursor rows into records through the conversion matrix.

    Args:
        config: Tag name, layouts and text encoding. Defaults to
            DEFAULT_CONFIG.
    """

    def __init__(self, config: BindConfig | None = None) -> None:
        self._config = resolve_config(config)

    @property
    def config(self) -> BindConfig:
        return self._config

    # --- Cursor access ---

    @staticmethod
    def _require(rows: Rows | None) -> Rows:
        if rows is None:
            raise NilCursorError()
        return rows

    @staticmethod
    def _read_row(rows: Rows, columns: list[str]) -> dict[str, Any] | None:
        if not rows.next():
            return None
        return dict(zip(columns, rows.scan(), strict=True))

    # --- Binding ---

    def _map_value(self, value: Any) -> Any:
        if not isinstance(value, _TEXTUAL):
            return value
        try:
            return as_text(value, self._config.text_encoding)
        except UnicodeDecodeError:
            return bytes(value)

    def _descriptors(self, cls: type) -> tuple[FieldDescriptor, ...]:
        return describe(cls, self._config.tag_name)

    def _convert_row(
        self,
        row: dict[str, Any],
        cls: type,
        current: dict[str, Any],
    ) -> dict[str, Any]:
        """Return converted values for every field with a non-null column.

        Any fault raised while converting is surfaced as ConversionError.
        """
        converted: dict[str, Any] = {}
        desc: FieldDescriptor | None = None
        try:
            for desc in self._descriptors(cls):
                value = row.get(desc.column)
                if value is None:
                    continue
                converted[desc.attr] = convert(value, desc, current.get(desc.attr), self._config)
        except ConversionError:
            raise
        except Exception as e:
            column = desc.column if desc is not None else None
            target = f"{cls.__name__}.{desc.attr}" if desc is not None else cls.__name__
            source = type(row.get(column)).__name__ if column is not None else "row"
            logger.debug("Bind fault on %s: %r", target, e)
            raise ConversionError(source, target, column, f"{type(e).__name__}: {e}") from e
        return converted

    def _initial_values(self, cls: type) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for desc in self._descriptors(cls):
            try:
                values[desc.attr] = desc.initial_value()
            except Exception as e:
                target = f"{cls.__name__}.{desc.attr}"
                raise ConversionError("default", target, detail=f"{type(e).__name__}: {e}") from e
        return values

    def bind_new(self, row: dict[str, Any], cls: type[T]) -> T:
        """Create a new *cls* record from *row*.

        Fields without a matching non-null column take their declared
        default, else the zero value of their kind.
        """
        values = self._initial_values(cls)
        values.update(self._convert_row(row, cls, values))
        try:
            return _construct(cls, values)
        except Exception as e:
            raise ConversionError("row", cls.__name__, detail=f"{type(e).__name__}: {e}") from e

    def bind_existing(self, row: dict[str, Any], instance: T) -> T:
        """Bind *row* into *instance*; nothing is assigned if any field fails."""
        cls = type(instance)
        current = {d.attr: getattr(instance, d.attr, None) for d in self._descriptors(cls)}
        converted = self._convert_row(row, cls, current)
        try:
            for attr, value in converted.items():
                setattr(instance, attr, value)
        except Exception as e:
            raise ConversionError("row", cls.__name__, detail=f"{type(e).__name__}: {e}") from e
        return instance

    # --- Public operations ---

    def scan_to_maps(self, rows: Rows | None) -> list[dict[str, Any]]:
        """Return every remaining row as a column -> value dict.

        Byte values are decoded as text. Payloads that are not valid text
        in the configured encoding are returned as bytes.
        """
        rows = self._require(rows)
        columns = list(rows.columns())
        result: list[dict[str, Any]] = []
        while (row := self._read_row(rows, columns)) is not None:
            result.append({col: self._map_value(value) for col, value in row.items()})
        logger.debug("Scanned %d rows into dicts", len(result))
        return result

    def scan_one(self, rows: Rows | None, model: type[T]) -> T:
        """Bind the next row into a new *model* record.

        Raises:
            NilCursorError: If *rows* is None.
            NotSettableError: If *model* is not a record type.
            EmptyResultError: If there is no row.
        """
        rows = self._require(rows)
        if not is_record_type(model):
            raise NotSettableError(model)
        columns = list(rows.columns())
        row = self._read_row(rows, columns)
        if row is None:
            raise EmptyResultError()
        return self.bind_new(row, model)

    def scan_into(self, rows: Rows | None, instance: T) -> T:
        """Bind the next row into the existing record *instance*.

        Raises:
            NilCursorError: If *rows* is None.
            NotSettableError: If *instance* is not a mutable record.
            EmptyResultError: If there is no row.
        """
        rows = self._require(rows)
        if not is_record(instance) or is_frozen(instance):
            raise NotSettableError(instance)
        columns = list(rows.columns())
        row = self._read_row(rows, columns)
        if row is None:
            raise EmptyResultError()
        return self.bind_existing(row, instance)

    def scan_all(
        self,
        rows: Rows | None,
        model: type[T],
        into: list[T] | None = None,
    ) -> list[T]:
        """Bind every remaining row into a fresh *model* record.

        Args:
            rows: Cursor to read from.
            model: Record type created once per row.
            into: Optional list to append to. Records bound before a failing
                row stay in it; the failing row is never appended.

        Returns:
            The list of records, empty if there were no rows.
        """
        rows = self._require(rows)
        if not is_record_type(model):
            raise NotSettableError(model)
        columns = list(rows.columns())
        result: list[T] = [] if into is None else into
        count = 0
        while (row := self._read_row(rows, columns)) is not None:
            result.append(self.bind_new(row, model))
            count += 1
        logger.debug("Scanned %d rows into %s", count, model.__name__)
        return result

    def scan(self, rows: Rows | None, target: Any, *, model: type | None = None) -> Any:
        """Bind *rows* according to the kind of *target*.

        * record class -> a single new record (scan_one)
        * ``list[Model]`` -> a list of new records (scan_all)
        * record instance -> that instance, bound in place (scan_into)
        * list instance with *model* -> records appended to it (scan_all)

        Raises:
            NotSettableError: For any other target.
        """
        rows = self._require(rows)
        if isinstance(target, list):
            if model is None:
                raise NotSettableError(target)
            return self.scan_all(rows, model, into=target)
        if get_origin(target) is list:
            args = get_args(target)
            if len(args) != 1:
                raise NotSettableError(target)
            return self.scan_all(rows, args[0])
        if is_record_type(target):
            return self.scan_one(rows, target)
        if is_record(target):
            return self.scan_into(rows, target)
        raise NotSettableError(target)


_default_scanner = RowScanner()


def scan(rows: Rows | None, target: Any, *, model: type | None = None) -> Any:
    """Bind *rows* into *target* using the default configuration."""
    return _default_scanner.scan(rows, target, model=model)


def scan_to_maps(rows: Rows | None) -> list[dict[str, Any]]:
    """Return all rows as dicts using the default configuration."""
    return _default_scanner.scan_to_maps(rows)
