"""Type-conversion matrix.

Maps a driver-produced column value onto the declared kind of a record
field. Lookups go by source type first, then by destination kind:

    int              -> int, unsigned int, bool (non-zero), str (decimal)
    float            -> float
    datetime / date  -> str (configured layout), datetime subclasses, date
    bytes / str      -> str, int, unsigned int, float, bool, Decimal,
                        ByteUnmarshaler

Values that already are instances of the destination type are assigned as
they are. Destination types implementing ValueScanner receive the raw value.
Everything else raises ConversionError.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, get_origin

from row_bind.core.config import BindConfig
from row_bind.core.enums import FieldKind
from row_bind.core.exceptions import ConversionError
from row_bind.mapping.fields import FieldDescriptor

_TEXTUAL = (bytes, bytearray, memoryview, str)

# An int passes isinstance for unsigned fields and a datetime for date fields,
# so these kinds are never assigned as they are
_MATRIX_ONLY = (FieldKind.UINT, FieldKind.DATE)


def _type_name(tp: Any) -> str:
    return getattr(tp, "__name__", None) or repr(tp)


def _fail(value: Any, desc: FieldDescriptor, detail: str | None = None) -> ConversionError:
    return ConversionError(_type_name(type(value)), _type_name(desc.py_type), desc.column, detail)


def _assignable(value: Any, py_type: Any) -> bool:
    if py_type is Any:
        return True
    origin = get_origin(py_type) or py_type
    return isinstance(origin, type) and isinstance(value, origin)


def as_text(value: bytes | bytearray | memoryview | str, encoding: str) -> str:
    """Decode a textual column payload."""
    if isinstance(value, str):
        return value
    return bytes(value).decode(encoding)


def as_bytes(value: bytes | bytearray | memoryview | str, encoding: str) -> bytes:
    """Encode a textual column payload as raw bytes."""
    if isinstance(value, str):
        return value.encode(encoding)
    return bytes(value)


def _parse_int(text: str, value: Any, desc: FieldDescriptor) -> int:
    try:
        return int(text, 10)
    except ValueError as e:
        raise _fail(value, desc, str(e)) from e


def _check_unsigned(number: int, value: Any, desc: FieldDescriptor) -> int:
    if number < 0:
        raise _fail(value, desc, f"negative value {number} for unsigned field")
    return number


def _unmarshal(payload: bytes, desc: FieldDescriptor, current: Any) -> Any:
    target = current if isinstance(current, desc.py_type) else desc.py_type()
    try:
        target.unmarshal_bytes(payload)
    except Exception as e:
        raise ConversionError(
            "bytes",
            _type_name(desc.py_type),
            desc.column,
            f"{_type_name(desc.py_type)}.unmarshal_bytes failed to unmarshal the bytes: {e}",
        ) from e
    return target


def _from_int(value: int, desc: FieldDescriptor) -> Any:
    kind = desc.kind
    if kind is FieldKind.INT:
        return desc.py_type(value)
    if kind is FieldKind.UINT:
        return desc.py_type(_check_unsigned(value, value, desc))
    if kind is FieldKind.BOOL:
        return value != 0
    if kind is FieldKind.STR:
        return str(value)
    raise _fail(value, desc)


def _from_float(value: float, desc: FieldDescriptor) -> Any:
    if desc.kind is FieldKind.FLOAT:
        return desc.py_type(value)
    raise _fail(value, desc)


def _from_temporal(value: date, desc: FieldDescriptor, config: BindConfig) -> Any:
    kind = desc.kind
    if kind is FieldKind.STR:
        layout = config.time_layout if isinstance(value, datetime) else config.date_layout
        return value.strftime(layout)
    if kind is FieldKind.DATETIME and isinstance(value, datetime):
        return desc.py_type.combine(value.date(), value.timetz())
    if kind is FieldKind.DATE:
        return value.date() if isinstance(value, datetime) else value
    raise _fail(value, desc, "convert time failed")


def _from_text(value: Any, desc: FieldDescriptor, current: Any, config: BindConfig) -> Any:
    kind = desc.kind
    if desc.byte_unmarshal:
        return _unmarshal(as_bytes(value, config.text_encoding), desc, current)
    if kind is FieldKind.BYTES:
        return desc.py_type(as_bytes(value, config.text_encoding))

    try:
        text = as_text(value, config.text_encoding)
    except UnicodeDecodeError as e:
        raise _fail(value, desc, str(e)) from e

    if kind is FieldKind.STR:
        return text
    if kind is FieldKind.INT:
        return _parse_int(text, value, desc)
    if kind is FieldKind.UINT:
        return _check_unsigned(_parse_int(text, value, desc), value, desc)
    if kind is FieldKind.BOOL:
        return _parse_int(text, value, desc) != 0
    if kind is FieldKind.FLOAT:
        try:
            return float(text)
        except ValueError as e:
            raise _fail(value, desc, str(e)) from e
    if kind is FieldKind.DECIMAL:
        try:
            return Decimal(text)
        except InvalidOperation as e:
            raise _fail(value, desc, f"invalid decimal literal {text!r}") from e
    raise _fail(value, desc)


def convert(value: Any, desc: FieldDescriptor, current: Any, config: BindConfig) -> Any:
    """Convert a non-null column *value* for the field described by *desc*.

    Args:
        value: Driver-produced column value, never None.
        desc: Descriptor of the destination field.
        current: The field's current value, reused by ByteUnmarshaler and
            ValueScanner destinations when it already has the right type.
        config: Layouts and text encoding.

    Returns:
        The value to assign to the field.

    Raises:
        ConversionError: If the source/destination pair is not supported.
    """
    if isinstance(value, bool) and desc.kind in (FieldKind.INT, FieldKind.UINT):
        raise _fail(value, desc)
    if desc.kind not in _MATRIX_ONLY and _assignable(value, desc.py_type):
        return value

    if desc.value_scanner:
        target = current if isinstance(current, desc.py_type) else desc.py_type()
        target.scan_value(value)
        return target

    if isinstance(value, bool):
        raise _fail(value, desc)
    if isinstance(value, int):
        return _from_int(value, desc)
    if isinstance(value, float):
        return _from_float(value, desc)
    if isinstance(value, date):
        return _from_temporal(value, desc, config)
    if isinstance(value, _TEXTUAL):
        return _from_text(value, desc, current, config)
    raise _fail(value, desc)
