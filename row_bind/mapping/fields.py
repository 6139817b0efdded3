"""Field descriptors for record types.

A record type is a dataclass or a Pydantic model. Its descriptor table is
derived once per (type, tag name) and reused by both the normalizer and the
scanner.

Column naming:
    An explicit override wins. Dataclasses declare it in field metadata,
    Pydantic models in ``json_schema_extra``, both under the configured tag
    name. Only the part before the first comma is used, so
    ``{"db": "user_name,omitempty"}`` maps to ``user_name``. Without an
    override the attribute name is converted from CamelCase to snake_case.
"""

from __future__ import annotations

import dataclasses
import re
import types
from collections.abc import Callable
from datetime import date, datetime
from decimal import Decimal
from functools import lru_cache
from typing import Annotated, Any, Union, get_args, get_origin, get_type_hints

from pydantic import BaseModel
from pydantic_core import PydanticUndefined

from row_bind.core.enums import FieldKind
from row_bind.core.exceptions import ShapeError
from row_bind.mapping.protocol import ByteUnmarshaler, ValueScanner
from row_bind.types import Unsigned

_FIRST_CAP = re.compile(r"([^_])([A-Z][a-z]+)")
_ALL_CAP = re.compile(r"([a-z0-9])([A-Z])")

_ZERO_VALUES: dict[FieldKind, Any] = {
    FieldKind.INT: 0,
    FieldKind.UINT: 0,
    FieldKind.FLOAT: 0.0,
    FieldKind.BOOL: False,
    FieldKind.STR: "",
    FieldKind.BYTES: b"",
    FieldKind.DECIMAL: Decimal(0),
}

# Order matters: bool before int, datetime before date
_KIND_BY_TYPE: tuple[tuple[type, FieldKind], ...] = (
    (bool, FieldKind.BOOL),
    (int, FieldKind.INT),
    (float, FieldKind.FLOAT),
    (str, FieldKind.STR),
    (bytes, FieldKind.BYTES),
    (bytearray, FieldKind.BYTES),
    (datetime, FieldKind.DATETIME),
    (date, FieldKind.DATE),
    (Decimal, FieldKind.DECIMAL),
)

_ZERO_TYPES = (
    bool,
    int,
    float,
    complex,
    Decimal,
    str,
    bytes,
    bytearray,
    list,
    tuple,
    dict,
    set,
    frozenset,
)


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


@dataclasses.dataclass(frozen=True)
class FieldDescriptor:
    """How one record field is named, typed and defaulted."""

    attr: str
    column: str
    kind: FieldKind
    py_type: Any
    optional: bool = False
    byte_unmarshal: bool = False
    value_scanner: bool = False
    default: Any = MISSING
    default_factory: Callable[[], Any] | None = None

    def initial_value(self) -> Any:
        """Value an unbound field takes in a freshly created record."""
        if self.default_factory is not None:
            return self.default_factory()
        if self.default is not MISSING:
            return self.default
        if self.optional:
            return None
        return _ZERO_VALUES.get(self.kind)


def camel_to_snake(name: str) -> str:
    """Convert a CamelCase name to snake_case.

    >>> camel_to_snake("UserName")
    'user_name'
    >>> camel_to_snake("HTTPCode")
    'http_code'
    """
    name = _FIRST_CAP.sub(r"\1_\2", name)
    return _ALL_CAP.sub(r"\1_\2", name).lower()


def resolve_tag_name(tag: str) -> str:
    """Return the name segment of a tag value, dropping comma modifiers."""
    return tag.split(",", 1)[0].strip()


def is_zero(value: Any) -> bool:
    """Return True if *value* is the zero value of its kind."""
    if value is None:
        return True
    return isinstance(value, _ZERO_TYPES) and not value


def is_pydantic_model(cls: Any) -> bool:
    return _is_class(cls) and issubclass(cls, BaseModel)


def is_record_type(cls: Any) -> bool:
    """Return True if *cls* is a dataclass or Pydantic model class."""
    return _is_class(cls) and (dataclasses.is_dataclass(cls) or issubclass(cls, BaseModel))


def is_record(value: Any) -> bool:
    """Return True if *value* is a dataclass or Pydantic model instance."""
    return not isinstance(value, type) and is_record_type(type(value))


def is_frozen(value: Any) -> bool:
    """Return True if the record instance *value* rejects attribute assignment."""
    cls = type(value)
    if dataclasses.is_dataclass(cls):
        return bool(cls.__dataclass_params__.frozen)  # type: ignore[attr-defined]
    if is_pydantic_model(cls):
        return bool(cls.model_config.get("frozen", False))
    return False


def _unwrap(annotation: Any) -> tuple[Any, bool, tuple[Any, ...]]:
    """Strip Annotated and Optional wrappers.

    Returns:
        Tuple of (inner type, optional flag, Annotated metadata).
    """
    metadata: tuple[Any, ...] = ()
    if get_origin(annotation) is Annotated:
        metadata = annotation.__metadata__
        annotation = get_args(annotation)[0]

    optional = False
    if get_origin(annotation) in (Union, types.UnionType):
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) < len(get_args(annotation)):
            optional = True
        if len(args) == 1:
            inner, _, inner_metadata = _unwrap(args[0])
            return inner, optional, metadata + inner_metadata
    return annotation, optional, metadata


def _is_class(tp: Any) -> bool:
    # Parameterized generics such as list[str] are not classes
    return isinstance(tp, type) and get_origin(tp) is None


def _kind_of(py_type: Any, metadata: tuple[Any, ...]) -> FieldKind:
    if not _is_class(py_type):
        return FieldKind.OTHER
    for base, kind in _KIND_BY_TYPE:
        if issubclass(py_type, base):
            if kind is FieldKind.INT and any(isinstance(m, Unsigned) for m in metadata):
                return FieldKind.UINT
            return kind
    return FieldKind.OTHER


def _make_descriptor(
    attr: str,
    annotation: Any,
    override: Any,
    default: Any,
    default_factory: Callable[[], Any] | None,
    extra_metadata: tuple[Any, ...] = (),
) -> FieldDescriptor:
    py_type, optional, metadata = _unwrap(annotation)
    metadata = metadata + extra_metadata
    column = resolve_tag_name(override) if isinstance(override, str) else ""
    is_class = _is_class(py_type)
    return FieldDescriptor(
        attr=attr,
        column=column or camel_to_snake(attr),
        kind=_kind_of(py_type, metadata),
        py_type=py_type,
        optional=optional,
        byte_unmarshal=is_class and issubclass(py_type, ByteUnmarshaler),
        value_scanner=is_class and issubclass(py_type, ValueScanner),
        default=default,
        default_factory=default_factory,
    )


def _describe_dataclass(cls: type, tag_name: str) -> list[FieldDescriptor]:
    hints = get_type_hints(cls, include_extras=True)
    descriptors = []
    for f in dataclasses.fields(cls):
        descriptors.append(
            _make_descriptor(
                f.name,
                hints.get(f.name, Any),
                f.metadata.get(tag_name),
                MISSING if f.default is dataclasses.MISSING else f.default,
                None if f.default_factory is dataclasses.MISSING else f.default_factory,
            )
        )
    return descriptors


def _describe_pydantic(cls: type[BaseModel], tag_name: str) -> list[FieldDescriptor]:
    descriptors = []
    for name, info in cls.model_fields.items():
        extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
        descriptors.append(
            _make_descriptor(
                name,
                info.annotation,
                extra.get(tag_name),
                MISSING if info.default is PydanticUndefined else info.default,
                info.default_factory,  # type: ignore[arg-type]
                tuple(info.metadata),
            )
        )
    return descriptors


@lru_cache(maxsize=256)
def describe(cls: type, tag_name: str = "db") -> tuple[FieldDescriptor, ...]:
    """Return the descriptor table for record type *cls*.

    Private attributes (leading underscore) are left out.

    Raises:
        ShapeError: If *cls* is neither a dataclass nor a Pydantic model.
    """
    if is_pydantic_model(cls):
        descriptors = _describe_pydantic(cls, tag_name)
    elif isinstance(cls, type) and dataclasses.is_dataclass(cls):
        descriptors = _describe_dataclass(cls, tag_name)
    else:
        raise ShapeError(f"{cls!r} is not a dataclass or Pydantic model")
    return tuple(d for d in descriptors if not d.attr.startswith("_"))
