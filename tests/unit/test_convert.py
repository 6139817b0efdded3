"""Unit tests for the type-conversion matrix."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any

import pytest

from row_bind.core.config import BindConfig
from row_bind.core.exceptions import ConversionError
from row_bind.mapping.convert import convert
from row_bind.mapping.fields import FieldDescriptor, describe
from row_bind.types import JsonTime, UInt


class Flags:
    def __init__(self) -> None:
        self.names: list[str] = []

    def unmarshal_bytes(self, data: bytes) -> None:
        if not data:
            raise ValueError("empty payload")
        self.names = data.decode().split(",")


class Raw:
    def __init__(self) -> None:
        self.value: Any = None

    def scan_value(self, value: Any) -> None:
        self.value = value


@dataclass
class Target:
    i: int = 0
    u: UInt = 0
    f: float = 0.0
    b: bool = False
    s: str = ""
    by: bytes = b""
    dt: datetime | None = None
    d: date | None = None
    jt: JsonTime | None = None
    dec: Decimal | None = None
    flags: Flags | None = None
    raw: Raw | None = None
    anything: Any = None


CONFIG = BindConfig()
FIELDS: dict[str, FieldDescriptor] = {d.attr: d for d in describe(Target)}


def conv(attr: str, value: Any, current: Any = None) -> Any:
    return convert(value, FIELDS[attr], current, CONFIG)


class TestIntSource:
    def test_to_int(self) -> None:
        assert conv("i", 42) == 42

    def test_to_uint(self) -> None:
        assert conv("u", 42) == 42

    def test_negative_to_uint(self) -> None:
        with pytest.raises(ConversionError):
            conv("u", -1)

    @pytest.mark.parametrize(("value", "expected"), [(0, False), (1, True), (-3, True)])
    def test_to_bool(self, value: int, expected: bool) -> None:
        assert conv("b", value) is expected

    def test_to_str(self) -> None:
        assert conv("s", 1234) == "1234"

    def test_to_float_fails(self) -> None:
        with pytest.raises(ConversionError) as exc:
            conv("f", 42)
        assert exc.value.source_type == "int"
        assert exc.value.target == "float"
        assert exc.value.column == "f"

    def test_to_datetime_fails(self) -> None:
        with pytest.raises(ConversionError):
            conv("dt", 42)


class TestFloatSource:
    def test_to_float(self) -> None:
        assert conv("f", 1.5) == 1.5

    @pytest.mark.parametrize("attr", ["i", "s", "b"])
    def test_to_other_fails(self, attr: str) -> None:
        with pytest.raises(ConversionError):
            conv(attr, 1.5)


class TestTemporalSource:
    def test_datetime_to_str(self) -> None:
        assert conv("s", datetime(2024, 1, 2, 3, 4, 5)) == "2024-01-02 03:04:05"

    def test_date_to_str(self) -> None:
        assert conv("s", date(2024, 1, 2)) == "2024-01-02"

    def test_custom_layout(self) -> None:
        config = BindConfig(time_layout="%d/%m/%Y")
        assert convert(datetime(2024, 1, 2), FIELDS["s"], None, config) == "02/01/2024"

    def test_datetime_to_datetime(self) -> None:
        value = datetime(2024, 1, 2, 3, 4, 5)
        assert conv("dt", value) is value

    def test_datetime_to_json_time(self) -> None:
        result = conv("jt", datetime(2024, 1, 2, 3, 4, 5))
        assert isinstance(result, JsonTime)
        assert str(result) == "2024-01-02 03:04:05"

    def test_datetime_to_date(self) -> None:
        assert conv("d", datetime(2024, 1, 2, 3, 4, 5)) == date(2024, 1, 2)

    def test_date_to_date(self) -> None:
        assert conv("d", date(2024, 1, 2)) == date(2024, 1, 2)

    def test_datetime_to_date_is_plain_date(self) -> None:
        assert type(conv("d", datetime(2024, 1, 2, 3))) is date

    def test_date_to_json_time_fails(self) -> None:
        with pytest.raises(ConversionError):
            conv("jt", date(2024, 1, 2))

    def test_datetime_to_int_fails(self) -> None:
        with pytest.raises(ConversionError):
            conv("i", datetime(2024, 1, 2))


class TestTextualSource:
    @pytest.mark.parametrize("value", [b"hello", bytearray(b"hello"), memoryview(b"hello")])
    def test_bytes_to_str(self, value: Any) -> None:
        assert conv("s", value) == "hello"

    def test_bytes_to_int(self) -> None:
        assert conv("i", b"-12") == -12

    def test_str_to_int(self) -> None:
        assert conv("i", "12") == 12

    def test_bytes_to_uint(self) -> None:
        assert conv("u", b"12") == 12

    def test_negative_bytes_to_uint(self) -> None:
        with pytest.raises(ConversionError):
            conv("u", b"-12")

    def test_bytes_to_float(self) -> None:
        assert conv("f", b"1.25") == 1.25

    @pytest.mark.parametrize(("value", "expected"), [(b"0", False), (b"1", True), (b"2", True)])
    def test_bytes_to_bool(self, value: bytes, expected: bool) -> None:
        assert conv("b", value) is expected

    def test_bytes_to_decimal(self) -> None:
        assert conv("dec", b"10.50") == Decimal("10.50")

    def test_bad_number(self) -> None:
        with pytest.raises(ConversionError):
            conv("i", b"twelve")

    def test_bad_decimal(self) -> None:
        with pytest.raises(ConversionError):
            conv("dec", "ten")

    def test_invalid_utf8(self) -> None:
        with pytest.raises(ConversionError):
            conv("s", b"\xff\xfe")

    def test_memoryview_to_bytes(self) -> None:
        assert conv("by", memoryview(b"abc")) == b"abc"

    def test_bytes_to_datetime_fails(self) -> None:
        with pytest.raises(ConversionError):
            conv("dt", b"2024-01-02")


class TestCapabilities:
    def test_byte_unmarshaler_new_instance(self) -> None:
        result = conv("flags", b"a,b")
        assert isinstance(result, Flags)
        assert result.names == ["a", "b"]

    def test_byte_unmarshaler_from_str(self) -> None:
        assert conv("flags", "x,y").names == ["x", "y"]

    def test_byte_unmarshaler_reuses_current(self) -> None:
        current = Flags()
        assert conv("flags", b"a", current) is current
        assert current.names == ["a"]

    def test_byte_unmarshaler_error(self) -> None:
        with pytest.raises(ConversionError, match="unmarshal_bytes"):
            conv("flags", b"")

    def test_value_scanner_gets_raw_value(self) -> None:
        marker = object()
        result = conv("raw", marker)
        assert isinstance(result, Raw)
        assert result.value is marker

    def test_value_scanner_bypasses_matrix(self) -> None:
        assert conv("raw", 1.5).value == 1.5


class TestAssignable:
    def test_any(self) -> None:
        marker = object()
        assert conv("anything", marker) is marker

    def test_bool_to_bool(self) -> None:
        assert conv("b", True) is True

    def test_bool_to_str_fails(self) -> None:
        with pytest.raises(ConversionError):
            conv("s", True)

    @pytest.mark.parametrize("attr", ["i", "u"])
    def test_bool_to_int_fails(self, attr: str) -> None:
        with pytest.raises(ConversionError):
            conv(attr, True)

    def test_unsupported_source(self) -> None:
        with pytest.raises(ConversionError):
            conv("i", [1, 2])
