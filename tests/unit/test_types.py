"""Unit tests for special field types."""

from __future__ import annotations

import json
from datetime import datetime, timezone

from row_bind.types import JsonTime


class TestJsonTime:
    def test_str(self) -> None:
        assert str(JsonTime(2024, 1, 2, 3, 4, 5)) == "2024-01-02 03:04:05"

    def test_str_drops_microseconds(self) -> None:
        assert str(JsonTime(2024, 1, 2, 3, 4, 5, 999)) == "2024-01-02 03:04:05"

    def test_to_json(self) -> None:
        encoded = JsonTime(2024, 1, 2).to_json()
        assert encoded == '"2024-01-02 00:00:00"'
        assert json.loads(encoded) == "2024-01-02 00:00:00"

    def test_from_datetime_keeps_tz(self) -> None:
        value = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        jt = JsonTime.from_datetime(value)
        assert isinstance(jt, JsonTime)
        assert jt == value
        assert jt.tzinfo is timezone.utc

    def test_as_datetime(self) -> None:
        plain = JsonTime(2024, 1, 2, 3, 4, 5).as_datetime()
        assert type(plain) is datetime
        assert plain == datetime(2024, 1, 2, 3, 4, 5)
