"""Field types with special binding behavior."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Annotated

JSON_TIME_LAYOUT = "%Y-%m-%d %H:%M:%S"


class JsonTime(datetime):
    """A datetime that renders as ``YYYY-MM-DD HH:MM:SS``.

    Fields declared as JsonTime are bound from datetime columns.
    """

    def __str__(self) -> str:
        return self.strftime(JSON_TIME_LAYOUT)

    def to_json(self) -> str:
        """Return the JSON string literal for this time, quotes included."""
        return f'"{self}"'

    def as_datetime(self) -> datetime:
        """Return a plain datetime with the same value."""
        return datetime.combine(self.date(), self.timetz())

    @classmethod
    def from_datetime(cls, value: datetime) -> JsonTime:
        return cls.combine(value.date(), value.timetz())


@dataclass(frozen=True)
class Unsigned:
    """Marks an ``int`` field as unsigned: negative values fail to bind."""


UInt = Annotated[int, Unsigned()]
