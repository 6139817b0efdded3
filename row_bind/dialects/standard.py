"""Table-driven dialect implementation.

A StandardDialect is fully described by its quote characters and
placeholder style; no backend is special-cased in code.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from row_bind.core.enums import PlaceholderStyle

_PLACEHOLDERS: dict[PlaceholderStyle, Callable[[int], str]] = {
    PlaceholderStyle.QMARK: lambda index: "?",
    PlaceholderStyle.DOLLAR: lambda index: f"${index}",
    PlaceholderStyle.NUMERIC: lambda index: f":{index}",
}


@dataclass(frozen=True)
class StandardDialect:
    """Immutable dialect built from a quote style and a placeholder style.

    Attributes:
        name: Registered backend name.
        quote_open: Character opening a quoted identifier.
        quote_close: Character closing a quoted identifier. Occurrences of it
            inside an identifier are doubled.
        placeholder_style: How positional parameters are rendered.
    """

    name: str
    quote_open: str
    quote_close: str
    placeholder_style: PlaceholderStyle

    def quote(self, identifier: str) -> str:
        escaped = identifier.replace(self.quote_close, self.quote_close * 2)
        return f"{self.quote_open}{escaped}{self.quote_close}"

    def quote_cols(self, cols: list[str]) -> list[str]:
        quoted: list[str] = []
        for col in cols:
            # A leading dot is part of the name, not a qualifier
            if col.find(".") > 0:
                quoted.append(".".join(self.quote(part) for part in col.split(".")))
            else:
                quoted.append(self.quote(col))
        return quoted

    def placeholder(self, index: int) -> str:
        if index < 1:
            raise ValueError(f"Placeholder positions start at 1, got {index}")
        return _PLACEHOLDERS[self.placeholder_style](index)
