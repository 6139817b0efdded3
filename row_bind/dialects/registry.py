"""Dialect registry.

Backends are declared as rows of a table; new backends plug in through
register_dialect().
"""

from __future__ import annotations

from row_bind.core.enums import PlaceholderStyle
from row_bind.core.exceptions import DialectNotFoundError
from row_bind.dialects.protocol import Dialect
from row_bind.dialects.standard import StandardDialect

# name -> (quote_open, quote_close, placeholder_style)
_BACKENDS: dict[str, tuple[str, str, PlaceholderStyle]] = {
    "mysql": ("`", "`", PlaceholderStyle.QMARK),
    "postgresql": ('"', '"', PlaceholderStyle.DOLLAR),
    "sqlite": ('"', '"', PlaceholderStyle.QMARK),
    "oracle": ('"', '"', PlaceholderStyle.NUMERIC),
    "mssql": ("[", "]", PlaceholderStyle.QMARK),
}

_ALIASES: dict[str, str] = {
    "mariadb": "mysql",
    "postgres": "postgresql",
    "sqlite3": "sqlite",
    "sqlserver": "mssql",
}

_DIALECTS: dict[str, Dialect] = {
    name: StandardDialect(name, quote_open, quote_close, style)
    for name, (quote_open, quote_close, style) in _BACKENDS.items()
}

MYSQL = _DIALECTS["mysql"]
POSTGRESQL = _DIALECTS["postgresql"]
SQLITE = _DIALECTS["sqlite"]
ORACLE = _DIALECTS["oracle"]
MSSQL = _DIALECTS["mssql"]


def register_dialect(dialect: Dialect) -> None:
    """Register *dialect* under its name, replacing any previous entry."""
    if not isinstance(dialect, Dialect):
        raise TypeError(f"{dialect!r} does not implement the Dialect protocol")
    _DIALECTS[dialect.name.lower()] = dialect


def get_dialect(name: str) -> Dialect:
    """Look up a dialect by case-insensitive name or alias.

    Raises:
        DialectNotFoundError: If no dialect is registered under *name*.
    """
    key = name.lower()
    key = _ALIASES.get(key, key)
    try:
        return _DIALECTS[key]
    except KeyError:
        raise DialectNotFoundError(name) from None


def dialect_names() -> list[str]:
    """List registered dialect names, sorted alphabetically."""
    return sorted(_DIALECTS)


def resolve_dialect(dialect: Dialect | str | None, default: str) -> Dialect:
    """Return *dialect* as a Dialect, looking names up in the registry.

    None resolves to the dialect registered under *default*.
    """
    if dialect is None:
        return get_dialect(default)
    if isinstance(dialect, str):
        return get_dialect(dialect)
    return dialect
