"""Bind configuration.

BindConfig is a frozen Pydantic model threaded explicitly into the
normalizer, builder and scanner. There is no process-wide mutable default.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class BindConfig(BaseModel):
    """Configuration for statement building and row binding."""

    model_config = ConfigDict(frozen=True)

    tag_name: str = "db"
    default_dialect: str = "mysql"
    sort_mapping_keys: bool = False
    time_layout: str = "%Y-%m-%d %H:%M:%S"
    date_layout: str = "%Y-%m-%d"
    text_encoding: str = "utf-8"


DEFAULT_CONFIG = BindConfig()


def resolve_config(config: BindConfig | None) -> BindConfig:
    """Return *config*, or the default configuration when it is None."""
    return DEFAULT_CONFIG if config is None else config
