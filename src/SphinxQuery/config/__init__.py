from __future__ import annotations

"""Public configuration API for SphinxQuery."""

from SphinxQuery.config.app import (
    AppConfig,
    load_config,
    load_config_with_defaults,
    merge_config_dicts,
    parse_config_dict,
)
from SphinxQuery.config.query import QueryDefaults
from SphinxQuery.config.runtime import RuntimeConfig

__all__ = [
    "RuntimeConfig",
    "QueryDefaults",
    "AppConfig",
    "load_config",
    "load_config_with_defaults",
    "merge_config_dicts",
    "parse_config_dict",
]
