"""Utilities for loading VPM repository indices and their configuration."""

from .index_feed import (
    DEFAULT_INDEX_URL,
    IndexFeedError,
    IndexFetchError,
    IndexParseError,
    fetch_index,
    is_remote,
    load_index,
    parse_index_payload,
    read_index,
)
from .index_config import (
    ConfigError,
    IndexSourceConfig,
    Settings,
    default_settings,
    load_settings,
    load_settings_or_default,
)

__all__ = [
    # Index documents
    "DEFAULT_INDEX_URL",
    "IndexFeedError",
    "IndexFetchError",
    "IndexParseError",
    "fetch_index",
    "is_remote",
    "load_index",
    "parse_index_payload",
    "read_index",
    # Configuration
    "ConfigError",
    "IndexSourceConfig",
    "Settings",
    "default_settings",
    "load_settings",
    "load_settings_or_default",
]
