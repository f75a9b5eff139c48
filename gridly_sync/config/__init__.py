from __future__ import annotations

from ._validators import _ensure_api_key, _parse_csv_list
from .gridly import MAX_RECORDS_PER_REQUEST, GridlyConfig, MetadataColumn
from .settings import AppConfig, RuntimeConfig, Settings, load_config

__all__ = [
    "MAX_RECORDS_PER_REQUEST",
    "AppConfig",
    "GridlyConfig",
    "MetadataColumn",
    "RuntimeConfig",
    "Settings",
    "_ensure_api_key",
    "_parse_csv_list",
    "load_config",
]
