from __future__ import annotations

"""Public configuration API for SampaSearch."""

from SampaSearch.config.app import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    load_config,
    load_config_with_defaults,
    parse_config_dict,
)
from SampaSearch.config.backend import BackendConfig
from SampaSearch.config.display import DisplayConfig
from SampaSearch.config.runtime import RuntimeConfig

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "RuntimeConfig",
    "BackendConfig",
    "DisplayConfig",
    "AppConfig",
    "load_config",
    "load_config_with_defaults",
    "parse_config_dict",
]
