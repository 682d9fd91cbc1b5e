"""Configuration handling for license-notice."""
from __future__ import annotations

from license_notice.config.defaults import DEFAULT_CONFIG_NAMES, get_default_config
from license_notice.config.loader import (
    find_config_file,
    load_config,
    load_config_file,
)
from license_notice.models.config import LinkagePolicy, NoticeConfig

__all__ = [
    "DEFAULT_CONFIG_NAMES",
    "LinkagePolicy",
    "NoticeConfig",
    "find_config_file",
    "get_default_config",
    "load_config",
    "load_config_file",
]
