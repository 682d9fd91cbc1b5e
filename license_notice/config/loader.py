"""Configuration file discovery and loading for license-notice."""
from __future__ import annotations

import logging
from pathlib import Path

from license_notice.config.defaults import DEFAULT_CONFIG_NAMES, get_default_config
from license_notice.exceptions import ConfigurationError
from license_notice.loaders.yaml_file import load_yaml_model
from license_notice.models.config import NoticeConfig

logger = logging.getLogger(__name__)


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find the first default-named configuration file in a directory.

    Args:
        start_dir: Directory to search. Defaults to current working directory.

    Returns:
        Path to the configuration file if found, None otherwise.
    """
    search_dir = start_dir or Path.cwd()
    candidates = (search_dir / name for name in DEFAULT_CONFIG_NAMES)
    return next((path for path in candidates if path.exists()), None)


def load_config_file(path: Path) -> NoticeConfig:
    """Load and validate a notice configuration file.

    Raises:
        ConfigurationError: If the file is unreadable or invalid.
    """
    return load_yaml_model(path, NoticeConfig, ConfigurationError, "configuration")


def load_config(config_path: str | None = None) -> NoticeConfig:
    """Load configuration from an explicit path, the working directory, or defaults.

    Args:
        config_path: Optional path to configuration file.

    Returns:
        NoticeConfig with loaded or default values.

    Raises:
        ConfigurationError: If the selected config file is invalid.
    """
    path = Path(config_path) if config_path is not None else find_config_file()
    if path is None:
        return get_default_config()

    logger.debug("using configuration file %s", path)
    return load_config_file(path)
