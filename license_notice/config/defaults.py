"""Default configuration values for license-notice."""

from __future__ import annotations

from license_notice.models.config import NoticeConfig

# Default configuration file names to search for
DEFAULT_CONFIG_NAMES = [".license-notice.yaml", ".license-notice.yml"]


def get_default_config() -> NoticeConfig:
    """Get the default configuration.

    Returns:
        NoticeConfig with all defaults (all fields None).
    """
    return NoticeConfig()
