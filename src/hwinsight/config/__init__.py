"""
Configuration management for the hwinsight package.

This module provides a clean interface for loading, validating, and accessing
configuration data from a TOML file with singleton pattern management.
"""

from .manager import (
    clear_config_cache,
    get_config,
    get_config_info,
    is_config_loaded,
    read_config_file,
    set_config_path,
)
from .validators import (
    validate_app_config,
    validate_archive_config,
    validate_display_config,
    validate_snapshot_config,
)

__all__ = [
    "get_config",
    "set_config_path",
    "clear_config_cache",
    "is_config_loaded",
    "get_config_info",
    "read_config_file",
    "validate_app_config",
    "validate_archive_config",
    "validate_display_config",
    "validate_snapshot_config",
]
