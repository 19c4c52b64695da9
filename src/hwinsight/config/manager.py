"""
Configuration management and singleton pattern.

This module provides the main configuration loading and management interface,
implementing a singleton pattern to ensure configuration is loaded only once.
The configuration is the engine's read-only view of the settings store.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

from ..models.config import AppConfig
from ..validation import ErrorSeverity, handle_config_error
from .validators import validate_app_config

logger = logging.getLogger(__name__)

# --- Global Singleton for Configuration ---

_CONFIG: Optional[AppConfig] = None

# Default path to the main configuration file, relative to this script's location.
# Can be overridden (e.g., in tests or by the CLI) with set_config_path().
_CONFIG_FILE_PATH = Path(__file__).parent.parent.parent.parent / "conf" / "config.toml"


def set_config_path(config_path: Path) -> None:
    """
    Set a custom configuration file path.

    Clears the cached configuration so the next get_config() call reloads
    from the new location.

    Args:
        config_path: Path to the main config.toml file
    """
    global _CONFIG_FILE_PATH, _CONFIG
    _CONFIG_FILE_PATH = Path(config_path)
    _CONFIG = None
    logger.info(f"Configuration path set to: {config_path}")


def clear_config_cache() -> None:
    """
    Clear the cached configuration, forcing a reload on next access.
    """
    global _CONFIG
    _CONFIG = None
    logger.debug("Configuration cache cleared")


def read_config_file(config_path: Path) -> Dict[str, Any]:
    """
    Parse the TOML file at ``config_path`` into a plain dictionary.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the file is malformed
    """
    logger.info(f"Reading configuration from {config_path}")
    with open(config_path, "rb") as f:
        return tomllib.load(f)


def _load_config(config_path: Path) -> AppConfig:
    """
    Load and validate the application configuration.

    A missing default file is not an error: the engine then runs on built-in
    defaults. Malformed or invalid files always are.

    Raises:
        ValidationError: If configuration validation fails
        tomllib.TOMLDecodeError: If the TOML file is malformed
    """
    if not config_path.exists():
        logger.warning(f"No configuration file at {config_path}, using defaults")
        return validate_app_config({})

    try:
        config_data = read_config_file(config_path)
        app_config = validate_app_config(config_data, config_dir=config_path.parent)
        logger.info(
            f"Loaded configuration: backend={app_config.archive.backend}, "
            f"archive={app_config.archive.path}"
        )
        return app_config
    except Exception as e:
        handle_config_error(
            error=e,
            context="processing configuration",
            severity=ErrorSeverity.CRITICAL,
            reraise=True,
            logger=logger
        )
        raise


def get_config() -> AppConfig:
    """
    Get the global application configuration, loading it if necessary.

    Returns:
        The singleton AppConfig instance

    Raises:
        ValidationError: If configuration validation fails
        tomllib.TOMLDecodeError: If the TOML file is malformed
    """
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = _load_config(_CONFIG_FILE_PATH)
    return _CONFIG


def is_config_loaded() -> bool:
    """Check if configuration has been loaded and cached."""
    return _CONFIG is not None


def get_config_info() -> dict:
    """
    Get information about the current configuration state.

    Returns:
        Dictionary with configuration metadata
    """
    return {
        "config_loaded": is_config_loaded(),
        "config_path": str(_CONFIG_FILE_PATH),
        "archive_backend": _CONFIG.archive.backend if _CONFIG else None,
        "archive_path": str(_CONFIG.archive.path) if _CONFIG else None,
    }
