"""
Configuration validation utilities.

Turns the raw TOML dictionary into a validated AppConfig. Every section is
optional; missing keys fall back to the defaults of the config dataclasses.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ..models.config import AppConfig, ArchiveConfig, DisplayConfig, SnapshotConfig
from ..validation import (
    ValidationError,
    validate_enum_choice,
    validate_positive_integer,
    validate_timezone,
)

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ValidationError(
            f"[{name}] must be a table", field_name=name, value=section
        )
    return section


def validate_archive_config(
    archive_data: Dict[str, Any], config_dir: Optional[Path] = None
) -> ArchiveConfig:
    """
    Validate the `[archive]` section.

    Args:
        archive_data: Raw archive section from TOML
        config_dir: Directory of the config file, used to resolve relative paths

    Returns:
        Validated ArchiveConfig instance

    Raises:
        ValidationError: If validation fails
    """
    defaults = ArchiveConfig()

    backend = validate_enum_choice(
        archive_data.get("backend", defaults.backend),
        choices=["sqlite", "parquet"],
        field_name="archive.backend",
        case_sensitive=False,
    )

    raw_path = archive_data.get("path", str(defaults.path))
    if not isinstance(raw_path, str) or not raw_path.strip():
        raise ValidationError(
            "archive.path must be a non-empty string",
            field_name="archive.path",
            value=raw_path,
        )
    path = Path(raw_path).expanduser()
    if not path.is_absolute() and config_dir is not None:
        path = config_dir / path

    # The sampler never commits faster than once a second.
    update_interval_ms = validate_positive_integer(
        archive_data.get("update_interval_ms", defaults.update_interval_ms),
        min_value=1000,
        field_name="archive.update_interval_ms",
    )

    return ArchiveConfig(
        backend=backend, path=path, update_interval_ms=update_interval_ms
    )


def validate_display_config(display_data: Dict[str, Any]) -> DisplayConfig:
    """
    Validate the `[display]` section.

    Raises:
        ValidationError: If validation fails
    """
    defaults = DisplayConfig()

    timezone_name = str(display_data.get("timezone", defaults.timezone_name))
    tz = validate_timezone(timezone_name, field_name="display.timezone")

    temperature_unit = validate_enum_choice(
        display_data.get("temperature_unit", defaults.temperature_unit),
        choices=["C", "F"],
        field_name="display.temperature_unit",
        case_sensitive=False,
    )

    value_precision = validate_positive_integer(
        display_data.get("value_precision", defaults.value_precision),
        min_value=0,
        max_value=6,
        field_name="display.value_precision",
    )

    return DisplayConfig(
        timezone_name=timezone_name,
        timezone=tz,
        temperature_unit=temperature_unit,
        value_precision=value_precision,
    )


def validate_snapshot_config(snapshot_data: Dict[str, Any]) -> SnapshotConfig:
    """
    Validate the `[snapshot]` section.

    Raises:
        ValidationError: If validation fails
    """
    defaults = SnapshotConfig()

    bucket_count = validate_positive_integer(
        snapshot_data.get("bucket_count", defaults.bucket_count),
        min_value=1,
        max_value=10000,
        field_name="snapshot.bucket_count",
    )
    default_span_minutes = validate_positive_integer(
        snapshot_data.get("default_span_minutes", defaults.default_span_minutes),
        min_value=1,
        field_name="snapshot.default_span_minutes",
    )

    return SnapshotConfig(
        bucket_count=bucket_count, default_span_minutes=default_span_minutes
    )


def validate_app_config(
    config_data: Dict[str, Any], config_dir: Optional[Path] = None
) -> AppConfig:
    """
    Validate a whole configuration document.

    Args:
        config_data: Parsed TOML data
        config_dir: Directory of the config file, used to resolve relative paths

    Returns:
        Validated AppConfig instance

    Raises:
        ValidationError: If any section fails validation
    """
    archive = validate_archive_config(_section(config_data, "archive"), config_dir)
    display = validate_display_config(_section(config_data, "display"))
    snapshot = validate_snapshot_config(_section(config_data, "snapshot"))

    log_level = validate_enum_choice(
        _section(config_data, "logging").get("level", "INFO"),
        choices=LOG_LEVELS,
        field_name="logging.level",
        case_sensitive=False,
    )

    return AppConfig(
        archive=archive, display=display, snapshot=snapshot, log_level=log_level
    )
