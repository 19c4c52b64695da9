"""
Configuration data models.

This module contains the configuration structures loaded from `config.toml`:
where the archive lives, how values and labels are presented, and the
defaults of the snapshot view.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo


@dataclass
class ArchiveConfig:
    """
    Location and cadence of the archive store, from `[archive]`.
    """

    # Backend used to execute archive queries ("sqlite" or "parquet").
    backend: str = "sqlite"
    # SQLite database file, or directory holding one Parquet file per table.
    path: Path = Path("hardware_archive.db")
    # Commit cadence of the live sampler (the archive interval), in milliseconds.
    update_interval_ms: int = 60000


@dataclass
class DisplayConfig:
    """
    Presentation settings, from `[display]`.
    """

    # IANA name as written in the config file; "local" uses the host zone.
    timezone_name: str = "local"
    # Resolved zone for label formatting; None means local time.
    timezone: Optional[ZoneInfo] = None
    # "C" or "F"; only applies to GPU temperature series.
    temperature_unit: str = "C"
    # Decimal places kept on archived values before bucketing.
    value_precision: int = 1


@dataclass
class SnapshotConfig:
    """
    Defaults of the free-range snapshot view, from `[snapshot]`.
    """

    bucket_count: int = 100
    default_span_minutes: int = 1440


@dataclass
class AppConfig:
    """
    The root configuration object that aggregates all loaded settings.
    """

    archive: ArchiveConfig = field(default_factory=ArchiveConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    snapshot: SnapshotConfig = field(default_factory=SnapshotConfig)
    log_level: str = "INFO"
