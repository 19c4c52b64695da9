"""
Data models and structures for the telemetry insight engine.

Archive Models:
- Hardware kind, GPU metric and statistic enumerations
- The display period catalog
- Raw samples and the labeled output series

Process Models:
- Per-process aggregate rows and table sort state
- Usage range filters and scatter points

Interaction Models:
- Zoom/pan state of the scatter chart

Configuration Models:
- Archive location, display and snapshot settings
"""

from .archive import DataStats, GpuMetric, HardwareKind, Period, Sample, Series
from .config import AppConfig, ArchiveConfig, DisplayConfig, SnapshotConfig
from .process import (
    PROCESS_STAT_FIELDS,
    ProcessStat,
    ScatterPoint,
    SortDirection,
    SortState,
    UsageRange,
)
from .zoom import AUTO, ContainerRect, ZoomState

__all__ = [
    # Archive
    "DataStats",
    "GpuMetric",
    "HardwareKind",
    "Period",
    "Sample",
    "Series",
    # Configuration
    "AppConfig",
    "ArchiveConfig",
    "DisplayConfig",
    "SnapshotConfig",
    # Processes
    "PROCESS_STAT_FIELDS",
    "ProcessStat",
    "ScatterPoint",
    "SortDirection",
    "SortState",
    "UsageRange",
    # Interaction
    "AUTO",
    "ContainerRect",
    "ZoomState",
]
