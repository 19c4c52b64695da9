"""
hwinsight: historical hardware telemetry windowing and aggregation.

The package turns an archive of per-minute hardware and process samples into
chart-ready series, process tables and an interactive scatter view.

The package is organized into specialized modules:
- config: Configuration management and validation
- models: Data structures and type definitions
- validation: Input validation and error handling
- archive: Query building and archive gateways (SQLite, Parquet)
- windowing: Period resolution, bucketing and label formatting
- processes: Per-process aggregation, filtering and sorting
- interaction: Zoom/pan state of the process scatter chart
- views: Polling view controllers with last-request-wins ordering
- cli: Command-line interface

Usage:
    From command line:
        hwinsight insight --hardware cpu --stats avg --period 60

    Programmatically:
        from hwinsight import InsightChartView, create_gateway, get_config
        config = get_config()
        gateway = create_gateway(config.archive.backend, config.archive.path)
        view = InsightChartView(gateway, HardwareKind.CPU, DataStats.AVG, Period.HOUR_1)
        await view.refresh()
"""

from .config import clear_config_cache, get_config, set_config_path
from .archive import ArchiveGateway, create_gateway
from .cli import main_cli

from .models import (
    AppConfig,
    DataStats,
    GpuMetric,
    HardwareKind,
    Period,
    ProcessStat,
    Series,
)

from .validation import ArchiveQueryError, ValidationError

from .windowing import build_period_series, build_range_series, compute_window
from .processes import ProcessTableSorter
from .interaction import ScatterZoomController
from .views import InsightChartView, ProcessInsightView, SnapshotView

__version__ = "1.0.0"

__all__ = [
    # Main interfaces
    "get_config",
    "clear_config_cache",
    "set_config_path",
    "ArchiveGateway",
    "create_gateway",
    "main_cli",
    # Models
    "AppConfig",
    "DataStats",
    "GpuMetric",
    "HardwareKind",
    "Period",
    "ProcessStat",
    "Series",
    # Errors
    "ArchiveQueryError",
    "ValidationError",
    # Engine
    "build_period_series",
    "build_range_series",
    "compute_window",
    "ProcessTableSorter",
    "ScatterZoomController",
    # Views
    "InsightChartView",
    "ProcessInsightView",
    "SnapshotView",
]
