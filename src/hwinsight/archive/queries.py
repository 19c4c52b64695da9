"""
Range-bounded query builders for the archive tables.

Two logical tables are queried: the per-interval hardware archive (one row
per archive interval with avg/max/min columns per hardware kind, plus a GPU
variant keyed by GPU name) and the raw process sample table. Column selection
is an explicit dispatch over the closed enums, so every combination a caller
can express maps to a column.
"""

from typing import Optional

from ..models.archive import DataStats, GpuMetric, HardwareKind
from ..time_utils import to_iso

DATA_ARCHIVE_TABLE = "DATA_ARCHIVE"
GPU_DATA_ARCHIVE_TABLE = "GPU_DATA_ARCHIVE"
PROCESS_STATS_TABLE = "PROCESS_STATS"

# Quoted: TIMESTAMP is a keyword in the Polars SQL dialect.
TIMESTAMP = '"timestamp"'


def _quote(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def _column_prefix(hardware: HardwareKind, gpu_metric: Optional[GpuMetric]) -> str:
    if hardware is HardwareKind.CPU:
        return "cpu"
    if hardware is HardwareKind.MEMORY:
        return "ram"
    if hardware is HardwareKind.GPU:
        if gpu_metric is GpuMetric.USAGE:
            return "usage"
        if gpu_metric is GpuMetric.TEMPERATURE:
            return "temperature"
        if gpu_metric is GpuMetric.DEDICATED_MEMORY:
            return "dedicated_memory"
        raise ValueError(f"GPU archive queries need a GpuMetric, got {gpu_metric!r}")
    raise ValueError(f"Unknown hardware kind: {hardware!r}")


def archive_column(
    hardware: HardwareKind,
    stats: DataStats,
    gpu_metric: Optional[GpuMetric] = None,
) -> str:
    """
    Name of the archive column holding ``stats`` for ``hardware``.

    Examples:
        >>> archive_column(HardwareKind.MEMORY, DataStats.MAX)
        'ram_max'
        >>> archive_column(HardwareKind.GPU, DataStats.AVG, GpuMetric.TEMPERATURE)
        'temperature_avg'
    """
    return f"{_column_prefix(hardware, gpu_metric)}_{DataStats(stats).value}"


def build_archive_query(
    hardware: HardwareKind,
    stats: DataStats,
    start_ms: int,
    end_ms: int,
    gpu_metric: Optional[GpuMetric] = None,
    gpu_name: Optional[str] = None,
) -> str:
    """
    Build a ``SELECT <column> AS value, timestamp`` query over ``[start, end]``.

    Args:
        hardware: Hardware kind to read
        stats: Statistic column to read
        start_ms: Inclusive lower bound, epoch milliseconds
        end_ms: Inclusive upper bound, epoch milliseconds
        gpu_metric: Required when ``hardware`` is GPU
        gpu_name: GPU to read when ``hardware`` is GPU

    Returns:
        SQL text understood by every gateway backend
    """
    column = archive_column(hardware, stats, gpu_metric)
    time_filter = f"{TIMESTAMP} BETWEEN {_quote(to_iso(start_ms))} AND {_quote(to_iso(end_ms))}"

    if hardware is HardwareKind.GPU:
        return (
            f"SELECT {column} AS value, {TIMESTAMP} "
            f"FROM {GPU_DATA_ARCHIVE_TABLE} "
            f"WHERE gpu_name = {_quote(gpu_name or '')} AND {time_filter}"
        )
    return (
        f"SELECT {column} AS value, {TIMESTAMP} "
        f"FROM {DATA_ARCHIVE_TABLE} "
        f"WHERE {time_filter}"
    )


def build_process_stats_query(
    start_ms: int, end_ms: int, order_by_cpu: bool = False
) -> str:
    """
    Build the per-process group-by query over ``[start, end]``.

    One row per distinct ``(pid, process_name)`` with average CPU and memory
    usage, the largest execution time and the latest sample timestamp.

    Args:
        start_ms: Inclusive lower bound, epoch milliseconds
        end_ms: Inclusive upper bound, epoch milliseconds
        order_by_cpu: Order rows by average CPU usage, highest first
    """
    query = (
        "SELECT pid, process_name, "
        "AVG(cpu_usage) AS avg_cpu_usage, "
        "AVG(memory_usage) AS avg_memory_usage, "
        "MAX(execution_sec) AS total_execution_sec, "
        f"MAX({TIMESTAMP}) AS latest_timestamp "
        f"FROM {PROCESS_STATS_TABLE} "
        f"WHERE {TIMESTAMP} BETWEEN {_quote(to_iso(start_ms))} AND {_quote(to_iso(end_ms))} "
        "GROUP BY pid, process_name"
    )
    if order_by_cpu:
        query += " ORDER BY avg_cpu_usage DESC"
    return query
