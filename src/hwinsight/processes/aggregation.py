"""
Per-process aggregation helpers.

The archive normally performs the ``(pid, process_name)`` group-by itself;
this module converts its rows to ProcessStat, performs the same group-by
in memory with Polars for raw sample frames, and derives the filtered and
scatter views used by the process charts.
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union

import polars as pl

from ..models.process import ProcessStat, ScatterPoint, UsageRange
from ..time_utils import to_iso

logger = logging.getLogger(__name__)

# Bubble size floor so that processes with tiny memory usage stay visible.
MIN_BUBBLE_SIZE = 10.0


def rows_to_process_stats(rows: Iterable[Mapping[str, Any]]) -> List[ProcessStat]:
    """
    Convert rows of the process stats query to ProcessStat objects.

    Raises:
        KeyError: If the rows lack one of the query's column aliases
    """
    return [ProcessStat.from_row(row) for row in rows]


def aggregate_process_samples(
    samples: Union[pl.DataFrame, Sequence[Mapping[str, Any]]],
    start_ms: Optional[int] = None,
    end_ms: Optional[int] = None,
) -> List[ProcessStat]:
    """
    Group raw process samples by ``(pid, process_name)``.

    Per group: average CPU usage, average memory usage, largest execution
    time and latest timestamp. Groups keep the order of their first sample.

    Args:
        samples: Frame or rows with ``pid``, ``process_name``, ``cpu_usage``,
            ``memory_usage``, ``execution_sec`` and ISO ``timestamp`` columns
        start_ms: Optional inclusive lower bound on the sample timestamp
        end_ms: Optional inclusive upper bound on the sample timestamp

    Returns:
        One ProcessStat per distinct pair
    """
    df = samples if isinstance(samples, pl.DataFrame) else pl.DataFrame(list(samples))
    if df.is_empty():
        return []

    if start_ms is not None:
        df = df.filter(pl.col("timestamp") >= to_iso(start_ms))
    if end_ms is not None:
        df = df.filter(pl.col("timestamp") <= to_iso(end_ms))

    grouped = df.group_by(["pid", "process_name"], maintain_order=True).agg(
        pl.col("cpu_usage").mean().alias("avg_cpu_usage"),
        pl.col("memory_usage").mean().alias("avg_memory_usage"),
        pl.col("execution_sec").max().alias("total_execution_sec"),
        pl.col("timestamp").max().alias("latest_timestamp"),
    )
    logger.debug(f"Aggregated {len(df)} process samples into {len(grouped)} groups")
    return rows_to_process_stats(grouped.to_dicts())


def filter_by_usage(
    stats: Iterable[ProcessStat],
    cpu_range: Optional[UsageRange] = None,
    memory_range: Optional[UsageRange] = None,
) -> List[ProcessStat]:
    """Keep processes whose average CPU and memory usage fall in the given ranges."""
    return [
        stat
        for stat in stats
        if (cpu_range is None or cpu_range.contains(stat.avg_cpu_usage))
        and (memory_range is None or memory_range.contains(stat.avg_memory_usage))
    ]


def to_scatter_points(stats: Iterable[ProcessStat]) -> List[ScatterPoint]:
    """
    Scatter chart points: execution minutes vs. CPU usage, sized by memory.
    """
    return [
        ScatterPoint(
            x=stat.total_execution_sec / 60,
            y=stat.avg_cpu_usage,
            z=max(stat.avg_memory_usage, MIN_BUBBLE_SIZE),
            name=stat.process_name,
            pid=stat.pid,
        )
        for stat in stats
    ]
