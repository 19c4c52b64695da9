"""
Process statistics data models.

These structures back the process-oriented views: the per-process aggregate
row produced by the group-by query, the table sort state, the usage range
filter of the snapshot view and the scatter point derived for the bubble
chart.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, Mapping, Tuple


@dataclass(frozen=True)
class ProcessStat:
    """
    Aggregated statistics for one ``(pid, process_name)`` pair in a window.
    """

    pid: int
    process_name: str
    avg_cpu_usage: float
    avg_memory_usage: float
    total_execution_sec: float
    latest_timestamp: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ProcessStat":
        """
        Build a ProcessStat from a gateway row.

        Args:
            row: Mapping with the column aliases of the process stats query

        Returns:
            ProcessStat instance

        Raises:
            KeyError: If a required column is missing from the row
        """
        return cls(
            pid=int(row["pid"]),
            process_name=str(row["process_name"]),
            avg_cpu_usage=float(row["avg_cpu_usage"] or 0.0),
            avg_memory_usage=float(row["avg_memory_usage"] or 0.0),
            total_execution_sec=float(row["total_execution_sec"] or 0.0),
            latest_timestamp=str(row["latest_timestamp"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


# Column keys a process table can be sorted by.
PROCESS_STAT_FIELDS: Tuple[str, ...] = tuple(f.name for f in fields(ProcessStat))


class SortDirection(Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


@dataclass(frozen=True)
class SortState:
    """Active sort column and direction of a process table."""

    key: str
    direction: SortDirection = SortDirection.ASCENDING


@dataclass(frozen=True)
class UsageRange:
    """Inclusive ``[low, high]`` filter on a usage column."""

    low: float = 0.0
    high: float = 100.0

    def contains(self, value: float) -> bool:
        return self.low <= value <= self.high


@dataclass(frozen=True)
class ScatterPoint:
    """
    One bubble of the process scatter chart.

    ``x`` is execution time in minutes, ``y`` the average CPU usage and ``z``
    the bubble size derived from memory usage.
    """

    x: float
    y: float
    z: float
    name: str
    pid: int
