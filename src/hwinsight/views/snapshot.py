"""
Snapshot view: a user chosen time range with its process history.

The chart shows CPU or memory averages over the range with the free-range
windowing; the table lists per-process statistics over the same range,
filtered by CPU and memory usage ranges and sortable by column.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..archive.base import Row
from ..archive.queries import build_archive_query, build_process_stats_query
from ..models.archive import DataStats, HardwareKind, Series
from ..models.process import ProcessStat, UsageRange
from ..processes.aggregation import filter_by_usage, rows_to_process_stats
from ..processes.sorting import ProcessTableSorter
from ..windowing.bucketing import rows_to_samples
from ..windowing.free_range import build_range_series
from .base import PollingView

logger = logging.getLogger(__name__)

SNAPSHOT_KINDS = (HardwareKind.CPU, HardwareKind.MEMORY)


@dataclass(frozen=True)
class _SnapshotRequest:
    start_ms: int
    end_ms: int
    data_type: HardwareKind


class SnapshotView(PollingView):
    """
    Free-range chart plus process history for ``[start_ms, end_ms)``.

    Without an explicit range the view covers the configured default span
    ending now.
    """

    def __init__(
        self,
        gateway,
        start_ms: Optional[int] = None,
        end_ms: Optional[int] = None,
        data_type: HardwareKind = HardwareKind.CPU,
        **kwargs,
    ):
        super().__init__(gateway, **kwargs)
        if end_ms is None:
            end_ms = self.now_ms()
        if start_ms is None:
            start_ms = end_ms - self.config.snapshot.default_span_minutes * 60_000
        self.start_ms = start_ms
        self.end_ms = end_ms
        self.data_type = self._check_type(data_type)
        self.cpu_range = UsageRange(0, 100)
        self.memory_range = UsageRange(0, 100)
        self.sorter = ProcessTableSorter()
        self.series = Series()
        self.process_history: List[ProcessStat] = []

    @staticmethod
    def _check_type(data_type: HardwareKind) -> HardwareKind:
        data_type = HardwareKind(data_type)
        if data_type not in SNAPSHOT_KINDS:
            raise ValueError(f"Snapshots cover cpu or memory, got {data_type.value}")
        return data_type

    def set_range(self, start_ms: int, end_ms: int) -> None:
        self.start_ms = start_ms
        self.end_ms = end_ms

    def set_data_type(self, data_type: HardwareKind) -> None:
        self.data_type = self._check_type(data_type)

    def set_cpu_range(self, low: float, high: float) -> None:
        self.cpu_range = UsageRange(low, high)

    def set_memory_range(self, low: float, high: float) -> None:
        self.memory_range = UsageRange(low, high)

    @property
    def filtered_processes(self) -> List[ProcessStat]:
        """Process history within the usage ranges, in the active sort order."""
        filtered = filter_by_usage(self.process_history, self.cpu_range, self.memory_range)
        return self.sorter.apply(filtered)

    def _prepare(self) -> _SnapshotRequest:
        return _SnapshotRequest(self.start_ms, self.end_ms, self.data_type)

    async def _fetch(self, request: _SnapshotRequest) -> Tuple[List[Row], List[Row]]:
        if request.start_ms >= request.end_ms:
            return [], []
        series_query = build_archive_query(
            request.data_type, DataStats.AVG, request.start_ms, request.end_ms
        )
        process_query = build_process_stats_query(
            request.start_ms, request.end_ms, order_by_cpu=True
        )
        series_rows, process_rows = await asyncio.gather(
            self._load(series_query), self._load(process_query)
        )
        return series_rows, process_rows

    def _apply(self, request: _SnapshotRequest, fetched: Tuple[List[Row], List[Row]]) -> None:
        series_rows, process_rows = fetched
        self.series = build_range_series(
            rows_to_samples(series_rows),
            request.start_ms,
            request.end_ms,
            bucket_count=self.config.snapshot.bucket_count,
            interval_ms=self.interval_ms,
            tz=self.config.display.timezone,
        )
        self.process_history = rows_to_process_stats(process_rows)
        logger.debug(
            f"Snapshot {request.data_type.value}: {len(self.series)} points, "
            f"{len(self.process_history)} processes"
        )
