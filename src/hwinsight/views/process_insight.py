"""
Process insight view: per-process statistics over a catalog period.

Backs both the sortable process table and the zoomable scatter chart.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from ..archive.base import Row
from ..archive.queries import build_process_stats_query
from ..interaction.zoom import ScatterZoomController
from ..models.archive import Period
from ..models.process import ProcessStat, ScatterPoint
from ..processes.aggregation import rows_to_process_stats, to_scatter_points
from ..processes.sorting import ProcessTableSorter
from ..windowing.periods import PeriodWindow, compute_window
from .base import PollingView

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _ProcessRequest:
    window: PeriodWindow
    query: str


class ProcessInsightView(PollingView):
    """
    Process statistics over ``[adjusted_end - period, adjusted_end]``.
    """

    def __init__(self, gateway, period: Period, offset: int = 0, **kwargs):
        super().__init__(gateway, **kwargs)
        self.period = Period(period)
        self.offset = offset
        self.process_stats: Optional[List[ProcessStat]] = None
        self.sorter = ProcessTableSorter()
        self.zoom = ScatterZoomController()

    @property
    def loading(self) -> bool:
        return self.process_stats is None

    def set_period(self, period: Period) -> None:
        self.period = Period(period)

    def set_offset(self, offset: int) -> None:
        self.offset = int(offset)

    @property
    def sorted_stats(self) -> List[ProcessStat]:
        return self.sorter.apply(self.process_stats or [])

    @property
    def scatter_points(self) -> List[ScatterPoint]:
        return to_scatter_points(self.process_stats or [])

    def _prepare(self) -> _ProcessRequest:
        window = compute_window(self.period, self.offset, self.now_ms(), self.interval_ms)
        return _ProcessRequest(
            window, build_process_stats_query(window.query_start, window.query_end)
        )

    async def _fetch(self, request: _ProcessRequest) -> List[Row]:
        return await self._load(request.query)

    def _apply(self, request: _ProcessRequest, fetched: List[Row]) -> None:
        self.process_stats = rows_to_process_stats(fetched)
        self.zoom.set_data(self.scatter_points)
        logger.debug(
            f"Process insight over {int(self.period)}min: {len(self.process_stats)} processes"
        )
