"""
Insight chart view: one hardware statistic over a catalog period.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..archive.base import Row
from ..archive.queries import build_archive_query
from ..models.archive import DataStats, GpuMetric, HardwareKind, Period, Series
from ..numeric_utils import round_half_up
from ..windowing.bucketing import build_period_series, rows_to_samples
from ..windowing.labels import LabelFormatter
from ..windowing.periods import PeriodWindow, compute_window
from .base import PollingView

logger = logging.getLogger(__name__)


def make_value_transform(
    metric: Optional[GpuMetric], temperature_unit: str, precision: int
) -> Callable[[float], float]:
    """
    Presentation transform applied to archived values before bucketing.

    GPU temperatures are converted to Fahrenheit when requested; every value
    is rounded to ``precision`` decimals.
    """
    fahrenheit = metric is GpuMetric.TEMPERATURE and temperature_unit.upper() == "F"

    def _transform(value: float) -> float:
        if fahrenheit:
            value = value * 9 / 5 + 32
        return float(round_half_up(value, precision))

    return _transform


@dataclass(frozen=True)
class _InsightRequest:
    window: PeriodWindow
    query: str
    stats: DataStats
    gpu_metric: Optional[GpuMetric]


class InsightChartView(PollingView):
    """
    Fixed-period chart of one archive column.

    For GPUs, ``gpu_metric`` and ``gpu_name`` select the column and the device.
    """

    def __init__(
        self,
        gateway,
        hardware: HardwareKind,
        stats: DataStats,
        period: Period,
        offset: int = 0,
        gpu_metric: Optional[GpuMetric] = None,
        gpu_name: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(gateway, **kwargs)
        if hardware is HardwareKind.GPU and gpu_metric is None:
            raise ValueError("GPU insight charts need a gpu_metric")
        self.hardware = HardwareKind(hardware)
        self.stats = DataStats(stats)
        self.period = Period(period)
        self.offset = offset
        self.gpu_metric = gpu_metric
        self.gpu_name = gpu_name or ""
        self.series = Series()
        self.window: Optional[PeriodWindow] = None

    @property
    def labels(self) -> List[str]:
        return self.series.labels

    @property
    def values(self) -> List[Optional[float]]:
        return self.series.values

    def set_period(self, period: Period) -> None:
        self.period = Period(period)

    def set_offset(self, offset: int) -> None:
        self.offset = int(offset)

    def set_stats(self, stats: DataStats) -> None:
        self.stats = DataStats(stats)

    def _prepare(self) -> _InsightRequest:
        window = compute_window(self.period, self.offset, self.now_ms(), self.interval_ms)
        query = build_archive_query(
            self.hardware,
            self.stats,
            window.query_start,
            window.query_end,
            gpu_metric=self.gpu_metric,
            gpu_name=self.gpu_name,
        )
        return _InsightRequest(window, query, self.stats, self.gpu_metric)

    async def _fetch(self, request: _InsightRequest) -> List[Row]:
        return await self._load(request.query)

    def _apply(self, request: _InsightRequest, fetched: List[Row]) -> None:
        display = self.config.display
        transform = make_value_transform(
            request.gpu_metric, display.temperature_unit, display.value_precision
        )
        samples = rows_to_samples(fetched, transform)
        formatter = LabelFormatter(int(request.window.period), display.timezone)
        self.series = build_period_series(samples, request.window, request.stats, formatter)
        self.window = request.window
        logger.debug(
            f"{self.hardware.value} {request.stats.value} over {int(request.window.period)}min: "
            f"{len(fetched)} rows -> {len(self.series)} points"
        )
