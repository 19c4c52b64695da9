"""
Period/step resolution for the fixed-period charts.

Each catalog period is drawn with a bucket width that is a whole multiple of
the archive interval, chosen so that the chart has a readable number of
points. The window arithmetic used by the bucketing engine also lives here.
"""

import logging
from dataclasses import dataclass
from typing import Dict

from ..models.archive import Period
from ..time_utils import ceil_to_step

logger = logging.getLogger(__name__)

# Archive interval: the sampler commits one row per minute.
ARCHIVE_INTERVAL_MS = 60_000

# Bucket width per period, as a multiple of the archive interval.
STEP_MULTIPLIERS: Dict[Period, int] = {
    Period.MINUTES_10: 1,
    Period.MINUTES_30: 1,
    Period.HOUR_1: 1,
    Period.HOURS_3: 1,
    Period.HOURS_12: 10,
    Period.DAY_1: 30,
    Period.WEEK_1: 60,
    Period.WEEKS_2: 180,
    Period.DAYS_30: 720,
}


def resolve_step(period: Period, interval_ms: int = ARCHIVE_INTERVAL_MS) -> int:
    """
    Bucket width in milliseconds for a catalog period.

    Args:
        period: Catalog period
        interval_ms: Archive interval in milliseconds

    Returns:
        Step width (multiplier x archive interval)
    """
    return STEP_MULTIPLIERS[Period(period)] * interval_ms


def resolve_end_at(now_ms: int, offset: int, step: int) -> int:
    """
    Nominal window end, paged by whole buckets.

    ``offset`` 0 is the most recent window; positive offsets move back in
    history, negative ones forward.
    """
    return now_ms - offset * step


@dataclass(frozen=True)
class PeriodWindow:
    """
    Resolved time window of a fixed-period chart, all in epoch milliseconds.

    Attributes:
        period: Requested catalog period
        step: Bucket width
        end_at: Nominal end, ``now - offset * step``
        adjusted_end_at: Safe horizon, one archive interval before ``end_at``
        query_start: Inclusive lower bound of the archive query
        start_bucket: First (right-aligned) bucket boundary
        end_bucket: Last (right-aligned) bucket boundary
    """

    period: Period
    step: int
    end_at: int
    adjusted_end_at: int
    query_start: int
    start_bucket: int
    end_bucket: int

    @property
    def query_end(self) -> int:
        return self.adjusted_end_at

    def bucket_boundaries(self):
        """Right-aligned bucket boundaries from start to end, inclusive."""
        return range(self.start_bucket, self.end_bucket + 1, self.step)


def compute_window(
    period: Period,
    offset: int,
    now_ms: int,
    interval_ms: int = ARCHIVE_INTERVAL_MS,
) -> PeriodWindow:
    """
    Resolve the window of a fixed-period chart.

    The archive query covers ``[adjusted_end_at - period, adjusted_end_at]``.
    Bucket boundaries are right-aligned (``ceil``) because an archive row is
    stamped when its interval is committed, i.e. at the end of its window.

    Args:
        period: Catalog period
        offset: Signed number of whole buckets to page back in history
        now_ms: Current time
        interval_ms: Archive interval

    Returns:
        PeriodWindow with every derived bound
    """
    period = Period(period)
    step = resolve_step(period, interval_ms)
    period_ms = int(period) * 60_000

    end_at = resolve_end_at(now_ms, offset, step)
    adjusted_end_at = end_at - interval_ms
    query_start = adjusted_end_at - period_ms

    start_bucket = ceil_to_step(end_at - period_ms - interval_ms, step)
    end_bucket = ceil_to_step(end_at - interval_ms, step)

    window = PeriodWindow(
        period=period,
        step=step,
        end_at=end_at,
        adjusted_end_at=adjusted_end_at,
        query_start=query_start,
        start_bucket=start_bucket,
        end_bucket=end_bucket,
    )
    logger.debug(
        f"Window for period={int(period)} offset={offset}: step={step}ms, "
        f"buckets {start_bucket}..{end_bucket}, horizon {adjusted_end_at}"
    )
    return window
