"""
Free-range windowing for user chosen ``[start, end)`` spans.

Unlike the fixed-period charts, the bucket width follows from the span and a
fixed bucket count, never going below the archive interval. Buckets are
left-aligned since the span is not tied to the archive's commit cadence, and
a bucket without an exact key match borrows the nearest populated bucket
within half a step.
"""

import logging
from datetime import tzinfo
from typing import Dict, Iterable, List, Optional

from ..models.archive import DataStats, Sample, Series
from ..numeric_utils import round_half_up
from ..time_utils import floor_to_step
from .bucketing import aggregate, bucket_samples
from .labels import LabelFormatter
from .periods import ARCHIVE_INTERVAL_MS

logger = logging.getLogger(__name__)

DEFAULT_BUCKET_COUNT = 100

# Free-range aggregates are shown with two decimals.
RANGE_VALUE_PRECISION = 2


def free_range_step(
    start_ms: int,
    end_ms: int,
    bucket_count: int = DEFAULT_BUCKET_COUNT,
    interval_ms: int = ARCHIVE_INTERVAL_MS,
) -> int:
    """
    Bucket width for a free range: ``max(floor(span / count), interval)``.

    A non-positive span falls back to the archive interval.
    """
    span = end_ms - start_ms
    if span <= 0:
        return interval_ms
    return max(span // bucket_count, interval_ms)


def find_nearest_bucket(
    buckets: Dict[int, List[float]], t: int, step: int
) -> Optional[List[float]]:
    """
    Values of the bucket at ``t``, or of the first populated bucket within ``step / 2``.
    """
    exact = buckets.get(t)
    if exact:
        return exact

    tolerance = step * 0.5
    for key in sorted(buckets):
        if abs(key - t) <= tolerance and buckets[key]:
            return buckets[key]
    return None


def build_range_series(
    samples: Iterable[Sample],
    start_ms: int,
    end_ms: int,
    stats: DataStats = DataStats.AVG,
    bucket_count: int = DEFAULT_BUCKET_COUNT,
    interval_ms: int = ARCHIVE_INTERVAL_MS,
    tz: Optional[tzinfo] = None,
) -> Series:
    """
    Build the series of a free-range chart.

    Args:
        samples: Samples fetched for ``[start_ms, end_ms]``
        start_ms: Range start, epoch milliseconds
        end_ms: Range end, epoch milliseconds
        stats: Statistic used to reduce each bucket
        bucket_count: Target number of buckets
        interval_ms: Archive interval, the minimum bucket width
        tz: Timezone for labels; None uses local time

    Returns:
        Series over every left-aligned boundary from start to end; empty if
        ``start_ms >= end_ms``
    """
    if start_ms >= end_ms:
        logger.warning(f"Empty range [{start_ms}, {end_ms}), returning an empty series")
        return Series()

    step = free_range_step(start_ms, end_ms, bucket_count, interval_ms)
    buckets = bucket_samples(samples, step, align=floor_to_step)
    formatter = LabelFormatter((end_ms - start_ms) / 60_000, tz)

    start_bucket = floor_to_step(start_ms, step)
    end_bucket = floor_to_step(end_ms, step)

    labels: List[str] = []
    values: List[Optional[float]] = []
    for t in range(start_bucket, end_bucket + 1, step):
        bucket = find_nearest_bucket(buckets, t, step)
        if bucket:
            values.append(round_half_up(aggregate(bucket, stats), RANGE_VALUE_PRECISION))
        else:
            values.append(None)
        labels.append(formatter.format(t))

    logger.debug(
        f"Range series: step={step}ms, {len(values)} buckets, "
        f"{sum(v is not None for v in values)} populated"
    )
    return Series(labels=labels, values=values)
