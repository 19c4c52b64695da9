"""
Bucketing and aggregation engine for the fixed-period charts.

Samples are grouped into fixed-width buckets keyed by their right-aligned
boundary, each bucket is reduced with the selected statistic, and the walk
over all boundaries of the window fills gaps with None up to the safe
horizon. A right-aligned bucket past the horizon is emitted only when it
already holds samples, so a window the sampler has not committed yet never
shows up as an empty point.
"""

import logging
from collections import defaultdict
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from ..models.archive import DataStats, Sample, Series
from ..time_utils import ceil_to_step, parse_timestamp
from .labels import LabelFormatter
from .periods import PeriodWindow

logger = logging.getLogger(__name__)

Aggregator = Callable[[Sequence[float]], float]

AGGREGATORS: Dict[DataStats, Aggregator] = {
    DataStats.AVG: lambda values: sum(values) / len(values),
    DataStats.MAX: max,
    DataStats.MIN: min,
}


def aggregate(values: Sequence[float], stats: DataStats) -> float:
    """
    Reduce one bucket with the statistic ``stats``.

    Raises:
        ValueError: If ``values`` is empty
    """
    if not values:
        raise ValueError("cannot aggregate an empty bucket")
    return AGGREGATORS[DataStats(stats)](values)


def rows_to_samples(
    rows: Iterable[Mapping],
    transform: Optional[Callable[[float], float]] = None,
) -> List[Sample]:
    """
    Convert gateway rows (``value``, ``timestamp``) to samples.

    Rows whose timestamp cannot be parsed are dropped. ``transform`` is
    applied to every non-null value (unit conversion, rounding).
    """
    samples = []
    dropped = 0
    for row in rows:
        ts = parse_timestamp(row.get("timestamp"))
        if ts is None:
            dropped += 1
            continue
        value = row.get("value")
        if value is not None:
            value = float(value)
            if transform is not None:
                value = transform(value)
        samples.append(Sample(value=value, timestamp=ts))
    if dropped:
        logger.debug(f"Dropped {dropped} rows with unreadable timestamps")
    return samples


def bucket_samples(
    samples: Iterable[Sample],
    step: int,
    align: Callable[[int, int], int] = ceil_to_step,
) -> Dict[int, List[float]]:
    """
    Group sample values by bucket boundary.

    Null values carry no data and are skipped.

    Args:
        samples: Samples to group
        step: Bucket width in milliseconds
        align: Maps a timestamp to its bucket boundary (ceil or floor)

    Returns:
        Mapping of bucket boundary to the values that fell in it
    """
    buckets: Dict[int, List[float]] = defaultdict(list)
    for sample in samples:
        if sample.value is None:
            continue
        buckets[align(sample.timestamp, step)].append(sample.value)
    return dict(buckets)


def build_period_series(
    samples: Iterable[Sample],
    window: PeriodWindow,
    stats: DataStats,
    formatter: LabelFormatter,
) -> Series:
    """
    Build the gap-filled series of a fixed-period chart.

    Args:
        samples: Samples fetched for the window
        window: Resolved window (see ``compute_window``)
        stats: Statistic used to reduce each bucket
        formatter: Label formatter for the window's period

    Returns:
        Series with one entry per populated bucket, plus a None placeholder
        for each empty bucket up to the safe horizon
    """
    buckets = bucket_samples(samples, window.step)

    labels: List[str] = []
    values: List[Optional[float]] = []
    skipped = 0
    for t in window.bucket_boundaries():
        bucket = buckets.get(t)
        if bucket:
            values.append(aggregate(bucket, stats))
        elif t <= window.adjusted_end_at:
            values.append(None)
        else:
            skipped += 1
            continue
        labels.append(formatter.format(t))

    if skipped:
        logger.debug(f"Omitted {skipped} empty buckets past the safe horizon")
    return Series(labels=labels, values=values)
