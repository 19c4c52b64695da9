"""
Historical telemetry windowing.

- periods: catalog period to bucket width, window arithmetic
- bucketing: fixed-period bucketing, aggregation and gap filling
- free_range: fixed bucket count variant for arbitrary spans
- labels: span dependent label formatting
"""

from .bucketing import (
    AGGREGATORS,
    aggregate,
    bucket_samples,
    build_period_series,
    rows_to_samples,
)
from .free_range import (
    DEFAULT_BUCKET_COUNT,
    build_range_series,
    find_nearest_bucket,
    free_range_step,
)
from .labels import LabelFormatter, LabelProfile, label_profile
from .periods import (
    ARCHIVE_INTERVAL_MS,
    STEP_MULTIPLIERS,
    PeriodWindow,
    compute_window,
    resolve_end_at,
    resolve_step,
)

__all__ = [
    "AGGREGATORS",
    "aggregate",
    "bucket_samples",
    "build_period_series",
    "rows_to_samples",
    "DEFAULT_BUCKET_COUNT",
    "build_range_series",
    "find_nearest_bucket",
    "free_range_step",
    "LabelFormatter",
    "LabelProfile",
    "label_profile",
    "ARCHIVE_INTERVAL_MS",
    "STEP_MULTIPLIERS",
    "PeriodWindow",
    "compute_window",
    "resolve_end_at",
    "resolve_step",
]
