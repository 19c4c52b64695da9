"""
Process statistics: group-by aggregation, usage filters, scatter points and
the table sort state machine.
"""

from .aggregation import (
    MIN_BUBBLE_SIZE,
    aggregate_process_samples,
    filter_by_usage,
    rows_to_process_stats,
    to_scatter_points,
)
from .sorting import (
    ProcessTableSorter,
    compare_values,
    next_sort_state,
    sort_process_stats,
)

__all__ = [
    "MIN_BUBBLE_SIZE",
    "aggregate_process_samples",
    "filter_by_usage",
    "rows_to_process_stats",
    "to_scatter_points",
    "ProcessTableSorter",
    "compare_values",
    "next_sort_state",
    "sort_process_stats",
]
