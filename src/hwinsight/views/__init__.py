"""
View controllers: per-view state, polling and request ordering.
"""

from .base import PollingView
from .insight import InsightChartView, make_value_transform
from .process_insight import ProcessInsightView
from .snapshot import SnapshotView

__all__ = [
    "PollingView",
    "InsightChartView",
    "make_value_transform",
    "ProcessInsightView",
    "SnapshotView",
]
