"""
Archive and series data models.

This module contains the closed enumerations that address the hardware
archive (hardware kind, GPU metric, aggregation statistic, display period)
together with the immutable Sample read from the store and the Series handed
to the rendering layer.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional


class HardwareKind(Enum):
    """Hardware whose history is kept in the archive."""

    CPU = "cpu"
    MEMORY = "memory"
    GPU = "gpu"


class GpuMetric(Enum):
    """Per-GPU metric columns of the GPU archive."""

    USAGE = "usage"
    TEMPERATURE = "temp"
    DEDICATED_MEMORY = "dedicated_memory"


class DataStats(Enum):
    """Statistic used both for the archive column and the bucket reduction."""

    AVG = "avg"
    MAX = "max"
    MIN = "min"


class Period(IntEnum):
    """
    Catalog of display periods, in minutes.

    Only these values can be requested for the fixed-period charts; arbitrary
    spans go through the free-range variant instead.
    """

    MINUTES_10 = 10
    MINUTES_30 = 30
    HOUR_1 = 60
    HOURS_3 = 180
    HOURS_12 = 720
    DAY_1 = 1440
    WEEK_1 = 10080
    WEEKS_2 = 20160
    DAYS_30 = 43200


@dataclass(frozen=True)
class Sample:
    """
    A single archived value.

    ``timestamp`` is epoch milliseconds. ``value`` is None when the sampler
    stored an empty reading.
    """

    value: Optional[float]
    timestamp: int


@dataclass
class Series:
    """
    Index-aligned labels and values ordered by ascending time.

    This is the whole output contract of the windowing engine: the renderer
    draws ``values[i]`` at ``labels[i]`` and treats None as a gap.
    """

    labels: List[str] = field(default_factory=list)
    values: List[Optional[float]] = field(default_factory=list)

    def __post_init__(self):
        if len(self.labels) != len(self.values):
            raise ValueError(
                f"labels and values must have the same length "
                f"({len(self.labels)} != {len(self.values)})"
            )

    def __len__(self) -> int:
        return len(self.values)

    def is_empty(self) -> bool:
        return not self.values

    def to_dict(self) -> Dict[str, Any]:
        return {"labels": list(self.labels), "values": list(self.values)}
