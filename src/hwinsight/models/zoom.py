"""
Zoom/pan state of the process scatter chart.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

# "auto" lets the renderer pick the upper bound from the data.
AUTO = "auto"

XDomain = Tuple[float, Union[float, str]]
YDomain = Tuple[float, float]
Point = Tuple[float, float]

DEFAULT_X_DOMAIN: XDomain = (0, AUTO)
DEFAULT_Y_DOMAIN: YDomain = (0, 100)


@dataclass(frozen=True)
class ContainerRect:
    """Pixel geometry of the chart container in pointer coordinates."""

    left: float
    top: float
    width: float
    height: float


@dataclass(frozen=True)
class ZoomState:
    """Snapshot of the zoom controller, as consumed by the renderer."""

    is_zoomed: bool = False
    x_domain: XDomain = DEFAULT_X_DOMAIN
    y_domain: YDomain = DEFAULT_Y_DOMAIN
    drag_origin: Optional[Point] = None
    has_moved: bool = False
    is_dragging: bool = False
