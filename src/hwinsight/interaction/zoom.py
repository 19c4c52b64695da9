"""
Zoom/pan controller for the process scatter chart.

A click (pointer down and up without moving past the threshold) toggles
between the full view and a 0.7x window centered on the clicked data point.
While zoomed, dragging pans both axes by the pointer displacement relative
to the container size. The Y axis is a percentage and stays within
``[0, 100]``; domain widths never change while panning.
"""

import logging
from typing import Iterable, Optional, Sequence, Tuple, Union

from ..models.zoom import (
    AUTO,
    DEFAULT_X_DOMAIN,
    DEFAULT_Y_DOMAIN,
    ContainerRect,
    Point,
    XDomain,
    YDomain,
    ZoomState,
)
from ..numeric_utils import round_half_up

logger = logging.getLogger(__name__)

# Pixel distance separating a click from a drag.
CLICK_THRESHOLD = 5

ZOOM_FACTOR = 0.7

Y_MIN = 0
Y_MAX = 100


def _pan(delta: float, size: float, domain: Tuple[float, float], sign: int) -> Tuple[float, float]:
    """Translate ``domain`` by ``delta / size`` of its width; ``sign`` is -1 for X, +1 for Y."""
    shift = (delta / size) * (domain[1] - domain[0]) * sign
    return domain[0] + shift, domain[1] + shift


class ScatterZoomController:
    """
    Pointer driven zoom/pan state of one scatter chart.

    Pointer coordinates are in the same space as ``rect`` (e.g. client pixels).
    Data points are any objects with ``x`` and ``y`` attributes, or ``(x, y)``
    pairs.
    """

    def __init__(self, points: Iterable = (), rect: Optional[ContainerRect] = None):
        self.points: Sequence[Point] = []
        self.rect = rect
        self.is_zoomed = False
        self.x_domain: XDomain = DEFAULT_X_DOMAIN
        self.y_domain: YDomain = DEFAULT_Y_DOMAIN
        self.drag_origin: Optional[Point] = None
        self.has_moved = False
        self.is_dragging = False
        self.set_data(points)

    # --- data and geometry -------------------------------------------------

    def set_data(self, points: Iterable) -> None:
        self.points = [
            (p[0], p[1]) if isinstance(p, (tuple, list)) else (p.x, p.y)
            for p in points
        ]

    def set_rect(self, rect: ContainerRect) -> None:
        self.rect = rect

    # --- domain setters ----------------------------------------------------

    def _set_x_domain(self, domain: Tuple[float, Union[float, str]]) -> None:
        if domain[1] == AUTO:
            self.x_domain = DEFAULT_X_DOMAIN
            return
        raw_start = round_half_up(domain[0])
        raw_end = round_half_up(domain[1])
        width = max(1, raw_end - raw_start)
        start = max(0, raw_start)
        self.x_domain = (start, start + width)

    def _set_y_domain(self, domain: Tuple[float, float]) -> None:
        raw_start = round_half_up(domain[0])
        raw_end = round_half_up(domain[1])
        width = raw_end - raw_start
        start = min(max(Y_MIN, raw_start), Y_MAX - width)
        self.y_domain = (start, start + width)

    def reset(self) -> None:
        """Return to the full, unzoomed view."""
        self._set_x_domain(DEFAULT_X_DOMAIN)
        self._set_y_domain(DEFAULT_Y_DOMAIN)
        self.is_zoomed = False

    # --- pointer events ----------------------------------------------------

    def pointer_down(self, x: float, y: float) -> None:
        self.drag_origin = (x, y)
        self.has_moved = False
        self.is_dragging = True

    def pointer_move(self, x: float, y: float) -> None:
        if not self.is_zoomed or self.drag_origin is None or self.x_domain[1] == AUTO:
            return

        delta_x = x - self.drag_origin[0]
        delta_y = y - self.drag_origin[1]
        if abs(delta_x) <= CLICK_THRESHOLD and abs(delta_y) <= CLICK_THRESHOLD:
            return

        self.has_moved = True
        if self.rect is not None and self.rect.width > 0 and self.rect.height > 0:
            self._set_x_domain(_pan(delta_x, self.rect.width, self.x_domain, -1))
            self._set_y_domain(_pan(delta_y, self.rect.height, self.y_domain, 1))
        # Incremental: the next move is measured from here.
        self.drag_origin = (x, y)

    def pointer_up(self, x: float, y: float) -> None:
        self.is_dragging = False

        if self.drag_origin is None or self.has_moved:
            self.drag_origin = None
            self.has_moved = False
            return

        self.drag_origin = None
        if self.is_zoomed:
            self.reset()
            logger.debug("Scatter zoom reset")
            return
        self._zoom_at(x, y)

    def _zoom_at(self, x: float, y: float) -> None:
        if self.rect is None or self.rect.width <= 0 or self.rect.height <= 0:
            logger.debug("Ignoring zoom click without container geometry")
            return
        if not self.points:
            logger.debug("Ignoring zoom click on an empty chart")
            return

        x_ratio = (x - self.rect.left) / self.rect.width
        y_ratio = 1 - (y - self.rect.top) / self.rect.height

        xs = [p[0] for p in self.points]
        ys = [p[1] for p in self.points]
        x_min, x_max = min(xs), max(xs)
        y_min, y_max = min(ys), max(ys)

        click_x = x_min + x_ratio * (x_max - x_min)
        click_y = y_min + y_ratio * (y_max - y_min)
        half_width = (x_max - x_min) * ZOOM_FACTOR / 2
        half_height = (y_max - y_min) * ZOOM_FACTOR / 2

        self._set_x_domain((click_x - half_width, click_x + half_width))
        self._set_y_domain((click_y - half_height, click_y + half_height))
        self.is_zoomed = True
        logger.debug(f"Scatter zoomed to x={self.x_domain} y={self.y_domain}")

    # --- read side ---------------------------------------------------------

    @property
    def cursor(self) -> str:
        if self.is_zoomed:
            return "grabbing" if self.is_dragging else "grab"
        return "zoom-in"

    @property
    def state(self) -> ZoomState:
        return ZoomState(
            is_zoomed=self.is_zoomed,
            x_domain=self.x_domain,
            y_domain=self.y_domain,
            drag_origin=self.drag_origin,
            has_moved=self.has_moved,
            is_dragging=self.is_dragging,
        )
