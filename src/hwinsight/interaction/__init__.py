"""
Pointer interaction state machines.
"""

from .zoom import CLICK_THRESHOLD, ZOOM_FACTOR, ScatterZoomController

__all__ = ["CLICK_THRESHOLD", "ZOOM_FACTOR", "ScatterZoomController"]
