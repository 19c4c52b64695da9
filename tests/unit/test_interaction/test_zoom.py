"""
Unit tests for the scatter chart zoom/pan controller.
"""

import pytest

from hwinsight.interaction.zoom import CLICK_THRESHOLD, ScatterZoomController
from hwinsight.models.process import ScatterPoint
from hwinsight.models.zoom import AUTO, ContainerRect

RECT = ContainerRect(left=0, top=0, width=1000, height=500)
DATA = [(0, 0), (100, 100)]


def _click(controller, x, y):
    controller.pointer_down(x, y)
    controller.pointer_up(x, y)


@pytest.fixture
def zoomed():
    """Controller zoomed in on the center of the chart."""
    controller = ScatterZoomController(DATA, RECT)
    _click(controller, 500, 250)
    return controller


class TestInitialState:
    """Test cases for the unzoomed controller."""

    def test_defaults(self):
        controller = ScatterZoomController(DATA)

        assert controller.is_zoomed is False
        assert controller.x_domain == (0, AUTO)
        assert controller.y_domain == (0, 100)
        assert controller.cursor == "zoom-in"

    def test_accepts_scatter_points(self):
        controller = ScatterZoomController(
            [ScatterPoint(x=1.0, y=2.0, z=10.0, name="a", pid=1)]
        )
        assert controller.points == [(1.0, 2.0)]


class TestClickZoom:
    """Test cases for click-to-zoom."""

    def test_zoom_centers_on_click(self, zoomed):
        assert zoomed.is_zoomed is True
        assert zoomed.x_domain == (15, 85)
        assert zoomed.y_domain == (15, 85)
        assert zoomed.cursor == "grab"

    def test_second_click_resets(self, zoomed):
        _click(zoomed, 500, 250)

        assert zoomed.is_zoomed is False
        assert zoomed.x_domain == (0, AUTO)
        assert zoomed.y_domain == (0, 100)
        assert zoomed.cursor == "zoom-in"

    def test_small_jitter_is_still_a_click(self):
        controller = ScatterZoomController(DATA, RECT)
        controller.pointer_down(500, 250)
        controller.pointer_move(500 + CLICK_THRESHOLD, 250)
        controller.pointer_up(500 + CLICK_THRESHOLD, 250)
        assert controller.is_zoomed is True

    def test_click_without_data_ignored(self):
        controller = ScatterZoomController([], RECT)
        _click(controller, 500, 250)
        assert controller.is_zoomed is False

    def test_click_without_rect_ignored(self):
        controller = ScatterZoomController(DATA)
        _click(controller, 500, 250)
        assert controller.is_zoomed is False

    def test_zoom_near_edge_clamps(self):
        controller = ScatterZoomController(DATA, RECT)
        _click(controller, 0, 500)

        assert controller.x_domain == (0, 70)
        assert controller.y_domain == (0, 70)


class TestDragPan:
    """Test cases for drag-to-pan."""

    def test_pan_right_moves_x_left(self, zoomed):
        zoomed.pointer_down(100, 100)
        zoomed.pointer_move(110, 100)

        assert zoomed.x_domain == (14, 84)
        assert zoomed.y_domain == (15, 85)
        assert zoomed.cursor == "grabbing"

        zoomed.pointer_up(110, 100)
        assert zoomed.is_zoomed is True
        assert zoomed.cursor == "grab"

    def test_y_clamped_to_percent_range(self, zoomed):
        zoomed.pointer_down(100, 200)
        zoomed.pointer_move(100, -9800)
        zoomed.pointer_up(100, -9800)

        assert zoomed.y_domain == (0, 70)

    def test_y_clamped_at_top(self, zoomed):
        zoomed.pointer_down(100, 0)
        zoomed.pointer_move(100, 10_000)

        assert zoomed.y_domain == (30, 100)

    def test_x_never_negative(self, zoomed):
        zoomed.pointer_down(0, 0)
        zoomed.pointer_move(100_000, 0)

        start, end = zoomed.x_domain
        assert start == 0
        assert end - start == 70

    def test_widths_preserved(self, zoomed):
        for x in (120, 160, 90, 300):
            zoomed.pointer_down(100, 100)
            zoomed.pointer_move(x, x)
            zoomed.pointer_up(x, x)

        assert zoomed.x_domain[1] - zoomed.x_domain[0] == 70
        assert zoomed.y_domain[1] - zoomed.y_domain[0] == 70

    def test_drag_while_unzoomed_counts_as_click(self):
        """Without zoom there is nothing to pan, so release zooms at the pointer."""
        controller = ScatterZoomController(DATA, RECT)
        controller.pointer_down(100, 100)
        controller.pointer_move(400, 400)
        controller.pointer_up(400, 400)

        assert controller.is_zoomed is True
        assert controller.x_domain == (5, 75)
        assert controller.y_domain == (0, 70)

    def test_state_snapshot(self, zoomed):
        state = zoomed.state
        assert state.is_zoomed is True
        assert state.x_domain == (15, 85)
        assert state.drag_origin is None
