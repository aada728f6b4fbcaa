"""Tests for single-cubic bezier construction."""

from __future__ import annotations

import pytest

from edgeflow.model import Orientation, Point, Rect, RouteParameters
from edgeflow.routing.bezier import avoid_node, bezier_segment, control_point


class TestControlPoint:
    def test_distant_end_scales_with_curvature(self):
        cp = control_point(Point(0, 0), Point(200, 0), Orientation.RIGHT, 0.5, 10)
        assert cp == Point(100, 0)

    def test_close_end_uses_extension(self):
        cp = control_point(Point(0, 0), Point(10, 0), Orientation.RIGHT, 0.5, 10)
        assert cp == Point(10, 0)

    def test_vertical_port_uses_y_distance(self):
        cp = control_point(Point(0, 0), Point(500, -100), Orientation.TOP, 0.5, 10)
        assert cp == Point(0, -50)

    @pytest.mark.parametrize("curvature", [0.0, 0.25, 0.5, 1.0, 2.0])
    @pytest.mark.parametrize("orientation", list(Orientation))
    def test_offset_never_below_extension(self, curvature, orientation):
        anchor = Point(0, 0)
        for target in (Point(5, 5), Point(300, -40), Point(-80, 200)):
            cp = control_point(anchor, target, orientation, curvature, 10)
            assert anchor.distance(cp) >= 10

    def test_curvature_not_clamped(self):
        cp = control_point(Point(0, 0), Point(100, 0), Orientation.RIGHT, 3.0, 10)
        assert cp == Point(300, 0)


class TestAvoidNode:
    bounds = Rect(-100, -20, 50, 20)

    def test_pushed_past_right_edge(self):
        assert avoid_node(Point(20, 0), Orientation.RIGHT, self.bounds, 10) == Point(60, 0)

    def test_already_clear(self):
        assert avoid_node(Point(90, 0), Orientation.RIGHT, self.bounds, 10) == Point(90, 0)

    def test_left(self):
        assert avoid_node(Point(-50, 5), Orientation.LEFT, self.bounds, 10) == Point(-110, 5)

    def test_top_and_bottom(self):
        assert avoid_node(Point(0, -5), Orientation.TOP, self.bounds, 10) == Point(0, -30)
        assert avoid_node(Point(0, 5), Orientation.BOTTOM, self.bounds, 10) == Point(0, 30)


class TestBezierSegment:
    def test_forward_connection(self):
        params = RouteParameters(start=Point(0, 0), end=Point(200, 100))
        seg = bezier_segment(params)
        assert seg.control1 == Point(100, 0)
        assert seg.control2 == Point(100, 100)
        assert seg.end == Point(200, 100)
        assert seg.curvature == 0.5

    def test_source_node_avoidance(self):
        params = RouteParameters(
            start=Point(0, 0), end=Point(40, 0),
            source_bounds=Rect(-100, -20, 30, 20),
        )
        seg = bezier_segment(params)
        # 40 * 0.5 = 20 pulled out to bounds.right + offset
        assert seg.control1 == Point(40, 0)

    def test_explicit_clearance(self):
        params = RouteParameters(
            start=Point(0, 0), end=Point(40, 0),
            source_bounds=Rect(-100, -20, 30, 20),
        )
        assert bezier_segment(params, clearance=25).control1 == Point(55, 0)

    def test_unstubbed_free_end(self):
        """A temporary connection's pointer end has no minimum pull."""
        params = RouteParameters.temporary(Point(0, 0), Point(10, 0), Orientation.RIGHT)
        seg = bezier_segment(params)
        assert seg.control2 == Point(5, 0)

    def test_curve_endpoints(self):
        params = RouteParameters(start=Point(0, 0), end=Point(200, 100))
        seg = bezier_segment(params)
        assert seg.evaluate(params.start, 0.0) == params.start
        assert seg.evaluate(params.start, 1.0) == params.end
        mid = seg.evaluate(params.start, 0.5)
        assert mid.x == pytest.approx(100)
        assert mid.y == pytest.approx(50)
