"""Tests for connection style dispatch."""

from __future__ import annotations

import logging

import pytest

from edgeflow.model import Orientation, Point, Rect, RouteParameters
from edgeflow.routing.hit_test import hit_test
from edgeflow.routing.segments import CubicSegment, QuadraticSegment, StraightSegment
from edgeflow.styles import (
    STYLES,
    BezierStyle,
    ConnectionStyle,
    EditableSmoothStepStyle,
    StepStyle,
    UnknownStyleError,
    create_segments,
    find_style,
    get_style,
)


def _params(start, end, source=Orientation.RIGHT, target=Orientation.LEFT, **kwargs):
    return RouteParameters(
        start=Point(*start),
        end=Point(*end),
        source_orientation=source,
        target_orientation=target,
        **kwargs,
    )


def _types(path) -> list[type]:
    return [type(s) for s in path.segments]


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TestRegistry:
    def test_builtin_ids(self):
        assert set(STYLES) == {
            "straight",
            "step",
            "smoothstep",
            "bezier",
            "custom_bezier",
            "editable",
            "editable_smoothstep",
        }

    def test_ids_match_keys(self):
        for style_id, style in STYLES.items():
            assert style.id == style_id
            assert style.display_name

    def test_base_is_abstract(self):
        with pytest.raises(TypeError):
            ConnectionStyle()

    def test_unknown_style(self):
        assert find_style("zigzag") is None
        with pytest.raises(UnknownStyleError, match="zigzag"):
            get_style("zigzag")

    def test_unknown_style_is_value_error(self):
        with pytest.raises(ValueError):
            create_segments(_params((0, 0), (100, 0)), "zigzag")


# ---------------------------------------------------------------------------
# Every style
# ---------------------------------------------------------------------------

_CASES = [
    _params((0, 0), (100, 0)),
    _params((0, 0), (200, 120)),
    _params((0, 0), (-150, 60)),
    _params((0, 0), (80, 90), target=Orientation.TOP),
    _params((100, 0), (0, 50), target=Orientation.RIGHT),
    _params(
        (100, 30), (0, 30),
        source_bounds=Rect(0, 0, 100, 60), target_bounds=Rect(0, 0, 100, 60),
    ),
    _params((0, 0), (200, 100), control_points=(Point(60, 40), Point(150, 70))),
]


@pytest.mark.parametrize("style_id", sorted(STYLES))
def test_paths_run_from_start_to_end(style_id):
    style = STYLES[style_id]
    for params in _CASES:
        path = style.create_segments(params)
        assert path.start == params.start
        assert path.end == params.end
        points = style.bend_points(path)
        assert points[0] == params.start
        assert points[-1] == params.end


@pytest.mark.parametrize("style_id", sorted(STYLES))
def test_hit_rects_nonempty(style_id):
    style = STYLES[style_id]
    for params in _CASES:
        rects = style.hit_rects(style.create_segments(params))
        assert rects
        for rect in rects:
            assert rect.width > 0 and rect.height > 0


# ---------------------------------------------------------------------------
# Individual styles
# ---------------------------------------------------------------------------


class TestStraight:
    def test_collinear_collapses_to_one_line(self):
        path = get_style("straight").create_segments(_params((0, 0), (100, 0)))
        assert path.segments == (StraightSegment(end=Point(100, 0)),)

    def test_diagonal_between_stubs(self):
        path = get_style("straight").create_segments(_params((0, 0), (100, 50)))
        assert [s.end for s in path.segments] == [Point(10, 0), Point(90, 50), Point(100, 50)]

    def test_loopback_when_behind(self):
        path = get_style("straight").create_segments(_params((0, 0), (-100, 60)))
        assert len(path.segments) > 1
        assert all(isinstance(s, (StraightSegment, QuadraticSegment)) for s in path.segments)


class TestStep:
    def test_sharp_corners(self):
        path = get_style("step").create_segments(_params((0, 0), (100, 50)))
        assert [s.end for s in path.segments] == [
            Point(50, 0), Point(50, 50), Point(100, 50),
        ]
        assert all(isinstance(s, StraightSegment) for s in path.segments)

    def test_hit_rects_one_per_run(self):
        style = get_style("step")
        path = style.create_segments(_params((0, 0), (100, 50)))
        assert style.hit_rects(path, 5.0) == [
            Rect(-5, -5, 55, 5),
            Rect(45, -5, 55, 55),
            Rect(45, 45, 105, 55),
        ]

    def test_ignores_corner_radius(self):
        path = get_style("step").create_segments(
            _params((0, 0), (100, 50), corner_radius=12.0)
        )
        assert QuadraticSegment not in _types(path)


class TestSmoothStep:
    def test_rounded_s_bend(self):
        path = get_style("smoothstep").create_segments(_params((0, 0), (100, 50)))
        assert path.segments == (
            StraightSegment(end=Point(46, 0)),
            QuadraticSegment(control=Point(50, 0), end=Point(50, 4), hit_test=False),
            StraightSegment(end=Point(50, 46)),
            QuadraticSegment(control=Point(50, 50), end=Point(54, 50), hit_test=False),
            StraightSegment(end=Point(100, 50)),
        )

    def test_zero_radius_uses_style_default(self):
        path = get_style("smoothstep").create_segments(
            _params((0, 0), (100, 50), corner_radius=0.0)
        )
        assert path.segments[0].end == Point(42, 0)

    def test_step_with_radius_is_smoothstep(self):
        assert StepStyle(corner_radius=8.0).id == "smoothstep"
        assert StepStyle().id == "step"

    def test_large_corner_is_hittable(self):
        """A corner wider than the tolerance falls outside the straight runs' boxes."""
        style = get_style("smoothstep")
        path = style.create_segments(
            _params((0, 0), (200, 200), target=Orientation.TOP, corner_radius=20.0)
        )
        assert QuadraticSegment(
            control=Point(10, 190), end=Point(30, 190), hit_test=False
        ) in path.segments
        rects = style.hit_rects(path, 8.0)
        assert hit_test(rects, Point(15, 185))

        current = path.start
        for segment in path.segments:
            if isinstance(segment, QuadraticSegment):
                for i in range(11):
                    assert hit_test(rects, segment.evaluate(current, i / 10))
            current = segment.end


class TestBezier:
    def test_single_cubic(self):
        path = get_style("bezier").create_segments(_params((0, 0), (200, 100)))
        assert _types(path) == [CubicSegment]
        assert path.segments[0].control1 == Point(100, 0)

    def test_loopback_when_behind(self):
        path = get_style("bezier").create_segments(_params((0, 0), (-150, 60)))
        assert CubicSegment not in _types(path)

    def test_custom_curvature_factor(self):
        path = get_style("custom_bezier").create_segments(_params((0, 0), (200, 100)))
        seg = path.segments[0]
        assert seg.curvature == pytest.approx(0.75)
        assert seg.control1 == Point(150, 0)

    def test_custom_factor_instance(self):
        style = BezierStyle(curvature_factor=2.0)
        assert style.id == "custom_bezier"
        seg = style.create_segments(_params((0, 0), (200, 100))).segments[0]
        assert seg.control1 == Point(200, 0)


class TestEditable:
    def test_no_control_points_is_one_line(self):
        path = get_style("editable").create_segments(_params((0, 0), (100, 40)))
        assert path.segments == (StraightSegment(end=Point(100, 40)),)

    def test_through_control_points(self):
        params = _params((0, 0), (100, 40), control_points=(Point(50, 20), Point(70, -10)))
        path = get_style("editable").create_segments(params)
        assert [s.end for s in path.segments] == [
            Point(50, 20), Point(70, -10), Point(100, 40),
        ]


class TestEditableSmoothStep:
    def test_orthogonalized_and_rounded(self):
        params = _params((0, 0), (100, 100), control_points=(Point(50, 30),))
        path = get_style("editable_smoothstep").create_segments(params)
        assert path.segments == (
            StraightSegment(end=Point(46, 0)),
            QuadraticSegment(control=Point(50, 0), end=Point(50, 4), hit_test=False),
            StraightSegment(end=Point(50, 96)),
            QuadraticSegment(control=Point(50, 100), end=Point(54, 100), hit_test=False),
            StraightSegment(end=Point(100, 100)),
        )

    def test_without_control_points_matches_smoothstep(self):
        params = _params((0, 0), (100, 50))
        assert get_style("editable_smoothstep").create_segments(params) == get_style(
            "smoothstep"
        ).create_segments(params)

    def test_default_radius(self):
        style = EditableSmoothStepStyle(default_corner_radius=6.0)
        params = _params(
            (0, 0), (100, 100), corner_radius=0.0, control_points=(Point(50, 30),),
        )
        assert style.create_segments(params).segments[0].end == Point(44, 0)


def test_create_segments_logs_dispatch(caplog):
    with caplog.at_level(logging.DEBUG, logger="edgeflow.styles"):
        path = create_segments(_params((0, 0), (100, 50)), "step")
    assert len(path.segments) == 3
    assert "style=step" in caplog.text


def test_create_segments_accepts_instance():
    path = create_segments(_params((0, 0), (100, 50)), StepStyle())
    assert path.end == Point(100, 50)
