"""Tests for SVG rendering."""

import xml.etree.ElementTree as ET

import pytest

from edgeflow.model import Point, Rect, RouteParameters
from edgeflow.render.constants import EMPTY_SVG
from edgeflow.render.svg import Connection, render_svg, segments_to_path_data
from edgeflow.routing.segments import CubicSegment, QuadraticSegment, StraightSegment
from edgeflow.themes import DARK_THEME, LIGHT_THEME, THEMES


def _connection(style="smoothstep", **kwargs):
    params = RouteParameters(
        start=Point(100, 30),
        end=Point(300, 130),
        source_bounds=Rect(0, 0, 100, 60),
        target_bounds=Rect(300, 100, 400, 160),
    )
    return Connection(params, style=style, **kwargs)


# ---------------------------------------------------------------------------
# Path data
# ---------------------------------------------------------------------------


class TestPathData:
    def test_straight(self):
        assert segments_to_path_data(Point(0, 0), [StraightSegment(Point(10, 0))]) == (
            "M 0 0 L 10 0"
        )

    def test_quadratic_and_cubic(self):
        data = segments_to_path_data(
            Point(0, 0),
            [
                QuadraticSegment(Point(10, 0), Point(10, 10)),
                CubicSegment(Point(10, 50), Point(60, 50), Point(60, 100)),
            ],
        )
        assert data == "M 0 0 Q 10 0 10 10 C 10 50 60 50 60 100"

    def test_rounding(self):
        data = segments_to_path_data(Point(1.23456, -0.001), [StraightSegment(Point(2.5, 3))])
        assert data == "M 1.23 0 L 2.5 3"

    def test_empty_chain(self):
        assert segments_to_path_data(Point(5, 5), []) == "M 5 5"

    def test_rejects_unknown_segment(self):
        with pytest.raises(TypeError):
            segments_to_path_data(Point(0, 0), [Point(1, 1)])


# ---------------------------------------------------------------------------
# render_svg
# ---------------------------------------------------------------------------


def test_render_produces_valid_svg():
    svg = render_svg([_connection()], DARK_THEME)
    root = ET.fromstring(svg)
    assert root.tag.endswith("svg")


def test_render_empty():
    assert render_svg([], DARK_THEME) == EMPTY_SVG


def test_render_contains_path_data():
    svg = render_svg([_connection("step")], DARK_THEME)
    assert 'd="M 100 30 L ' in svg


def test_render_theme_colors():
    svg = render_svg([_connection()], DARK_THEME)
    assert DARK_THEME.background_color in svg
    assert DARK_THEME.connection_color in svg


def test_render_connection_color_override():
    svg = render_svg([_connection(color="#ff0000")], LIGHT_THEME)
    assert "#ff0000" in svg


def test_render_title():
    svg = render_svg([_connection()], LIGHT_THEME, title="Pipeline")
    assert "Pipeline" in svg


def test_render_hit_rects_overlay():
    plain = render_svg([_connection("bezier")], DARK_THEME)
    overlay = render_svg([_connection("bezier")], DARK_THEME, show_hit_rects=True)
    assert DARK_THEME.hit_rect_fill not in plain
    assert DARK_THEME.hit_rect_fill in overlay


def test_self_connection_draws_one_node():
    node = Rect(0, 0, 100, 60)
    params = RouteParameters(
        start=Point(100, 30), end=Point(0, 30), source_bounds=node, target_bounds=node,
    )
    svg = render_svg([Connection(params)], LIGHT_THEME)
    root = ET.fromstring(svg)
    ns = "{http://www.w3.org/2000/svg}"
    nodes = [
        el for el in root.iter(f"{ns}rect")
        if el.get("stroke") == LIGHT_THEME.node_stroke
    ]
    assert len(nodes) == 1


@pytest.mark.parametrize("theme_name", sorted(THEMES))
def test_render_every_style_and_theme(theme_name):
    from edgeflow.styles import STYLES

    connections = [_connection(style_id) for style_id in STYLES]
    root = ET.fromstring(render_svg(connections, THEMES[theme_name]))
    ns = "{http://www.w3.org/2000/svg}"
    assert len(list(root.iter(f"{ns}path"))) == len(STYLES)
