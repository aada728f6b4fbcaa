"""SVG rendering of routed connections."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import drawsvg as draw

from edgeflow.model import Orientation, Point, Rect, RouteParameters
from edgeflow.render.constants import (
    CANVAS_PADDING,
    EMPTY_SVG,
    MARKER_GAP,
    PATH_DATA_PRECISION,
    TITLE_HEIGHT,
)
from edgeflow.render.style import Theme
from edgeflow.routing.endpoints import endpoint_points
from edgeflow.routing.segments import (
    CubicSegment,
    PathSegment,
    QuadraticSegment,
    SegmentPath,
    StraightSegment,
)
from edgeflow.styles import ConnectionStyle, get_style


@dataclass
class Connection:
    """One connection to draw: its parameters, style and optional colour."""

    params: RouteParameters
    style: str = "smoothstep"
    color: str = ""  # empty = theme connection_color


def _fmt(value: float) -> str:
    rounded = round(value, PATH_DATA_PRECISION)
    if rounded == 0:
        rounded = 0.0  # avoid "-0"
    return f"{rounded:g}"


def segments_to_path_data(start: Point, segments: Sequence[PathSegment]) -> str:
    """SVG path data for a segment chain: one M, then L/Q/C per segment."""
    parts = [f"M {_fmt(start.x)} {_fmt(start.y)}"]
    for segment in segments:
        if isinstance(segment, StraightSegment):
            parts.append(f"L {_fmt(segment.end.x)} {_fmt(segment.end.y)}")
        elif isinstance(segment, QuadraticSegment):
            parts.append(
                f"Q {_fmt(segment.control.x)} {_fmt(segment.control.y)} "
                f"{_fmt(segment.end.x)} {_fmt(segment.end.y)}"
            )
        elif isinstance(segment, CubicSegment):
            parts.append(
                f"C {_fmt(segment.control1.x)} {_fmt(segment.control1.y)} "
                f"{_fmt(segment.control2.x)} {_fmt(segment.control2.y)} "
                f"{_fmt(segment.end.x)} {_fmt(segment.end.y)}"
            )
        else:
            raise TypeError(f"Unsupported segment type: {type(segment).__name__}")
    return " ".join(parts)


def _path_bounds(path: SegmentPath) -> Rect:
    points = [path.start]
    for segment in path.segments:
        if isinstance(segment, QuadraticSegment):
            points.append(segment.control)
        elif isinstance(segment, CubicSegment):
            points.extend([segment.control1, segment.control2])
        points.append(segment.end)
    return Rect.from_points(points)


def render_svg(
    connections: list[Connection],
    theme: Theme,
    title: str | None = None,
    show_hit_rects: bool = False,
    tolerance: float | None = None,
    padding: float = CANVAS_PADDING,
) -> str:
    """Render connections, their node rectangles and port markers to SVG.

    Each connection's segments are computed once and reused for the
    drawn path and, when *show_hit_rects* is set, the hit-rectangle
    overlay.
    """
    if not connections:
        return EMPTY_SVG

    resolved: list[tuple[Connection, ConnectionStyle, SegmentPath]] = []
    for connection in connections:
        style = get_style(connection.style)
        resolved.append((connection, style, style.create_segments(connection.params)))

    # Node rectangles, deduplicated so self-connections draw one node
    nodes: list[Rect] = []
    for connection, _, _ in resolved:
        for bounds in (connection.params.source_bounds, connection.params.target_bounds):
            if bounds is not None and bounds not in nodes:
                nodes.append(bounds)

    content = _path_bounds(resolved[0][2])
    for _, _, path in resolved[1:]:
        content = content.union(_path_bounds(path))
    for node in nodes:
        content = content.union(node)

    top_margin = padding + (TITLE_HEIGHT if title else 0.0)
    origin_x = content.left - padding
    origin_y = content.top - top_margin
    svg_width = int(content.width + padding * 2)
    svg_height = int(content.height + padding + top_margin)

    d = draw.Drawing(svg_width, svg_height, origin=(origin_x, origin_y))

    # Background
    d.append(draw.Rectangle(
        origin_x, origin_y, svg_width, svg_height, fill=theme.background_color,
    ))

    if title:
        d.append(draw.Text(
            title,
            theme.label_font_size,
            origin_x + padding, origin_y + padding,
            fill=theme.label_color,
            font_family=theme.label_font_family,
            font_weight="bold",
        ))

    _render_nodes(d, nodes, theme)

    if show_hit_rects:
        for _, style, path in resolved:
            _render_hit_rects(d, style.hit_rects(path, tolerance), theme)

    for connection, _, path in resolved:
        _render_connection(d, connection, path, theme)

    return d.as_svg()


def _render_nodes(d: draw.Drawing, nodes: list[Rect], theme: Theme) -> None:
    r = theme.node_corner_radius
    for node in nodes:
        d.append(draw.Rectangle(
            node.left, node.top,
            node.width, node.height,
            rx=r, ry=r,
            fill=theme.node_fill,
            stroke=theme.node_stroke,
            stroke_width=theme.node_stroke_width,
        ))


def _render_hit_rects(d: draw.Drawing, rects: list[Rect], theme: Theme) -> None:
    for rect in rects:
        d.append(draw.Rectangle(
            rect.left, rect.top,
            rect.width, rect.height,
            fill=theme.hit_rect_fill,
            stroke=theme.hit_rect_stroke,
            stroke_width=theme.hit_rect_stroke_width,
        ))


def _render_connection(
    d: draw.Drawing,
    connection: Connection,
    path: SegmentPath,
    theme: Theme,
) -> None:
    """Draw the path, then a marker at each port."""
    color = connection.color or theme.connection_color
    d.append(draw.Path(
        d=segments_to_path_data(path.start, path.segments),
        stroke=color,
        stroke_width=theme.connection_width,
        fill="none",
        stroke_linecap="round",
        stroke_linejoin="round",
    ))

    params = connection.params
    _render_marker(d, params.start, params.source_orientation, color, theme)
    _render_marker(d, params.end, params.target_orientation, color, theme)


def _render_marker(
    d: draw.Drawing,
    port: Point,
    orientation: Orientation,
    color: str,
    theme: Theme,
) -> None:
    size = theme.marker_radius * 2
    center = endpoint_points(port, orientation, (size, size), MARKER_GAP).marker
    d.append(draw.Circle(
        center.x, center.y, theme.marker_radius,
        fill=theme.marker_fill,
        stroke=theme.marker_stroke or color,
        stroke_width=1.5,
    ))
