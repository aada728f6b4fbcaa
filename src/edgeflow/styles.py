"""Connection styles: which path strategy a connection is drawn with.

Every style turns ``RouteParameters`` into a ``SegmentPath`` through
``create_segments``. Hit-test rectangles and bend points are derived from
that single result, so callers compute segments once and reuse them.

Registered styles:

- ``straight``: stubs joined by one straight (possibly diagonal) line
- ``step``: orthogonal routing with sharp corners
- ``smoothstep``: orthogonal routing with rounded corners
- ``bezier``: one cubic curve with node avoidance
- ``custom_bezier``: bezier with a curvature multiplier
- ``editable``: straight lines through user control points
- ``editable_smoothstep``: rounded orthogonal path through control points

Curved and straight styles fall back to orthogonal loopback routing when
the target sits behind the source, the ports face the same way, or the
connection loops back to its own node.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace

from edgeflow.model import Point, Rect, RouteParameters
from edgeflow.routing.bezier import bezier_segment
from edgeflow.routing.constants import (
    DEFAULT_HIT_TOLERANCE,
    SMOOTHSTEP_CORNER_RADIUS,
)
from edgeflow.routing.corners import orthogonalize_waypoints, waypoints_to_segments
from edgeflow.routing.hit_test import hit_rects, polyline_hit_rects
from edgeflow.routing.segments import SegmentPath, StraightSegment
from edgeflow.routing.waypoints import (
    build_loopback_segments,
    extended_point,
    needs_loopback_routing,
    optimize_waypoints,
    route,
)

logger = logging.getLogger(__name__)


class UnknownStyleError(ValueError):
    """Raised when a style id is not registered."""


@dataclass(frozen=True)
class ConnectionStyle(ABC):
    """Base for all styles; subclasses implement ``create_segments``."""

    id = "base"
    display_name = "Base"
    default_hit_tolerance: float = DEFAULT_HIT_TOLERANCE

    @abstractmethod
    def create_segments(self, params: RouteParameters) -> SegmentPath:
        ...

    def hit_rects(self, path: SegmentPath, tolerance: float | None = None) -> list[Rect]:
        if tolerance is None:
            tolerance = self.default_hit_tolerance
        return hit_rects(path.start, path.segments, tolerance)

    def bend_points(self, path: SegmentPath) -> list[Point]:
        return path.points()


def _loopback(params: RouteParameters) -> SegmentPath:
    return SegmentPath(params.start, tuple(build_loopback_segments(params)))


@dataclass(frozen=True)
class StraightStyle(ConnectionStyle):
    """Port stubs joined by a single straight line."""

    id = "straight"
    display_name = "Straight"

    def create_segments(self, params: RouteParameters) -> SegmentPath:
        if needs_loopback_routing(params):
            return _loopback(params)
        start_ext = extended_point(
            params.start, params.source_orientation, params.effective_source_offset
        )
        end_ext = extended_point(
            params.end, params.target_orientation, params.effective_target_offset
        )
        points = optimize_waypoints([params.start, start_ext, end_ext, params.end])
        return SegmentPath(
            params.start, tuple(StraightSegment(end=p) for p in points[1:])
        )


@dataclass(frozen=True)
class StepStyle(ConnectionStyle):
    """Orthogonal routing.

    ``corner_radius`` of 0 draws sharp corners. A positive value makes
    the style a smoothstep: corners use the parameters' radius, or this
    value when the parameters carry 0.
    """

    corner_radius: float = 0.0

    @property
    def id(self) -> str:
        return "smoothstep" if self.corner_radius > 0 else "step"

    @property
    def display_name(self) -> str:
        return "Smooth Step" if self.corner_radius > 0 else "Step"

    def effective_corner_radius(self, params: RouteParameters) -> float:
        if self.corner_radius <= 0:
            return 0.0
        return params.corner_radius if params.corner_radius > 0 else self.corner_radius

    def create_segments(self, params: RouteParameters) -> SegmentPath:
        waypoints = optimize_waypoints(route(params))
        segments = waypoints_to_segments(waypoints, self.effective_corner_radius(params))
        return SegmentPath(params.start, tuple(segments))

    def hit_rects(self, path: SegmentPath, tolerance: float | None = None) -> list[Rect]:
        if self.corner_radius > 0:
            return super().hit_rects(path, tolerance)
        if tolerance is None:
            tolerance = self.default_hit_tolerance
        # Sharp orthogonal paths: one rectangle per straight run
        return polyline_hit_rects(path.points(), tolerance)


@dataclass(frozen=True)
class BezierStyle(ConnectionStyle):
    """A single cubic curve; loopback routing when the curve cannot work.

    ``curvature_factor`` scales the parameters' curvature (1.0 for the
    plain bezier style).
    """

    curvature_factor: float = 1.0

    @property
    def id(self) -> str:
        return "bezier" if self.curvature_factor == 1.0 else "custom_bezier"

    @property
    def display_name(self) -> str:
        return "Bezier" if self.curvature_factor == 1.0 else "Custom Bezier"

    def create_segments(self, params: RouteParameters) -> SegmentPath:
        if self.curvature_factor != 1.0:
            params = replace(params, curvature=params.curvature * self.curvature_factor)
        if needs_loopback_routing(params):
            return _loopback(params)
        return SegmentPath(params.start, (bezier_segment(params),))


@dataclass(frozen=True)
class EditableStyle(ConnectionStyle):
    """Straight lines through user-placed control points."""

    id = "editable"
    display_name = "Editable"

    def waypoints_with_ends(self, params: RouteParameters) -> list[Point]:
        return [params.start, *params.control_points, params.end]

    def create_default_segments(self, params: RouteParameters) -> SegmentPath:
        return SegmentPath(params.start, (StraightSegment(end=params.end),))

    def create_segments_through(
        self, waypoints: list[Point], params: RouteParameters
    ) -> SegmentPath:
        return SegmentPath(
            waypoints[0], tuple(StraightSegment(end=p) for p in waypoints[1:])
        )

    def create_segments(self, params: RouteParameters) -> SegmentPath:
        if params.control_points:
            return self.create_segments_through(self.waypoints_with_ends(params), params)
        return self.create_default_segments(params)


@dataclass(frozen=True)
class EditableSmoothStepStyle(EditableStyle):
    """Rounded orthogonal path through user control points.

    Without control points the connection is routed like smoothstep.
    """

    default_corner_radius: float = SMOOTHSTEP_CORNER_RADIUS

    id = "editable_smoothstep"
    display_name = "Editable Smooth Step"

    def _radius(self, params: RouteParameters) -> float:
        return params.corner_radius if params.corner_radius > 0 else self.default_corner_radius

    def create_default_segments(self, params: RouteParameters) -> SegmentPath:
        waypoints = optimize_waypoints(route(params))
        return SegmentPath(
            params.start, tuple(waypoints_to_segments(waypoints, self._radius(params)))
        )

    def create_segments_through(
        self, waypoints: list[Point], params: RouteParameters
    ) -> SegmentPath:
        orthogonal = orthogonalize_waypoints(waypoints)
        segments = waypoints_to_segments(orthogonal, self._radius(params))
        return SegmentPath(waypoints[0], tuple(segments))


STYLES: dict[str, ConnectionStyle] = {
    style.id: style
    for style in (
        StraightStyle(),
        StepStyle(),
        StepStyle(corner_radius=SMOOTHSTEP_CORNER_RADIUS),
        BezierStyle(),
        BezierStyle(curvature_factor=1.5),
        EditableStyle(),
        EditableSmoothStepStyle(),
    )
}
"""Default instance of every built-in style, keyed by id."""


def find_style(style_id: str) -> ConnectionStyle | None:
    return STYLES.get(style_id)


def get_style(style_id: str) -> ConnectionStyle:
    """Look up a registered style, raising UnknownStyleError if missing."""
    style = STYLES.get(style_id)
    if style is None:
        known = ", ".join(sorted(STYLES))
        raise UnknownStyleError(f"Unknown connection style {style_id!r} (known: {known})")
    return style


def create_segments(
    params: RouteParameters, style: str | ConnectionStyle = "smoothstep"
) -> SegmentPath:
    """Produce the segment path for *params* with *style* (id or instance)."""
    if isinstance(style, str):
        style = get_style(style)
    path = style.create_segments(params)
    logger.debug("style=%s produced %d segments", style.id, len(path.segments))
    return path
