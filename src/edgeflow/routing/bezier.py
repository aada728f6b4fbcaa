"""Single-cubic bezier construction for forward connections.

Each control point is placed straight out of its port::

    pull = max(extension, |axis distance to the other end| * curvature)

so the curve bulges further for distant ends while close ends still get
a visible curve. When a node rectangle is known, its own control point
is pushed clear of the node along the port's facing axis. Only the
node's own rectangle is used; the union of both would over-curve
connections between distant nodes.
"""

from __future__ import annotations

from edgeflow.model import Orientation, Point, Rect, RouteParameters
from edgeflow.routing.segments import CubicSegment


def control_point(
    anchor: Point,
    target: Point,
    orientation: Orientation,
    curvature: float,
    extension: float,
) -> Point:
    """Control point for the curve end at *anchor* facing *orientation*."""
    if orientation.is_horizontal:
        axis_distance = abs(target.x - anchor.x)
    else:
        axis_distance = abs(target.y - anchor.y)
    pull = max(extension, axis_distance * curvature)
    return anchor + orientation.unit_vector * pull


def avoid_node(
    control: Point,
    orientation: Orientation,
    bounds: Rect,
    clearance: float,
) -> Point:
    """Clamp *control* to at least *clearance* outside *bounds*.

    Only the coordinate along the facing axis moves.
    """
    if orientation is Orientation.RIGHT:
        return Point(max(control.x, bounds.right + clearance), control.y)
    if orientation is Orientation.LEFT:
        return Point(min(control.x, bounds.left - clearance), control.y)
    if orientation is Orientation.BOTTOM:
        return Point(control.x, max(control.y, bounds.bottom + clearance))
    return Point(control.x, min(control.y, bounds.top - clearance))


def bezier_segment(
    params: RouteParameters, clearance: float | None = None
) -> CubicSegment:
    """Build the cubic for *params* with per-node control point avoidance.

    *clearance* defaults to the port extension (``params.offset``).
    """
    if clearance is None:
        clearance = params.offset

    cp1 = control_point(
        params.start,
        params.end,
        params.source_orientation,
        params.curvature,
        params.effective_source_offset,
    )
    cp2 = control_point(
        params.end,
        params.start,
        params.target_orientation,
        params.curvature,
        params.effective_target_offset,
    )

    if params.source_bounds is not None:
        cp1 = avoid_node(cp1, params.source_orientation, params.source_bounds, clearance)
    if params.target_bounds is not None:
        cp2 = avoid_node(cp2, params.target_orientation, params.target_bounds, clearance)

    return CubicSegment(
        control1=cp1,
        control2=cp2,
        end=params.end,
        curvature=params.curvature,
    )
