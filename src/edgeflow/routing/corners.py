"""Polyline to segment conversion with rounded corners.

Every interior waypoint where the path turns 90 degrees can be rounded.
The corner is replaced by a straight run that stops ``radius`` short of
the waypoint, followed by a quadratic curve whose control point is the
waypoint itself::

    prev ----------- corner_start .
                                   `.  (quadratic, control = waypoint)
                                     |
                                     corner_end
                                     |
                                     next

The radius actually used is clamped so a corner never eats more than half
of either adjacent leg::

    radius = min(corner_radius, incoming / 2, outgoing / 2)

Clamped radii below MIN_CORNER_RADIUS degrade to a sharp corner.
Non-perpendicular turns (diagonals, reversals) are never rounded.
"""

from __future__ import annotations

from edgeflow.model import Point
from edgeflow.routing.constants import (
    AXIS_TOLERANCE,
    MIN_CORNER_RADIUS,
    MIN_SEGMENT_LENGTH,
    ORTHOGONAL_COLLINEAR_TOLERANCE,
)
from edgeflow.routing.geometry import are_collinear
from edgeflow.routing.segments import PathSegment, QuadraticSegment, StraightSegment

# ---------------------------------------------------------------------------
# Primitive: perpendicular turn detection
# ---------------------------------------------------------------------------


def is_perpendicular_turn(incoming: Point, outgoing: Point) -> bool:
    """Whether two axis-aligned vectors meet at a right angle."""
    incoming_horizontal = abs(incoming.y) < AXIS_TOLERANCE
    incoming_vertical = abs(incoming.x) < AXIS_TOLERANCE
    outgoing_horizontal = abs(outgoing.y) < AXIS_TOLERANCE
    outgoing_vertical = abs(outgoing.x) < AXIS_TOLERANCE
    return (incoming_horizontal and outgoing_vertical) or (
        incoming_vertical and outgoing_horizontal
    )


def corner_radius_for(
    corner_radius: float, incoming_length: float, outgoing_length: float
) -> float:
    """Clamp *corner_radius* to half of the shorter adjacent leg."""
    return min(corner_radius, incoming_length / 2, outgoing_length / 2)


# ---------------------------------------------------------------------------
# Waypoints -> segments
# ---------------------------------------------------------------------------


def waypoints_to_segments(
    waypoints: list[Point], corner_radius: float = 0.0
) -> list[PathSegment]:
    """Convert a polyline into drawable segments.

    With ``corner_radius <= 0`` every waypoint after the first becomes the
    end of a ``StraightSegment``. Otherwise perpendicular corners are
    rounded as described in the module docstring; the corner quadratic is
    flagged ``hit_test=False`` since the adjacent straight runs cover
    corners up to the hit tolerance. Hit testing still boxes larger ones,
    see ``hit_test.corner_is_covered``.
    """
    if len(waypoints) < 2:
        return []

    if len(waypoints) == 2 or corner_radius <= 0:
        return [StraightSegment(end=p) for p in waypoints[1:]]

    segments: list[PathSegment] = []
    for i in range(1, len(waypoints) - 1):
        # Measure from where the previous segment actually ended, which is
        # a corner end rather than the raw waypoint after a rounding.
        prev = waypoints[0] if i == 1 else segments[-1].end
        current = waypoints[i]
        nxt = waypoints[i + 1]

        incoming = current - prev
        outgoing = nxt - current
        incoming_length = incoming.length
        outgoing_length = outgoing.length

        if incoming_length < MIN_SEGMENT_LENGTH or outgoing_length < MIN_SEGMENT_LENGTH:
            segments.append(StraightSegment(end=current))
            continue

        if not is_perpendicular_turn(incoming, outgoing):
            segments.append(StraightSegment(end=current))
            continue

        radius = corner_radius_for(corner_radius, incoming_length, outgoing_length)
        if radius < MIN_CORNER_RADIUS:
            segments.append(StraightSegment(end=current))
            continue

        corner_start = current - (incoming / incoming_length) * radius
        corner_end = current + (outgoing / outgoing_length) * radius
        segments.append(StraightSegment(end=corner_start))
        segments.append(
            QuadraticSegment(control=current, end=corner_end, hit_test=False)
        )

    segments.append(StraightSegment(end=waypoints[-1]))
    return segments


# ---------------------------------------------------------------------------
# User control points -> orthogonal polyline
# ---------------------------------------------------------------------------


def orthogonalize_waypoints(waypoints: list[Point]) -> list[Point]:
    """Turn arbitrary user waypoints into a horizontal/vertical polyline.

    Legs alternate between horizontal-first and vertical-first elbows on
    the way to each control point. The final leg to the last point picks
    the elbow along its dominant axis. Collinear points are dropped.
    """
    if len(waypoints) < 2:
        return list(waypoints)

    orthogonal = [waypoints[0]]
    horizontal = True

    for target in waypoints[1:-1]:
        current = orthogonal[-1]
        if horizontal:
            orthogonal.append(Point(target.x, current.y))
        else:
            orthogonal.append(Point(current.x, target.y))
        orthogonal.append(target)
        horizontal = not horizontal

    second_last = orthogonal[-1]
    last = waypoints[-1]
    dx = abs(last.x - second_last.x)
    dy = abs(last.y - second_last.y)
    if horizontal:
        if dx > dy:
            orthogonal.append(Point(last.x, second_last.y))
        else:
            orthogonal.append(Point(second_last.x, last.y))
    else:
        if dy > dx:
            orthogonal.append(Point(second_last.x, last.y))
        else:
            orthogonal.append(Point(last.x, second_last.y))
    orthogonal.append(last)

    return _drop_collinear(orthogonal, ORTHOGONAL_COLLINEAR_TOLERANCE)


def _drop_collinear(points: list[Point], tolerance: float) -> list[Point]:
    if len(points) < 3:
        return points
    kept = [points[0]]
    for i in range(1, len(points) - 1):
        if not are_collinear(kept[-1], points[i], points[i + 1], tolerance):
            kept.append(points[i])
    kept.append(points[-1])
    return kept
