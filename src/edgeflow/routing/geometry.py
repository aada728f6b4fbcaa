"""Geometry helpers shared by the router and the bezier strategy."""

from __future__ import annotations

from edgeflow.model import Point, Rect
from edgeflow.routing.constants import (
    INTERSECT_EPSILON,
    ROUTE_COLLINEAR_TOLERANCE,
)


def cross_product(a: Point, b: Point, c: Point) -> float:
    """Z component of (b - a) x (c - a); the sign gives c's side of ab."""
    return (b.x - a.x) * (c.y - a.y) - (b.y - a.y) * (c.x - a.x)


def on_segment(a: Point, b: Point, p: Point) -> bool:
    """Whether *p* lies within the bounding box of segment ab."""
    return (
        min(a.x, b.x) <= p.x <= max(a.x, b.x)
        and min(a.y, b.y) <= p.y <= max(a.y, b.y)
    )


def segments_intersect(p1: Point, p2: Point, p3: Point, p4: Point) -> bool:
    """Whether segment p1p2 intersects segment p3p4.

    Touching and near-collinear overlaps count as intersecting.
    """
    d1 = cross_product(p3, p4, p1)
    d2 = cross_product(p3, p4, p2)
    d3 = cross_product(p1, p2, p3)
    d4 = cross_product(p1, p2, p4)

    if ((d1 > 0 and d2 < 0) or (d1 < 0 and d2 > 0)) and (
        (d3 > 0 and d4 < 0) or (d3 < 0 and d4 > 0)
    ):
        return True

    if abs(d1) < INTERSECT_EPSILON and on_segment(p3, p4, p1):
        return True
    if abs(d2) < INTERSECT_EPSILON and on_segment(p3, p4, p2):
        return True
    if abs(d3) < INTERSECT_EPSILON and on_segment(p1, p2, p3):
        return True
    if abs(d4) < INTERSECT_EPSILON and on_segment(p1, p2, p4):
        return True
    return False


def segment_intersects_rect(p1: Point, p2: Point, rect: Rect) -> bool:
    """Whether segment p1p2 touches *rect*.

    True if either endpoint is inside the rectangle or the segment
    crosses (or touches) any of its four edges.
    """
    if rect.contains(p1) or rect.contains(p2):
        return True
    return (
        segments_intersect(p1, p2, rect.top_left, rect.top_right)
        or segments_intersect(p1, p2, rect.top_right, rect.bottom_right)
        or segments_intersect(p1, p2, rect.bottom_right, rect.bottom_left)
        or segments_intersect(p1, p2, rect.bottom_left, rect.top_left)
    )


def waypoints_intersect_bounds(waypoints: list[Point], bounds: Rect) -> bool:
    """Whether any interior segment of *waypoints* touches *bounds*.

    The first and last segments run from the ports to their stubs and
    are expected to sit against the node, so they are skipped.
    """
    if len(waypoints) < 4:
        return False
    for i in range(1, len(waypoints) - 2):
        if segment_intersects_rect(waypoints[i], waypoints[i + 1], bounds):
            return True
    return False


def are_collinear(a: Point, b: Point, c: Point, tolerance: float) -> bool:
    """Whether a, b, c lie on one horizontal or one vertical line."""
    if abs(a.y - b.y) < tolerance and abs(b.y - c.y) < tolerance:
        return True
    if abs(a.x - b.x) < tolerance and abs(b.x - c.x) < tolerance:
        return True
    return False


def are_points_collinear(
    *points: Point, tolerance: float = ROUTE_COLLINEAR_TOLERANCE
) -> bool:
    """Whether all *points* share one X or one Y within *tolerance*.

    Consecutive pairs are compared, so the check is on a shared axis
    rather than an arbitrary line.
    """
    pairs = list(zip(points, points[1:]))
    same_x = all(abs(a.x - b.x) < tolerance for a, b in pairs)
    same_y = all(abs(a.y - b.y) < tolerance for a, b in pairs)
    return same_x or same_y


def union_bounds(first: Rect | None, second: Rect | None) -> Rect | None:
    """Smallest rectangle containing both, tolerating missing inputs."""
    if first is None:
        return second
    if second is None:
        return first
    return first.union(second)
