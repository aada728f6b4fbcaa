"""Connection routing subpackage.

Public API:
- route / select_route: Waypoint router (ordered decision table)
- optimize_waypoints: Collinear waypoint removal
- needs_loopback_routing: Whether curved styles must fall back to routing
- build_loopback_segments: Route + optimize + rounded corners
- waypoints_to_segments: Polyline to drawable segments
- bezier_segment: Single-cubic strategy with node avoidance
- hit_rects: Tolerance-inflated hit-test rectangles
- StraightSegment, QuadraticSegment, CubicSegment, SegmentPath: Segment types
"""

from edgeflow.routing.bezier import bezier_segment
from edgeflow.routing.corners import orthogonalize_waypoints, waypoints_to_segments
from edgeflow.routing.endpoints import EndpointPoints, endpoint_points
from edgeflow.routing.hit_test import hit_rects, hit_test, polyline_hit_rects
from edgeflow.routing.segments import (
    CubicSegment,
    PathSegment,
    QuadraticSegment,
    SegmentPath,
    StraightSegment,
    extract_bend_points,
)
from edgeflow.routing.waypoints import (
    LoopbackDirection,
    RouteDecision,
    build_loopback_segments,
    needs_loopback_routing,
    optimize_waypoints,
    route,
    select_route,
)

__all__ = [
    "CubicSegment",
    "EndpointPoints",
    "LoopbackDirection",
    "PathSegment",
    "QuadraticSegment",
    "RouteDecision",
    "SegmentPath",
    "StraightSegment",
    "bezier_segment",
    "build_loopback_segments",
    "endpoint_points",
    "extract_bend_points",
    "hit_rects",
    "hit_test",
    "needs_loopback_routing",
    "optimize_waypoints",
    "orthogonalize_waypoints",
    "polyline_hit_rects",
    "route",
    "select_route",
    "waypoints_to_segments",
]
