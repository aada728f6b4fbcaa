"""Routing constants used across routing modules.

Centralizes the numeric tolerances of waypoints.py, corners.py,
geometry.py, bezier.py and hit_test.py. Several of these decide which
routing branch wins near boundary cases, so change them with care.
"""

# ---------------------------------------------------------------------------
# Parameter defaults
# ---------------------------------------------------------------------------
DEFAULT_OFFSET: float = 10.0
"""Default port extension (stub length) before a path may turn."""

DEFAULT_BACK_EDGE_GAP: float = 20.0
"""Default clearance between a loopback route and the obstacle."""

DEFAULT_CORNER_RADIUS: float = 4.0
"""Default corner radius carried by route parameters."""

DEFAULT_CURVATURE: float = 0.5
"""Default bezier curvature."""

SMOOTHSTEP_CORNER_RADIUS: float = 8.0
"""Corner radius smoothstep styles fall back to when parameters give 0."""

# ---------------------------------------------------------------------------
# Waypoint router
# ---------------------------------------------------------------------------
ROUTE_COLLINEAR_TOLERANCE: float = 1.0
"""Tolerance for the four-point collinearity check of the direct route."""

OPTIMIZE_COLLINEAR_TOLERANCE: float = 0.5
"""Tolerance for dropping collinear waypoints after routing.

Stricter than ROUTE_COLLINEAR_TOLERANCE so genuine corners survive.
"""

ORTHOGONAL_COLLINEAR_TOLERANCE: float = 0.1
"""Tolerance for dropping collinear points of orthogonalized user paths."""

MIN_LOOP_AROUND_DISTANCE: float = 100.0
"""Ports closer than this always take the S-bend instead of a loop-around."""

DETOUR_BEND_PENALTY: float = 50.0
"""Extra cost per turn when searching a detour around blocking nodes."""

DUPLICATE_POINT_TOLERANCE: float = 0.01
"""Consecutive waypoints closer than this count as the same point."""

# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------
INTERSECT_EPSILON: float = 1e-4
"""Cross products below this count as collinear (touching intersects)."""

# ---------------------------------------------------------------------------
# Corner rounding
# ---------------------------------------------------------------------------
AXIS_TOLERANCE: float = 0.01
"""Secondary-axis component below which a vector counts as axis-aligned."""

MIN_SEGMENT_LENGTH: float = 0.01
"""Legs shorter than this are never rounded."""

MIN_CORNER_RADIUS: float = 1.0
"""Clamped radii below this degrade to a sharp corner."""

# ---------------------------------------------------------------------------
# Hit testing
# ---------------------------------------------------------------------------
DEFAULT_HIT_TOLERANCE: float = 8.0
"""Default half-width of the hit area around a path."""

HIT_TEST_SIZE_MULTIPLIER: float = 3.0
"""Perpendicular expansion budget per hit rectangle, in tolerances."""

HIT_AXIS_TOLERANCE: float = 0.5
"""Delta below which a hit-test segment counts as horizontal/vertical."""

HIT_MIN_SEGMENT_LENGTH: float = 0.1
"""Straight segments (and cubic chords) shorter than this are degenerate."""

HIT_POINT_LENGTH: float = 0.001
"""Sub-segments shorter than this get a point-sized box."""
