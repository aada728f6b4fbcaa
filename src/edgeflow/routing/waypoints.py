"""Waypoint routing: the ordered decision table behind orthogonal paths.

Every route starts at ``start``, runs straight out of the source port to
its stub (the *extension point*), wanders through zero or more interior
waypoints, reaches the target stub and ends at ``end``. Which interior
waypoints are used is decided by a fixed, ordered list of rules; the
first rule whose predicate holds produces the route:

1. ``self_connection``  both ends on the same node rectangle
2. ``collinear``        stubs line up and nothing is in the way
3. ``same_side``        both ports face the same direction
4. ``opposite``         ports face each other (left/right, top/bottom)
5. ``l_shape``          one corner reaches the target stub cleanly
6. ``full_routing``     anything else, typically target behind source

The last rule always matches, so routing never fails. Missing node
rectangles simply disable the corresponding obstacle checks.

When a rule's route still cuts through a known node (a same-side return
leg passing the source, a loop-around beside a stacked node), the
interior is replaced by the cheapest orthogonal detour that clears every
node, see ``detour_around_nodes``.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from edgeflow.model import Orientation, Point, Rect, RouteParameters
from edgeflow.routing.constants import (
    DETOUR_BEND_PENALTY,
    DUPLICATE_POINT_TOLERANCE,
    MIN_LOOP_AROUND_DISTANCE,
    OPTIMIZE_COLLINEAR_TOLERANCE,
)
from edgeflow.routing.corners import waypoints_to_segments
from edgeflow.routing.geometry import (
    are_collinear,
    are_points_collinear,
    segment_intersects_rect,
    union_bounds,
    waypoints_intersect_bounds,
)
from edgeflow.routing.segments import PathSegment

logger = logging.getLogger(__name__)


class LoopbackDirection(Enum):
    """Side of an obstacle a loopback route passes."""

    ABOVE = "above"
    BELOW = "below"
    LEFT = "left"
    RIGHT = "right"


# A target port must be approached from the side it faces
_APPROACH = {
    Orientation.TOP: LoopbackDirection.ABOVE,
    Orientation.BOTTOM: LoopbackDirection.BELOW,
    Orientation.LEFT: LoopbackDirection.LEFT,
    Orientation.RIGHT: LoopbackDirection.RIGHT,
}


# ---------------------------------------------------------------------------
# Routing context: values every rule needs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class _RouteCtx:
    """Pre-computed state shared by the routing rules."""

    start: Point
    end: Point
    start_ext: Point
    end_ext: Point
    source: Orientation
    target: Orientation
    gap: float
    source_bounds: Rect | None
    target_bounds: Rect | None

    @property
    def union(self) -> Rect | None:
        return union_bounds(self.source_bounds, self.target_bounds)

    @property
    def nodes(self) -> list[Rect]:
        return [b for b in (self.source_bounds, self.target_bounds) if b is not None]

    def through(self, *interior: Point) -> list[Point]:
        """Full waypoint list: ends, stubs, and *interior* in between."""
        return [self.start, self.start_ext, *interior, self.end_ext, self.end]

    def vertical_dogleg(self, x: float) -> list[Point]:
        """Route whose middle leg is the vertical line at *x*."""
        return self.through(Point(x, self.start_ext.y), Point(x, self.end_ext.y))

    def horizontal_dogleg(self, y: float) -> list[Point]:
        """Route whose middle leg is the horizontal line at *y*."""
        return self.through(Point(self.start_ext.x, y), Point(self.end_ext.x, y))


def _build_ctx(params: RouteParameters) -> _RouteCtx:
    return _RouteCtx(
        start=params.start,
        end=params.end,
        start_ext=extended_point(
            params.start, params.source_orientation, params.effective_source_offset
        ),
        end_ext=extended_point(
            params.end, params.target_orientation, params.effective_target_offset
        ),
        source=params.source_orientation,
        target=params.target_orientation,
        gap=params.back_edge_gap,
        source_bounds=params.source_bounds,
        target_bounds=params.target_bounds,
    )


def extended_point(point: Point, orientation: Orientation, offset: float) -> Point:
    """Project *point* outward along *orientation* by *offset*."""
    return point + orientation.unit_vector * offset


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def is_self_connection(source_bounds: Rect | None, target_bounds: Rect | None) -> bool:
    """Whether both ends sit on the same node (identical rectangles)."""
    if source_bounds is None or target_bounds is None:
        return False
    return source_bounds == target_bounds


def are_opposite(source: Orientation, target: Orientation) -> bool:
    """Whether the ports face each other's axis (left/right, top/bottom)."""
    return source.opposite is target


def _is_self(ctx: _RouteCtx) -> bool:
    return is_self_connection(ctx.source_bounds, ctx.target_bounds)


def _is_collinear_and_clear(ctx: _RouteCtx) -> bool:
    # Same-facing ports on one line point away from each other
    if _is_same_side(ctx):
        return False
    if not are_points_collinear(ctx.start, ctx.start_ext, ctx.end_ext, ctx.end):
        return False
    for bounds in (ctx.source_bounds, ctx.target_bounds):
        if bounds is not None and segment_intersects_rect(
            ctx.start_ext, ctx.end_ext, bounds
        ):
            return False
    return True


def _is_same_side(ctx: _RouteCtx) -> bool:
    return ctx.source is ctx.target


def _is_opposite(ctx: _RouteCtx) -> bool:
    return are_opposite(ctx.source, ctx.target)


def l_shape_corner(start_ext: Point, end_ext: Point, source: Orientation) -> Point:
    """Corner of a single-bend route.

    Horizontal source ports keep their stub's X and turn onto the target
    stub's row; vertical source ports keep their stub's Y.
    """
    if source.is_horizontal:
        return Point(start_ext.x, end_ext.y)
    return Point(end_ext.x, start_ext.y)


def _has_l_shape_clearance(ctx: _RouteCtx) -> bool:
    """Whether the target stub lies ahead of the source stub."""
    if ctx.source is Orientation.RIGHT:
        return ctx.start_ext.x <= ctx.end_ext.x
    if ctx.source is Orientation.LEFT:
        return ctx.start_ext.x >= ctx.end_ext.x
    if ctx.source is Orientation.BOTTOM:
        return ctx.start_ext.y <= ctx.end_ext.y
    return ctx.start_ext.y >= ctx.end_ext.y


def _can_form_l_shape(ctx: _RouteCtx) -> bool:
    if _is_same_side(ctx) or _is_opposite(ctx):
        return False
    corner = l_shape_corner(ctx.start_ext, ctx.end_ext, ctx.source)
    for bounds in (ctx.source_bounds, ctx.target_bounds):
        if bounds is None:
            continue
        if segment_intersects_rect(
            ctx.start_ext, corner, bounds
        ) or segment_intersects_rect(corner, ctx.end_ext, bounds):
            return False
    return _has_l_shape_clearance(ctx)


def _always(ctx: _RouteCtx) -> bool:
    return True


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def route_around_bounds(
    ctx: _RouteCtx, bounds: Rect, direction: LoopbackDirection
) -> list[Point]:
    """Detour past one side of *bounds*, keeping ``ctx.gap`` clearance."""
    if direction is LoopbackDirection.ABOVE:
        return ctx.horizontal_dogleg(bounds.top - ctx.gap)
    if direction is LoopbackDirection.BELOW:
        return ctx.horizontal_dogleg(bounds.bottom + ctx.gap)
    if direction is LoopbackDirection.LEFT:
        return ctx.vertical_dogleg(bounds.left - ctx.gap)
    return ctx.vertical_dogleg(bounds.right + ctx.gap)


def self_connection_direction(
    source: Orientation,
    target: Orientation,
    bounds: Rect,
    start_ext: Point,
    end_ext: Point,
) -> LoopbackDirection:
    """Pick the side a node-to-itself connection loops around.

    Ports facing the same way loop around that side. Otherwise horizontal
    ports loop above or below and vertical ports left or right, depending
    on which half of the node both stubs sit in. Mixed pairs follow the
    first port facing Right, then Left, then Bottom, then Top.
    """
    center = bounds.center
    if source is target:
        return _APPROACH[source]
    if source.is_horizontal and target.is_horizontal:
        if start_ext.y < center.y and end_ext.y < center.y:
            return LoopbackDirection.ABOVE
        return LoopbackDirection.BELOW
    if not source.is_horizontal and not target.is_horizontal:
        if start_ext.x < center.x and end_ext.x < center.x:
            return LoopbackDirection.LEFT
        return LoopbackDirection.RIGHT

    faces = (source, target)
    if Orientation.RIGHT in faces:
        return LoopbackDirection.RIGHT
    if Orientation.LEFT in faces:
        return LoopbackDirection.LEFT
    if Orientation.BOTTOM in faces:
        return LoopbackDirection.BELOW
    return LoopbackDirection.ABOVE


def _route_self_connection(ctx: _RouteCtx) -> list[Point]:
    bounds = ctx.source_bounds
    direction = self_connection_direction(
        ctx.source, ctx.target, bounds, ctx.start_ext, ctx.end_ext
    )
    return route_around_bounds(ctx, bounds, direction)


def _route_direct(ctx: _RouteCtx) -> list[Point]:
    return ctx.through()


def _route_same_side(ctx: _RouteCtx) -> list[Point]:
    union = ctx.union
    if ctx.source is Orientation.RIGHT:
        x = union.right if union else max(ctx.start_ext.x, ctx.end_ext.x)
        return ctx.vertical_dogleg(x + ctx.gap)
    if ctx.source is Orientation.LEFT:
        x = union.left if union else min(ctx.start_ext.x, ctx.end_ext.x)
        return ctx.vertical_dogleg(x - ctx.gap)
    if ctx.source is Orientation.TOP:
        y = union.top if union else min(ctx.start_ext.y, ctx.end_ext.y)
        return ctx.horizontal_dogleg(y - ctx.gap)
    y = union.bottom if union else max(ctx.start_ext.y, ctx.end_ext.y)
    return ctx.horizontal_dogleg(y + ctx.gap)


def _route_opposite(ctx: _RouteCtx) -> list[Point]:
    """S-bend between facing ports, looping around when blocked."""
    horizontal = ctx.source.is_horizontal
    if horizontal:
        clearance = (
            ctx.start_ext.x < ctx.end_ext.x
            if ctx.source is Orientation.RIGHT
            else ctx.start_ext.x > ctx.end_ext.x
        )
    else:
        clearance = (
            ctx.start_ext.y < ctx.end_ext.y
            if ctx.source is Orientation.BOTTOM
            else ctx.start_ext.y > ctx.end_ext.y
        )

    if clearance:
        # S-bend through the middle of the facing axis
        if horizontal:
            return ctx.vertical_dogleg((ctx.start_ext.x + ctx.end_ext.x) / 2)
        return ctx.horizontal_dogleg((ctx.start_ext.y + ctx.end_ext.y) / 2)

    # Blocked: S-bend through the middle of the other axis
    if horizontal:
        candidate = ctx.horizontal_dogleg((ctx.start_ext.y + ctx.end_ext.y) / 2)
    else:
        candidate = ctx.vertical_dogleg((ctx.start_ext.x + ctx.end_ext.x) / 2)

    # Nearby ports never loop around; the detour would dwarf the connection
    if ctx.start.distance(ctx.end) < MIN_LOOP_AROUND_DISTANCE:
        return candidate

    union = ctx.union
    if union is None or not waypoints_intersect_bounds(candidate, union):
        return candidate

    if horizontal:
        above = union.top - ctx.gap
        below = union.bottom + ctx.gap
        above_cost = abs(ctx.start_ext.y - above) + abs(ctx.end_ext.y - above)
        below_cost = abs(ctx.start_ext.y - below) + abs(ctx.end_ext.y - below)
        direction = (
            LoopbackDirection.ABOVE if above_cost <= below_cost else LoopbackDirection.BELOW
        )
    else:
        left = union.left - ctx.gap
        right = union.right + ctx.gap
        left_cost = abs(ctx.start_ext.x - left) + abs(ctx.end_ext.x - left)
        right_cost = abs(ctx.start_ext.x - right) + abs(ctx.end_ext.x - right)
        direction = (
            LoopbackDirection.LEFT if left_cost <= right_cost else LoopbackDirection.RIGHT
        )
    return route_around_bounds(ctx, union, direction)


def _route_l_shape(ctx: _RouteCtx) -> list[Point]:
    return ctx.through(l_shape_corner(ctx.start_ext, ctx.end_ext, ctx.source))


def _route_full(ctx: _RouteCtx) -> list[Point]:
    """Loop around both nodes, approaching the target from its facing side."""
    union = ctx.union
    if union is None:
        # No obstacles known: dogleg through the midpoint of the minor axis
        if ctx.source.is_horizontal:
            return ctx.horizontal_dogleg((ctx.start_ext.y + ctx.end_ext.y) / 2)
        return ctx.vertical_dogleg((ctx.start_ext.x + ctx.end_ext.x) / 2)
    return route_around_bounds(ctx, union, _APPROACH[ctx.target])


# ---------------------------------------------------------------------------
# Obstacle detour
# ---------------------------------------------------------------------------


def crosses_nodes(waypoints: list[Point], nodes: list[Rect]) -> bool:
    """Whether any interior segment of *waypoints* touches one of *nodes*."""
    return any(waypoints_intersect_bounds(waypoints, bounds) for bounds in nodes)


def _grid_lines(
    stubs: tuple[float, float], spans: list[tuple[float, float]], gap: float
) -> list[float]:
    """Candidate coordinates along one axis: stubs, node edges +/- gap, and
    the middle of every free channel between two nodes."""
    lines = set(stubs)
    for low, high in spans:
        lines.update((low - gap, high + gap))
    for _, a_high in spans:
        for b_low, _ in spans:
            if a_high < b_low:
                lines.add((a_high + b_low) / 2)
    return sorted(lines)


def detour_around_nodes(ctx: _RouteCtx) -> list[Point] | None:
    """Cheapest orthogonal route between the stubs that clears every node.

    Dijkstra over the grid spanned by the stub coordinates, the lines
    ``gap`` outside each node edge and the middle of each free channel
    between nodes. Cost is travelled length plus
    DETOUR_BEND_PENALTY per turn, including a turn out of the source
    stub's heading and into the target stub's approach. A route never
    doubles back on itself.

    Returns None when no clear route exists on the grid, e.g. when a stub
    sits inside the other node.
    """
    nodes = ctx.nodes
    xs = _grid_lines(
        (ctx.start_ext.x, ctx.end_ext.x), [(b.left, b.right) for b in nodes], ctx.gap
    )
    ys = _grid_lines(
        (ctx.start_ext.y, ctx.end_ext.y), [(b.top, b.bottom) for b in nodes], ctx.gap
    )
    start = (xs.index(ctx.start_ext.x), ys.index(ctx.start_ext.y))
    goal = (xs.index(ctx.end_ext.x), ys.index(ctx.end_ext.y))
    if start == goal:
        return None
    approach = ctx.target.opposite

    def point_at(cell: tuple[int, int]) -> Point:
        return Point(xs[cell[0]], ys[cell[1]])

    tie = itertools.count()
    # Entries: (cost, tie, cell, heading, finished)
    queue = [(0.0, next(tie), start, ctx.source, False)]
    best = {(start, ctx.source): 0.0}
    came_from: dict[tuple, tuple] = {}

    while queue:
        cost, _, cell, heading, finished = heapq.heappop(queue)
        if finished:
            return ctx.through(*_corners(came_from, (cell, heading), point_at))
        if cost > best.get((cell, heading), math.inf):
            continue
        if cell == goal:
            if heading is not ctx.target:
                final = cost if heading is approach else cost + DETOUR_BEND_PENALTY
                heapq.heappush(queue, (final, next(tie), cell, heading, True))
            continue

        here = point_at(cell)
        for move in Orientation:
            if move is heading.opposite:
                continue
            step = move.unit_vector
            nxt = (cell[0] + int(step.x), cell[1] + int(step.y))
            if not (0 <= nxt[0] < len(xs) and 0 <= nxt[1] < len(ys)):
                continue
            there = point_at(nxt)
            if any(segment_intersects_rect(here, there, b) for b in nodes):
                continue
            new_cost = cost + here.distance(there)
            if move is not heading:
                new_cost += DETOUR_BEND_PENALTY
            if new_cost < best.get((nxt, move), math.inf):
                best[(nxt, move)] = new_cost
                came_from[(nxt, move)] = (cell, heading)
                heapq.heappush(queue, (new_cost, next(tie), nxt, move, False))
    return None


def _corners(came_from: dict, state: tuple, point_at) -> list[Point]:
    """Turning points of the searched path, stubs excluded."""
    cells = []
    while state in came_from:
        cells.append(state)
        state = came_from[state]
    cells.reverse()
    # cells[i] = (cell, heading used to enter it)
    return [
        point_at(cells[i][0])
        for i in range(len(cells) - 1)
        if cells[i][1] is not cells[i + 1][1]
    ]


# ---------------------------------------------------------------------------
# Decision table
# ---------------------------------------------------------------------------

RouteRule = tuple[str, Callable[[_RouteCtx], bool], Callable[[_RouteCtx], list[Point]]]

ROUTE_RULES: tuple[RouteRule, ...] = (
    ("self_connection", _is_self, _route_self_connection),
    ("collinear", _is_collinear_and_clear, _route_direct),
    ("same_side", _is_same_side, _route_same_side),
    ("opposite", _is_opposite, _route_opposite),
    ("l_shape", _can_form_l_shape, _route_l_shape),
    ("full_routing", _always, _route_full),
)
"""Routing rules in priority order: (branch name, predicate, handler)."""


@dataclass(frozen=True)
class RouteDecision:
    """The rule that fired and the raw waypoints it produced."""

    branch: str
    waypoints: list[Point]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def select_route(params: RouteParameters) -> RouteDecision:
    """Run the decision table and report which branch produced the route."""
    ctx = _build_ctx(params)
    for name, predicate, handler in ROUTE_RULES:
        if predicate(ctx):
            waypoints = handler(ctx)
            if crosses_nodes(waypoints, ctx.nodes):
                detour = detour_around_nodes(ctx)
                if detour is not None:
                    logger.debug("branch=%s crossed a node; using detour", name)
                    waypoints = detour
            logger.debug(
                "route %s -> %s: branch=%s, %d waypoints",
                params.start.as_tuple(),
                params.end.as_tuple(),
                name,
                len(waypoints),
            )
            return RouteDecision(branch=name, waypoints=waypoints)
    raise AssertionError("full_routing rule always matches")


def route(params: RouteParameters) -> list[Point]:
    """Compute the raw waypoint polyline for *params*."""
    return select_route(params).waypoints


def optimize_waypoints(waypoints: list[Point]) -> list[Point]:
    """Drop repeated points and interior points collinear with their neighbours.

    Each interior point is compared against the last point kept (not
    the raw predecessor) and the next point. Dropping a point can make
    an earlier survivor collinear, so passes repeat until nothing
    changes. The result has no zero-length legs between interior points
    and optimizing it again returns it unchanged.
    """
    optimized = list(waypoints)
    while True:
        reduced = _optimize_pass(optimized)
        if len(reduced) == len(optimized):
            return reduced
        optimized = reduced


def _optimize_pass(waypoints: list[Point]) -> list[Point]:
    if len(waypoints) <= 2:
        return list(waypoints)

    optimized = [waypoints[0]]
    for i in range(1, len(waypoints) - 1):
        current = waypoints[i]
        nxt = waypoints[i + 1]
        if (
            optimized[-1].distance(current) < DUPLICATE_POINT_TOLERANCE
            or current.distance(nxt) < DUPLICATE_POINT_TOLERANCE
        ):
            continue
        if are_collinear(optimized[-1], current, nxt, OPTIMIZE_COLLINEAR_TOLERANCE):
            continue
        optimized.append(current)
    optimized.append(waypoints[-1])
    return optimized


def needs_loopback_routing(params: RouteParameters) -> bool:
    """Whether a curved style must fall back to orthogonal loopback routing.

    Required for self-connections, same-side ports, and targets lying
    behind the source port (by more than the port extension).
    """
    if params.is_self_connection:
        return True
    source = params.source_orientation
    if source is params.target_orientation:
        return True

    start, end, offset = params.start, params.end, params.offset
    if source is Orientation.RIGHT:
        return end.x < start.x - offset
    if source is Orientation.LEFT:
        return end.x > start.x + offset
    if source is Orientation.BOTTOM:
        return end.y < start.y - offset
    return end.y > start.y + offset


def build_loopback_segments(params: RouteParameters) -> list[PathSegment]:
    """Route, optimize and round corners with ``params.corner_radius``."""
    waypoints = optimize_waypoints(route(params))
    return waypoints_to_segments(waypoints, params.corner_radius)
