"""Data model for connection routing."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class Point:
    """A coordinate in canvas space."""

    x: float
    y: float

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> Point:
        return Point(self.x * factor, self.y * factor)

    def __truediv__(self, factor: float) -> Point:
        return Point(self.x / factor, self.y / factor)

    @property
    def length(self) -> float:
        """Length of this point read as a vector from the origin."""
        return math.hypot(self.x, self.y)

    def distance(self, other: Point) -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


class Orientation(Enum):
    """Direction a port faces, outward from its node."""

    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"

    @property
    def unit_vector(self) -> Point:
        return _UNIT_VECTORS[self]

    @property
    def is_horizontal(self) -> bool:
        return self in (Orientation.LEFT, Orientation.RIGHT)

    @property
    def opposite(self) -> Orientation:
        return _OPPOSITES[self]


_UNIT_VECTORS = {
    Orientation.LEFT: Point(-1.0, 0.0),
    Orientation.RIGHT: Point(1.0, 0.0),
    Orientation.TOP: Point(0.0, -1.0),
    Orientation.BOTTOM: Point(0.0, 1.0),
}

_OPPOSITES = {
    Orientation.LEFT: Orientation.RIGHT,
    Orientation.RIGHT: Orientation.LEFT,
    Orientation.TOP: Orientation.BOTTOM,
    Orientation.BOTTOM: Orientation.TOP,
}


@dataclass(frozen=True)
class Rect:
    """An axis-aligned box, typically a node's bounding box."""

    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def from_points(cls, points: list[Point]) -> Rect:
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return cls(min(xs), min(ys), max(xs), max(ys))

    @classmethod
    def from_center(cls, center: Point, width: float, height: float) -> Rect:
        return cls(
            center.x - width / 2,
            center.y - height / 2,
            center.x + width / 2,
            center.y + height / 2,
        )

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center(self) -> Point:
        return Point((self.left + self.right) / 2, (self.top + self.bottom) / 2)

    @property
    def top_left(self) -> Point:
        return Point(self.left, self.top)

    @property
    def top_right(self) -> Point:
        return Point(self.right, self.top)

    @property
    def bottom_left(self) -> Point:
        return Point(self.left, self.bottom)

    @property
    def bottom_right(self) -> Point:
        return Point(self.right, self.bottom)

    def contains(self, point: Point) -> bool:
        """Whether *point* lies inside the box.

        The left and top edges are inclusive, the right and bottom edges
        exclusive, so adjacent boxes never both claim a point.
        """
        return (
            self.left <= point.x < self.right
            and self.top <= point.y < self.bottom
        )

    def union(self, other: Rect) -> Rect:
        """Smallest box containing both boxes."""
        return Rect(
            min(self.left, other.left),
            min(self.top, other.top),
            max(self.right, other.right),
            max(self.bottom, other.bottom),
        )

    def inflate(self, delta: float) -> Rect:
        return Rect(
            self.left - delta,
            self.top - delta,
            self.right + delta,
            self.bottom + delta,
        )


@dataclass(frozen=True)
class RouteParameters:
    """Everything needed to route one connection.

    Constructed fresh by the caller for every routing call. Two equal
    parameter values always produce equal paths, so callers may use an
    instance directly as a cache key.
    """

    start: Point
    end: Point
    source_orientation: Orientation = Orientation.RIGHT
    target_orientation: Orientation = Orientation.LEFT
    curvature: float = 0.5
    corner_radius: float = 4.0
    offset: float = 10.0
    back_edge_gap: float = 20.0
    control_points: tuple[Point, ...] = field(default_factory=tuple)
    source_bounds: Rect | None = None
    target_bounds: Rect | None = None
    # Per-end stub overrides; None falls back to ``offset``
    source_offset: float | None = None
    target_offset: float | None = None

    @property
    def effective_source_offset(self) -> float:
        return self.offset if self.source_offset is None else self.source_offset

    @property
    def effective_target_offset(self) -> float:
        return self.offset if self.target_offset is None else self.target_offset

    @property
    def is_self_connection(self) -> bool:
        return (
            self.source_bounds is not None
            and self.target_bounds is not None
            and self.source_bounds == self.target_bounds
        )

    @classmethod
    def temporary(
        cls,
        anchor: Point,
        pointer: Point,
        orientation: Orientation,
        from_source: bool = True,
        **kwargs,
    ) -> RouteParameters:
        """Parameters for a connection being dragged out of a port.

        The free end follows the pointer: it gets no port stub and faces
        opposite to the anchored port so the line flows naturally toward
        it. *from_source* is False when the drag started at an input port,
        in which case the pointer is the source end.
        """
        if from_source:
            return cls(
                start=anchor,
                end=pointer,
                source_orientation=orientation,
                target_orientation=orientation.opposite,
                target_offset=0.0,
                **kwargs,
            )
        return cls(
            start=pointer,
            end=anchor,
            source_orientation=orientation.opposite,
            target_orientation=orientation,
            source_offset=0.0,
            **kwargs,
        )


def parse_point(text: str) -> Point:
    """Parse ``"x,y"`` into a Point."""
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != 2:
        raise ValueError(f"Expected 'x,y', got {text!r}")
    try:
        return Point(float(parts[0]), float(parts[1]))
    except ValueError:
        raise ValueError(f"Non-numeric coordinate in {text!r}") from None


def parse_rect(text: str) -> Rect:
    """Parse ``"left,top,right,bottom"`` into a Rect."""
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != 4:
        raise ValueError(f"Expected 'left,top,right,bottom', got {text!r}")
    try:
        left, top, right, bottom = (float(p) for p in parts)
    except ValueError:
        raise ValueError(f"Non-numeric coordinate in {text!r}") from None
    if right < left or bottom < top:
        raise ValueError(f"Rectangle {text!r} has negative size")
    return Rect(left, top, right, bottom)
