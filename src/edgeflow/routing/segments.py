"""Drawable path segment primitives.

A connection path is a start point followed by a list of segments. Each
segment draws from the current point (the previous segment's end, or the
path start) to its own ``end``:

- ``StraightSegment``: line-to.
- ``QuadraticSegment``: quadratic curve-to, used for rounded corners.
- ``CubicSegment``: cubic curve-to, used by bezier styles.

``hit_test`` is False for segments whose hit area is already covered by
their neighbours (corner quadratics between two straight legs).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Union

from edgeflow.model import Point, Rect
from edgeflow.routing.constants import DEFAULT_CURVATURE


@dataclass(frozen=True)
class StraightSegment:
    """A straight line from the current point to ``end``."""

    end: Point
    hit_test: bool = True


@dataclass(frozen=True)
class QuadraticSegment:
    """A quadratic bezier pulled toward ``control``."""

    control: Point
    end: Point
    hit_test: bool = True

    def evaluate(self, start: Point, t: float) -> Point:
        """Point at parameter *t* in [0, 1]."""
        u = 1 - t
        return Point(
            u * u * start.x + 2 * u * t * self.control.x + t * t * self.end.x,
            u * u * start.y + 2 * u * t * self.control.y + t * t * self.end.y,
        )

    def hull(self, start: Point) -> Rect:
        """Bounding box of start, control and end."""
        return Rect.from_points([start, self.control, self.end])


@dataclass(frozen=True)
class CubicSegment:
    """A cubic bezier with two control points.

    ``curvature`` is the factor the control points were derived from; hit
    testing uses it to decide how finely to subdivide the curve.
    """

    control1: Point
    control2: Point
    end: Point
    curvature: float = DEFAULT_CURVATURE
    hit_test: bool = True

    def evaluate(self, start: Point, t: float) -> Point:
        """Bernstein evaluation at parameter *t* in [0, 1]."""
        u = 1 - t
        u2 = u * u
        t2 = t * t
        return Point(
            u2 * u * start.x
            + 3 * u2 * t * self.control1.x
            + 3 * u * t2 * self.control2.x
            + t2 * t * self.end.x,
            u2 * u * start.y
            + 3 * u2 * t * self.control1.y
            + 3 * u * t2 * self.control2.y
            + t2 * t * self.end.y,
        )

    def hull(self, start: Point) -> Rect:
        """Bounding box of start, both control points and end."""
        return Rect.from_points([start, self.control1, self.control2, self.end])


PathSegment = Union[StraightSegment, QuadraticSegment, CubicSegment]


@dataclass(frozen=True)
class SegmentPath:
    """A path start point plus the segments drawn from it."""

    start: Point
    segments: tuple[PathSegment, ...]

    @property
    def end(self) -> Point:
        return self.segments[-1].end if self.segments else self.start

    def points(self) -> list[Point]:
        """Start plus every segment end point."""
        return extract_bend_points(self.start, self.segments)


def extract_bend_points(start: Point, segments: Sequence[PathSegment]) -> list[Point]:
    """Return the start point followed by the end of each segment."""
    return [start] + [segment.end for segment in segments]
