"""Endpoint marker placement at the ports of a connection."""

from __future__ import annotations

from dataclasses import dataclass

from edgeflow.model import Orientation, Point


@dataclass(frozen=True)
class EndpointPoints:
    """Where an endpoint marker is centred and where the line attaches."""

    marker: Point
    line: Point


def endpoint_points(
    port: Point,
    orientation: Orientation,
    marker_size: tuple[float, float],
    gap: float = 0.0,
) -> EndpointPoints:
    """Place a marker of *marker_size* (width, height) outside *port*.

    The marker sits *gap* away from the port along its facing direction;
    the line begins at the far edge of the marker. Horizontal ports use
    the marker width, vertical ports its height.
    """
    width, height = marker_size
    extent = width if orientation.is_horizontal else height
    direction = orientation.unit_vector
    gapped = port + direction * gap
    return EndpointPoints(
        marker=gapped + direction * (extent / 2),
        line=gapped + direction * extent,
    )
