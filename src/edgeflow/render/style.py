"""Theme dataclass for connection rendering."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Theme:
    """Visual theme for a connection diagram."""

    name: str
    background_color: str
    node_fill: str
    node_stroke: str
    node_stroke_width: float
    node_corner_radius: float
    connection_color: str
    connection_width: float
    label_color: str
    label_font_family: str
    label_font_size: float
    # Port markers
    marker_fill: str = "#ffffff"
    marker_stroke: str = ""  # empty = inherit connection_color
    marker_radius: float = 4.0
    # Hit-rectangle overlay
    hit_rect_fill: str = "rgba(255, 0, 0, 0.12)"
    hit_rect_stroke: str = "rgba(255, 0, 0, 0.5)"
    hit_rect_stroke_width: float = 0.5
