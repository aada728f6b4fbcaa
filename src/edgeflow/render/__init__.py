"""Rendering subpackage.

Public API:
- render_svg: Draw connections and their nodes with drawsvg
- segments_to_path_data: SVG path data (M/L/Q/C) for a segment chain
- Connection: One connection to draw
- Theme: Colours and widths
"""

from edgeflow.render.style import Theme
from edgeflow.render.svg import Connection, render_svg, segments_to_path_data

__all__ = [
    "Connection",
    "Theme",
    "render_svg",
    "segments_to_path_data",
]
