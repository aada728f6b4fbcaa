"""Render constants used by svg.py.

Theme-dependent values remain in style.py.
"""

# ---------------------------------------------------------------------------
# Canvas
# ---------------------------------------------------------------------------
CANVAS_PADDING: float = 40.0
"""Default padding around the drawn content."""

TITLE_HEIGHT: float = 30.0
"""Extra space reserved above the content when a title is drawn."""

EMPTY_SVG: str = '<svg xmlns="http://www.w3.org/2000/svg"></svg>'
"""Document returned when there is nothing to draw."""

# ---------------------------------------------------------------------------
# Path data
# ---------------------------------------------------------------------------
PATH_DATA_PRECISION: int = 2
"""Decimal places kept for coordinates in emitted path data."""

# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------
MARKER_GAP: float = 0.0
"""Distance between a port and its endpoint marker."""
