"""Dark grey theme."""

from edgeflow.render.style import Theme

DARK_THEME = Theme(
    name="dark",
    background_color="#2b2b2b",
    node_fill="rgba(255, 255, 255, 0.06)",
    node_stroke="rgba(255, 255, 255, 0.3)",
    node_stroke_width=1.5,
    node_corner_radius=6.0,
    connection_color="#4fc3f7",
    connection_width=2.5,
    label_color="#e0e0e0",
    label_font_family="'Helvetica Neue', Helvetica, Arial, sans-serif",
    label_font_size=14.0,
    marker_fill="#2b2b2b",
)
