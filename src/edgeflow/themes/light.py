"""Light theme."""

from edgeflow.render.style import Theme

LIGHT_THEME = Theme(
    name="light",
    background_color="none",
    node_fill="#ffffff",
    node_stroke="#333333",
    node_stroke_width=2.0,
    node_corner_radius=6.0,
    connection_color="#333333",
    connection_width=2.0,
    label_color="#333333",
    label_font_family="'Helvetica Neue', Helvetica, Arial, sans-serif",
    label_font_size=14.0,
    hit_rect_fill="rgba(0, 120, 255, 0.12)",
    hit_rect_stroke="rgba(0, 120, 255, 0.5)",
)
