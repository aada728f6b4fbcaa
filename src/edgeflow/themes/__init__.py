"""Theme definitions for connection diagrams."""

from edgeflow.themes.dark import DARK_THEME
from edgeflow.themes.light import LIGHT_THEME

THEMES = {
    "dark": DARK_THEME,
    "light": LIGHT_THEME,
}

__all__ = ["THEMES", "DARK_THEME", "LIGHT_THEME"]
