"""
Named palettes and fixed style tables used when planning a board.
"""

from typing import Dict, Optional

from ...shared import BaseModel


class Theme(BaseModel):
    name: str
    primary: str
    secondary: str
    accent: str
    background: str
    border: str
    
    @property
    def shape_cycle(self):
        """Fill colors shapes rotate through when they have no color hint."""
        return (self.primary, self.secondary, self.accent)


DEFAULT_THEME = "default"

THEMES: Dict[str, Theme] = {
    "default": Theme(
        name="default", primary="#4ecdc4", secondary="#ffe66d", accent="#ff6b6b",
        background="#ffffff", border="#1a1a1a",
    ),
    "ocean": Theme(
        name="ocean", primary="#0077b6", secondary="#00b4d8", accent="#90e0ef",
        background="#caf0f8", border="#03045e",
    ),
    "forest": Theme(
        name="forest", primary="#2d6a4f", secondary="#52b788", accent="#b7e4c7",
        background="#d8f3dc", border="#1b4332",
    ),
    "sunset": Theme(
        name="sunset", primary="#f77f00", secondary="#fcbf49", accent="#d62828",
        background="#fff3e0", border="#6a040f",
    ),
    "purple": Theme(
        name="purple", primary="#7b2cbf", secondary="#c77dff", accent="#e0aaff",
        background="#f3e8ff", border="#3c096c",
    ),
}

COLOR_PALETTE = {
    'red': '#ff6b6b',
    'blue': '#4ecdc4',
    'green': '#95e1d3',
    'yellow': '#f9ed69',
    'orange': '#f38181',
    'purple': '#a8d8ea',
    'pink': '#ffb6b9',
    'gray': '#c4c4c4',
}
DEFAULT_FILL_COLOR = '#ffffff'

FONT_SIZES = {
    'small': 14,
    'medium': 24,
    'large': 36,
}
DEFAULT_FONT_SIZE = FONT_SIZES['medium']

# Sticky note colors accepted by the board service
STICKY_COLORS = {
    'yellow': 'yellow',
    'pink': 'pink',
    'blue': 'light_blue',
    'green': 'light_green',
    'orange': 'orange',
}
DEFAULT_STICKY_COLOR = 'yellow'


def get_theme(name: Optional[str]) -> Theme:
    """Look up a theme by name; unknown or empty names give the default theme."""
    key = (name or "").strip().lower()
    return THEMES.get(key, THEMES[DEFAULT_THEME])
