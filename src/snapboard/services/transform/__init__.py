"""
Analysis-to-board transform for snapboard.
"""

from .themes import THEMES, Theme, get_theme
from .transformer import (
    CANVAS_HEIGHT, CANVAS_WIDTH, percent_to_pixel, resolve_color,
    resolve_connectors, transform
)

__all__ = [
    "THEMES",
    "Theme",
    "get_theme",
    "CANVAS_WIDTH",
    "CANVAS_HEIGHT",
    "percent_to_pixel",
    "resolve_color",
    "resolve_connectors",
    "transform",
]
