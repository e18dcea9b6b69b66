"""
snapboard - turn whiteboard photos into collaboration boards.
"""

__version__ = "1.0.0"

from .shared.config.settings import Settings, get_settings
from .shared.exceptions import SnapBoardError, ConfigurationError

__all__ = [
    "Settings",
    "get_settings",
    "SnapBoardError",
    "ConfigurationError",
]
