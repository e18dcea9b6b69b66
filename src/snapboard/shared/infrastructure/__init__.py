"""
Shared infrastructure components for snapboard.

Currently limited to logging; remote clients live with the services that
own them (vision backends, board client).
"""

from .monitoring.logger import get_logger, setup_logging

__all__ = [
    "get_logger",
    "setup_logging",
]
