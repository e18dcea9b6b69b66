"""
Board service client for snapboard.
"""

from .client import BOARD_DESCRIPTION, MiroBoardClient
from .retry import with_retry

__all__ = [
    "BOARD_DESCRIPTION",
    "MiroBoardClient",
    "with_retry",
]
