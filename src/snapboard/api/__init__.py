"""
snapboard HTTP API.
"""

from .app import create_app
from .models import ConvertResponse, ErrorResponse, PreviewResponse

__all__ = [
    "create_app",
    "ConvertResponse",
    "ErrorResponse",
    "PreviewResponse",
]
