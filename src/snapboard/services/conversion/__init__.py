"""
Whiteboard conversion service for snapboard.

Provides the pipeline that turns a photo into a board: vision analysis,
coordinate/style transform and two-phase item creation.
"""

from .models import ConversionRequest, ConversionStage, CreationResult, PreviewResult
from .pipeline import ConversionPipeline

__all__ = [
    "ConversionPipeline",
    "ConversionRequest",
    "ConversionStage",
    "CreationResult",
    "PreviewResult",
]
