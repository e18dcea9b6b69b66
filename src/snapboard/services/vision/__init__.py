"""
Vision analysis for snapboard.

Turns a whiteboard photo into a ``DiagramAnalysis`` through one of several
interchangeable vision backends.
"""

from .base import BaseVisionAnalyzer
from .claude import ClaudeVisionAnalyzer
from .factory import VisionAnalyzerFactory
from .gemini import GeminiVisionAnalyzer
from .parsing import extract_json_object, parse_analysis_reply
from .prompt import build_prompt

__all__ = [
    "BaseVisionAnalyzer",
    "GeminiVisionAnalyzer",
    "ClaudeVisionAnalyzer",
    "VisionAnalyzerFactory",
    "build_prompt",
    "extract_json_object",
    "parse_analysis_reply",
]
