"""
Shared data models for snapboard.
"""

from .base import BaseModel
from .diagram import (
    AnalysisConnector, AnalysisShape, AnalysisStickyNote, AnalysisTextBlock,
    ConnectorStyle, DiagramAnalysis, FontSizeHint, ShapeKind
)
from .board import (
    BoardPlan, BoardRef, IdentifierMap, PendingConnector, PlannedShape,
    PlannedStickyNote, PlannedText, ResolvedConnector
)

__all__ = [
    "BaseModel",
    "ShapeKind", "ConnectorStyle", "FontSizeHint",
    "AnalysisShape", "AnalysisConnector", "AnalysisTextBlock", "AnalysisStickyNote",
    "DiagramAnalysis",
    "PlannedShape", "PlannedText", "PlannedStickyNote",
    "PendingConnector", "ResolvedConnector",
    "BoardPlan", "BoardRef", "IdentifierMap",
]
