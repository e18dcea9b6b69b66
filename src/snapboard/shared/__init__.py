"""
Shared components for snapboard.

Contains common models, configuration, the exception hierarchy and
logging used across all services.
"""

from .models import *
from .config import Settings, get_settings
from .exceptions import *
from .infrastructure import get_logger, setup_logging

__all__ = [
    # From models
    "BaseModel", "ShapeKind", "ConnectorStyle", "FontSizeHint",
    "AnalysisShape", "AnalysisConnector", "AnalysisTextBlock", "AnalysisStickyNote",
    "DiagramAnalysis", "PlannedShape", "PlannedText", "PlannedStickyNote",
    "PendingConnector", "ResolvedConnector", "BoardPlan", "BoardRef", "IdentifierMap",
    
    # From config
    "Settings", "get_settings",
    
    # From exceptions
    "SnapBoardError", "ConfigurationError", "UploadError", "AuthError",
    "PermissionDeniedError", "RateLimitError", "UnavailableError", "BackendError",
    "VisionParseError", "ConversionCancelledError",
    
    # From infrastructure
    "get_logger", "setup_logging",
]
