"""
Vision backend selection.
"""

from typing import List, Optional

from ...shared import Settings, get_logger
from .base import BaseVisionAnalyzer
from .claude import ClaudeVisionAnalyzer
from .gemini import GeminiVisionAnalyzer

logger = get_logger(__name__)


class VisionAnalyzerFactory:
    """Factory for creating vision analyzers by backend name."""
    
    BACKEND_REGISTRY = {
        'gemini': GeminiVisionAnalyzer,
        'claude': ClaudeVisionAnalyzer,
    }
    
    @staticmethod
    def get_backend_names() -> List[str]:
        return list(VisionAnalyzerFactory.BACKEND_REGISTRY.keys())
    
    @staticmethod
    def create_analyzer(settings: Settings, backend: Optional[str] = None) -> BaseVisionAnalyzer:
        """Create an analyzer instance.
        
        Args:
            settings: Settings holding the backend credentials
            backend: Backend name ('gemini', 'claude'). Empty or unknown names
                fall back to the configured default backend.
                
        Returns:
            Vision analyzer instance
        """
        name = (backend or '').strip().lower()
        
        if name not in VisionAnalyzerFactory.BACKEND_REGISTRY:
            fallback = settings.default_vision_backend
            if fallback not in VisionAnalyzerFactory.BACKEND_REGISTRY:
                fallback = 'gemini'
            if name:
                logger.warning(f"Unknown vision backend '{backend}', using '{fallback}'")
            name = fallback
        
        return VisionAnalyzerFactory.BACKEND_REGISTRY[name](settings)
