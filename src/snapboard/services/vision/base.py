"""
Common contract for vision backends.
"""

import base64
from abc import ABC, abstractmethod
from typing import Optional

from ...shared import (
    AuthError, BackendError, DiagramAnalysis, RateLimitError, Settings,
    UnavailableError, get_logger
)
from .parsing import parse_analysis_reply
from .prompt import build_prompt


class BaseVisionAnalyzer(ABC):
    """
    Turns an image into a ``DiagramAnalysis`` through one vision provider.
    
    Subclasses only implement the provider call; prompt building, encoding
    and reply parsing are shared. Credentials are checked when ``analyze`` is
    called, never at construction. Calls are not retried here.
    """
    
    name: str = ""
    display_name: str = ""
    
    def __init__(self, settings: Settings):
        self.settings = settings
        self.logger = get_logger(__name__)
    
    def analyze(self,
                image_data: bytes,
                mime_type: Optional[str] = None,
                glossary: Optional[str] = None,
                customization: Optional[str] = None) -> DiagramAnalysis:
        """
        Analyze a whiteboard image.
        
        Args:
            image_data: Raw image bytes
            mime_type: Image MIME type, defaults to image/jpeg
            glossary: Known terms to prefer for ambiguous handwriting
            customization: Free-form styling/layout request
            
        Returns:
            Normalized diagram analysis
        """
        mime_type = mime_type or "image/jpeg"
        prompt = build_prompt(glossary, customization)

        self.logger.info(f"Sending image to {self.display_name} for analysis ({len(image_data)} bytes)")
        if glossary:
            self.logger.info(f"Using glossary terms: {glossary[:100]}")
        if customization:
            self.logger.info(f"Customization: {customization[:50]}")
        
        reply = self._generate(prompt, image_data, mime_type)
        analysis = parse_analysis_reply(reply)
        
        self.logger.info(
            f"{self.display_name} analysis complete: {len(analysis.shapes)} shapes, "
            f"{len(analysis.connectors)} connectors, {len(analysis.text_blocks)} text blocks, "
            f"{len(analysis.sticky_notes)} sticky notes"
        )
        return analysis
    
    @staticmethod
    def encode_image(image_data: bytes) -> str:
        """Base64-encode image bytes for JSON transport."""
        return base64.b64encode(image_data).decode("ascii")

    @abstractmethod
    def _generate(self, prompt: str, image_data: bytes, mime_type: str) -> str:
        """Send prompt and image to the provider and return the reply text."""
        pass
    
    def _classify_message(self, message: str) -> Exception:
        """Map a provider error message onto the transport error taxonomy."""
        lowered = message.lower()
        if 'api_key_invalid' in lowered or '401' in lowered or 'unauthenticated' in lowered:
            return AuthError(
                f"{self.display_name} API key is invalid or expired. Please check your credentials."
            )
        if 'rate_limit' in lowered or '429' in lowered or 'resource_exhausted' in lowered:
            return RateLimitError(
                f"{self.display_name} API rate limit exceeded. Please try again in a moment."
            )
        if '503' in lowered or 'unavailable' in lowered or 'overloaded' in lowered:
            return UnavailableError(
                f"{self.display_name} API is temporarily unavailable. Please try again later."
            )
        return BackendError(f"{self.display_name} API error: {message or 'Unknown error'}")
