"""
Service models for whiteboard conversion.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import Field, field_validator

from ...shared.models.base import BaseModel
from ...shared.models.diagram import DiagramAnalysis


class ConversionStage(str, Enum):
    ANALYZING = "analyzing"
    TRANSFORMING = "transforming"
    CREATING_BOARD = "creating_board"
    CREATING_ITEMS = "creating_items"
    RESOLVING_CONNECTORS = "resolving_connectors"
    DONE = "done"
    FAILED = "failed"


# Failures in these stages abort the whole request
FATAL_STAGES = frozenset({
    ConversionStage.ANALYZING,
    ConversionStage.TRANSFORMING,
    ConversionStage.CREATING_BOARD,
})


class ConversionRequest(BaseModel):
    """A single whiteboard image plus the user's options."""
    
    image_data: bytes = Field(..., description="Raw image bytes")
    mime_type: str = Field(default="image/jpeg", description="Image MIME type")
    backend: Optional[str] = Field(default=None, description="Vision backend name")
    glossary: str = Field(default="", description="Known terms for ambiguous handwriting")
    theme: str = Field(default="default", description="Theme applied to shapes")
    customization: str = Field(default="", description="Styling/layout request")
    
    @field_validator('image_data')
    @classmethod
    def validate_image_data(cls, v):
        if not v:
            raise ValueError("Image data cannot be empty")
        return v


class CreationResult(BaseModel):
    """Summary of a completed conversion."""
    
    board_id: str = Field(..., description="Remote board identifier")
    board_url: Optional[str] = Field(default=None, description="Link to view the board")
    title: str = Field(..., description="Board title")
    item_count: int = Field(default=0, ge=0, description="Successfully created items, connectors included")


class PreviewResult(BaseModel):
    """Analysis counts and the raw analysis, without creating a board."""
    
    title: str
    shapes: int = 0
    text_blocks: int = 0
    sticky_notes: int = 0
    connectors: int = 0
    raw: DiagramAnalysis
    
    def get_summary(self) -> Dict[str, Any]:
        return {
            'title': self.title,
            'shapes': self.shapes,
            'textBlocks': self.text_blocks,
            'stickyNotes': self.sticky_notes,
            'connectors': self.connectors,
        }
