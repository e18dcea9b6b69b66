"""
API models for request/response handling.

Responses use the camelCase keys the browser client expects.
"""

from typing import Any, Dict, Optional
from pydantic import ConfigDict, Field

from ..shared.models.base import BaseModel


class APIModel(BaseModel):
    model_config = ConfigDict(frozen=False)


class ErrorResponse(APIModel):
    """Standard error response."""
    
    error: str = Field(..., description="Error message")
    
    model_config = ConfigDict(json_schema_extra={
        "example": {"error": "File too large. Maximum size is 10MB."}
    })


class AnalysisSummary(APIModel):
    title: str = Field(..., description="Board title that would be used")
    shapes: int = Field(default=0)
    text_blocks: int = Field(default=0, alias="textBlocks")
    sticky_notes: int = Field(default=0, alias="stickyNotes")
    connectors: int = Field(default=0)


class PreviewResponse(APIModel):
    """Analysis preview, no board created."""
    
    success: bool = Field(default=True, description="Whether the request succeeded")
    analysis: AnalysisSummary = Field(..., description="Item counts")
    raw: Dict[str, Any] = Field(..., description="Raw diagram analysis")


class ConvertResponse(APIModel):
    """Result of creating a board from a whiteboard photo."""
    
    success: bool = Field(default=True, description="Whether the request succeeded")
    board_id: str = Field(..., alias="boardId", description="Remote board id")
    board_url: Optional[str] = Field(default=None, alias="boardUrl", description="Board view link")
    item_count: int = Field(default=0, alias="itemCount", description="Items created")
    title: str = Field(..., description="Board title")
    
    model_config = ConfigDict(json_schema_extra={
        "example": {
            "success": True,
            "boardId": "uXjVKexample=",
            "boardUrl": "https://miro.com/app/board/uXjVKexample=",
            "itemCount": 12,
            "title": "Checkout flow"
        }
    })


class HealthResponse(APIModel):
    """Health check response."""
    
    status: str = Field(..., description="Service status")
    timestamp: str = Field(..., description="Check timestamp")
