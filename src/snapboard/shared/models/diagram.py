"""
Diagram analysis models.

A ``DiagramAnalysis`` is what a vision backend extracted from one image:
shapes, connectors, standalone text and sticky notes positioned in a 0-100
percentage space. Field aliases match the keys the vision prompt asks for
(``type``, ``color``, ``from``, ``to``, ``fontSize``), so a parsed reply can
be validated directly.

Vision output is noisy, so validation is lenient: unknown enum values are
normalized to a default instead of rejected, missing coordinates
default to the centre of the image, and a malformed entry is dropped from its
collection without failing the rest.
"""

import math
from enum import Enum
from typing import List, Optional

from pydantic import ConfigDict, Field, ValidationError, ValidationInfo, field_validator

from ..infrastructure.monitoring.logger import get_logger
from .base import BaseModel

logger = get_logger(__name__)


class ShapeKind(str, Enum):
    RECTANGLE = "rectangle"
    CIRCLE = "circle"
    DIAMOND = "diamond"
    OVAL = "oval"
    PARALLELOGRAM = "parallelogram"
    HEXAGON = "hexagon"


class ConnectorStyle(str, Enum):
    ARROW = "arrow"
    LINE = "line"
    DASHED = "dashed"


class FontSizeHint(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


def _coerce_enum(value, enum_cls, default):
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            pass
    return default


def _coerce_percent(value):
    if value is None:
        return 50.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 50.0
    if not math.isfinite(number):
        return 50.0
    return min(max(number, 0.0), 100.0)


def _coerce_text(value):
    if value is None:
        return ""
    return str(value)


def _coerce_optional_text(value):
    if value is None:
        return None
    value = str(value).strip()
    if not value or value.lower() == "null":
        return None
    return value


class AnalysisItem(BaseModel):
    """Common configuration for items parsed from a vision reply."""
    
    model_config = ConfigDict(extra="ignore")
    
    id: str = Field(..., description="Analysis-local identifier")
    
    @field_validator('id', mode='before')
    @classmethod
    def validate_id(cls, v):
        if v is None or not str(v).strip():
            raise ValueError("id cannot be empty")
        return str(v).strip()


class PositionedItem(AnalysisItem):
    x: float = Field(default=50.0, description="Horizontal position, percent of image width")
    y: float = Field(default=50.0, description="Vertical position, percent of image height")
    
    @field_validator('x', 'y', mode='before')
    @classmethod
    def validate_percent(cls, v):
        return _coerce_percent(v)


class AnalysisShape(PositionedItem):
    kind: ShapeKind = Field(default=ShapeKind.RECTANGLE, alias="type")
    text: str = Field(default="")
    width: Optional[float] = Field(default=None, description="Width in semantic units")
    height: Optional[float] = Field(default=None, description="Height in semantic units")
    color_hint: Optional[str] = Field(default=None, alias="color")
    
    @field_validator('kind', mode='before')
    @classmethod
    def validate_kind(cls, v):
        return _coerce_enum(v, ShapeKind, ShapeKind.RECTANGLE)
    
    @field_validator('text', mode='before')
    @classmethod
    def validate_text(cls, v):
        return _coerce_text(v)
    
    @field_validator('width', 'height', mode='before')
    @classmethod
    def validate_size(cls, v):
        try:
            number = float(v)
        except (TypeError, ValueError):
            return None
        return number if math.isfinite(number) and number > 0 else None
    
    @field_validator('color_hint', mode='before')
    @classmethod
    def validate_color_hint(cls, v):
        return _coerce_optional_text(v)


class AnalysisConnector(AnalysisItem):
    from_id: str = Field(default="", alias="from")
    to_id: str = Field(default="", alias="to")
    label: Optional[str] = Field(default=None)
    style: ConnectorStyle = Field(default=ConnectorStyle.ARROW)
    
    @field_validator('from_id', 'to_id', mode='before')
    @classmethod
    def validate_endpoint(cls, v):
        return _coerce_text(v).strip()
    
    @field_validator('label', mode='before')
    @classmethod
    def validate_label(cls, v):
        return _coerce_optional_text(v)
    
    @field_validator('style', mode='before')
    @classmethod
    def validate_style(cls, v):
        return _coerce_enum(v, ConnectorStyle, ConnectorStyle.ARROW)


class AnalysisTextBlock(PositionedItem):
    content: str = Field(default="")
    font_size_hint: FontSizeHint = Field(default=FontSizeHint.MEDIUM, alias="fontSize")
    
    @field_validator('content', mode='before')
    @classmethod
    def validate_content(cls, v):
        return _coerce_text(v)
    
    @field_validator('font_size_hint', mode='before')
    @classmethod
    def validate_font_size(cls, v):
        return _coerce_enum(v, FontSizeHint, FontSizeHint.MEDIUM)


class AnalysisStickyNote(PositionedItem):
    content: str = Field(default="")
    color_hint: Optional[str] = Field(default=None, alias="color")
    
    @field_validator('content', mode='before')
    @classmethod
    def validate_content(cls, v):
        return _coerce_text(v)
    
    @field_validator('color_hint', mode='before')
    @classmethod
    def validate_color_hint(cls, v):
        v = _coerce_optional_text(v)
        return v.lower() if v else v


COLLECTION_ITEMS = {
    'shapes': AnalysisShape,
    'connectors': AnalysisConnector,
    'text_blocks': AnalysisTextBlock,
    'sticky_notes': AnalysisStickyNote,
}


class DiagramAnalysis(BaseModel):
    """Normalized diagram description produced by a vision backend."""
    
    model_config = ConfigDict(extra="ignore")
    
    shapes: List[AnalysisShape] = Field(default_factory=list)
    connectors: List[AnalysisConnector] = Field(default_factory=list)
    text_blocks: List[AnalysisTextBlock] = Field(default_factory=list, alias="textBlocks")
    sticky_notes: List[AnalysisStickyNote] = Field(default_factory=list, alias="stickyNotes")
    title: Optional[str] = Field(default=None)
    
    @field_validator('shapes', 'connectors', 'text_blocks', 'sticky_notes', mode='before')
    @classmethod
    def validate_collection(cls, v, info: ValidationInfo):
        """Keep the entries that validate; drop the others with a warning."""
        if not isinstance(v, list):
            return []

        item_cls = COLLECTION_ITEMS[info.field_name]
        items = []
        for index, entry in enumerate(v):
            if isinstance(entry, item_cls):
                items.append(entry)
                continue
            if not isinstance(entry, dict):
                logger.warning(f"Dropping {info.field_name}[{index}]: expected an object, got {type(entry).__name__}")
                continue
            try:
                items.append(item_cls.model_validate(entry))
            except ValidationError as e:
                logger.warning(f"Dropping {info.field_name}[{index}]: {e.error_count()} invalid field(s)")
        return items
    
    @field_validator('title', mode='before')
    @classmethod
    def validate_title(cls, v):
        return _coerce_optional_text(v)
    
    @property
    def item_ids(self) -> List[str]:
        """Ids connectors may reference, in creation order."""
        return [item.id for item in [*self.shapes, *self.text_blocks, *self.sticky_notes]]
    
    def to_wire(self) -> dict:
        """Serialize using the same keys the vision backend replies with."""
        return self.model_dump(mode="json", by_alias=True)
