"""
Board plan models.

A ``BoardPlan`` is a ``DiagramAnalysis`` converted into canvas units with
concrete colors, ready to be sent to the board service. Every planned item
keeps the analysis-local ``source_id`` so connectors can be resolved once the
remote ids are known.
"""

from threading import Lock
from typing import Dict, Iterator, List, Optional

from pydantic import Field

from .base import BaseModel
from .diagram import ConnectorStyle, ShapeKind


class PlannedShape(BaseModel):
    source_id: str
    kind: ShapeKind = ShapeKind.RECTANGLE
    text: str = ""
    x: float
    y: float
    width: float
    height: float
    fill_color: str
    border_color: str


class PlannedText(BaseModel):
    source_id: str
    content: str = ""
    x: float
    y: float
    font_size: int


class PlannedStickyNote(BaseModel):
    source_id: str
    content: str = ""
    x: float
    y: float
    color: str


class PendingConnector(BaseModel):
    """Connector between two source ids, not yet bound to remote items."""
    
    source_id: str
    from_source_id: str
    to_source_id: str
    label: Optional[str] = None
    style: ConnectorStyle = ConnectorStyle.ARROW


class ResolvedConnector(BaseModel):
    """Connector whose endpoints are remote item ids."""
    
    source_id: str
    start_item_id: str
    end_item_id: str
    label: Optional[str] = None
    style: ConnectorStyle = ConnectorStyle.ARROW


class BoardPlan(BaseModel):
    title: str
    theme: str
    shapes: List[PlannedShape] = Field(default_factory=list)
    text_blocks: List[PlannedText] = Field(default_factory=list)
    sticky_notes: List[PlannedStickyNote] = Field(default_factory=list)
    connectors: List[PendingConnector] = Field(default_factory=list)


class BoardRef(BaseModel):
    board_id: str
    board_url: Optional[str] = None


class IdentifierMap:
    """
    Maps source ids to remote item ids for one conversion.
    
    Keys are write-once: the first successful creation wins and later
    attempts to record the same source id are ignored.
    """
    
    def __init__(self):
        self._ids: Dict[str, str] = {}
        self._lock = Lock()
    
    def record(self, source_id: str, remote_id: str) -> bool:
        """Record a mapping; returns False if the source id was already mapped."""
        with self._lock:
            if source_id in self._ids:
                return False
            self._ids[source_id] = remote_id
            return True
    
    def get(self, source_id: str) -> Optional[str]:
        return self._ids.get(source_id)
    
    def __contains__(self, source_id: object) -> bool:
        return source_id in self._ids
    
    def __len__(self) -> int:
        return len(self._ids)
    
    def __iter__(self) -> Iterator[str]:
        return iter(self._ids)
    
    def as_dict(self) -> Dict[str, str]:
        return dict(self._ids)
