"""
Shared fixtures: settings without real credentials, and in-memory stand-ins
for the vision backend and the board service.
"""

from typing import Dict, List, Optional, Set

import pytest

from snapboard.shared import BoardRef, DiagramAnalysis, Settings


def make_settings(**overrides) -> Settings:
    values = dict(
        gemini_api_key="test-gemini-key",
        anthropic_api_key="test-anthropic-key",
        miro_access_token="test-miro-token",
        miro_team_id=None,
        item_concurrency=2,
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


class FakeAnalyzer:
    """Returns a fixed analysis and records what it was asked."""
    
    name = "fake"
    
    def __init__(self, analysis: DiagramAnalysis, error: Optional[Exception] = None):
        self.analysis = analysis
        self.error = error
        self.calls: List[Dict] = []
    
    def analyze(self, image_data, mime_type=None, glossary=None, customization=None):
        self.calls.append({
            'image_data': image_data,
            'mime_type': mime_type,
            'glossary': glossary,
            'customization': customization,
        })
        if self.error is not None:
            raise self.error
        return self.analysis


class FakeBoardClient:
    """
    Records every creation call; items whose source id is in ``fail_ids``
    raise ``fail_error``.
    """
    
    def __init__(self,
                 fail_ids: Optional[Set[str]] = None,
                 fail_error: Optional[Exception] = None,
                 board_error: Optional[Exception] = None):
        self.fail_ids = fail_ids or set()
        self.fail_error = fail_error or RuntimeError("remote item rejected")
        self.board_error = board_error
        self.boards: List[Dict] = []
        self.shapes: List = []
        self.texts: List = []
        self.stickies: List = []
        self.connectors: List[Dict] = []
        self.closed = False
    
    def create_board(self, name, description=""):
        if self.board_error is not None:
            raise self.board_error
        self.boards.append({'name': name, 'description': description})
        return BoardRef(board_id="board-1", board_url="https://miro.com/app/board/board-1/")
    
    def _create(self, bucket, board_id, item):
        assert board_id == "board-1"
        if item.source_id in self.fail_ids:
            raise self.fail_error
        bucket.append(item)
        return f"remote-{item.source_id}"
    
    def create_shape(self, board_id, shape):
        return self._create(self.shapes, board_id, shape)
    
    def create_text(self, board_id, text):
        return self._create(self.texts, board_id, text)
    
    def create_sticky_note(self, board_id, sticky):
        return self._create(self.stickies, board_id, sticky)
    
    def create_connector(self, board_id, start_item_id, end_item_id, label=None, style="arrow"):
        assert board_id == "board-1"
        self.connectors.append({
            'start': start_item_id,
            'end': end_item_id,
            'label': label,
            'style': style,
        })
        return f"remote-conn-{len(self.connectors)}"
    
    def close(self):
        self.closed = True


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def two_shape_analysis():
    return DiagramAnalysis.model_validate({
        "shapes": [
            {"id": "s1", "type": "rectangle", "text": "Start", "x": 25, "y": 50},
            {"id": "s2", "type": "diamond", "text": "Decide", "x": 75, "y": 50},
        ],
        "connectors": [
            {"id": "c1", "from": "s1", "to": "s2", "label": None, "style": "arrow"},
        ],
        "textBlocks": [],
        "stickyNotes": [],
        "title": "Flow",
    })


@pytest.fixture
def mixed_analysis():
    return DiagramAnalysis.model_validate({
        "shapes": [
            {"id": "s1", "type": "rectangle", "text": "API", "x": 10, "y": 10, "color": "blue"},
            {"id": "s2", "type": "circle", "text": "DB", "x": 90, "y": 10},
            {"id": "s3", "type": "hexagon", "text": "Cache", "x": 50, "y": 90, "color": "#123456"},
        ],
        "connectors": [
            {"id": "c1", "from": "s1", "to": "s2", "style": "arrow"},
            {"id": "c2", "from": "s2", "to": "s3", "style": "dashed", "label": "sync"},
            {"id": "c3", "from": "t1", "to": "n1", "style": "line"},
            {"id": "c4", "from": "s1", "to": "ghost", "style": "arrow"},
        ],
        "textBlocks": [
            {"id": "t1", "content": "Architecture", "x": 50, "y": 5, "fontSize": "large"},
        ],
        "stickyNotes": [
            {"id": "n1", "content": "Ask ops", "x": 80, "y": 80, "color": "pink"},
        ],
        "title": "System",
    })
