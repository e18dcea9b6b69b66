"""
Request bodies for the Miro REST API v2.
"""

from typing import Any, Dict, Optional

from ...shared import ConnectorStyle, PlannedShape, PlannedStickyNote, PlannedText

SHAPE_TYPES = {
    'rectangle': 'rectangle',
    'circle': 'circle',
    'diamond': 'rhombus',
    'oval': 'oval',
    'parallelogram': 'parallelogram',
    'hexagon': 'hexagon',
}

TEXT_COLOR = '#1a1a1a'
STROKE_COLOR = '#1a1a1a'
STROKE_WIDTH = '2'


def _position(x: float, y: float) -> Dict[str, Any]:
    return {'x': x, 'y': y, 'origin': 'center'}


def board_payload(name: str, description: str = '', team_id: Optional[str] = None) -> Dict[str, Any]:
    payload = {
        'name': name,
        'description': description,
    }
    if team_id:
        payload['teamId'] = team_id
    return payload


def shape_payload(shape: PlannedShape) -> Dict[str, Any]:
    return {
        'data': {
            'content': shape.text,
            'shape': SHAPE_TYPES.get(shape.kind, 'rectangle'),
        },
        'style': {
            'fillColor': shape.fill_color,
            'borderColor': shape.border_color,
            'borderWidth': STROKE_WIDTH,
            'textAlign': 'center',
            'textAlignVertical': 'middle',
        },
        'position': _position(shape.x, shape.y),
        'geometry': {
            'width': shape.width,
            'height': shape.height,
        },
    }


def text_payload(text: PlannedText) -> Dict[str, Any]:
    return {
        'data': {
            'content': text.content,
        },
        'style': {
            'color': TEXT_COLOR,
            'fontSize': str(text.font_size),
        },
        'position': _position(text.x, text.y),
    }


def sticky_note_payload(sticky: PlannedStickyNote) -> Dict[str, Any]:
    return {
        'data': {
            'content': sticky.content,
            'shape': 'square',
        },
        'style': {
            'fillColor': sticky.color,
        },
        'position': _position(sticky.x, sticky.y),
    }


def connector_payload(start_item_id: str,
                      end_item_id: str,
                      label: Optional[str] = None,
                      style: str = ConnectorStyle.ARROW) -> Dict[str, Any]:
    dashed = style == ConnectorStyle.DASHED
    payload = {
        'startItem': {'id': start_item_id, 'snapTo': 'auto'},
        'endItem': {'id': end_item_id, 'snapTo': 'auto'},
        'shape': 'elbowed' if dashed else 'straight',
        'style': {
            'strokeColor': STROKE_COLOR,
            'strokeWidth': STROKE_WIDTH,
            'strokeStyle': 'dashed' if dashed else 'normal',
            'startStrokeCap': 'none',
            'endStrokeCap': 'arrow' if style == ConnectorStyle.ARROW else 'none',
        },
    }
    if label:
        payload['captions'] = [{'content': label, 'position': '50%'}]
    return payload
