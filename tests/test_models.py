"""
Tests for diagram analysis validation.
"""

import pytest
from pydantic import ValidationError

from snapboard.shared import DiagramAnalysis


def test_wire_keys_are_accepted():
    analysis = DiagramAnalysis.model_validate({
        "shapes": [{"id": "s1", "type": "diamond", "text": "?", "x": 1, "y": 2, "color": "red"}],
        "connectors": [{"id": "c1", "from": "s1", "to": "s2", "style": "dashed"}],
        "textBlocks": [{"id": "t1", "content": "x", "x": 3, "y": 4, "fontSize": "small"}],
        "stickyNotes": [{"id": "n1", "content": "y", "x": 5, "y": 6, "color": "Green"}],
    })
    
    shape = analysis.shapes[0]
    assert (shape.kind, shape.color_hint) == ("diamond", "red")
    assert (analysis.connectors[0].from_id, analysis.connectors[0].to_id) == ("s1", "s2")
    assert analysis.text_blocks[0].font_size_hint == "small"
    assert analysis.sticky_notes[0].color_hint == "green"
    assert analysis.item_ids == ["s1", "t1", "n1"]


def test_noisy_values_are_normalized():
    analysis = DiagramAnalysis.model_validate({
        "shapes": [{"id": 7, "type": "square", "text": None, "x": 150, "y": -3, "width": "wide", "color": "null"}],
        "connectors": [{"id": "c1", "from": "7", "to": "8", "style": "zigzag", "label": ""}],
        "textBlocks": [{"id": "t1", "content": "x", "fontSize": "enormous"}],
        "extra": "ignored",
    })
    
    shape = analysis.shapes[0]
    assert shape.id == "7"
    assert shape.kind == "rectangle"
    assert shape.text == ""
    assert (shape.x, shape.y) == (100.0, 0.0)
    assert shape.width is None
    assert shape.color_hint is None
    assert analysis.connectors[0].style == "arrow"
    assert analysis.connectors[0].label is None
    assert analysis.text_blocks[0].font_size_hint == "medium"
    assert (analysis.text_blocks[0].x, analysis.text_blocks[0].y) == (50.0, 50.0)


def test_non_list_collections_become_empty():
    analysis = DiagramAnalysis.model_validate({"shapes": None, "connectors": "none"})
    assert analysis.shapes == []
    assert analysis.connectors == []


def test_analysis_is_immutable(two_shape_analysis):
    with pytest.raises(ValidationError):
        two_shape_analysis.title = "changed"


def test_to_wire_round_trips_wire_keys(two_shape_analysis):
    wire = two_shape_analysis.to_wire()
    assert wire["connectors"][0]["from"] == "s1"
    assert wire["shapes"][1]["type"] == "diamond"
    assert "textBlocks" in wire and "stickyNotes" in wire


def test_non_finite_numbers_fall_back_to_defaults():
    analysis = DiagramAnalysis.model_validate({
        "shapes": [{"id": "s1", "x": float("nan"), "y": float("inf"), "width": float("nan"), "height": float("inf")}],
        "stickyNotes": [{"id": "n1", "x": "NaN", "y": "-Infinity"}],
    })
    
    shape = analysis.shapes[0]
    assert (shape.x, shape.y) == (50.0, 50.0)
    assert (shape.width, shape.height) == (None, None)
    assert (analysis.sticky_notes[0].x, analysis.sticky_notes[0].y) == (50.0, 50.0)


def test_model_instances_in_collections_are_kept(two_shape_analysis):
    rebuilt = DiagramAnalysis(shapes=two_shape_analysis.shapes, connectors=two_shape_analysis.connectors)
    assert rebuilt.shapes == two_shape_analysis.shapes
    assert rebuilt.connectors == two_shape_analysis.connectors
