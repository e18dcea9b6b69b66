"""
Tests for the conversion pipeline using in-memory vision and board stand-ins.
"""

import asyncio
import time

import pytest

from snapboard.services.conversion import ConversionPipeline, ConversionRequest
from snapboard.shared import (
    AuthError, BackendError, ConversionCancelledError, DiagramAnalysis, VisionParseError
)
from tests.conftest import FakeAnalyzer, FakeBoardClient, make_settings


def make_pipeline(analyzer, board_client, settings=None):
    return ConversionPipeline(
        settings=settings or make_settings(),
        board_client=board_client,
        analyzer_factory=lambda backend: analyzer,
    )


def make_request(**overrides):
    values = dict(image_data=b"\xff\xd8fake-jpeg", mime_type="image/jpeg")
    values.update(overrides)
    return ConversionRequest(**values)


@pytest.mark.asyncio
async def test_convert_two_shapes_with_ocean_theme(two_shape_analysis):
    board = FakeBoardClient()
    pipeline = make_pipeline(FakeAnalyzer(two_shape_analysis), board)
    
    result = await pipeline.convert(make_request(theme="ocean"))
    
    assert result.board_id == "board-1"
    assert result.board_url == "https://miro.com/app/board/board-1/"
    assert result.title == "Flow"
    assert result.item_count == 3
    assert board.boards[0]['name'] == "Flow"
    assert len(board.shapes) == 2
    assert all(shape.border_color == "#03045e" for shape in board.shapes)
    assert board.connectors == [
        {'start': 'remote-s1', 'end': 'remote-s2', 'label': None, 'style': 'arrow'}
    ]


@pytest.mark.asyncio
async def test_request_options_reach_analyzer(two_shape_analysis):
    analyzer = FakeAnalyzer(two_shape_analysis)
    requested = []
    pipeline = ConversionPipeline(
        settings=make_settings(),
        board_client=FakeBoardClient(),
        analyzer_factory=lambda backend: requested.append(backend) or analyzer,
    )
    
    await pipeline.convert(make_request(
        backend="claude", glossary="Kafka, Redis", customization="dark colors", mime_type="image/png"
    ))
    
    assert requested == ["claude"]
    call = analyzer.calls[0]
    assert call['mime_type'] == "image/png"
    assert call['glossary'] == "Kafka, Redis"
    assert call['customization'] == "dark colors"


@pytest.mark.asyncio
async def test_item_failure_is_isolated(mixed_analysis):
    board = FakeBoardClient(fail_ids={"s2"})
    pipeline = make_pipeline(FakeAnalyzer(mixed_analysis), board)
    
    result = await pipeline.convert(make_request())
    
    # s1, s3, t1, n1 created; only t1 -> n1 has both endpoints
    assert [shape.source_id for shape in board.shapes] == ["s1", "s3"]
    assert board.connectors == [
        {'start': 'remote-t1', 'end': 'remote-n1', 'label': None, 'style': 'line'}
    ]
    assert result.item_count == 5


@pytest.mark.asyncio
async def test_connectors_across_item_kinds(mixed_analysis):
    board = FakeBoardClient()
    pipeline = make_pipeline(FakeAnalyzer(mixed_analysis), board)
    
    result = await pipeline.convert(make_request())
    
    # c4 points at an id that does not exist and is dropped
    assert sorted((c['start'], c['end']) for c in board.connectors) == [
        ('remote-s1', 'remote-s2'),
        ('remote-s2', 'remote-s3'),
        ('remote-t1', 'remote-n1'),
    ]
    dashed = next(c for c in board.connectors if c['style'] == 'dashed')
    assert dashed['label'] == "sync"
    assert result.item_count == 5 + 3


@pytest.mark.asyncio
async def test_board_creation_failure_is_fatal(two_shape_analysis):
    board = FakeBoardClient(board_error=AuthError("Miro rejected the access token"))
    pipeline = make_pipeline(FakeAnalyzer(two_shape_analysis), board)
    
    with pytest.raises(AuthError):
        await pipeline.convert(make_request())
    assert board.shapes == []
    assert board.connectors == []


@pytest.mark.asyncio
async def test_analysis_failure_is_fatal(two_shape_analysis):
    board = FakeBoardClient()
    analyzer = FakeAnalyzer(two_shape_analysis, error=VisionParseError("Expecting value", "garbage"))
    pipeline = make_pipeline(analyzer, board)
    
    with pytest.raises(VisionParseError):
        await pipeline.convert(make_request())
    assert board.boards == []


@pytest.mark.asyncio
async def test_empty_analysis_creates_empty_board():
    board = FakeBoardClient()
    pipeline = make_pipeline(FakeAnalyzer(DiagramAnalysis()), board)
    
    result = await pipeline.convert(make_request())
    
    assert result.item_count == 0
    assert result.title.startswith("Whiteboard Import - ")
    assert len(board.boards) == 1


@pytest.mark.asyncio
async def test_duplicate_source_ids_keep_first():
    analysis = DiagramAnalysis.model_validate({
        "shapes": [
            {"id": "a", "type": "rectangle", "text": "first", "x": 10, "y": 10},
            {"id": "a", "type": "rectangle", "text": "second", "x": 20, "y": 20},
        ],
        "textBlocks": [{"id": "a", "content": "clash", "x": 50, "y": 50}],
    })
    board = FakeBoardClient()
    pipeline = make_pipeline(FakeAnalyzer(analysis), board)
    
    result = await pipeline.convert(make_request())
    
    assert [shape.text for shape in board.shapes] == ["first"]
    assert board.texts == []
    assert result.item_count == 1


@pytest.mark.asyncio
async def test_preview_creates_nothing(mixed_analysis):
    board = FakeBoardClient()
    pipeline = make_pipeline(FakeAnalyzer(mixed_analysis), board)
    
    preview = await pipeline.preview(make_request())
    
    assert preview.get_summary() == {
        'title': 'System',
        'shapes': 3,
        'textBlocks': 1,
        'stickyNotes': 1,
        'connectors': 4,
    }
    assert preview.raw == mixed_analysis
    assert board.boards == []


@pytest.mark.asyncio
async def test_cancelled_before_start(two_shape_analysis):
    board = FakeBoardClient()
    analyzer = FakeAnalyzer(two_shape_analysis)
    pipeline = make_pipeline(analyzer, board)
    cancel = asyncio.Event()
    cancel.set()
    
    with pytest.raises(ConversionCancelledError):
        await pipeline.convert(make_request(), cancel_event=cancel)
    assert analyzer.calls == []
    assert board.boards == []


@pytest.mark.asyncio
async def test_cancelled_during_analysis_skips_board(two_shape_analysis):
    board = FakeBoardClient()
    cancel = asyncio.Event()
    
    class CancellingAnalyzer(FakeAnalyzer):
        def analyze(self, *args, **kwargs):
            cancel.set()
            return super().analyze(*args, **kwargs)
    
    pipeline = make_pipeline(CancellingAnalyzer(two_shape_analysis), board)
    
    with pytest.raises(ConversionCancelledError) as excinfo:
        await pipeline.convert(make_request(), cancel_event=cancel)
    assert "transforming" in str(excinfo.value)
    assert board.boards == []


@pytest.mark.asyncio
async def test_remote_ids_follow_items_under_concurrency():
    count = 8
    analysis = DiagramAnalysis.model_validate({
        "shapes": [
            {"id": f"s{i}", "type": "rectangle", "text": str(i), "x": i * 10, "y": 50}
            for i in range(count)
        ],
        "connectors": [
            {"id": f"c{i}", "from": f"s{i}", "to": f"s{i + 1}"}
            for i in range(count - 1)
        ],
    })
    
    class SlowBoardClient(FakeBoardClient):
        def create_shape(self, board_id, shape):
            # Earlier shapes finish later
            time.sleep(0.005 * (count - int(shape.source_id[1:])))
            return super().create_shape(board_id, shape)
    
    board = SlowBoardClient()
    pipeline = make_pipeline(FakeAnalyzer(analysis), board, settings=make_settings(item_concurrency=4))
    
    result = await pipeline.convert(make_request())
    
    assert result.item_count == count + count - 1
    assert sorted((c['start'], c['end']) for c in board.connectors) == sorted(
        (f"remote-s{i}", f"remote-s{i + 1}") for i in range(count - 1)
    )


@pytest.mark.asyncio
async def test_connector_failure_only_lowers_count(two_shape_analysis):
    class FailingConnectors(FakeBoardClient):
        def create_connector(self, *args, **kwargs):
            raise BackendError("Miro API error (400): invalid connector")
    
    board = FailingConnectors()
    pipeline = make_pipeline(FakeAnalyzer(two_shape_analysis), board)
    
    result = await pipeline.convert(make_request())
    
    assert result.item_count == 2


@pytest.mark.asyncio
async def test_duplicate_stands_in_when_first_occurrence_fails():
    analysis = DiagramAnalysis.model_validate({
        "shapes": [
            {"id": "a", "type": "rectangle", "text": "first", "x": 10, "y": 10},
            {"id": "a", "type": "circle", "text": "second", "x": 20, "y": 20},
            {"id": "a", "type": "oval", "text": "third", "x": 30, "y": 30},
            {"id": "b", "type": "rectangle", "text": "other", "x": 40, "y": 40},
        ],
        "connectors": [{"id": "c1", "from": "a", "to": "b"}],
    })
    
    class RejectsFirst(FakeBoardClient):
        def create_shape(self, board_id, shape):
            if shape.text == "first":
                raise BackendError("Miro API error (400): invalid shape")
            return super().create_shape(board_id, shape)
    
    board = RejectsFirst()
    pipeline = make_pipeline(FakeAnalyzer(analysis), board)
    
    result = await pipeline.convert(make_request())
    
    assert [shape.text for shape in board.shapes] == ["other", "second"]
    assert board.connectors[0]['start'] == "remote-a"
    assert result.item_count == 3


@pytest.mark.asyncio
async def test_connector_without_target_is_dropped(two_shape_analysis):
    analysis = DiagramAnalysis.model_validate({
        "shapes": [shape.model_dump(by_alias=True) for shape in two_shape_analysis.shapes],
        "connectors": [
            {"id": "c1", "from": "s1"},
            {"id": "c2", "from": "s1", "to": "s2"},
        ],
    })
    board = FakeBoardClient()
    pipeline = make_pipeline(FakeAnalyzer(analysis), board)
    
    result = await pipeline.convert(make_request())
    
    assert [(c['start'], c['end']) for c in board.connectors] == [('remote-s1', 'remote-s2')]
    assert result.item_count == 3
