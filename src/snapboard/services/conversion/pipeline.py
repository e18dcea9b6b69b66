"""
Whiteboard conversion pipeline.

Sequences vision analysis, the board transform and remote creation:

    analyzing -> transforming -> creating_board -> creating_items
        -> resolving_connectors -> done

Failures while analyzing, transforming or creating the board are fatal and
propagate to the caller. Failures creating a single item are logged with the
item's source id and skipped; the only trace left in the result is a lower
``item_count``. Connectors are created last because they reference remote ids
that only exist once their endpoints have been created.
"""

import asyncio
from typing import Any, Awaitable, Callable, List, Optional, Sequence, Tuple

from ...shared import (
    BoardPlan, ConversionCancelledError, DiagramAnalysis, IdentifierMap,
    Settings, get_logger, get_settings
)
from ..board import MiroBoardClient
from ..transform import resolve_connectors, transform
from ..vision import BaseVisionAnalyzer, VisionAnalyzerFactory
from .models import (
    FATAL_STAGES, ConversionRequest, ConversionStage, CreationResult, PreviewResult
)


class ConversionPipeline:
    """
    Converts whiteboard photos into boards.
    
    Holds no per-request state: every call to ``convert`` owns its own
    identifier map, so one pipeline can serve concurrent requests.
    """
    
    def __init__(self,
                 settings: Optional[Settings] = None,
                 board_client: Optional[MiroBoardClient] = None,
                 analyzer_factory: Optional[Callable[[Optional[str]], BaseVisionAnalyzer]] = None):
        self.settings = settings or get_settings()
        self.logger = get_logger(__name__)
        self.board_client = board_client or MiroBoardClient(self.settings)
        self.analyzer_factory = analyzer_factory or (
            lambda backend: VisionAnalyzerFactory.create_analyzer(self.settings, backend)
        )
    
    async def preview(self,
                      request: ConversionRequest,
                      cancel_event: Optional[asyncio.Event] = None) -> PreviewResult:
        """
        Analyze and transform an image without creating anything remotely.
        
        Args:
            request: Conversion request
            cancel_event: Optional signal checked between phases
            
        Returns:
            Item counts and the raw analysis
        """
        analysis = await self._analyze(request, cancel_event)
        
        self._checkpoint(cancel_event, ConversionStage.TRANSFORMING)
        plan = self._transform(analysis, request.theme)
        
        self.logger.info(
            f"Preview ready: '{plan.title}' with {len(plan.shapes)} shapes, "
            f"{len(plan.text_blocks)} text blocks, {len(plan.sticky_notes)} sticky notes, "
            f"{len(plan.connectors)} connectors"
        )
        
        return PreviewResult(
            title=plan.title,
            shapes=len(plan.shapes),
            text_blocks=len(plan.text_blocks),
            sticky_notes=len(plan.sticky_notes),
            connectors=len(plan.connectors),
            raw=analysis,
        )
    
    async def convert(self,
                      request: ConversionRequest,
                      cancel_event: Optional[asyncio.Event] = None) -> CreationResult:
        """
        Convert an image into a new board.
        
        Args:
            request: Conversion request
            cancel_event: Optional signal checked between phases
            
        Returns:
            Remote board reference and the number of items created
        """
        analysis = await self._analyze(request, cancel_event)
        
        self._checkpoint(cancel_event, ConversionStage.TRANSFORMING)
        plan = self._transform(analysis, request.theme)
        
        self._checkpoint(cancel_event, ConversionStage.CREATING_BOARD)
        board = await self._run_stage(
            ConversionStage.CREATING_BOARD,
            asyncio.to_thread(self.board_client.create_board, plan.title)
        )
        
        return await self.populate_board(board.board_id, board.board_url, plan, cancel_event)
    
    async def populate_board(self,
                             board_id: str,
                             board_url: Optional[str],
                             plan: BoardPlan,
                             cancel_event: Optional[asyncio.Event] = None) -> CreationResult:
        """
        Create every planned item on an existing board.
        
        Shapes, text blocks and sticky notes are created first, then the
        connectors whose endpoints both made it onto the board. The first
        successful creation for a source id wins; a duplicate id is only
        attempted if every earlier item with that id failed.
        """
        id_map = IdentifierMap()
        item_count = 0
        client = self.board_client
        
        self._checkpoint(cancel_event, ConversionStage.CREATING_ITEMS)
        self.logger.info(f"[{ConversionStage.CREATING_ITEMS.value}] board {board_id}")
        
        passes = [
            ("shape", plan.shapes, client.create_shape),
            ("text", plan.text_blocks, client.create_text),
            ("sticky note", plan.sticky_notes, client.create_sticky_note),
        ]
        for kind, items, create in passes:
            remaining = list(items)
            while remaining:
                self._checkpoint(cancel_event, ConversionStage.CREATING_ITEMS)
                pending, remaining = self._split_duplicates(kind, remaining, id_map)
                remote_ids = await self._create_pass(
                    kind, pending, lambda item, create=create: create(board_id, item)
                )
                for item, remote_id in zip(pending, remote_ids):
                    if remote_id is not None and id_map.record(item.source_id, remote_id):
                        item_count += 1
        
        self._checkpoint(cancel_event, ConversionStage.RESOLVING_CONNECTORS)
        resolved = resolve_connectors(plan.connectors, id_map)
        self.logger.info(
            f"[{ConversionStage.RESOLVING_CONNECTORS.value}] "
            f"{len(resolved)} of {len(plan.connectors)} connectors resolved"
        )
        
        remote_ids = await self._create_pass(
            "connector", resolved,
            lambda conn: client.create_connector(
                board_id, conn.start_item_id, conn.end_item_id, conn.label, conn.style
            )
        )
        item_count += sum(1 for remote_id in remote_ids if remote_id is not None)
        
        self.logger.info(f"[{ConversionStage.DONE.value}] created board {board_id} with {item_count} items")
        
        return CreationResult(
            board_id=board_id,
            board_url=board_url,
            title=plan.title,
            item_count=item_count,
        )
    
    # ========== Phases ==========
    
    async def _analyze(self,
                       request: ConversionRequest,
                       cancel_event: Optional[asyncio.Event]) -> DiagramAnalysis:
        self._checkpoint(cancel_event, ConversionStage.ANALYZING)
        analyzer = self.analyzer_factory(request.backend)
        self.logger.info(
            f"[{ConversionStage.ANALYZING.value}] {len(request.image_data)} bytes "
            f"with {getattr(analyzer, 'name', type(analyzer).__name__)}, theme: {request.theme}"
        )
        return await self._run_stage(
            ConversionStage.ANALYZING,
            asyncio.to_thread(
                analyzer.analyze,
                request.image_data,
                request.mime_type,
                request.glossary,
                request.customization,
            )
        )
    
    def _transform(self, analysis: DiagramAnalysis, theme: Optional[str]) -> BoardPlan:
        self.logger.info(f"[{ConversionStage.TRANSFORMING.value}] theme: {theme or 'default'}")
        return transform(
            analysis,
            theme,
            canvas_width=self.settings.canvas_width,
            canvas_height=self.settings.canvas_height,
        )
    
    async def _run_stage(self, stage: ConversionStage, work: Awaitable[Any]) -> Any:
        try:
            return await work
        except Exception as e:
            if stage in FATAL_STAGES:
                self.logger.error(f"[{ConversionStage.FAILED.value}] conversion failed while {stage.value}: {e}")
            raise
    
    async def _create_pass(self,
                           kind: str,
                           items: Sequence[Any],
                           create: Callable[[Any], str]) -> List[Optional[str]]:
        """
        Create one pass of items with bounded concurrency.
        
        Returns remote ids in input order, ``None`` for items that failed.
        """
        semaphore = asyncio.Semaphore(self.settings.item_concurrency)
        
        async def create_one(item):
            async with semaphore:
                try:
                    return await asyncio.to_thread(create, item)
                except Exception as e:
                    self.logger.error(f"Failed to create {kind} {item.source_id}: {e}")
                    return None
        
        return list(await asyncio.gather(*(create_one(item) for item in items)))
    
    def _split_duplicates(self,
                          kind: str,
                          items: Sequence[Any],
                          id_map: IdentifierMap) -> Tuple[List[Any], List[Any]]:
        """
        Split items into one round of creations and the duplicates held back.
        
        The first occurrence of each unmapped source id is created now. Later
        occurrences wait for the next round and are only created if every
        earlier one failed; once an id is mapped its duplicates are skipped.
        """
        seen = set()
        first, held = [], []
        for item in items:
            if item.source_id in id_map:
                self.logger.warning(f"Skipping {kind} with duplicate source id {item.source_id}")
            elif item.source_id in seen:
                held.append(item)
            else:
                seen.add(item.source_id)
                first.append(item)
        return first, held
    
    @staticmethod
    def _checkpoint(cancel_event: Optional[asyncio.Event], stage: ConversionStage) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise ConversionCancelledError(f"Conversion cancelled before {stage.value.replace('_', ' ')}")
