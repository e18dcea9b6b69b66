"""
Coordinate and style transform from analysis space into board space.

Vision backends report positions as percentages (0-100) of the image. The
board canvas is centred on the origin, so a percentage maps linearly onto
``[-D/2, D/2]`` for each dimension ``D``. Sizes are semantic units scaled by
fixed multipliers. Everything here is pure: no I/O and no failure modes.
"""

from datetime import date
from typing import Dict, Iterable, List, Optional, Union

from ...shared import (
    AnalysisShape, BoardPlan, DiagramAnalysis, IdentifierMap, PendingConnector,
    PlannedShape, PlannedStickyNote, PlannedText, ResolvedConnector, get_logger
)
from .themes import (
    COLOR_PALETTE, DEFAULT_FILL_COLOR, DEFAULT_FONT_SIZE, DEFAULT_STICKY_COLOR,
    FONT_SIZES, STICKY_COLORS, Theme, get_theme
)

logger = get_logger(__name__)

CANVAS_WIDTH = 2000
CANVAS_HEIGHT = 1500

WIDTH_MULTIPLIER = 20
HEIGHT_MULTIPLIER = 15
DEFAULT_WIDTH_UNITS = 15
DEFAULT_HEIGHT_UNITS = 10

TITLE_FALLBACK = "Whiteboard Import"


def percent_to_pixel(percent: float, dimension: float) -> float:
    """Map a 0-100 percentage onto a canvas dimension centred on the origin."""
    return (percent / 100) * dimension - dimension / 2


def resolve_color(color_hint: Optional[str], default: str = DEFAULT_FILL_COLOR) -> str:
    """Resolve a named or hex color hint to a hex value."""
    if not color_hint:
        return default
    
    if color_hint.startswith('#'):
        return color_hint
    
    return COLOR_PALETTE.get(color_hint.strip().lower(), default)


def resolve_shape_color(shape: AnalysisShape, index: int, theme: Theme) -> str:
    """
    Fill color for a shape.
    
    An explicit (recognized) hint wins; otherwise shapes rotate through the
    theme's primary, secondary and accent colors by position.
    """
    cycled = theme.shape_cycle[index % 3]
    return resolve_color(shape.color_hint, default=cycled)


def resolve_font_size(hint: Optional[str]) -> int:
    return FONT_SIZES.get(hint or '', DEFAULT_FONT_SIZE)


def resolve_sticky_color(hint: Optional[str]) -> str:
    return STICKY_COLORS.get((hint or '').lower(), DEFAULT_STICKY_COLOR)


def fallback_title(today: Optional[date] = None) -> str:
    return f"{TITLE_FALLBACK} - {(today or date.today()).isoformat()}"


def transform(analysis: DiagramAnalysis,
              theme: Optional[str] = None,
              canvas_width: float = CANVAS_WIDTH,
              canvas_height: float = CANVAS_HEIGHT,
              today: Optional[date] = None) -> BoardPlan:
    """
    Convert an analysis into a board plan.
    
    Args:
        analysis: Diagram analysis in percentage space
        theme: Theme name; unknown names use the default theme
        canvas_width: Canvas width the x axis maps onto
        canvas_height: Canvas height the y axis maps onto
        today: Date used in the fallback title (defaults to today)
        
    Returns:
        Board plan with absolute coordinates and resolved colors
    """
    resolved_theme = get_theme(theme)
    
    shapes = [
        PlannedShape(
            source_id=shape.id,
            kind=shape.kind,
            text=shape.text,
            x=percent_to_pixel(shape.x, canvas_width),
            y=percent_to_pixel(shape.y, canvas_height),
            width=(shape.width or DEFAULT_WIDTH_UNITS) * WIDTH_MULTIPLIER,
            height=(shape.height or DEFAULT_HEIGHT_UNITS) * HEIGHT_MULTIPLIER,
            fill_color=resolve_shape_color(shape, index, resolved_theme),
            border_color=resolved_theme.border,
        )
        for index, shape in enumerate(analysis.shapes)
    ]
    
    text_blocks = [
        PlannedText(
            source_id=block.id,
            content=block.content,
            x=percent_to_pixel(block.x, canvas_width),
            y=percent_to_pixel(block.y, canvas_height),
            font_size=resolve_font_size(block.font_size_hint),
        )
        for block in analysis.text_blocks
    ]
    
    sticky_notes = [
        PlannedStickyNote(
            source_id=sticky.id,
            content=sticky.content,
            x=percent_to_pixel(sticky.x, canvas_width),
            y=percent_to_pixel(sticky.y, canvas_height),
            color=resolve_sticky_color(sticky.color_hint),
        )
        for sticky in analysis.sticky_notes
    ]
    
    connectors = [
        PendingConnector(
            source_id=connector.id,
            from_source_id=connector.from_id,
            to_source_id=connector.to_id,
            label=connector.label,
            style=connector.style,
        )
        for connector in analysis.connectors
    ]
    
    return BoardPlan(
        title=analysis.title or fallback_title(today),
        theme=resolved_theme.name,
        shapes=shapes,
        text_blocks=text_blocks,
        sticky_notes=sticky_notes,
        connectors=connectors,
    )


def resolve_connectors(pending: Iterable[PendingConnector],
                       id_map: Union[IdentifierMap, Dict[str, str]]) -> List[ResolvedConnector]:
    """
    Bind pending connectors to remote item ids.
    
    Connectors with an endpoint missing from the map (a dangling reference,
    or an item that failed to create) are dropped with a warning.
    """
    resolved = []
    
    for connector in pending:
        start_id = id_map.get(connector.from_source_id)
        end_id = id_map.get(connector.to_source_id)
        
        if not start_id or not end_id:
            logger.warning(
                f"Could not resolve connector {connector.source_id}: "
                f"{connector.from_source_id} -> {connector.to_source_id}"
            )
            continue
        
        resolved.append(ResolvedConnector(
            source_id=connector.source_id,
            start_item_id=start_id,
            end_item_id=end_id,
            label=connector.label,
            style=connector.style,
        ))
    
    return resolved
