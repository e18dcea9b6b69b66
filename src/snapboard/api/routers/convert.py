"""
Whiteboard conversion endpoints.
"""

import asyncio
from contextlib import contextmanager
from typing import Iterator, Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from ...services.conversion import ConversionPipeline, ConversionRequest
from ...shared import Settings, UploadError, get_logger
from ..models import AnalysisSummary, ConvertResponse, ErrorResponse, PreviewResponse

router = APIRouter()
logger = get_logger(__name__)

ALLOWED_IMAGE_TYPES = {'image/jpeg', 'image/png', 'image/webp', 'image/gif'}

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


def get_pipeline(request: Request) -> ConversionPipeline:
    return request.app.state.pipeline


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


@contextmanager
def cancel_after(seconds: float) -> Iterator[asyncio.Event]:
    """Yield an event that is set once ``seconds`` have elapsed."""
    cancel_event = asyncio.Event()
    handle = asyncio.get_running_loop().call_later(seconds, cancel_event.set)
    try:
        yield cancel_event
    finally:
        handle.cancel()


async def read_upload(image: Optional[UploadFile], settings: Settings) -> bytes:
    """Read and validate an uploaded image."""
    if image is None or not image.filename:
        raise UploadError("No image file provided")
    
    if image.content_type not in ALLOWED_IMAGE_TYPES:
        raise UploadError(
            f"Invalid file type: {image.content_type}. Only JPEG, PNG, WebP and GIF images are allowed."
        )
    
    # Read one byte past the limit so oversized uploads are detected without buffering them whole
    content = await image.read(settings.max_upload_size + 1)
    if len(content) > settings.max_upload_size:
        raise UploadError(
            f"File too large. Maximum size is {settings.max_upload_size // (1024 * 1024)}MB."
        )
    if not content:
        raise UploadError("Uploaded image is empty")
    
    return content


async def build_request(image: Optional[UploadFile],
                        model: Optional[str],
                        glossary: Optional[str],
                        theme: Optional[str],
                        ai_prompt: Optional[str],
                        settings: Settings) -> ConversionRequest:
    content = await read_upload(image, settings)
    
    logger.info(
        f"Processing image: {image.filename} ({len(content)} bytes) "
        f"with {model or settings.default_vision_backend}, theme: {theme or 'default'}"
    )
    
    return ConversionRequest(
        image_data=content,
        mime_type=image.content_type,
        backend=model or None,
        glossary=glossary or "",
        theme=theme or "default",
        customization=ai_prompt or "",
    )


@router.post("/preview", response_model=PreviewResponse, responses=ERROR_RESPONSES)
async def preview(
    image: Optional[UploadFile] = File(None, description="Whiteboard photo"),
    model: Optional[str] = Form(None, description="Vision backend: gemini or claude"),
    glossary: Optional[str] = Form(None, description="Known terms, one per line"),
    theme: Optional[str] = Form(None, description="Theme name"),
    aiPrompt: Optional[str] = Form(None, description="Styling/layout request"),
    pipeline: ConversionPipeline = Depends(get_pipeline),
    settings: Settings = Depends(get_app_settings),
):
    """
    Analyze a whiteboard photo without creating a board.
    
    Returns:
        Item counts and the raw analysis
    """
    request = await build_request(image, model, glossary, theme, aiPrompt, settings)
    
    with cancel_after(settings.processing_timeout) as cancel_event:
        result = await pipeline.preview(request, cancel_event)
    
    summary = result.get_summary()
    return PreviewResponse(
        success=True,
        analysis=AnalysisSummary(**summary),
        raw=result.raw.to_wire(),
    )


@router.post("/convert", response_model=ConvertResponse, responses=ERROR_RESPONSES)
async def convert(
    image: Optional[UploadFile] = File(None, description="Whiteboard photo"),
    model: Optional[str] = Form(None, description="Vision backend: gemini or claude"),
    glossary: Optional[str] = Form(None, description="Known terms, one per line"),
    theme: Optional[str] = Form(None, description="Theme name"),
    aiPrompt: Optional[str] = Form(None, description="Styling/layout request"),
    pipeline: ConversionPipeline = Depends(get_pipeline),
    settings: Settings = Depends(get_app_settings),
):
    """
    Convert a whiteboard photo into a new board.
    
    Returns:
        Board id, link, title and the number of items created
    """
    request = await build_request(image, model, glossary, theme, aiPrompt, settings)
    
    with cancel_after(settings.processing_timeout) as cancel_event:
        result = await pipeline.convert(request, cancel_event)
    
    logger.info(f"Successfully created board with {result.item_count} items")
    
    return ConvertResponse(
        success=True,
        boardId=result.board_id,
        boardUrl=result.board_url,
        itemCount=result.item_count,
        title=result.title,
    )
