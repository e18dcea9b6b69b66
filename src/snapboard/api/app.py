"""
FastAPI application factory for snapboard.

Exposes the conversion pipeline over HTTP. Every failure, whatever its
origin, is answered with a single ``{"error": message}`` body and the
status code carried by the error.
"""

import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..services.conversion import ConversionPipeline
from ..shared import Settings, SnapBoardError, get_logger, get_settings, setup_logging
from .models import ErrorResponse
from .routers import convert, health

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_file)
    logger.info(
        f"{settings.app_name} {settings.app_version} listening on port {settings.api_port} "
        f"(vision backend: {settings.default_vision_backend})"
    )
    
    yield
    
    logger.info("Closing board client")
    app.state.pipeline.board_client.close()


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def register_exception_handlers(app: FastAPI) -> None:
    """Translate every error into the ``{"error": message}`` body."""
    
    @app.exception_handler(SnapBoardError)
    async def handle_snapboard_error(request: Request, exc: SnapBoardError):
        logger.error(f"{request.method} {request.url.path} failed: {type(exc).__name__}: {exc}")
        return error_response(exc.status_code, str(exc))
    
    @app.exception_handler(HTTPException)
    async def handle_http_error(request: Request, exc: HTTPException):
        return error_response(exc.status_code, str(exc.detail))
    
    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        return error_response(400, errors[0].get("msg", "Invalid request") if errors else "Invalid request")
    
    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception(f"Unhandled error in {request.method} {request.url.path}")
        return error_response(500, str(exc) or "Internal server error")


def create_app(settings: Optional[Settings] = None,
               pipeline: Optional[ConversionPipeline] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.
    
    Args:
        settings: Settings to use instead of the environment-loaded ones
        pipeline: Pre-built pipeline, e.g. one with a stubbed board client
    
    Returns:
        Configured FastAPI app instance
    """
    settings = settings or get_settings()
    
    app = FastAPI(
        title="snapboard API",
        description="Convert whiteboard photos into Miro boards.",
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.pipeline = pipeline or ConversionPipeline(settings)
    
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
    
    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        response.headers["X-Process-Time"] = f"{time.perf_counter() - started:.4f}"
        return response
    
    register_exception_handlers(app)
    
    app.include_router(health.router, tags=["Health"])
    app.include_router(convert.router, prefix="/api", tags=["Conversion"])
    
    return app
