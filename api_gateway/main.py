"""
API gateway application.

Builds the FastAPI app, owns the per-process mint registry and upload store,
and maps service errors to the uniform {"success": false, "error": ...} body.
"""

from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from shared.config import Settings, settings as default_settings
from shared.errors import (
    PipelineError,
    ValidationError,
    StorageError,
    CompositionError,
    SourceFileNotFoundError,
    MintNotFoundError,
    DuplicateMintError,
    AlreadyMintedError,
    MintNotOpenError,
    PersistenceError
)
from shared.logging import get_logger, set_mint_id
from shared.storage import UploadStorage
from modules.composer.utils import check_ffmpeg_available
from modules.mint_registry import MintRegistry
from api_gateway.routes import files, mints, upload

logger = get_logger(__name__)

# Checked in order, first isinstance match wins
ERROR_STATUS_CODES = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (SourceFileNotFoundError, status.HTTP_400_BAD_REQUEST),
    (CompositionError, status.HTTP_502_BAD_GATEWAY),
    (MintNotFoundError, status.HTTP_404_NOT_FOUND),
    (MintNotOpenError, status.HTTP_403_FORBIDDEN),
    (AlreadyMintedError, status.HTTP_409_CONFLICT),
    (DuplicateMintError, status.HTTP_409_CONFLICT),
    (PersistenceError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (StorageError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def status_code_for(error: PipelineError) -> int:
    """HTTP status code for a service error."""
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_message_for(error: PipelineError) -> str:
    """User-facing message for a service error."""
    if isinstance(error, CompositionError):
        return f"MP4 generation failed: {error.message}"
    return error.message


async def pipeline_error_handler(request: Request, exc: PipelineError) -> JSONResponse:
    status_code = status_code_for(exc)
    log = logger.error if status_code >= 500 else logger.info
    log(
        f"Request failed: {exc.message}",
        extra={
            "mint_id": exc.mint_id,
            "error_type": type(exc).__name__,
            "status_code": status_code,
            "request_path": request.url.path
        }
    )
    set_mint_id(None)
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error_message_for(exc)}
    )


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    missing = [
        str(err["loc"][-1])
        for err in exc.errors()
        if err.get("type") == "missing" and err.get("loc")
    ]
    if missing:
        message = f"Missing required fields: {', '.join(missing)}"
    else:
        first = exc.errors()[0] if exc.errors() else {}
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid {location}: {first.get('msg', 'invalid value')}" if location else "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "error": message}
    )


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    The mint registry is loaded once here and shared by every request.

    Args:
        app_settings: Settings to use (default: environment settings)

    Returns:
        Configured FastAPI app
    """
    app_settings = app_settings or default_settings

    app = FastAPI(title="Music Mint API")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[app_settings.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    storage = UploadStorage(Path(app_settings.uploads_dir))
    registry = MintRegistry(Path(app_settings.mints_file))
    registry.load()

    app.state.settings = app_settings
    app.state.storage = storage
    app.state.registry = registry

    app.add_exception_handler(PipelineError, pipeline_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)

    app.include_router(upload.router)
    app.include_router(mints.router)
    app.include_router(files.router)

    @app.get("/health")
    async def health():
        """Liveness and ffmpeg availability."""
        return {
            "success": True,
            "status": "ok",
            "ffmpeg_available": check_ffmpeg_available(),
            "mints": len(registry)
        }

    static_dir = Path(app_settings.static_dir) if app_settings.static_dir else None
    if static_dir and static_dir.is_dir():
        # Mounted last so API routes take precedence
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")

    logger.info(
        "Application created",
        extra={
            "environment": app_settings.environment,
            "uploads_dir": app_settings.uploads_dir,
            "mints_file": app_settings.mints_file,
            "mints_loaded": len(registry)
        }
    )
    return app


def run() -> None:
    """Run the server with uvicorn."""
    uvicorn.run(
        "api_gateway.main:create_app",
        factory=True,
        host=default_settings.host,
        port=default_settings.port
    )


if __name__ == "__main__":
    run()
