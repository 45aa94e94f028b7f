"""
Protected file serving.

Every /uploads/<name> request passes through the access gate.
"""

from fastapi import APIRouter, Path, Depends
from fastapi.responses import FileResponse, JSONResponse
from fastapi import status

from shared.errors import StorageError
from shared.logging import get_logger
from shared.storage import UploadStorage
from modules.access_gate import AccessDecision, check_file_access
from modules.mint_registry import MintRegistry
from api_gateway.dependencies import get_registry, get_storage

logger = get_logger(__name__)

router = APIRouter()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


@router.get("/uploads/{filename}")
async def serve_upload(
    filename: str = Path(...),
    registry: MintRegistry = Depends(get_registry),
    storage: UploadStorage = Depends(get_storage)
):
    """
    Serve a stored file if the access gate allows it.

    Returns:
        The file, 403 for assets of unminted mints, 404 otherwise
    """
    try:
        path = storage.resolve(filename)
    except StorageError:
        return _error(status.HTTP_404_NOT_FOUND, "File not found")

    decision = check_file_access(registry, filename)
    if decision == AccessDecision.NOT_FOUND:
        return _error(status.HTTP_404_NOT_FOUND, "File not found")
    if decision == AccessDecision.FORBIDDEN:
        return _error(status.HTTP_403_FORBIDDEN, "File not accessible until NFT is minted")

    if not path.is_file():
        logger.warning("Allowed file missing on disk", extra={"requested_file": filename})
        return _error(status.HTTP_404_NOT_FOUND, "File not found")

    return FileResponse(path, media_type=storage.content_type(path))
