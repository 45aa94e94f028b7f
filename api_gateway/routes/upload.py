"""
Upload endpoints.

Store one image or music file per request in the uploads directory.
"""

from pathlib import Path
from typing import Optional
from fastapi import APIRouter, UploadFile, File, Depends
from mutagen import File as MutagenFile
from mutagen import MutagenError

from shared.config import Settings
from shared.errors import ValidationError
from shared.logging import get_logger
from shared.storage import UploadStorage
from shared.validation import validate_file_extension, IMAGE_EXTENSIONS, AUDIO_EXTENSIONS
from api_gateway.dependencies import get_settings, get_storage

logger = get_logger(__name__)

router = APIRouter()


def read_audio_duration(path: Path) -> Optional[float]:
    """
    Extract audio duration using mutagen (metadata only, no full decode).

    Returns:
        Duration in seconds, or None if mutagen cannot read the file
    """
    try:
        audio_obj = MutagenFile(str(path))
    except (MutagenError, OSError) as e:
        logger.warning("Failed to read audio metadata", exc_info=e, extra={"path": str(path)})
        return None
    if audio_obj is None or getattr(audio_obj, "info", None) is None:
        return None
    return round(float(audio_obj.info.length), 3)


@router.post("/api/upload-image")
async def upload_image(
    image: Optional[UploadFile] = File(None),
    storage: UploadStorage = Depends(get_storage),
    settings: Settings = Depends(get_settings)
):
    """
    Upload an image (page image or asset image).

    Returns:
        Public path and stored file name
    """
    if image is None or not image.filename:
        raise ValidationError("No image file provided")
    validate_file_extension(image.filename, IMAGE_EXTENSIONS, "image")

    stored = await storage.save_upload(image, settings.max_upload_size_bytes, default_stem="image")
    return {"success": True, "path": stored.url, "filename": stored.filename}


@router.post("/api/upload-music")
async def upload_music(
    music: Optional[UploadFile] = File(None),
    storage: UploadStorage = Depends(get_storage),
    settings: Settings = Depends(get_settings)
):
    """
    Upload a music file.

    Returns:
        Public path, stored file name and duration in seconds (null if unknown)
    """
    if music is None or not music.filename:
        raise ValidationError("No music file provided")
    validate_file_extension(music.filename, AUDIO_EXTENSIONS, "music")

    stored = await storage.save_upload(music, settings.max_upload_size_bytes, default_stem="music")
    duration = read_audio_duration(stored.path)
    return {"success": True, "path": stored.url, "filename": stored.filename, "duration": duration}
