"""
Main entry point for composer.

Composes the mint video from the uploaded image and music.
"""
import time
from pathlib import Path
from typing import Optional

from shared.errors import CompositionError
from shared.logging import get_logger
from .config import OUTPUT_FILENAME_TEMPLATE
from .encoder import compose_still_video
from .utils import get_media_duration

logger = get_logger("composer")


async def process(
    mint_id: str,
    image_path: Path,
    audio_path: Path,
    output_dir: Path,
    duration: Optional[float] = None
) -> Path:
    """
    Compose the video for a mint.

    Args:
        mint_id: Mint ID, used to name the output file
        image_path: Uploaded image
        audio_path: Uploaded music
        output_dir: Directory for the composed video (the uploads directory)
        duration: Optional video length limit in seconds

    Returns:
        Path to <output_dir>/<mint_id>-video.mp4

    Raises:
        CompositionError: If composition fails (see compose_still_video)
    """
    start_time = time.time()
    output_path = Path(output_dir) / OUTPUT_FILENAME_TEMPLATE.format(mint_id=mint_id)

    logger.info(f"Generating MP4 for mint {mint_id}", extra={"mint_id": mint_id})

    await compose_still_video(
        audio_path=audio_path,
        image_path=image_path,
        output_path=output_path,
        duration=duration,
        mint_id=mint_id
    )

    if not output_path.exists():
        raise CompositionError("Composed video not created", mint_id=mint_id)

    video_duration = await get_media_duration(output_path)
    logger.info(
        f"MP4 generated successfully: {output_path}",
        extra={
            "mint_id": mint_id,
            "size_mb": output_path.stat().st_size / 1024 / 1024,
            "video_duration": video_duration,
            "processing_time": time.time() - start_time
        }
    )
    return output_path
