"""
Still-image video encoding for composer module.

Loops a single image for the length of an audio track and encodes the pair
as H.264/AAC MP4.
"""
import asyncio
import weakref
from pathlib import Path
from typing import List, Optional, Union

from shared.config import settings
from shared.errors import SourceFileNotFoundError
from shared.logging import get_logger
from shared.validation import validate_duration
from .utils import run_ffmpeg_command
from .config import (
    OUTPUT_VIDEO_CODEC,
    OUTPUT_VIDEO_TUNE,
    OUTPUT_PIXEL_FORMAT,
    OUTPUT_AUDIO_CODEC,
    OUTPUT_AUDIO_BITRATE
)

logger = get_logger("composer.encoder")

# One lock per destination file; encodes to the same path run one at a time
_destination_locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()


def _destination_lock(output_path: Path) -> asyncio.Lock:
    key = str(output_path.resolve())
    lock = _destination_locks.get(key)
    if lock is None:
        lock = asyncio.Lock()
        _destination_locks[key] = lock
    return lock


def build_compose_command(
    audio_path: Path,
    image_path: Path,
    output_path: Path,
    duration: Optional[float] = None
) -> List[str]:
    """
    Build the ffmpeg argument list for a still-image video.

    Args:
        audio_path: Audio track
        image_path: Still image, looped for the whole video
        output_path: Destination MP4 (overwritten)
        duration: Optional output length in seconds

    Returns:
        Command as list of strings
    """
    cmd = [
        settings.ffmpeg_binary,
        "-loop", "1",                         # Loop the image
        "-i", str(image_path),
        "-i", str(audio_path),
        "-c:v", OUTPUT_VIDEO_CODEC,
        "-tune", OUTPUT_VIDEO_TUNE,
        "-c:a", OUTPUT_AUDIO_CODEC,
        "-b:a", OUTPUT_AUDIO_BITRATE,
        "-pix_fmt", OUTPUT_PIXEL_FORMAT,
        "-shortest",                          # End with the audio
    ]
    if duration is not None:
        cmd += ["-t", str(duration)]
    cmd += ["-y", str(output_path)]
    return cmd


async def compose_still_video(
    audio_path: Union[str, Path],
    image_path: Union[str, Path],
    output_path: Union[str, Path],
    duration: Optional[float] = None,
    mint_id: Optional[str] = None
) -> Path:
    """
    Combine a still image and an audio track into one MP4.

    Without a duration the video ends with the audio. An existing file at
    output_path is replaced. On failure the destination may hold a partial file.

    Args:
        audio_path: Path to an existing audio file
        image_path: Path to an existing image file
        output_path: Destination MP4 path
        duration: Optional output length in seconds
        mint_id: Mint ID for logging

    Returns:
        Path to the composed video

    Raises:
        SourceFileNotFoundError: If either input is missing (ffmpeg is not started)
        ValidationError: If duration is not a positive number
        EncoderLaunchError: If ffmpeg cannot be started
        EncoderFailedError: If ffmpeg exits with a non-zero status
    """
    audio_path = Path(audio_path)
    image_path = Path(image_path)
    output_path = Path(output_path)

    if not audio_path.is_file():
        raise SourceFileNotFoundError("audio", str(audio_path), mint_id=mint_id)
    if not image_path.is_file():
        raise SourceFileNotFoundError("image", str(image_path), mint_id=mint_id)

    duration = validate_duration(duration)
    cmd = build_compose_command(audio_path, image_path, output_path, duration)

    async with _destination_lock(output_path):
        logger.info(
            "Composing still-image video",
            extra={
                "mint_id": mint_id,
                "audio_path": str(audio_path),
                "image_path": str(image_path),
                "output_path": str(output_path),
                "duration": duration
            }
        )
        await run_ffmpeg_command(cmd, mint_id=mint_id)

    return output_path
