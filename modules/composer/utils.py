"""
Utility functions for composer module.

FFmpeg command execution, duration extraction, and availability checks.
"""
import asyncio
import shutil
from pathlib import Path
from typing import List, Optional

from shared.config import settings
from shared.errors import EncoderFailedError, EncoderLaunchError
from shared.logging import get_logger
from .config import STDERR_CHUNK_SIZE, FFPROBE_TIMEOUT

logger = get_logger("composer.utils")


def check_ffmpeg_available() -> bool:
    """
    Check if FFmpeg is installed and available in PATH.

    Returns:
        True if FFmpeg is available, False otherwise
    """
    return shutil.which(settings.ffmpeg_binary) is not None


async def _collect_stderr(stream: asyncio.StreamReader) -> str:
    """Read a process error stream chunk by chunk until EOF."""
    chunks: List[bytes] = []
    while True:
        chunk = await stream.read(STDERR_CHUNK_SIZE)
        if not chunk:
            break
        chunks.append(chunk)
    return b"".join(chunks).decode(errors="replace")


async def run_ffmpeg_command(
    cmd: List[str],
    mint_id: Optional[str] = None
) -> str:
    """
    Run an FFmpeg command and wait for it to exit.

    No retry and no timeout: a hung ffmpeg hangs the caller.

    Args:
        cmd: FFmpeg command as list of strings
        mint_id: Mint ID for logging

    Returns:
        Captured stderr text

    Raises:
        EncoderLaunchError: If the process cannot be started
        EncoderFailedError: If the process exits with a non-zero status
    """
    logger.info(
        f"Running FFmpeg command: {' '.join(cmd)}",
        extra={"mint_id": mint_id, "command": cmd}
    )

    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.PIPE
        )
    except OSError as e:
        logger.error(
            "Failed to spawn FFmpeg",
            extra={"mint_id": mint_id, "error": str(e), "command": cmd}
        )
        raise EncoderLaunchError(f"Failed to spawn FFmpeg: {e}", mint_id=mint_id) from e

    stderr = await _collect_stderr(process.stderr)
    returncode = await process.wait()

    if returncode != 0:
        logger.error(
            f"FFmpeg command failed with code {returncode}",
            extra={"mint_id": mint_id, "returncode": returncode, "error": stderr}
        )
        raise EncoderFailedError(returncode, stderr, mint_id=mint_id)

    return stderr


async def get_media_duration(media_path: Path) -> Optional[float]:
    """
    Get media duration using ffprobe.

    Runs as an asyncio subprocess so other requests keep being served while
    the probe runs.

    Args:
        media_path: Path to audio or video file

    Returns:
        Duration in seconds, or None if it cannot be determined
    """
    cmd = [
        settings.ffprobe_binary,
        "-v", "error",
        "-show_entries", "format=duration",
        "-of", "default=noprint_wrappers=1:nokey=1",
        str(media_path)
    ]
    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE
        )
    except OSError as e:
        logger.warning(f"Failed to spawn ffprobe: {e}", extra={"media_path": str(media_path)})
        return None

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=FFPROBE_TIMEOUT)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        logger.warning("ffprobe timed out", extra={"media_path": str(media_path)})
        return None

    if process.returncode != 0:
        logger.warning(
            f"ffprobe failed with code {process.returncode}",
            extra={"media_path": str(media_path), "error": stderr.decode(errors="replace")}
        )
        return None

    try:
        return float(stdout.decode().strip())
    except ValueError:
        logger.warning(
            "Unparseable ffprobe duration",
            extra={"media_path": str(media_path), "output": stdout.decode(errors="replace")}
        )
        return None
