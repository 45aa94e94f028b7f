"""
Composer module.

Combines a still image and an audio track into a single MP4 video.
"""

from modules.composer.process import process
from modules.composer.encoder import compose_still_video

__all__ = ["process", "compose_still_video"]
