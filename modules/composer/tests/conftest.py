"""
Pytest fixtures for composer tests.
"""
import pytest


@pytest.fixture
def source_files(tmp_path):
    """Create placeholder image and audio files (content is never decoded)."""
    image_path = tmp_path / "cover.png"
    audio_path = tmp_path / "track.wav"
    image_path.write_bytes(b"\x89PNG\r\n\x1a\n")
    audio_path.write_bytes(b"RIFF")
    return image_path, audio_path
