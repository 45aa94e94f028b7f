"""
Unit tests for encoder module.
"""
import asyncio
import pytest
from unittest.mock import patch, AsyncMock

from modules.composer.encoder import build_compose_command, compose_still_video
from shared.errors import (
    SourceFileNotFoundError,
    EncoderFailedError,
    ValidationError
)


class TestBuildComposeCommand:
    """Tests for build_compose_command."""

    def test_command_without_duration(self, tmp_path):
        cmd = build_compose_command(tmp_path / "a.wav", tmp_path / "i.png", tmp_path / "out.mp4")

        assert cmd[0] == "ffmpeg"
        assert cmd[1:5] == ["-loop", "1", "-i", str(tmp_path / "i.png")]
        assert cmd[5:7] == ["-i", str(tmp_path / "a.wav")]
        assert cmd[cmd.index("-c:v") + 1] == "libx264"
        assert cmd[cmd.index("-tune") + 1] == "stillimage"
        assert cmd[cmd.index("-c:a") + 1] == "aac"
        assert cmd[cmd.index("-b:a") + 1] == "192k"
        assert cmd[cmd.index("-pix_fmt") + 1] == "yuv420p"
        assert "-shortest" in cmd
        assert "-t" not in cmd
        assert cmd[-2:] == ["-y", str(tmp_path / "out.mp4")]

    def test_command_with_duration(self, tmp_path):
        cmd = build_compose_command(tmp_path / "a.wav", tmp_path / "i.png", tmp_path / "out.mp4", 30)

        assert cmd[-4:] == ["-t", "30", "-y", str(tmp_path / "out.mp4")]


class TestComposeStillVideo:
    """Tests for compose_still_video."""

    @pytest.mark.asyncio
    @patch('modules.composer.encoder.run_ffmpeg_command', new_callable=AsyncMock)
    async def test_compose_success(self, mock_run_ffmpeg, source_files, tmp_path):
        image_path, audio_path = source_files
        output_path = tmp_path / "out.mp4"

        result = await compose_still_video(audio_path, image_path, output_path, mint_id="1")

        assert result == output_path
        mock_run_ffmpeg.assert_called_once()
        cmd = mock_run_ffmpeg.call_args[0][0]
        assert str(image_path) in cmd
        assert str(audio_path) in cmd
        assert cmd[-1] == str(output_path)

    @pytest.mark.asyncio
    @patch('modules.composer.encoder.run_ffmpeg_command', new_callable=AsyncMock)
    async def test_compose_passes_duration(self, mock_run_ffmpeg, source_files, tmp_path):
        image_path, audio_path = source_files

        await compose_still_video(audio_path, image_path, tmp_path / "out.mp4", duration=12.5)

        cmd = mock_run_ffmpeg.call_args[0][0]
        assert cmd[cmd.index("-t") + 1] == "12.5"

    @pytest.mark.asyncio
    @patch('modules.composer.encoder.run_ffmpeg_command', new_callable=AsyncMock)
    async def test_missing_audio_fails_before_ffmpeg(self, mock_run_ffmpeg, source_files, tmp_path):
        image_path, _ = source_files
        missing = tmp_path / "missing.wav"

        with pytest.raises(SourceFileNotFoundError, match="Audio file not found") as exc_info:
            await compose_still_video(missing, image_path, tmp_path / "out.mp4")

        assert exc_info.value.path == str(missing)
        assert exc_info.value.role == "audio"
        mock_run_ffmpeg.assert_not_called()

    @pytest.mark.asyncio
    @patch('modules.composer.encoder.run_ffmpeg_command', new_callable=AsyncMock)
    async def test_missing_image_fails_before_ffmpeg(self, mock_run_ffmpeg, source_files, tmp_path):
        _, audio_path = source_files
        missing = tmp_path / "missing.png"

        with pytest.raises(SourceFileNotFoundError, match="Image file not found") as exc_info:
            await compose_still_video(audio_path, missing, tmp_path / "out.mp4")

        assert str(missing) in str(exc_info.value)
        mock_run_ffmpeg.assert_not_called()

    @pytest.mark.asyncio
    @patch('modules.composer.encoder.run_ffmpeg_command', new_callable=AsyncMock)
    async def test_invalid_duration_fails_before_ffmpeg(self, mock_run_ffmpeg, source_files, tmp_path):
        image_path, audio_path = source_files

        with pytest.raises(ValidationError):
            await compose_still_video(audio_path, image_path, tmp_path / "out.mp4", duration=0)

        mock_run_ffmpeg.assert_not_called()

    @pytest.mark.asyncio
    @patch('modules.composer.encoder.run_ffmpeg_command', new_callable=AsyncMock)
    async def test_ffmpeg_failure_propagates(self, mock_run_ffmpeg, source_files, tmp_path):
        image_path, audio_path = source_files
        mock_run_ffmpeg.side_effect = EncoderFailedError(1, "Invalid data found when processing input")

        with pytest.raises(EncoderFailedError) as exc_info:
            await compose_still_video(audio_path, image_path, tmp_path / "out.mp4")

        assert exc_info.value.returncode == 1
        assert "Invalid data found" in exc_info.value.stderr

    @pytest.mark.asyncio
    async def test_same_destination_is_serialized(self, source_files, tmp_path):
        image_path, audio_path = source_files
        state = {"active": 0, "max_active": 0}

        async def fake_run(cmd, mint_id=None):
            state["active"] += 1
            state["max_active"] = max(state["max_active"], state["active"])
            await asyncio.sleep(0.02)
            state["active"] -= 1
            return ""

        with patch('modules.composer.encoder.run_ffmpeg_command', side_effect=fake_run):
            await asyncio.gather(*[
                compose_still_video(audio_path, image_path, tmp_path / "same.mp4")
                for _ in range(3)
            ])

        assert state["max_active"] == 1

    @pytest.mark.asyncio
    async def test_different_destinations_run_concurrently(self, source_files, tmp_path):
        image_path, audio_path = source_files
        state = {"active": 0, "max_active": 0}

        async def fake_run(cmd, mint_id=None):
            state["active"] += 1
            state["max_active"] = max(state["max_active"], state["active"])
            await asyncio.sleep(0.02)
            state["active"] -= 1
            return ""

        with patch('modules.composer.encoder.run_ffmpeg_command', side_effect=fake_run):
            await asyncio.gather(*[
                compose_still_video(audio_path, image_path, tmp_path / f"out{i}.mp4")
                for i in range(3)
            ])

        assert state["max_active"] == 3
