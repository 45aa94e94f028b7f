"""
Pytest fixtures for API gateway tests.
"""
import pytest
from fastapi.testclient import TestClient

from shared.config import Settings
from api_gateway.main import create_app


@pytest.fixture
def app_settings(tmp_path):
    """Settings pointing every path at a temp directory."""
    return Settings(
        _env_file=None,
        uploads_dir=str(tmp_path / "uploads"),
        mints_file=str(tmp_path / "mints.json"),
        static_dir=str(tmp_path / "public"),
        public_base_url="https://mint.example.com",
        max_upload_size_mb=1
    )


@pytest.fixture
def app(app_settings):
    return create_app(app_settings)


@pytest.fixture
def client(app):
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def uploads(app):
    """Uploads directory of the app under test."""
    return app.state.storage.root


@pytest.fixture
def registry(app):
    return app.state.registry


@pytest.fixture
def stored_sources(uploads):
    """Page image, asset image and music already present in the uploads directory."""
    names = {
        "page": "100-aaaa0000-page.png",
        "image": "100-bbbb0000-cover.png",
        "music": "100-cccc0000-track.wav",
    }
    for name in names.values():
        (uploads / name).write_bytes(b"data-" + name.encode())
    return names


@pytest.fixture
def mint_body(stored_sources, valid_wallet):
    """Valid create-mint request body."""
    return {
        "creator_wallet": valid_wallet,
        "mint_price": "0.5",
        "page_title": "Listening Party",
        "page_text": "Limited drop",
        "page_image_url": f"/uploads/{stored_sources['page']}",
        "title": "Umbrellas",
        "description": "Chaos dorian",
        "image_url": f"/uploads/{stored_sources['image']}",
        "music_url": f"/uploads/{stored_sources['music']}",
    }


@pytest.fixture
def fake_compose():
    """Stand-in for the composer that writes a small file at the expected path."""
    async def _fake_compose(mint_id, image_path, audio_path, output_dir, duration=None):
        output_path = output_dir / f"{mint_id}-video.mp4"
        output_path.write_bytes(b"mp4-" + mint_id.encode())
        return output_path
    return _fake_compose
