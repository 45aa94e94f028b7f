"""
Shared pytest fixtures.
"""
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from shared.keypair import generate_keypair
from shared.models import Mint

# Base58 public keys (system program and wrapped SOL mint)
VALID_WALLET = "11111111111111111111111111111111"
OTHER_VALID_WALLET = "So11111111111111111111111111111111111111112"


@pytest.fixture
def valid_wallet():
    """A valid Solana address."""
    return VALID_WALLET


@pytest.fixture
def make_mint():
    """Factory building Mint records with unique asset file names."""
    def _make_mint(mint_id: str = "1700000000000", **overrides) -> Mint:
        fields = {
            "id": mint_id,
            "creator_wallet": VALID_WALLET,
            "mint_price": Decimal("0.5"),
            "page_title": "Listening Party",
            "page_text": "Limited drop",
            "page_image_url": f"/uploads/{mint_id}-page.png",
            "title": "Umbrellas",
            "description": "Chaos dorian",
            "image_url": f"/uploads/{mint_id}-cover.png",
            "music_url": f"/uploads/{mint_id}-track.wav",
            "mp4_url": f"/uploads/{mint_id}-video.mp4",
            "open_time": None,
            "keypair": generate_keypair(),
            "minted": False,
            "created_at": datetime(2025, 1, 1, tzinfo=timezone.utc),
        }
        fields.update(overrides)
        return Mint(**fields)
    return _make_mint
