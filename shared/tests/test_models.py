"""
Tests for data models.
"""

import json
import pytest
from datetime import datetime, timezone
from decimal import Decimal
from pydantic import ValidationError as PydanticValidationError

from shared.models import Mint, CreateMintRequest, MarkMintedRequest, LIST_HIDDEN_FIELDS


def test_mint_model(make_mint):
    """Test Mint model defaults."""
    mint = make_mint()

    assert mint.minted is False
    assert mint.tx_signature is None
    assert len(mint.keypair) == 64
    assert mint.mint_price == Decimal("0.5")


def test_mint_json_round_trip(make_mint):
    """Test that a record survives a JSON round trip without loss."""
    mint = make_mint(
        open_time=datetime(2030, 6, 1, 12, 30, tzinfo=timezone.utc),
        minted=True,
        tx_signature="5VERv8NMvzbJMEkV8xnrLkEaWRtSz9CosKDYjCJjBRnb",
        page_text=None
    )

    data = json.loads(json.dumps(mint.model_dump(mode="json")))
    restored = Mint.model_validate(data)

    assert restored == mint
    assert restored.keypair == mint.keypair
    assert restored.page_text is None


def test_mint_serializes_keypair_as_int_list(make_mint):
    """Test keypair serialization format."""
    mint = make_mint()
    data = mint.model_dump(mode="json")

    assert isinstance(data["keypair"], list)
    assert len(data["keypair"]) == 64
    assert all(0 <= b <= 255 for b in data["keypair"])
    assert data["mint_price"] == "0.5"


def test_mint_rejects_minted_without_signature(make_mint):
    """Test that minted requires a transaction signature."""
    with pytest.raises(PydanticValidationError):
        make_mint(minted=True, tx_signature=None)


def test_mint_rejects_signature_without_minted(make_mint):
    """Test that a signature requires minted."""
    with pytest.raises(PydanticValidationError):
        make_mint(minted=False, tx_signature="sig")


def test_mint_price_bounds(make_mint):
    """Test mint price validation."""
    with pytest.raises(PydanticValidationError):
        make_mint(mint_price=Decimal("-1"))
    with pytest.raises(PydanticValidationError):
        make_mint(mint_price=Decimal("1000.01"))
    assert make_mint(mint_price=Decimal("1000")).mint_price == Decimal("1000")


def test_mint_naive_open_time_is_utc(make_mint):
    """Test that naive datetimes are treated as UTC."""
    mint = make_mint(open_time=datetime(2030, 1, 1, 0, 0))
    assert mint.open_time.tzinfo == timezone.utc


def test_public_view_hides_keypair(make_mint):
    """Test public views never include the keypair."""
    mint = make_mint()

    detail = mint.public_view()
    assert "keypair" not in detail
    assert detail["title"] == "Umbrellas"

    listed = mint.public_view(exclude=LIST_HIDDEN_FIELDS)
    for field in LIST_HIDDEN_FIELDS:
        assert field not in listed
    assert listed["page_title"] == "Listening Party"


def test_create_mint_request_missing_fields():
    """Test detection of missing required fields."""
    request = CreateMintRequest(title="Umbrellas", page_title="")
    missing = request.missing_fields()

    assert "page_title" in missing
    assert "creator_wallet" in missing
    assert "title" not in missing


def test_create_mint_request_empty_open_time():
    """Test that an empty open time string is treated as unset."""
    request = CreateMintRequest(open_time="")
    assert request.open_time is None


def test_mark_minted_request_requires_signature():
    """Test that an empty signature is rejected."""
    with pytest.raises(PydanticValidationError):
        MarkMintedRequest(tx_signature="")
