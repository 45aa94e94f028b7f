"""
Mint-related data models.

Defines the persisted Mint record plus the request and response bodies of the
mint endpoints.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field, field_serializer, field_validator, model_validator

# Fields stripped from the mint list view (asset details stay hidden until minted)
LIST_HIDDEN_FIELDS = {"keypair", "title", "description", "image_url", "music_url", "mp4_url"}

# Fields stripped from the single mint view
DETAIL_HIDDEN_FIELDS = {"keypair"}


def format_price(value: Decimal) -> str:
    """Fixed-point text of a price without trailing zeros (e.g. 1E+2 -> "100", 0.50 -> "0.5")."""
    if value.is_zero():
        return "0"
    return format(value.normalize(), "f")


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC so comparisons with now() are well defined."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Mint(BaseModel):
    """Mint record representing one music NFT mint page and its lifecycle state."""

    id: str = Field(min_length=1)
    creator_wallet: str
    mint_price: Decimal = Field(ge=0, le=1000, description="Mint price in SOL")
    page_title: str
    page_text: Optional[str] = None
    page_image_url: str
    title: str
    description: Optional[str] = None
    image_url: str
    music_url: str
    mp4_url: str
    open_time: Optional[datetime] = Field(default=None, description="Reveal is refused before this time")
    keypair: bytes = Field(description="64-byte Solana secret key, never regenerated")
    minted: bool = False
    tx_signature: Optional[str] = None
    created_at: datetime

    @field_validator("keypair", mode="before")
    @classmethod
    def parse_keypair(cls, value: Any) -> Any:
        """Accept the persisted list-of-ints form."""
        if isinstance(value, (list, tuple)):
            return bytes(value)
        return value

    @field_validator("open_time", "created_at")
    @classmethod
    def normalize_timezone(cls, value: Optional[datetime]) -> Optional[datetime]:
        """Normalize naive datetimes to UTC."""
        return _as_utc(value)

    @model_validator(mode="after")
    def check_minted_signature(self) -> "Mint":
        """tx_signature is set if and only if minted is true."""
        if self.minted and not self.tx_signature:
            raise ValueError("Minted record requires a transaction signature")
        if not self.minted and self.tx_signature:
            raise ValueError("Transaction signature set on a record that is not minted")
        return self

    @field_serializer("keypair")
    def serialize_keypair(self, value: bytes) -> List[int]:
        """Serialize secret key bytes as a list of integers."""
        return list(value)

    @field_serializer("mint_price")
    def serialize_decimal(self, value: Decimal) -> str:
        """Serialize Decimal as fixed-point text."""
        return format_price(value)

    @field_serializer("open_time", "created_at")
    def serialize_datetime(self, value: Optional[datetime]) -> Optional[str]:
        """Serialize datetime to ISO format string."""
        return value.isoformat() if value else None

    def public_view(self, exclude: Optional[set] = None) -> Dict[str, Any]:
        """
        JSON-ready view of the record without secret fields.

        Args:
            exclude: Field names to strip (default: keypair only)

        Returns:
            Dictionary safe to return from read endpoints
        """
        hidden = set(DETAIL_HIDDEN_FIELDS)
        if exclude:
            hidden |= exclude
        return self.model_dump(mode="json", exclude=hidden)


class CreateMintRequest(BaseModel):
    """Body of POST /create-mint."""

    creator_wallet: Optional[str] = None
    mint_price: Union[str, float, int, None] = None
    page_title: Optional[str] = None
    page_text: Optional[str] = None
    page_image_url: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    music_url: Optional[str] = None
    open_time: Optional[datetime] = None
    duration: Optional[float] = Field(default=None, description="Optional video length limit in seconds")

    @field_validator("open_time", mode="before")
    @classmethod
    def empty_open_time(cls, value: Any) -> Any:
        """Forms send an empty string when no open time is chosen."""
        if value == "":
            return None
        return value

    def missing_fields(self) -> List[str]:
        """Names of required fields that are absent or empty."""
        required = ["page_title", "page_image_url", "title", "image_url", "music_url", "creator_wallet"]
        return [name for name in required if not getattr(self, name)]


class MarkMintedRequest(BaseModel):
    """Body of POST /api/mark-minted/{mint_id}."""

    tx_signature: str = Field(min_length=1)


class NftMetadataRequest(BaseModel):
    """Body of POST /api/create-nft-metadata."""

    mint_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    image: str = Field(min_length=1, description="Path of the image, relative to the public base URL")
    description: Optional[str] = None


class RevealPayload(BaseModel):
    """Secret keypair disclosure returned by the reveal gate."""

    keypair: List[int]
    asset_pubkey: str
