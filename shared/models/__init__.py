"""
Data models for the music mint backend.

This module exports all Pydantic models used across modules.
"""

from .mint import (
    Mint,
    CreateMintRequest,
    MarkMintedRequest,
    NftMetadataRequest,
    RevealPayload,
    LIST_HIDDEN_FIELDS,
    DETAIL_HIDDEN_FIELDS,
    format_price
)

__all__ = [
    "Mint",
    "CreateMintRequest",
    "MarkMintedRequest",
    "NftMetadataRequest",
    "RevealPayload",
    "LIST_HIDDEN_FIELDS",
    "DETAIL_HIDDEN_FIELDS",
    "format_price",
]
